"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Snapshot testing fixture for CLI output.
- Shared type-model fixtures (modules, common types).
"""

import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add src to path so we can import 'sigforge' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from sigforge.model import MethodDescriptor, Module, Parameterized, TypeName, builtin, tuple_of  # noqa: E402
from sigforge.model.descriptor import SELF_SLOT  # noqa: E402


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify CLI output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.snapshot_dir = Path(request.node.fspath).parent / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt", normalizer: Optional[Callable[[str], str]] = None):
    """
    Compares content against the stored file, writing it on first run.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt').
        normalizer: Optional function applied to both sides before comparison.
    """
    self.snapshot_dir.mkdir(parents=True, exist_ok=True)
    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"

    content = content.replace("\r\n", "\n")
    if normalizer:
      content = normalizer(content)

    if self.update_mode or not snapshot_file.exists():
      snapshot_file.write_text(content, encoding="utf-8")
      return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")
    if normalizer:
      expected = normalizer(expected)

    assert content == expected, (
      f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."
    )


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for visual tests")


@pytest.fixture
def main_module() -> Module:
  """A root user module, ``Main``."""
  return Module("Main")


@pytest.fixture
def nested_module() -> Module:
  """The module chain ``Outer.Inner.Leaf``."""
  return Module("Leaf", parent=Module("Inner", parent=Module("Outer")))


@pytest.fixture
def make_method(main_module):
  """
  Factory for method descriptors.

  ``make_method("f", ["x", "y"], [t1, t2])`` builds a descriptor whose slots are
  ``#self#, x, y`` and whose signature is ``Tuple{typeof(f), t1, t2}``.
  """

  def _make(name, arg_names, arg_types, wrap=None, keywords=(), extra_slots=(), own_type=None):
    own = own_type if own_type is not None else Parameterized(TypeName(f"typeof({name})", main_module))
    signature = tuple_of(own, *arg_types)
    if wrap is not None:
      signature = wrap(signature)
    slots = (SELF_SLOT, *arg_names, *extra_slots)
    return MethodDescriptor(
      name=name,
      slot_names=slots,
      argument_count=1 + len(arg_names),
      module=main_module,
      signature=signature,
      keyword_names=tuple(keywords),
    )

  return _make


@pytest.fixture
def int_type():
  return builtin("int")


@pytest.fixture
def str_type():
  return builtin("str")
