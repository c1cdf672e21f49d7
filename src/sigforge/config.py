"""
Runtime Configuration Store.

Settings are read from the ``[tool.sigforge]`` table of the nearest
``pyproject.toml`` and can be overridden from the command line.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from sigforge.core.visibility import BaselineScope
from sigforge.model.prelude import get_module, known_modules

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Global configuration for signature reconstruction and the Python frontend.
  """

  baseline_modules: List[str] = Field(
    default_factory=lambda: ["Core", "builtins"],
    description="Prelude modules visible without qualification, in lookup order.",
  )
  unused_names: List[str] = Field(
    default_factory=lambda: ["_"],
    description="Parameter names treated as unnamed (unused) positional slots.",
  )
  include_private: bool = Field(False, description="Report callables whose name starts with an underscore.")
  include_methods: bool = Field(True, description="Report class methods besides constructors.")

  @field_validator("baseline_modules")
  @classmethod
  def validate_baseline(cls, v: List[str]) -> List[str]:
    """
    Ensures every baseline module is a known prelude module.

    Args:
        v (List[str]): Module names.

    Returns:
        List[str]: The stripped names.

    Raises:
        ValueError: If a module is not in the prelude registry.
    """
    cleaned = [name.strip() for name in v]
    known = known_modules()
    for name in cleaned:
      if name not in known:
        raise ValueError(f"Unknown baseline module: '{name}'. Known modules: {sorted(known)}")
    return cleaned

  def baseline_scope(self) -> BaselineScope:
    """
    Builds the reference scope for visibility checks.

    Returns:
        BaselineScope: A scope importing ``baseline_modules`` in order.
    """
    return BaselineScope(tuple(get_module(name) for name in self.baseline_modules))

  @classmethod
  def load(
    cls,
    baseline_modules: Optional[List[str]] = None,
    unused_names: Optional[List[str]] = None,
    include_private: Optional[bool] = None,
    include_methods: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        baseline_modules: Override for the baseline scope.
        unused_names: Override for unused parameter names.
        include_private: Override for private callable reporting.
        include_methods: Override for method reporting.
        search_path: Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    values: Dict[str, Any] = {}
    for key, override in (
      ("baseline_modules", baseline_modules),
      ("unused_names", unused_names),
      ("include_private", include_private),
      ("include_methods", include_methods),
    ):
      if override is not None:
        values[key] = override
      elif key in toml_config:
        values[key] = toml_config[key]

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The ``[tool.sigforge]`` table and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      return data.get("tool", {}).get("sigforge", {}), parent

  return {}, None
