"""
Tests for the Python frontend, end to end through the assembler.

Verifies:
1.  Functions: slots, locals, keyword tables, ``*args`` and unused names.
2.  PEP 695 and ``TypeVar`` generics with their bounds.
3.  Classes: constructors with explicit type parameters, instance, class and
    static methods, old-style ``Generic[T]`` classes.
4.  Filtering and per-callable error reporting.
"""

import textwrap

import libcst as cst
import pytest

from sigforge import RuntimeConfig, describe_source
from sigforge.errors import UnsupportedAnnotation
from sigforge.frontends.python import PythonFrontend, extract_descriptors
from sigforge.model import SELF_SLOT, UNUSED_SLOT


def describe(code, module_name="__main__", config=None):
  return [s.to_text() for s in describe_source(textwrap.dedent(code), module_name, config)]


def test_simple_function():
  code = """
  def add(x: int, y: int):
      total = x + y
      return total
  """
  assert describe(code) == [{"name": "add", "args": ["x::int", "y::int"]}]


def test_slot_table_includes_locals():
  code = """
  def add(x: int, y):
      total = x + y
      for i in range(3):
          total += i
      a, (b, *rest) = 1, (2, 3)
      return total
  """
  (desc,) = extract_descriptors(textwrap.dedent(code))

  assert desc.slot_names == (SELF_SLOT, "x", "y", "total", "i", "a", "b", "rest")
  assert desc.argument_count == 3
  assert desc.module.dotted == "__main__"


def test_nested_definitions_do_not_add_locals():
  code = """
  def outer(x):
      def inner(y):
          z = y
      class Local:
          w = 1
      f = lambda q: q
  """
  (desc,) = extract_descriptors(textwrap.dedent(code))
  assert desc.slot_names == (SELF_SLOT, "x", "f")


def test_pep695_function_with_keywords():
  code = """
  def scale[T: float](x: T, _, factor=2, *, inplace: bool = False, **opts):
      ...
  """
  assert describe(code) == [
    {
      "name": "scale",
      "args": ["x::T", "_", "factor"],
      "whereparams": ["T <: float"],
      "kwargs": ["inplace", "opts..."],
    }
  ]


def test_unused_parameter_keeps_its_type():
  code = """
  def f(_: int, __, y):
      ...
  """
  config = RuntimeConfig(unused_names=["_", "__"])
  assert describe(code, config=config)[0]["args"] == ["::int", "_", "y"]


def test_unused_slot_name():
  (desc,) = extract_descriptors("def f(_, y): ...\n")
  assert desc.slot_names == (SELF_SLOT, UNUSED_SLOT, "y")


def test_positional_only_and_star_args():
  code = """
  def f(a: int, /, b, *rest: str, flag: bool):
      ...
  """
  assert describe(code) == [
    {
      "name": "f",
      "args": ["a::int", "b", "rest::Vararg{str}"],
      "kwargs": ["flag"],
    }
  ]


def test_untyped_star_args():
  assert describe("def f(*args, **kwargs): ...\n") == [
    {"name": "f", "args": ["args::Vararg{Any}"], "kwargs": ["kwargs..."]}
  ]


def test_bare_star_is_not_an_argument():
  assert describe("def f(a, *, b): ...\n") == [{"name": "f", "args": ["a"], "kwargs": ["b"]}]


def test_typevar_declarations():
  code = """
  from typing import Sequence, TypeVar

  K = TypeVar("K", str, bytes)
  N = TypeVar("N", bound=int)

  def pick(keys: Sequence[K], n: N) -> K:
      ...
  """
  assert describe(code) == [
    {
      "name": "pick",
      "args": ["keys::typing.Sequence{K}", "n::N"],
      "whereparams": ["K <: Union{str, bytes}", "N <: int"],
    }
  ]


def test_typevar_via_module_alias():
  code = """
  import typing as t

  T = t.TypeVar("T")

  def ident(x: T) -> T:
      ...
  """
  assert describe(code)[0]["whereparams"] == ["T"]


def test_pep695_constraint_tuple():
  code = "def f[K: (str, bytes)](k: K): ...\n"
  assert describe(code)[0]["whereparams"] == ["K <: Union{str, bytes}"]


def test_optional_and_unions():
  code = """
  from typing import Optional, Union

  def f(a: Optional[int], b: Union[int, str], c: int | None, d: None):
      ...
  """
  assert describe(code)[0]["args"] == [
    "a::Union{int, Nothing}",
    "b::Union{int, str}",
    "c::Union{int, Nothing}",
    "d::Nothing",
  ]


def test_tuples():
  code = """
  from typing import Tuple

  def f(a: tuple[()], b: tuple[int, ...], c: Tuple[int, str], d: tuple):
      ...
  """
  assert describe(code)[0]["args"] == [
    "a::Tuple{}",
    "b::Tuple{Vararg{int}}",
    "c::Tuple{int, str}",
    "d::Tuple{Vararg{Any}}",
  ]


def test_bare_type_annotation():
  assert describe("def make(cls: type): ...\n") == [{"name": "make", "args": ["cls::Type{T} where {T}"]}]


def test_imported_types_are_qualified():
  code = """
  import numpy as np
  from typing import Any

  def f(a: np.ndarray, b: Any, c: "np.dtype"):
      ...
  """
  assert describe(code)[0]["args"] == ["a::numpy.ndarray", "b", "c::numpy.dtype"]


def test_literal_type_parameters():
  code = """
  def f(a: Array[float, 2], b: Flags[True, -1]):
      ...
  """
  assert describe(code, module_name="shapes")[0]["args"] == [
    "a::shapes.Array{float, 2}",
    "b::shapes.Flags{true, -1}",
  ]


POINT = """
class Point[T: float]:
    def __init__(self, x: T, y: T):
        self.x = x
        self.y = y

    def norm(self) -> float:
        ...

    def shift[S](self, dx: S) -> "Point[T]":
        ...

    @staticmethod
    def origin() -> int:
        ...

    @classmethod
    def build(cls, x: T):
        ...
"""


def test_pep695_class():
  assert describe(POINT, module_name="geometry") == [
    {"name": "Point", "args": ["x::T", "y::T"], "params": ["T"]},
    {"name": "norm", "args": ["self::geometry.Point{T}"], "whereparams": ["T <: float"]},
    {"name": "shift", "args": ["self::geometry.Point{T}", "dx::S"], "whereparams": ["T <: float", "S"]},
    {"name": "origin", "args": []},
    {"name": "build", "args": ["cls::Type{geometry.Point{T}}", "x::T"], "whereparams": ["T <: float"]},
  ]


def test_constructor_descriptor():
  result = PythonFrontend(POINT, "geometry").extract()
  ctor = result.descriptors[0]

  assert ctor.name == "Point"
  assert ctor.slot_names == (SELF_SLOT, "x", "y")
  assert ctor.argument_count == 3


def test_methods_can_be_excluded():
  config = RuntimeConfig(include_methods=False)
  assert [s["name"] for s in describe(POINT, "geometry", config)] == ["Point"]


def test_old_style_generic_class():
  code = """
  from typing import Generic, TypeVar

  T = TypeVar("T")

  class Box(Generic[T]):
      def __init__(self, item: T):
          self.item = item

      def get(self) -> T:
          return self.item
  """
  assert describe(code, module_name="store") == [
    {"name": "Box", "args": ["item::T"], "params": ["T"]},
    {"name": "get", "args": ["self::store.Box{T}"], "whereparams": ["T"]},
  ]


def test_generic_parameter_order():
  code = """
  from typing import Generic, TypeVar

  K = TypeVar("K")
  V = TypeVar("V")

  class Table(Generic[V, K]):
      def __init__(self, key: K, value: V):
          ...
  """
  assert describe(code, module_name="db")[0] == {"name": "Table", "args": ["key::K", "value::V"], "params": ["V", "K"]}


def test_constructor_with_extra_variable():
  code = """
  class Grid[T]:
      def __init__[S: int](self, fill: T, size: S):
          ...
  """
  assert describe(code, module_name="grids") == [
    {"name": "Grid", "args": ["fill::T", "size::S"], "whereparams": ["S <: int"], "params": ["T"]},
  ]


def test_non_generic_class():
  code = """
  class Plain:
      def __init__(self, x: int):
          self.x = x
  """
  assert describe(code) == [{"name": "Plain", "args": ["x::int"]}]


def test_private_callables_are_filtered():
  code = """
  def _hidden(x): ...

  class _Internal:
      def __init__(self): ...

  class Public:
      def __init__(self): ...
      def _helper(self): ...
      def __repr__(self): ...
  """
  assert [s["name"] for s in describe(code)] == ["Public"]

  everything = describe(code, config=RuntimeConfig(include_private=True))
  assert [s["name"] for s in everything] == ["_hidden", "_Internal", "Public", "_helper", "__repr__"]


def test_errors_are_reported_per_callable():
  code = """
  def good(x: int): ...

  def bad[*Ts](x: int): ...

  def worse(x: f(1)): ...
  """
  result = PythonFrontend(textwrap.dedent(code)).extract()

  assert [d.name for d in result.descriptors] == ["good"]
  assert result.has_errors
  assert [label for label, _ in result.errors] == ["bad", "worse"]
  assert all(isinstance(e, UnsupportedAnnotation) for _, e in result.errors)


def test_describe_source_raises_first_error():
  with pytest.raises(UnsupportedAnnotation):
    describe("def bad[**P](x: int): ...\n")


def test_syntax_error():
  with pytest.raises(cst.ParserSyntaxError):
    describe("def broken(:\n")


def test_literal_annotation_is_reported():
  code = """
  from typing import Literal

  def open_file(path: str, mode: Literal['r', 'w']): ...

  def close_file(path: str): ...
  """
  result = PythonFrontend(textwrap.dedent(code)).extract()

  assert [d.name for d in result.descriptors] == ["close_file"]
  assert [label for label, _ in result.errors] == ["open_file"]
  assert isinstance(result.errors[0][1], UnsupportedAnnotation)
