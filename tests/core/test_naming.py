"""
Tests for the TypeNamer.

Verifies:
1.  Parameterized rendering, including the zero-arity tuple special case.
2.  Compact where-clauses for nested quantifiers and explicit-variable filtering.
3.  Unions, type variables and literal parameters.
4.  Module qualification of names not visible from the baseline scope.
"""

import pytest

from sigforge.core.naming import TypeNamer, is_embeddable
from sigforge.core.visibility import BaselineScope
from sigforge.errors import InvalidTypeParameter, UnsupportedTypeShape
from sigforge.model import (
  ANY,
  BOTTOM,
  CORE,
  EMPTY_TUPLE,
  Literal,
  Parameterized,
  Quantified,
  Symbol,
  TypeName,
  TypeVariable,
  UnionOf,
  builtin,
  tuple_of,
  union_of,
)


@pytest.fixture
def namer():
  return TypeNamer()


def text(namer, node, explicit=frozenset()):
  return namer.name_of(node, explicit).to_text()


def test_bare_builtin(namer, int_type):
  assert text(namer, int_type) == "int"


def test_parameterized(namer, int_type, str_type):
  assert text(namer, builtin("dict", str_type, int_type)) == "dict{str, int}"


def test_nested_parameters(namer, int_type):
  node = builtin("list", builtin("list", int_type))
  assert text(namer, node) == "list{list{int}}"


def test_zero_arity_tuple_keeps_braces(namer):
  assert text(namer, tuple_of()) == "Tuple{}"
  assert text(namer, EMPTY_TUPLE) == "Tuple{}"


def test_other_zero_parameter_types_are_bare(namer, main_module):
  assert text(namer, builtin("list")) == "list"
  assert text(namer, Parameterized(TypeName("Widget", main_module))) == "Main.Widget"


def test_tuple_with_parameters(namer, int_type, str_type):
  assert text(namer, tuple_of(int_type, str_type)) == "Tuple{int, str}"


def test_top_type(namer):
  assert text(namer, ANY) == "Any"


def test_union_in_member_order(namer, int_type, str_type):
  assert text(namer, UnionOf((str_type, int_type))) == "Union{str, int}"


def test_bottom_type_is_empty_union(namer):
  assert text(namer, BOTTOM) == "Union{}"


def test_union_of_flattens_and_dedupes(namer, int_type, str_type):
  node = union_of(int_type, union_of(str_type, int_type))
  assert text(namer, node) == "Union{int, str}"


def test_type_variable_renders_bare_name(namer, int_type):
  t = TypeVariable("T", upper_bound=int_type)
  assert text(namer, builtin("list", t)) == "list{T}"


def test_quantifier_chain_renders_one_group(namer, main_module):
  t = TypeVariable("T")
  n = TypeVariable("N")
  array = TypeName("Array", main_module)
  node = Quantified(t, Quantified(n, Parameterized(array, (t, n))))

  assert text(namer, node) == "Main.Array{T, N} where {T, N}"


def test_quantifier_fragments_include_bounds(namer, main_module, int_type):
  t = TypeVariable("T", upper_bound=int_type)
  node = Quantified(t, builtin("list", t))
  assert text(namer, node) == "list{T} where {T <: int}"


def test_explicit_variables_are_skipped(namer, main_module):
  t = TypeVariable("T")
  n = TypeVariable("N")
  array = TypeName("Array", main_module)
  node = Quantified(t, Quantified(n, Parameterized(array, (t, n))))

  assert text(namer, node, frozenset({t})) == "Main.Array{T, N} where {N}"
  assert text(namer, node, frozenset({t, n})) == "Main.Array{T, N}"


def test_explicit_is_by_identity_not_name(namer):
  outer = TypeVariable("T")
  inner = TypeVariable("T")
  node = Quantified(inner, builtin("list", inner))

  assert text(namer, node, frozenset({outer})) == "list{T} where {T}"


def test_quantified_parameter(namer, main_module):
  real = Parameterized(TypeName("Real", main_module))
  s = TypeVariable("S", upper_bound=real)
  vector = TypeName("Vector", main_module)
  node = builtin("list", Quantified(s, Parameterized(vector, (s,))))

  assert text(namer, node) == "list{Main.Vector{S} where {S <: Main.Real}}"


@pytest.mark.parametrize(
  "value, expected",
  [
    (2, "2"),
    (-1, "-1"),
    (1.5, "1.5"),
    (True, "true"),
    (False, "false"),
    (None, "nothing"),
    (Symbol("row"), ":row"),
    (complex(1, -2), "1.0 - 2.0im"),
  ],
)
def test_literal_parameters(namer, main_module, value, expected):
  node = Parameterized(TypeName("Array", main_module), (builtin("float"), Literal(value)))
  assert text(namer, node) == f"Main.Array{{float, {expected}}}"


@pytest.mark.parametrize("value", ["text", [1, 2], {"k": 1}, object()])
def test_non_embeddable_literal_fails(namer, value):
  with pytest.raises(InvalidTypeParameter) as exc:
    namer.name_of(builtin("list", Literal(value)))

  assert exc.value.value is value
  assert exc.value.value_type is type(value)


def test_is_embeddable():
  assert is_embeddable(3)
  assert is_embeddable(Symbol("x"))
  assert not is_embeddable("x")


@pytest.mark.parametrize("node", [42, "int", object(), None])
def test_unknown_shapes_fail_loudly(namer, node):
  with pytest.raises(UnsupportedTypeShape):
    namer.name_of(node)


def test_unknown_shape_inside_parameters(namer):
  with pytest.raises(UnsupportedTypeShape):
    namer.name_of(builtin("list", 3))


def test_qualifies_full_module_chain(namer, nested_module):
  node = Parameterized(TypeName("Thing", nested_module))
  assert text(namer, node) == "Outer.Inner.Leaf.Thing"


def test_shadowed_prelude_name_is_qualified(namer, main_module):
  node = Parameterized(TypeName("Tuple", main_module))
  assert text(namer, node) == "Main.Tuple"


def test_baseline_without_builtins_qualifies_them(int_type):
  namer = TypeNamer(BaselineScope((CORE,)))
  assert namer.name_of(builtin("list", int_type)).to_text() == "builtins.list{builtins.int}"
  assert namer.name_of(tuple_of()).to_text() == "Tuple{}"


def test_custom_visibility_oracle(nested_module):
  class EverythingVisible:
    def is_visible_unqualified(self, type_name, defining_module, baseline):
      return True

  namer = TypeNamer(oracle=EverythingVisible())
  assert namer.name_of(Parameterized(TypeName("Thing", nested_module))).to_text() == "Thing"
