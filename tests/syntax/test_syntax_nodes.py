"""
Tests for syntax node rendering.
"""

import dataclasses

import pytest

from sigforge.model import Symbol
from sigforge.syntax import (
  AnonymousSlot,
  Between,
  Curly,
  Identifier,
  Qualified,
  Subtype,
  Supertype,
  Typed,
  Value,
  Where,
)

T = Identifier("T")
INT = Identifier("Int")


@pytest.mark.parametrize(
  "node, expected",
  [
    (Identifier("x"), "x"),
    (Qualified(Qualified(Identifier("Base"), "Iterators"), "Zip"), "Base.Iterators.Zip"),
    (Curly(Identifier("Dict"), (Identifier("K"), Identifier("V"))), "Dict{K, V}"),
    (Curly(Identifier("Tuple")), "Tuple{}"),
    (Where(Curly(Identifier("Vector"), (T,)), (T,)), "Vector{T} where {T}"),
    (Where(T, (Subtype(T, INT), Identifier("U"))), "T where {T <: Int, U}"),
    (Subtype(T, INT), "T <: Int"),
    (Supertype(T, INT), "T >: Int"),
    (Between(INT, T, Identifier("Real")), "Int <: T <: Real"),
    (Typed("x", INT), "x::Int"),
    (Typed(None, INT), "::Int"),
    (Typed("x"), "x"),
    (AnonymousSlot(), "_"),
    (Value(3), "3"),
    (Value(True), "true"),
    (Value(None), "nothing"),
    (Value(Symbol("col")), ":col"),
    (Value(2.5), "2.5"),
    (Value(complex(0, 1)), "0.0 + 1.0im"),
  ],
)
def test_to_text(node, expected):
  assert node.to_text() == expected
  assert str(node) == expected


def test_nodes_are_immutable():
  node = Typed("x", INT)
  with pytest.raises(dataclasses.FrozenInstanceError):
    node.name = "y"


def test_nodes_compare_structurally():
  assert Curly(Identifier("A"), (T,)) == Curly(Identifier("A"), (Identifier("T"),))
  assert Typed("x") != Typed("x", INT)
