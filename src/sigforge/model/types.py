"""
Generic Type Representation.

This module defines the closed set of node variants that make up a compiled
generic signature:

*   :class:`Parameterized` - a named type applied to an ordered tuple of parameters.
*   :class:`UnionOf` - a union of member types.
*   :class:`TypeVariable` - a bounded placeholder, also used as the reference node.
*   :class:`Quantified` - a universal quantifier binding a variable over a body.
*   :class:`Literal` - a plain value used as a type parameter (e.g. an array rank).

The top type (:data:`ANY`) and bottom type (:data:`BOTTOM`, the empty union) are
defined here because they are the default bounds of every type variable.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from sigforge.model.modules import Module, TypeName

#: Root module owning the primitive type constructors.
CORE = Module(
  "Core",
  exports=frozenset({"Any", "Union", "Tuple", "Type", "Vararg", "Nothing"}),
)


class TypeNode:
  """Marker base class for every generic-type representation variant."""

  __slots__ = ()


@dataclass(frozen=True)
class Parameterized(TypeNode):
  """
  A named type applied to parameters (e.g. ``Dict{K, V}``).

  A non-generic type is a ``Parameterized`` with no parameters.
  """

  type_name: TypeName
  parameters: Tuple["TypeParameter", ...] = ()

  def __post_init__(self) -> None:
    object.__setattr__(self, "parameters", tuple(self.parameters))

  @property
  def name(self) -> str:
    return self.type_name.name


@dataclass(frozen=True)
class UnionOf(TypeNode):
  """
  A union of member types, kept in a stable enumeration order.

  Prefer :func:`sigforge.model.prelude.union_of` to build these: it flattens
  nested unions and removes duplicates.
  """

  members: Tuple[TypeNode, ...] = ()

  def __post_init__(self) -> None:
    object.__setattr__(self, "members", tuple(self.members))


#: Top type. Every type is a subtype of ``Any``.
ANY = Parameterized(TypeName("Any", CORE))

#: Bottom type, the empty union ``Union{}``.
BOTTOM = UnionOf(())


@dataclass(frozen=True, eq=False)
class TypeVariable(TypeNode):
  """
  A bounded type placeholder.

  Variables compare and hash by identity: two distinct variables may share a
  display name (e.g. an outer and an inner ``T``) and must never be confused.
  """

  name: str
  lower_bound: TypeNode = BOTTOM
  upper_bound: TypeNode = ANY

  def __repr__(self) -> str:
    return f"TypeVariable({self.name!r}, id=0x{id(self):x})"


@dataclass(frozen=True)
class Quantified(TypeNode):
  """A universal quantifier: ``body where variable``."""

  variable: TypeVariable
  body: TypeNode


@dataclass(frozen=True, eq=False)
class Literal(TypeNode):
  """
  A non-type value appearing as a type parameter (e.g. the ``2`` in ``Array{T, 2}``).

  Two literals are equal only when their values have the same type, so
  ``Literal(True)``, ``Literal(1)`` and ``Literal(1.0)`` are all distinct.
  """

  value: Any

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Literal):
      return NotImplemented
    return type(self.value) is type(other.value) and self.value == other.value

  def __hash__(self) -> int:
    return hash((type(self.value), self.value))


@dataclass(frozen=True)
class Symbol:
  """An interned identifier usable as a literal type parameter (rendered ``:name``)."""

  name: str

  def __str__(self) -> str:
    return f":{self.name}"


TypeParameter = Union[TypeNode, Literal]
