"""
Prelude: standard modules, primitive types and constructors.

Two root modules ship with the package:

*   ``Core`` owns the primitive type constructors (``Any``, ``Union``, ``Tuple``,
    ``Type``, ``Vararg``, ``Nothing``).
*   ``builtins`` owns Python's builtin types (``int``, ``str``, ``list`` ...).

Both form the default baseline scope used to decide whether a type name needs
module qualification.
"""

import builtins as _py_builtins
from typing import Dict, Iterable, Optional

from sigforge.model.modules import Module, TypeName
from sigforge.model.types import (
  ANY,
  BOTTOM,
  CORE,
  Parameterized,
  TypeNode,
  TypeParameter,
  UnionOf,
)

BUILTINS = Module(
  "builtins",
  exports=frozenset(name for name, obj in vars(_py_builtins).items() if isinstance(obj, type) and not name.startswith("_"))
  | {"None"},
)

TUPLE = TypeName("Tuple", CORE)
TYPE = TypeName("Type", CORE)
VARARG = TypeName("Vararg", CORE)

#: The unit type, the lowering of Python's ``None`` annotation.
NOTHING = Parameterized(TypeName("Nothing", CORE))

#: The zero-arity tuple type ``Tuple{}``.
EMPTY_TUPLE = Parameterized(TUPLE, ())

_REGISTRY: Dict[str, Module] = {
  CORE.name: CORE,
  BUILTINS.name: BUILTINS,
}

__all__ = [
  "ANY",
  "BOTTOM",
  "BUILTINS",
  "CORE",
  "EMPTY_TUPLE",
  "NOTHING",
  "TUPLE",
  "TYPE",
  "VARARG",
  "builtin",
  "get_module",
  "known_modules",
  "module_from_path",
  "tuple_of",
  "type_of",
  "union_of",
  "vararg_of",
]


def known_modules() -> Dict[str, Module]:
  """Returns the registry of prelude modules keyed by name."""
  return dict(_REGISTRY)


def get_module(name: str) -> Optional[Module]:
  """Looks up a prelude module by name."""
  return _REGISTRY.get(name)


def module_from_path(dotted: str) -> Module:
  """
  Builds a module chain from a dotted path.

  Prelude root modules are reused so that ``builtins`` keeps its exports.

  Args:
      dotted: e.g. ``"numpy.linalg"``.

  Returns:
      Module: The innermost module, whose parents form the rest of the chain.
  """
  parts = [p for p in dotted.split(".") if p]
  if not parts:
    raise ValueError(f"Invalid module path: {dotted!r}")

  current = _REGISTRY.get(parts[0]) or Module(parts[0])
  for part in parts[1:]:
    current = Module(part, parent=current)
  return current


def builtin(name: str, *parameters: TypeParameter) -> Parameterized:
  """Shorthand for a builtin type (e.g. ``builtin("list", builtin("int"))``)."""
  return Parameterized(TypeName(name, BUILTINS), parameters)


def tuple_of(*parameters: TypeParameter) -> Parameterized:
  """Builds ``Tuple{p1, ..., pn}``; with no arguments, the zero-arity tuple."""
  return Parameterized(TUPLE, parameters)


def type_of(target: TypeNode) -> Parameterized:
  """Builds ``Type{target}``, the type whose only instance is ``target``."""
  return Parameterized(TYPE, (target,))


def vararg_of(element: TypeNode = ANY) -> Parameterized:
  """Builds ``Vararg{element}``."""
  return Parameterized(VARARG, (element,))


def union_of(*members: TypeNode) -> TypeNode:
  """
  Builds a normalized union.

  Nested unions are flattened and duplicates removed, keeping first-seen order.
  An empty union is :data:`BOTTOM`; a single member is returned as-is; a union
  containing ``Any`` collapses to ``Any``.

  Args:
      *members: Member types.

  Returns:
      TypeNode: The normalized union.
  """
  flat = []
  for member in _flatten(members):
    if member == ANY:
      return ANY
    if member not in flat:
      flat.append(member)

  if not flat:
    return BOTTOM
  if len(flat) == 1:
    return flat[0]
  return UnionOf(tuple(flat))


def _flatten(members: Iterable[TypeNode]) -> Iterable[TypeNode]:
  for member in members:
    if isinstance(member, UnionOf):
      yield from _flatten(member.members)
    else:
      yield member
