"""
Quantifier Unwrapping.

Strips chains of nested :class:`~sigforge.model.types.Quantified` wrappers in a
single loop, so that ``((Body where A) where B) where C`` is seen as one flat,
ordered group ``[C, B, A]`` (outer to inner) around ``Body``.
"""

from typing import List, Tuple

from sigforge.errors import UnsupportedTypeShape
from sigforge.model.types import (
  Literal,
  Parameterized,
  Quantified,
  TypeNode,
  TypeVariable,
  UnionOf,
)


def unwrap(signature: TypeNode) -> Tuple[List[TypeVariable], TypeNode]:
  """
  Removes every leading quantifier layer.

  Args:
      signature: Any type node.

  Returns:
      Tuple[List[TypeVariable], TypeNode]: The bound variables in outer-to-inner
      order and the first non-quantified node.
  """
  variables = []
  while isinstance(signature, Quantified):
    variables.append(signature.variable)
    signature = signature.body
  return variables, signature


def free_variables(node: TypeNode) -> List[TypeVariable]:
  """
  Lists type variables referenced in a node that are not bound inside it.

  Variables are reported once each, in discovery order. Bounds of referenced
  variables are not searched.

  Args:
      node: Any type node.

  Returns:
      List[TypeVariable]: Referenced, unbound variables.
  """
  found: List[TypeVariable] = []
  _collect(node, set(), found)
  return found


def _collect(node: TypeNode, bound: set, found: List[TypeVariable]) -> None:
  if isinstance(node, TypeVariable):
    if node not in bound and node not in found:
      found.append(node)
  elif isinstance(node, Parameterized):
    for param in node.parameters:
      _collect(param, bound, found)
  elif isinstance(node, UnionOf):
    for member in node.members:
      _collect(member, bound, found)
  elif isinstance(node, Quantified):
    variables, body = unwrap(node)
    _collect(body, bound | set(variables), found)
  elif isinstance(node, Literal):
    return
  else:
    raise UnsupportedTypeShape(node)
