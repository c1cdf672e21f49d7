"""
Constructor Type Parameter Extraction.

A constructor call such as ``Point{T}(x::T, y::T)`` compiles to a signature
whose first tuple slot is ``Type{Point{T}}``. When that shape is found, the
parameters of ``Point{T}`` are the constructor's declared type parameters, and
the quantified variables among them are *explicit*: they are written in the
braces after the name, never again in the where-clause.
"""

from typing import FrozenSet, Optional, Sequence, Tuple

from sigforge.core.naming import TypeNamer
from sigforge.core.quantifiers import free_variables, unwrap
from sigforge.model.prelude import TYPE
from sigforge.model.types import Parameterized, TypeNode, TypeVariable
from sigforge.syntax.nodes import Expr


def constructor_target(signature: TypeNode) -> Optional[Parameterized]:
  """
  Finds the generic type constructed by a constructor-style signature.

  Args:
      signature: A method signature, quantified or not.

  Returns:
      Optional[Parameterized]: ``X`` when the first slot is ``Type{X}`` and ``X``
      is a parameterized type with at least one parameter; otherwise None.
  """
  _, concrete = unwrap(signature)
  if not isinstance(concrete, Parameterized) or not concrete.parameters:
    return None

  typeof_type = concrete.parameters[0]
  if not isinstance(typeof_type, Parameterized) or typeof_type.type_name != TYPE:
    return None
  if len(typeof_type.parameters) != 1:
    return None

  _, function_type = unwrap(typeof_type.parameters[0])
  if not isinstance(function_type, Parameterized) or not function_type.parameters:
    return None
  return function_type


class TypeParameterExtractor:
  """
  Detects constructor signatures and renders their type parameters.

  Attributes:
      namer (TypeNamer): Renders each parameter.
  """

  def __init__(self, namer: TypeNamer):
    self.namer = namer

  def extract(self, signature: TypeNode) -> Optional[Tuple[Expr, ...]]:
    """
    Renders the constructor's type parameters.

    Returns:
        Optional[Tuple[Expr, ...]]: The parameter expressions, or None when the
        signature is not constructor-style.
    """
    target = constructor_target(signature)
    if target is None:
      return None
    return tuple(self.namer.name_of(p) for p in target.parameters)

  def explicit_variables(self, signature: TypeNode, variables: Sequence[TypeVariable]) -> FrozenSet[TypeVariable]:
    """
    Selects the quantified variables declared as constructor type parameters.

    Args:
        signature: The method signature.
        variables: Top-level quantified variables of the signature.

    Returns:
        FrozenSet[TypeVariable]: The subset of ``variables`` referenced in the
        constructor's type parameters (compared by identity).
    """
    target = constructor_target(signature)
    if target is None:
      return frozenset()

    referenced = free_variables(target)
    return frozenset(v for v in variables if v in referenced)
