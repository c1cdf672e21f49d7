"""
Bound Rendering.

Converts a type variable's ``(lower, upper)`` bound pair into the most compact
constraint expression:

=============  ============  =====================
lower          upper         rendered
=============  ============  =====================
``Union{}``    ``Any``       ``T``
``Union{}``    ``U``         ``T <: U``
``L``          ``Any``       ``T >: L``
``L``          ``U``         ``L <: T <: U``
=============  ============  =====================
"""

from typing import TYPE_CHECKING

from sigforge.model.types import ANY, BOTTOM, TypeVariable
from sigforge.syntax.nodes import Between, Expr, Identifier, Subtype, Supertype

if TYPE_CHECKING:
  from sigforge.core.naming import TypeNamer


class BoundRenderer:
  """
  Renders where-clause fragments for single type variables.

  Attributes:
      namer (TypeNamer): Used to name the bound types.
  """

  def __init__(self, namer: "TypeNamer"):
    self.namer = namer

  def render(self, variable: TypeVariable) -> Expr:
    """
    Builds the constraint expression for one variable.

    Bounds are named with an empty explicit-variable set: a bound never refers
    to the enclosing constructor parameters ambiguously.

    Args:
        variable: The type variable.

    Returns:
        Expr: One of ``T``, ``T <: U``, ``T >: L`` or ``L <: T <: U``.
    """
    name = Identifier(variable.name)
    has_lower = variable.lower_bound != BOTTOM
    has_upper = variable.upper_bound != ANY

    if not has_lower and not has_upper:
      return name
    if not has_lower:
      return Subtype(name, self.namer.name_of(variable.upper_bound))
    if not has_upper:
      return Supertype(name, self.namer.name_of(variable.lower_bound))
    return Between(
      self.namer.name_of(variable.lower_bound),
      name,
      self.namer.name_of(variable.upper_bound),
    )
