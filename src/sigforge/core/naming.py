"""
Type Naming.

The :class:`TypeNamer` turns any node of the generic-type representation into
a syntax expression. It is the recursive heart of signature reconstruction:

1.  **Parameterized types** render as ``Name{P1, P2}``, or the bare ``Name``
    when there are no parameters. The zero-arity tuple is the exception and
    always keeps its braces (``Tuple{}``), since tuples are variadic in their
    number of parameters.
2.  **Quantifier chains** are unwrapped greedily and rendered as one compact
    group, ``Foo{T, A} where {T, A}``, never as nested single-variable clauses.
    Variables in the *explicit* set are omitted from the group.
3.  **Unions** render as ``Union{A, B}`` in their stable member order.
4.  **Type variables** render as their bare name; bounds live in where-clauses.
5.  **Literals** render as plain values when embeddable.

Names that are not visible from the baseline scope are module-qualified.
"""

from typing import AbstractSet, Optional

from sigforge.core.bounds import BoundRenderer
from sigforge.core.quantifiers import unwrap
from sigforge.core.visibility import (
  DEFAULT_BASELINE,
  BaselineScope,
  BaselineVisibility,
  VisibilityOracle,
  type_name_expr,
)
from sigforge.errors import InvalidTypeParameter, UnsupportedTypeShape
from sigforge.model.prelude import TUPLE
from sigforge.model.types import (
  Literal,
  Parameterized,
  Quantified,
  Symbol,
  TypeNode,
  TypeVariable,
  UnionOf,
)
from sigforge.syntax.nodes import Curly, Expr, Identifier, Value, Where

_UNION = Identifier("Union")

# Plain values that can be written directly inside braces.
_EMBEDDABLE = (bool, int, float, complex, Symbol, type(None))


def is_embeddable(value: object) -> bool:
  """True when ``value`` can appear verbatim as a type parameter."""
  return isinstance(value, _EMBEDDABLE)


class TypeNamer:
  """
  Converts generic-type nodes to syntax expressions.

  Attributes:
      baseline (BaselineScope): Scope used for visibility checks.
      oracle (VisibilityOracle): Decides whether names need qualification.
      bounds (BoundRenderer): Renders where-clause fragments.
  """

  def __init__(
    self,
    baseline: Optional[BaselineScope] = None,
    oracle: Optional[VisibilityOracle] = None,
  ) -> None:
    self.baseline = baseline or DEFAULT_BASELINE
    self.oracle = oracle or BaselineVisibility()
    self.bounds = BoundRenderer(self)

  def name_of(self, node: TypeNode, explicit: AbstractSet[TypeVariable] = frozenset()) -> Expr:
    """
    Renders a type node.

    Args:
        node: The node to render.
        explicit: Variables declared elsewhere (as constructor type parameters)
            that must not be re-declared in where-clauses.

    Returns:
        Expr: The syntax expression.

    Raises:
        InvalidTypeParameter: If a literal parameter is not embeddable.
        UnsupportedTypeShape: If the node is not a known variant.
    """
    if isinstance(node, Parameterized):
      return self._name_parameterized(node, explicit)
    if isinstance(node, Quantified):
      return self._name_quantified(node, explicit)
    if isinstance(node, UnionOf):
      return Curly(_UNION, tuple(self.name_of(m, explicit) for m in node.members))
    if isinstance(node, TypeVariable):
      return Identifier(node.name)
    if isinstance(node, Literal):
      if not is_embeddable(node.value):
        raise InvalidTypeParameter(node.value, type(node.value))
      return Value(node.value)
    raise UnsupportedTypeShape(node)

  def _name_parameterized(self, node: Parameterized, explicit: AbstractSet[TypeVariable]) -> Expr:
    head = type_name_expr(node.type_name, self.baseline, self.oracle)
    if not node.parameters and node.type_name != TUPLE:
      return head
    return Curly(head, tuple(self.name_of(p, explicit) for p in node.parameters))

  def _name_quantified(self, node: Quantified, explicit: AbstractSet[TypeVariable]) -> Expr:
    variables, inner = unwrap(node)
    fragments = tuple(self.bounds.render(v) for v in variables if v not in explicit)

    name = self.name_of(inner, explicit)
    if not fragments:
      return name
    return Where(name, fragments)
