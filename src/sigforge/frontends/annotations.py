"""
Annotation Lowering.

Translates Python annotation expressions (LibCST nodes) into the generic type
representation of :mod:`sigforge.model`.

Resolution of a name proceeds as follows:

1.  A type variable in the current :class:`TypeScope`.
2.  A module-level ``TypeVar`` declaration, quantified implicitly on first use.
3.  An import alias of the file, expanded to its full path.
4.  A class defined in the file, owned by the file's module.
5.  A builtin type, owned by ``builtins``.
6.  Otherwise, a bare name is assumed to live in the file's module and a dotted
    name is taken as written.

The ``typing`` forms with special meaning (``Any``, ``Union``, ``Optional``,
``Tuple``, ``Type``, ``Annotated``) map onto the ``Core`` constructors.
``Literal[...]`` value types have no counterpart there and are rejected.
"""

from typing import Dict, List, Optional, Set

import libcst as cst

from sigforge.errors import UnsupportedAnnotation
from sigforge.frontends.scanners import TypeVarDecl, get_full_name
from sigforge.model.modules import Module, TypeName
from sigforge.model.prelude import (
  BUILTINS,
  EMPTY_TUPLE,
  NOTHING,
  module_from_path,
  tuple_of,
  type_of,
  union_of,
  vararg_of,
)
from sigforge.model.types import ANY, Literal, Parameterized, Quantified, TypeNode, TypeVariable

# Fully qualified path -> special form
_SPECIAL_FORMS = {
  "typing.Any": "any",
  "typing.Union": "union",
  "typing.Optional": "optional",
  "typing.Tuple": "tuple",
  "builtins.tuple": "tuple",
  "typing.Type": "type",
  "builtins.type": "type",
  "typing.Annotated": "annotated",
  "typing.Literal": "literal",
}


class TypeScope:
  """
  Type variables bound for one signature, in quantifier order.

  Attributes:
      bindings (Dict[str, TypeVariable]): Visible variables by name.
      order (List[TypeVariable]): Variables in the order they were bound.
  """

  def __init__(self) -> None:
    self.bindings: Dict[str, TypeVariable] = {}
    self.order: List[TypeVariable] = []

  def bind(self, variable: TypeVariable) -> TypeVariable:
    """Makes ``variable`` visible under its name and appends it to the quantifier order."""
    self.bindings[variable.name] = variable
    self.order.append(variable)
    return variable

  def lookup(self, name: str) -> Optional[TypeVariable]:
    return self.bindings.get(name)


class AnnotationLowerer:
  """
  Lowers annotation expressions for one source module.

  Attributes:
      module (Module): The module the source file defines.
      aliases (Dict[str, str]): Import aliases of the file.
      local_types (Set[str]): Names of classes defined in the file.
      typevars (Dict[str, TypeVarDecl]): Module-level ``TypeVar`` declarations.
  """

  def __init__(
    self,
    module: Module,
    aliases: Optional[Dict[str, str]] = None,
    local_types: Optional[Set[str]] = None,
    typevars: Optional[Dict[str, TypeVarDecl]] = None,
  ) -> None:
    self.module = module
    self.aliases = aliases or {}
    self.local_types = local_types or set()
    self.typevars = typevars or {}

  def lower(self, node: cst.BaseExpression, scope: TypeScope) -> TypeNode:
    """
    Lowers an annotation.

    Args:
        node: The annotation expression.
        scope: Type variables bound for the signature being built. Module-level
            ``TypeVar`` declarations used for the first time are bound into it.

    Returns:
        TypeNode: The lowered type.

    Raises:
        UnsupportedAnnotation: If the expression has no type meaning.
    """
    if isinstance(node, cst.Name) and node.value == "None":
      return NOTHING

    if isinstance(node, (cst.Name, cst.Attribute)):
      return self._lower_reference(node, scope)

    if isinstance(node, cst.Subscript):
      return self._lower_subscript(node, scope)

    if isinstance(node, cst.BinaryOperation) and isinstance(node.operator, cst.BitOr):
      return union_of(self.lower(node.left, scope), self.lower(node.right, scope))

    if isinstance(node, cst.SimpleString):
      try:
        inner = cst.parse_expression(node.evaluated_value)
      except cst.ParserSyntaxError as e:
        raise UnsupportedAnnotation(f"Unparsable string annotation {node.value}: {e}") from e
      return self.lower(inner, scope)

    raise UnsupportedAnnotation(f"Unsupported annotation: {_code(node)}")

  def lower_parameter(self, node: cst.BaseExpression, scope: TypeScope) -> TypeNode:
    """
    Lowers one type parameter, where plain values are allowed (``Array[float, 2]``).
    """
    if isinstance(node, (cst.Integer, cst.Float, cst.Imaginary)):
      return Literal(node.evaluated_value)
    if (
      isinstance(node, cst.UnaryOperation)
      and isinstance(node.operator, cst.Minus)
      and isinstance(node.expression, (cst.Integer, cst.Float, cst.Imaginary))
    ):
      return Literal(-node.expression.evaluated_value)
    if isinstance(node, cst.Name) and node.value in ("True", "False"):
      return Literal(node.value == "True")
    return self.lower(node, scope)

  def lower_bound(self, decl: TypeVarDecl, scope: TypeScope) -> TypeNode:
    """Upper bound of a ``TypeVar`` declaration: its bound, or the union of its constraints."""
    if decl.bound is not None:
      return self.lower(decl.bound, scope)
    if decl.constraints:
      return union_of(*(self.lower(c, scope) for c in decl.constraints))
    return ANY

  def qualify(self, dotted: str) -> str:
    """
    Expands a dotted name through the file's imports and definitions.

    Args:
        dotted: A name as written in the source (``np.ndarray``).

    Returns:
        str: The fully qualified path (``numpy.ndarray``).
    """
    head, _, rest = dotted.partition(".")
    if head in self.aliases:
      base = self.aliases[head]
    elif head in self.local_types:
      base = f"{self.module.dotted}.{head}"
    elif head in BUILTINS.exports and not rest:
      base = f"builtins.{head}"
    elif not rest:
      base = f"{self.module.dotted}.{head}"
    else:
      base = head

    full = f"{base}.{rest}" if rest else base
    if full.startswith("typing_extensions."):
      full = "typing." + full[len("typing_extensions.") :]
    return full

  def type_name(self, dotted: str) -> TypeName:
    """Builds the :class:`TypeName` for a fully qualified path."""
    module_path, _, name = dotted.rpartition(".")
    module = module_from_path(module_path) if module_path else self.module
    return TypeName(name, module)

  def _resolve_variable(self, name: str, scope: TypeScope) -> Optional[TypeVariable]:
    bound = scope.lookup(name)
    if bound is not None:
      return bound

    decl = self.typevars.get(name)
    if decl is None:
      return None
    upper = self.lower_bound(decl, scope)
    return scope.bind(TypeVariable(name, upper_bound=upper))

  def _lower_reference(self, node: cst.BaseExpression, scope: TypeScope) -> TypeNode:
    dotted = get_full_name(node)
    if not dotted:
      raise UnsupportedAnnotation(f"Unsupported annotation: {_code(node)}")

    if "." not in dotted:
      variable = self._resolve_variable(dotted, scope)
      if variable is not None:
        return variable

    full = self.qualify(dotted)
    form = _SPECIAL_FORMS.get(full)
    if form == "any":
      return ANY
    if form == "tuple":
      return tuple_of(vararg_of(ANY))
    if form == "type":
      t = TypeVariable("T")
      return Quantified(t, type_of(t))
    if form is not None:
      raise UnsupportedAnnotation(f"'{dotted}' requires type arguments")
    return Parameterized(self.type_name(full))

  def _lower_subscript(self, node: cst.Subscript, scope: TypeScope) -> TypeNode:
    elements = []
    for element in node.slice:
      if not isinstance(element.slice, cst.Index):
        raise UnsupportedAnnotation(f"Slices are not type arguments: {_code(node)}")
      elements.append(element.slice.value)

    dotted = get_full_name(node.value)
    if not dotted:
      raise UnsupportedAnnotation(f"Unsupported annotation: {_code(node)}")
    if "." not in dotted and self._resolve_variable(dotted, scope) is not None:
      raise UnsupportedAnnotation(f"Type variable '{dotted}' cannot take type arguments")

    full = self.qualify(dotted)
    form = _SPECIAL_FORMS.get(full)

    if form == "union":
      return union_of(*(self.lower(e, scope) for e in elements))
    if form == "optional":
      return union_of(self.lower(elements[0], scope), NOTHING)
    if form == "annotated":
      return self.lower(elements[0], scope)
    if form == "type":
      return type_of(self.lower(elements[0], scope))
    if form == "tuple":
      return self._lower_tuple(elements, scope)
    if form == "any":
      raise UnsupportedAnnotation("'Any' does not take type arguments")
    if form == "literal":
      raise UnsupportedAnnotation(f"Literal value types are not supported: {_code(node)}")

    params = tuple(self.lower_parameter(e, scope) for e in elements)
    return Parameterized(self.type_name(full), params)

  def _lower_tuple(self, elements: List[cst.BaseExpression], scope: TypeScope) -> TypeNode:
    # tuple[()]
    if len(elements) == 1 and isinstance(elements[0], cst.Tuple) and not elements[0].elements:
      return EMPTY_TUPLE
    # tuple[X, ...]
    if len(elements) == 2 and isinstance(elements[1], cst.Ellipsis):
      return tuple_of(vararg_of(self.lower(elements[0], scope)))
    return tuple_of(*(self.lower_parameter(e, scope) for e in elements))


def _code(node: cst.CSTNode) -> str:
  return cst.Module(body=[]).code_for_node(node)
