"""
Python Frontend.

Wraps the LibCST parser to lower Python ``def`` and ``class`` statements into
:class:`~sigforge.model.descriptor.MethodDescriptor` objects, the input of the
reconstruction engine.

Lowering rules:

*   Slot table: ``#self#``, the positional parameters (positional-only,
    regular, then ``*args``), then names assigned in the body. Parameters named
    in ``RuntimeConfig.unused_names`` become ``#unused#``.
*   Signature: a tuple type whose first parameter is the callable's own type,
    quantified over the function's type variables (PEP 695 parameters first,
    then module-level ``TypeVar`` declarations in order of first use).
*   Constructors: ``__init__`` of a class ``C[T]`` is described as the callable
    ``C`` whose own type is ``Type{C{T}}``; its ``self`` is the self slot.
*   Keyword table: keyword-only parameters, then ``**kwargs`` as ``kwargs...``.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import libcst as cst

from sigforge.config import RuntimeConfig
from sigforge.errors import SignatureError, UnsupportedAnnotation
from sigforge.frontends.annotations import AnnotationLowerer, TypeScope
from sigforge.frontends.scanners import (
  ImportScanner,
  LocalNameScanner,
  TypeVarDecl,
  TypeVarScanner,
  get_full_name,
)
from sigforge.model.descriptor import SELF_SLOT, UNUSED_SLOT, MethodDescriptor
from sigforge.model.modules import TypeName
from sigforge.model.prelude import module_from_path, tuple_of, type_of, union_of, vararg_of
from sigforge.model.types import ANY, Parameterized, Quantified, TypeNode, TypeVariable

_GENERIC_BASES = {"typing.Generic", "typing.Protocol"}


@dataclass
class FrontendResult:
  """
  Descriptors extracted from one source file.

  Attributes:
      descriptors: Successfully lowered callables, in source order.
      errors: ``(qualified callable name, error)`` pairs for callables that could not be lowered.
  """

  descriptors: List[MethodDescriptor] = field(default_factory=list)
  errors: List[Tuple[str, SignatureError]] = field(default_factory=list)

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0


@dataclass
class _ClassInfo:
  """Per-class context needed to lower its methods."""

  name: str
  type_name: TypeName
  type_params: Optional[cst.TypeParameters]
  generic_vars: List[str]


class PythonFrontend:
  """
  Ingests Python source code into method descriptors.

  Attributes:
      code (str): The source text.
      module (Module): The module the source defines.
      config (RuntimeConfig): Frontend options.
  """

  def __init__(self, code: str, module_name: str = "__main__", config: Optional[RuntimeConfig] = None) -> None:
    self.code = code
    self.module = module_from_path(module_name)
    self.config = config or RuntimeConfig()
    self._lowerer: Optional[AnnotationLowerer] = None

  def extract(self) -> FrontendResult:
    """
    Parses the code and lowers every reportable callable.

    Returns:
        FrontendResult: Descriptors plus per-callable failures.

    Raises:
        libcst.ParserSyntaxError: If the source does not parse.
    """
    tree = cst.parse_module(self.code)

    imports = ImportScanner()
    tree.visit(imports)
    typevars = TypeVarScanner(imports.aliases)
    tree.visit(typevars)

    local_types = {stmt.name.value for stmt in tree.body if isinstance(stmt, cst.ClassDef)}
    self._lowerer = AnnotationLowerer(self.module, imports.aliases, local_types, typevars.decls)

    result = FrontendResult()
    for stmt in tree.body:
      if isinstance(stmt, cst.FunctionDef):
        if self._is_reported(stmt.name.value):
          self._collect(result, stmt.name.value, lambda s=stmt: self.describe_function(s))
      elif isinstance(stmt, cst.ClassDef):
        if self._is_reported(stmt.name.value):
          self._extract_class(stmt, typevars.decls, result)
    return result

  def describe_function(self, func: cst.FunctionDef) -> MethodDescriptor:
    """
    Lowers a module-level function.

    Args:
        func: The function definition.

    Returns:
        MethodDescriptor: The function's descriptor.
    """
    scope = TypeScope()
    self._bind_type_params(func.type_parameters, scope)
    own_type = Parameterized(TypeName(f"typeof({func.name.value})", self.module))
    return self._build(func, func.name.value, own_type, scope, receiver=None)

  def _extract_class(self, node: cst.ClassDef, decls: dict, result: FrontendResult) -> None:
    info = _ClassInfo(
      name=node.name.value,
      type_name=self._lowerer.type_name(self._lowerer.qualify(node.name.value)),
      type_params=node.type_parameters,
      generic_vars=[] if node.type_parameters else self._generic_vars(node.bases, decls),
    )

    body = node.body.body if isinstance(node.body, cst.IndentedBlock) else []
    for stmt in body:
      if not isinstance(stmt, cst.FunctionDef):
        continue
      method = stmt.name.value
      label = f"{info.name}.{method}"
      if method == "__init__":
        self._collect(result, label, lambda s=stmt: self.describe_constructor(s, info))
      elif self.config.include_methods and self._is_reported(method):
        self._collect(result, label, lambda s=stmt: self.describe_method(s, info))

  def describe_constructor(self, func: cst.FunctionDef, info: _ClassInfo) -> MethodDescriptor:
    """Lowers ``__init__`` into a constructor for ``info``'s class."""
    scope = TypeScope()
    instance = self._bind_class_vars(info, scope)
    self._bind_type_params(func.type_parameters, scope)

    params = func.params
    positional = list(params.posonly_params) + list(params.params)
    if not positional:
      raise UnsupportedAnnotation(f"{info.name}.__init__ has no 'self' parameter")
    # `self` is the constructed object, which takes the self slot
    return self._build(func, info.name, type_of(instance), scope, receiver=None, skip_first=True)

  def describe_method(self, func: cst.FunctionDef, info: _ClassInfo) -> MethodDescriptor:
    """Lowers an ordinary, class or static method of ``info``'s class."""
    decorators = {get_full_name(d.decorator) for d in func.decorators}
    scope = TypeScope()

    receiver: Optional[TypeNode] = None
    if "staticmethod" not in decorators:
      instance = self._bind_class_vars(info, scope)
      receiver = type_of(instance) if "classmethod" in decorators else instance
    self._bind_type_params(func.type_parameters, scope)

    own_type = Parameterized(TypeName(f"typeof({func.name.value})", self.module))
    return self._build(func, func.name.value, own_type, scope, receiver=receiver)

  def _build(
    self,
    func: cst.FunctionDef,
    name: str,
    own_type: TypeNode,
    scope: TypeScope,
    receiver: Optional[TypeNode],
    skip_first: bool = False,
  ) -> MethodDescriptor:
    params = func.params
    positional: List[cst.Param] = list(params.posonly_params) + list(params.params)
    if skip_first:
      positional = positional[1:]

    slots = [SELF_SLOT]
    types: List[TypeNode] = [own_type]

    for index, param in enumerate(positional):
      slots.append(self._slot_name(param))
      if index == 0 and receiver is not None and param.annotation is None:
        types.append(receiver)
      else:
        types.append(self._annotation(param, scope))

    if isinstance(params.star_arg, cst.Param):
      slots.append(self._slot_name(params.star_arg))
      types.append(vararg_of(self._annotation(params.star_arg, scope)))

    argument_count = len(slots)

    locals_scanner = LocalNameScanner()
    func.body.visit(locals_scanner)
    for local in locals_scanner.names:
      if local not in slots:
        slots.append(local)

    keywords = [p.name.value for p in params.kwonly_params]
    if params.star_kwarg is not None:
      keywords.append(f"{params.star_kwarg.name.value}...")

    signature: TypeNode = tuple_of(*types)
    for variable in reversed(scope.order):
      signature = Quantified(variable, signature)

    return MethodDescriptor(
      name=name,
      slot_names=tuple(slots),
      argument_count=argument_count,
      module=self.module,
      signature=signature,
      keyword_names=tuple(keywords),
    )

  def _slot_name(self, param: cst.Param) -> str:
    name = param.name.value
    return UNUSED_SLOT if name in self.config.unused_names else name

  def _annotation(self, param: cst.Param, scope: TypeScope) -> TypeNode:
    if param.annotation is None:
      return ANY
    return self._lowerer.lower(param.annotation.annotation, scope)

  def _bind_type_params(self, type_params: Optional[cst.TypeParameters], scope: TypeScope) -> None:
    if type_params is None:
      return
    for type_param in type_params.params:
      param = type_param.param
      if not isinstance(param, cst.TypeVar):
        raise UnsupportedAnnotation(f"Unsupported type parameter kind: {type(param).__name__}")

      upper = ANY
      if isinstance(param.bound, cst.Tuple):
        upper = union_of(*(self._lowerer.lower(el.value, scope) for el in param.bound.elements))
      elif param.bound is not None:
        upper = self._lowerer.lower(param.bound, scope)
      scope.bind(TypeVariable(param.name.value, upper_bound=upper))

  def _bind_class_vars(self, info: _ClassInfo, scope: TypeScope) -> Parameterized:
    """Binds the class's type variables and returns the class applied to them."""
    self._bind_type_params(info.type_params, scope)
    for name in info.generic_vars:
      self._lowerer.lower(cst.Name(name), scope)
    return Parameterized(info.type_name, tuple(scope.order))

  def _generic_vars(self, bases: Sequence[cst.Arg], decls: dict) -> List[str]:
    """
    Type variables of an old-style generic class.

    ``Generic[...]`` or ``Protocol[...]`` fixes the order; otherwise variables are
    taken from the subscripted bases in order of appearance.
    """
    found: List[str] = []
    for base in bases:
      if not isinstance(base.value, cst.Subscript):
        continue
      names = [
        el.slice.value.value
        for el in base.value.slice
        if isinstance(el.slice, cst.Index) and isinstance(el.slice.value, cst.Name) and el.slice.value.value in decls
      ]
      if self._lowerer.qualify(get_full_name(base.value.value)) in _GENERIC_BASES:
        return names
      for name in names:
        if name not in found:
          found.append(name)
    return found

  def _is_reported(self, name: str) -> bool:
    return self.config.include_private or not name.startswith("_")

  def _collect(self, result: FrontendResult, label: str, build) -> None:
    try:
      result.descriptors.append(build())
    except SignatureError as e:
      result.errors.append((label, e))


def extract_descriptors(code: str, module_name: str = "__main__", config: Optional[RuntimeConfig] = None) -> List[MethodDescriptor]:
  """
  Lowers every callable in ``code``, failing on the first unsupported one.

  Args:
      code: Python source.
      module_name: Dotted name of the module the source defines.
      config: Frontend options.

  Returns:
      List[MethodDescriptor]: Descriptors in source order.

  Raises:
      SignatureError: The first lowering failure.
  """
  result = PythonFrontend(code, module_name, config).extract()
  if result.errors:
    raise result.errors[0][1]
  return result.descriptors
