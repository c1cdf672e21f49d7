"""
LibCST Scanners for the Python Frontend.

Visitors that gather the module-level context needed to lower annotations:

1.  :class:`ImportScanner` maps local aliases to fully qualified paths
    (``import numpy as np`` gives ``np -> numpy``).
2.  :class:`TypeVarScanner` records ``T = TypeVar("T", bound=...)`` declarations.
3.  :class:`LocalNameScanner` lists the names assigned inside a function body,
    which occupy the slots after the arguments.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import libcst as cst

_TYPEVAR_PATHS = {"typing.TypeVar", "typing_extensions.TypeVar"}


def get_full_name(node: Union[cst.Name, cst.Attribute]) -> str:
  """
  Resolves a CST Name or Attribute chain to a dot-separated string.

  Args:
    node: ``cst.Name`` (``x``) or ``cst.Attribute`` (``x.y``).

  Returns:
    str: e.g. ``"collections.abc.Sequence"``; an empty string for other nodes.

  Example:
    >>> get_full_name(cst.Attribute(value=cst.Name("typing"), attr=cst.Name("Any")))
    'typing.Any'
  """
  if isinstance(node, cst.Name):
    return node.value
  elif isinstance(node, cst.Attribute):
    base = get_full_name(node.value)
    return f"{base}.{node.attr.value}" if base else ""
  return ""


class ImportScanner(cst.CSTVisitor):
  """
  Catalogs module-level import aliases.

  Attributes:
    aliases (Dict[str, str]): Local name -> fully qualified path.
  """

  def __init__(self) -> None:
    self.aliases: Dict[str, str] = {}

  def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
    return False

  def visit_ClassDef(self, node: cst.ClassDef) -> bool:
    return False

  def visit_Import(self, node: cst.Import) -> None:
    for alias in node.names:
      full = get_full_name(alias.name)
      if alias.asname is not None:
        self.aliases[get_full_name(alias.asname.name)] = full
      else:
        # `import a.b` binds `a`
        root = full.split(".")[0]
        self.aliases[root] = root

  def visit_ImportFrom(self, node: cst.ImportFrom) -> None:
    if node.relative or node.module is None or isinstance(node.names, cst.ImportStar):
      return

    module = get_full_name(node.module)
    for alias in node.names:
      name = get_full_name(alias.name)
      local = get_full_name(alias.asname.name) if alias.asname is not None else name
      self.aliases[local] = f"{module}.{name}"


@dataclass
class TypeVarDecl:
  """A module-level ``TypeVar`` declaration."""

  name: str
  bound: Optional[cst.BaseExpression] = None
  constraints: List[cst.BaseExpression] = field(default_factory=list)


class TypeVarScanner(cst.CSTVisitor):
  """
  Records module-level ``TypeVar`` assignments.

  Attributes:
    aliases (Dict[str, str]): Import aliases used to recognize ``TypeVar``.
    decls (Dict[str, TypeVarDecl]): Declared variables by local name.
  """

  def __init__(self, aliases: Dict[str, str]) -> None:
    self.aliases = aliases
    self.decls: Dict[str, TypeVarDecl] = {}

  def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
    return False

  def visit_ClassDef(self, node: cst.ClassDef) -> bool:
    return False

  def visit_Assign(self, node: cst.Assign) -> None:
    if len(node.targets) != 1 or not isinstance(node.targets[0].target, cst.Name):
      return
    call = node.value
    if not isinstance(call, cst.Call) or not self._is_typevar(call.func):
      return

    decl = TypeVarDecl(node.targets[0].target.value)
    positional = [arg for arg in call.args if arg.keyword is None]
    for arg in positional[1:]:
      decl.constraints.append(arg.value)
    for arg in call.args:
      if arg.keyword is not None and arg.keyword.value == "bound":
        decl.bound = arg.value
    self.decls[decl.name] = decl

  def _is_typevar(self, func: cst.BaseExpression) -> bool:
    name = get_full_name(func)
    if not name:
      return False
    head, _, rest = name.partition(".")
    resolved = self.aliases.get(head, head)
    full = f"{resolved}.{rest}" if rest else resolved
    return full in _TYPEVAR_PATHS


class LocalNameScanner(cst.CSTVisitor):
  """
  Lists names bound by assignments in a function body, in first-seen order.

  Nested functions, classes and lambdas are not entered.

  Attributes:
    names (List[str]): Assigned local names.
  """

  def __init__(self) -> None:
    self.names: List[str] = []

  def _add(self, target: cst.BaseExpression) -> None:
    if isinstance(target, cst.Name):
      if target.value not in self.names:
        self.names.append(target.value)
    elif isinstance(target, (cst.Tuple, cst.List)):
      for element in target.elements:
        self._add(element.value)
    elif isinstance(target, cst.StarredElement):
      self._add(target.value)

  def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
    return False

  def visit_ClassDef(self, node: cst.ClassDef) -> bool:
    return False

  def visit_Lambda(self, node: cst.Lambda) -> bool:
    return False

  def visit_AssignTarget(self, node: cst.AssignTarget) -> None:
    self._add(node.target)

  def visit_AnnAssign(self, node: cst.AnnAssign) -> None:
    self._add(node.target)

  def visit_AugAssign(self, node: cst.AugAssign) -> None:
    self._add(node.target)

  def visit_For(self, node: cst.For) -> None:
    self._add(node.target)
