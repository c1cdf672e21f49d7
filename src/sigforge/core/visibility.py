"""
Visibility Resolution.

Decides whether a type name can be written unqualified. The check runs against
a :class:`BaselineScope`: a fixed scope that imports only the default modules
(no user imports), passed explicitly rather than read from process state.

A name is visible when the baseline scope resolves it to the very module that
defines the type. ``Core.Tuple`` is visible as ``Tuple``; a user type
``Tuple`` defined in ``mypkg.shapes`` is not, because the baseline resolves that
name to ``Core``.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from sigforge.model.modules import Module, TypeName
from sigforge.model.prelude import BUILTINS
from sigforge.model.types import CORE
from sigforge.syntax.nodes import Expr, Identifier, Qualified


@dataclass(frozen=True)
class BaselineScope:
  """
  An import-free reference scope.

  Attributes:
      imports: Default-imported modules, searched in order.
  """

  imports: Tuple[Module, ...] = (CORE, BUILTINS)

  def resolve(self, name: str) -> Optional[Module]:
    """
    Finds the module a bare name resolves to from this scope.

    Args:
        name: An unqualified identifier.

    Returns:
        The first imported module exporting the name, or None.
    """
    for module in self.imports:
      if name in module.exports:
        return module
    return None


DEFAULT_BASELINE = BaselineScope()


class VisibilityOracle(Protocol):
  """Decides whether a type name needs module qualification."""

  def is_visible_unqualified(self, type_name: str, defining_module: Module, baseline: BaselineScope) -> bool: ...


class BaselineVisibility:
  """Default oracle: a name is visible when the baseline resolves it to its defining module."""

  def is_visible_unqualified(self, type_name: str, defining_module: Module, baseline: BaselineScope) -> bool:
    return baseline.resolve(type_name) == defining_module


def module_expr(module: Module) -> Expr:
  """
  Renders a module as a dotted expression, root module first.

  Args:
      module: The innermost module.

  Returns:
      Expr: ``Identifier`` for a root module, else a ``Qualified`` chain.
  """
  if module.is_root:
    return Identifier(module.name)
  return Qualified(module_expr(module.parent), module.name)


def type_name_expr(
  type_name: TypeName,
  baseline: BaselineScope = DEFAULT_BASELINE,
  oracle: Optional[VisibilityOracle] = None,
) -> Expr:
  """
  Renders a type name, qualifying it only when it is not visible from the baseline.

  Args:
      type_name: The type name to render.
      baseline: The reference scope.
      oracle: Visibility oracle (defaults to :class:`BaselineVisibility`).

  Returns:
      Expr: A bare ``Identifier`` or a module-qualified expression.
  """
  oracle = oracle or BaselineVisibility()
  if oracle.is_visible_unqualified(type_name.name, type_name.module, baseline):
    return Identifier(type_name.name)
  return Qualified(module_expr(type_name.module), type_name.name)
