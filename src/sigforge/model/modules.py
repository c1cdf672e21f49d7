"""
Modules and Type Names.

A :class:`Module` is a node in a chain of enclosing modules. Modules without a
parent are *root* modules (top-level packages); qualification of a type name
always walks the chain up to, and including, its root.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Module:
  """
  A module in which types are defined.

  Attributes:
      name: The module's own (unqualified) name.
      parent: The enclosing module, or None for a root module.
      exports: Names this module makes visible to code that imports it.
  """

  name: str
  parent: Optional["Module"] = None
  exports: FrozenSet[str] = field(default_factory=frozenset, compare=False)

  @property
  def is_root(self) -> bool:
    """True when the module has no enclosing module."""
    return self.parent is None

  @property
  def path(self) -> Tuple[str, ...]:
    """
    The names of the module chain, root first.

    Returns:
        Tuple[str, ...]: e.g. ``("pkg", "sub", "mod")``.
    """
    if self.parent is None:
      return (self.name,)
    return self.parent.path + (self.name,)

  @property
  def dotted(self) -> str:
    """Dot-joined module path (e.g. ``pkg.sub.mod``)."""
    return ".".join(self.path)

  def __str__(self) -> str:
    return self.dotted


@dataclass(frozen=True)
class TypeName:
  """
  A type's name together with the module that defines it.

  Attributes:
      name: The bare type name (e.g. ``Vector``).
      module: The defining module.
  """

  name: str
  module: Module

  def __str__(self) -> str:
    return f"{self.module.dotted}.{self.name}"
