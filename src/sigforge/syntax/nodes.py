"""
Signature Syntax Nodes.

This module defines the expression tree produced by the reconstruction engine.
Every node is immutable and renders itself to surface syntax via ``to_text()``:

*   ``Vector{Int}`` - :class:`Curly`
*   ``Base.Iterators.Zip`` - :class:`Qualified`
*   ``T where {T <: Real}`` - :class:`Where` + :class:`Subtype`
*   ``x::T`` / ``::T`` / ``_`` - :class:`Typed` and :class:`AnonymousSlot`
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from sigforge.model.types import Symbol


@dataclass(frozen=True)
class Expr(ABC):
  """Abstract base class for all signature syntax nodes."""

  @abstractmethod
  def to_text(self) -> str:
    pass

  def __str__(self) -> str:
    return self.to_text()


@dataclass(frozen=True)
class Identifier(Expr):
  """A bare name (``Int``, ``T``, ``x``)."""

  name: str

  def to_text(self) -> str:
    return self.name


@dataclass(frozen=True)
class Qualified(Expr):
  """Attribute access on a module path (``pkg.mod.Name``)."""

  value: Expr
  attr: str

  def to_text(self) -> str:
    return f"{self.value.to_text()}.{self.attr}"


@dataclass(frozen=True)
class Curly(Expr):
  """A type applied to parameters (``Dict{K, V}``). Empty ``args`` still renders braces."""

  head: Expr
  args: Tuple[Expr, ...] = ()

  def to_text(self) -> str:
    inner = ", ".join(a.to_text() for a in self.args)
    return f"{self.head.to_text()}{{{inner}}}"


@dataclass(frozen=True)
class Where(Expr):
  """A body constrained by a group of where-parameters (``A{T} where {T, U <: Real}``)."""

  body: Expr
  params: Tuple[Expr, ...]

  def to_text(self) -> str:
    inner = ", ".join(p.to_text() for p in self.params)
    return f"{self.body.to_text()} where {{{inner}}}"


@dataclass(frozen=True)
class Subtype(Expr):
  """Upper-bound constraint ``T <: U``."""

  lhs: Expr
  rhs: Expr

  def to_text(self) -> str:
    return f"{self.lhs.to_text()} <: {self.rhs.to_text()}"


@dataclass(frozen=True)
class Supertype(Expr):
  """Lower-bound constraint ``T >: L``."""

  lhs: Expr
  rhs: Expr

  def to_text(self) -> str:
    return f"{self.lhs.to_text()} >: {self.rhs.to_text()}"


@dataclass(frozen=True)
class Between(Expr):
  """Two-sided constraint ``L <: T <: U``."""

  lower: Expr
  name: Expr
  upper: Expr

  def to_text(self) -> str:
    return f"{self.lower.to_text()} <: {self.name.to_text()} <: {self.upper.to_text()}"


@dataclass(frozen=True)
class Typed(Expr):
  """
  A positional argument.

  ``name`` or ``annotation`` may be missing, but not both
  (use :class:`AnonymousSlot` for that).
  """

  name: Optional[str]
  annotation: Optional[Expr] = None

  def to_text(self) -> str:
    if self.annotation is None:
      return self.name or ""
    return f"{self.name or ''}::{self.annotation.to_text()}"


@dataclass(frozen=True)
class AnonymousSlot(Expr):
  """An unnamed, unannotated positional slot."""

  def to_text(self) -> str:
    return "_"


@dataclass(frozen=True)
class Value(Expr):
  """A plain value embedded in a type (``2``, ``true``, ``:sym``)."""

  value: Any

  def to_text(self) -> str:
    v = self.value
    if v is None:
      return "nothing"
    if isinstance(v, bool):
      return "true" if v else "false"
    if isinstance(v, Symbol):
      return str(v)
    if isinstance(v, complex):
      sign = "-" if v.imag < 0 else "+"
      return f"{v.real!r} {sign} {abs(v.imag)!r}im"
    return repr(v)
