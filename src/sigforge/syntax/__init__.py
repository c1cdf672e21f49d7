"""Syntax expression nodes emitted by the reconstruction engine."""

from sigforge.syntax.nodes import (
  AnonymousSlot,
  Between,
  Curly,
  Expr,
  Identifier,
  Qualified,
  Subtype,
  Supertype,
  Typed,
  Value,
  Where,
)

__all__ = [
  "AnonymousSlot",
  "Between",
  "Curly",
  "Expr",
  "Identifier",
  "Qualified",
  "Subtype",
  "Supertype",
  "Typed",
  "Value",
  "Where",
]
