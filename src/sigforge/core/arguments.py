"""
Positional Argument Extraction.

Pairs the slot table of a method with the positional types of its (unwrapped)
signature. Slot 0 is the ``#self#`` sentinel and the first tuple parameter is
the type of the callable itself; both are skipped.

Rendering per ``(slot, type)`` pair:

*   unnamed, ``Any``   -> ``_``
*   unnamed, ``T``     -> ``::T``
*   named,   ``Any``   -> ``x``
*   named,   ``T``     -> ``x::T``
"""

import logging
from typing import AbstractSet, List, Sequence, Tuple

from sigforge.core.naming import TypeNamer
from sigforge.core.quantifiers import unwrap
from sigforge.errors import MalformedDescriptor
from sigforge.model.descriptor import (
  SELF_SLOT,
  UNUSED_SLOT,
  DescriptorIntrospector,
  MethodDescriptor,
  MethodIntrospector,
)
from sigforge.model.types import ANY, Parameterized, TypeNode, TypeVariable
from sigforge.syntax.nodes import AnonymousSlot, Expr, Typed

logger = logging.getLogger(__name__)


def signature_parameters(signature: TypeNode) -> Tuple[TypeNode, ...]:
  """
  Returns the parameters of a signature's argument tuple, quantifiers removed.

  Args:
      signature: The generic signature of a method.

  Returns:
      Tuple[TypeNode, ...]: Tuple parameters; the first is the callable's own type.

  Raises:
      MalformedDescriptor: If the signature is not a non-empty parameterized tuple.
  """
  _, concrete = unwrap(signature)
  if not isinstance(concrete, Parameterized) or not concrete.parameters:
    raise MalformedDescriptor(f"Signature is not an argument tuple: {concrete!r}")
  return concrete.parameters


class ArgumentExtractor:
  """
  Builds positional-argument expressions for a method.

  Attributes:
      namer (TypeNamer): Renders argument types.
      introspector (MethodIntrospector): Supplies slots, counts and signatures.
  """

  def __init__(self, namer: TypeNamer, introspector: MethodIntrospector = None):
    self.namer = namer
    self.introspector = introspector or DescriptorIntrospector()

  def argument_names(self, descriptor: MethodDescriptor) -> List[str]:
    """
    Reads the positional argument slot names, sentinel excluded.

    Raises:
        MalformedDescriptor: If the sentinel is missing or the count exceeds the slot table.
    """
    slots = list(self.introspector.slot_names(descriptor))
    nargs = self.introspector.argument_count(descriptor)

    if not slots or slots[0] != SELF_SLOT:
      raise MalformedDescriptor(f"Slot table must start with {SELF_SLOT!r}, got {slots[:1]!r}")
    if nargs < 1 or nargs > len(slots):
      raise MalformedDescriptor(f"Argument count {nargs} does not fit a slot table of {len(slots)} entries")

    # nargs counts the sentinel
    return slots[1:nargs]

  def argument_types(self, descriptor: MethodDescriptor) -> Sequence[TypeNode]:
    """Positional types, the callable's own type excluded."""
    return signature_parameters(self.introspector.generic_signature(descriptor))[1:]

  def extract(self, descriptor: MethodDescriptor, explicit: AbstractSet[TypeVariable] = frozenset()) -> Tuple[Expr, ...]:
    """
    Renders every positional argument.

    Args:
        descriptor: The method.
        explicit: Variables excluded from inline where-clauses.

    Returns:
        Tuple[Expr, ...]: One expression per positional argument, in order.

    Raises:
        MalformedDescriptor: If slot names and positional types do not line up.
    """
    names = self.argument_names(descriptor)
    types = self.argument_types(descriptor)

    if len(names) != len(types):
      raise MalformedDescriptor(
        f"{self.introspector.method_name(descriptor)}: {len(names)} argument slots but {len(types)} positional types"
      )

    args = []
    for name, type_ in zip(names, types):
      args.append(self._render(name, type_, explicit))

    logger.debug("Extracted %d positional arguments", len(args))
    return tuple(args)

  def _render(self, name: str, type_: TypeNode, explicit: AbstractSet[TypeVariable]) -> Expr:
    has_name = name != UNUSED_SLOT
    if type_ == ANY:
      return Typed(name) if has_name else AnonymousSlot()

    annotation = self.namer.name_of(type_, explicit)
    return Typed(name if has_name else None, annotation)
