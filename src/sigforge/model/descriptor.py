"""
Method Descriptors and Collaborator Protocols.

A :class:`MethodDescriptor` is the low-level metadata of one compiled method:
its name, its slot table, its declared argument count, its defining module and
its generic signature. The reconstruction engine never reads descriptors
directly; it goes through a :class:`MethodIntrospector` and a
:class:`KeywordTableResolver`, so other metadata sources can be plugged in.
"""

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

from sigforge.model.modules import Module
from sigforge.model.types import TypeNode

#: First slot of every slot table: the callable itself.
SELF_SLOT = "#self#"

#: Slot name of a positional parameter that has no name.
UNUSED_SLOT = "#unused#"


@dataclass(frozen=True)
class MethodDescriptor:
  """
  Compiled metadata of a single method.

  Attributes:
      name: The callable's name.
      slot_names: Compiled slot table. Starts with :data:`SELF_SLOT`, then one
          slot per positional parameter, then any local variables.
      argument_count: Declared argument count, including the self slot.
      module: The module defining the method.
      signature: The generic signature, a (possibly quantified) tuple type whose
          first parameter is the type of the callable itself.
      keyword_names: Names of the keyword parameters, in declaration order.
  """

  name: str
  slot_names: Tuple[str, ...]
  argument_count: int
  module: Module
  signature: TypeNode
  keyword_names: Tuple[str, ...] = ()

  def __post_init__(self) -> None:
    object.__setattr__(self, "slot_names", tuple(self.slot_names))
    object.__setattr__(self, "keyword_names", tuple(self.keyword_names))


class MethodIntrospector(Protocol):
  """Source of low-level method metadata."""

  def method_name(self, descriptor: MethodDescriptor) -> str: ...

  def slot_names(self, descriptor: MethodDescriptor) -> Sequence[str]: ...

  def argument_count(self, descriptor: MethodDescriptor) -> int: ...

  def generic_signature(self, descriptor: MethodDescriptor) -> TypeNode: ...

  def defining_module(self, descriptor: MethodDescriptor) -> Module: ...


class KeywordTableResolver(Protocol):
  """Source of keyword-parameter names."""

  def keyword_names(self, descriptor: MethodDescriptor) -> Sequence[str]: ...


class DescriptorIntrospector:
  """Reads metadata straight off a :class:`MethodDescriptor`."""

  def method_name(self, descriptor: MethodDescriptor) -> str:
    return descriptor.name

  def slot_names(self, descriptor: MethodDescriptor) -> Sequence[str]:
    return descriptor.slot_names

  def argument_count(self, descriptor: MethodDescriptor) -> int:
    return descriptor.argument_count

  def generic_signature(self, descriptor: MethodDescriptor) -> TypeNode:
    return descriptor.signature

  def defining_module(self, descriptor: MethodDescriptor) -> Module:
    return descriptor.module


class DeclaredKeywordResolver:
  """Reports the keyword names recorded on the descriptor."""

  def keyword_names(self, descriptor: MethodDescriptor) -> Sequence[str]:
    return list(descriptor.keyword_names)
