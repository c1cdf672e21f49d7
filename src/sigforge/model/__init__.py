"""
Data model for compiled generic signatures.

Re-exports the type representation variants, the prelude and method descriptors.
"""

from sigforge.model.descriptor import (
  SELF_SLOT,
  UNUSED_SLOT,
  DeclaredKeywordResolver,
  DescriptorIntrospector,
  KeywordTableResolver,
  MethodDescriptor,
  MethodIntrospector,
)
from sigforge.model.modules import Module, TypeName
from sigforge.model.prelude import (
  BUILTINS,
  EMPTY_TUPLE,
  NOTHING,
  TUPLE,
  TYPE,
  VARARG,
  builtin,
  module_from_path,
  tuple_of,
  type_of,
  union_of,
  vararg_of,
)
from sigforge.model.types import (
  ANY,
  BOTTOM,
  CORE,
  Literal,
  Parameterized,
  Quantified,
  Symbol,
  TypeNode,
  TypeVariable,
  UnionOf,
)

__all__ = [
  "ANY",
  "BOTTOM",
  "BUILTINS",
  "CORE",
  "EMPTY_TUPLE",
  "NOTHING",
  "SELF_SLOT",
  "TUPLE",
  "TYPE",
  "UNUSED_SLOT",
  "VARARG",
  "DeclaredKeywordResolver",
  "DescriptorIntrospector",
  "KeywordTableResolver",
  "Literal",
  "MethodDescriptor",
  "MethodIntrospector",
  "Module",
  "Parameterized",
  "Quantified",
  "Symbol",
  "TypeName",
  "TypeNode",
  "TypeVariable",
  "UnionOf",
  "builtin",
  "module_from_path",
  "tuple_of",
  "type_of",
  "union_of",
  "vararg_of",
]
