"""
Signature reconstruction engine.

Exposes the assembler and its building blocks.
"""

from sigforge.core.arguments import ArgumentExtractor
from sigforge.core.assembler import (
  FIELDS,
  SignatureAssembler,
  StructuredSignature,
  reconstruct_signature,
)
from sigforge.core.bounds import BoundRenderer
from sigforge.core.naming import TypeNamer
from sigforge.core.quantifiers import free_variables, unwrap
from sigforge.core.type_params import TypeParameterExtractor
from sigforge.core.visibility import (
  DEFAULT_BASELINE,
  BaselineScope,
  BaselineVisibility,
  VisibilityOracle,
)

__all__ = [
  "DEFAULT_BASELINE",
  "FIELDS",
  "ArgumentExtractor",
  "BaselineScope",
  "BaselineVisibility",
  "BoundRenderer",
  "SignatureAssembler",
  "StructuredSignature",
  "TypeNamer",
  "TypeParameterExtractor",
  "VisibilityOracle",
  "free_variables",
  "reconstruct_signature",
  "unwrap",
]
