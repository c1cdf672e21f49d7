"""
Signature Assembly.

Orchestrates the reconstruction of a method's structured signature:

1.  Unwrap the top-level quantifiers of the compiled signature.
2.  Detect constructor type parameters and mark their variables explicit.
3.  Render positional arguments.
4.  Render the where-clause from the top-level quantifier chain, skipping
    explicit variables.
5.  Ask the keyword resolver for keyword names.

Fields that do not apply are left out of the resulting
:class:`StructuredSignature` rather than stored empty.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple

from sigforge.core.arguments import ArgumentExtractor
from sigforge.core.naming import TypeNamer
from sigforge.core.quantifiers import unwrap
from sigforge.core.type_params import TypeParameterExtractor
from sigforge.core.visibility import BaselineScope, VisibilityOracle
from sigforge.model.descriptor import (
  DeclaredKeywordResolver,
  DescriptorIntrospector,
  KeywordTableResolver,
  MethodDescriptor,
  MethodIntrospector,
)
from sigforge.syntax.nodes import Expr

logger = logging.getLogger(__name__)

#: Field tags, in output order.
FIELDS: Tuple[str, ...] = ("name", "args", "whereparams", "params", "kwargs")


class StructuredSignature(Mapping):
  """
  Immutable mapping from field tag to value.

  Tags are a subset of :data:`FIELDS` and iterate in that order. ``name`` is a
  string, ``kwargs`` a tuple of strings, and ``args``, ``whereparams`` and
  ``params`` are tuples of :class:`~sigforge.syntax.nodes.Expr`.
  """

  def __init__(self, **fields: Any) -> None:
    unknown = set(fields) - set(FIELDS)
    if unknown:
      raise KeyError(f"Unknown signature fields: {sorted(unknown)}")
    self._fields = MappingProxyType({k: fields[k] for k in FIELDS if fields.get(k) is not None})

  def __getitem__(self, key: str) -> Any:
    return self._fields[key]

  def __iter__(self) -> Iterator[str]:
    return iter(self._fields)

  def __len__(self) -> int:
    return len(self._fields)

  def __repr__(self) -> str:
    return f"StructuredSignature({dict(self._fields)!r})"

  def to_text(self) -> Dict[str, Any]:
    """
    Converts the signature to plain data, rendering every expression to text.

    Returns:
        Dict[str, Any]: JSON-serializable dictionary.
    """
    out: Dict[str, Any] = {}
    for key, value in self._fields.items():
      if isinstance(value, tuple):
        out[key] = [v.to_text() if isinstance(v, Expr) else v for v in value]
      else:
        out[key] = value
    return out


class SignatureAssembler:
  """
  Builds :class:`StructuredSignature` records from method descriptors.

  Attributes:
      introspector (MethodIntrospector): Low-level metadata source.
      keywords (KeywordTableResolver): Keyword-name source.
      namer (TypeNamer): Shared type namer.
  """

  def __init__(
    self,
    baseline: Optional[BaselineScope] = None,
    introspector: Optional[MethodIntrospector] = None,
    keywords: Optional[KeywordTableResolver] = None,
    oracle: Optional[VisibilityOracle] = None,
  ) -> None:
    self.introspector = introspector or DescriptorIntrospector()
    self.keywords = keywords or DeclaredKeywordResolver()
    self.namer = TypeNamer(baseline, oracle)
    self.arguments = ArgumentExtractor(self.namer, self.introspector)
    self.type_params = TypeParameterExtractor(self.namer)

  def assemble(self, descriptor: MethodDescriptor) -> StructuredSignature:
    """
    Reconstructs the structured signature of one method.

    Args:
        descriptor: The method to describe.

    Returns:
        StructuredSignature: ``name`` and ``args`` always; ``whereparams``,
        ``params`` and ``kwargs`` only when applicable.

    Raises:
        MalformedDescriptor: If the descriptor breaks its contract.
        InvalidTypeParameter: If a literal type parameter cannot be embedded.
        UnsupportedTypeShape: If the signature holds an unknown node.
    """
    name = self.introspector.method_name(descriptor)
    signature = self.introspector.generic_signature(descriptor)

    variables, _ = unwrap(signature)
    explicit = self.type_params.explicit_variables(signature, variables)

    args = self.arguments.extract(descriptor, explicit)
    whereparams = tuple(self.namer.bounds.render(v) for v in variables if v not in explicit)
    params = self.type_params.extract(signature)
    kwargs = tuple(self.keywords.keyword_names(descriptor))

    logger.debug(
      "Reconstructed %s: %d args, %d where-params, %d explicit",
      name,
      len(args),
      len(whereparams),
      len(explicit),
    )

    return StructuredSignature(
      name=name,
      args=args,
      whereparams=whereparams or None,
      params=params,
      kwargs=kwargs or None,
    )


def reconstruct_signature(
  descriptor: MethodDescriptor,
  baseline: Optional[BaselineScope] = None,
) -> StructuredSignature:
  """
  Reconstructs the structured signature of a method.

  Convenience wrapper around :class:`SignatureAssembler` using the default
  collaborators.

  Args:
      descriptor: The method to describe.
      baseline: Reference scope for name visibility (defaults to ``Core`` and ``builtins``).

  Returns:
      StructuredSignature: The reconstructed signature.
  """
  return SignatureAssembler(baseline=baseline).assemble(descriptor)
