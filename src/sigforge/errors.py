"""
Error Types for sigforge.

All failures raised by the reconstruction engine derive from
:class:`SignatureError`. Reconstruction is all-or-nothing: when any of these is
raised, no partial signature is produced.
"""

from typing import Any


class SignatureError(Exception):
  """Base class for every error raised while reconstructing a signature."""


class InvalidTypeParameter(SignatureError, ValueError):
  """
  Raised when a literal type parameter is not a plain embeddable value.

  Attributes:
      value (Any): The offending literal.
      value_type (type): The Python type of the literal.
  """

  def __init__(self, value: Any, value_type: type):
    self.value = value
    self.value_type = value_type
    super().__init__(f"Not a valid type parameter: {value!r} of type {value_type.__name__}")


class MalformedDescriptor(SignatureError, ValueError):
  """
  Raised when a method descriptor breaks its collaborator contract.

  Examples are a missing ``#self#`` sentinel or a slot table that does not line
  up with the positional types of the signature.
  """


class UnsupportedTypeShape(SignatureError, TypeError):
  """
  Raised when a node of the type representation is not one of the known variants.

  Attributes:
      node (Any): The unrecognized node.
  """

  def __init__(self, node: Any):
    self.node = node
    super().__init__(f"Unsupported type-representation shape: {type(node).__name__} ({node!r})")


class UnsupportedAnnotation(SignatureError, ValueError):
  """Raised by the Python frontend when an annotation cannot be lowered."""
