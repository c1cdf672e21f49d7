"""
sigforge Package.

Reconstructs structured, syntactic descriptions of compiled generic method
signatures: name, positional arguments, where-parameters, constructor type
parameters and keyword names.

Usage
-----

From a hand-built descriptor
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from sigforge import reconstruct_signature
    from sigforge.model import (
      CORE, MethodDescriptor, Module, Quantified, TypeVariable, builtin, tuple_of,
    )

    T = TypeVariable("T", upper_bound=builtin("int"))
    sig = Quantified(T, tuple_of(builtin("function"), T))
    m = MethodDescriptor("double", ("#self#", "x"), 2, Module("Main"), sig)

    reconstruct_signature(m).to_text()
    # {'name': 'double', 'args': ['x::T'], 'whereparams': ['T <: int']}

From Python source
^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from sigforge import describe_source
    for sig in describe_source("def scale[T: float](x: T, *, inplace=False): ..."):
      print(sig.to_text())
"""

from typing import List, Optional

from sigforge.config import RuntimeConfig
from sigforge.core.assembler import SignatureAssembler, StructuredSignature, reconstruct_signature
from sigforge.errors import (
  InvalidTypeParameter,
  MalformedDescriptor,
  SignatureError,
  UnsupportedAnnotation,
  UnsupportedTypeShape,
)
from sigforge.frontends.python import extract_descriptors

__version__ = "0.1.0"


def describe_source(
  code: str,
  module_name: str = "__main__",
  config: Optional[RuntimeConfig] = None,
) -> List[StructuredSignature]:
  """
  Reconstructs the signatures of every callable defined in Python source.

  Args:
      code (str): Python source text.
      module_name (str): Dotted name of the module the source defines; types
          declared in it are qualified with this name.
      config (RuntimeConfig, optional): Frontend and baseline settings.

  Returns:
      List[StructuredSignature]: One signature per callable, in source order.

  Raises:
      SignatureError: If any callable cannot be lowered or reconstructed.
  """
  config = config or RuntimeConfig()
  assembler = SignatureAssembler(baseline=config.baseline_scope())
  return [assembler.assemble(d) for d in extract_descriptors(code, module_name, config)]


__all__ = [
  "InvalidTypeParameter",
  "MalformedDescriptor",
  "RuntimeConfig",
  "SignatureAssembler",
  "SignatureError",
  "StructuredSignature",
  "UnsupportedAnnotation",
  "UnsupportedTypeShape",
  "__version__",
  "describe_source",
  "reconstruct_signature",
]
