"""
Frontends producing method descriptors from source code.
"""

from sigforge.frontends.python import FrontendResult, PythonFrontend, extract_descriptors

__all__ = ["FrontendResult", "PythonFrontend", "extract_descriptors"]
