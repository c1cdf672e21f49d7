from .signatures import handle_signatures, module_name_for

__all__ = [
  "handle_signatures",
  "module_name_for",
]
