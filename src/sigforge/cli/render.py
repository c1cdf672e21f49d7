"""
Signature Table rendering.

Presents reconstructed signatures either as a Rich table (CLI) or as
structured JSON-ready rows.
"""

from typing import Any, Dict, List, Sequence

from rich.markup import escape
from rich.table import Table

from sigforge.core.assembler import StructuredSignature
from sigforge.utils.console import console


class SignatureTable:
  """
  Tabulates the signatures found in one source file.

  Attributes:
      title (str): Table title, usually the file path.
      signatures (Sequence[StructuredSignature]): Rows to show.
  """

  def __init__(self, title: str, signatures: Sequence[StructuredSignature]):
    self.title = title
    self.signatures = signatures

  def get_json(self) -> List[Dict[str, Any]]:
    """
    Returns the signatures as plain data with expressions rendered to text.

    Returns:
        List[Dict[str, Any]]: One dictionary per signature, absent fields omitted.
    """
    return [sig.to_text() for sig in self.signatures]

  def render(self) -> None:
    """Prints the table to the shared console."""
    table = Table(title=self.title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Params", style="magenta")
    table.add_column("Args")
    table.add_column("Where", style="yellow")
    table.add_column("Kwargs", style="dim")

    for row in self.get_json():
      table.add_row(
        escape(row["name"]),
        _join(row.get("params")),
        _join(row.get("args")),
        _join(row.get("whereparams")),
        _join(row.get("kwargs")),
      )

    console.print(table)


def _join(values: Any) -> str:
  if values is None:
    return ""
  return escape(", ".join(str(v) for v in values))
