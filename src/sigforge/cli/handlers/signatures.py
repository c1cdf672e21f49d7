"""
Signatures Command Handler.

Reconstructs the signature of every callable in a Python file or directory and
reports them as Rich tables or JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import libcst as cst
from rich.markup import escape

from sigforge.cli.render import SignatureTable
from sigforge.config import RuntimeConfig
from sigforge.core.assembler import SignatureAssembler
from sigforge.errors import SignatureError
from sigforge.frontends.python import PythonFrontend
from sigforge.utils.console import console_on_stderr, log_error, log_info, log_success, log_warning


def module_name_for(file: Path, root: Path) -> str:
  """
  Derives a dotted module name for a source file.

  Args:
      file: The ``.py`` file.
      root: The path given on the command line (a file or a directory).

  Returns:
      str: e.g. ``pkg.sub.mod`` for ``pkg/sub/mod.py`` under ``pkg``; ``__init__``
      files take their package's name.
  """
  if root.is_file():
    parts = [file.stem]
  else:
    relative = file.relative_to(root).with_suffix("")
    parts = [root.resolve().name, *relative.parts]
  if len(parts) > 1 and parts[-1] == "__init__":
    parts = parts[:-1]
  return ".".join(parts)


def handle_signatures(
  path: Path,
  config: RuntimeConfig,
  json_mode: bool = False,
  module_name: Optional[str] = None,
) -> int:
  """
  Handles the 'signatures' command.

  In JSON mode standard output carries only the report; warnings and errors are
  logged to standard error.

  Args:
      path: Input source file or directory.
      config: Resolved runtime configuration.
      json_mode: If True, print JSON to stdout and suppress progress logs.
      module_name: Module name override for a single input file.

  Returns:
      int: Exit code (0 on success, 1 if the path is missing or a file failed to parse).
  """
  if json_mode:
    with console_on_stderr():
      return _run(path, config, True, module_name)
  return _run(path, config, False, module_name)


def _run(path: Path, config: RuntimeConfig, json_mode: bool, module_name: Optional[str]) -> int:
  if not path.exists():
    log_error(f"Path not found: [path]{escape(str(path))}[/path]")
    return 1

  files = [path] if path.is_file() else sorted(path.rglob("*.py"))
  assembler = SignatureAssembler(baseline=config.baseline_scope())

  if not json_mode:
    log_info(f"Reconstructing signatures in {len(files)} file(s)...")

  exit_code = 0
  report: List[Dict[str, Any]] = []

  for f in files:
    name = module_name if (module_name and path.is_file()) else module_name_for(f, path)
    try:
      result = PythonFrontend(f.read_text("utf-8"), name, config).extract()
    except cst.ParserSyntaxError as e:
      log_error(f"Failed to parse [path]{escape(str(f))}[/path]: {escape(str(e))}")
      exit_code = 1
      continue

    for label, error in result.errors:
      log_warning(f"Skipped [code]{label}[/code] in {f.name}: {escape(str(error))}")

    signatures = []
    for descriptor in result.descriptors:
      try:
        signatures.append(assembler.assemble(descriptor))
      except SignatureError as e:
        log_warning(f"Skipped [code]{descriptor.name}[/code] in {f.name}: {escape(str(e))}")

    table = SignatureTable(str(f), signatures)
    if json_mode:
      report.append({"file": str(f), "module": name, "signatures": table.get_json()})
    elif signatures:
      table.render()

  if json_mode:
    print(json.dumps(report, indent=2))
  elif exit_code == 0:
    log_success(f"Processed {len(files)} file(s).")

  return exit_code
