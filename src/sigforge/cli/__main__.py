"""
Main Entry Point for the sigforge CLI.

This module handles argument parsing and dispatches to the command handlers in
``sigforge.cli.handlers``.
"""

import argparse
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.markup import escape

from sigforge import __version__
from sigforge.cli.handlers import handle_signatures
from sigforge.config import RuntimeConfig, tomllib
from sigforge.utils.console import console_on_stderr, log_error


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="sigforge: Generic Signature Reconstruction")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: SIGNATURES ---
  cmd_sig = subparsers.add_parser("signatures", help="Reconstruct the signatures defined in Python source")
  cmd_sig.add_argument("path", type=Path, help="Input source file or directory")
  cmd_sig.add_argument("--json", action="store_true", help="Print JSON instead of tables")
  cmd_sig.add_argument("--module", default=None, help="Module name of a single input file (default: file stem)")
  cmd_sig.add_argument(
    "--baseline",
    nargs="+",
    default=None,
    help="Modules visible without qualification (default: from toml, else Core builtins)",
  )
  cmd_sig.add_argument(
    "--private",
    action="store_true",
    default=None,
    help="Also report callables whose name starts with an underscore",
  )

  args = parser.parse_args(argv)

  if args.command == "signatures":
    try:
      config = RuntimeConfig.load(
        baseline_modules=args.baseline,
        include_private=args.private,
        search_path=args.path.parent if args.path.is_file() else args.path,
      )
    except (ValidationError, tomllib.TOMLDecodeError) as e:
      with console_on_stderr() if args.json else nullcontext():
        log_error(f"Invalid configuration: {escape(str(e))}")
      return 1
    return handle_signatures(args.path, config, json_mode=args.json, module_name=args.module)

  return 0


if __name__ == "__main__":
  sys.exit(main())
