"""
Console and Logging Utilities.

Routes the CLI's user-facing messages through the standard ``logging`` library,
formatted by ``rich``. The active Rich console sits behind a proxy so that the
destination (stdout, a file, an in-memory buffer in tests) can be swapped at
runtime with :func:`set_console` while modules keep importing the same
``console`` object.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards printing to a swappable ``rich.console.Console``.

  Swapping the backend also re-points the root logger's ``RichHandler`` so that
  ``logging`` output follows the console.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Installs a new backend console.

    Args:
        new_console (Console): The Rich Console to write to.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Returns to a fresh stdout console."""
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """The active Rich Console."""
    return self._backend

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards ``print`` to the backend."""
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console printing and log records to ``new_console``.

  Args:
      new_console (Console): e.g. ``Console(file=io.StringIO())`` to capture output.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores console and logging to standard output."""
  console.reset()


def get_console() -> Console:
  """Returns the active Rich Console."""
  return console.backend


@contextmanager
def console_on_stderr() -> Iterator[Console]:
  """
  Sends console output and log records to standard error for the duration of the block.

  Used when standard output is reserved for machine-readable data. The previous
  backend is restored on exit.

  Yields:
      Console: The temporary stderr console.
  """
  previous = console.backend
  err_console = Console(stderr=True, theme=_THEME)
  console.set_backend(err_console)
  try:
    yield err_console
  finally:
    console.set_backend(previous)


def log_info(msg: str) -> None:
  """Logs an informational message (may contain rich markup)."""
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message."""
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message."""
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message."""
  logging.error(f"❌ {msg}", extra={"markup": True})
