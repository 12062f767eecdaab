"""Rich-based logging helpers shared across CLI tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

LIBRARY_LOGGER_NAME = "ledger_cli"

_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "debug": "dim",
    }
)

# Rich consoles separate stdout (for structured payloads) and stderr (for log chatter).
# Highlighting stays off so account numbers and amounts are printed without ANSI noise.
_stdout_console = Console(theme=_THEME, highlight=False)
_stderr_console = Console(stderr=True, theme=_THEME, highlight=False)
_verbose_console = Console(stderr=True, theme=_THEME, highlight=False)


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by Rich consoles."""

    verbose: bool = False

    @property
    def console(self) -> Console:
        return _stdout_console

    def info(self, message: str) -> None:
        _stderr_console.print(message, style="info", markup=False)

    def success(self, message: str) -> None:
        _stderr_console.print(message, style="success", markup=False)

    def warning(self, message: str) -> None:
        _stderr_console.print(message, style="warning", markup=False)

    def error(self, message: str) -> None:
        _stderr_console.print(message, style="error", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            _verbose_console.print(message, style="debug", markup=False)


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)


def configure_library_logging(verbose: bool = False) -> logging.Logger:
    """Route ``logging`` records from decoder modules to stderr via Rich.

    Decoder diagnostics (cross-validation mismatches, skipped sub-tags) are
    emitted through the standard ``logging`` module so library callers can
    capture them; the CLI attaches a single RichHandler to surface them.
    """

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    library_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(library_logger.handlers):
        if isinstance(handler, RichHandler):
            library_logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True, theme=_THEME, highlight=False),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    library_logger.addHandler(handler)
    return library_logger
