"""Rich console wrapper for styled guard output.

This module provides typed console functions for the guard runner.
All terminal output in the package should use these functions instead of print.
"""

from __future__ import annotations

from typing import Protocol


class _RichConsole(Protocol):
    """Protocol for rich.console.Console interface."""

    def print(
        self,
        *objects: str,
        style: str | None = None,
        highlight: bool = True,
        markup: bool | None = None,
        soft_wrap: bool | None = None,
    ) -> None:
        """Print styled output to console."""
        ...


def _get_console(*, stderr: bool) -> _RichConsole:
    """Get rich Console instance with strict typing."""
    rich_console_mod = __import__("rich.console", fromlist=["Console"])
    console_cls = rich_console_mod.Console
    console: _RichConsole = console_cls(stderr=stderr)
    return console


# Module-level console instances
_console: _RichConsole = _get_console(stderr=False)
_err_console: _RichConsole = _get_console(stderr=True)


# =============================================================================
# Style Constants
# =============================================================================

STYLE_HEADER = "bold cyan"
STYLE_VALUE = "green"
STYLE_RULE = "yellow"
STYLE_ERROR = "bold red"
STYLE_SUCCESS = "bold green"
STYLE_INFO = "cyan"


# =============================================================================
# Output Functions
# =============================================================================


def log_header(text: str) -> None:
    """Print a section header."""
    _console.print(text, style=STYLE_HEADER, markup=False, soft_wrap=True)


def log_config(label: str, value: str | int) -> None:
    """Print a configuration key-value pair."""
    _console.print(f"  {label}: {value}", style=STYLE_VALUE, markup=False, soft_wrap=True)


def log_info(text: str) -> None:
    """Print an informational message."""
    _console.print(text, style=STYLE_INFO, markup=False, soft_wrap=True)


def log_rule_summary(name: str, violations: int) -> None:
    """Print the violation count of one rule."""
    _console.print(
        f"  [{STYLE_RULE}]{name}[/{STYLE_RULE}]: {violations} violations",
        highlight=False,
        soft_wrap=True,
    )


def log_passed(text: str) -> None:
    """Print the success line."""
    _console.print(text, style=STYLE_SUCCESS, markup=False, soft_wrap=True)


def log_failed(text: str) -> None:
    """Print the failure header to stderr."""
    _err_console.print(text, style=STYLE_ERROR, markup=False, soft_wrap=True)


def log_violation(location: str, kind: str, text: str) -> None:
    """Print one violation to stderr; location and text are printed verbatim."""
    _err_console.print(
        f"  {location}: {kind} {text}", markup=False, highlight=False, soft_wrap=True
    )


def log_error(text: str) -> None:
    """Print an error message to stderr."""
    _err_console.print(text, style=STYLE_ERROR, markup=False, soft_wrap=True)


__all__ = [
    "log_config",
    "log_error",
    "log_failed",
    "log_header",
    "log_info",
    "log_passed",
    "log_rule_summary",
    "log_violation",
]
