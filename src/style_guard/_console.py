"""Rich console wrapper for styled terminal output.

This module provides typed console functions for guard output.
All print statements in the codebase should use these functions instead.
"""

from __future__ import annotations

from typing import Protocol


class _RichConsole(Protocol):
    """Protocol for rich.console.Console interface."""

    def print(
        self,
        *objects: str,
        style: str | None = None,
        markup: bool | None = None,
        highlight: bool | None = None,
        soft_wrap: bool | None = None,
    ) -> None:
        """Print styled output to console."""
        ...


def _get_console(stderr: bool = False) -> _RichConsole:
    """Get rich Console instance with strict typing."""
    rich_console_mod = __import__("rich.console", fromlist=["Console"])
    console_cls = rich_console_mod.Console
    console: _RichConsole = console_cls(stderr=stderr)
    return console


# Module-level console instances
_console: _RichConsole = _get_console()
_err_console: _RichConsole = _get_console(stderr=True)


# =============================================================================
# Style Constants
# =============================================================================

STYLE_HEADER = "bold cyan"
STYLE_COUNT = "yellow"
STYLE_ERROR = "bold red"
STYLE_SUCCESS = "bold green"
STYLE_INFO = "cyan"


# =============================================================================
# Output Functions
# =============================================================================


def log_header(text: str) -> None:
    """Print a section header."""
    _console.print(text, style=STYLE_HEADER)


def log_info(text: str) -> None:
    """Print an informational message."""
    _console.print(text, style=STYLE_INFO)


def log_violation(location: str, kind: str, text: str) -> None:
    """Print one violation as ``location: kind text``.

    The offending text is printed verbatim; source lines often contain
    ``[`` which rich would otherwise read as markup.
    """
    _console.print(f"{location}: {kind} {text}", markup=False, highlight=False, soft_wrap=True)


def log_report(name: str, violations: int) -> None:
    """Print a per-group violation count."""
    style = STYLE_COUNT if violations else STYLE_SUCCESS
    _console.print(f"  {name}: [{style}]{violations} violations[/{style}]")


def log_rule(rule_id: str, target: str, convention: str) -> None:
    """Print one registry entry."""
    _console.print(
        f"{rule_id}  {target}  {convention}", markup=False, highlight=False, soft_wrap=True
    )


def log_passed(text: str) -> None:
    """Print a success message."""
    _console.print(f"[{STYLE_SUCCESS}]{text}[/{STYLE_SUCCESS}]")


def log_failed(text: str) -> None:
    """Print a failure summary line."""
    _console.print(f"[{STYLE_ERROR}]{text}[/{STYLE_ERROR}]")


def log_error(text: str) -> None:
    """Print an error message to stderr."""
    _err_console.print(f"ERROR: {text}", style=STYLE_ERROR, markup=False, soft_wrap=True)


__all__ = [
    "log_error",
    "log_failed",
    "log_header",
    "log_info",
    "log_passed",
    "log_report",
    "log_rule",
    "log_violation",
]
