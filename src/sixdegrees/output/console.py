"""Rich Console factory and theme for sixdegrees output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

import sys
from io import StringIO

from rich.console import Console
from rich.theme import Theme

SIX_THEME = Theme(
    {
        "six.ok": "bold green",
        "six.error": "bold red",
        "six.warning": "bold yellow",
        "six.op": "bold cyan",
        "six.key": "dim",
        "six.id": "bold blue",
        "six.person": "bold",
        "six.work": "italic magenta",
        "six.degree": "bold yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SIX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def create_progress_console() -> Console:
    """Console bound to stderr for live progress bars."""
    return Console(file=sys.stderr, theme=SIX_THEME, highlight=False)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
