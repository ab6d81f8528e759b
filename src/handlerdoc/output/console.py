"""Rich Console factory and theme for handlerdoc output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HANDLERDOC_THEME = Theme(
    {
        "hd.ok": "bold green",
        "hd.error": "bold red",
        "hd.op": "bold cyan",
        "hd.key": "dim",
        "hd.class": "bold blue",
        "hd.param": "green",
        "hd.return": "magenta",
        "hd.type.command": "yellow",
        "hd.type.query": "cyan",
    }
)

_TYPE_STYLES: dict[str, str] = {
    "command": "hd.type.command",
    "query": "hd.type.query",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=HANDLERDOC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(definition_type: str) -> str:
    """Return the Rich style name for a definition type."""
    return _TYPE_STYLES.get(definition_type, "")
