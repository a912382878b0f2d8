"""Rich Console factory and theme for profnet output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NET_THEME = Theme(
    {
        "net.ok": "bold green",
        "net.error": "bold red",
        "net.op": "bold cyan",
        "net.key": "dim",
        "net.id": "bold blue",
        "net.account": "bold",
        "net.status.requested": "yellow",
        "net.status.accepted": "green",
        "net.status.rejected": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=NET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str | None) -> str:
    """Return the Rich style name for a connection status."""
    if not status:
        return ""
    return f"net.status.{status}"
