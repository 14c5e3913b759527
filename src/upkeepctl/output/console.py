"""Rich Console factory and theme for upkeepctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``str`` contract. Outside a terminal (tests, pipes) Rich drops color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

UPKEEP_THEME = Theme(
    {
        "upkeep.ok": "bold green",
        "upkeep.error": "bold red",
        "upkeep.warning": "bold yellow",
        "upkeep.op": "bold cyan",
        "upkeep.key": "dim",
        "upkeep.path": "dim",
        "upkeep.title": "bold",
        "upkeep.overdue": "bold red",
        "upkeep.due_today": "bold dark_orange",
        "upkeep.due_soon": "yellow",
        "upkeep.up_to_date": "green",
        "upkeep.progress.overdue": "red",
        "upkeep.progress.due_soon": "yellow",
        "upkeep.progress.up_to_date": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width for stable output.
    """
    return Console(
        file=StringIO(),
        theme=UPKEEP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
