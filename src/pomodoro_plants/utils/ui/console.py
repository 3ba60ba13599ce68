"""Shared Rich console and the garden's colour theme."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

GARDEN_THEME = Theme(
    {
        "garden.plant": "green",
        "garden.scene": "yellow",
        "garden.timer": "bold cyan",
        "garden.paused": "bold yellow",
        "garden.break": "bold magenta",
        "garden.ready": "bold green",
        "garden.hint": "dim",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get the Rich Console every command prints through."""
    return Console(theme=GARDEN_THEME, highlight=highlight)
