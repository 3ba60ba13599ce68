"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from .ui.console import get_console


def suggest_commands(attempted: str, available: list[str], limit: int = 3) -> list[str]:
    """Command names close to ``attempted``.

    Underscores are read as dashes first, so ``skip_break`` finds
    ``skip-break`` even though difflib would rank it low.
    """
    dashed = attempted.replace("_", "-")
    if dashed != attempted and dashed in available:
        return [dashed]
    return get_close_matches(dashed, available, n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that prints "Did you mean ...?" on unknown commands."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            suggestions = suggest_commands(args[0], sorted(self.commands))
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.info_name}"'
            )
            console.print()
            heading = "Did you mean this?" if len(suggestions) == 1 else "Did you mean one of these?"
            console.print(f"[yellow]{heading}[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
