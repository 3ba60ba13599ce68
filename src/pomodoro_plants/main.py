"""Main entry point for Pomodoro Plants."""

import typer

from pomodoro_plants import __version__
from pomodoro_plants.commands import config, garden
from pomodoro_plants.utils.logger import log_file_path
from pomodoro_plants.utils.typer_helpers import SuggestingGroup
from pomodoro_plants.utils.ui.console import get_console

app = typer.Typer(
    name="pomodoro-plants",
    cls=SuggestingGroup,
    help="Grow a pixel garden one focus session at a time",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config.app, name="config", help="Settings management")

app.command("run")(garden.run)
app.command("status")(garden.status)
app.command("start")(garden.start)
app.command("stop")(garden.stop)
app.command("reset")(garden.reset)
app.command("harvest")(garden.harvest)
app.command("skip-break")(garden.skip_break)
app.command("scene")(garden.scene)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomodoro Plants[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
