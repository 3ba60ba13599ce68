"""Settings management commands."""

import typer

from pomodoro_plants.models.exceptions import InvalidSettingError
from pomodoro_plants.models.settings import SETTING_NAMES
from pomodoro_plants.services.config_service import get_config_service
from pomodoro_plants.utils.typer_helpers import SuggestingGroup
from pomodoro_plants.utils.ui.console import get_console
from pomodoro_plants.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Settings management commands")
console = get_console()


@app.command("list")
@command_wrapper
def list_settings(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show every setting with its effective value."""
    format_output(get_config_service().list(), output)


@app.command("get")
@command_wrapper
def get_setting(
    name: str = typer.Argument(..., help=f"One of: {', '.join(SETTING_NAMES)}"),
) -> None:
    """Get a setting value."""
    service = get_config_service()
    if name not in SETTING_NAMES:
        raise InvalidSettingError(f"Unknown setting '{name}'")
    console.print(service.get(name))


@app.command("set")
@command_wrapper
def set_setting(
    name: str = typer.Argument(..., help=f"One of: {', '.join(SETTING_NAMES)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a setting value."""
    stored = get_config_service().set(name, value)
    format_success(f"Set {name} = {stored}")


@app.command("reset")
@command_wrapper
def reset_settings(
    name: str | None = typer.Argument(None, help="Setting to reset (all if omitted)"),
) -> None:
    """Reset one setting, or all settings, to defaults."""
    get_config_service().reset(name)
    format_success(f"Reset {name or 'all settings'} to default")


@app.command("open")
@command_wrapper
def open_settings() -> None:
    """Open the settings file in the default editor."""
    path = get_config_service().ensure_file()
    console.print(f"[dim]{path}[/dim]")
    typer.launch(str(path))
