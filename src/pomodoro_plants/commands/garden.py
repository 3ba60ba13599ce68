"""Garden commands: grow, harvest and rest."""

import asyncio

import typer
from rich.live import Live

from pomodoro_plants.core.controller import FocusSessionController
from pomodoro_plants.core.notifications import (
    CallbackNotifier,
    ConsoleNotifier,
    Notifier,
)
from pomodoro_plants.core.scheduler import (
    AsyncioTickScheduler,
    ManualTickScheduler,
    TickScheduler,
)
from pomodoro_plants.models.commands import (
    Command,
    CycleNextBreakScene,
    FocusChanged,
    Harvest,
    OpenSettings,
    Reset,
    SelectNextBreakScene,
    SettingsChanged,
    SkipBreak,
    Start,
    Stop,
)
from pomodoro_plants.models.exceptions import AppError
from pomodoro_plants.models.garden import BreakScene
from pomodoro_plants.models.projection import Projection
from pomodoro_plants.services.config_service import get_config_service
from pomodoro_plants.services.state_store import SessionStateStore
from pomodoro_plants.ui.garden_view import GardenDisplay
from pomodoro_plants.ui.keyboard import FOCUS_IN_EVENT, FOCUS_OUT_EVENT, KeyboardHandler
from pomodoro_plants.utils.exit_codes import ERROR_INVALID_ARGS
from pomodoro_plants.utils.ui.console import get_console
from pomodoro_plants.utils.ui.formatters import format_info, format_output

from .decorators import command_wrapper

console = get_console()

_POLL_SECONDS = 0.1

KEY_COMMANDS: dict[str, Command] = {
    "s": Start(),
    "p": Stop(),
    "r": Reset(),
    "h": Harvest(),
    "b": SkipBreak(),
    "n": CycleNextBreakScene(),
    "o": OpenSettings(),
    FOCUS_IN_EVENT: FocusChanged(True),
    FOCUS_OUT_EVENT: FocusChanged(False),
}

ProfileOption = typer.Option("default", "--profile", help="Garden profile name")
OutputOption = typer.Option(
    "pretty", "--output", "-o", help="Output format: pretty, table, json, yaml"
)


def build_controller(
    profile: str = "default",
    scheduler: TickScheduler | None = None,
    notifier: Notifier | None = None,
) -> FocusSessionController:
    """Wire a controller for ``profile`` with the user's config and storage."""
    config = get_config_service()
    return FocusSessionController(
        store=SessionStateStore(profile),
        config=config,
        scheduler=scheduler or ManualTickScheduler(),
        notifier=notifier or ConsoleNotifier(console),
        on_open_settings=lambda: typer.launch(str(config.ensure_file())),
    )


def parse_scene(name: str) -> BreakScene:
    """Resolve a break scene from its name, label-ish spelling or index."""
    normalized = name.replace("-", "").replace("_", "").lower()
    for scene in BreakScene:
        if normalized in (scene.value.lower(), scene.name.replace("_", "").lower()):
            return scene
    if name.isdigit() and int(name) < len(BreakScene):
        return BreakScene.from_index(int(name))
    choices = ", ".join(scene.value for scene in BreakScene)
    raise AppError(
        f"Unknown break scene '{name}'. Choose one of: {choices}",
        exit_code=ERROR_INVALID_ARGS,
    )


def _report(controller: FocusSessionController, projection: Projection, output: str):
    format_output({"state": controller.status, **projection.to_dict()}, output)


def _run_command(profile: str, output: str, command: Command) -> None:
    controller = build_controller(profile)
    projection = controller.dispatch(command)
    _report(controller, projection, output)


@command_wrapper
def status(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """Show the garden: plant stage, time remaining, fruits and break."""
    controller = build_controller(profile)
    _report(controller, controller.projection(), output)


@command_wrapper
def start(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """Start growing a plant. Time only advances while 'run' is open."""
    controller = build_controller(profile)
    if controller.state.is_on_break:
        format_info("You're on a break. Use 'skip-break' to get back to work.")
    _report(controller, controller.dispatch(Start()), output)


@command_wrapper
def stop(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """Pause the current session, keeping its progress."""
    _run_command(profile, output, Stop())


@command_wrapper
def reset(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """Discard the current session's progress."""
    _run_command(profile, output, Reset())


@command_wrapper
def harvest(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """Harvest a fully grown plant and start a break."""
    controller = build_controller(profile)
    if not controller.projection().to_dict().get("can_harvest"):
        format_info("Nothing to harvest yet. Keep growing!")
    _report(controller, controller.dispatch(Harvest()), output)


@command_wrapper
def skip_break(profile: str = ProfileOption, output: str = OutputOption) -> None:
    """End the current break early."""
    _run_command(profile, output, SkipBreak())


@command_wrapper
def scene(
    name: str | None = typer.Argument(
        None, help="hayBale, lemonade, fishing or treeNap (cycles when omitted)"
    ),
    profile: str = ProfileOption,
    output: str = OutputOption,
) -> None:
    """Choose the break scene for the next harvest."""
    if name is None:
        _run_command(profile, output, CycleNextBreakScene())
    else:
        _run_command(profile, output, SelectNextBreakScene(parse_scene(name).index))


def command_for_event(event: str) -> Command | None:
    """Translate a key or focus event from the terminal into a command."""
    return KEY_COMMANDS.get(event)


@command_wrapper
async def run(profile: str = ProfileOption) -> None:
    """Open the live garden. Press 'q' to leave."""
    display = GardenDisplay()
    scheduler = AsyncioTickScheduler()
    controller = build_controller(
        profile,
        scheduler=scheduler,
        notifier=CallbackNotifier(display.flash, console),
    )
    config = controller.config
    fingerprint = config.fingerprint()

    live = Live(
        display.create_layout(controller.projection()),
        console=console,
        screen=True,
        auto_refresh=False,
    )

    def render(projection: Projection) -> None:
        live.update(display.create_layout(projection), refresh=True)

    controller.on_render = render
    keyboard = KeyboardHandler()
    try:
        with live:
            controller.resume()
            while True:
                for event in keyboard.get_events():
                    if event == "q":
                        return
                    command = command_for_event(event)
                    if command is not None:
                        controller.dispatch(command)

                if scheduler.error is not None:
                    raise scheduler.error

                current = config.fingerprint()
                if current != fingerprint:
                    fingerprint = current
                    controller.dispatch(SettingsChanged())

                await asyncio.sleep(_POLL_SECONDS)
    finally:
        controller.shutdown()
        keyboard.stop()
