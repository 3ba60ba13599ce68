"""Fire-and-forget notifications raised by the focus session controller."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.panel import Panel

from pomodoro_plants.utils.ui.console import get_console


class Notification(str, Enum):
    SESSION_READY = "session_ready"
    BREAK_STARTED = "break_started"
    BREAK_OVER = "break_over"


def notification_message(event: Notification, long_break: bool = False) -> str:
    """The text shown to the user for a notification."""
    if event is Notification.SESSION_READY:
        return "Your plant is ready! Harvest your fruit!"
    if event is Notification.BREAK_STARTED:
        kind = "long" if long_break else "short"
        return f"Fruit harvested! Enjoy your {kind} break, farmer!"
    return "Break over! Ready to grow another plant?"


class Notifier(Protocol):
    def notify(self, event: Notification, message: str) -> None: ...


class ConsoleNotifier:
    """Prints notifications as panels and rings the terminal bell."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def notify(self, event: Notification, message: str) -> None:
        self.console.bell()
        self.console.print(Panel(message, border_style="garden.ready", padding=(0, 2)))


class CallbackNotifier:
    """Forwards the message to a callable, e.g. the live view's footer."""

    def __init__(self, callback: Callable[[str], None], console: Console | None = None):
        self.callback = callback
        self.console = console

    def notify(self, event: Notification, message: str) -> None:
        if self.console is not None:
            self.console.bell()
        self.callback(message)
