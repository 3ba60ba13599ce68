"""Focus session core: controller, scheduler and notifications."""

from .controller import FocusSessionController
from .notifications import Notification, Notifier
from .scheduler import AsyncioTickScheduler, ManualTickScheduler, TickScheduler

__all__ = [
    "FocusSessionController",
    "Notification",
    "Notifier",
    "AsyncioTickScheduler",
    "ManualTickScheduler",
    "TickScheduler",
]
