"""Focus session state machine.

The controller owns the garden state for one profile. Every command and
every tick follows the same shape: check eligibility, mutate, persist,
project. Ineligible commands leave the state untouched and simply return
the current projection.

States are derived from the garden record:

* Idle            - not running, not on break
* Running         - ``is_timer_running``
* ReadyToHarvest  - elapsed seconds have reached the session duration
* OnBreak         - ``is_on_break``
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Literal

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
from pomodoro_plants.models.garden import (
    BREAK_SCENE_COUNT,
    GardenState,
    random_scene_index,
)
from pomodoro_plants.models.projection import Projection, build_projection
from pomodoro_plants.models.settings import Settings
from pomodoro_plants.services.config_service import ConfigService
from pomodoro_plants.services.state_store import SessionStateStore
from pomodoro_plants.utils.logger import get_logger

from .notifications import Notification, Notifier, notification_message
from .scheduler import TickScheduler

TickKind = Literal["work", "break"]


class FocusSessionController:
    """Drives work sessions, harvests and breaks for one garden."""

    def __init__(
        self,
        store: SessionStateStore,
        config: ConfigService,
        scheduler: TickScheduler,
        notifier: Notifier,
        rng: random.Random | None = None,
        on_render: Callable[[Projection], None] | None = None,
        on_open_settings: Callable[[], None] | None = None,
        focused: bool = True,
    ):
        self.store = store
        self.config = config
        self.scheduler = scheduler
        self.notifier = notifier
        self.on_render = on_render
        self.on_open_settings = on_open_settings
        self._rng = rng or random.Random()
        self._logger = get_logger("controller")
        self._focused = focused
        self.state: GardenState = store.load()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def status(self) -> str:
        """Name of the current state-machine state."""
        if self.state.is_on_break:
            return "OnBreak"
        if self.state.current_session_seconds >= self._settings().duration_seconds:
            return "ReadyToHarvest"
        if self.state.is_timer_running:
            return "Running"
        return "Idle"

    def projection(self) -> Projection:
        """The current projection, without notifying the renderer."""
        return build_projection(self.state, self._settings(), self._focused)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> Projection:
        """Run one command and return the resulting projection."""
        if isinstance(command, Start):
            return self.start()
        if isinstance(command, Stop):
            return self.stop()
        if isinstance(command, Reset):
            return self.reset()
        if isinstance(command, Harvest):
            return self.harvest()
        if isinstance(command, SkipBreak):
            return self.skip_break()
        if isinstance(command, SelectNextBreakScene):
            return self.select_next_break_scene(command.index)
        if isinstance(command, CycleNextBreakScene):
            return self.cycle_next_break_scene()
        if isinstance(command, OpenSettings):
            return self.open_settings()
        if isinstance(command, FocusChanged):
            return self.on_focus_changed(command.focused)
        if isinstance(command, SettingsChanged):
            return self.on_settings_changed()
        raise TypeError(f"Unknown command: {command!r}")

    def start(self) -> Projection:
        """Start (or continue) growing the current plant."""
        if self.state.is_timer_running or self.state.is_on_break:
            self._logger.debug("start ignored in state %s", self.status)
            return self._render()

        self.state.is_timer_running = True
        # Pick the reward now so the view can preview it during the session.
        self.state.next_break_scene = random_scene_index(self._rng)
        if self._focused:
            self._arm("work")
        self._logger.info(
            "session started at %ds, next scene %s",
            self.state.current_session_seconds,
            self.state.next_scene.value,
        )
        return self._commit()

    def stop(self) -> Projection:
        """Pause ticking, keeping elapsed time. A break countdown freezes too."""
        self.state.is_timer_running = False
        self._disarm()
        self._logger.info("session stopped at %ds", self.state.current_session_seconds)
        return self._commit()

    def reset(self) -> Projection:
        """Dig up the current plant and start from bare soil.

        Break fields are left alone, but ticking stops in any state.
        """
        self.state.current_session_seconds = 0
        self.state.is_timer_running = False
        self._disarm()
        self._logger.info("session reset")
        return self._commit()

    def harvest(self) -> Projection:
        """Collect the fruit of a completed session and start a break."""
        settings = self._settings()
        if self.state.current_session_seconds < settings.duration_seconds:
            self._logger.debug(
                "harvest ignored at %ds of %ds",
                self.state.current_session_seconds,
                settings.duration_seconds,
            )
            return self._render()

        self._disarm()
        self.state.fruits_collected += 1
        self.state.completed_sessions += 1
        self.state.current_session_seconds = 0
        self.state.is_timer_running = False

        long_break = (
            self.state.completed_sessions % settings.sessions_before_long_break == 0
        )
        self.state.is_on_break = True
        self.state.break_seconds_remaining = settings.break_seconds(long_break)
        self.state.current_break_scene = self.state.next_break_scene

        self._logger.info(
            "harvested fruit #%d (session %d), %s break of %ds in scene %s",
            self.state.fruits_collected,
            self.state.completed_sessions,
            "long" if long_break else "short",
            self.state.break_seconds_remaining,
            self.state.current_scene.value,
        )
        projection = self._commit()
        self._arm("break")
        self._notify(settings, Notification.BREAK_STARTED, long_break=long_break)
        return projection

    def skip_break(self) -> Projection:
        """End the break now. Unused break time is dropped."""
        self.state.is_on_break = False
        self.state.break_seconds_remaining = 0
        self._disarm()
        self._logger.info("break skipped")
        return self._commit()

    def select_next_break_scene(self, index: int) -> Projection:
        """Choose the scene applied at the next harvest."""
        if not 0 <= index < BREAK_SCENE_COUNT:
            self._logger.debug("scene index %r out of range", index)
            return self._render()

        self.state.next_break_scene = index
        return self._commit()

    def cycle_next_break_scene(self) -> Projection:
        """Advance the pending scene to the next one, wrapping around."""
        return self.select_next_break_scene(
            (self.state.next_break_scene + 1) % BREAK_SCENE_COUNT
        )

    def open_settings(self) -> Projection:
        if self.on_open_settings is not None:
            self.on_open_settings()
        return self._render()

    def on_focus_changed(self, focused: bool) -> Projection:
        """Pause ticking while unfocused; optionally auto-start on focus."""
        self._focused = focused

        if self.state.is_timer_running:
            if focused:
                self._arm("work")
            else:
                self._disarm()
            self._logger.debug("focus %s while running", "gained" if focused else "lost")
            return self._render()

        settings = self._settings()
        if (
            focused
            and settings.auto_start_on_focus
            and not self.state.is_on_break
            and self.state.current_session_seconds < settings.duration_seconds
        ):
            return self.start()
        return self._render()

    def on_settings_changed(self) -> Projection:
        return self._render()

    def resume(self) -> Projection:
        """Re-arm ticking for a garden loaded from disk.

        Called once when a live view attaches. A running session only ticks
        while focused; a break always counts down.
        """
        if self.state.is_on_break:
            self._arm("break")
        elif self.state.is_timer_running and self._focused:
            self._arm("work")
        return self._render()

    def shutdown(self) -> None:
        """Stop ticking without touching the persisted state."""
        self._disarm()

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def tick(self) -> Projection:
        """Advance whichever countdown is active by one second."""
        if self.state.is_on_break:
            return self._break_tick()
        return self._work_tick()

    def _work_tick(self) -> Projection:
        settings = self._settings()
        if self.state.current_session_seconds < settings.duration_seconds:
            self.state.current_session_seconds += 1
            return self._commit()

        self._disarm()
        self.state.is_timer_running = False
        self._logger.info("plant ready after %ds", self.state.current_session_seconds)
        projection = self._commit()
        self._notify(settings, Notification.SESSION_READY)
        return projection

    def _break_tick(self) -> Projection:
        if self.state.break_seconds_remaining > 0:
            self.state.break_seconds_remaining -= 1
            return self._commit()

        self._disarm()
        self.state.is_on_break = False
        self._logger.info("break over")
        projection = self._commit()
        self._notify(self._settings(), Notification.BREAK_OVER)
        return projection

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _settings(self) -> Settings:
        return self.config.settings()

    def _arm(self, kind: TickKind) -> None:
        self.scheduler.arm(self._work_tick if kind == "work" else self._break_tick)

    def _disarm(self) -> None:
        self.scheduler.disarm()

    def _commit(self) -> Projection:
        self.store.save(self.state)
        return self._render()

    def _render(self) -> Projection:
        projection = self.projection()
        if self.on_render is not None:
            self.on_render(projection)
        return projection

    def _notify(
        self, settings: Settings, event: Notification, long_break: bool = False
    ) -> None:
        if not settings.show_notifications:
            return
        self.notifier.notify(event, notification_message(event, long_break))
        # The notifier may have changed what the view shows.
        self._render()
