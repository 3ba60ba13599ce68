"""Render projections handed to the garden view after every change."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .garden import GardenState, growth_stage, session_progress
from .settings import Settings


def format_mmss(seconds: int) -> str:
    """Format a number of seconds as zero-padded MM:SS."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass(frozen=True)
class BreakProjection:
    """What the view shows while the farmer is on a break."""

    break_scene: str
    break_time_remaining: str
    fruits_collected: int
    completed_sessions: int
    is_on_break: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WorkProjection:
    """What the view shows while a plant is growing."""

    stage: str
    progress: float
    time_remaining: str
    is_running: bool
    is_focused: bool
    fruits_collected: int
    can_harvest: bool
    duration_minutes: int
    next_break_scene: str
    is_on_break: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


Projection = BreakProjection | WorkProjection


def build_projection(
    state: GardenState, settings: Settings, focused: bool
) -> Projection:
    """Project the garden state onto the shape the view draws."""
    if state.is_on_break:
        return BreakProjection(
            break_scene=state.current_scene.value,
            break_time_remaining=format_mmss(state.break_seconds_remaining),
            fruits_collected=state.fruits_collected,
            completed_sessions=state.completed_sessions,
        )

    duration = settings.duration_seconds
    progress = session_progress(state.current_session_seconds, duration)
    return WorkProjection(
        stage=growth_stage(progress).value,
        progress=progress,
        time_remaining=format_mmss(duration - state.current_session_seconds),
        is_running=state.is_timer_running,
        is_focused=focused,
        fruits_collected=state.fruits_collected,
        can_harvest=state.current_session_seconds >= duration,
        duration_minutes=settings.pomodoro_duration,
        next_break_scene=state.next_scene.value,
    )
