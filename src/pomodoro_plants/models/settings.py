"""Settings schema for the garden timer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """User settings. Every field has the default used when a value is unusable."""

    model_config = {"extra": "ignore"}

    pomodoro_duration: int = Field(
        default=20, ge=1, description="Focus session length in minutes"
    )
    short_break_duration: int = Field(
        default=5, ge=1, description="Short break length in minutes"
    )
    long_break_duration: int = Field(
        default=15, ge=1, description="Long break length in minutes"
    )
    sessions_before_long_break: int = Field(
        default=4, ge=1, description="Completed sessions between long breaks"
    )
    auto_start_on_focus: bool = Field(
        default=False, description="Start a session when the terminal regains focus"
    )
    show_notifications: bool = Field(
        default=True, description="Announce ready plants and break changes"
    )

    @property
    def duration_seconds(self) -> int:
        return self.pomodoro_duration * 60

    def break_seconds(self, long_break: bool) -> int:
        minutes = self.long_break_duration if long_break else self.short_break_duration
        return minutes * 60


SETTING_NAMES = tuple(Settings.model_fields)
