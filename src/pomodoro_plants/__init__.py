"""Pomodoro Plants - grow a garden one focus session at a time."""

__version__ = "0.3.0"
