"""Custom exceptions for Pomodoro Plants."""

from pomodoro_plants.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_STORAGE_UNAVAILABLE,
)


class AppError(Exception):
    """Application error carrying the exit code the CLI should use."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


class StorageUnavailableError(AppError):
    """Raised when the garden state cannot be read from or written to disk."""

    def __init__(self, message: str):
        super().__init__(message, exit_code=ERROR_STORAGE_UNAVAILABLE)


class InvalidSettingError(AppError):
    """Raised when a setting name or value is rejected."""

    def __init__(self, message: str):
        super().__init__(message, exit_code=ERROR_INVALID_ARGS)
