"""
Exit codes for Pomodoro Plants.

Semantic exit codes so scripts wrapping the CLI can tell failures apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# The garden state could not be read from or written to disk
ERROR_STORAGE_UNAVAILABLE = 7


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_STORAGE_UNAVAILABLE: "ERROR_STORAGE_UNAVAILABLE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_STORAGE_UNAVAILABLE: "Garden state storage is unavailable",
    }
    return descriptions.get(code, "Unknown error")
