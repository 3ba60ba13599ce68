"""Unit tests for pomodoro_plants.utils.exit_codes."""

from __future__ import annotations

import pytest

from pomodoro_plants.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_STORAGE_UNAVAILABLE,
    SUCCESS,
    get_exit_code_description,
    get_exit_code_name,
)


def test_values():
    assert (SUCCESS, ERROR_GENERAL, ERROR_INVALID_ARGS, ERROR_STORAGE_UNAVAILABLE) == (
        0,
        1,
        2,
        7,
    )


@pytest.mark.parametrize(
    "code, name",
    [
        (SUCCESS, "SUCCESS"),
        (ERROR_GENERAL, "ERROR_GENERAL"),
        (ERROR_INVALID_ARGS, "ERROR_INVALID_ARGS"),
        (ERROR_STORAGE_UNAVAILABLE, "ERROR_STORAGE_UNAVAILABLE"),
    ],
)
def test_names(code, name):
    assert get_exit_code_name(code) == name


def test_unknown_code_name():
    assert get_exit_code_name(42) == "UNKNOWN(42)"


def test_descriptions():
    assert "storage" in get_exit_code_description(ERROR_STORAGE_UNAVAILABLE).lower()
    assert get_exit_code_description(99) == "Unknown error"
