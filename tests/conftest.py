"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real settings, garden state
and log files.
"""

from __future__ import annotations

import logging
import random
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from pomodoro_plants.core.controller import FocusSessionController
from pomodoro_plants.core.scheduler import ManualTickScheduler
from pomodoro_plants.services.config_service import ConfigService
from pomodoro_plants.services.state_store import SessionStateStore

TODAY = date(2026, 3, 14)


class FakeClock:
    """Calendar clock whose date tests can move forward."""

    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log output to a temporary directory for every test."""
    import pomodoro_plants.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomodoro_plants").handlers.clear()
    with patch("pomodoro_plants.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logging.getLogger("pomodoro_plants").handlers.clear()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs lookups at *tmp_path* and clear the cached service."""
    from pomodoro_plants.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "pomodoro_plants.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "pomodoro_plants.services.state_store.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            yield tmp_path
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Garden fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def config_service(tmp_path) -> ConfigService:
    """ConfigService backed by a temporary directory."""
    return ConfigService(tmp_path / "config")


@pytest.fixture()
def store(tmp_path, clock) -> SessionStateStore:
    """SessionStateStore with a fixed clock and seeded randomness."""
    return SessionStateStore(
        "test", data_dir=tmp_path / "data", today=clock, rng=random.Random(7)
    )


@pytest.fixture()
def scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture()
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def controller(store, config_service, scheduler, notifier) -> FocusSessionController:
    """Controller wired to temporary storage and a pulse-driven scheduler."""
    return FocusSessionController(
        store=store,
        config=config_service,
        scheduler=scheduler,
        notifier=notifier,
        rng=random.Random(42),
    )
