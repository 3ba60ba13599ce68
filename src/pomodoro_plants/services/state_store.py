"""Garden state persistence with schema back-fill and the daily reset."""

from __future__ import annotations

import json
import os
import random
from collections.abc import Callable
from datetime import date
from json import JSONDecodeError
from pathlib import Path

from platformdirs import user_data_dir

from pomodoro_plants.models.exceptions import StorageUnavailableError
from pomodoro_plants.models.garden import SCHEMA_VERSION, GardenState, backfill
from pomodoro_plants.utils.logger import get_logger

_APP_NAME = "pomodoro_plants"
RECORD_KEY = "garden_state"


class SessionStateStore:
    """Loads and saves the garden record of one profile.

    The store file is a small key-value document; the garden lives under
    ``garden_state`` and is always read and written as a whole.
    """

    def __init__(
        self,
        profile: str = "default",
        data_dir: Path | None = None,
        today: Callable[[], date] = date.today,
        rng: random.Random | None = None,
    ):
        if data_dir is None:
            data_dir = Path(user_data_dir(_APP_NAME))

        self.profile = profile
        self.data_dir = data_dir
        self.state_file = self.data_dir / f"{profile}.state.json"
        self._today = today
        self._rng = rng or random.Random()

    def load(self) -> GardenState:
        """Load the garden, creating or repairing it as needed."""
        logger = get_logger("store")
        raw = self._read_record()
        today = self._today()

        if raw is None:
            logger.info("no garden for profile %s, planting a new one", self.profile)
            state = GardenState.fresh(today, self._rng)
            self.save(state)
            return state

        state = backfill(raw, today, self._rng)
        if self.check_daily_reset(state):
            self.save(state)
        return state

    def check_daily_reset(self, state: GardenState) -> bool:
        """Zero the per-day counters if the calendar date moved on.

        Returns True when the state was changed.
        """
        today = self._today()
        if state.last_reset_date == today:
            return False

        get_logger("store").info(
            "daily reset for profile %s (%s -> %s)",
            self.profile,
            state.last_reset_date.isoformat(),
            today.isoformat(),
        )
        state.fruits_collected = 0
        state.last_reset_date = today
        state.current_session_seconds = 0
        state.is_timer_running = False
        return True

    def save(self, state: GardenState) -> None:
        """Persist the full garden record.

        Raises:
            StorageUnavailableError: If the file cannot be written
        """
        document = {"schema_version": SCHEMA_VERSION, RECORD_KEY: state.to_dict()}
        tmp_file = self.state_file.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_file, self.state_file)
        except OSError as e:
            get_logger("store").error("failed to save garden state: %s", e)
            raise StorageUnavailableError(
                f"Cannot save garden state to {self.state_file}: {e}"
            ) from e

    def _read_record(self) -> dict | None:
        try:
            with open(self.state_file, encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return None
        except (JSONDecodeError, UnicodeDecodeError) as e:
            get_logger("store").warning("garden state file is corrupt, starting over: %s", e)
            return None
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot read garden state from {self.state_file}: {e}"
            ) from e

        if not isinstance(document, dict):
            get_logger("store").warning("garden state file has no records, starting over")
            return None
        record = document.get(RECORD_KEY)
        return record if isinstance(record, dict) else None
