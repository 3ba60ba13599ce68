"""Unit tests for pomodoro_plants.services.state_store.

Every test runs against a store rooted in *tmp_path* with a fixed clock
(see conftest), so the daily reset can be triggered by moving the clock.
"""

from __future__ import annotations

import json
import random
from datetime import date
from unittest.mock import patch

import pytest

from pomodoro_plants.models.exceptions import StorageUnavailableError
from pomodoro_plants.models.garden import SCHEMA_VERSION, GardenState
from pomodoro_plants.services.state_store import RECORD_KEY, SessionStateStore

TODAY = date(2026, 3, 14)


def _write_record(store: SessionStateStore, record) -> None:
    store.data_dir.mkdir(parents=True, exist_ok=True)
    store.state_file.write_text(
        json.dumps({"schema_version": 1, RECORD_KEY: record}), encoding="utf-8"
    )


def _read_record(store: SessionStateStore) -> dict:
    return json.loads(store.state_file.read_text(encoding="utf-8"))[RECORD_KEY]


class TestLoad:
    def test_first_load_plants_a_fresh_garden(self, store):
        state = store.load()

        assert state.fruits_collected == 0
        assert state.last_reset_date == TODAY
        assert state.current_session_seconds == 0
        assert state.completed_sessions == 0
        assert 0 <= state.next_break_scene < 4
        assert store.state_file.exists()

    def test_fresh_next_scene_uses_injected_rng(self, tmp_path, clock):
        expected = random.Random(99).randrange(4)
        store = SessionStateStore(
            "p", data_dir=tmp_path, today=clock, rng=random.Random(99)
        )
        assert store.load().next_break_scene == expected

    def test_round_trip(self, store):
        state = GardenState(
            fruits_collected=3,
            last_reset_date=TODAY,
            current_session_seconds=611,
            is_timer_running=True,
            completed_sessions=17,
            next_break_scene=2,
        )
        store.save(state)
        assert store.load() == state

    def test_save_writes_schema_version(self, store):
        store.save(GardenState(last_reset_date=TODAY))
        document = json.loads(store.state_file.read_text(encoding="utf-8"))
        assert document["schema_version"] == SCHEMA_VERSION

    def test_partial_record_is_backfilled(self, store):
        _write_record(
            store,
            {
                "fruits_collected": 2,
                "last_reset_date": TODAY.isoformat(),
                "current_session_seconds": 50,
                "is_timer_running": False,
            },
        )
        state = store.load()

        assert state.fruits_collected == 2
        assert state.current_session_seconds == 50
        assert state.completed_sessions == 0
        assert state.is_on_break is False
        assert state.break_seconds_remaining == 0

    def test_corrupt_file_starts_over(self, store):
        store.data_dir.mkdir(parents=True, exist_ok=True)
        store.state_file.write_text("{{{", encoding="utf-8")

        state = store.load()

        assert state.fruits_collected == 0
        assert _read_record(store)["last_reset_date"] == TODAY.isoformat()

    def test_document_without_record_starts_over(self, store):
        store.data_dir.mkdir(parents=True, exist_ok=True)
        store.state_file.write_text(json.dumps({"other": 1}), encoding="utf-8")
        assert store.load().completed_sessions == 0

    def test_profiles_are_separate(self, tmp_path, clock):
        work = SessionStateStore("work", data_dir=tmp_path, today=clock)
        home = SessionStateStore("home", data_dir=tmp_path, today=clock)
        work.save(GardenState(last_reset_date=TODAY, fruits_collected=5))

        assert work.load().fruits_collected == 5
        assert home.load().fruits_collected == 0

    def test_unreadable_file_is_storage_error(self, store):
        _write_record(store, {})
        with patch(
            "pomodoro_plants.services.state_store.open",
            side_effect=PermissionError("denied"),
            create=True,
        ):
            with pytest.raises(StorageUnavailableError):
                store.load()


class TestDailyReset:
    def _seed(self, store) -> None:
        store.save(
            GardenState(
                fruits_collected=6,
                last_reset_date=date(2026, 3, 13),
                current_session_seconds=700,
                is_timer_running=True,
                completed_sessions=40,
                next_break_scene=1,
            )
        )

    def test_new_day_resets_daily_counters(self, store):
        self._seed(store)
        state = store.load()

        assert state.fruits_collected == 0
        assert state.current_session_seconds == 0
        assert state.is_timer_running is False
        assert state.last_reset_date == TODAY
        assert state.completed_sessions == 40
        assert state.next_break_scene == 1

    def test_reset_is_persisted_immediately(self, store):
        self._seed(store)
        store.load()
        record = _read_record(store)
        assert record["fruits_collected"] == 0
        assert record["last_reset_date"] == TODAY.isoformat()

    def test_same_day_keeps_counters(self, store, clock):
        clock.today = date(2026, 3, 13)
        self._seed(store)
        state = store.load()

        assert state.fruits_collected == 6
        assert state.current_session_seconds == 700
        assert state.is_timer_running is True

    def test_reset_is_idempotent(self, store):
        self._seed(store)
        first = store.load()
        first.fruits_collected = 2
        store.save(first)

        assert store.load().fruits_collected == 2

    def test_break_fields_survive_reset(self, store):
        store.save(
            GardenState(
                last_reset_date=date(2026, 1, 1),
                is_on_break=True,
                break_seconds_remaining=200,
                current_break_scene=3,
            )
        )
        state = store.load()
        assert state.is_on_break is True
        assert state.break_seconds_remaining == 200
        assert state.current_break_scene == 3

    def test_only_checked_at_load(self, store, clock):
        state = store.load()
        state.fruits_collected = 3
        clock.today = date(2026, 3, 15)
        store.save(state)

        assert state.fruits_collected == 3
        assert store.load().fruits_collected == 0


class TestSave:
    def test_unwritable_directory_raises(self, store):
        with patch("pomodoro_plants.services.state_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailableError) as exc_info:
                store.save(GardenState(last_reset_date=TODAY))
        assert exc_info.value.exit_code == 7

    def test_save_leaves_no_temp_file(self, store):
        store.save(GardenState(last_reset_date=TODAY))
        assert list(store.data_dir.iterdir()) == [store.state_file]
