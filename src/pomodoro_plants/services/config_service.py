"""Configuration service for Pomodoro Plants settings.

Settings live in a small JSON file that users (or the ``config`` commands)
may edit at any time. Nothing is cached: every lookup re-reads the file so a
change is visible on the very next computation, and any value that is
missing or has the wrong shape resolves to its documented default.
"""

from __future__ import annotations

import json
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import ValidationError

from pomodoro_plants.models.exceptions import InvalidSettingError
from pomodoro_plants.models.settings import SETTING_NAMES, Settings
from pomodoro_plants.utils.logger import get_logger

_APP_NAME = "pomodoro_plants"
_SETTINGS_FILE = "settings.json"


class ConfigService:
    """Reads and writes the user's settings file."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the config service."""
        if config_dir is None:
            config_dir = Path(user_config_dir(_APP_NAME))

        self.config_dir = config_dir
        self.settings_path = self.config_dir / _SETTINGS_FILE

    def get(self, name: str) -> Any:
        """Return the effective value of one setting.

        Raises:
            KeyError: If ``name`` is not a known setting
        """
        if name not in SETTING_NAMES:
            raise KeyError(name)

        default = Settings.model_fields[name].default
        raw = self._read_raw()
        if name not in raw:
            return default

        try:
            validated = Settings.model_validate({name: raw[name]}, strict=True)
        except ValidationError:
            get_logger("config").warning(
                "setting %s has unusable value %r, using default %r",
                name,
                raw[name],
                default,
            )
            return default
        return getattr(validated, name)

    def settings(self) -> Settings:
        """Snapshot of every effective setting."""
        raw = self._read_raw()
        values = {}
        for name in SETTING_NAMES:
            if name not in raw:
                continue
            try:
                Settings.model_validate({name: raw[name]}, strict=True)
            except ValidationError:
                continue
            values[name] = raw[name]
        return Settings.model_validate(values)

    def list(self) -> dict[str, Any]:
        """Effective values of all settings, in declaration order."""
        return self.settings().model_dump()

    def set(self, name: str, value: Any) -> Any:
        """Validate and persist one setting. Returns the stored value."""
        if name not in SETTING_NAMES:
            raise InvalidSettingError(
                f"Unknown setting '{name}'. Valid settings: {', '.join(SETTING_NAMES)}"
            )
        try:
            validated = Settings.model_validate({name: value})
        except ValidationError as e:
            message = e.errors()[0]["msg"]
            raise InvalidSettingError(f"Invalid value for {name}: {message}") from e

        stored = getattr(validated, name)
        raw = self._read_raw()
        raw[name] = stored
        self._write_raw(raw)
        return stored

    def reset(self, name: str | None = None) -> None:
        """Reset one setting, or all of them, to defaults."""
        if name is None:
            self._write_raw({})
            return
        if name not in SETTING_NAMES:
            raise InvalidSettingError(f"Unknown setting '{name}'")
        raw = self._read_raw()
        if raw.pop(name, None) is not None:
            self._write_raw(raw)

    def ensure_file(self) -> Path:
        """Write the effective settings out if no settings file exists yet."""
        if not self.settings_path.exists():
            self._write_raw(self.list())
        return self.settings_path

    def fingerprint(self) -> int | None:
        """Modification stamp of the settings file, None if it doesn't exist."""
        try:
            return self.settings_path.stat().st_mtime_ns
        except FileNotFoundError:
            return None

    def _read_raw(self) -> dict:
        try:
            with open(self.settings_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (JSONDecodeError, UnicodeDecodeError, OSError) as e:
            get_logger("config").warning("ignoring unreadable settings file: %s", e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_raw(self, data: dict) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    return ConfigService()
