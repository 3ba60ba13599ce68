"""Garden state, growth stages and break scenes."""

from __future__ import annotations

import random
from bisect import bisect_right
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any

SCHEMA_VERSION = 2


class GrowthStage(str, Enum):
    """Plant stages, in the order a session grows through them."""

    DIRT = "dirt"  # bare soil
    WATERED = "watered"  # wet soil, ready to grow
    CRACKING = "cracking"  # soil cracking, something's coming
    SEEDLING = "seedling"  # tiny green peek
    SPROUT = "sprout"  # small sprout with cotyledons
    BABY = "baby"  # first true leaves
    GROWING = "growing"  # stem getting taller
    LEAFY = "leafy"  # more leaves, bushier
    BUDDING = "budding"  # flower bud forming
    FRUITING = "fruiting"  # full plant with fruit


class BreakScene(str, Enum):
    """The four break rewards. Persisted by index, never by name."""

    HAY_BALE = "hayBale"
    LEMONADE = "lemonade"
    FISHING = "fishing"
    TREE_NAP = "treeNap"

    @classmethod
    def from_index(cls, index: int) -> BreakScene:
        return list(cls)[index]

    @property
    def index(self) -> int:
        return list(BreakScene).index(self)

    @property
    def label(self) -> str:
        return _SCENE_LABELS[self]


_SCENE_LABELS = {
    BreakScene.HAY_BALE: "Hay bale rest",
    BreakScene.LEMONADE: "Lemonade stand",
    BreakScene.FISHING: "Gone fishing",
    BreakScene.TREE_NAP: "Nap under a tree",
}

BREAK_SCENE_COUNT = len(BreakScene)

# Upper-exclusive band edges; everything from 0.9 up is fruiting.
_STAGE_THRESHOLDS = (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)
_STAGES = list(GrowthStage)


def session_progress(elapsed_seconds: int, duration_seconds: int) -> float:
    """Fraction of the session completed, clamped to [0, 1]."""
    if duration_seconds <= 0:
        return 1.0
    return min(max(elapsed_seconds, 0) / duration_seconds, 1.0)


def growth_stage(progress: float) -> GrowthStage:
    """Map session progress onto one of the ten growth stages."""
    return _STAGES[bisect_right(_STAGE_THRESHOLDS, progress)]


def random_scene_index(rng: random.Random) -> int:
    """Draw a break scene index uniformly at random."""
    return rng.randrange(BREAK_SCENE_COUNT)


@dataclass
class GardenState:
    """The persisted garden aggregate for one profile."""

    fruits_collected: int = 0
    last_reset_date: date = field(default_factory=date.today)
    current_session_seconds: int = 0
    is_timer_running: bool = False
    completed_sessions: int = 0
    is_on_break: bool = False
    break_seconds_remaining: int = 0
    current_break_scene: int = 0
    next_break_scene: int = 0

    @property
    def current_scene(self) -> BreakScene:
        return BreakScene.from_index(self.current_break_scene)

    @property
    def next_scene(self) -> BreakScene:
        return BreakScene.from_index(self.next_break_scene)

    @classmethod
    def fresh(cls, today: date, rng: random.Random) -> GardenState:
        """Create the record written on first launch."""
        return cls(last_reset_date=today, next_break_scene=random_scene_index(rng))

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        data = asdict(self)
        data["last_reset_date"] = self.last_reset_date.isoformat()
        return data


def _as_count(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def _as_flag(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def _as_scene(value: Any) -> int | None:
    count = _as_count(value)
    if count is None or count >= BREAK_SCENE_COUNT:
        return None
    return count


def _as_date(value: Any) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def backfill(raw: dict, today: date, rng: random.Random) -> GardenState:
    """Build a GardenState from a stored record of any schema version.

    Version 1 records carry only the first four fields; the break fields
    arrived with version 2. Every field that is missing or unusable falls
    back to its first-launch default, and unknown keys are ignored.
    """
    fruits = _as_count(raw.get("fruits_collected"))
    reset_date = _as_date(raw.get("last_reset_date"))
    seconds = _as_count(raw.get("current_session_seconds"))
    running = _as_flag(raw.get("is_timer_running"))
    completed = _as_count(raw.get("completed_sessions"))
    on_break = _as_flag(raw.get("is_on_break"))
    remaining = _as_count(raw.get("break_seconds_remaining"))
    current_scene = _as_scene(raw.get("current_break_scene"))
    next_scene = _as_scene(raw.get("next_break_scene"))

    state = GardenState(
        fruits_collected=fruits if fruits is not None else 0,
        last_reset_date=reset_date if reset_date is not None else today,
        current_session_seconds=seconds if seconds is not None else 0,
        is_timer_running=running if running is not None else False,
        completed_sessions=completed if completed is not None else 0,
        is_on_break=on_break if on_break is not None else False,
        break_seconds_remaining=remaining if remaining is not None else 0,
        current_break_scene=current_scene if current_scene is not None else 0,
        next_break_scene=(
            next_scene if next_scene is not None else random_scene_index(rng)
        ),
    )

    if state.is_on_break:
        state.is_timer_running = False
    else:
        state.break_seconds_remaining = 0
    return state
