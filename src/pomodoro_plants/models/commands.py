"""Commands accepted by the focus session controller.

One command type per controller operation; ``Command`` is their union.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Harvest:
    pass


@dataclass(frozen=True)
class SkipBreak:
    pass


@dataclass(frozen=True)
class SelectNextBreakScene:
    index: int


@dataclass(frozen=True)
class CycleNextBreakScene:
    pass


@dataclass(frozen=True)
class OpenSettings:
    pass


@dataclass(frozen=True)
class FocusChanged:
    focused: bool


@dataclass(frozen=True)
class SettingsChanged:
    pass


Command = (
    Start
    | Stop
    | Reset
    | Harvest
    | SkipBreak
    | SelectNextBreakScene
    | CycleNextBreakScene
    | OpenSettings
    | FocusChanged
    | SettingsChanged
)
