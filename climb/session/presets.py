"""
Pomodoro presets — the static catalog a focus session is started from.
Only focus_minutes drives the session; break lengths are advisory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    focus_minutes: int
    short_break_minutes: int
    long_break_minutes: int
    long_break_after: int


PRESETS: List[Preset] = [
    Preset("classic", "Classic",    25, 5,  15, 4),
    Preset("short",   "Short",      15, 3,  10, 4),
    Preset("deep",    "Deep Work",  50, 10, 20, 2),
    Preset("study",   "Study Mode", 30, 5,  15, 3),
]

_BY_ID: Dict[str, Preset] = {p.id: p for p in PRESETS}


def get_preset(preset_id: str) -> Preset:
    """Look up a preset by id. Raises KeyError for unknown ids."""
    return _BY_ID[preset_id]
