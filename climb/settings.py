"""
User-tunable runtime settings — held in memory for the process lifetime.

Import get_settings() anywhere in the engine to read current values.
Import update_settings(patch) to mutate them.
"""

from __future__ import annotations

from typing import Any

PENALTY_MODES = ("double", "periodic", "elapsed")

DEFAULTS: dict[str, Any] = {
    "session_reward_points":          100,       # flat reward per completed session
    "session_reward_height":          50,        # metres climbed per completed session
    "distraction_penalty_per_minute": 1,
    "distraction_penalty_mode":       "double",  # see PENALTY_MODES
}

_current: dict[str, Any] = {}


def _load() -> None:
    global _current
    _current = dict(DEFAULTS)


def get_settings() -> dict[str, Any]:
    """Return a copy of the current settings dict."""
    if not _current:
        _load()
    return dict(_current)


def update_settings(patch: dict[str, Any]) -> dict[str, Any]:
    """Apply *patch* (unknown keys ignored) and return the full settings."""
    if not _current:
        _load()
    staged = dict(_current)
    for k, v in patch.items():
        if k in DEFAULTS:
            # coerce to the same type as the default
            staged[k] = type(DEFAULTS[k])(v)
    mode = staged["distraction_penalty_mode"]
    if mode not in PENALTY_MODES:
        raise ValueError(f"Unknown penalty mode: {mode!r}")
    _current.update(staged)
    return dict(_current)


def reset_settings() -> dict[str, Any]:
    _load()
    return dict(_current)


# Eagerly load on import
_load()
