"""
Attention signal — the visibility proxy the front end reports instead of real
app monitoring. Raw payloads are mapped onto two edge-triggered signals.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class AttentionSignal(str, Enum):
    LOST = "lost"
    REGAINED = "regained"


# Mapping from front-end event names → signals
_EVENT_MAP: Dict[str, AttentionSignal] = {
    "VISIBILITY_HIDDEN": AttentionSignal.LOST,
    "TAB_HIDDEN": AttentionSignal.LOST,
    "FOCUS_LOST": AttentionSignal.LOST,
    "VISIBILITY_VISIBLE": AttentionSignal.REGAINED,
    "TAB_VISIBLE": AttentionSignal.REGAINED,
    "FOCUS_GAINED": AttentionSignal.REGAINED,
}


def parse_attention_event(payload: Dict[str, Any]) -> Optional[AttentionSignal]:
    """
    Parse a raw front-end payload into an AttentionSignal.
    Returns None if the event type is unknown.

    Expected payload shape:
    {
        "type": "VISIBILITY_HIDDEN"
    }
    """
    raw_type = str(payload.get("type", "")).upper()
    return _EVENT_MAP.get(raw_type)


class VisibilityTracker:
    """
    Collapses level-style visibility reports ("hidden", "hidden", "visible")
    into edges, so the monitor only ever sees a change.
    """

    def __init__(self):
        self._hidden = False

    @property
    def hidden(self) -> bool:
        return self._hidden

    def update(self, hidden: bool) -> Optional[AttentionSignal]:
        if hidden == self._hidden:
            return None
        self._hidden = hidden
        return AttentionSignal.LOST if hidden else AttentionSignal.REGAINED
