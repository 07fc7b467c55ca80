"""
/settings — read and update user-tunable runtime settings.
"""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...settings import DEFAULTS, get_settings, update_settings

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsPatch(BaseModel):
    session_reward_points:          Optional[int] = Field(None, ge=0, le=10000)
    session_reward_height:          Optional[int] = Field(None, ge=0, le=1000)
    distraction_penalty_per_minute: Optional[int] = Field(None, ge=0, le=100)
    distraction_penalty_mode:       Optional[Literal["double", "periodic", "elapsed"]] = None


@router.get("")
def read_settings():
    """Return current settings with their defaults for reference."""
    current = get_settings()
    return {"settings": current, "defaults": DEFAULTS}


@router.put("")
def write_settings(patch: SettingsPatch):
    """Apply a partial update; unknown keys are ignored."""
    data = {k: v for k, v in patch.model_dump().items() if v is not None}
    return {"settings": update_settings(data)}
