"""
Pydantic schemas for the FastAPI local API.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# ── Catalogs ───────────────────────────────────────────────────────────────

class PresetOut(BaseModel):
    id: str
    name: str
    focus_minutes: int
    short_break_minutes: int
    long_break_minutes: int
    long_break_after: int


class CharacterOut(BaseModel):
    id: str
    name: str
    description: str
    color: str


# ── Session ────────────────────────────────────────────────────────────────

class SessionStartRequest(BaseModel):
    preset_id: str = "classic"


class SessionStateOut(BaseModel):
    phase: str
    preset_id: Optional[str] = None
    focus_duration_seconds: int = 0
    remaining_seconds: int = 0
    elapsed_seconds: int = 0
    started_at_ms: Optional[int] = None
    sessions_completed: int
    distracted: bool


# ── Attention ──────────────────────────────────────────────────────────────

class AttentionEventIn(BaseModel):
    type: str = Field(..., description="VISIBILITY_HIDDEN | VISIBILITY_VISIBLE | FOCUS_LOST | ...")


class VisibilityIn(BaseModel):
    hidden: bool


class SimulateDistractionIn(BaseModel):
    minutes: int = Field(default=5, ge=1, le=120)


class DistractionReportOut(BaseModel):
    minutes_lost: int
    points_lost: int
    reason: str


class AttentionResultOut(BaseModel):
    signal: Optional[str] = None       # None when a level report changed nothing
    state: str
    report: Optional[DistractionReportOut] = None


# ── Progress ───────────────────────────────────────────────────────────────

class ProgressOut(BaseModel):
    points: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    climb_height: int = Field(..., ge=0)
    total_focus_time: int = Field(..., ge=0)
    pending_penalty: Optional[DistractionReportOut] = None


class ProgressEventOut(BaseModel):
    kind: str
    requested: int
    applied: int
    reason: str
    timestamp: float


# ── Store & profile ────────────────────────────────────────────────────────

class StoreItemOut(BaseModel):
    id: str
    name: str
    slot: str
    value: str
    price: int


class PurchaseRequest(BaseModel):
    item_id: str


class PurchaseOut(BaseModel):
    success: bool
    item: StoreItemOut
    remaining_points: int


class ProfileOut(BaseModel):
    name: str
    selected_character: str
    avatar: Dict[str, str]


class CharacterSelectIn(BaseModel):
    character_id: str


# ── Tasks ──────────────────────────────────────────────────────────────────

class TaskIn(BaseModel):
    title: str = Field(..., min_length=1)


class SubTaskOut(BaseModel):
    id: str
    title: str
    points: int
    completed: bool


class TaskOut(BaseModel):
    id: str
    title: str
    points: int
    completed: bool
    subtasks: List[SubTaskOut]


class ToggleOut(BaseModel):
    task: TaskOut
    points_awarded: int


# ── Coach & view ───────────────────────────────────────────────────────────

class CoachOut(BaseModel):
    advice: str


class ViewIn(BaseModel):
    view: str = Field(..., description="dashboard | tasks | store | social | settings")


class ViewOut(BaseModel):
    view: str
