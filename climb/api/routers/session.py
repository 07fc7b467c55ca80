"""
/session — start, abort and inspect the focus session.

Mutating handlers are async so they run on the event loop, serialized with the
countdown and distraction timers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from ...api.schemas import SessionStartRequest, SessionStateOut
from ...session.machine import InvalidTransition

router = APIRouter(prefix="/session", tags=["session"])


def _get_coordinator(request: Request):
    return request.app.state.coordinator


def _state_out(coord) -> SessionStateOut:
    machine = coord.session
    s = machine.session
    return SessionStateOut(
        phase=machine.phase.value,
        preset_id=s.preset_id if s else None,
        focus_duration_seconds=s.focus_duration_seconds if s else 0,
        remaining_seconds=s.remaining_seconds if s else 0,
        elapsed_seconds=s.elapsed_seconds() if s else 0,
        started_at_ms=s.started_at_ms if s else None,
        sessions_completed=machine.completed_count,
        distracted=coord.monitor.distracted,
    )


@router.get("", response_model=SessionStateOut)
async def get_session(coord=Depends(_get_coordinator)):
    return _state_out(coord)


@router.post("/start", response_model=SessionStateOut)
async def start_session(req: SessionStartRequest, coord=Depends(_get_coordinator)):
    """Start a focus session from a preset. 409 while one is already running."""
    try:
        coord.start_session(req.preset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {req.preset_id!r}")
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state_out(coord)


@router.post("/abort", response_model=SessionStateOut)
async def abort_session(coord=Depends(_get_coordinator)):
    """Abandon the running session. No reward is granted."""
    try:
        coord.abort_session()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state_out(coord)
