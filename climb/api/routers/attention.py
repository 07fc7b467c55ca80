"""
/attention — visibility-proxy events from the dashboard.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request

from ...api.schemas import (
    AttentionEventIn,
    AttentionResultOut,
    DistractionReportOut,
    SimulateDistractionIn,
    VisibilityIn,
)
from ...distraction.attention import parse_attention_event

router = APIRouter(prefix="/attention", tags=["attention"])


def _get_coordinator(request: Request):
    return request.app.state.coordinator


@router.post("", response_model=AttentionResultOut)
async def attention_event(event: AttentionEventIn, coord=Depends(_get_coordinator)):
    """Accept a single attention edge (hidden / visible)."""
    signal = parse_attention_event({"type": event.type})
    if signal is None:
        raise HTTPException(status_code=422, detail=f"Unrecognised event type: {event.type!r}")

    report = coord.attention(signal)
    return AttentionResultOut(
        signal=signal.value,
        state=coord.monitor.state.value,
        report=DistractionReportOut(**asdict(report)) if report else None,
    )


@router.post("/visibility", response_model=AttentionResultOut)
async def report_visibility(req: VisibilityIn, coord=Depends(_get_coordinator)):
    """Accept a level-style report ({"hidden": true}). Repeated levels are ignored."""
    signal, report = coord.report_visibility(req.hidden)
    return AttentionResultOut(
        signal=signal.value if signal else None,
        state=coord.monitor.state.value,
        report=DistractionReportOut(**asdict(report)) if report else None,
    )


@router.post("/simulate", response_model=AttentionResultOut)
async def simulate_distraction(req: SimulateDistractionIn, coord=Depends(_get_coordinator)):
    """Demo hook: pretend the user wandered off for *minutes*. 409 without a running session."""
    report = coord.monitor.simulate_distraction(req.minutes)
    if report is None:
        raise HTTPException(status_code=409, detail="Start an ascent first")
    return AttentionResultOut(
        signal="lost",
        state=coord.monitor.state.value,
        report=DistractionReportOut(**asdict(report)),
    )
