"""
/progress — ledger snapshot, history and WebSocket stream; /coach and /view.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, WebSocket, WebSocketDisconnect

from ...api.schemas import CoachOut, DistractionReportOut, ProgressEventOut, ProgressOut, ViewIn, ViewOut
from ...coordinator import View

router = APIRouter(tags=["progress"])


def _get_coordinator(request: Request):
    return request.app.state.coordinator


def _get_services(request: Request):
    return request.app.state.services


def _progress_out(coord) -> ProgressOut:
    snap = coord.ledger.snapshot()
    pending = coord.pending_penalty
    return ProgressOut(
        **asdict(snap),
        pending_penalty=DistractionReportOut(**asdict(pending)) if pending else None,
    )


@router.get("/progress", response_model=ProgressOut)
def get_progress(coord=Depends(_get_coordinator)):
    """Return the current points / level / height snapshot."""
    return _progress_out(coord)


@router.get("/progress/history", response_model=List[ProgressEventOut])
def get_history(
    limit: int = Query(default=100, ge=1, le=1000),
    coord=Depends(_get_coordinator),
):
    return [ProgressEventOut(**asdict(e)) for e in coord.ledger.history(limit)]


@router.post("/progress/acknowledge", response_model=ProgressOut)
async def acknowledge_penalty(coord=Depends(_get_coordinator)):
    """Dismiss the last distraction notice ("resume climb")."""
    coord.acknowledge_penalty()
    return _progress_out(coord)


@router.websocket("/progress/ws")
async def progress_websocket(websocket: WebSocket):
    """
    WebSocket stream — pushes the progress snapshot whenever it changes,
    and at least every 2 seconds.
    """
    coord = websocket.app.state.coordinator
    changed = asyncio.Event()
    unsubscribe = None
    receiver = None
    try:
        unsubscribe = coord.ledger.subscribe(lambda _snap: changed.set())
        await websocket.accept()
        # the client never sends; a pending receive surfaces the disconnect
        receiver = asyncio.create_task(websocket.receive_text())
        while True:
            await websocket.send_json(_progress_out(coord).model_dump())
            changed.clear()
            waiter = asyncio.create_task(changed.wait())
            done, _ = await asyncio.wait(
                {waiter, receiver}, timeout=2, return_when=asyncio.FIRST_COMPLETED
            )
            waiter.cancel()
            if receiver in done:
                receiver.result()
                receiver = asyncio.create_task(websocket.receive_text())
    except WebSocketDisconnect:
        pass
    finally:
        if receiver is not None:
            receiver.cancel()
        if unsubscribe is not None:
            unsubscribe()


@router.get("/coach", response_model=CoachOut)
async def get_advice(coord=Depends(_get_coordinator), services=Depends(_get_services)):
    snap = coord.ledger.snapshot()
    advice = await services["coach"].advice(snap.points, snap.climb_height)
    return CoachOut(advice=advice)


@router.get("/view", response_model=ViewOut)
def get_view(coord=Depends(_get_coordinator)):
    return ViewOut(view=coord.active_view.value)


@router.put("/view", response_model=ViewOut)
async def set_view(req: ViewIn, coord=Depends(_get_coordinator)):
    try:
        view = View(req.view)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown view: {req.view!r}")
    coord.set_view(view)
    return ViewOut(view=coord.active_view.value)
