"""
/store, /profile — basecamp purchases and avatar/character selection.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from ...api.schemas import (
    CharacterSelectIn,
    ProfileOut,
    PurchaseOut,
    PurchaseRequest,
    StoreItemOut,
)

router = APIRouter(tags=["store"])


def _get_coordinator(request: Request):
    return request.app.state.coordinator


def _profile_out(coord) -> ProfileOut:
    p = coord.profile
    return ProfileOut(
        name=p.name,
        selected_character=p.selected_character,
        avatar=p.avatar.slots(),
    )


@router.get("/store/items", response_model=List[StoreItemOut])
def list_items(coord=Depends(_get_coordinator)):
    return [StoreItemOut(**asdict(i)) for i in coord.store.items()]


@router.post("/store/purchase", response_model=PurchaseOut)
async def purchase(req: PurchaseRequest, coord=Depends(_get_coordinator)):
    """Buy and equip an item. 402 when the explorer cannot afford it."""
    try:
        result = coord.store.purchase(req.item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Item not found")
    if not result.success:
        raise HTTPException(status_code=402, detail="Not enough points to reach this peak!")
    return PurchaseOut(
        success=True,
        item=StoreItemOut(**asdict(result.item)),
        remaining_points=result.remaining_points,
    )


@router.get("/profile", response_model=ProfileOut)
def get_profile(coord=Depends(_get_coordinator)):
    return _profile_out(coord)


@router.put("/profile/character", response_model=ProfileOut)
async def select_character(req: CharacterSelectIn, coord=Depends(_get_coordinator)):
    try:
        coord.select_character(req.character_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Character not found")
    return _profile_out(coord)
