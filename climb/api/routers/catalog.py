"""
/presets, /characters — static catalogs the dashboard renders.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter

from ...api.schemas import CharacterOut, PresetOut
from ...progress.profile import CHARACTERS
from ...session.presets import PRESETS

router = APIRouter(tags=["catalog"])


@router.get("/presets", response_model=List[PresetOut])
def list_presets():
    return [PresetOut(**asdict(p)) for p in PRESETS]


@router.get("/characters", response_model=List[CharacterOut])
def list_characters():
    return [CharacterOut(**asdict(c)) for c in CHARACTERS]
