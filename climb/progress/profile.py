"""
Explorer profile — display name, selected character and avatar slots.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    description: str
    color: str


CHARACTERS: List[Character] = [
    Character("llama", "Luna the Llama",
              "Graceful and steady, Luna loves high-altitude ponchos.", "#F3E5AB"),
    Character("leopard", "Leo the Leopard",
              "Fast and focused, Leo uses the latest high-tech climbing gear.", "#FFD700"),
    Character("guineapig", "Gina the Guinea Pig",
              "Small but mighty, Gina climbs in her favorite polka-dot dress.", "#C19A6B"),
    Character("elephant", "Ellie the Elephant",
              "Wise and strong, Ellie wears traditional climbing silks.", "#A9A9A9"),
]

_CHARACTER_IDS = {c.id for c in CHARACTERS}


@dataclass
class Avatar:
    base_color: str = "#e2e8f0"
    hat: str = "none"
    gear: str = "none"

    def slots(self) -> Dict[str, str]:
        return asdict(self)

    def equip(self, slot: str, value: str) -> None:
        if slot not in self.__dataclass_fields__:  # type: ignore[attr-defined]
            raise KeyError(slot)
        setattr(self, slot, value)


@dataclass
class Profile:
    name: str = "Explorer"
    selected_character: str = "llama"
    avatar: Avatar = field(default_factory=Avatar)

    def select_character(self, character_id: str) -> None:
        if character_id not in _CHARACTER_IDS:
            raise KeyError(character_id)
        self.selected_character = character_id
