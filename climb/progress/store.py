"""
Basecamp store — static catalog of avatar items bought with points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .economy import EconomyGateway
from .profile import Avatar


@dataclass(frozen=True)
class StoreItem:
    id: str
    name: str
    slot: str       # avatar slot the item fills
    value: str      # opaque value written to the slot
    price: int


CATALOG: List[StoreItem] = [
    StoreItem("hat-1",  "Mountaineer Hat", "hat",        "#ef4444", 200),
    StoreItem("hat-2",  "Winter Beanie",   "hat",        "#3b82f6", 350),
    StoreItem("hat-3",  "Golden Helmet",   "hat",        "#fbbf24", 1000),
    StoreItem("gear-1", "Pro Harness",     "gear",       "#10b981", 500),
    StoreItem("gear-2", "Heavy Pack",      "gear",       "#6b7280", 400),
    StoreItem("skin-1", "Ice Skin",        "base_color", "#93c5fd", 600),
    StoreItem("skin-2", "Lava Skin",       "base_color", "#f87171", 600),
]


@dataclass
class PurchaseResult:
    success: bool
    item: StoreItem
    remaining_points: int


class Store:

    def __init__(
        self,
        gateway: EconomyGateway,
        avatar: Avatar,
        catalog: Optional[List[StoreItem]] = None,
    ):
        self._gateway = gateway
        self._avatar = avatar
        self._items: Dict[str, StoreItem] = {i.id: i for i in (catalog or CATALOG)}

    def items(self) -> List[StoreItem]:
        return list(self._items.values())

    def get(self, item_id: str) -> StoreItem:
        return self._items[item_id]

    def purchase(self, item_id: str) -> PurchaseResult:
        """Spend the item price and equip it. Unknown ids raise KeyError."""
        item = self.get(item_id)
        ok = self._gateway.try_spend(item.price, item_id=item.id)
        if ok:
            self._avatar.equip(item.slot, item.value)
        return PurchaseResult(success=ok, item=item, remaining_points=self._gateway.balance())
