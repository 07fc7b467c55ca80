"""
Economy Gateway — validates and applies point-spending transactions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .ledger import ProgressionLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    amount: int
    item_id: Optional[str] = None


class EconomyGateway:
    """
    Insufficient funds is an expected outcome, not an error: try_spend()
    returns False and the ledger is left untouched.
    """

    def __init__(self, ledger: ProgressionLedger):
        self._ledger = ledger

    def try_spend(self, amount: int, item_id: Optional[str] = None) -> bool:
        return self.apply(Transaction(amount=amount, item_id=item_id))

    def apply(self, tx: Transaction) -> bool:
        """Raises ValueError for a non-positive or non-integer amount."""
        ok = self._ledger.try_debit(tx.amount, reason=f"purchase:{tx.item_id or '-'}")
        if not ok:
            logger.info("Rejected spend of %d for %s: insufficient points", tx.amount, tx.item_id)
        return ok

    def balance(self) -> int:
        return self._ledger.points
