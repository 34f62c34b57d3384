#!/usr/bin/env python3
"""
Reconciliation Domain Models

Results of linking credit-card payments to the bills they settle.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..core.models import BillStatus
from ..core.money import Money


@dataclass(frozen=True)
class BillMatch:
    """One payment linked to one bill, with the bill's state after the payment."""

    payment_id: int
    bill_id: int
    score: Decimal
    payment_amount: Money
    bill_status: BillStatus
    remaining_amount: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "payment_id": self.payment_id,
            "bill_id": self.bill_id,
            "score": str(self.score),
            "payment_amount": self.payment_amount.to_paise(),
            "bill_status": self.bill_status.value,
            "remaining_amount": self.remaining_amount.to_paise(),
        }


@dataclass
class MatchingResult:
    """Outcome of one matcher run."""

    matches: list[BillMatch] = field(default_factory=list)

    @property
    def matches_created(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matches_created": self.matches_created,
            "matches": [match.to_dict() for match in self.matches],
        }
