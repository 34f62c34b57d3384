#!/usr/bin/env python3
"""
Credit-Card Bill Summary

Totals over the bills that are not yet fully paid, read from the settlement
state the matcher maintains.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..core.datastore import RecordStore
from ..core.dates import FinancialTimestamp
from ..core.models import BillStatus, CreditCardBill, EntityType
from ..core.money import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillSummary:
    """Outstanding position across all open credit-card bills."""

    total_outstanding: Money
    total_minimum_due: Money
    overdue_count: int
    open_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_outstanding": self.total_outstanding.to_paise(),
            "total_minimum_due": self.total_minimum_due.to_paise(),
            "overdue_count": self.overdue_count,
            "open_count": self.open_count,
        }


def summarize_bills(store: RecordStore, as_of: FinancialTimestamp | None = None) -> BillSummary:
    """
    Summarize bills that are not fully paid.

    A bill is overdue when its due date is strictly before as_of.

    Args:
        store: Record store holding bills
        as_of: Reference time for the overdue count (default: now)

    Returns:
        BillSummary of the open bills
    """
    reference = as_of or FinancialTimestamp.now()
    bills = [
        CreditCardBill.from_dict(record)
        for record in store.query(
            EntityType.CREDIT_CARD_BILL, lambda record: record.get("status") != BillStatus.FULLY_PAID.value
        )
    ]

    total_outstanding = Money.zero()
    total_minimum_due = Money.zero()
    overdue_count = 0
    for bill in bills:
        total_outstanding += bill.total_amount - bill.paid_amount
        total_minimum_due += bill.minimum_due
        if bill.due_date.value < reference.value:
            overdue_count += 1

    logger.debug("Summarized %d open bills, %d overdue", len(bills), overdue_count)
    return BillSummary(
        total_outstanding=total_outstanding,
        total_minimum_due=total_minimum_due,
        overdue_count=overdue_count,
        open_count=len(bills),
    )
