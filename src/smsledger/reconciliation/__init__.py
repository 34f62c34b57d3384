"""
Bill/Payment Reconciliation Package

Links credit-card payments to the bills they settle.

Key Components:
- scorer: amount and due-date match scoring with a fixed acceptance threshold
- matcher: oldest-payment-first matching and bill settlement tracking
- models: match results
- summary: outstanding and overdue totals over open bills
"""

from .matcher import (
    BillPaymentMatcher,
    match_bills_and_payments,
)
from .models import (
    BillMatch,
    MatchingResult,
)
from .scorer import (
    BillMatchScorer,
    MatchThresholds,
)
from .summary import (
    BillSummary,
    summarize_bills,
)

__all__ = [
    # Matching
    "BillPaymentMatcher",
    "match_bills_and_payments",
    # Results
    "BillMatch",
    "MatchingResult",
    # Scoring
    "BillMatchScorer",
    "MatchThresholds",
    # Summary
    "BillSummary",
    "summarize_bills",
]
