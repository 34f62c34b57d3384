#!/usr/bin/env python3
"""
Bill/Payment Match Scoring

Scores how well a credit-card payment fits an open bill on the same card.
Scores are Decimal so that threshold comparisons are exact.

Score = amount component + date component, range [0, 0.8]:
- amount equals the bill total: +0.5
- amount equals the minimum due: +0.3
- amount strictly between minimum due and total: +0.2
- payment within 3 / 7 / 15 days of the due date: +0.3 / +0.2 / +0.1
"""

from decimal import Decimal

from ..core.dates import FinancialTimestamp
from ..core.money import Money

ZERO = Decimal("0")


class BillMatchScorer:
    """Amount and due-date scoring for bill/payment candidates"""

    FULL_AMOUNT_SCORE = Decimal("0.5")
    MINIMUM_DUE_SCORE = Decimal("0.3")
    PARTIAL_AMOUNT_SCORE = Decimal("0.2")

    # (max days from due date, score), checked in order
    DATE_BUCKETS = [
        (3, Decimal("0.3")),
        (7, Decimal("0.2")),
        (15, Decimal("0.1")),
    ]

    @staticmethod
    def calculate_score(
        payment_amount: Money,
        payment_date: FinancialTimestamp,
        total_amount: Money,
        minimum_due: Money,
        due_date: FinancialTimestamp,
    ) -> Decimal:
        """
        Calculate the match score of a payment against a bill.

        Args:
            payment_amount: Amount paid
            payment_date: When the payment was made
            total_amount: Bill total
            minimum_due: Bill minimum due
            due_date: Bill due date

        Returns:
            Score between 0 and 0.8
        """
        score = BillMatchScorer._score_amount(payment_amount, total_amount, minimum_due)
        score += BillMatchScorer._score_date(payment_date, due_date)
        return score

    @staticmethod
    def _score_amount(payment_amount: Money, total_amount: Money, minimum_due: Money) -> Decimal:
        """Exact total beats exact minimum beats anything in between"""
        if payment_amount == total_amount:
            return BillMatchScorer.FULL_AMOUNT_SCORE
        if payment_amount == minimum_due:
            return BillMatchScorer.MINIMUM_DUE_SCORE
        if minimum_due < payment_amount < total_amount:
            return BillMatchScorer.PARTIAL_AMOUNT_SCORE
        return ZERO

    @staticmethod
    def _score_date(payment_date: FinancialTimestamp, due_date: FinancialTimestamp) -> Decimal:
        """Closer to the due date (either side) scores higher"""
        days_apart = payment_date.days_between(due_date)
        for max_days, score in BillMatchScorer.DATE_BUCKETS:
            if days_apart <= max_days:
                return score
        return ZERO


class MatchThresholds:
    """Acceptance threshold for bill/payment matches"""

    # A payment is only linked to a bill scoring strictly above this
    MIN_MATCH_SCORE = Decimal("0.5")

    @staticmethod
    def meets_threshold(score: Decimal) -> bool:
        """Check if a score is good enough to link payment and bill"""
        return score > MatchThresholds.MIN_MATCH_SCORE
