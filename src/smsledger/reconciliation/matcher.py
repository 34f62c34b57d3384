#!/usr/bin/env python3
"""
Bill/Payment Matcher

Links unmatched credit-card payments to open bills on the same card and tracks
how much of each bill has been settled.

Payments are processed oldest first. For each payment the open bills of its
card are scored and the strictly best candidate is taken, provided it scores
above the match threshold. A payment that finds no good bill stays unmatched
and is retried on the next run. Running the matcher again over the same data
creates no new matches.
"""

import logging

from ..core.datastore import RecordStore
from ..core.errors import StoreError
from ..core.models import BillStatus, CreditCardBill, CreditCardPayment, EntityType
from ..core.money import Money
from .models import BillMatch, MatchingResult
from .scorer import BillMatchScorer, MatchThresholds

logger = logging.getLogger(__name__)


class BillPaymentMatcher:
    """Scored payment-to-bill reconciliation over a record store."""

    def __init__(self, store: RecordStore):
        """
        Initialize the matcher.

        Args:
            store: Record store holding bills and payments
        """
        self.store = store

    def match_all(self) -> MatchingResult:
        """
        Match every unmatched payment against open bills.

        Returns:
            MatchingResult listing the matches created by this run
        """
        result = MatchingResult()

        payments = [
            CreditCardPayment.from_dict(record)
            for record in self.store.query(
                EntityType.CREDIT_CARD_PAYMENT, lambda record: record.get("matched_bill_id") is None
            )
        ]
        payments.sort(key=lambda payment: (payment.payment_date.value, payment.id or 0))
        logger.debug("Matching %d unmatched payments", len(payments))

        for payment in payments:
            try:
                match = self.match_payment(payment)
            except StoreError as e:
                logger.warning("Failed to record match for payment %s: %s", payment.id, e)
                continue
            if match is not None:
                result.matches.append(match)

        logger.info("Bill matching created %d matches from %d unmatched payments", result.matches_created, len(payments))
        return result

    def find_open_bills(self, card_number_last4: str) -> list[CreditCardBill]:
        """Bills of a card that are not fully paid, earliest due date first."""
        records = self.store.query(
            EntityType.CREDIT_CARD_BILL,
            lambda record: (
                record.get("card_number_last4") == card_number_last4
                and record.get("status") != BillStatus.FULLY_PAID.value
            ),
        )
        bills = [CreditCardBill.from_dict(record) for record in records]
        bills.sort(key=lambda bill: (bill.due_date.value, bill.id or 0))
        return bills

    def match_payment(self, payment: CreditCardPayment) -> BillMatch | None:
        """
        Link one payment to its best open bill and settle that bill.

        Args:
            payment: Stored, unmatched payment

        Returns:
            BillMatch, or None when no bill scores above the threshold

        Raises:
            StoreError: If the match cannot be recorded; the store is left as it was
        """
        if payment.id is None or payment.matched_bill_id is not None:
            return None

        best_bill: CreditCardBill | None = None
        best_score = None
        for bill in self.find_open_bills(payment.card_number_last4):
            score = BillMatchScorer.calculate_score(
                payment.payment_amount,
                payment.payment_date,
                bill.total_amount,
                bill.minimum_due,
                bill.due_date,
            )
            # Strictly greater: the earliest-due candidate wins ties
            if best_score is None or score > best_score:
                best_bill, best_score = bill, score

        if best_bill is None or best_score is None or not MatchThresholds.meets_threshold(best_score):
            logger.debug(
                "No bill match for payment %s (card %s, best score %s)",
                payment.id,
                payment.card_number_last4,
                best_score,
            )
            return None

        if best_bill.id is None:
            return None

        paid_amount = best_bill.paid_amount + payment.payment_amount
        remaining_amount = best_bill.total_amount - paid_amount
        status = BillStatus.FULLY_PAID if not remaining_amount.is_positive() else BillStatus.PARTIALLY_PAID

        self._settle(payment.id, best_bill.id, best_bill, status, paid_amount, remaining_amount)

        logger.info(
            "Matched payment %s (%s) to bill %s [%s], score %s, remaining %s",
            payment.id,
            payment.payment_amount,
            best_bill.id,
            best_bill.bill_period,
            best_score,
            remaining_amount,
        )
        return BillMatch(
            payment_id=payment.id,
            bill_id=best_bill.id,
            score=best_score,
            payment_amount=payment.payment_amount,
            bill_status=status,
            remaining_amount=remaining_amount,
        )

    def _settle(
        self,
        payment_id: int,
        bill_id: int,
        bill: CreditCardBill,
        status: BillStatus,
        paid_amount: Money,
        remaining_amount: Money,
    ) -> None:
        """
        Record a payment against a bill.

        The bill is updated first and the payment link second. If linking the
        payment fails the bill is put back, so a payment is never linked to a
        bill that does not count it.

        Raises:
            StoreError: If either update fails
        """
        self.store.update(
            EntityType.CREDIT_CARD_BILL,
            bill_id,
            {
                "status": status.value,
                "paid_amount": paid_amount.to_paise(),
                "remaining_amount": remaining_amount.to_paise(),
            },
        )
        try:
            self.store.update(EntityType.CREDIT_CARD_PAYMENT, payment_id, {"matched_bill_id": bill_id})
        except StoreError:
            previous = bill.to_dict()
            self.store.update(
                EntityType.CREDIT_CARD_BILL,
                bill_id,
                {name: previous[name] for name in ("status", "paid_amount", "remaining_amount")},
            )
            raise


def match_bills_and_payments(store: RecordStore) -> MatchingResult:
    """Run one matcher pass over a store."""
    return BillPaymentMatcher(store).match_all()
