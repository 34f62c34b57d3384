#!/usr/bin/env python3
"""
Unit tests for core data models.

Tests dict conversion and natural keys of the record models.
"""

import pytest

from smsledger.core.dates import FinancialTimestamp
from smsledger.core.models import (
    BillStatus,
    CreditCardBill,
    CreditCardPayment,
    Direction,
    EntityType,
    PaymentMethod,
    RawMessage,
    TransactionRecord,
    natural_key_of,
)
from smsledger.core.money import Money


@pytest.fixture
def transaction() -> TransactionRecord:
    return TransactionRecord(
        amount=Money.from_rupees("500.00"),
        occurred_at=FinancialTimestamp.from_calendar_date(2025, 5, 15),
        direction=Direction.DEBIT,
        payment_method=PaymentMethod.UPI,
        bank_name="Unknown Bank",
        counterparty=None,
        category="upi_debit",
        confidence=1.0,
        source_text="Rs 500.00 debited via UPI",
    )


@pytest.fixture
def bill() -> CreditCardBill:
    return CreditCardBill(
        card_number_last4="1606",
        bank_name="YES BANK",
        bill_period="JUN-25",
        total_amount=Money.from_rupees("5561.82"),
        minimum_due=Money.from_rupees("278.09"),
        due_date=FinancialTimestamp.from_calendar_date(2025, 7, 2),
        statement_date=FinancialTimestamp.from_calendar_date(2025, 6, 20),
        source_text="YES BANK Credit Card XX1606 JUN-25 statement",
    )


class TestRawMessage:
    """Test RawMessage construction."""

    def test_from_inbox_export_keys(self):
        """Inbox exports use body/date/address."""
        message = RawMessage.from_dict({"body": "hello", "date": 1747267200000, "address": "VM-HDFCBK"})
        assert message.text == "hello"
        assert message.source_address == "VM-HDFCBK"
        assert message.received_at.to_iso_string() == "2025-05-15T00:00:00.000Z"

    def test_from_field_names(self):
        """Field names and camelCase keys are accepted too."""
        message = RawMessage.from_dict({"text": "hi", "timestampMillis": "1000", "sourceAddress": "AX-ICICIB"})
        assert message.timestamp_millis == 1000
        assert message.source_address == "AX-ICICIB"

    def test_missing_address_defaults_to_empty(self):
        """Address is optional."""
        assert RawMessage.from_dict({"body": "x", "date": 1}).source_address == ""

    def test_missing_body_raises(self):
        """Body and date are required."""
        with pytest.raises(ValueError):
            RawMessage.from_dict({"date": 1})


class TestTransactionRecord:
    """Test TransactionRecord conversion."""

    def test_to_dict_stores_paise_and_iso(self, transaction):
        """Store form uses paise and ISO strings."""
        data = transaction.to_dict()
        assert data["amount"] == 50000
        assert data["occurred_at"] == "2025-05-15T00:00:00.000Z"
        assert data["direction"] == "debit"
        assert data["payment_method"] == "upi"
        assert data["id"] is None

    def test_from_dict_inverts_to_dict(self, transaction):
        """from_dict restores typed fields."""
        data = transaction.to_dict()
        data["id"] = 7
        restored = TransactionRecord.from_dict(data)
        assert restored.id == 7
        assert restored.amount == transaction.amount
        assert restored.occurred_at == transaction.occurred_at
        assert restored.direction == Direction.DEBIT

    def test_natural_key_matches_dict_key(self, transaction):
        """Model and dict natural keys agree."""
        assert transaction.natural_key() == natural_key_of(EntityType.TRANSACTION, transaction.to_dict())


class TestCreditCardBill:
    """Test CreditCardBill defaults and conversion."""

    def test_new_bill_is_unpaid_with_full_remaining(self, bill):
        """New bills owe their whole total."""
        assert bill.status == BillStatus.UNPAID
        assert bill.paid_amount.is_zero()
        assert bill.remaining_amount == bill.total_amount

    def test_round_trip_keeps_settlement_state(self, bill):
        """Paid and remaining amounts survive the store boundary."""
        data = bill.to_dict()
        data.update({"status": "partially_paid", "paid_amount": 278009, "remaining_amount": 278173})
        restored = CreditCardBill.from_dict(data)
        assert restored.status == BillStatus.PARTIALLY_PAID
        assert restored.paid_amount.to_paise() == 278009
        assert restored.remaining_amount.to_paise() == 278173

    def test_natural_key(self, bill):
        """Bills are unique per card and period."""
        assert bill.natural_key() == ("1606", "JUN-25")
        assert natural_key_of(EntityType.CREDIT_CARD_BILL, bill.to_dict()) == ("1606", "JUN-25")


class TestCreditCardPayment:
    """Test CreditCardPayment conversion."""

    def test_round_trip(self):
        """Payments start unmatched and convert both ways."""
        payment = CreditCardPayment(
            card_number_last4="1606",
            bank_name="YES BANK",
            payment_amount=Money.from_rupees("4500.00"),
            payment_date=FinancialTimestamp.from_calendar_date(2025, 7, 4),
            payment_method="BBPS",
            source_text="Payment received",
        )
        data = payment.to_dict()
        assert data["matched_bill_id"] is None
        assert payment.natural_key() == ("1606", 450000, "2025-07-04T00:00:00.000Z")

        restored = CreditCardPayment.from_dict({**data, "id": 3, "matched_bill_id": 1})
        assert restored.id == 3
        assert restored.matched_bill_id == 1
        assert restored.payment_amount == payment.payment_amount
