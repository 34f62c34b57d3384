#!/usr/bin/env python3
"""
Core Data Models for the SMS Ledger

Records extracted from bank SMS messages: transactions, credit-card bill
statements and credit-card payments. Every record converts to and from a plain
dict (the record store boundary) and exposes the natural key that identifies
duplicates of it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .dates import FinancialTimestamp
from .money import Money


class EntityType(Enum):
    """Record kinds held by a record store."""

    TRANSACTION = "transactions"
    CREDIT_CARD_BILL = "credit_card_bills"
    CREDIT_CARD_PAYMENT = "credit_card_payments"


class Direction(Enum):
    """Money flow relative to the account holder."""

    DEBIT = "debit"
    CREDIT = "credit"


class PaymentMethod(Enum):
    """Payment rail used for a transaction."""

    UPI = "upi"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    NET_BANKING = "net_banking"
    CASH = "cash"
    WALLET = "wallet"
    UNKNOWN = "unknown"


class BillStatus(Enum):
    """Settlement state of a credit-card bill."""

    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"


@dataclass(frozen=True)
class RawMessage:
    """
    One SMS as read from the inbox.

    Transient input; never persisted as-is.
    """

    text: str
    timestamp_millis: int
    source_address: str = ""

    @property
    def received_at(self) -> FinancialTimestamp:
        """Receipt time of the message."""
        return FinancialTimestamp.from_epoch_millis(self.timestamp_millis)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawMessage":
        """
        Create from an exported inbox entry.

        Accepts both the inbox export keys (body, date, address) and the
        field names of this class.
        """
        text = data.get("body", data.get("text"))
        timestamp = data.get("date", data.get("timestamp_millis", data.get("timestampMillis")))
        if text is None or timestamp is None:
            raise ValueError(f"Message entry requires body and date: {sorted(data)}")

        address = data.get("address", data.get("source_address", data.get("sourceAddress")))
        return cls(
            text=str(text),
            timestamp_millis=int(timestamp),
            source_address="" if address is None else str(address),
        )


@dataclass
class TransactionRecord:
    """
    A debit or credit extracted from a bank SMS.

    Note: id is None until the record store assigns one on insert.
    """

    amount: Money
    occurred_at: FinancialTimestamp
    direction: Direction
    payment_method: PaymentMethod
    bank_name: str
    counterparty: str | None
    category: str
    confidence: float
    source_text: str
    id: int | None = None

    def natural_key(self) -> tuple:
        """Fields that identify a duplicate transaction."""
        return (
            self.amount.to_paise(),
            self.occurred_at.to_iso_string(),
            self.direction.value,
            self.payment_method.value,
            self.counterparty,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the record store."""
        return {
            "id": self.id,
            "amount": self.amount.to_paise(),
            "occurred_at": self.occurred_at.to_iso_string(),
            "direction": self.direction.value,
            "payment_method": self.payment_method.value,
            "bank_name": self.bank_name,
            "counterparty": self.counterparty,
            "category": self.category,
            "confidence": self.confidence,
            "source_text": self.source_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionRecord":
        """Create TransactionRecord from a stored dictionary."""
        return cls(
            id=data.get("id"),
            amount=Money.from_paise(data["amount"]),
            occurred_at=FinancialTimestamp.from_iso_string(data["occurred_at"]),
            direction=Direction(data["direction"]),
            payment_method=PaymentMethod(data["payment_method"]),
            bank_name=data.get("bank_name", "Unknown Bank"),
            counterparty=data.get("counterparty"),
            category=data.get("category", "unknown"),
            confidence=float(data.get("confidence", 0.0)),
            source_text=data.get("source_text", ""),
        )


@dataclass
class CreditCardBill:
    """
    A credit-card statement: what is owed for one card and one bill period.

    Only payment matching changes status, paid_amount and remaining_amount.
    """

    card_number_last4: str
    bank_name: str
    bill_period: str
    total_amount: Money
    minimum_due: Money
    due_date: FinancialTimestamp
    statement_date: FinancialTimestamp
    source_text: str
    status: BillStatus = BillStatus.UNPAID
    paid_amount: Money = field(default_factory=Money.zero)
    remaining_amount: Money | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if self.remaining_amount is None:
            self.remaining_amount = self.total_amount - self.paid_amount

    def natural_key(self) -> tuple:
        """Fields that identify a duplicate bill."""
        return (self.card_number_last4, self.bill_period)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the record store."""
        return {
            "id": self.id,
            "card_number_last4": self.card_number_last4,
            "bank_name": self.bank_name,
            "bill_period": self.bill_period,
            "total_amount": self.total_amount.to_paise(),
            "minimum_due": self.minimum_due.to_paise(),
            "due_date": self.due_date.to_iso_string(),
            "statement_date": self.statement_date.to_iso_string(),
            "status": self.status.value,
            "paid_amount": self.paid_amount.to_paise(),
            "remaining_amount": self.remaining_amount.to_paise() if self.remaining_amount is not None else None,
            "source_text": self.source_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreditCardBill":
        """Create CreditCardBill from a stored dictionary."""
        return cls(
            id=data.get("id"),
            card_number_last4=data["card_number_last4"],
            bank_name=data.get("bank_name", ""),
            bill_period=data["bill_period"],
            total_amount=Money.from_paise(data["total_amount"]),
            minimum_due=Money.from_paise(data["minimum_due"]),
            due_date=FinancialTimestamp.from_iso_string(data["due_date"]),
            statement_date=FinancialTimestamp.from_iso_string(data["statement_date"]),
            status=BillStatus(data.get("status", BillStatus.UNPAID.value)),
            paid_amount=Money.from_paise(data.get("paid_amount", 0)),
            remaining_amount=(
                Money.from_paise(data["remaining_amount"]) if data.get("remaining_amount") is not None else None
            ),
            source_text=data.get("source_text", ""),
        )


@dataclass
class CreditCardPayment:
    """
    A payment made towards a credit card.

    matched_bill_id moves once from None to a bill id and is never reassigned.
    """

    card_number_last4: str
    bank_name: str
    payment_amount: Money
    payment_date: FinancialTimestamp
    payment_method: str
    source_text: str
    matched_bill_id: int | None = None
    id: int | None = None

    def natural_key(self) -> tuple:
        """Fields that identify a duplicate payment."""
        return (
            self.card_number_last4,
            self.payment_amount.to_paise(),
            self.payment_date.to_iso_string(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the record store."""
        return {
            "id": self.id,
            "card_number_last4": self.card_number_last4,
            "bank_name": self.bank_name,
            "payment_amount": self.payment_amount.to_paise(),
            "payment_date": self.payment_date.to_iso_string(),
            "payment_method": self.payment_method,
            "matched_bill_id": self.matched_bill_id,
            "source_text": self.source_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreditCardPayment":
        """Create CreditCardPayment from a stored dictionary."""
        return cls(
            id=data.get("id"),
            card_number_last4=data["card_number_last4"],
            bank_name=data.get("bank_name", ""),
            payment_amount=Money.from_paise(data["payment_amount"]),
            payment_date=FinancialTimestamp.from_iso_string(data["payment_date"]),
            payment_method=data.get("payment_method", "unknown"),
            matched_bill_id=data.get("matched_bill_id"),
            source_text=data.get("source_text", ""),
        )


# Store-level uniqueness keys, expressed over the dict form of each record
NATURAL_KEY_FIELDS: dict[EntityType, tuple[str, ...]] = {
    EntityType.TRANSACTION: ("amount", "occurred_at", "direction", "payment_method", "counterparty"),
    EntityType.CREDIT_CARD_BILL: ("card_number_last4", "bill_period"),
    EntityType.CREDIT_CARD_PAYMENT: ("card_number_last4", "payment_amount", "payment_date"),
}


def natural_key_of(entity_type: EntityType, fields: dict[str, Any]) -> tuple:
    """Extract the natural key tuple from a record dict."""
    return tuple(fields.get(name) for name in NATURAL_KEY_FIELDS[entity_type])
