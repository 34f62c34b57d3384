#!/usr/bin/env python3
"""
SMS Field Extraction Module

Pulls transaction fields out of free-form bank SMS text.

Only the amount and the date are load-bearing: a message without a positive
amount is rejected, and the date always falls back to the SMS receipt time.
Every other field degrades to a documented default (bank "Unknown Bank",
direction debit, payment method unknown, counterparty None).
"""

import logging
import re
import string
from dataclasses import dataclass

from ..core.currency import parse_rupees_to_paise
from ..core.dates import MONTH_ABBREVIATIONS, FinancialTimestamp, parse_textual_date
from ..core.errors import ExtractionError
from ..core.models import Direction, PaymentMethod
from ..core.money import Money
from .categorizer import Category

logger = logging.getLogger(__name__)

# First currency-prefixed amount: Rs 500, Rs.1,250.00, ₹99, INR 5561.82
AMOUNT_PATTERN = re.compile(r"(?:\brs\.?|₹|\binr)\s*([\d,]+(?:\.\d+)?)", re.IGNORECASE)

UNKNOWN_BANK = "Unknown Bank"

# Checked in order; the first bank whose name appears (any case) wins
KNOWN_BANKS = [
    "HDFC Bank",
    "ICICI Bank",
    "SBI",
    "Axis Bank",
    "Kotak Bank",
    "Citibank",
    "HSBC",
    "Standard Chartered",
    "RBL Bank",
    "IDFC Bank",
    "Yes Bank",
    "Bank of Baroda",
    "Punjab National Bank",
    "Canara Bank",
    "Union Bank",
]

# Explicit wording in the message body
DIRECTION_TEXT_CUES = [
    ("debited", Direction.DEBIT),
    ("credited", Direction.CREDIT),
    ("withdrawn", Direction.DEBIT),
    ("received", Direction.CREDIT),
]

# Fragments of the category value, used when the body has no explicit wording
DIRECTION_CATEGORY_HINTS = [
    (("credit",), Direction.CREDIT),
    (("debit",), Direction.DEBIT),
    (("withdrawal",), Direction.DEBIT),
    (("salary", "income"), Direction.CREDIT),
    (("refund",), Direction.CREDIT),
]

PAYMENT_METHOD_TEXT_CUES = [
    (("upi",), PaymentMethod.UPI),
    (("credit card",), PaymentMethod.CREDIT_CARD),
    (("debit card",), PaymentMethod.DEBIT_CARD),
    (("neft", "imps", "rtgs"), PaymentMethod.NET_BANKING),
    (("atm",), PaymentMethod.CASH),
    (("cash",), PaymentMethod.CASH),
    (("wallet",), PaymentMethod.WALLET),
]

PAYMENT_METHOD_CATEGORY_HINTS = [
    ("upi", PaymentMethod.UPI),
    ("credit_card", PaymentMethod.CREDIT_CARD),
    ("atm", PaymentMethod.CASH),
]

# Who paid the account holder
CREDIT_COUNTERPARTY_PATTERNS = [
    re.compile(r"from\s+([A-Z\s]+)", re.IGNORECASE),
    re.compile(r"from\s+([a-z\s]+(?:bank|ltd|limited))", re.IGNORECASE),
    re.compile(r"received\s+from\s+([a-z\s]+)", re.IGNORECASE),
    re.compile(r"credited\s+by\s+([a-z\s]+)", re.IGNORECASE),
    re.compile(r"sender\s*:\s*([a-z\s]+)", re.IGNORECASE),
]

# Whom the account holder paid
DEBIT_COUNTERPARTY_PATTERNS = [
    re.compile(r"to\s+([a-z\s]+(?:bank|ltd|limited))", re.IGNORECASE),
    re.compile(r"paid\s+to\s+([a-z\s]+)", re.IGNORECASE),
    re.compile(r"sent\s+to\s+([a-z\s]+)", re.IGNORECASE),
    re.compile(r"recipient\s*:\s*([a-z\s]+)", re.IGNORECASE),
    re.compile(r"debited[^;]+;\s*([a-z\s]+)\s+credited", re.IGNORECASE),
]

# Fallback counterparty candidates: a capitalized alphabetic word
FALLBACK_WORD_PATTERN = re.compile(r"[A-Z][A-Za-z&'-]*")

# Capitalized words that are SMS boilerplate rather than a party name
COUNTERPARTY_STOP_WORDS = frozenset(
    [
        "ICICI",
        "BANK",
        "ACCT",
        "UPI",
        "CALL",
        "SMS",
        "BLOCK",
        "DEAR",
        "CUSTOMER",
        "VPA",
        "REF",
        "INR",
        "AVL",
        "BAL",
        "NEFT",
        "IMPS",
        "RTGS",
        "ATM",
        "HDFC",
        "SBI",
        "AXIS",
        "KOTAK",
        "YES",
        "TXN",
        "INFO",
        "NOT",
        "YOU",
        "YOUR",
        "THE",
        "FOR",
        "ALERT",
        "CARD",
        "CREDIT",
        "DEBIT",
        "ACCOUNT",
    ]
    + [month.upper() for month in MONTH_ABBREVIATIONS]
)


@dataclass
class ExtractedFields:
    """Fields extracted from one message, before classification metadata is attached."""

    amount: Money
    occurred_at: FinancialTimestamp
    direction: Direction
    payment_method: PaymentMethod
    bank_name: str
    counterparty: str | None


def parse_amount(text: str) -> Money:
    """
    Parse the first currency-prefixed amount in text.

    Raises:
        ExtractionError: If there is no amount, it is not a number, or it is not positive
    """
    match = AMOUNT_PATTERN.search(text)
    if not match:
        raise ExtractionError("No amount found")

    try:
        paise = parse_rupees_to_paise(match.group(1))
    except ValueError as e:
        raise ExtractionError(f"Invalid amount literal: {match.group(1)!r}") from e

    if paise <= 0:
        raise ExtractionError(f"Non-positive amount: {match.group(1)!r}")
    return Money.from_paise(paise)


def extract_amount(text: str) -> Money | None:
    """Amount of the message, or None when it cannot be extracted."""
    try:
        return parse_amount(text)
    except ExtractionError as e:
        logger.debug("Amount extraction failed: %s", e)
        return None


def extract_date(text: str, received_at: FinancialTimestamp) -> FinancialTimestamp:
    """
    Date printed in the message (DD-MMM-YY or DD/MMM/YYYY), else the receipt time.

    Args:
        text: Message text
        received_at: When the SMS was received

    Returns:
        Midnight UTC of the textual date, or received_at
    """
    parsed = parse_textual_date(text)
    return parsed if parsed is not None else received_at


def extract_bank_name(text: str) -> str:
    """First known bank named in the text, or "Unknown Bank"."""
    lowered = text.lower()
    for bank in KNOWN_BANKS:
        if bank.lower() in lowered:
            return bank
    return UNKNOWN_BANK


def determine_direction(text: str, category: Category) -> Direction:
    """Debit or credit from explicit wording, then category hints; debit by default."""
    lowered = text.lower()
    for cue, direction in DIRECTION_TEXT_CUES:
        if cue in lowered:
            return direction

    for fragments, direction in DIRECTION_CATEGORY_HINTS:
        if any(fragment in category.value for fragment in fragments):
            return direction

    return Direction.DEBIT


def determine_payment_method(text: str, category: Category) -> PaymentMethod:
    """Payment rail named in the text, then category hints; unknown by default."""
    lowered = text.lower()
    for cues, method in PAYMENT_METHOD_TEXT_CUES:
        if any(cue in lowered for cue in cues):
            return method

    for fragment, method in PAYMENT_METHOD_CATEGORY_HINTS:
        if fragment in category.value:
            return method

    return PaymentMethod.UNKNOWN


def extract_counterparty(text: str, direction: Direction) -> str | None:
    """
    Name of the other party to the transaction.

    Tries the direction-specific patterns in order and returns the first
    non-blank capture, trimmed and upper-cased. Otherwise falls back to the
    first capitalized word (longer than two characters) that is not SMS
    boilerplate, returned as written without surrounding punctuation.
    """
    patterns = CREDIT_COUNTERPARTY_PATTERNS if direction == Direction.CREDIT else DEBIT_COUNTERPARTY_PATTERNS
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip().upper()

    for word in text.split():
        candidate = word.strip(string.punctuation)
        if len(candidate) <= 2 or not FALLBACK_WORD_PATTERN.fullmatch(candidate):
            continue
        if candidate.upper() in COUNTERPARTY_STOP_WORDS:
            continue
        return candidate

    return None


def extract_fields(text: str, received_at: FinancialTimestamp, category: Category) -> ExtractedFields | None:
    """
    Extract every transaction field from a message.

    Args:
        text: Message text (case preserved)
        received_at: When the SMS was received
        category: Category assigned by the categorizer

    Returns:
        ExtractedFields, or None when the mandatory amount is missing
    """
    amount = extract_amount(text)
    if amount is None:
        return None

    direction = determine_direction(text, category)
    return ExtractedFields(
        amount=amount,
        occurred_at=extract_date(text, received_at),
        direction=direction,
        payment_method=determine_payment_method(text, category),
        bank_name=extract_bank_name(text),
        counterparty=extract_counterparty(text, direction),
    )
