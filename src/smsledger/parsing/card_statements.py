#!/usr/bin/env python3
"""
Credit Card Statement Parser

Extracts credit-card bill statements and payment confirmations from bank SMS.

Issuers send a handful of fixed templates. Each template is an entry in an
ordered list and the first one that matches the message wins, so a more
specific template must come before a more general one.

Bill templates:
- statement_summary: "YES BANK Credit Card XX1606 JUN-25 statement: Total due
  INR 5561.82 Min due INR 278.09 Due by 02-JUL-2025" (YES, ICICI and HDFC
  all use this layout)
- statement_email: "ICICI Bank Credit Card XX9003 statement is sent to
  a@b.com total of Rs 4,669.69 or minimum of Rs 240.00 is due by 05-JUL-25"
- generic: "<BANK> Credit Card <CARD> ... Total due <amt> ... Min due <amt>
  ... Due by DD-MMM-YYYY"

Payment templates:
- bbps: "Payment received of Rs 4500.00 has been received on your YES BANK
  Credit Card XX1606 through BBPS on 04-JUL-25"
- upi: "UPI of Rs 2000 has been credited to your ICICI Bank Credit Card XX9003"
- general: "Payment of Rs 1000 has been received on your HDFC Bank Credit Card XX5678"
"""

import logging
import re
from dataclasses import dataclass

from ..core.config import DEFAULT_CARD_SENDER_KEYWORDS
from ..core.currency import parse_rupees_to_paise
from ..core.dates import FinancialTimestamp, month_index, parse_textual_date
from ..core.models import BillStatus, CreditCardBill, CreditCardPayment
from ..core.money import Money

logger = logging.getLogger(__name__)

_ISSUER = r"(?P<bank>[A-Z\s]+)\s+(?:Bank\s+)?(?:Credit\s+Card|Debit\s+Card)\s+(?P<card>[A-Z0-9]+)"
_AMOUNT = r"[\d,]+\.?\d*"


@dataclass(frozen=True)
class BillTemplate:
    """A bill statement layout; named groups bank, card, total, minimum, due and optionally period."""

    name: str
    pattern: re.Pattern


@dataclass(frozen=True)
class PaymentTemplate:
    """
    A payment confirmation layout.

    Named groups: amount, bank, card, and optionally system (the payment
    network, used as the method) and date. Without a date group the payment is
    dated at the SMS receipt time.
    """

    name: str
    pattern: re.Pattern
    default_method: str


BILL_TEMPLATES = [
    BillTemplate(
        name="statement_summary",
        pattern=re.compile(
            _ISSUER
            + r"\s+(?P<period>[A-Z]+-\d{2})\s+statement:\s*"
            + rf"Total\s+due\s+(?:INR|Rs\.?)\s*(?P<total>{_AMOUNT})\s+"
            + rf"Min\s+due\s+(?:INR|Rs\.?)\s*(?P<minimum>{_AMOUNT})\s+"
            + r"Due\s+by\s+(?P<due>\d{2}-[A-Z]+-\d{4})",
            re.IGNORECASE,
        ),
    ),
    BillTemplate(
        name="statement_email",
        pattern=re.compile(
            _ISSUER
            + r"\s+statement\s+is\s+sent\s+to\s+[^@]+@[^\s]+\s+"
            + rf"total\s+of\s+(?:rs|inr)\s*(?P<total>{_AMOUNT})\s+"
            + rf"or\s+minimum\s+of\s+(?:rs|inr)\s*(?P<minimum>{_AMOUNT})\s+"
            + r"is\s+due\s+by\s+(?P<due>\d{2}-[A-Z]+-\d{2,4})",
            re.IGNORECASE,
        ),
    ),
    BillTemplate(
        name="generic",
        pattern=re.compile(
            _ISSUER
            + rf".*?Total\s+due\s+(?:INR|Rs\.?)\s*(?P<total>{_AMOUNT})"
            + rf".*?Min\s+due\s+(?:INR|Rs\.?)\s*(?P<minimum>{_AMOUNT})"
            + r".*?Due\s+by\s+(?P<due>\d{2}-[A-Z]+-\d{2,4})",
            re.IGNORECASE,
        ),
    ),
]

PAYMENT_TEMPLATES = [
    PaymentTemplate(
        name="bbps",
        pattern=re.compile(
            rf"payment\s+received\s+of\s+(?:rs|inr)?\s*(?P<amount>{_AMOUNT})\s+"
            + r"has\s+been\s+received\s+on\s+your\s+(?P<bank>[A-Z\s]+)\s+"
            + r"(?:Bank\s+)?(?:Credit\s+Card|Debit\s+Card|Account)\s+(?P<card>[A-Z0-9]+)\s+"
            + r"through\s+(?P<system>[A-Z\s]+)\s+on\s+(?P<date>\d{2}-[A-Z]+-\d{2,4})",
            re.IGNORECASE,
        ),
        default_method="BBPS",
    ),
    PaymentTemplate(
        name="upi",
        pattern=re.compile(
            rf"upi\s+(?:of\s+)?(?:rs|inr)?\s*(?P<amount>{_AMOUNT})\s+"
            + r"(?:has\s+been\s+)?(?:received|credited|paid)\s+(?:to\s+your\s+)?(?P<bank>[A-Z\s]+)\s+"
            + r"(?:Bank\s+)?(?:Credit\s+Card|Debit\s+Card|Account)\s+(?P<card>[A-Z0-9]+)",
            re.IGNORECASE,
        ),
        default_method="UPI",
    ),
    PaymentTemplate(
        name="general",
        pattern=re.compile(
            rf"(?:payment|bill)\s+(?:of\s+)?(?:rs|inr)?\s*(?P<amount>{_AMOUNT})\s+"
            + r"(?:has\s+been\s+)?(?:received|credited|paid)\s+(?:on\s+your\s+)?(?P<bank>[A-Z\s]+)\s+"
            + r"(?:Bank\s+)?(?:Credit\s+Card|Debit\s+Card|Account)\s+(?P<card>[A-Z0-9]+)",
            re.IGNORECASE,
        ),
        default_method="General",
    ),
]

# Upper-case statement cycle token such as JUN-25
BILL_PERIOD_PATTERN = re.compile(r"\b([A-Z]{3})-(\d{2})\b")


def is_card_sender(address: str, keywords: list[str] | None = None) -> bool:
    """
    Check whether an SMS sender address looks like a bank or card issuer.

    Args:
        address: Sender address, e.g. "VM-YESBNK" or "AX-ICICIB"
        keywords: Sender keywords (default HDFC, ICICI, SBI, AXIS, KOTAK, YES, BANK, CARD)
    """
    keywords = keywords if keywords is not None else DEFAULT_CARD_SENDER_KEYWORDS
    if not address or not keywords:
        return False
    pattern = "|".join(re.escape(keyword) for keyword in keywords)
    return re.search(pattern, address, re.IGNORECASE) is not None


def _last4(card_number: str) -> str:
    return card_number[-4:]


def _parse_positive_amount(literal: str) -> Money | None:
    try:
        paise = parse_rupees_to_paise(literal)
    except ValueError:
        return None
    return Money.from_paise(paise) if paise > 0 else None


def _find_bill_period(text: str) -> str | None:
    """First upper-case MMM-YY token naming a real month."""
    for match in BILL_PERIOD_PATTERN.finditer(text):
        if month_index(match.group(1)) is not None:
            return f"{match.group(1)}-{match.group(2)}"
    return None


def _parse_card_date(date_text: str | None, received_at: FinancialTimestamp) -> FinancialTimestamp:
    """Dates like 02-JUL-2025 or 04-JULY-25, falling back to the receipt time."""
    if date_text:
        parsed = parse_textual_date(date_text, prefix_match=True)
        if parsed is not None:
            return parsed
        logger.debug("Unparsable card date %r, using receipt time", date_text)
    return received_at


def parse_credit_card_bill(text: str, received_at: FinancialTimestamp) -> CreditCardBill | None:
    """
    Parse a credit-card statement SMS.

    Args:
        text: Message text
        received_at: When the SMS was received (used as the statement date)

    Returns:
        New unpaid CreditCardBill, or None if no template matches or the total is not positive
    """
    for template in BILL_TEMPLATES:
        match = template.pattern.search(text)
        if not match:
            continue

        total = _parse_positive_amount(match.group("total"))
        if total is None:
            logger.debug("Rejected %s bill with non-positive total %r", template.name, match.group("total"))
            return None

        try:
            minimum = Money.from_paise(parse_rupees_to_paise(match.group("minimum")))
        except ValueError:
            logger.debug("Rejected %s bill with invalid minimum due %r", template.name, match.group("minimum"))
            return None

        period = match.groupdict().get("period")
        if period:
            bill_period = period.strip().upper()
        else:
            bill_period = _find_bill_period(text) or received_at.bill_period()

        logger.debug("Matched bill template %s", template.name)
        return CreditCardBill(
            card_number_last4=_last4(match.group("card")),
            bank_name=match.group("bank").strip(),
            bill_period=bill_period,
            total_amount=total,
            minimum_due=minimum,
            due_date=_parse_card_date(match.group("due"), received_at),
            statement_date=received_at,
            source_text=text,
            status=BillStatus.UNPAID,
            paid_amount=Money.zero(),
        )

    return None


def parse_credit_card_payment(text: str, received_at: FinancialTimestamp) -> CreditCardPayment | None:
    """
    Parse a credit-card payment confirmation SMS.

    Args:
        text: Message text
        received_at: When the SMS was received

    Returns:
        Unmatched CreditCardPayment, or None if no template matches or the amount is not positive
    """
    for template in PAYMENT_TEMPLATES:
        match = template.pattern.search(text)
        if not match:
            continue

        amount = _parse_positive_amount(match.group("amount"))
        if amount is None:
            logger.debug("Rejected %s payment with amount %r", template.name, match.group("amount"))
            return None

        groups = match.groupdict()
        system = (groups.get("system") or "").strip()

        logger.debug("Matched payment template %s", template.name)
        return CreditCardPayment(
            card_number_last4=_last4(match.group("card")),
            bank_name=match.group("bank").strip(),
            payment_amount=amount,
            payment_date=_parse_card_date(groups.get("date"), received_at),
            payment_method=system or template.default_method,
            source_text=text,
        )

    return None
