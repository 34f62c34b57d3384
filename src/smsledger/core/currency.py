#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Rupee handling for the SMS ledger. Amounts are held as integer paise so that
bill/payment comparisons are exact.

Currency Systems:
- Internal calculations use paise: 100 paise = ₹1.00
- SMS text uses rupee literals: "Rs 4,669.69", "INR 5561.82", "₹500"
- Display uses rupee strings: "₹4669.69"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse literals through Decimal, then convert to integer paise
- Thousands separators are stripped, never interpreted
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

# Prefixes SMS senders put in front of amounts
CURRENCY_PREFIXES = ("₹", "rs.", "rs", "inr")


def paise_to_rupees_str(paise: int) -> str:
    """
    Convert paise to a rupee string using pure integer arithmetic.

    Args:
        paise: Amount in paise

    Returns:
        Formatted rupee string without symbol

    Example:
        paise_to_rupees_str(466969) -> "4669.69"
    """
    is_negative = paise < 0
    abs_paise = abs(int(paise))

    rupees = abs_paise // 100
    remainder = abs_paise % 100

    if is_negative:
        return f"-{rupees}.{remainder:02d}"
    return f"{rupees}.{remainder:02d}"


def clean_amount_literal(literal: str) -> str:
    """
    Strip currency prefixes, thousands separators and whitespace from a literal.

    Example:
        clean_amount_literal("Rs. 4,669.69") -> "4669.69"
    """
    clean = literal.strip()
    lowered = clean.lower()
    for prefix in CURRENCY_PREFIXES:
        if lowered.startswith(prefix):
            clean = clean[len(prefix):]
            break
    return clean.replace(",", "").strip()


def parse_rupees_to_decimal(literal: str) -> Decimal:
    """
    Parse a rupee literal into a Decimal.

    Args:
        literal: Amount text such as "4,669.69" or "Rs 500"

    Returns:
        Decimal value

    Raises:
        ValueError: If the literal is empty or not a finite number
    """
    clean = clean_amount_literal(literal)
    if not clean:
        raise ValueError(f"Empty amount literal: {literal!r}")

    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount literal: {literal!r}") from e

    if not value.is_finite():
        raise ValueError(f"Non-finite amount literal: {literal!r}")
    return value


def parse_rupees_to_paise(literal: str) -> int:
    """
    Parse a rupee literal to integer paise.

    Fractions beyond two places are rounded half-up.

    Examples:
        parse_rupees_to_paise("4,669.69") -> 466969
        parse_rupees_to_paise("500") -> 50000
        parse_rupees_to_paise("12.5") -> 1250

    Raises:
        ValueError: If the literal is not a number
    """
    value = parse_rupees_to_decimal(literal)
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def safe_rupees_to_paise(literal: Union[str, int, None]) -> int:
    """
    Convert a rupee literal to paise, returning 0 for anything unparsable.

    Examples:
        safe_rupees_to_paise("Rs 45.99") -> 4599
        safe_rupees_to_paise("N/A") -> 0
        safe_rupees_to_paise(None) -> 0
    """
    if literal is None:
        return 0
    if isinstance(literal, int):
        return literal * 100
    try:
        return parse_rupees_to_paise(str(literal))
    except ValueError:
        return 0


def format_paise(paise: int) -> str:
    """Format paise as rupee string with ₹ prefix."""
    return f"₹{paise_to_rupees_str(paise)}"
