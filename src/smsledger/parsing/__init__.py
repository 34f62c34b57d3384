"""
SMS Parsing Package

Turns free-form bank SMS text into structured fields.

This package provides:
- Ordered keyword categorization into a closed set of categories
- Multi-pattern field extraction (amount, date, bank, direction, payment method, counterparty)
- Keyword-signal confidence scoring
- Credit-card bill statement and payment confirmation templates
"""

from .card_statements import (
    BILL_TEMPLATES,
    PAYMENT_TEMPLATES,
    is_card_sender,
    parse_credit_card_bill,
    parse_credit_card_payment,
)
from .categorizer import CATEGORY_RULES, Category, categorize
from .confidence import ConfidenceScorer
from .extractor import (
    ExtractedFields,
    determine_direction,
    determine_payment_method,
    extract_amount,
    extract_bank_name,
    extract_counterparty,
    extract_date,
    extract_fields,
    parse_amount,
)

__all__ = [
    # Categorization
    "CATEGORY_RULES",
    "Category",
    "categorize",
    # Confidence
    "ConfidenceScorer",
    # Field extraction
    "ExtractedFields",
    "determine_direction",
    "determine_payment_method",
    "extract_amount",
    "extract_bank_name",
    "extract_counterparty",
    "extract_date",
    "extract_fields",
    "parse_amount",
    # Card statements
    "BILL_TEMPLATES",
    "PAYMENT_TEMPLATES",
    "is_card_sender",
    "parse_credit_card_bill",
    "parse_credit_card_payment",
]
