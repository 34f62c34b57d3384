"""
Core Utilities Package

Shared primitives, data models, and infrastructure used by every stage of the
SMS ledger pipeline.

This package provides:
- Rupee handling with integer paise arithmetic for exact comparisons
- FinancialTimestamp for SMS receipt times and textual message dates
- Record models for transactions, credit-card bills and payments
- The RecordStore protocol and domain exceptions
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    reload_config,
)
from .currency import (
    format_paise,
    paise_to_rupees_str,
    parse_rupees_to_decimal,
    parse_rupees_to_paise,
    safe_rupees_to_paise,
)
from .datastore import RecordStore, field_equals
from .dates import FinancialTimestamp, parse_textual_date
from .errors import (
    DuplicateRecordError,
    ExtractionError,
    RecordNotFoundError,
    SmsLedgerError,
    SourceUnavailableError,
    StoreError,
)
from .models import (
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
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Currency utilities
    "format_paise",
    "paise_to_rupees_str",
    "parse_rupees_to_decimal",
    "parse_rupees_to_paise",
    "safe_rupees_to_paise",
    # Primitives
    "FinancialTimestamp",
    "Money",
    "parse_textual_date",
    # Data models
    "BillStatus",
    "CreditCardBill",
    "CreditCardPayment",
    "Direction",
    "EntityType",
    "PaymentMethod",
    "RawMessage",
    "TransactionRecord",
    "natural_key_of",
    # Storage boundary
    "RecordStore",
    "field_equals",
    # Errors
    "DuplicateRecordError",
    "ExtractionError",
    "RecordNotFoundError",
    "SmsLedgerError",
    "SourceUnavailableError",
    "StoreError",
]
