"""
SMS Ledger - Structured financial records from bank SMS

Converts unstructured bank and card SMS into deduplicated transactions,
credit-card bill statements and credit-card payments, then reconciles
payments against the bills they settle.

Key Features:
- Ordered keyword categorization with confidence scoring
- Multi-pattern extraction of amount, date, bank, direction, payment method and counterparty
- Natural-key duplicate suppression, safe to re-run over the same inbox
- Scored bill/payment matching with partial settlement tracking

Domain Packages:
- core: Money, timestamps, data models, record store protocol, configuration
- parsing: Categorizer, field extractor, confidence scorer, card statement templates
- ingestion: Message sources, dedup, ingestion and card sync pipelines
- reconciliation: Bill/payment scoring and matching
- storage: In-memory and JSON-file record stores
- cli: Command-line interface

Example Usage:
    from smsledger.ingestion import ListMessageSource, ingest_messages
    from smsledger.storage import InMemoryRecordStore

    store = InMemoryRecordStore()
    stats = ingest_messages(ListMessageSource(messages), store)
"""

__version__ = "0.1.0"
__author__ = "SMS Ledger Developers"

# Export core primitives for easy access
from .core.config import Environment, get_config
from .core.models import CreditCardBill, CreditCardPayment, RawMessage, TransactionRecord
from .core.money import Money

# Export key pipeline functionality
from .ingestion import ingest_messages, sync_credit_card_messages
from .reconciliation import BillPaymentMatcher, MatchingResult

__all__ = [
    # Core models
    "CreditCardBill",
    "CreditCardPayment",
    "Money",
    "RawMessage",
    "TransactionRecord",
    # Pipeline
    "BillPaymentMatcher",
    "MatchingResult",
    "ingest_messages",
    "sync_credit_card_messages",
    # Configuration
    "Environment",
    "get_config",
]
