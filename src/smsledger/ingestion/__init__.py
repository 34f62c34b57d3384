"""
SMS Ingestion Package

Batch ingestion of bank SMS into the record store.

This package provides:
- Message sources for in-memory lists and exported JSON/CSV inboxes
- Natural-key duplicate suppression per batch and against the store
- The transaction ingestion pipeline with per-batch statistics
- Credit-card statement/payment sync followed by bill matching
- A correction pass that re-derives transaction direction and counterparty
"""

from .dedup import Deduplicator
from .models import CardSyncStats, IngestionStats
from .orchestrator import (
    classify_message,
    correct_transaction_fields,
    ingest_messages,
    process_message,
    sync_credit_card_messages,
)
from .sources import (
    DEFAULT_MAX_MESSAGES,
    CsvMessageSource,
    JsonMessageSource,
    ListMessageSource,
    MessageSource,
    open_message_source,
)

__all__ = [
    # Pipeline
    "classify_message",
    "correct_transaction_fields",
    "ingest_messages",
    "process_message",
    "sync_credit_card_messages",
    # Results
    "CardSyncStats",
    "IngestionStats",
    # Dedup
    "Deduplicator",
    # Sources
    "DEFAULT_MAX_MESSAGES",
    "CsvMessageSource",
    "JsonMessageSource",
    "ListMessageSource",
    "MessageSource",
    "open_message_source",
]
