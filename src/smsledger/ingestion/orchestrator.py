#!/usr/bin/env python3
"""
Ingestion Orchestrator

Drives batches of raw SMS through the pipeline:

    read -> categorize -> extract -> score -> dedup check -> insert | skip

Messages without an extractable amount and duplicates are skipped silently
and counted. A store failure on one record is logged and the batch moves on.
Only an unreadable message source fails the whole batch.

Also provides the credit-card sync pass (statements and payments, followed by
bill matching) and the correction pass that re-derives transaction direction
and counterparty from the stored message text.
"""

import logging
from collections import Counter
from typing import Any

from ..core.datastore import RecordStore
from ..core.errors import DuplicateRecordError, SourceUnavailableError, StoreError
from ..core.models import EntityType, RawMessage, TransactionRecord, natural_key_of
from ..parsing.card_statements import is_card_sender, parse_credit_card_bill, parse_credit_card_payment
from ..parsing.categorizer import Category, categorize
from ..parsing.confidence import ConfidenceScorer
from ..parsing.extractor import determine_direction, extract_counterparty, extract_fields
from ..reconciliation.matcher import match_bills_and_payments
from .dedup import Deduplicator
from .models import CardSyncStats, IngestionStats
from .sources import MessageSource

logger = logging.getLogger(__name__)


def classify_message(text: str) -> tuple[Category, float]:
    """Category and confidence of a message."""
    category = categorize(text)
    return category, ConfidenceScorer.calculate_confidence(text, category)


def process_message(message: RawMessage) -> TransactionRecord | None:
    """
    Turn one SMS into a transaction record (not yet stored).

    Args:
        message: Raw SMS

    Returns:
        TransactionRecord, or None when the mandatory amount cannot be extracted
    """
    category, confidence = classify_message(message.text)
    fields = extract_fields(message.text, message.received_at, category)
    if fields is None:
        return None

    return TransactionRecord(
        amount=fields.amount,
        occurred_at=fields.occurred_at,
        direction=fields.direction,
        payment_method=fields.payment_method,
        bank_name=fields.bank_name,
        counterparty=fields.counterparty,
        category=category.value,
        confidence=confidence,
        source_text=message.text,
    )


def _insert_unless_duplicate(
    store: RecordStore, deduplicator: Deduplicator, entity_type: EntityType, fields: dict[str, Any]
) -> int | None:
    """
    Insert a record unless it duplicates an existing one.

    Returns:
        New record id, or None for a duplicate

    Raises:
        StoreError: If the store fails for another reason
    """
    if deduplicator.is_duplicate(entity_type, fields):
        return None
    try:
        record_id = store.insert(entity_type, fields)
    except DuplicateRecordError:
        logger.debug("Store rejected duplicate %s record", entity_type.value)
        return None
    deduplicator.mark_accepted(entity_type, fields)
    return record_id


def ingest_messages(source: MessageSource, store: RecordStore) -> IngestionStats:
    """
    Ingest one batch of SMS as transactions.

    Args:
        source: Where to read the batch from
        store: Record store receiving new transactions

    Returns:
        IngestionStats for this batch
    """
    try:
        messages = source.read_messages()
    except SourceUnavailableError as e:
        logger.error("Message source unavailable: %s", e)
        return IngestionStats(success=False, error=str(e))

    stats = IngestionStats()
    deduplicator = Deduplicator(store)
    category_counts: Counter[str] = Counter()
    confidences: list[float] = []

    for message in messages:
        stats.total_seen += 1

        record = process_message(message)
        if record is None:
            logger.debug("No amount in message from %s, skipping", message.source_address or "unknown sender")
            stats.failed += 1
            continue

        fields = record.to_dict()
        try:
            record_id = _insert_unless_duplicate(store, deduplicator, EntityType.TRANSACTION, fields)
        except StoreError as e:
            logger.warning("Failed to store transaction (%s, %s): %s", record.amount, record.category, e)
            stats.failed += 1
            continue

        if record_id is None:
            stats.duplicates += 1
            continue

        stats.inserted += 1
        category_counts[record.category] += 1
        confidences.append(record.confidence)

    stats.per_category_counts = dict(category_counts)
    if confidences:
        stats.average_confidence = round(sum(confidences) / len(confidences), 2)

    logger.info(
        "Ingested %d of %d messages (%d duplicates, %d failed)",
        stats.inserted,
        stats.total_seen,
        stats.duplicates,
        stats.failed,
    )
    return stats


def sync_credit_card_messages(
    source: MessageSource,
    store: RecordStore,
    run_matcher: bool = True,
    sender_keywords: list[str] | None = None,
) -> CardSyncStats:
    """
    Extract credit-card bills and payments from bank SMS, then match them.

    Only messages from bank or card senders are considered. Each message is
    tried as a bill statement first and as a payment confirmation second.

    Args:
        source: Where to read the batch from
        store: Record store receiving bills and payments
        run_matcher: Run bill/payment matching after the sync
        sender_keywords: Sender address keywords (defaults to the built-in bank list)

    Returns:
        CardSyncStats for this run
    """
    try:
        messages = source.read_messages()
    except SourceUnavailableError as e:
        logger.error("Message source unavailable: %s", e)
        return CardSyncStats(success=False, error=str(e))

    stats = CardSyncStats()
    deduplicator = Deduplicator(store)

    for message in messages:
        if not is_card_sender(message.source_address, sender_keywords):
            continue

        bill = parse_credit_card_bill(message.text, message.received_at)
        if bill is not None:
            stats.bills_found += 1
            try:
                bill_id = _insert_unless_duplicate(store, deduplicator, EntityType.CREDIT_CARD_BILL, bill.to_dict())
                if bill_id is not None:
                    stats.bills_inserted += 1
            except StoreError as e:
                logger.warning("Failed to store bill for card %s (%s): %s", bill.card_number_last4, bill.bill_period, e)
            continue

        payment = parse_credit_card_payment(message.text, message.received_at)
        if payment is not None:
            stats.payments_found += 1
            try:
                payment_id = _insert_unless_duplicate(
                    store, deduplicator, EntityType.CREDIT_CARD_PAYMENT, payment.to_dict()
                )
                if payment_id is not None:
                    stats.payments_inserted += 1
            except StoreError as e:
                logger.warning("Failed to store payment for card %s: %s", payment.card_number_last4, e)

    logger.info(
        "Card sync: %d/%d bills and %d/%d payments inserted",
        stats.bills_inserted,
        stats.bills_found,
        stats.payments_inserted,
        stats.payments_found,
    )

    if run_matcher:
        stats.matches_created = match_bills_and_payments(store).matches_created

    return stats


def _stored_category(record: dict[str, Any]) -> Category:
    try:
        return Category(record.get("category"))
    except ValueError:
        return categorize(record.get("source_text", ""))


def correct_transaction_fields(store: RecordStore) -> int:
    """
    Re-derive direction and counterparty of stored transactions from their text.

    Records whose corrected natural key would collide with another stored
    transaction are left unchanged.

    Args:
        store: Record store holding transactions

    Returns:
        Number of transactions updated
    """
    corrected = 0

    for record in store.query(EntityType.TRANSACTION):
        text = record.get("source_text", "")
        direction = determine_direction(text, _stored_category(record))
        counterparty = extract_counterparty(text, direction)

        changes = {"direction": direction.value, "counterparty": counterparty}
        if all(record.get(name) == value for name, value in changes.items()):
            continue

        new_key = natural_key_of(EntityType.TRANSACTION, {**record, **changes})
        clashes = store.query(
            EntityType.TRANSACTION,
            lambda other: other["id"] != record["id"] and natural_key_of(EntityType.TRANSACTION, other) == new_key,
        )
        if clashes:
            logger.warning(
                "Skipping correction of transaction %s: would duplicate transaction %s", record["id"], clashes[0]["id"]
            )
            continue

        try:
            store.update(EntityType.TRANSACTION, record["id"], changes)
        except DuplicateRecordError as e:
            logger.warning("Skipping correction of transaction %s: %s", record["id"], e)
            continue

        logger.debug(
            "Corrected transaction %s: %s/%s -> %s/%s",
            record["id"],
            record.get("direction"),
            record.get("counterparty"),
            changes["direction"],
            changes["counterparty"],
        )
        corrected += 1

    logger.info("Corrected %d transactions", corrected)
    return corrected
