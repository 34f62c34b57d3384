#!/usr/bin/env python3
"""Unit tests for batch and store duplicate detection."""

import pytest

from smsledger.core.models import EntityType
from smsledger.ingestion.dedup import Deduplicator
from smsledger.ingestion.orchestrator import process_message
from tests.fixtures.sms_samples import NEFT_CREDIT_SMS, UPI_DEBIT_SMS, make_message


def transaction_fields(text=UPI_DEBIT_SMS, received="2025-05-20"):
    return process_message(make_message(text, received)).to_dict()


class TestDeduplicator:
    """Test Deduplicator.is_duplicate()."""

    @pytest.mark.unit
    def test_new_record_is_not_duplicate(self, store):
        assert not Deduplicator(store).is_duplicate(EntityType.TRANSACTION, transaction_fields())

    @pytest.mark.unit
    def test_accepted_in_batch(self, store):
        deduplicator = Deduplicator(store)
        deduplicator.mark_accepted(EntityType.TRANSACTION, transaction_fields())

        assert deduplicator.is_duplicate(EntityType.TRANSACTION, transaction_fields())
        assert not deduplicator.is_duplicate(EntityType.TRANSACTION, transaction_fields(NEFT_CREDIT_SMS))

    @pytest.mark.unit
    def test_already_stored(self, store):
        store.insert(EntityType.TRANSACTION, transaction_fields())
        assert Deduplicator(store).is_duplicate(EntityType.TRANSACTION, transaction_fields())

    @pytest.mark.unit
    def test_receipt_time_is_not_part_of_the_key(self, store):
        """The same dated SMS received twice is one transaction."""
        store.insert(EntityType.TRANSACTION, transaction_fields(received="2025-05-20"))
        assert Deduplicator(store).is_duplicate(EntityType.TRANSACTION, transaction_fields(received="2025-05-21"))

    @pytest.mark.unit
    def test_entity_types_are_separate(self, store):
        deduplicator = Deduplicator(store)
        deduplicator.mark_accepted(EntityType.TRANSACTION, transaction_fields())
        assert not deduplicator.is_duplicate(EntityType.CREDIT_CARD_PAYMENT, transaction_fields())

    @pytest.mark.unit
    def test_any_key_field_difference_is_new(self, store):
        fields = transaction_fields()
        store.insert(EntityType.TRANSACTION, fields)

        assert not Deduplicator(store).is_duplicate(EntityType.TRANSACTION, {**fields, "amount": fields["amount"] + 1})
        assert not Deduplicator(store).is_duplicate(EntityType.TRANSACTION, {**fields, "counterparty": "SHOP"})
