#!/usr/bin/env python3
"""Unit tests for the in-memory record store."""

import pytest

from smsledger.core.datastore import field_equals
from smsledger.core.errors import DuplicateRecordError, RecordNotFoundError, StoreError
from smsledger.core.models import EntityType
from smsledger.storage.memory import InMemoryRecordStore


def bill_fields(card="1606", period="JUN-25", total=450000):
    return {
        "card_number_last4": card,
        "bank_name": "YES BANK",
        "bill_period": period,
        "total_amount": total,
        "minimum_due": 22500,
        "due_date": "2025-07-02T00:00:00.000Z",
        "statement_date": "2025-06-20T00:00:00.000Z",
        "status": "unpaid",
        "paid_amount": 0,
        "remaining_amount": total,
        "source_text": "statement",
    }


class FailingCommitStore(InMemoryRecordStore):
    """Store whose persistence step always fails."""

    def _commit(self) -> None:
        raise OSError("disk full")


class TestInsert:
    """Test InMemoryRecordStore.insert()."""

    @pytest.mark.storage
    def test_ids_are_sequential_per_entity(self, store):
        assert store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="MAY-25")) == 1
        assert store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="JUN-25")) == 2
        assert store.insert(EntityType.CREDIT_CARD_PAYMENT, {"card_number_last4": "1606"}) == 1

    @pytest.mark.storage
    def test_duplicate_natural_key_is_rejected(self, store):
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields())

        with pytest.raises(DuplicateRecordError) as exc_info:
            store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(total=999))

        assert exc_info.value.entity_type == "credit_card_bills"
        assert store.count(EntityType.CREDIT_CARD_BILL) == 1

    @pytest.mark.storage
    def test_caller_id_is_ignored(self, store):
        record_id = store.insert(EntityType.CREDIT_CARD_BILL, {**bill_fields(), "id": 42})
        assert record_id == 1
        assert store.query(EntityType.CREDIT_CARD_BILL)[0]["id"] == 1

    @pytest.mark.storage
    def test_failed_commit_rolls_back(self):
        failing = FailingCommitStore()

        with pytest.raises(StoreError):
            failing.insert(EntityType.CREDIT_CARD_BILL, bill_fields())

        assert failing.count(EntityType.CREDIT_CARD_BILL) == 0
        # The key is free again
        with pytest.raises(StoreError):
            failing.insert(EntityType.CREDIT_CARD_BILL, bill_fields())


class TestQuery:
    """Test InMemoryRecordStore.query()."""

    @pytest.mark.storage
    def test_predicate_filters_in_insertion_order(self, store):
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(card="1606", period="MAY-25"))
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(card="9003", period="MAY-25"))
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(card="1606", period="JUN-25"))

        records = store.query(EntityType.CREDIT_CARD_BILL, field_equals(card_number_last4="1606"))

        assert [record["bill_period"] for record in records] == ["MAY-25", "JUN-25"]

    @pytest.mark.storage
    def test_results_are_copies(self, store):
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields())

        store.query(EntityType.CREDIT_CARD_BILL)[0]["status"] = "fully_paid"

        assert store.query(EntityType.CREDIT_CARD_BILL)[0]["status"] == "unpaid"

    @pytest.mark.storage
    def test_empty_store(self, store):
        assert store.query(EntityType.TRANSACTION) == []


class TestUpdate:
    """Test InMemoryRecordStore.update()."""

    @pytest.mark.storage
    def test_partial_update(self, store):
        record_id = store.insert(EntityType.CREDIT_CARD_BILL, bill_fields())

        store.update(EntityType.CREDIT_CARD_BILL, record_id, {"status": "fully_paid", "remaining_amount": 0})

        record = store.query(EntityType.CREDIT_CARD_BILL)[0]
        assert record["status"] == "fully_paid"
        assert record["remaining_amount"] == 0
        assert record["total_amount"] == 450000

    @pytest.mark.storage
    def test_unknown_id(self, store):
        with pytest.raises(RecordNotFoundError):
            store.update(EntityType.CREDIT_CARD_BILL, 99, {"status": "fully_paid"})

    @pytest.mark.storage
    def test_key_change_to_existing_key_is_rejected(self, store):
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="MAY-25"))
        second = store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="JUN-25"))

        with pytest.raises(DuplicateRecordError):
            store.update(EntityType.CREDIT_CARD_BILL, second, {"bill_period": "MAY-25"})

        assert store.query(EntityType.CREDIT_CARD_BILL, field_equals(id=second))[0]["bill_period"] == "JUN-25"

    @pytest.mark.storage
    def test_key_change_reindexes(self, store):
        record_id = store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="MAY-25"))

        store.update(EntityType.CREDIT_CARD_BILL, record_id, {"bill_period": "APR-25"})

        # The old key is free, the new one is taken
        store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="MAY-25"))
        with pytest.raises(DuplicateRecordError):
            store.insert(EntityType.CREDIT_CARD_BILL, bill_fields(period="APR-25"))
