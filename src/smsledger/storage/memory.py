#!/usr/bin/env python3
"""
In-Memory Record Store

Reference RecordStore implementation. Records live in per-entity dicts keyed by
id, with a natural-key index that rejects duplicates. A re-entrant lock guards
every read and write so that each insert or update becomes visible atomically.
"""

import copy
import logging
import threading
from typing import Any

from ..core.datastore import Predicate, Record
from ..core.errors import DuplicateRecordError, RecordNotFoundError, StoreError
from ..core.models import EntityType, natural_key_of

logger = logging.getLogger(__name__)


class InMemoryRecordStore:
    """
    RecordStore holding all records in process memory.

    Ids are positive integers assigned per entity type in insertion order.
    Subclasses persist state by overriding _commit(), which runs under the
    lock after every mutation; if it raises, the mutation is rolled back.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: dict[EntityType, dict[int, Record]] = {entity: {} for entity in EntityType}
        self._key_index: dict[EntityType, dict[tuple, int]] = {entity: {} for entity in EntityType}
        self._next_ids: dict[EntityType, int] = {entity: 1 for entity in EntityType}

    def insert(self, entity_type: EntityType, fields: Record) -> int:
        with self._lock:
            key = natural_key_of(entity_type, fields)
            if key in self._key_index[entity_type]:
                raise DuplicateRecordError(entity_type.value, key)

            record_id = self._next_ids[entity_type]
            record = copy.deepcopy(fields)
            record["id"] = record_id

            self._records[entity_type][record_id] = record
            self._key_index[entity_type][key] = record_id
            self._next_ids[entity_type] = record_id + 1

            try:
                self._commit()
            except Exception as e:
                del self._records[entity_type][record_id]
                del self._key_index[entity_type][key]
                self._next_ids[entity_type] = record_id
                raise StoreError(f"Failed to insert {entity_type.value} record: {e}") from e

            logger.debug("Inserted %s record %d", entity_type.value, record_id)
            return record_id

    def query(self, entity_type: EntityType, predicate: Predicate | None = None) -> list[Record]:
        with self._lock:
            records = self._records[entity_type].values()
            return [copy.deepcopy(record) for record in records if predicate is None or predicate(record)]

    def update(self, entity_type: EntityType, record_id: int, fields: Record) -> None:
        with self._lock:
            existing = self._records[entity_type].get(record_id)
            if existing is None:
                raise RecordNotFoundError(f"No {entity_type.value} record with id {record_id}")

            updated = {**existing, **copy.deepcopy(fields), "id": record_id}
            old_key = natural_key_of(entity_type, existing)
            new_key = natural_key_of(entity_type, updated)
            if new_key != old_key and new_key in self._key_index[entity_type]:
                raise DuplicateRecordError(entity_type.value, new_key)

            self._records[entity_type][record_id] = updated
            self._reindex(entity_type, old_key, new_key, record_id)

            try:
                self._commit()
            except Exception as e:
                self._records[entity_type][record_id] = existing
                self._reindex(entity_type, new_key, old_key, record_id)
                raise StoreError(f"Failed to update {entity_type.value} record {record_id}: {e}") from e

            logger.debug("Updated %s record %d", entity_type.value, record_id)

    def count(self, entity_type: EntityType) -> int:
        """Number of stored records of a type."""
        with self._lock:
            return len(self._records[entity_type])

    def _reindex(self, entity_type: EntityType, old_key: tuple, new_key: tuple, record_id: int) -> None:
        if old_key == new_key:
            return
        del self._key_index[entity_type][old_key]
        self._key_index[entity_type][new_key] = record_id

    def _commit(self) -> None:
        """Persist the current state; no-op in memory."""

    def _snapshot(self) -> dict[str, Any]:
        """All records and id counters as JSON-compatible data."""
        with self._lock:
            snapshot: dict[str, Any] = {
                "next_ids": {entity.value: self._next_ids[entity] for entity in EntityType},
            }
            for entity in EntityType:
                snapshot[entity.value] = [copy.deepcopy(record) for record in self._records[entity].values()]
            return snapshot

    def _restore(self, snapshot: dict[str, Any]) -> None:
        """Replace the current state with a snapshot produced by _snapshot()."""
        with self._lock:
            records: dict[EntityType, dict[int, Record]] = {entity: {} for entity in EntityType}
            key_index: dict[EntityType, dict[tuple, int]] = {entity: {} for entity in EntityType}
            next_ids: dict[EntityType, int] = {}

            for entity in EntityType:
                for record in snapshot.get(entity.value, []):
                    record_id = int(record["id"])
                    key = natural_key_of(entity, record)
                    if key in key_index[entity]:
                        raise DuplicateRecordError(entity.value, key)
                    records[entity][record_id] = record
                    key_index[entity][key] = record_id

                highest = max(records[entity], default=0)
                stored_next = int(snapshot.get("next_ids", {}).get(entity.value, 1))
                next_ids[entity] = max(stored_next, highest + 1)

            self._records = records
            self._key_index = key_index
            self._next_ids = next_ids
