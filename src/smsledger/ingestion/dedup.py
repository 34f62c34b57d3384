#!/usr/bin/env python3
"""
Duplicate Suppression

Decides whether a candidate record duplicates one already accepted in this
batch or already in the record store. Records are compared by the exact natural
key of their entity type; there is no fuzzy matching.
"""

import logging

from ..core.datastore import Record, RecordStore
from ..core.models import EntityType, natural_key_of

logger = logging.getLogger(__name__)


class Deduplicator:
    """
    Per-batch duplicate checker.

    Create one per ingestion run. The accepted-key set covers records inserted
    earlier in the same batch; the store query covers everything persisted
    before it.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self._accepted: dict[EntityType, set[tuple]] = {entity: set() for entity in EntityType}

    def is_duplicate(self, entity_type: EntityType, fields: Record) -> bool:
        """
        Check a candidate record against this batch and the store.

        Args:
            entity_type: Kind of record
            fields: Candidate record in dict form

        Returns:
            True if a record with the same natural key exists
        """
        key = natural_key_of(entity_type, fields)
        if key in self._accepted[entity_type]:
            logger.debug("Duplicate %s within batch: %s", entity_type.value, key)
            return True

        existing = self.store.query(entity_type, lambda record: natural_key_of(entity_type, record) == key)
        if existing:
            logger.debug("Duplicate %s already stored as id %s", entity_type.value, existing[0].get("id"))
            return True

        return False

    def mark_accepted(self, entity_type: EntityType, fields: Record) -> None:
        """Remember an inserted record's key for the rest of the batch."""
        self._accepted[entity_type].add(natural_key_of(entity_type, fields))
