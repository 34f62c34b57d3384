#!/usr/bin/env python3
"""
RecordStore Protocol - Standard interface for record persistence.

Separates the extraction, deduplication and matching logic from storage
mechanics. Records cross the store boundary as plain dicts (see the to_dict /
from_dict methods in core.models); stores assign ids on insert and enforce the
natural-key uniqueness of each entity type.
"""

from collections.abc import Callable
from typing import Any, Protocol

from .models import EntityType

Record = dict[str, Any]
Predicate = Callable[[Record], bool]


class RecordStore(Protocol):
    """
    Protocol for record persistence.

    Implementations must make each insert/update visible atomically and must
    raise DuplicateRecordError when an insert would break the natural-key
    uniqueness of its entity type.
    """

    def insert(self, entity_type: EntityType, fields: Record) -> int:
        """
        Insert a new record.

        Args:
            entity_type: Kind of record
            fields: Record fields (any "id" entry is ignored)

        Returns:
            Id assigned to the new record

        Raises:
            DuplicateRecordError: If a record with the same natural key exists
            StoreError: If the record cannot be persisted
        """
        ...

    def query(self, entity_type: EntityType, predicate: Predicate | None = None) -> list[Record]:
        """
        Return copies of all records of a type matching a predicate.

        Args:
            entity_type: Kind of record
            predicate: Filter on the record dict; None selects every record

        Returns:
            Matching records in insertion order
        """
        ...

    def update(self, entity_type: EntityType, record_id: int, fields: Record) -> None:
        """
        Update fields of an existing record.

        Args:
            entity_type: Kind of record
            record_id: Id returned by insert
            fields: Fields to overwrite

        Raises:
            RecordNotFoundError: If no record has this id
            DuplicateRecordError: If the update would duplicate a natural key
        """
        ...


def field_equals(**expected: Any) -> Predicate:
    """
    Build a predicate selecting records whose fields equal the given values.

    Example:
        store.query(EntityType.CREDIT_CARD_BILL, field_equals(card_number_last4="1606"))
    """

    def predicate(record: Record) -> bool:
        return all(record.get(name) == value for name, value in expected.items())

    return predicate
