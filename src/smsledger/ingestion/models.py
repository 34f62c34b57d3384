#!/usr/bin/env python3
"""
Ingestion Result Models

Statistics returned by one ingestion or card sync run. A fresh object is
created per run and returned to the caller; nothing is shared between runs.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IngestionStats:
    """
    Outcome of one transaction ingestion batch.

    failed counts messages without an extractable amount plus records the
    store failed to insert. per_category_counts and average_confidence cover
    inserted records only.
    """

    total_seen: int = 0
    inserted: int = 0
    failed: int = 0
    duplicates: int = 0
    per_category_counts: dict[str, int] = field(default_factory=dict)
    average_confidence: float = 0.0
    success: bool = True
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "total_seen": self.total_seen,
            "inserted": self.inserted,
            "failed": self.failed,
            "duplicates": self.duplicates,
            "per_category_counts": dict(self.per_category_counts),
            "average_confidence": self.average_confidence,
            "success": self.success,
            "error": self.error,
        }


@dataclass
class CardSyncStats:
    """Outcome of one credit-card statement/payment sync."""

    bills_found: int = 0
    payments_found: int = 0
    bills_inserted: int = 0
    payments_inserted: int = 0
    matches_created: int = 0
    success: bool = True
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "bills_found": self.bills_found,
            "payments_found": self.payments_found,
            "bills_inserted": self.bills_inserted,
            "payments_inserted": self.payments_inserted,
            "matches_created": self.matches_created,
            "success": self.success,
            "error": self.error,
        }
