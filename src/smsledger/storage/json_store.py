#!/usr/bin/env python3
"""
JSON File Record Store

Persists every record to a single pretty-printed JSON file. The file is
rewritten atomically after each insert or update, so a crash never leaves a
half-written store behind.

File layout:
    {
      "next_ids": {"transactions": 3, ...},
      "transactions": [{...}, ...],
      "credit_card_bills": [...],
      "credit_card_payments": [...]
    }
"""

import json
import logging
from pathlib import Path

from ..core.errors import StoreError
from ..core.json_utils import read_json, write_json
from .memory import InMemoryRecordStore

logger = logging.getLogger(__name__)


class JsonRecordStore(InMemoryRecordStore):
    """RecordStore backed by one JSON file."""

    def __init__(self, store_file: Path | str):
        """
        Open (or create on first write) a JSON record store.

        Args:
            store_file: Path to the JSON file

        Raises:
            StoreError: If an existing file cannot be read or is malformed
        """
        super().__init__()
        self.store_file = Path(store_file)

        if self.store_file.exists():
            try:
                data = read_json(self.store_file)
            except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
                raise StoreError(f"Cannot read record store {self.store_file}: {e}") from e
            if not isinstance(data, dict):
                raise StoreError(f"Record store {self.store_file} is not a JSON object")

            try:
                self._restore(data)
            except (KeyError, TypeError, ValueError) as e:
                raise StoreError(f"Malformed record store {self.store_file}: {e}") from e

            logger.info(
                "Loaded record store %s (%s)",
                self.store_file,
                ", ".join(f"{entity}: {len(data.get(entity, []))}" for entity in data if entity != "next_ids"),
            )

    def _commit(self) -> None:
        write_json(self.store_file, self._snapshot())
