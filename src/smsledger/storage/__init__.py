"""
Record Store Implementations

RecordStore backends for the SMS ledger:
- InMemoryRecordStore: process-local store (tests, one-shot runs)
- JsonRecordStore: single JSON file rewritten atomically on every change
"""

from .json_store import JsonRecordStore
from .memory import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "JsonRecordStore",
]
