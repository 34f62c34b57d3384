#!/usr/bin/env python3
"""
SMS Message Sources

Readers that hand a batch of raw SMS messages to the ingestion pipeline.

Sources:
- ListMessageSource: messages already in memory
- JsonMessageSource: exported inbox as a JSON array of objects
- CsvMessageSource: exported inbox as a CSV file (read with pandas)

Entries use the inbox export keys (body, date, address) or the RawMessage field
names. Each source returns at most max_messages messages; malformed entries are
logged and skipped, while a source that cannot be read at all raises
SourceUnavailableError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import pandas as pd

from ..core.dates import FinancialTimestamp
from ..core.errors import SourceUnavailableError
from ..core.json_utils import read_json
from ..core.models import RawMessage

logger = logging.getLogger(__name__)

# Inbox reads are capped at this many messages
DEFAULT_MAX_MESSAGES = 1000


class MessageSource(Protocol):
    """Protocol for anything that yields a batch of raw SMS messages."""

    def read_messages(self) -> list[RawMessage]:
        """
        Read one batch of messages.

        Raises:
            SourceUnavailableError: If the source cannot be read
        """
        ...


def _to_messages(entries: list[Any], origin: str, max_messages: int) -> list[RawMessage]:
    """Convert raw entries, skipping malformed ones, up to max_messages."""
    messages: list[RawMessage] = []
    for index, entry in enumerate(entries):
        if len(messages) >= max_messages:
            logger.info("Message limit %d reached for %s", max_messages, origin)
            break
        try:
            message = entry if isinstance(entry, RawMessage) else RawMessage.from_dict(entry)
            # The receipt time must be a representable date
            FinancialTimestamp.from_epoch_millis(message.timestamp_millis)
        except (ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning("Skipping malformed message %d in %s: %s", index, origin, e)
            continue
        messages.append(message)
    return messages


class ListMessageSource:
    """Messages supplied directly in memory."""

    def __init__(self, messages: list[RawMessage | dict[str, Any]], max_messages: int = DEFAULT_MAX_MESSAGES):
        self.messages = list(messages)
        self.max_messages = max_messages

    def read_messages(self) -> list[RawMessage]:
        return _to_messages(self.messages, "message list", self.max_messages)


class JsonMessageSource:
    """
    Exported inbox stored as a JSON array.

    Example entry:
        {"body": "Rs 500.00 debited via UPI ...", "date": 1747267200000, "address": "VM-HDFCBK"}
    """

    def __init__(self, path: Path | str, max_messages: int = DEFAULT_MAX_MESSAGES):
        self.path = Path(path)
        self.max_messages = max_messages

    def read_messages(self) -> list[RawMessage]:
        try:
            data = read_json(self.path)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(f"Cannot read messages from {self.path}: {e}") from e

        if not isinstance(data, list):
            raise SourceUnavailableError(f"Expected a JSON array of messages in {self.path}")

        messages = _to_messages(data, str(self.path), self.max_messages)
        logger.info("Read %d messages from %s", len(messages), self.path)
        return messages


class CsvMessageSource:
    """Exported inbox stored as CSV with body, date and address columns."""

    def __init__(self, path: Path | str, max_messages: int = DEFAULT_MAX_MESSAGES):
        self.path = Path(path)
        self.max_messages = max_messages

    def read_messages(self) -> list[RawMessage]:
        try:
            # Keep text as-is: empty cells stay "" instead of NaN
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(f"Cannot read messages from {self.path}: {e}") from e

        entries = [
            {column: value for column, value in row.items() if value != ""}
            for row in df.to_dict(orient="records")
        ]
        messages = _to_messages(entries, str(self.path), self.max_messages)
        logger.info("Read %d messages from %s", len(messages), self.path)
        return messages


def open_message_source(path: Path | str, max_messages: int = DEFAULT_MAX_MESSAGES) -> MessageSource:
    """
    Choose a file message source by extension (.csv, otherwise JSON).

    Args:
        path: Exported inbox file
        max_messages: Maximum number of messages to read
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return CsvMessageSource(path, max_messages=max_messages)
    return JsonMessageSource(path, max_messages=max_messages)
