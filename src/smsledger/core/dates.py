#!/usr/bin/env python3
"""
FinancialTimestamp Primitive Type

Immutable UTC instant wrapper with consistent formatting for financial records.
Handles the two sources of time in bank SMS: the textual date printed in the
message body (e.g. "15-May-25", "02-JUL-2025") and the receipt timestamp of the
message itself (epoch milliseconds).
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MONTH_ABBREVIATIONS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

SECONDS_PER_DAY = 86400

# DD-MMM-YY(YY) with the month spelled out as text, e.g. 02-JUL-2025 or 3/Jun/25
TEXTUAL_DATE_PATTERN = re.compile(r"(\d{1,2})[-/]([A-Za-z]+)[-/](\d{2,4})")


def month_index(month_text: str, prefix_match: bool = False) -> int | None:
    """
    Look up a month name in the abbreviation table.

    Args:
        month_text: Month text such as "Jun", "JUL" or "July"
        prefix_match: Accept full names by matching the abbreviation as a prefix

    Returns:
        1-based month number, or None if the text is not a month
    """
    lowered = month_text.lower()
    for index, abbreviation in enumerate(MONTH_ABBREVIATIONS):
        if lowered == abbreviation or (prefix_match and lowered.startswith(abbreviation)):
            return index + 1
    return None


def normalize_year(year_text: str) -> int:
    """Two-digit years are taken to be in the 2000s."""
    if len(year_text) == 2:
        return int(f"20{year_text}")
    return int(year_text)


@dataclass(frozen=True)
class FinancialTimestamp:
    """Immutable UTC instant with ISO-8601 formatting."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))
        else:
            object.__setattr__(self, "value", self.value.astimezone(timezone.utc))

    @classmethod
    def from_epoch_millis(cls, millis: int) -> "FinancialTimestamp":
        """
        Create from an SMS receipt timestamp.

        Args:
            millis: Milliseconds since the Unix epoch

        Returns:
            FinancialTimestamp object

        Raises:
            ValueError: If the instant falls outside the years 1-9999
        """
        try:
            return cls(value=datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=millis))
        except OverflowError as e:
            raise ValueError(f"Timestamp {millis} ms is out of range") from e

    @classmethod
    def from_calendar_date(cls, year: int, month: int, day: int) -> "FinancialTimestamp":
        """
        Create midnight UTC of a calendar date.

        Raises:
            ValueError: If the date does not exist (e.g. 31-Feb)
        """
        return cls(value=datetime(year, month, day, tzinfo=timezone.utc))

    @classmethod
    def from_iso_string(cls, iso_str: str) -> "FinancialTimestamp":
        """Parse the format produced by to_iso_string (a trailing Z is accepted)."""
        if iso_str.endswith("Z"):
            iso_str = iso_str[:-1] + "+00:00"
        return cls(value=datetime.fromisoformat(iso_str))

    @classmethod
    def now(cls) -> "FinancialTimestamp":
        return cls(value=datetime.now(timezone.utc))

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DDTHH:MM:SS.mmmZ."""
        return self.value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{self.value.microsecond // 1000:03d}Z"

    def to_epoch_millis(self) -> int:
        return int(self.value.timestamp() * 1000)

    def days_between(self, other: "FinancialTimestamp") -> float:
        """Absolute distance to another instant in (fractional) days."""
        return abs((self.value - other.value).total_seconds()) / SECONDS_PER_DAY

    def bill_period(self) -> str:
        """Statement-cycle label of this instant's month, e.g. "JUN-25"."""
        return f"{MONTH_ABBREVIATIONS[self.value.month - 1].upper()}-{self.value.year % 100:02d}"

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __lt__(self, other: "FinancialTimestamp") -> bool:
        """Less than comparison."""
        return self.value < other.value

    def __le__(self, other: "FinancialTimestamp") -> bool:
        """Less than or equal comparison."""
        return self.value <= other.value

    def __gt__(self, other: "FinancialTimestamp") -> bool:
        """Greater than comparison."""
        return self.value > other.value

    def __ge__(self, other: "FinancialTimestamp") -> bool:
        """Greater than or equal comparison."""
        return self.value >= other.value

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialTimestamp({self.to_iso_string()})"


def parse_textual_date(date_text: str, prefix_match: bool = False) -> FinancialTimestamp | None:
    """
    Parse the first DD-MMM-YY(YY) date found in text.

    Args:
        date_text: Text that may contain a textual-month date
        prefix_match: Accept month names longer than the abbreviation ("JULY")

    Returns:
        Midnight UTC of the date, or None when no valid calendar date is present
    """
    for match in TEXTUAL_DATE_PATTERN.finditer(date_text):
        day_text, month_text, year_text = match.groups()
        month = month_index(month_text, prefix_match=prefix_match)
        if month is None:
            continue
        try:
            return FinancialTimestamp.from_calendar_date(normalize_year(year_text), month, int(day_text))
        except ValueError:
            return None
    return None
