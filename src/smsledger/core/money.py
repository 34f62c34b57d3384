#!/usr/bin/env python3
"""
Money Primitive Type

Immutable rupee value wrapper that uses integer paise internally.
Prevents floating-point errors so bill totals and payments compare exactly.
"""

from dataclasses import dataclass

from .currency import (
    paise_to_rupees_str,
    parse_rupees_to_paise,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in paise (INR).

    Examples:
        >>> bill = Money.from_rupees("4,669.69")
        >>> str(bill)
        '₹4669.69'
        >>> bill.to_paise()
        466969

        >>> remaining = bill - Money.from_rupees("4669.69")
        >>> remaining.is_zero()
        True
    """

    paise: int

    @classmethod
    def from_paise(cls, paise: int) -> "Money":
        """Create Money from paise."""
        return cls(paise=paise)

    @classmethod
    def from_rupees(cls, rupees: str | int) -> "Money":
        """
        Parse from a rupee literal like 'Rs 1,234.56' or integer rupees.

        Raises:
            ValueError: If the literal is not a number
        """
        if isinstance(rupees, int):
            return cls(paise=rupees * 100)
        return cls(paise=parse_rupees_to_paise(rupees))

    @classmethod
    def zero(cls) -> "Money":
        return cls(paise=0)

    def to_paise(self) -> int:
        """Get value in paise."""
        return self.paise

    def is_zero(self) -> bool:
        return self.paise == 0

    def is_positive(self) -> bool:
        return self.paise > 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(paise=self.paise + other.paise)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(paise=self.paise - other.paise)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.paise == other.paise

    def __hash__(self) -> int:
        return hash(self.paise)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.paise < other.paise

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.paise <= other.paise

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.paise > other.paise

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.paise >= other.paise

    def __str__(self) -> str:
        """Format as rupee string."""
        return f"₹{paise_to_rupees_str(self.paise)}"

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(paise={self.paise})"
