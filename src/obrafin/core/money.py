#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer pesos internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from typing import Any

from .currency import format_pesos, parse_money


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in whole Chilean pesos.

    Supports both positive and negative amounts. Negative expense amounts are
    refunds and must net into every sum they take part in.

    Examples:
        >>> income = Money.from_pesos(1500000)
        >>> str(income)
        '$1.500.000'

        >>> refund = Money.from_pesos(-50000)
        >>> str(income + refund)
        '$1.450.000'

        >>> refund.abs()
        Money(pesos=50000)
    """

    pesos: int

    @classmethod
    def from_pesos(cls, pesos: int) -> "Money":
        """Create Money from whole pesos."""
        return cls(pesos=int(pesos))

    @classmethod
    def parse(cls, value: Any) -> "Money":
        """
        Parse user-entered or JSON-decoded input.

        Never raises: unparseable input becomes zero pesos.
        """
        if isinstance(value, Money):
            return value
        return cls(pesos=parse_money(value))

    @classmethod
    def zero(cls) -> "Money":
        """Zero pesos."""
        return cls(pesos=0)

    def to_pesos(self) -> int:
        """Get value in pesos."""
        return self.pesos

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(pesos=abs(self.pesos))

    def is_zero(self) -> bool:
        """Check whether the amount is exactly zero."""
        return self.pesos == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(pesos=self.pesos + other.pesos)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(pesos=self.pesos - other.pesos)

    def __neg__(self) -> "Money":
        """Negate the amount."""
        return Money(pesos=-self.pesos)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(pesos=self.pesos * scalar)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.pesos == other.pesos

    def __hash__(self) -> int:
        return hash(self.pesos)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.pesos < other.pesos

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.pesos <= other.pesos

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.pesos > other.pesos

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.pesos >= other.pesos

    def __str__(self) -> str:
        """Format as peso string."""
        return format_pesos(self.pesos)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(pesos={self.pesos})"


def sum_money(amounts: "list[Money] | Any") -> Money:
    """Sum an iterable of Money values (empty → zero)."""
    total = 0
    for amount in amounts:
        total += amount.pesos
    return Money(pesos=total)
