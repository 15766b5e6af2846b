#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for ledger operations.
Ledger records store ISO dates as text; an empty or malformed date is a
normal situation (e.g. a pending income) and is represented as ``None``.
"""

from dataclasses import dataclass
from datetime import date, datetime

MONTH_NAMES_ES = [
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
]

ALL_MONTHS = "ALL"


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def parse_optional(cls, value: "str | FinancialDate | None") -> "FinancialDate | None":
        """
        Parse an optional ISO date, returning None for empty or bad input.

        Accepts full timestamps ("2025-01-31T10:00:00Z") by keeping the date part.
        """
        if value is None:
            return None
        if isinstance(value, FinancialDate):
            return value
        text = str(value).strip()[:10]
        if not text:
            return None
        try:
            return cls.from_string(text)
        except ValueError:
            return None

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    @property
    def month_key(self) -> str:
        """Month bucket as YYYY-MM."""
        return self.date.strftime("%Y-%m")

    def days_between(self, other: "FinancialDate") -> int:
        """Absolute number of calendar days between two dates."""
        return abs((other.date - self.date).days)

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"


def month_key(value: "FinancialDate | str | None") -> str:
    """
    Month bucket (YYYY-MM) for a date, or "" when there is no date.

    Plain strings are sliced like the stored ISO text, so "2025-03-14" and
    "2025-03" both give "2025-03".
    """
    if value is None:
        return ""
    if isinstance(value, FinancialDate):
        return value.month_key
    return str(value)[:7]


def to_iso(value: "FinancialDate | None") -> str:
    """ISO text for an optional date ("" when missing)."""
    return value.to_iso_string() if value is not None else ""


def month_label(month: str) -> str:
    """
    Spanish label for a month key.

    Example:
        month_label("2025-03") -> "Marzo 2025"
        month_label("ALL") -> "Todos"
    """
    if not month or month == ALL_MONTHS:
        return "Todos"
    try:
        year_str, month_str = month.split("-")[:2]
        index = int(month_str) if month_str else 1
        return f"{MONTH_NAMES_ES[(index or 1) - 1]} {int(year_str)}"
    except (ValueError, IndexError):
        return month
