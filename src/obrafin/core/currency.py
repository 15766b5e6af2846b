#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

Chilean pesos (CLP) have no minor unit, so every amount in the ledger is an
integer number of pesos. User-entered text is coerced to pesos here and never
raises: anything unparseable becomes 0.

Key Principles:
- Never use floating-point arithmetic for ledger sums
- Coerce user input once, at the edge, then work with integers
- Format with the es-CL thousands separator ("1.234.567")
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def parse_money(value: Any) -> int:
    """
    Coerce user input to whole pesos.

    Strips every character except digits, '.' and '-' (so "$1.234" style
    thousands dots are NOT interpreted; callers are expected to enter plain
    numbers) and rounds half away from zero.

    Args:
        value: int, float, str or None

    Returns:
        Integer pesos, 0 for invalid input

    Examples:
        parse_money("150000") -> 150000
        parse_money("$-50000") -> -50000
        parse_money("abc") -> 0
        parse_money(None) -> 0
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value

    try:
        if isinstance(value, float):
            decimal_amount = Decimal(str(value))
        else:
            clean = _NON_NUMERIC.sub("", str(value))
            if not clean or clean in ("-", ".", "-."):
                return 0
            decimal_amount = Decimal(clean)
        return int(decimal_amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (ValueError, TypeError, InvalidOperation, OverflowError):
        return 0


def format_clp(pesos: int) -> str:
    """
    Format pesos with es-CL grouping and no decimals.

    Example:
        format_clp(1234567) -> "1.234.567"
        format_clp(-50000) -> "-50.000"
    """
    return f"{int(pesos):,}".replace(",", ".")


def format_pesos(pesos: int) -> str:
    """Format pesos with a leading "$" sign."""
    return f"${format_clp(pesos)}"


def percent_of(total: int, pct: float | int) -> int:
    """
    Compute ``total * pct / 100`` rounded half-up to whole pesos.

    Percentages may be fractional (e.g. 33.33), so the product goes through
    Decimal to stay exact.
    """
    try:
        amount = Decimal(int(total)) * Decimal(str(pct)) / Decimal(100)
    except (ValueError, TypeError, InvalidOperation):
        return 0
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_ratio_pct(numerator: int, denominator: int) -> int:
    """
    Percentage ``numerator / denominator * 100`` rounded half-up.

    Returns 0 when the denominator is 0.
    """
    if denominator == 0:
        return 0
    ratio = Decimal(numerator) * Decimal(100) / Decimal(denominator)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
