#!/usr/bin/env python3
"""
Monthly Cashflow Aggregator

Folds projected cash transactions and the manually entered opening balances
into an ordered per-month running-balance table.

Only the first month of the (filtered) timeline takes its opening balance
from the opening-balance map; every later month opens with the previous
month's computed closing, even when the map has an entry for it.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.dates import ALL_MONTHS
from ..core.money import Money
from .projector import CashTransaction, TransactionKind, filter_by_account

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyCashflowRow:
    """One month of the cashflow table."""

    month: str
    opening: Money
    incomes: Money
    expenses: Money
    net: Money
    closing: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "month": self.month,
            "opening": self.opening.to_pesos(),
            "incomes": self.incomes.to_pesos(),
            "expenses": self.expenses.to_pesos(),
            "net": self.net.to_pesos(),
            "closing": self.closing.to_pesos(),
        }


def compute_cashflow(
    transactions: Iterable[CashTransaction],
    opening_balances: Mapping[str, Money | int],
    account_filter: str | None = None,
) -> list[MonthlyCashflowRow]:
    """
    Build the running-balance table, one row per month.

    Args:
        transactions: Projected cash transactions
        opening_balances: Month key (YYYY-MM) → manually entered opening balance
        account_filter: Account id, or None/"CONSOLIDADO" for all accounts

    Returns:
        Rows sorted ascending by month; empty when there is no data
    """
    filtered = filter_by_account(transactions, account_filter)

    totals: dict[str, list[int]] = {}
    for tx in filtered:
        bucket = totals.setdefault(tx.month, [0, 0])
        if tx.kind == TransactionKind.INGRESO:
            bucket[0] += tx.amount.to_pesos()
        else:
            bucket[1] += tx.amount.to_pesos()

    months = sorted({m for m in totals} | {m for m in opening_balances if m})

    rows: list[MonthlyCashflowRow] = []
    running = 0
    for index, month in enumerate(months):
        if index == 0:
            opening = Money.parse(opening_balances.get(month, 0)).to_pesos()
        else:
            opening = running
            if month in opening_balances:
                logger.debug("Ignoring opening balance for %s: not the first month in view", month)

        incomes, expenses = totals.get(month, (0, 0))
        net = incomes - expenses
        running = opening + net
        rows.append(
            MonthlyCashflowRow(
                month=month,
                opening=Money.from_pesos(opening),
                incomes=Money.from_pesos(incomes),
                expenses=Money.from_pesos(expenses),
                net=Money.from_pesos(net),
                closing=Money.from_pesos(running),
            )
        )

    return rows


def closing_balance(rows: list[MonthlyCashflowRow], month: str | None = None) -> Money:
    """
    Closing balance of a month, or of the last row when month is None/"ALL".

    No rows (or an unknown month) means a balance of zero.
    """
    if not rows:
        return Money.zero()
    if month is None or month == ALL_MONTHS:
        return rows[-1].closing
    for row in rows:
        if row.month == month:
            return row.closing
    return Money.zero()
