#!/usr/bin/env python3
"""
KPI and Category Aggregations

Dashboard figures for a period (one month or "ALL"): income/expense totals,
net, outstanding credit-card debt, cash balance and per-category breakdowns.

The outstanding credit-card figure is always consolidated: it sums unpaid
purchases regardless of which account view the other figures use.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..core.dates import ALL_MONTHS
from ..core.models import CreditCardPurchase
from ..core.money import Money
from .cashflow import MonthlyCashflowRow, closing_balance
from .projector import CashTransaction, TransactionKind

UNCATEGORIZED = "Sin categoría"


@dataclass(frozen=True)
class CategoryTotal:
    """Sum of amounts for one category."""

    name: str
    value: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "value": self.value.to_pesos()}


@dataclass(frozen=True)
class KPISet:
    """Dashboard figures for one period."""

    total_income: Money
    total_expense: Money
    net: Money
    cc_outstanding: Money
    cash_balance: Money
    expense_by_category: list[CategoryTotal] = field(default_factory=list)
    income_by_category: list[CategoryTotal] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "totalIncome": self.total_income.to_pesos(),
            "totalExpense": self.total_expense.to_pesos(),
            "net": self.net.to_pesos(),
            "ccOutstanding": self.cc_outstanding.to_pesos(),
            "cashBalance": self.cash_balance.to_pesos(),
            "expenseByCategory": [c.to_dict() for c in self.expense_by_category],
            "incomeByCategory": [c.to_dict() for c in self.income_by_category],
        }


def transactions_for_period(transactions: Iterable[CashTransaction], month: str = ALL_MONTHS) -> list[CashTransaction]:
    """
    Transactions of one month (or all), newest first.

    Same-day transactions keep their projected order.
    """
    ordered = sorted(transactions, key=lambda tx: tx.date, reverse=True)
    if month == ALL_MONTHS:
        return ordered
    return [tx for tx in ordered if tx.month == month]


def sum_by_kind(transactions: Iterable[CashTransaction], kind: TransactionKind) -> Money:
    """Sum of amounts of one direction."""
    return Money.from_pesos(sum(tx.amount.to_pesos() for tx in transactions if tx.kind == kind))


def category_breakdown(transactions: Iterable[CashTransaction], kind: TransactionKind) -> list[CategoryTotal]:
    """
    Group amounts of one direction by category, largest first.

    Equal sums keep the order in which their categories were first seen.
    """
    totals: dict[str, int] = {}
    for tx in transactions:
        if tx.kind != kind:
            continue
        key = tx.category or UNCATEGORIZED
        totals[key] = totals.get(key, 0) + tx.amount.to_pesos()

    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return [CategoryTotal(name=name, value=Money.from_pesos(value)) for name, value in ranked]


def cc_outstanding(cc_purchases: Iterable[CreditCardPurchase]) -> Money:
    """Sum of unpaid card purchases (refunds net in, so it can be negative)."""
    return Money.from_pesos(sum(p.amount.to_pesos() for p in cc_purchases if not p.is_paid))


def compute_kpis(
    transactions_for_month: Iterable[CashTransaction],
    cc_purchases: Iterable[CreditCardPurchase],
    cashflow_rows: list[MonthlyCashflowRow],
    selected_month: str = ALL_MONTHS,
) -> KPISet:
    """
    Compute the dashboard figures for a period.

    Args:
        transactions_for_month: Cash transactions already restricted to the period
        cc_purchases: All credit-card purchases (not filtered by account)
        cashflow_rows: Output of compute_cashflow for the same account view
        selected_month: Month key or "ALL"

    Returns:
        KPISet
    """
    period = list(transactions_for_month)
    total_income = sum_by_kind(period, TransactionKind.INGRESO)
    total_expense = sum_by_kind(period, TransactionKind.EGRESO)

    return KPISet(
        total_income=total_income,
        total_expense=total_expense,
        net=total_income - total_expense,
        cc_outstanding=cc_outstanding(cc_purchases),
        cash_balance=closing_balance(cashflow_rows, selected_month),
        expense_by_category=category_breakdown(period, TransactionKind.EGRESO),
        income_by_category=category_breakdown(period, TransactionKind.INGRESO),
    )
