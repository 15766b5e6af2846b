#!/usr/bin/env python3
"""
Project Profitability and Alerts

Per-project cash income vs expense, margin, budget deviation and ROI, plus
the dashboard alert list (negative margins, budget overruns, pending
collections, card debt and negative cash).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.currency import format_clp, round_ratio_pct
from ..core.models import IncomeStatus, Project
from ..core.state import LedgerState
from ..ledger.cashflow import MonthlyCashflowRow
from ..ledger.kpis import KPISet
from ..ledger.projector import CashTransaction, TransactionKind

# Share of the budget spent that triggers an early warning
BUDGET_WARNING_RATIO = 0.85


@dataclass(frozen=True)
class ProjectProfitability:
    """Cash results of one project."""

    name: str
    category: str
    contract: int
    budget: int
    income: int
    expense: int

    @property
    def margin(self) -> int:
        return self.income - self.expense

    @property
    def margin_pct(self) -> int:
        """Margin over income; -100 when there are expenses but no income yet."""
        if self.income > 0:
            return round_ratio_pct(self.margin, self.income)
        return -100 if self.expense > 0 else 0

    @property
    def budget_deviation_pct(self) -> int:
        """How far spending is over (positive) or under the budget."""
        if self.budget <= 0:
            return 0
        return round_ratio_pct(self.expense - self.budget, self.budget)

    @property
    def roi_pct(self) -> int:
        if self.expense <= 0:
            return 0
        return round_ratio_pct(self.income - self.expense, self.expense)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "name": self.name,
            "category": self.category,
            "contract": self.contract,
            "budget": self.budget,
            "income": self.income,
            "expense": self.expense,
            "margin": self.margin,
            "marginPct": self.margin_pct,
            "budgetDeviation": self.budget_deviation_pct,
            "roi": self.roi_pct,
        }


@dataclass(frozen=True)
class ProfitabilityReport:
    projects: list[ProjectProfitability]

    @property
    def total_income(self) -> int:
        return sum(p.income for p in self.projects)

    @property
    def total_expense(self) -> int:
        return sum(p.expense for p in self.projects)

    @property
    def total_margin(self) -> int:
        return self.total_income - self.total_expense

    @property
    def total_margin_pct(self) -> int:
        if self.total_income <= 0:
            return 0
        return round_ratio_pct(self.total_margin, self.total_income)


def project_cash_totals(project: Project, transactions: Sequence[CashTransaction]) -> tuple[int, int]:
    """
    (income, expense) of a project.

    Income is matched on the transaction category and expense on the project
    category, both by plain text equality with ``project.category``.
    """
    income = sum(
        tx.amount.to_pesos()
        for tx in transactions
        if tx.kind == TransactionKind.INGRESO and tx.category == project.category
    )
    expense = sum(
        tx.amount.to_pesos()
        for tx in transactions
        if tx.kind == TransactionKind.EGRESO and tx.project_category == project.category
    )
    return income, expense


def compute_project_profitability(
    projects: Iterable[Project], transactions: Iterable[CashTransaction]
) -> ProfitabilityReport:
    """
    Profitability of every project from the cash transactions.

    Args:
        projects: Projects to report on
        transactions: Projected cash transactions (all accounts)

    Returns:
        ProfitabilityReport with one entry per project, in project order
    """
    txs = list(transactions)
    rows = []
    for project in projects:
        income, expense = project_cash_totals(project, txs)
        rows.append(
            ProjectProfitability(
                name=project.name,
                category=project.category,
                contract=project.contract_total.to_pesos(),
                budget=project.budget_total.to_pesos(),
                income=income,
                expense=expense,
            )
        )
    return ProfitabilityReport(projects=rows)


class AlertLevel(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Alert:
    """A dashboard alert."""

    level: AlertLevel
    title: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.level.value, "title": self.title, "detail": self.detail}


def _plural(count: int, word: str) -> str:
    return word + ("s" if count > 1 else "")


def build_alerts(
    state: LedgerState,
    transactions: Iterable[CashTransaction],
    cashflow_rows: Sequence[MonthlyCashflowRow],
    kpis: KPISet,
) -> list[Alert]:
    """
    Build the alert list shown on the dashboard.

    Args:
        state: Current snapshot (projects and incomes)
        transactions: Projected cash transactions (all accounts)
        cashflow_rows: Cashflow rows of the current view
        kpis: KPIs of the current view (for outstanding card debt)

    Returns:
        Alerts in a fixed order: margins, budgets, pending collections, card
        debt, negative cash
    """
    txs = list(transactions)
    alerts: list[Alert] = []

    for project in state.projects:
        income, expense = project_cash_totals(project, txs)
        if expense > income:
            alerts.append(
                Alert(
                    AlertLevel.DANGER,
                    f"Margen negativo: {project.name}",
                    f"Ingresos ${format_clp(income)} vs Egresos ${format_clp(expense)} — "
                    f"Déficit ${format_clp(expense - income)}",
                )
            )

    for project in state.projects:
        budget = project.budget_total.to_pesos()
        if not project.budget_items or budget <= 0:
            continue
        _, spent = project_cash_totals(project, txs)
        if spent > budget:
            alerts.append(
                Alert(
                    AlertLevel.DANGER,
                    f"Sobrecosto: {project.name}",
                    f"Presupuesto ${format_clp(budget)} — Gastado ${format_clp(spent)} "
                    f"(+{round_ratio_pct(spent - budget, budget)}%)",
                )
            )
        elif spent > budget * BUDGET_WARNING_RATIO:
            alerts.append(
                Alert(
                    AlertLevel.WARNING,
                    f"Presupuesto al {round_ratio_pct(spent, budget)}%: {project.name}",
                    f"Presupuesto ${format_clp(budget)} — Gastado ${format_clp(spent)}",
                )
            )

    pending = [i for i in state.incomes if i.status == IncomeStatus.PENDIENTE]
    if pending:
        count = len(pending)
        alerts.append(
            Alert(
                AlertLevel.INFO,
                f"{count} {_plural(count, 'cobro')} {_plural(count, 'pendiente')}",
                f"Total por cobrar: ${format_clp(sum(i.amount.to_pesos() for i in pending))}",
            )
        )

    if kpis.cc_outstanding.to_pesos() > 0:
        alerts.append(
            Alert(
                AlertLevel.WARNING,
                "Deuda TC pendiente",
                f"Compras sin pagar: ${format_clp(kpis.cc_outstanding.to_pesos())}",
            )
        )

    if cashflow_rows and cashflow_rows[-1].closing.to_pesos() < 0:
        alerts.append(
            Alert(
                AlertLevel.DANGER,
                "Caja negativa",
                f"Saldo final: ${format_clp(cashflow_rows[-1].closing.to_pesos())}",
            )
        )

    return alerts
