#!/usr/bin/env python3
"""
Project Payment-Plan Tracker

Compares a project's contractual milestones (payment type + percentage of
the contract) with the incomes actually collected for each payment type.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..core.currency import percent_of
from ..core.models import Income, PaymentPlanEntry, Project
from ..core.money import Money

FALLBACK_PAYMENT_TYPE = "Otro"


@dataclass(frozen=True)
class PlanRow:
    """
    Expected vs received amounts for one payment type.

    ``has_plan`` is False for types that received money without being part
    of the plan; those rows have expected 0 and a negative pending.
    """

    type: str
    pct: float
    expected: Money
    received: Money
    has_plan: bool = True

    @property
    def pending(self) -> Money:
        return self.expected - self.received

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "type": self.type,
            "pct": self.pct,
            "expected": self.expected.to_pesos(),
            "received": self.received.to_pesos(),
            "pending": self.pending.to_pesos(),
            "hasPlan": self.has_plan,
        }


def plan_by_type(plan: Iterable[PaymentPlanEntry]) -> dict[str, float]:
    """Accumulate plan percentages per payment type, in first-seen order."""
    totals: dict[str, float] = {}
    for entry in plan:
        totals[entry.type] = totals.get(entry.type, 0.0) + (entry.pct or 0.0)
    return totals


def received_by_type(project: Project, incomes: Iterable[Income]) -> dict[str, int]:
    """Cash collected per payment type for incomes tagged with the project category."""
    totals: dict[str, int] = {}
    for income in incomes:
        if income.category != project.category or not income.is_collected:
            continue
        totals[income.type_pago] = totals.get(income.type_pago, 0) + income.cash_amount().to_pesos()
    return totals


def compute_payment_plan_status(project: Project, incomes: Iterable[Income]) -> list[PlanRow]:
    """
    Milestone status of a project.

    Args:
        project: Project with contract total and payment plan
        incomes: Income collection (matched by category text)

    Returns:
        One row per planned payment type plus one per unplanned type that
        received money, sorted by expected amount descending
    """
    planned = plan_by_type(project.payment_plan)
    received = received_by_type(project, incomes)
    contract = project.contract_total.to_pesos()

    rows = [
        PlanRow(
            type=payment_type,
            pct=pct,
            expected=Money.from_pesos(percent_of(contract, pct)),
            received=Money.from_pesos(received.get(payment_type, 0)),
        )
        for payment_type, pct in planned.items()
    ]
    rows.extend(
        PlanRow(type=payment_type, pct=0.0, expected=Money.zero(), received=Money.from_pesos(amount), has_plan=False)
        for payment_type, amount in received.items()
        if payment_type not in planned and amount != 0
    )

    return sorted(rows, key=lambda row: -row.expected.to_pesos())


def plan_total_pct(project: Project) -> float:
    """Sum of every plan percentage (should be 100 for a complete plan)."""
    return sum(entry.pct or 0.0 for entry in project.payment_plan)


def normalize_payment_plan(project: Project, payment_types: Sequence[str]) -> list[PaymentPlanEntry]:
    """
    Plan entries with unknown payment types relabelled as "Otro".

    For display after a payment type was removed from settings; the tracker
    itself always uses the stored labels.
    """
    valid = set(payment_types)
    return [
        PaymentPlanEntry(type=entry.type if entry.type in valid else FALLBACK_PAYMENT_TYPE, pct=entry.pct)
        for entry in project.payment_plan
    ]
