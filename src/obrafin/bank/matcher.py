#!/usr/bin/env python3
"""
Bank Reconciliation Matcher

Suggests which income or expense each unreconciled bank-statement line
corresponds to, by exact amount and date proximity.

Matching is greedy: lines are processed in their given order, each takes
the best-scoring candidate still available, and an accepted candidate is
not offered to later lines in the same run. The result is maximal but not
globally optimal; a different line order can change which line wins a
contested record.

Suggestions never change anything by themselves. Applying one writes the
link on the bank line only; the matched income or expense is not touched.
"""

import dataclasses
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..core.config import DEFAULT_TOLERANCE_DAYS
from ..core.currency import format_clp
from ..core.dates import FinancialDate
from ..core.models import (
    BankLineType,
    BankStatementLine,
    Expense,
    Income,
    MatchType,
    PaymentMethod,
)
from ..core.state import LedgerState

logger = logging.getLogger(__name__)

# Date difference used when either side has no date
MISSING_DATE_DAYS = 999
MIN_SCORE = 50
SCORE_PER_DAY = 10


@dataclass(frozen=True)
class ReconciliationSuggestion:
    """Proposed link between a bank line and a ledger record."""

    match_id: str
    match_type: MatchType
    confidence: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"matchId": self.match_id, "matchType": self.match_type.value, "confidence": self.confidence}


def date_diff_days(a: FinancialDate | None, b: FinancialDate | None) -> int:
    """Absolute day difference, or 999 when a date is missing."""
    if a is None or b is None:
        return MISSING_DATE_DAYS
    return a.days_between(b)


def _score(line: BankStatementLine, amount: int, date: FinancialDate | None, tolerance_days: int) -> int | None:
    """Score a candidate, or None when amount or date rule it out."""
    if abs(amount - line.amount.to_pesos()) >= 1:
        return None
    days = date_diff_days(line.date, date)
    if days > tolerance_days:
        return None
    return 100 - SCORE_PER_DAY * days


def _best_income(
    line: BankStatementLine, incomes: Sequence[Income], used: set[str], tolerance_days: int
) -> ReconciliationSuggestion | None:
    best: ReconciliationSuggestion | None = None
    best_score = 0
    for income in incomes:
        if income.id in used or not income.is_collected:
            continue
        score = _score(line, income.cash_amount().to_pesos(), income.date_paid, tolerance_days)
        if score is not None and score > best_score:
            best_score = score
            best = ReconciliationSuggestion(income.id, MatchType.INCOME, score)
    return best


def _best_expense(
    line: BankStatementLine, expenses: Sequence[Expense], used: set[str], tolerance_days: int
) -> ReconciliationSuggestion | None:
    best: ReconciliationSuggestion | None = None
    best_score = 0
    for expense in expenses:
        # Card expenses only reach the bank through the card payment
        if expense.id in used or expense.method == PaymentMethod.TARJETA_CREDITO:
            continue
        score = _score(line, expense.amount.to_pesos(), expense.date_paid, tolerance_days)
        if score is not None and score > best_score:
            best_score = score
            best = ReconciliationSuggestion(expense.id, MatchType.EXPENSE, score)
    return best


def suggest_reconciliation(
    bank_lines: Iterable[BankStatementLine],
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    tolerance_days: int = DEFAULT_TOLERANCE_DAYS,
) -> dict[str, ReconciliationSuggestion]:
    """
    Propose a ledger record for every unreconciled bank line that has one.

    Credit lines are matched against collected incomes (using the paid amount
    for partial payments); debit lines against expenses not paid by card.

    Args:
        bank_lines: Statement lines in processing order
        incomes: Income collection
        expenses: Expense collection
        tolerance_days: Maximum day difference between bank and ledger dates

    Returns:
        Bank line id → suggestion, in processing order
    """
    income_list = list(incomes)
    expense_list = list(expenses)
    used_incomes: set[str] = set()
    used_expenses: set[str] = set()
    suggestions: dict[str, ReconciliationSuggestion] = {}

    for line in bank_lines:
        if line.is_reconciled:
            continue

        if line.type == BankLineType.CREDIT:
            best = _best_income(line, income_list, used_incomes, tolerance_days)
        else:
            best = _best_expense(line, expense_list, used_expenses, tolerance_days)

        if best is None or best.confidence < MIN_SCORE:
            continue

        suggestions[line.id] = best
        if best.match_type == MatchType.INCOME:
            used_incomes.add(best.match_id)
        else:
            used_expenses.add(best.match_id)
        logger.debug("Bank line %s → %s %s (%d)", line.id, best.match_type.value, best.match_id, best.confidence)

    return suggestions


def _link(line: BankStatementLine, suggestion: ReconciliationSuggestion | None) -> BankStatementLine:
    if suggestion is None:
        return dataclasses.replace(line, reconciled_with_id=None, reconciled_with_type=None)
    return dataclasses.replace(
        line, reconciled_with_id=suggestion.match_id, reconciled_with_type=suggestion.match_type
    )


def apply_suggestion(
    state: LedgerState, line_id: str, suggestions: Mapping[str, ReconciliationSuggestion]
) -> LedgerState:
    """
    Accept the suggestion for one bank line.

    Lines without a suggestion are left alone; applying again simply
    overwrites the link with the same values.
    """
    suggestion = suggestions.get(line_id)
    if suggestion is None:
        return state
    lines = tuple(_link(line, suggestion) if line.id == line_id else line for line in state.bank_lines)
    return dataclasses.replace(state, bank_lines=lines)


def apply_all_suggestions(
    state: LedgerState, suggestions: Mapping[str, ReconciliationSuggestion]
) -> tuple[LedgerState, int]:
    """
    Accept every suggestion for a still-unreconciled line.

    Returns:
        (new state, number of lines linked)
    """
    applied = 0
    lines = []
    for line in state.bank_lines:
        suggestion = suggestions.get(line.id)
        if suggestion is not None and not line.is_reconciled:
            line = _link(line, suggestion)
            applied += 1
        lines.append(line)

    logger.info("Reconciled %d bank lines", applied)
    if applied == 0:
        return state, 0
    return dataclasses.replace(state, bank_lines=tuple(lines)), applied


def undo_reconciliation(state: LedgerState, line_id: str) -> LedgerState:
    """Clear the link of one bank line."""
    if not any(line.id == line_id for line in state.bank_lines):
        return state
    lines = tuple(_link(line, None) if line.id == line_id else line for line in state.bank_lines)
    return dataclasses.replace(state, bank_lines=lines)


def describe_match(state: LedgerState, line: BankStatementLine) -> str | None:
    """
    Human-readable label of what a line is reconciled with.

    Records deleted after reconciliation show as "(eliminado)".
    """
    if not line.is_reconciled:
        return None

    if line.reconciled_with_type == MatchType.INCOME:
        income = state.find_income(line.reconciled_with_id)
        if income is None:
            return "Ingreso (eliminado)"
        return f"Ingreso: {income.category} — ${format_clp(income.amount.to_pesos())}"

    expense = state.find_expense(line.reconciled_with_id)
    if expense is None:
        return "Egreso (eliminado)"
    return f"Egreso: {expense.category} — {expense.vendor} — ${format_clp(expense.amount.to_pesos())}"
