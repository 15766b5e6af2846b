"""
Bank Statement Package

Import of bank statement CSV exports and reconciliation of statement lines
against the income and expense ledgers.
"""

from .matcher import (
    ReconciliationSuggestion,
    apply_all_suggestions,
    apply_suggestion,
    describe_match,
    suggest_reconciliation,
    undo_reconciliation,
)
from .statement import BankSummary, parse_bank_csv, parse_bank_date, summarize_bank_lines

__all__ = [
    "BankSummary",
    "ReconciliationSuggestion",
    "apply_all_suggestions",
    "apply_suggestion",
    "describe_match",
    "parse_bank_csv",
    "parse_bank_date",
    "suggest_reconciliation",
    "summarize_bank_lines",
    "undo_reconciliation",
]
