"""
Ledger Package

Cash-basis views over the ledger snapshot and the commands that change it.

This package provides:
- Projection of incomes, expenses, card payments and transfers into cash transactions
- Monthly cashflow with running balances
- Dashboard KPIs and category breakdowns
- State commands, including expense ↔ card-purchase mirroring
- Vendor-based category suggestions
- Vendor, purchase-order and quote commands
"""

from .cashflow import MonthlyCashflowRow, closing_balance, compute_cashflow
from .categorize import (
    CategorySuggestion,
    KeywordSuggestion,
    VendorRule,
    build_vendor_rules,
    suggest_by_keywords,
    suggest_category,
)
from .commands import (
    LedgerStore,
    add_account,
    add_bank_lines,
    add_cc_payment,
    add_expense,
    add_income,
    add_project,
    add_purchase_order,
    add_quote,
    add_transfer,
    add_vendor,
    clear_bank_lines,
    delete_account,
    delete_bank_line,
    delete_cc_payment,
    delete_expense,
    delete_income,
    delete_project,
    delete_purchase_order,
    delete_quote,
    delete_transfer,
    delete_vendor,
    set_opening_balance,
    toggle_cc_paid,
    update_account,
    update_bank_line,
    update_cc_payment,
    update_expense,
    update_income,
    update_project,
    update_purchase_order,
    update_quote,
    update_transfer,
    update_vendor,
)
from .kpis import CategoryTotal, KPISet, compute_kpis, transactions_for_period
from .mirror import (
    ExpenseMethodChanged,
    build_mirror_purchase,
    on_expense_fields_synced,
    on_expense_method_changed_from_card,
    on_expense_method_changed_to_card,
    sync_credit_card_mirror,
)
from .projector import (
    CONSOLIDATED,
    CashTransaction,
    SourceType,
    TransactionKind,
    filter_by_account,
    project_cash_transactions,
)

__all__ = [
    "CONSOLIDATED",
    "CashTransaction",
    "CategorySuggestion",
    "CategoryTotal",
    "ExpenseMethodChanged",
    "KPISet",
    "KeywordSuggestion",
    "LedgerStore",
    "MonthlyCashflowRow",
    "SourceType",
    "TransactionKind",
    "VendorRule",
    "add_account",
    "add_bank_lines",
    "add_cc_payment",
    "add_expense",
    "add_income",
    "add_project",
    "add_purchase_order",
    "add_quote",
    "add_transfer",
    "add_vendor",
    "build_mirror_purchase",
    "build_vendor_rules",
    "clear_bank_lines",
    "closing_balance",
    "compute_cashflow",
    "compute_kpis",
    "delete_account",
    "delete_bank_line",
    "delete_cc_payment",
    "delete_expense",
    "delete_income",
    "delete_project",
    "delete_purchase_order",
    "delete_quote",
    "delete_transfer",
    "delete_vendor",
    "filter_by_account",
    "on_expense_fields_synced",
    "on_expense_method_changed_from_card",
    "on_expense_method_changed_to_card",
    "project_cash_transactions",
    "set_opening_balance",
    "suggest_by_keywords",
    "suggest_category",
    "sync_credit_card_mirror",
    "toggle_cc_paid",
    "transactions_for_period",
    "update_account",
    "update_bank_line",
    "update_cc_payment",
    "update_expense",
    "update_income",
    "update_project",
    "update_purchase_order",
    "update_quote",
    "update_transfer",
    "update_vendor",
]
