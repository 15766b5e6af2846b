"""
Core Utilities Package

Shared primitives and data models used by every ledger component.

This package provides:
- Money and FinancialDate value types (whole pesos, optional ISO dates)
- Domain records for accounts, projects, incomes, expenses, credit-card
  purchases/payments, transfers and bank-statement lines
- The LedgerState snapshot and its JSON storage
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_test,
    reload_config,
)
from .currency import format_clp, format_pesos, parse_money
from .dates import ALL_MONTHS, FinancialDate, month_key, month_label
from .models import (
    Account,
    BankLineType,
    BankStatementLine,
    BudgetItem,
    CategoryKey,
    CreditCardPayment,
    CreditCardPurchase,
    DocumentType,
    Expense,
    ExpenseScope,
    Income,
    IncomeStatus,
    MatchType,
    OrderItem,
    PaymentMethod,
    PaymentPlanEntry,
    Project,
    PurchaseOrder,
    PurchaseOrderStatus,
    Quote,
    Settings,
    Transfer,
    Vendor,
    account_name,
    new_id,
)
from .money import Money
from .state import LedgerState
from .storage import StateFormatError, load_state, save_state

__all__ = [
    "ALL_MONTHS",
    "Account",
    "BankLineType",
    "BankStatementLine",
    "BudgetItem",
    "CategoryKey",
    # Configuration
    "Config",
    "CreditCardPayment",
    "CreditCardPurchase",
    "DocumentType",
    "Environment",
    "Expense",
    "ExpenseScope",
    "FinancialDate",
    "Income",
    "IncomeStatus",
    "LedgerState",
    "MatchType",
    "Money",
    "OrderItem",
    "PaymentMethod",
    "PaymentPlanEntry",
    "Project",
    "PurchaseOrder",
    "PurchaseOrderStatus",
    "Quote",
    "Settings",
    "StateFormatError",
    "Transfer",
    "Vendor",
    "account_name",
    # Currency utilities
    "format_clp",
    "format_pesos",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "is_test",
    "load_state",
    "month_key",
    "month_label",
    "new_id",
    "parse_money",
    "reload_config",
    "save_state",
]
