"""
Obrafin - Cash Ledger for Construction Projects

Pure computation core behind a small construction company's finance app:
turns incomes, expenses, credit-card activity and transfers into cash-basis
views, reconciles bank statements and keeps the IVA ledgers.

Key Features:
- Cash transactions projected from the ledgers (credit-card purchases only
  hit cash when the card is paid)
- Monthly cashflow with running balances per account or consolidated
- Bank statement CSV import and greedy amount/date reconciliation
- Libro de Compras / Libro de Ventas with exact neto + IVA splits
- Project payment-plan tracking, profitability and alerts
- Vendor spend ranking and per-item quote comparison

Domain Packages:
- core: Money, dates, records, state snapshot, storage, configuration
- ledger: Projector, cashflow, KPIs, state commands, card mirroring
- bank: Statement import and reconciliation
- tax: IVA, RUT and tax-document validation
- projects: Payment plans, profitability, alerts
- purchasing: Vendors, purchase orders, quotes
- analysis: DataFrames, CSV export and charts
- cli: Command-line interface

Example Usage:
    from obrafin.core import load_state
    from obrafin.ledger import compute_cashflow, project_cash_transactions
    from obrafin.tax import split_iva
"""

__version__ = "0.1.0"
__author__ = "Obrafin Developers"

# Export core utilities for easy access
from .core.config import Environment, get_config
from .core.currency import format_pesos, parse_money
from .core.models import Expense, Income, Project
from .core.money import Money
from .core.state import LedgerState

__all__ = [
    "Environment",
    "Expense",
    "Income",
    "LedgerState",
    "Money",
    "Project",
    "format_pesos",
    "get_config",
    "parse_money",
]
