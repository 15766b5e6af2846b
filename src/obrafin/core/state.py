#!/usr/bin/env python3
"""
Ledger State Snapshot

The complete set of domain-record collections handed to the ledger on every
read. The host owns the canonical snapshot; ledger functions receive it,
never keep a reference to it, and return a new snapshot when they change it.
"""

from dataclasses import dataclass, field
from typing import Any

from .models import (
    Account,
    BankStatementLine,
    CreditCardPayment,
    CreditCardPurchase,
    Expense,
    Income,
    Project,
    PurchaseOrder,
    Quote,
    Settings,
    Transfer,
    Vendor,
)
from .money import Money


@dataclass(frozen=True)
class LedgerState:
    """
    Immutable snapshot of every ledger collection.

    Collections are tuples so a snapshot cannot be mutated in place; use
    ``dataclasses.replace`` (or the command functions in ``obrafin.ledger``)
    to derive the next snapshot.
    """

    settings: Settings = field(default_factory=Settings)
    accounts: tuple[Account, ...] = ()
    projects: tuple[Project, ...] = ()
    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    cc_purchases: tuple[CreditCardPurchase, ...] = ()
    cc_payments: tuple[CreditCardPayment, ...] = ()
    transfers: tuple[Transfer, ...] = ()
    bank_lines: tuple[BankStatementLine, ...] = ()
    vendors: tuple[Vendor, ...] = ()
    purchase_orders: tuple[PurchaseOrder, ...] = ()
    quotes: tuple[Quote, ...] = ()
    opening_balances: dict[str, Money] = field(default_factory=dict)

    def find_account(self, account_id: str) -> Account | None:
        """Look up an account by id."""
        return next((a for a in self.accounts if a.id == account_id), None)

    def find_project(self, key: str) -> Project | None:
        """Look up a project by id, category or name (first hit wins)."""
        for attr in ("id", "category", "name"):
            for project in self.projects:
                if getattr(project, attr) == key:
                    return project
        return None

    def find_expense(self, expense_id: str) -> Expense | None:
        """Look up an expense by id."""
        return next((e for e in self.expenses if e.id == expense_id), None)

    def find_income(self, income_id: str) -> Income | None:
        """Look up an income by id."""
        return next((i for i in self.incomes if i.id == income_id), None)

    def mirror_of(self, expense_id: str) -> CreditCardPurchase | None:
        """The purchase mirrored from an expense, if any."""
        return next((p for p in self.cc_purchases if p.source_expense_id == expense_id), None)

    @property
    def item_count(self) -> int:
        """Total number of records across all collections."""
        return (
            len(self.accounts)
            + len(self.projects)
            + len(self.incomes)
            + len(self.expenses)
            + len(self.cc_purchases)
            + len(self.cc_payments)
            + len(self.transfers)
            + len(self.bank_lines)
            + len(self.vendors)
            + len(self.purchase_orders)
            + len(self.quotes)
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerState":
        """
        Create LedgerState from the host's JSON blob.

        Missing collections default to empty; unknown keys are ignored.
        """
        return cls(
            settings=Settings.from_dict(data.get("settings") or {}),
            accounts=tuple(Account.from_dict(x) for x in data.get("accounts") or []),
            projects=tuple(Project.from_dict(x) for x in data.get("projects") or []),
            incomes=tuple(Income.from_dict(x) for x in data.get("incomes") or []),
            expenses=tuple(Expense.from_dict(x) for x in data.get("expenses") or []),
            cc_purchases=tuple(CreditCardPurchase.from_dict(x) for x in data.get("ccPurchases") or []),
            cc_payments=tuple(CreditCardPayment.from_dict(x) for x in data.get("ccPayments") or []),
            transfers=tuple(Transfer.from_dict(x) for x in data.get("transfers") or []),
            bank_lines=tuple(BankStatementLine.from_dict(x) for x in data.get("bankTransactions") or []),
            vendors=tuple(Vendor.from_dict(x) for x in data.get("proveedores") or []),
            purchase_orders=tuple(PurchaseOrder.from_dict(x) for x in data.get("ordenes") or []),
            quotes=tuple(Quote.from_dict(x) for x in data.get("cotizaciones") or []),
            opening_balances={
                str(month): Money.parse(value) for month, value in (data.get("cashOpeningByMonth") or {}).items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's JSON blob shape."""
        return {
            "settings": self.settings.to_dict(),
            "accounts": [x.to_dict() for x in self.accounts],
            "projects": [x.to_dict() for x in self.projects],
            "incomes": [x.to_dict() for x in self.incomes],
            "expenses": [x.to_dict() for x in self.expenses],
            "ccPurchases": [x.to_dict() for x in self.cc_purchases],
            "ccPayments": [x.to_dict() for x in self.cc_payments],
            "transfers": [x.to_dict() for x in self.transfers],
            "bankTransactions": [x.to_dict() for x in self.bank_lines],
            "proveedores": [x.to_dict() for x in self.vendors],
            "ordenes": [x.to_dict() for x in self.purchase_orders],
            "cotizaciones": [x.to_dict() for x in self.quotes],
            "cashOpeningByMonth": {month: value.to_pesos() for month, value in self.opening_balances.items()},
        }
