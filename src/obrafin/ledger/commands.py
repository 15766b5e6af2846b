#!/usr/bin/env python3
"""
Ledger State Commands

Pure functions that take a LedgerState snapshot and return the next one.
The host serializes every mutation through these (directly, or through a
LedgerStore), so derived views are always recomputed from a fresh snapshot.

Conventions:
- New records go to the front of their collection (newest first).
- Commands naming an id that does not exist return the state unchanged.
- Expense commands route method changes through the mirroring module so the
  expense and card-purchase collections change together.
"""

import dataclasses
import logging
from collections.abc import Callable
from typing import Any

from ..core.dates import FinancialDate
from ..core.models import (
    Account,
    BankLineType,
    BankStatementLine,
    CategoryKey,
    CreditCardPayment,
    DocumentType,
    Expense,
    ExpenseScope,
    Income,
    IncomeStatus,
    OrderItem,
    PaymentMethod,
    Project,
    PurchaseOrder,
    PurchaseOrderStatus,
    Quote,
    Transfer,
    Vendor,
)
from ..core.money import Money
from ..core.state import LedgerState
from .mirror import ExpenseMethodChanged, sync_credit_card_mirror

logger = logging.getLogger(__name__)

Command = Callable[..., LedgerState]

_MONEY_FIELDS = {"amount", "amount_paid", "contract_total"}
_NULLABLE_MONEY_FIELDS = {"balance"}
_DATE_FIELDS = {"date", "date_paid", "date_invoice", "date_purchase", "document_issued_at", "valid_until"}
_ENUM_FIELDS: dict[str, Callable[[Any], Any]] = {
    "method": PaymentMethod.parse,
    "scope": ExpenseScope.parse,
    "document_type": DocumentType.parse,
    "type": BankLineType.parse,
}
_STATUS_PARSERS: dict[type, Callable[[Any], Any]] = {
    Income: IncomeStatus.parse,
    PurchaseOrder: PurchaseOrderStatus.parse,
}


def _coerce(record: Any, changes: dict[str, Any]) -> dict[str, Any]:
    """Normalize user-entered patch values to the field types of ``record``."""
    coerced = {}
    for name, value in changes.items():
        if name in _MONEY_FIELDS:
            value = Money.parse(value)
        elif name in _NULLABLE_MONEY_FIELDS and value is not None:
            value = Money.parse(value)
        elif name in _DATE_FIELDS:
            value = FinancialDate.parse_optional(value)
        elif name in _ENUM_FIELDS:
            value = _ENUM_FIELDS[name](value)
        elif name == "status" and type(record) in _STATUS_PARSERS:
            value = _STATUS_PARSERS[type(record)](value)
        elif name == "items":
            value = [item if isinstance(item, OrderItem) else OrderItem.from_dict(item) for item in value]
        coerced[name] = value
    return coerced


def _patch_record(record: Any, changes: dict[str, Any]) -> Any:
    """Apply a patch; unknown field names raise TypeError from dataclasses.replace."""
    patched = dataclasses.replace(record, **_coerce(record, changes))
    if isinstance(patched, Expense) and patched.scope != ExpenseScope.PROYECTO:
        patched = dataclasses.replace(patched, project_category=CategoryKey(""))
    return patched


def _prepend(state: LedgerState, collection: str, record: Any) -> LedgerState:
    return dataclasses.replace(state, **{collection: (record, *getattr(state, collection))})


def _patch_by_id(state: LedgerState, collection: str, record_id: str, changes: dict[str, Any]) -> LedgerState:
    records = getattr(state, collection)
    if not any(r.id == record_id for r in records):
        logger.debug("Ignoring patch of unknown %s id %s", collection, record_id)
        return state
    updated = tuple(_patch_record(r, changes) if r.id == record_id else r for r in records)
    return dataclasses.replace(state, **{collection: updated})


def _remove_by_id(state: LedgerState, collection: str, record_id: str) -> LedgerState:
    records = getattr(state, collection)
    remaining = tuple(r for r in records if r.id != record_id)
    if len(remaining) == len(records):
        return state
    return dataclasses.replace(state, **{collection: remaining})


# Incomes


def add_income(state: LedgerState, income: Income) -> LedgerState:
    """Record a new income."""
    return _prepend(state, "incomes", income)


def _apply_status_transition(income: Income, today: FinancialDate) -> Income:
    """
    Keep paid date and paid amount consistent with a newly set status.

    Pendiente clears both. Pagado keeps (or stamps) the paid date and drops the
    partial amount. Pago parcial keeps (or stamps) the paid date only.
    """
    if income.status == IncomeStatus.PENDIENTE:
        return dataclasses.replace(income, date_paid=None, amount_paid=Money.zero())
    date_paid = income.date_paid or today
    if income.status == IncomeStatus.PAGADO:
        return dataclasses.replace(income, date_paid=date_paid, amount_paid=Money.zero())
    return dataclasses.replace(income, date_paid=date_paid)


def update_income(
    state: LedgerState, income_id: str, *, today: FinancialDate | None = None, **changes: Any
) -> LedgerState:
    """
    Patch fields of an income.

    A patch that sets ``status`` also adjusts the paid date and paid amount,
    so a pending income never carries a date and a paid one always has one.

    Args:
        state: Current snapshot
        income_id: Income to patch
        today: Date stamped on newly collected incomes (default: today)
        **changes: Field values to set
    """
    next_state = _patch_by_id(state, "incomes", income_id, changes)
    if "status" not in changes or next_state is state:
        return next_state

    stamp = today or FinancialDate.today()
    incomes = tuple(
        _apply_status_transition(income, stamp) if income.id == income_id else income
        for income in next_state.incomes
    )
    return dataclasses.replace(next_state, incomes=incomes)


def delete_income(state: LedgerState, income_id: str) -> LedgerState:
    """Remove an income."""
    return _remove_by_id(state, "incomes", income_id)


# Expenses


def add_expense(state: LedgerState, expense: Expense) -> LedgerState:
    """Record a new expense, mirroring it when paid by card."""
    if expense.scope != ExpenseScope.PROYECTO and expense.project_category:
        expense = dataclasses.replace(expense, project_category=CategoryKey(""))
    next_state = _prepend(state, "expenses", expense)
    event = ExpenseMethodChanged(expense.id, from_method=None, to_method=expense.method)
    return sync_credit_card_mirror(next_state, event)


def update_expense(state: LedgerState, expense_id: str, **changes: Any) -> LedgerState:
    """
    Patch fields of an expense.

    A method change to or from "Tarjeta Crédito" creates or removes the
    mirrored purchase; any edit of a card expense re-syncs its mirror.
    """
    current = state.find_expense(expense_id)
    if current is None:
        logger.debug("Ignoring patch of unknown expense id %s", expense_id)
        return state

    next_state = _patch_by_id(state, "expenses", expense_id, changes)
    updated = next_state.find_expense(expense_id)
    event = ExpenseMethodChanged(expense_id, from_method=current.method, to_method=updated.method)
    return sync_credit_card_mirror(next_state, event)


def delete_expense(state: LedgerState, expense_id: str) -> LedgerState:
    """Remove an expense together with its mirrored purchase."""
    current = state.find_expense(expense_id)
    if current is None:
        return state
    next_state = _remove_by_id(state, "expenses", expense_id)
    event = ExpenseMethodChanged(expense_id, from_method=current.method, to_method=None)
    return sync_credit_card_mirror(next_state, event)


# Credit card


def add_cc_payment(state: LedgerState, payment: CreditCardPayment) -> LedgerState:
    """Record a payment towards the card (does not mark purchases paid)."""
    return _prepend(state, "cc_payments", payment)


def update_cc_payment(state: LedgerState, payment_id: str, **changes: Any) -> LedgerState:
    """Patch fields of a card payment."""
    return _patch_by_id(state, "cc_payments", payment_id, changes)


def delete_cc_payment(state: LedgerState, payment_id: str) -> LedgerState:
    """Remove a card payment."""
    return _remove_by_id(state, "cc_payments", payment_id)


def toggle_cc_paid(state: LedgerState, purchase_id: str, is_paid: bool | None = None) -> LedgerState:
    """
    Mark a card purchase paid or unpaid.

    With ``is_paid`` None the flag is flipped.
    """
    purchase = next((p for p in state.cc_purchases if p.id == purchase_id), None)
    if purchase is None:
        return state
    flag = (not purchase.is_paid) if is_paid is None else bool(is_paid)
    return _patch_by_id(state, "cc_purchases", purchase_id, {"is_paid": flag})


# Transfers


def add_transfer(state: LedgerState, transfer: Transfer) -> LedgerState:
    """Record a transfer between own accounts."""
    return _prepend(state, "transfers", transfer)


def update_transfer(state: LedgerState, transfer_id: str, **changes: Any) -> LedgerState:
    """Patch fields of a transfer."""
    return _patch_by_id(state, "transfers", transfer_id, changes)


def delete_transfer(state: LedgerState, transfer_id: str) -> LedgerState:
    """Remove a transfer."""
    return _remove_by_id(state, "transfers", transfer_id)


# Accounts and projects


def add_account(state: LedgerState, account: Account) -> LedgerState:
    """Add an account at the end of the list."""
    return dataclasses.replace(state, accounts=(*state.accounts, account))


def update_account(state: LedgerState, account_id: str, **changes: Any) -> LedgerState:
    return _patch_by_id(state, "accounts", account_id, changes)


def delete_account(state: LedgerState, account_id: str) -> LedgerState:
    """
    Remove an account.

    Records pointing at it are kept and show up under the unknown-account label.
    """
    return _remove_by_id(state, "accounts", account_id)


def add_project(state: LedgerState, project: Project) -> LedgerState:
    return _prepend(state, "projects", project)


def update_project(state: LedgerState, project_id: str, **changes: Any) -> LedgerState:
    """
    Patch fields of a project.

    Renaming ``category`` does not touch incomes or expenses tagged with the
    old text.
    """
    return _patch_by_id(state, "projects", project_id, changes)


def delete_project(state: LedgerState, project_id: str) -> LedgerState:
    return _remove_by_id(state, "projects", project_id)


# Bank statement and opening balances


def add_bank_lines(state: LedgerState, lines: list[BankStatementLine]) -> LedgerState:
    """Append imported statement lines in front of the existing ones."""
    if not lines:
        return state
    return dataclasses.replace(state, bank_lines=(*lines, *state.bank_lines))


def update_bank_line(state: LedgerState, line_id: str, **changes: Any) -> LedgerState:
    """
    Patch fields of a statement line.

    Amounts stay non-negative; the direction lives in ``type``. Links to
    ledger records are set through the reconciliation functions.
    """
    if "amount" in changes:
        changes = {**changes, "amount": abs(Money.parse(changes["amount"]).to_pesos())}
    return _patch_by_id(state, "bank_lines", line_id, changes)


def delete_bank_line(state: LedgerState, line_id: str) -> LedgerState:
    return _remove_by_id(state, "bank_lines", line_id)


def clear_bank_lines(state: LedgerState) -> LedgerState:
    """Drop the whole imported statement."""
    return dataclasses.replace(state, bank_lines=())


def set_opening_balance(state: LedgerState, month: str, value: Money | int | str) -> LedgerState:
    """Set the manually entered opening balance of a month (YYYY-MM)."""
    balances = dict(state.opening_balances)
    balances[month] = Money.parse(value)
    return dataclasses.replace(state, opening_balances=balances)


# Vendors, purchase orders and quotes


def add_vendor(state: LedgerState, vendor: Vendor) -> LedgerState:
    """Record a new vendor (see ``obrafin.purchasing.vendor_errors`` for checks)."""
    return _prepend(state, "vendors", vendor)


def update_vendor(state: LedgerState, vendor_id: str, **changes: Any) -> LedgerState:
    return _patch_by_id(state, "vendors", vendor_id, changes)


def delete_vendor(state: LedgerState, vendor_id: str) -> LedgerState:
    """
    Remove a vendor.

    Orders and quotes pointing at it are kept and show the unknown-name label.
    """
    return _remove_by_id(state, "vendors", vendor_id)


def add_purchase_order(state: LedgerState, order: PurchaseOrder) -> LedgerState:
    """Record a purchase order, dropping items without a description."""
    items = [item for item in order.items if item.description.strip()]
    if len(items) != len(order.items):
        order = dataclasses.replace(order, items=items)
    return _prepend(state, "purchase_orders", order)


def update_purchase_order(state: LedgerState, order_id: str, **changes: Any) -> LedgerState:
    """Patch fields of a purchase order (typically its ``status``)."""
    return _patch_by_id(state, "purchase_orders", order_id, changes)


def delete_purchase_order(state: LedgerState, order_id: str) -> LedgerState:
    return _remove_by_id(state, "purchase_orders", order_id)


def add_quote(state: LedgerState, quote: Quote) -> LedgerState:
    """Record a quote; quotes without an item or a positive amount are ignored."""
    if not quote.item_description.strip() or quote.amount.to_pesos() <= 0:
        logger.debug("Ignoring incomplete quote %s", quote.id)
        return state
    return _prepend(state, "quotes", quote)


def update_quote(state: LedgerState, quote_id: str, **changes: Any) -> LedgerState:
    return _patch_by_id(state, "quotes", quote_id, changes)


def delete_quote(state: LedgerState, quote_id: str) -> LedgerState:
    return _remove_by_id(state, "quotes", quote_id)


class LedgerStore:
    """
    Holder of the current snapshot.

    Every mutation goes through ``dispatch``, which runs one command against
    the current snapshot and swaps in the result.

    Example:
        store = LedgerStore(load_state())
        store.dispatch(add_income, income)
        store.dispatch(update_expense, expense_id, method="Tarjeta Crédito")
    """

    def __init__(self, state: LedgerState | None = None):
        self._state = state if state is not None else LedgerState()
        self.revision = 0

    @property
    def state(self) -> LedgerState:
        """Current snapshot."""
        return self._state

    def dispatch(self, command: Command, *args: Any, **kwargs: Any) -> LedgerState:
        """
        Apply a command and return the new snapshot.

        Args:
            command: Function taking the current state first and returning the next
            *args, **kwargs: Remaining command arguments

        Returns:
            The snapshot now held by the store
        """
        next_state = command(self._state, *args, **kwargs)
        if next_state is not self._state:
            self.revision += 1
            logger.debug("Applied %s (revision %d)", getattr(command, "__name__", command), self.revision)
        self._state = next_state
        return next_state
