#!/usr/bin/env python3
"""
Cash-Transaction Projector

Turns the mutable ledgers (incomes, expenses, credit-card payments and
transfers) into one flat list of cash-affecting transactions. Pure and cheap
enough to re-run on every read.

Output order is fixed: incomes, then expenses, then credit-card payments,
then transfer pairs, each in input order.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.dates import FinancialDate
from ..core.models import (
    OFFICE_PROJECT_CATEGORY,
    Account,
    CategoryKey,
    CreditCardPayment,
    Expense,
    ExpenseScope,
    Income,
    Transfer,
    account_name,
)
from ..core.money import Money

CC_PAYMENT_CATEGORY = "Pago Tarjeta Crédito"
TRANSFER_CATEGORY = "Transferencia"

# Account filter value meaning "all accounts"
CONSOLIDATED = "CONSOLIDADO"


class TransactionKind(str, Enum):
    """Direction of a cash transaction."""

    INGRESO = "Ingreso"
    EGRESO = "Egreso"


class SourceType(str, Enum):
    """Ledger collection a cash transaction was projected from."""

    INCOME = "income"
    EXPENSE = "expense"
    CC_PAYMENT = "ccPayment"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class CashTransaction:
    """
    A normalized movement of real money on one account.

    ``amount`` is non-negative except for refund expenses, whose negative
    amount reduces outflow; the direction is carried by ``kind``.
    """

    kind: TransactionKind
    source_type: SourceType
    source_id: str
    date: FinancialDate
    amount: Money
    category: str
    account_id: str
    note: str = ""
    project_category: CategoryKey | None = None
    payment_type: str | None = None

    @property
    def month(self) -> str:
        """Month bucket (YYYY-MM)."""
        return self.date.month_key

    @property
    def signed_amount(self) -> Money:
        """Amount with inflows positive and outflows negative."""
        return self.amount if self.kind == TransactionKind.INGRESO else -self.amount

    def to_dict(self) -> dict:
        """Convert to a flat row for tables and exports."""
        return {
            "kind": self.kind.value,
            "sourceType": self.source_type.value,
            "sourceId": self.source_id,
            "date": self.date.to_iso_string(),
            "amount": self.amount.to_pesos(),
            "category": self.category,
            "projectCategory": self.project_category,
            "paymentType": self.payment_type,
            "accountId": self.account_id,
            "note": self.note,
        }


def project_income(income: Income) -> CashTransaction | None:
    """Cash transaction for a collected, dated income (None otherwise)."""
    if not income.is_collected or income.date_paid is None:
        return None
    return CashTransaction(
        kind=TransactionKind.INGRESO,
        source_type=SourceType.INCOME,
        source_id=income.id,
        date=income.date_paid,
        amount=income.cash_amount(),
        category=income.category,
        account_id=income.account_id,
        note=income.note,
        payment_type=income.type_pago,
    )


def project_expense(expense: Expense) -> CashTransaction | None:
    """Cash transaction for a dated, non credit-card expense (None otherwise)."""
    if expense.is_credit_card or expense.date_paid is None:
        return None

    note_parts = []
    if expense.scope == ExpenseScope.PROYECTO:
        note_parts.append(f"{expense.project_category} — ")
    if expense.vendor:
        note_parts.append(f"{expense.vendor} — ")
    note_parts.append(expense.note)

    return CashTransaction(
        kind=TransactionKind.EGRESO,
        source_type=SourceType.EXPENSE,
        source_id=expense.id,
        date=expense.date_paid,
        amount=expense.amount,
        category=expense.category,
        project_category=expense.effective_project_category,
        account_id=expense.account_id,
        note="".join(note_parts),
    )


def project_cc_payment(payment: CreditCardPayment) -> CashTransaction | None:
    """Cash outflow for a dated credit-card payment (None otherwise)."""
    if payment.date_paid is None:
        return None
    return CashTransaction(
        kind=TransactionKind.EGRESO,
        source_type=SourceType.CC_PAYMENT,
        source_id=payment.id,
        date=payment.date_paid,
        amount=payment.amount,
        category=CC_PAYMENT_CATEGORY,
        project_category=OFFICE_PROJECT_CATEGORY,
        account_id=payment.account_id,
        note=f"Pago TC — {payment.card_name or 'Tarjeta'}",
    )


def project_transfer(transfer: Transfer, accounts: Sequence[Account]) -> list[CashTransaction]:
    """
    The outflow/inflow pair for a dated transfer (empty when undated).

    A transfer from an account to itself yields both legs on that account.
    """
    if transfer.date is None:
        return []

    common = {
        "source_type": SourceType.TRANSFER,
        "source_id": transfer.id,
        "date": transfer.date,
        "amount": transfer.amount,
        "category": TRANSFER_CATEGORY,
        "project_category": OFFICE_PROJECT_CATEGORY,
    }
    return [
        CashTransaction(
            kind=TransactionKind.EGRESO,
            account_id=transfer.from_account_id,
            note=f"A {account_name(accounts, transfer.to_account_id)}",
            **common,
        ),
        CashTransaction(
            kind=TransactionKind.INGRESO,
            account_id=transfer.to_account_id,
            note=f"Desde {account_name(accounts, transfer.from_account_id)}",
            **common,
        ),
    ]


def project_cash_transactions(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    cc_payments: Iterable[CreditCardPayment],
    transfers: Iterable[Transfer],
    accounts: Sequence[Account] = (),
) -> list[CashTransaction]:
    """
    Project every cash-affecting record into a flat transaction list.

    Args:
        incomes: Income records (only collected and dated ones count)
        expenses: Expense records (credit-card expenses are skipped)
        cc_payments: Credit-card payments (always outflows)
        transfers: Transfers between own accounts (two legs each)
        accounts: Accounts, used only for transfer notes

    Returns:
        Transactions in input order: incomes, expenses, card payments, transfers
    """
    transactions: list[CashTransaction] = []

    for income in incomes:
        tx = project_income(income)
        if tx is not None:
            transactions.append(tx)

    for expense in expenses:
        tx = project_expense(expense)
        if tx is not None:
            transactions.append(tx)

    for payment in cc_payments:
        tx = project_cc_payment(payment)
        if tx is not None:
            transactions.append(tx)

    for transfer in transfers:
        transactions.extend(project_transfer(transfer, accounts))

    return transactions


def filter_by_account(transactions: Iterable[CashTransaction], account_id: str | None) -> list[CashTransaction]:
    """
    Keep the transactions of one account.

    ``None`` or the "CONSOLIDADO" sentinel keeps everything.
    """
    if account_id is None or account_id == CONSOLIDATED:
        return list(transactions)
    return [tx for tx in transactions if tx.account_id == account_id]
