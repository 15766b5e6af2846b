#!/usr/bin/env python3
"""
Expense ↔ Credit-Card Purchase Mirroring

Every expense paid with the credit card owns exactly one CreditCardPurchase
(linked by ``source_expense_id``). Changing an expense's payment method is
modelled as an explicit ExpenseMethodChanged event; ``sync_credit_card_mirror``
applies it to both collections and returns one new snapshot, so no reader
ever sees an expense without its mirror (or a mirror without its expense).
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from ..core.models import CategoryKey, CreditCardPurchase, Expense, ExpenseScope, PaymentMethod, new_id
from ..core.state import LedgerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpenseMethodChanged:
    """
    An expense moved from one payment method to another.

    ``from_method`` is None for a newly created expense and ``to_method`` is
    None for a deleted one.
    """

    expense_id: str
    from_method: PaymentMethod | None
    to_method: PaymentMethod | None

    @property
    def to_card(self) -> bool:
        return self.to_method == PaymentMethod.TARJETA_CREDITO and self.from_method != PaymentMethod.TARJETA_CREDITO

    @property
    def from_card(self) -> bool:
        return self.from_method == PaymentMethod.TARJETA_CREDITO and self.to_method != PaymentMethod.TARJETA_CREDITO

    @property
    def stays_on_card(self) -> bool:
        return self.from_method == PaymentMethod.TARJETA_CREDITO and self.to_method == PaymentMethod.TARJETA_CREDITO


def _mirror_fields(expense: Expense, default_cc_category: str) -> dict[str, Any]:
    """Purchase fields derived from an expense."""
    note = f"{expense.category} — {expense.note}" if expense.note else expense.category
    return {
        "date_purchase": expense.date_paid,
        "vendor": expense.vendor,
        "amount": expense.amount,
        "cc_category": expense.cc_category or default_cc_category,
        "project_category": (
            expense.project_category if expense.scope == ExpenseScope.PROYECTO else CategoryKey("")
        ),
        "note": note,
    }


def build_mirror_purchase(expense: Expense, default_cc_category: str = "Otros") -> CreditCardPurchase:
    """
    Create the unpaid purchase that mirrors a credit-card expense.

    Negative amounts (refunds) are kept as-is.
    """
    return CreditCardPurchase(
        id=new_id(),
        source_expense_id=expense.id,
        is_paid=False,
        **_mirror_fields(expense, default_cc_category),
    )


def on_expense_method_changed_to_card(state: LedgerState, expense: Expense) -> LedgerState:
    """Create the mirror of an expense that is now paid by card (no-op if it has one)."""
    if state.mirror_of(expense.id) is not None:
        return on_expense_fields_synced(state, expense.id, expense)

    purchase = build_mirror_purchase(expense, state.settings.default_cc_category)
    logger.debug("Mirroring expense %s into card purchase %s", expense.id, purchase.id)
    return dataclasses.replace(state, cc_purchases=(purchase, *state.cc_purchases))


def on_expense_method_changed_from_card(state: LedgerState, expense_id: str) -> LedgerState:
    """Remove every purchase mirrored from an expense."""
    remaining = tuple(p for p in state.cc_purchases if p.source_expense_id != expense_id)
    if len(remaining) == len(state.cc_purchases):
        return state
    logger.debug("Removing card purchase mirrored from expense %s", expense_id)
    return dataclasses.replace(state, cc_purchases=remaining)


def on_expense_fields_synced(state: LedgerState, expense_id: str, expense: Expense) -> LedgerState:
    """
    Copy an edited card expense's fields onto its mirror.

    The purchase keeps its id and its ``is_paid`` flag.
    """
    fields = _mirror_fields(expense, state.settings.default_cc_category)
    changed = False
    purchases = []
    for purchase in state.cc_purchases:
        if purchase.source_expense_id == expense_id:
            purchase = dataclasses.replace(purchase, **fields)
            changed = True
        purchases.append(purchase)

    if not changed:
        return state
    return dataclasses.replace(state, cc_purchases=tuple(purchases))


def sync_credit_card_mirror(state: LedgerState, event: ExpenseMethodChanged) -> LedgerState:
    """
    Apply an ExpenseMethodChanged event to the purchase collection.

    ``state`` must already hold the expense as it is after the change (or no
    longer hold it, for a deletion).

    Args:
        state: Snapshot with the expense collection already updated
        event: The method transition

    Returns:
        Snapshot whose card purchases agree with the expense collection
    """
    expense = state.find_expense(event.expense_id)

    if expense is None or event.from_card:
        return on_expense_method_changed_from_card(state, event.expense_id)
    if event.to_card:
        return on_expense_method_changed_to_card(state, expense)
    if event.stays_on_card:
        if state.mirror_of(expense.id) is None:
            return on_expense_method_changed_to_card(state, expense)
        return on_expense_fields_synced(state, expense.id, expense)
    return state
