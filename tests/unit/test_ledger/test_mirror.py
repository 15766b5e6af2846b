#!/usr/bin/env python3
"""Tests for expense ↔ credit-card purchase mirroring."""

import dataclasses

import pytest

from obrafin.core.models import ExpenseScope, PaymentMethod, Settings
from obrafin.core.money import Money
from obrafin.core.state import LedgerState
from obrafin.ledger.mirror import (
    ExpenseMethodChanged,
    build_mirror_purchase,
    sync_credit_card_mirror,
)
from tests.fixtures.ledger_data import make_expense


def _state_with(expense, **kwargs):
    return LedgerState(expenses=(expense,), **kwargs)


class TestExpenseMethodChanged:
    """Test event classification."""

    @pytest.mark.ledger
    def test_transitions(self):
        """Test to/from/stays flags."""
        card = PaymentMethod.TARJETA_CREDITO
        cash = PaymentMethod.EFECTIVO
        assert ExpenseMethodChanged("e", None, card).to_card
        assert ExpenseMethodChanged("e", cash, card).to_card
        assert ExpenseMethodChanged("e", card, cash).from_card
        assert ExpenseMethodChanged("e", card, None).from_card
        assert ExpenseMethodChanged("e", card, card).stays_on_card
        event = ExpenseMethodChanged("e", cash, PaymentMethod.DEBITO)
        assert not (event.to_card or event.from_card or event.stays_on_card)


class TestBuildMirrorPurchase:
    """Test purchase fields derived from an expense."""

    @pytest.mark.ledger
    def test_fields(self):
        """Test the mirror copies date, vendor, amount and composes the note."""
        expense = make_expense(
            amount=80000, method=PaymentMethod.TARJETA_CREDITO, category="Materiales", note="pintura", vendor="Sodimac"
        )
        purchase = build_mirror_purchase(expense, "Suministros")

        assert purchase.source_expense_id == expense.id
        assert purchase.amount == Money.from_pesos(80000)
        assert purchase.date_purchase == expense.date_paid
        assert purchase.vendor == "Sodimac"
        assert purchase.note == "Materiales — pintura"
        assert purchase.cc_category == "Suministros"
        assert purchase.project_category == "OBRA: Casa Test"
        assert purchase.is_paid is False

    @pytest.mark.ledger
    def test_office_expense_mirror_has_no_project(self):
        """Test office expenses mirror without a project category."""
        expense = make_expense(scope=ExpenseScope.OFICINA, method=PaymentMethod.TARJETA_CREDITO, note="")
        purchase = build_mirror_purchase(expense)
        assert purchase.project_category == ""
        assert purchase.note == expense.category
        assert purchase.cc_category == "Otros"

    @pytest.mark.ledger
    def test_refund_amount_kept(self):
        """Test a negative amount is mirrored as-is."""
        expense = make_expense(amount=-20000, method=PaymentMethod.TARJETA_CREDITO)
        assert build_mirror_purchase(expense).amount == Money.from_pesos(-20000)


class TestSyncCreditCardMirror:
    """Test applying method-change events."""

    @pytest.mark.ledger
    def test_new_card_expense_gets_mirror(self):
        """Test creating a card expense creates exactly one mirror."""
        expense = make_expense(method=PaymentMethod.TARJETA_CREDITO)
        state = sync_credit_card_mirror(
            _state_with(expense, settings=Settings(credit_card_categories=["Materiales"])),
            ExpenseMethodChanged(expense.id, None, expense.method),
        )
        assert len(state.cc_purchases) == 1
        assert state.cc_purchases[0].cc_category == "Materiales"

    @pytest.mark.ledger
    def test_switch_to_card_twice_does_not_duplicate(self):
        """Test a repeated to-card event keeps a single mirror."""
        expense = make_expense(method=PaymentMethod.TARJETA_CREDITO)
        event = ExpenseMethodChanged(expense.id, PaymentMethod.EFECTIVO, expense.method)
        state = sync_credit_card_mirror(_state_with(expense), event)
        state = sync_credit_card_mirror(state, event)
        assert len(state.cc_purchases) == 1

    @pytest.mark.ledger
    def test_switch_away_from_card_removes_mirror(self):
        """Test leaving the card removes the mirror."""
        expense = make_expense(method=PaymentMethod.TARJETA_CREDITO)
        state = sync_credit_card_mirror(_state_with(expense), ExpenseMethodChanged(expense.id, None, expense.method))
        cash = dataclasses.replace(expense, method=PaymentMethod.EFECTIVO)
        state = dataclasses.replace(state, expenses=(cash,))

        state = sync_credit_card_mirror(state, ExpenseMethodChanged(expense.id, expense.method, cash.method))
        assert state.cc_purchases == ()

    @pytest.mark.ledger
    def test_edit_keeps_id_and_paid_flag(self):
        """Test editing a card expense syncs fields but keeps id and is_paid."""
        expense = make_expense(amount=1000, method=PaymentMethod.TARJETA_CREDITO)
        state = sync_credit_card_mirror(_state_with(expense), ExpenseMethodChanged(expense.id, None, expense.method))
        original = state.cc_purchases[0]
        state = dataclasses.replace(state, cc_purchases=(dataclasses.replace(original, is_paid=True),))

        edited = dataclasses.replace(expense, amount=Money.from_pesos(2500), vendor="Otro proveedor")
        state = dataclasses.replace(state, expenses=(edited,))
        state = sync_credit_card_mirror(state, ExpenseMethodChanged(expense.id, expense.method, edited.method))

        purchase = state.cc_purchases[0]
        assert purchase.id == original.id
        assert purchase.is_paid is True
        assert purchase.amount == Money.from_pesos(2500)
        assert purchase.vendor == "Otro proveedor"

    @pytest.mark.ledger
    def test_edit_recreates_missing_mirror(self):
        """Test a card expense that lost its mirror gets a new one on edit."""
        expense = make_expense(method=PaymentMethod.TARJETA_CREDITO)
        state = sync_credit_card_mirror(
            _state_with(expense), ExpenseMethodChanged(expense.id, expense.method, expense.method)
        )
        assert len(state.cc_purchases) == 1

    @pytest.mark.ledger
    def test_deleted_expense_drops_mirror(self):
        """Test an event for an expense no longer in state removes its mirror."""
        expense = make_expense(method=PaymentMethod.TARJETA_CREDITO)
        state = sync_credit_card_mirror(_state_with(expense), ExpenseMethodChanged(expense.id, None, expense.method))
        state = dataclasses.replace(state, expenses=())
        state = sync_credit_card_mirror(state, ExpenseMethodChanged(expense.id, expense.method, None))
        assert state.cc_purchases == ()

    @pytest.mark.ledger
    def test_non_card_change_is_noop(self):
        """Test changes between cash methods leave purchases alone."""
        expense = make_expense(method=PaymentMethod.DEBITO)
        state = _state_with(expense)
        assert sync_credit_card_mirror(state, ExpenseMethodChanged(expense.id, None, expense.method)) is state
