#!/usr/bin/env python3
"""Tests for ledger domain records and their JSON shape."""

import pytest

from obrafin.core.models import (
    Account,
    BankLineType,
    BankStatementLine,
    DocumentType,
    Expense,
    ExpenseScope,
    Income,
    IncomeStatus,
    MatchType,
    PaymentMethod,
    PaymentPlanEntry,
    Project,
    Settings,
    account_name,
)
from obrafin.core.money import Money


class TestEnumParsing:
    """Test lenient parsing of stored enum values."""

    @pytest.mark.unit
    def test_known_values(self):
        """Test stored Spanish labels parse to their members."""
        assert IncomeStatus.parse("Pago parcial") == IncomeStatus.PAGO_PARCIAL
        assert PaymentMethod.parse("Tarjeta Crédito") == PaymentMethod.TARJETA_CREDITO
        assert ExpenseScope.parse("Proyecto") == ExpenseScope.PROYECTO
        assert DocumentType.parse("factura_afecta") == DocumentType.FACTURA_AFECTA

    @pytest.mark.unit
    def test_unknown_values_fall_back(self):
        """Test unknown values get the documented fallback."""
        assert IncomeStatus.parse("???") == IncomeStatus.PENDIENTE
        assert PaymentMethod.parse(None) == PaymentMethod.TRANSFERENCIA
        assert ExpenseScope.parse("") == ExpenseScope.OFICINA
        assert DocumentType.parse(None) == DocumentType.SIN_RESPALDO
        assert BankLineType.parse("whatever") == BankLineType.DEBIT

    @pytest.mark.unit
    def test_document_labels(self):
        """Test human-readable document labels."""
        assert DocumentType.FACTURA_AFECTA.label == "Factura afecta IVA"


class TestIncome:
    """Test Income cash semantics."""

    def _income(self, status, amount=1000000, amount_paid=0):
        return Income.from_dict(
            {"id": "i1", "status": status, "amount": amount, "amountPaid": amount_paid, "datePaid": "2025-01-10"}
        )

    @pytest.mark.unit
    def test_paid_income_contributes_full_amount(self):
        """Test a paid income counts its whole amount."""
        assert self._income("Pagado").cash_amount() == Money.from_pesos(1000000)

    @pytest.mark.unit
    def test_partial_income_contributes_amount_paid(self):
        """Test a partial payment counts only what was paid."""
        income = self._income("Pago parcial", amount_paid=400000)
        assert income.cash_amount() == Money.from_pesos(400000)
        assert income.amount == Money.from_pesos(1000000)

    @pytest.mark.unit
    def test_pending_income_contributes_nothing(self):
        """Test a pending income has no cash effect."""
        income = self._income("Pendiente")
        assert income.cash_amount().is_zero()
        assert not income.is_collected


class TestExpense:
    """Test Expense derived properties and JSON shape."""

    @pytest.mark.unit
    def test_office_expense_drops_project_category(self):
        """Test that office expenses never carry a project category."""
        expense = Expense.from_dict({"id": "e1", "scope": "Oficina", "projectCategory": "OBRA: X", "amount": 10})
        assert expense.project_category == ""
        assert expense.effective_project_category == "Oficina"

    @pytest.mark.unit
    def test_project_expense_keeps_project_category(self):
        """Test that project expenses keep their project category."""
        expense = Expense.from_dict({"id": "e1", "scope": "Proyecto", "projectCategory": "OBRA: X", "amount": 10})
        assert expense.effective_project_category == "OBRA: X"

    @pytest.mark.unit
    def test_tax_date_prefers_issue_date(self):
        """Test the tax month comes from the document issue date."""
        expense = Expense.from_dict({"id": "e1", "datePaid": "2025-02-01", "documentIssuedAt": "2025-01-28"})
        assert expense.tax_date.month_key == "2025-01"
        expense = Expense.from_dict({"id": "e2", "datePaid": "2025-02-01"})
        assert expense.tax_date.month_key == "2025-02"

    @pytest.mark.unit
    def test_round_trip_keeps_camel_case_keys(self):
        """Test to_dict produces the host's camelCase shape."""
        data = {
            "id": "e1",
            "accountId": "acc-1",
            "scope": "Proyecto",
            "projectCategory": "OBRA: X",
            "category": "Materiales",
            "method": "Débito",
            "datePaid": "2025-01-12",
            "vendor": "Ferretería",
            "amount": -5000,
        }
        result = Expense.from_dict(data).to_dict()
        assert result["accountId"] == "acc-1"
        assert result["method"] == "Débito"
        assert result["amount"] == -5000
        assert result["datePaid"] == "2025-01-12"
        assert result["documentType"] == "sin_respaldo"

    @pytest.mark.unit
    def test_missing_id_gets_generated(self):
        """Test records without an id get a fresh one."""
        assert Expense.from_dict({}).id


class TestProjectAndSettings:
    """Test Project and Settings records."""

    @pytest.mark.unit
    def test_budget_total(self):
        """Test the budget total sums every item."""
        project = Project.from_dict(
            {"id": "p1", "budgetItems": [{"name": "a", "amount": 100}, {"name": "b", "amount": "250"}]}
        )
        assert project.budget_total == Money.from_pesos(350)

    @pytest.mark.unit
    def test_plan_entry_pct_serializes_integers_without_decimals(self):
        """Test whole percentages are stored as integers."""
        assert PaymentPlanEntry(type="Anticipo", pct=30.0).to_dict() == {"type": "Anticipo", "pct": 30}
        assert PaymentPlanEntry.from_dict({"type": "Hito", "pct": "bad"}).pct == 0.0

    @pytest.mark.unit
    def test_settings_defaults_for_missing_lists(self):
        """Test missing settings lists keep their defaults."""
        settings = Settings.from_dict({"creditCardCategories": ["Materiales"]})
        assert settings.default_cc_category == "Materiales"
        assert "Anticipo" in settings.payment_types

    @pytest.mark.unit
    def test_default_cc_category_with_empty_list(self):
        """Test the card-category fallback when none are configured."""
        assert Settings(credit_card_categories=[]).default_cc_category == "Otros"


class TestBankStatementLine:
    """Test BankStatementLine records."""

    @pytest.mark.unit
    def test_amount_is_non_negative(self):
        """Test stored negative amounts are normalized."""
        line = BankStatementLine.from_dict({"id": "b1", "amount": -1500, "type": "debit"})
        assert line.amount == Money.from_pesos(1500)
        assert line.type == BankLineType.DEBIT

    @pytest.mark.unit
    def test_reconciled_state(self):
        """Test a line is reconciled iff it has a match id."""
        line = BankStatementLine.from_dict(
            {"id": "b1", "amount": 1, "type": "credit", "reconciledWithId": "i1", "reconciledWithType": "income"}
        )
        assert line.is_reconciled
        assert line.reconciled_with_type == MatchType.INCOME
        assert not BankStatementLine.from_dict({"id": "b2", "amount": 1}).is_reconciled


class TestAccountName:
    """Test account label lookup."""

    @pytest.mark.unit
    def test_known_and_unknown_accounts(self):
        """Test dangling account ids get the unknown label."""
        accounts = [Account(id="acc-1", name="Cuenta Corriente")]
        assert account_name(accounts, "acc-1") == "Cuenta Corriente"
        assert account_name(accounts, "gone") == "—"
