#!/usr/bin/env python3
"""
Synthetic Ledger Data Builders

Small builders for ledger records and a complete synthetic state blob for
integration tests. All names, amounts and ids are made up.
"""

import json
from pathlib import Path
from typing import Any

from obrafin.core.dates import FinancialDate
from obrafin.core.models import (
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
    PaymentMethod,
    OrderItem,
    PaymentPlanEntry,
    Project,
    PurchaseOrder,
    Quote,
    Transfer,
    Vendor,
)
from obrafin.core.money import Money

_counter = {"n": 0}


def _next_id(prefix: str) -> str:
    _counter["n"] += 1
    return f"{prefix}-{_counter['n']}"


def make_income(
    amount: int = 100000,
    date_paid: str | None = "2025-01-10",
    status: IncomeStatus = IncomeStatus.PAGADO,
    category: str = "OBRA: Casa Test",
    type_pago: str = "Anticipo",
    account_id: str = "acc-1",
    amount_paid: int = 0,
    id: str | None = None,
) -> Income:
    return Income(
        id=id or _next_id("inc"),
        account_id=account_id,
        category=CategoryKey(category),
        type_pago=type_pago,
        status=status,
        amount=Money.from_pesos(amount),
        date_paid=FinancialDate.parse_optional(date_paid),
        amount_paid=Money.from_pesos(amount_paid),
    )


def make_expense(
    amount: int = 50000,
    date_paid: str | None = "2025-01-12",
    method: PaymentMethod = PaymentMethod.TRANSFERENCIA,
    category: str = "Materiales",
    scope: ExpenseScope = ExpenseScope.PROYECTO,
    project_category: str = "OBRA: Casa Test",
    vendor: str = "Ferretería Uno",
    account_id: str = "acc-1",
    note: str = "",
    document_type: DocumentType = DocumentType.SIN_RESPALDO,
    document_number: str = "",
    document_provider: str = "",
    document_issued_at: str | None = None,
    id: str | None = None,
) -> Expense:
    return Expense(
        id=id or _next_id("exp"),
        account_id=account_id,
        scope=scope,
        category=category,
        method=method,
        amount=Money.from_pesos(amount),
        date_paid=FinancialDate.parse_optional(date_paid),
        project_category=CategoryKey(project_category if scope == ExpenseScope.PROYECTO else ""),
        vendor=vendor,
        note=note,
        document_type=document_type,
        document_number=document_number,
        document_provider=document_provider,
        document_issued_at=FinancialDate.parse_optional(document_issued_at),
    )


def make_transfer(
    amount: int = 30000,
    date: str | None = "2025-01-15",
    from_account_id: str = "acc-1",
    to_account_id: str = "acc-2",
    id: str | None = None,
) -> Transfer:
    return Transfer(
        id=id or _next_id("tr"),
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        amount=Money.from_pesos(amount),
        date=FinancialDate.parse_optional(date),
    )


def make_cc_payment(amount: int = 20000, date_paid: str | None = "2025-01-20", account_id: str = "acc-1") -> CreditCardPayment:
    return CreditCardPayment(
        id=_next_id("ccp"),
        account_id=account_id,
        amount=Money.from_pesos(amount),
        date_paid=FinancialDate.parse_optional(date_paid),
        card_name="Visa Test",
    )


def make_cc_purchase(amount: int = 15000, is_paid: bool = False, source_expense_id: str = "") -> CreditCardPurchase:
    return CreditCardPurchase(
        id=_next_id("ccc"),
        source_expense_id=source_expense_id,
        amount=Money.from_pesos(amount),
        is_paid=is_paid,
    )


def make_bank_line(
    amount: int,
    date: str | None,
    line_type: BankLineType = BankLineType.CREDIT,
    id: str | None = None,
    reconciled_with_id: str | None = None,
) -> BankStatementLine:
    return BankStatementLine(
        id=id or _next_id("bank"),
        amount=Money.from_pesos(amount),
        type=line_type,
        date=FinancialDate.parse_optional(date),
        description="Movimiento test",
        reconciled_with_id=reconciled_with_id,
    )


def make_project(
    category: str = "OBRA: Casa Test",
    contract_total: int = 10_000_000,
    plan: list[tuple[str, float]] | None = None,
    budget: int | None = None,
) -> Project:
    return Project(
        id=_next_id("prj"),
        name=category.replace("OBRA: ", ""),
        category=CategoryKey(category),
        client="Cliente Test",
        contract_total=Money.from_pesos(contract_total),
        payment_plan=[PaymentPlanEntry(type=t, pct=p) for t, p in (plan or [])],
        budget_items=[BudgetItem(name="Obra gruesa", amount=Money.from_pesos(budget))] if budget else [],
    )


def synthetic_state_dict() -> dict[str, Any]:
    """A complete state blob in the host's JSON shape."""
    return {
        "settings": {
            "paymentTypes": ["Anticipo", "Hito 1", "Hito 2", "Otro"],
            "creditCardCategories": ["Materiales", "Otros"],
        },
        "accounts": [{"id": "acc-1", "name": "Cuenta Corriente"}, {"id": "acc-2", "name": "Caja Chica"}],
        "projects": [
            {
                "id": "prj-1",
                "name": "Casa Test",
                "category": "OBRA: Casa Test",
                "client": "Cliente Test",
                "contractTotal": 10000000,
                "paymentPlan": [{"type": "Anticipo", "pct": 30}, {"type": "Hito 1", "pct": 70}],
                "budgetItems": [{"name": "Obra gruesa", "amount": 1000000}],
            }
        ],
        "incomes": [
            {
                "id": "inc-1",
                "accountId": "acc-1",
                "category": "OBRA: Casa Test",
                "typePago": "Anticipo",
                "status": "Pagado",
                "datePaid": "2025-01-10",
                "amount": 2000000,
            },
            {
                "id": "inc-2",
                "accountId": "acc-1",
                "category": "OBRA: Casa Test",
                "typePago": "Hito 1",
                "status": "Pendiente",
                "amount": 3000000,
            },
        ],
        "expenses": [
            {
                "id": "exp-1",
                "accountId": "acc-1",
                "scope": "Proyecto",
                "projectCategory": "OBRA: Casa Test",
                "category": "Materiales",
                "method": "Transferencia",
                "datePaid": "2025-01-12",
                "vendor": "Ferretería Uno",
                "amount": 119000,
                "documentType": "factura_afecta",
                "documentNumber": "1234",
                "documentProvider": "76.123.456-0",
                "documentIssuedAt": "2025-01-12",
            },
            {
                "id": "exp-2",
                "accountId": "acc-1",
                "scope": "Oficina",
                "category": "Arriendo",
                "method": "Tarjeta Crédito",
                "datePaid": "2025-01-15",
                "amount": 50000,
            },
        ],
        "ccPurchases": [
            {
                "id": "ccc-1",
                "sourceExpenseId": "exp-2",
                "isPaid": False,
                "datePurchase": "2025-01-15",
                "amount": 50000,
                "ccCategory": "Materiales",
                "note": "Arriendo",
            }
        ],
        "ccPayments": [],
        "transfers": [
            {"id": "tr-1", "date": "2025-02-01", "fromAccountId": "acc-1", "toAccountId": "acc-2", "amount": 100000}
        ],
        "bankTransactions": [
            {"id": "bank-1", "date": "2025-01-11", "amount": 2000000, "type": "credit", "description": "Abono cliente"},
            {"id": "bank-2", "date": "2025-01-12", "amount": 119000, "type": "debit", "description": "Pago ferretería"},
        ],
        "proveedores": [
            {"id": "prov-1", "name": "Ferretería Uno", "giro": "Ferretería", "contact": "Ana Test"},
            {"id": "prov-2", "name": "Maderas Sur"},
        ],
        "ordenes": [
            {
                "id": "oc-1",
                "projectId": "prj-1",
                "proveedorId": "prov-1",
                "date": "2025-01-05",
                "items": [{"description": "Cemento", "quantity": 10, "unitPrice": 5000}],
                "status": "Aprobada",
            },
            {
                "id": "oc-2",
                "projectId": "prj-1",
                "proveedorId": "prov-2",
                "date": "2025-01-20",
                "items": [{"description": "Tablas", "quantity": 2, "unitPrice": 30000}],
                "status": "Pendiente",
            },
        ],
        "cotizaciones": [
            {"id": "q-1", "proveedorId": "prov-1", "itemDescription": "Cemento", "amount": 5200, "date": "2025-01-02"},
            {"id": "q-2", "proveedorId": "prov-2", "itemDescription": "cemento", "amount": 4900, "date": "2025-01-03"},
            {"id": "q-3", "proveedorId": "prov-2", "itemDescription": "Tablas", "amount": 15000, "date": "2025-01-03"},
        ],
        "cashOpeningByMonth": {"2025-01": 500000},
    }


def write_synthetic_state(path: Path) -> Path:
    """Write the synthetic state blob to a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(synthetic_state_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def make_vendor(name: str = "Ferretería Uno", rut: str = "", id: str | None = None) -> Vendor:
    return Vendor(id=id or _next_id("prov"), name=name, rut=rut)


def make_quote(vendor_id: str, item: str, amount: int, id: str | None = None) -> Quote:
    return Quote(
        id=id or _next_id("q"),
        vendor_id=vendor_id,
        item_description=item,
        amount=Money.from_pesos(amount),
        date=FinancialDate.from_string("2025-01-03"),
    )


def make_purchase_order(
    vendor_id: str = "prov-1",
    date: str | None = "2025-01-05",
    items: list[tuple[str, float, int]] | None = None,
    id: str | None = None,
) -> PurchaseOrder:
    return PurchaseOrder(
        id=id or _next_id("oc"),
        project_id="prj-1",
        vendor_id=vendor_id,
        date=FinancialDate.parse_optional(date),
        items=[OrderItem(d, q, Money.from_pesos(p)) for d, q, p in (items or [("Cemento", 10, 5000)])],
    )
