#!/usr/bin/env python3
"""
Core Data Models for Obrafin

Passive domain records for the project ledger: accounts, projects, incomes,
expenses, credit-card purchases and payments, transfers, bank-statement
lines and the settings lists the host application maintains.

The host stores everything as one JSON blob with camelCase keys; every
record here converts to and from that shape with ``from_dict``/``to_dict``.
Amounts are Money (whole pesos) and dates are optional FinancialDate values.
"""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType

from .dates import FinancialDate, to_iso
from .money import Money

# Free-text join key between Project.category and Income/Expense categories.
# There is no referential integrity: renaming a project category silently
# orphans the records that used the old text.
CategoryKey = NewType("CategoryKey", str)

OFFICE_PROJECT_CATEGORY = CategoryKey("Oficina")
UNKNOWN_ACCOUNT_NAME = "—"


def new_id() -> str:
    """Generate a fresh record id."""
    return str(uuid.uuid4())


class IncomeStatus(str, Enum):
    """Collection status of an income."""

    PAGADO = "Pagado"
    PENDIENTE = "Pendiente"
    PAGO_PARCIAL = "Pago parcial"

    @classmethod
    def parse(cls, value: Any) -> "IncomeStatus":
        """Parse a stored status; anything unknown counts as pending."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDIENTE


class ExpenseScope(str, Enum):
    """Whether an expense belongs to the office or to a project."""

    OFICINA = "Oficina"
    PROYECTO = "Proyecto"

    @classmethod
    def parse(cls, value: Any) -> "ExpenseScope":
        """Parse a stored scope; anything unknown is an office expense."""
        try:
            return cls(value)
        except ValueError:
            return cls.OFICINA


class PaymentMethod(str, Enum):
    """How an expense was paid."""

    TRANSFERENCIA = "Transferencia"
    DEBITO = "Débito"
    EFECTIVO = "Efectivo"
    TARJETA_CREDITO = "Tarjeta Crédito"

    @classmethod
    def parse(cls, value: Any) -> "PaymentMethod":
        """Parse a stored method; anything unknown is treated as a transfer."""
        try:
            return cls(value)
        except ValueError:
            return cls.TRANSFERENCIA


class DocumentType(str, Enum):
    """Tax document backing an expense."""

    SIN_RESPALDO = "sin_respaldo"
    BOLETA = "boleta"
    BOLETA_HONORARIOS = "boleta_honorarios"
    FACTURA_AFECTA = "factura_afecta"
    FACTURA_EXENTA = "factura_exenta"
    NOTA_CREDITO = "nota_credito"

    @classmethod
    def parse(cls, value: Any) -> "DocumentType":
        """Parse a stored document type; missing means no backing document."""
        try:
            return cls(value)
        except ValueError:
            return cls.SIN_RESPALDO

    @property
    def label(self) -> str:
        """Human-readable Spanish label."""
        return DOCUMENT_TYPE_LABELS[self]


DOCUMENT_TYPE_LABELS = {
    DocumentType.SIN_RESPALDO: "Sin respaldo",
    DocumentType.BOLETA: "Boleta",
    DocumentType.BOLETA_HONORARIOS: "Boleta de honorarios",
    DocumentType.FACTURA_AFECTA: "Factura afecta IVA",
    DocumentType.FACTURA_EXENTA: "Factura exenta",
    DocumentType.NOTA_CREDITO: "Nota de crédito",
}


class BankLineType(str, Enum):
    """Direction of a bank-statement line."""

    CREDIT = "credit"
    DEBIT = "debit"

    @classmethod
    def parse(cls, value: Any) -> "BankLineType":
        """Parse a stored line type; anything but "credit" is a debit."""
        return cls.CREDIT if value == "credit" else cls.DEBIT


class MatchType(str, Enum):
    """Ledger collection a bank line is reconciled against."""

    INCOME = "income"
    EXPENSE = "expense"


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


@dataclass
class Account:
    """A cash account (bank account, petty cash...)."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """Create Account from stored dict."""
        return cls(id=_text(data, "id") or new_id(), name=_text(data, "name"))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name}


@dataclass
class PaymentPlanEntry:
    """One contractual milestone: a payment-type label and its percentage."""

    type: str
    pct: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PaymentPlanEntry":
        """Create PaymentPlanEntry from stored dict."""
        try:
            pct = float(data.get("pct") or 0)
        except (TypeError, ValueError):
            pct = 0.0
        return cls(type=_text(data, "type"), pct=pct)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        pct: float | int = int(self.pct) if float(self.pct).is_integer() else self.pct
        return {"type": self.type, "pct": pct}


@dataclass
class BudgetItem:
    """A budget line of a project."""

    name: str
    amount: Money

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BudgetItem":
        """Create BudgetItem from stored dict."""
        return cls(name=_text(data, "name"), amount=Money.parse(data.get("amount")))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "amount": self.amount.to_pesos()}


@dataclass
class Project:
    """
    A construction project.

    ``category`` is the join key with Income.category and
    Expense.project_category (string equality only).
    """

    id: str
    name: str
    category: CategoryKey
    client: str = ""
    contract_total: Money = field(default_factory=Money.zero)
    payment_plan: list[PaymentPlanEntry] = field(default_factory=list)
    budget_items: list[BudgetItem] = field(default_factory=list)

    @property
    def budget_total(self) -> Money:
        """Sum of all budget items."""
        return Money.from_pesos(sum(item.amount.to_pesos() for item in self.budget_items))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create Project from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            name=_text(data, "name"),
            category=CategoryKey(_text(data, "category")),
            client=_text(data, "client"),
            contract_total=Money.parse(data.get("contractTotal")),
            payment_plan=[PaymentPlanEntry.from_dict(x) for x in data.get("paymentPlan") or []],
            budget_items=[BudgetItem.from_dict(x) for x in data.get("budgetItems") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "client": self.client,
            "contractTotal": self.contract_total.to_pesos(),
            "paymentPlan": [entry.to_dict() for entry in self.payment_plan],
            "budgetItems": [item.to_dict() for item in self.budget_items],
        }


@dataclass
class Income:
    """
    An invoiced or collected income.

    Cash contribution depends on status: Pagado → amount, Pago parcial →
    amount_paid, Pendiente → nothing. ``amount`` stays the invoiced figure
    used for milestone tracking.
    """

    id: str
    account_id: str
    category: CategoryKey
    type_pago: str
    status: IncomeStatus
    amount: Money
    date_invoice: FinancialDate | None = None
    date_paid: FinancialDate | None = None
    amount_paid: Money = field(default_factory=Money.zero)
    note: str = ""

    @property
    def is_collected(self) -> bool:
        """True for Pagado and Pago parcial incomes."""
        return self.status in (IncomeStatus.PAGADO, IncomeStatus.PAGO_PARCIAL)

    def cash_amount(self) -> Money:
        """Amount this income contributes to cash."""
        if self.status == IncomeStatus.PAGO_PARCIAL:
            return self.amount_paid
        if self.status == IncomeStatus.PAGADO:
            return self.amount
        return Money.zero()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Income":
        """Create Income from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            account_id=_text(data, "accountId"),
            category=CategoryKey(_text(data, "category")),
            type_pago=_text(data, "typePago"),
            status=IncomeStatus.parse(data.get("status")),
            amount=Money.parse(data.get("amount")),
            date_invoice=FinancialDate.parse_optional(data.get("dateInvoice")),
            date_paid=FinancialDate.parse_optional(data.get("datePaid")),
            amount_paid=Money.parse(data.get("amountPaid")),
            note=_text(data, "note"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "accountId": self.account_id,
            "category": self.category,
            "typePago": self.type_pago,
            "status": self.status.value,
            "dateInvoice": to_iso(self.date_invoice),
            "datePaid": to_iso(self.date_paid),
            "amount": self.amount.to_pesos(),
            "amountPaid": self.amount_paid.to_pesos(),
            "note": self.note,
        }


@dataclass
class Expense:
    """
    An expense, optionally backed by a tax document.

    A negative amount is a refund. Credit-card expenses never touch cash
    directly; they are mirrored into exactly one CreditCardPurchase.
    """

    id: str
    account_id: str
    scope: ExpenseScope
    category: str
    method: PaymentMethod
    amount: Money
    date_paid: FinancialDate | None = None
    project_category: CategoryKey = CategoryKey("")
    vendor: str = ""
    note: str = ""
    cc_category: str = ""
    document_type: DocumentType = DocumentType.SIN_RESPALDO
    document_number: str = ""
    document_issued_at: FinancialDate | None = None
    document_provider: str = ""
    document_notes: str = ""

    @property
    def is_credit_card(self) -> bool:
        """True when paid with a credit card."""
        return self.method == PaymentMethod.TARJETA_CREDITO

    @property
    def effective_project_category(self) -> CategoryKey:
        """Project tag used for cash transactions ("Oficina" for office scope)."""
        if self.scope == ExpenseScope.PROYECTO:
            return self.project_category
        return OFFICE_PROJECT_CATEGORY

    @property
    def tax_date(self) -> FinancialDate | None:
        """Date that places the expense in a tax month."""
        return self.document_issued_at or self.date_paid

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Create Expense from stored dict."""
        scope = ExpenseScope.parse(data.get("scope"))
        return cls(
            id=_text(data, "id") or new_id(),
            account_id=_text(data, "accountId"),
            scope=scope,
            project_category=CategoryKey(_text(data, "projectCategory") if scope == ExpenseScope.PROYECTO else ""),
            category=_text(data, "category"),
            method=PaymentMethod.parse(data.get("method")),
            date_paid=FinancialDate.parse_optional(data.get("datePaid")),
            vendor=_text(data, "vendor"),
            amount=Money.parse(data.get("amount")),
            note=_text(data, "note"),
            cc_category=_text(data, "ccCategory"),
            document_type=DocumentType.parse(data.get("documentType")),
            document_number=_text(data, "documentNumber"),
            document_issued_at=FinancialDate.parse_optional(data.get("documentIssuedAt")),
            document_provider=_text(data, "documentProvider"),
            document_notes=_text(data, "documentNotes"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "accountId": self.account_id,
            "scope": self.scope.value,
            "projectCategory": self.project_category,
            "category": self.category,
            "method": self.method.value,
            "datePaid": to_iso(self.date_paid),
            "vendor": self.vendor,
            "amount": self.amount.to_pesos(),
            "note": self.note,
            "ccCategory": self.cc_category,
            "documentType": self.document_type.value,
            "documentNumber": self.document_number,
            "documentIssuedAt": to_iso(self.document_issued_at),
            "documentProvider": self.document_provider,
            "documentNotes": self.document_notes,
        }


@dataclass
class CreditCardPurchase:
    """
    A purchase charged to the credit card (no cash impact).

    ``is_paid`` is toggled by hand; paying the card does not flip it.
    """

    id: str
    source_expense_id: str
    amount: Money
    is_paid: bool = False
    date_purchase: FinancialDate | None = None
    vendor: str = ""
    cc_category: str = ""
    project_category: CategoryKey = CategoryKey("")
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreditCardPurchase":
        """Create CreditCardPurchase from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            source_expense_id=_text(data, "sourceExpenseId"),
            is_paid=bool(data.get("isPaid", False)),
            date_purchase=FinancialDate.parse_optional(data.get("datePurchase")),
            vendor=_text(data, "vendor"),
            amount=Money.parse(data.get("amount")),
            cc_category=_text(data, "ccCategory"),
            project_category=CategoryKey(_text(data, "projectCategory")),
            note=_text(data, "note"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "sourceExpenseId": self.source_expense_id,
            "isPaid": self.is_paid,
            "datePurchase": to_iso(self.date_purchase),
            "vendor": self.vendor,
            "amount": self.amount.to_pesos(),
            "ccCategory": self.cc_category,
            "projectCategory": self.project_category,
            "note": self.note,
        }


@dataclass
class CreditCardPayment:
    """A payment towards the credit card; always a cash outflow."""

    id: str
    account_id: str
    amount: Money
    date_paid: FinancialDate | None = None
    card_name: str = ""
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreditCardPayment":
        """Create CreditCardPayment from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            date_paid=FinancialDate.parse_optional(data.get("datePaid")),
            card_name=_text(data, "cardName"),
            amount=Money.parse(data.get("amount")),
            account_id=_text(data, "accountId"),
            note=_text(data, "note"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "datePaid": to_iso(self.date_paid),
            "cardName": self.card_name,
            "amount": self.amount.to_pesos(),
            "accountId": self.account_id,
            "note": self.note,
        }


@dataclass
class Transfer:
    """Money moved between two of our own accounts."""

    id: str
    from_account_id: str
    to_account_id: str
    amount: Money
    date: FinancialDate | None = None
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transfer":
        """Create Transfer from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            date=FinancialDate.parse_optional(data.get("date")),
            from_account_id=_text(data, "fromAccountId"),
            to_account_id=_text(data, "toAccountId"),
            amount=Money.parse(data.get("amount")),
            note=_text(data, "note"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": to_iso(self.date),
            "fromAccountId": self.from_account_id,
            "toAccountId": self.to_account_id,
            "amount": self.amount.to_pesos(),
            "note": self.note,
        }


@dataclass
class BankStatementLine:
    """
    One line of an imported bank statement.

    ``amount`` is always non-negative; ``type`` gives the direction. The line
    is reconciled iff ``reconciled_with_id`` is set.
    """

    id: str
    amount: Money
    type: BankLineType
    date: FinancialDate | None = None
    description: str = ""
    balance: Money | None = None
    doc_number: str = ""
    source: str = ""
    reconciled_with_id: str | None = None
    reconciled_with_type: MatchType | None = None

    @property
    def is_reconciled(self) -> bool:
        """True once linked to a ledger record."""
        return bool(self.reconciled_with_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BankStatementLine":
        """Create BankStatementLine from stored dict."""
        balance = data.get("balance")
        match_type = data.get("reconciledWithType")
        return cls(
            id=_text(data, "id") or new_id(),
            date=FinancialDate.parse_optional(data.get("date")),
            description=_text(data, "description"),
            amount=Money.parse(data.get("amount")).abs(),
            type=BankLineType.parse(data.get("type")),
            balance=Money.parse(balance) if balance is not None and balance != "" else None,
            doc_number=_text(data, "docNumber"),
            source=_text(data, "source"),
            reconciled_with_id=data.get("reconciledWithId") or None,
            reconciled_with_type=MatchType(match_type) if match_type in ("income", "expense") else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": to_iso(self.date),
            "description": self.description,
            "amount": self.amount.to_pesos(),
            "type": self.type.value,
            "balance": self.balance.to_pesos() if self.balance is not None else None,
            "docNumber": self.doc_number,
            "source": self.source,
            "reconciledWithId": self.reconciled_with_id,
            "reconciledWithType": self.reconciled_with_type.value if self.reconciled_with_type else None,
        }


class PurchaseOrderStatus(str, Enum):
    """Lifecycle of a purchase order."""

    PENDIENTE = "Pendiente"
    APROBADA = "Aprobada"
    EN_CAMINO = "En camino"
    RECIBIDA = "Recibida"
    COMPLETADA = "Completada"
    CANCELADA = "Cancelada"

    @classmethod
    def parse(cls, value: Any) -> "PurchaseOrderStatus":
        """Parse a stored status; anything unknown is pending."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDIENTE


@dataclass
class Vendor:
    """
    A supplier (proveedor).

    Expenses are attributed to a vendor when their free-text ``vendor``
    matches ``name`` ignoring case and surrounding spaces.
    """

    id: str
    name: str
    rut: str = ""
    giro: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vendor":
        """Create Vendor from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            name=_text(data, "name"),
            rut=_text(data, "rut"),
            giro=_text(data, "giro"),
            contact=_text(data, "contact"),
            phone=_text(data, "phone"),
            email=_text(data, "email"),
            address=_text(data, "address"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "rut": self.rut,
            "giro": self.giro,
            "contact": self.contact,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
        }


@dataclass
class OrderItem:
    """One line of a purchase order."""

    description: str
    quantity: float = 1
    unit_price: Money = field(default_factory=Money.zero)

    @property
    def total(self) -> Money:
        """Quantity times unit price, rounded to whole pesos."""
        return Money.from_pesos(round(self.quantity * self.unit_price.to_pesos()))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        """Create OrderItem from stored dict."""
        try:
            quantity = float(data.get("quantity") or 0)
        except (TypeError, ValueError):
            quantity = 0.0
        return cls(
            description=_text(data, "description"),
            quantity=quantity,
            unit_price=Money.parse(data.get("unitPrice")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        quantity: float | int = int(self.quantity) if float(self.quantity).is_integer() else self.quantity
        return {"description": self.description, "quantity": quantity, "unitPrice": self.unit_price.to_pesos()}


@dataclass
class PurchaseOrder:
    """A purchase order placed with a vendor for a project."""

    id: str
    project_id: str
    vendor_id: str
    date: FinancialDate | None = None
    description: str = ""
    items: list[OrderItem] = field(default_factory=list)
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDIENTE

    @property
    def total(self) -> Money:
        """Sum of the item totals."""
        return Money.from_pesos(sum(item.total.to_pesos() for item in self.items))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PurchaseOrder":
        """Create PurchaseOrder from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            project_id=_text(data, "projectId"),
            vendor_id=_text(data, "proveedorId"),
            date=FinancialDate.parse_optional(data.get("date")),
            description=_text(data, "description"),
            items=[OrderItem.from_dict(x) for x in data.get("items") or []],
            status=PurchaseOrderStatus.parse(data.get("status")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "projectId": self.project_id,
            "proveedorId": self.vendor_id,
            "date": to_iso(self.date),
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
            "total": self.total.to_pesos(),
            "status": self.status.value,
        }


@dataclass
class Quote:
    """A price quoted by a vendor for one item (cotización)."""

    id: str
    vendor_id: str
    item_description: str
    amount: Money
    date: FinancialDate | None = None
    valid_until: FinancialDate | None = None
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quote":
        """Create Quote from stored dict."""
        return cls(
            id=_text(data, "id") or new_id(),
            vendor_id=_text(data, "proveedorId"),
            item_description=_text(data, "itemDescription"),
            amount=Money.parse(data.get("amount")),
            date=FinancialDate.parse_optional(data.get("date")),
            valid_until=FinancialDate.parse_optional(data.get("validUntil")),
            note=_text(data, "note"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "proveedorId": self.vendor_id,
            "itemDescription": self.item_description,
            "amount": self.amount.to_pesos(),
            "date": to_iso(self.date),
            "validUntil": to_iso(self.valid_until),
            "note": self.note,
        }


@dataclass
class Settings:
    """Canonical lists maintained by the host application."""

    payment_types: list[str] = field(
        default_factory=lambda: ["Anticipo", "Hito 1", "Hito 2", "Hito 3", "Hito 4", "Adicional", "Otro"]
    )
    income_categories: list[str] = field(default_factory=lambda: ["Préstamo", "Devolución", "Otro"])
    expense_categories_office: list[str] = field(
        default_factory=lambda: [
            "Sueldos",
            "Imposiciones",
            "Arriendo",
            "Contabilidad",
            "Bancos",
            "Meta Ads",
            "Arquitectura",
            "F19",
            "Préstamo",
            "Otros",
        ]
    )
    expense_categories_project: list[str] = field(
        default_factory=lambda: [
            "Materiales",
            "Subcontratos",
            "Servicios",
            "Sueldos Obra",
            "Movilización y colación",
            "Herramientas",
            "Arriendo equipos",
            "Fletes",
            "Permisos",
            "Otros",
        ]
    )
    credit_card_categories: list[str] = field(
        default_factory=lambda: ["Materiales", "Servicios", "Subcontratos", "Suministros", "Transporte", "Otros"]
    )
    # Opaque to the ledger; passed through for the host's charts
    category_colors: dict[str, Any] = field(default_factory=lambda: {"income": {}, "expense": {}})

    @property
    def default_cc_category(self) -> str:
        """Category given to mirrored purchases that do not name one."""
        return self.credit_card_categories[0] if self.credit_card_categories else "Otros"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Create Settings from stored dict, keeping defaults for missing lists."""
        defaults = cls()
        return cls(
            payment_types=list(data.get("paymentTypes") or defaults.payment_types),
            income_categories=list(data.get("incomeCategories") or defaults.income_categories),
            expense_categories_office=list(
                data.get("expenseCategoriesOffice") or defaults.expense_categories_office
            ),
            expense_categories_project=list(
                data.get("expenseCategoriesProject") or defaults.expense_categories_project
            ),
            credit_card_categories=list(data.get("creditCardCategories") or defaults.credit_card_categories),
            category_colors=dict(data.get("categoryColors") or defaults.category_colors),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "paymentTypes": list(self.payment_types),
            "incomeCategories": list(self.income_categories),
            "expenseCategoriesOffice": list(self.expense_categories_office),
            "expenseCategoriesProject": list(self.expense_categories_project),
            "creditCardCategories": list(self.credit_card_categories),
            "categoryColors": dict(self.category_colors),
        }


def account_name(accounts: "Iterable[Account]", account_id: str) -> str:
    """Name of an account, or the unknown-account label for dangling ids."""
    for account in accounts:
        if account.id == account_id:
            return account.name
    return UNKNOWN_ACCOUNT_NAME
