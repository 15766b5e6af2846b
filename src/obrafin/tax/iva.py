#!/usr/bin/env python3
"""
IVA (Chilean VAT) Ledgers

Splits gross amounts into neto and IVA at the fixed 19% rate and builds the
purchase ledger (Libro de Compras), the sales ledger (Libro de Ventas) and
the monthly IVA position.

IVA is always the remainder after rounding neto, so ``neto + iva == amount``
holds exactly for every record.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.dates import ALL_MONTHS, FinancialDate, month_key, to_iso
from ..core.models import DocumentType, Expense, Income, IncomeStatus
from ..core.money import Money

logger = logging.getLogger(__name__)

IVA_RATE_PCT = 19


@dataclass(frozen=True)
class IvaSplit:
    """Neto and IVA portions of a gross amount."""

    neto: Money
    iva: Money

    @property
    def total(self) -> Money:
        return self.neto + self.iva


def split_iva(amount: Money | int) -> IvaSplit:
    """
    Split a gross amount that includes 19% IVA.

    ``neto = round(amount / 1.19)`` with halves rounded up, computed in
    integers as ``floor((200 * amount + 119) / 238)``; ``iva = amount - neto``.

    Examples:
        split_iva(119) -> neto 100, iva 19
        split_iva(1000) -> neto 840, iva 160
    """
    pesos = Money.parse(amount).to_pesos()
    neto = (200 * pesos + 119) // 238
    return IvaSplit(neto=Money.from_pesos(neto), iva=Money.from_pesos(pesos - neto))


@dataclass(frozen=True)
class PurchaseEntry:
    """One row of the Libro de Compras."""

    expense: Expense
    neto: Money
    iva: Money
    total: Money
    month: str
    provider: str

    @property
    def date(self) -> FinancialDate | None:
        return self.expense.tax_date

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "id": self.expense.id,
            "date": to_iso(self.date),
            "month": self.month,
            "documentNumber": self.expense.document_number,
            "provider": self.provider,
            "vendor": self.expense.vendor,
            "category": self.expense.category,
            "neto": self.neto.to_pesos(),
            "iva": self.iva.to_pesos(),
            "total": self.total.to_pesos(),
        }


@dataclass(frozen=True)
class SaleEntry:
    """One row of the Libro de Ventas."""

    income: Income
    neto: Money
    iva: Money
    total: Money
    month: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "id": self.income.id,
            "date": to_iso(self.income.date_paid),
            "month": self.month,
            "category": self.income.category,
            "typePago": self.income.type_pago,
            "status": self.income.status.value,
            "neto": self.neto.to_pesos(),
            "iva": self.iva.to_pesos(),
            "total": self.total.to_pesos(),
        }


@dataclass(frozen=True)
class IvaMonthSummary:
    """IVA position for one month (or a whole period)."""

    month: str
    purchase_count: int
    sale_count: int
    neto_compras: Money
    neto_ventas: Money
    iva_credito: Money
    iva_debito: Money

    @property
    def iva_pagar(self) -> Money:
        """IVA owed (positive) or carried forward as remanente (negative)."""
        return self.iva_debito - self.iva_credito

    @property
    def is_remanente(self) -> bool:
        return self.iva_pagar.pesos < 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat row for tables and exports."""
        return {
            "month": self.month,
            "nFacturas": self.purchase_count,
            "nVentas": self.sale_count,
            "netoCompras": self.neto_compras.to_pesos(),
            "netoVentas": self.neto_ventas.to_pesos(),
            "ivaCredito": self.iva_credito.to_pesos(),
            "ivaDebito": self.iva_debito.to_pesos(),
            "ivaPagar": self.iva_pagar.to_pesos(),
        }


def build_libro_compras(expenses: Iterable[Expense]) -> list[PurchaseEntry]:
    """
    Purchase ledger: every expense backed by a factura afecta.

    The month comes from the document issue date, falling back to the paid
    date. Rows are sorted newest first.
    """
    entries = []
    for expense in expenses:
        if expense.document_type != DocumentType.FACTURA_AFECTA:
            continue
        split = split_iva(expense.amount)
        entries.append(
            PurchaseEntry(
                expense=expense,
                neto=split.neto,
                iva=split.iva,
                total=expense.amount,
                month=month_key(expense.tax_date),
                provider=expense.document_provider or expense.vendor,
            )
        )
    return sorted(entries, key=lambda e: to_iso(e.date), reverse=True)


def build_libro_ventas(incomes: Iterable[Income]) -> list[SaleEntry]:
    """
    Sales ledger: every collected income, split on its cash amount.

    Partial payments use the amount actually paid. Rows are sorted by paid
    date, newest first.
    """
    entries = []
    for income in incomes:
        if income.status not in (IncomeStatus.PAGADO, IncomeStatus.PAGO_PARCIAL):
            continue
        amount = income.cash_amount()
        split = split_iva(amount)
        entries.append(
            SaleEntry(
                income=income,
                neto=split.neto,
                iva=split.iva,
                total=amount,
                month=month_key(income.date_paid),
            )
        )
    return sorted(entries, key=lambda e: to_iso(e.income.date_paid), reverse=True)


def _summarize(month: str, compras: list[PurchaseEntry], ventas: list[SaleEntry]) -> IvaMonthSummary:
    return IvaMonthSummary(
        month=month,
        purchase_count=len(compras),
        sale_count=len(ventas),
        neto_compras=Money.from_pesos(sum(e.neto.to_pesos() for e in compras)),
        neto_ventas=Money.from_pesos(sum(e.neto.to_pesos() for e in ventas)),
        iva_credito=Money.from_pesos(sum(e.iva.to_pesos() for e in compras)),
        iva_debito=Money.from_pesos(sum(e.iva.to_pesos() for e in ventas)),
    )


def summarize_iva_by_month(compras: list[PurchaseEntry], ventas: list[SaleEntry]) -> list[IvaMonthSummary]:
    """
    Monthly IVA position, most recent month first.

    Undated entries have no month and are left out of the summary (they
    still appear in the ledgers).
    """
    months = {e.month for e in compras} | {e.month for e in ventas}
    undated = "" in months
    months.discard("")
    if undated:
        logger.debug("Leaving undated IVA entries out of the monthly summary")

    return [
        _summarize(
            month,
            [e for e in compras if e.month == month],
            [e for e in ventas if e.month == month],
        )
        for month in sorted(months, reverse=True)
    ]


def iva_totals(compras: list[PurchaseEntry], ventas: list[SaleEntry], month: str = ALL_MONTHS) -> IvaMonthSummary:
    """IVA position for one month, or for every entry when month is "ALL"."""
    if month != ALL_MONTHS:
        compras = [e for e in compras if e.month == month]
        ventas = [e for e in ventas if e.month == month]
    return _summarize(month, compras, ventas)
