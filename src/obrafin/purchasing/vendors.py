#!/usr/bin/env python3
"""
Vendor Views

Derived views over vendors (proveedores), purchase orders and quotes:
spend per vendor from the expense ledger, a quote comparison per item and
the purchase-order list. Nothing here changes the ledger state.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..core.models import Expense, PurchaseOrder, Quote, Vendor
from ..core.money import Money
from ..tax.rut import validate_rut

logger = logging.getLogger(__name__)

UNKNOWN_VENDOR_NAME = "—"


def _key(text: str) -> str:
    return (text or "").strip().lower()


def vendor_errors(vendor: Vendor, vendors: Iterable[Vendor]) -> dict[str, str]:
    """
    Check a vendor before it is added or saved.

    The name is required and unique ignoring case; a RUT is optional but must
    be valid when given.

    Args:
        vendor: Candidate record
        vendors: Vendors already stored (a stored copy of ``vendor`` is skipped)

    Returns:
        Field name -> message; empty when the vendor can be saved
    """
    errors = {}
    name = _key(vendor.name)
    if not name:
        errors["name"] = "Nombre requerido"
    elif any(_key(other.name) == name for other in vendors if other.id != vendor.id):
        errors["name"] = "Ya existe un proveedor con este nombre"
    if vendor.rut.strip() and not validate_rut(vendor.rut):
        errors["rut"] = "RUT inválido"
    return errors


def search_vendors(vendors: Iterable[Vendor], query: str) -> list[Vendor]:
    """Vendors whose name, RUT, giro or contact contains ``query`` (any case)."""
    needle = (query or "").lower()
    if not needle:
        return list(vendors)
    return [
        v for v in vendors if any(needle in (text or "").lower() for text in (v.name, v.rut, v.giro, v.contact))
    ]


def vendor_name(vendors: Iterable[Vendor], vendor_id: str) -> str:
    """Name of a vendor, or the unknown label for dangling ids."""
    for vendor in vendors:
        if vendor.id == vendor_id:
            return vendor.name
    return UNKNOWN_VENDOR_NAME


def compute_vendor_spend(expenses: Iterable[Expense], vendors: Sequence[Vendor]) -> dict[str, Money]:
    """
    Total expense amount attributed to each vendor id.

    An expense belongs to the first vendor whose name equals its ``vendor``
    text ignoring case and surrounding spaces. Every payment method counts
    and refunds net in. Vendors without expenses are absent.
    """
    by_name: dict[str, str] = {}
    for vendor in vendors:
        by_name.setdefault(_key(vendor.name), vendor.id)

    spend: dict[str, Money] = {}
    for expense in expenses:
        name = _key(expense.vendor)
        vendor_id = by_name.get(name) if name else None
        if vendor_id is None:
            continue
        spend[vendor_id] = spend.get(vendor_id, Money.zero()) + expense.amount
    return spend


@dataclass(frozen=True)
class VendorSpend:
    """One row of the vendor ranking."""

    vendor: Vendor
    spend: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.vendor.id,
            "name": self.vendor.name,
            "rut": self.vendor.rut,
            "spend": self.spend.to_pesos(),
        }


def vendor_spend_ranking(expenses: Iterable[Expense], vendors: Sequence[Vendor]) -> list[VendorSpend]:
    """Vendors with attributed expenses, highest spend first (ties keep vendor order)."""
    spend = compute_vendor_spend(expenses, vendors)
    rows = [VendorSpend(vendor, spend[vendor.id]) for vendor in vendors if vendor.id in spend]
    rows.sort(key=lambda row: row.spend.to_pesos(), reverse=True)
    return rows


@dataclass(frozen=True)
class QuoteComparison:
    """Quotes for one item, cheapest first."""

    item: str
    quotes: list[Quote]

    @property
    def best(self) -> Quote:
        return self.quotes[0]

    def premium(self, quote: Quote) -> Money:
        """How much more ``quote`` costs than the best one."""
        return quote.amount - self.best.amount

    def to_dict(self, vendors: Sequence[Vendor] = ()) -> dict[str, Any]:
        """Convert to a nested dict for JSON output."""
        return {
            "item": self.item,
            "quotes": [
                {
                    "id": quote.id,
                    "vendor": vendor_name(vendors, quote.vendor_id),
                    "amount": quote.amount.to_pesos(),
                    "premium": self.premium(quote).to_pesos(),
                    "best": index == 0,
                }
                for index, quote in enumerate(self.quotes)
            ],
        }


def compare_quotes(quotes: Iterable[Quote]) -> list[QuoteComparison]:
    """
    Group quotes by item description (ignoring case) and sort each group by amount.

    Groups come out in the order their first quote appears; the label is the
    description of that first quote. Equal amounts keep their stored order.
    """
    groups: dict[str, list[Quote]] = defaultdict(list)
    for quote in quotes:
        groups[quote.item_description.lower()].append(quote)

    comparisons = []
    for group in groups.values():
        label = group[0].item_description
        comparisons.append(QuoteComparison(label, sorted(group, key=lambda q: q.amount.to_pesos())))
    logger.debug("Compared %d quotes across %d items", sum(len(g) for g in groups.values()), len(comparisons))
    return comparisons


def order_numbers(orders: Sequence[PurchaseOrder]) -> dict[str, str]:
    """Display number of each order ("OC-001"...) from its stored position."""
    return {order.id: f"OC-{index + 1:03d}" for index, order in enumerate(orders)}


def sorted_purchase_orders(orders: Sequence[PurchaseOrder]) -> list[PurchaseOrder]:
    """Orders newest first; undated orders go last."""
    dated = sorted((o for o in orders if o.date is not None), key=lambda o: o.date, reverse=True)
    undated = [o for o in orders if o.date is None]
    return dated + undated
