#!/usr/bin/env python3
"""
Purchasing CLI - Vendors, Orders and Quotes

Read-only views of the vendor list: spend ranking, per-item quote
comparison and purchase orders.
"""

import click

from ..core.currency import format_pesos
from ..core.dates import to_iso
from ..core.json_utils import format_json
from ..purchasing import (
    compare_quotes,
    order_numbers,
    search_vendors,
    sorted_purchase_orders,
    vendor_name,
    vendor_spend_ranking,
)
from .context import load_ledger


@click.group()
def vendors() -> None:
    """Vendor (proveedor) commands."""
    pass


@vendors.command("list")
@click.option("--search", default="", help="Filter by name, RUT, giro or contact")
@click.pass_context
def list_vendors(ctx: click.Context, search: str) -> None:
    """List vendors with their attributed spend."""
    state = load_ledger(ctx)
    spend = {row.vendor.id: row.spend for row in vendor_spend_ranking(state.expenses, state.vendors)}
    found = search_vendors(state.vendors, search)
    if not found:
        click.echo("Sin proveedores.")
        return
    for vendor in found:
        total = spend.get(vendor.id)
        click.echo(f"  {vendor.name}  {vendor.rut or '—'}  {format_pesos(total.pesos) if total else '—'}")


@vendors.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def ranking(ctx: click.Context, as_json: bool) -> None:
    """Rank vendors by spend recorded in expenses."""
    state = load_ledger(ctx)
    rows = vendor_spend_ranking(state.expenses, state.vendors)
    if as_json:
        click.echo(format_json([row.to_dict() for row in rows]))
        return
    if not rows:
        click.echo("Sin gastos asociados a proveedores.")
        return
    for position, row in enumerate(rows, start=1):
        click.echo(f"{position:>3}. {row.vendor.name}: {format_pesos(row.spend.pesos)}")


@vendors.command()
@click.option("--item", default="", help="Only the item with this description")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def quotes(ctx: click.Context, item: str, as_json: bool) -> None:
    """Compare quotes per item, cheapest first."""
    state = load_ledger(ctx)
    comparisons = compare_quotes(state.quotes)
    if item:
        comparisons = [c for c in comparisons if c.item.lower() == item.lower()]

    if as_json:
        click.echo(format_json([c.to_dict(state.vendors) for c in comparisons]))
        return
    if not comparisons:
        click.echo("Sin cotizaciones.")
        return
    for comparison in comparisons:
        click.echo(f"{comparison.item} ({len(comparison.quotes)})")
        for quote in comparison.quotes:
            premium = comparison.premium(quote)
            mark = "Mejor precio" if quote is comparison.best else f"+{format_pesos(premium.pesos)}"
            click.echo(
                f"  {vendor_name(state.vendors, quote.vendor_id)}: {format_pesos(quote.amount.pesos)}  [{mark}]"
            )


@vendors.command()
@click.pass_context
def orders(ctx: click.Context) -> None:
    """List purchase orders, newest first."""
    state = load_ledger(ctx)
    numbers = order_numbers(state.purchase_orders)
    ordered = sorted_purchase_orders(state.purchase_orders)
    if not ordered:
        click.echo("Sin órdenes.")
        return
    for order in ordered:
        project = state.find_project(order.project_id)
        click.echo(
            f"  {numbers[order.id]}  {to_iso(order.date) or '—'}  {project.name if project else '—'}  "
            f"{vendor_name(state.vendors, order.vendor_id)}  {format_pesos(order.total.pesos)}  {order.status.value}"
        )
