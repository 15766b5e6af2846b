#!/usr/bin/env python3
"""
Report CLI - Ledger Views

Read-only commands over the ledger state: cashflow, KPIs, IVA, payment
plans, profitability, document validation, alerts and charts.
"""

from pathlib import Path

import click

from ..analysis import (
    cashflow_to_dataframe,
    export_csv,
    generate_cashflow_chart,
    records_to_dataframe,
    transactions_to_dataframe,
)
from ..core.currency import format_pesos
from ..core.dates import ALL_MONTHS, FinancialDate, month_label
from ..core.json_utils import format_json
from ..core.state import LedgerState
from ..ledger import (
    CONSOLIDATED,
    build_vendor_rules,
    compute_cashflow,
    compute_kpis,
    filter_by_account,
    project_cash_transactions,
    suggest_by_keywords,
    suggest_category,
    transactions_for_period,
)
from ..projects import (
    build_alerts,
    compute_payment_plan_status,
    compute_project_profitability,
    normalize_payment_plan,
    plan_total_pct,
)
from ..tax import batch_validate, build_libro_compras, build_libro_ventas, iva_totals, summarize_iva_by_month
from .context import load_ledger

ALERT_ICONS = {"danger": "!!", "warning": "! ", "info": "i "}


def _cash_views(state: LedgerState, account: str | None):
    """Projected transactions (all accounts) and the cashflow rows of one view."""
    transactions = project_cash_transactions(
        state.incomes, state.expenses, state.cc_payments, state.transfers, state.accounts
    )
    rows = compute_cashflow(transactions, state.opening_balances, account)
    return transactions, rows


def _account_label(state: LedgerState, account: str | None) -> str:
    if account is None or account == CONSOLIDATED:
        return "Consolidado"
    found = state.find_account(account)
    return found.name if found else account


@click.command()
@click.option("--account", help="Account id (default: all accounts)")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Export the table as CSV")
@click.option(
    "--transactions-csv",
    type=click.Path(dir_okay=False),
    help="Also export the underlying cash transactions as CSV",
)
@click.pass_context
def cashflow(ctx: click.Context, account: str | None, csv_path: str | None, transactions_csv: str | None) -> None:
    """
    Show the monthly cashflow with running balances.

    Examples:
      obrafin cashflow
      obrafin --state state.json cashflow --account acc-1 --csv flujo.csv
    """
    state = load_ledger(ctx)
    transactions, rows = _cash_views(state, account)

    click.echo(f"Flujo de caja — {_account_label(state, account)}")
    if not rows:
        click.echo("Sin movimientos.")
    for row in rows:
        click.echo(
            f"  {row.month}  apertura {format_pesos(row.opening.pesos):>14}"
            f"  ingresos {format_pesos(row.incomes.pesos):>14}"
            f"  egresos {format_pesos(row.expenses.pesos):>14}"
            f"  cierre {format_pesos(row.closing.pesos):>14}"
        )

    if csv_path:
        written = export_csv(cashflow_to_dataframe(rows), csv_path)
        click.echo(f"Exported cashflow to {written}")

    if transactions_csv:
        filtered = transactions_for_period(filter_by_account(transactions, account), ALL_MONTHS)
        written = export_csv(transactions_to_dataframe(filtered), transactions_csv)
        click.echo(f"Exported {len(filtered)} transactions to {written}")


@click.command()
@click.option("--month", default=ALL_MONTHS, show_default=True, help="Month (YYYY-MM) or ALL")
@click.option("--account", help="Account id (default: all accounts)")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def kpis(ctx: click.Context, month: str, account: str | None, as_json: bool) -> None:
    """Show dashboard KPIs for a month (or all months)."""
    state = load_ledger(ctx)
    transactions, rows = _cash_views(state, account)
    period = transactions_for_period(filter_by_account(transactions, account), month)
    result = compute_kpis(period, state.cc_purchases, rows, month)

    if as_json:
        click.echo(format_json(result.to_dict()))
        return

    click.echo(f"KPIs — {month_label(month)} — {_account_label(state, account)}")
    click.echo(f"  Ingresos:        {format_pesos(result.total_income.pesos)}")
    click.echo(f"  Egresos:         {format_pesos(result.total_expense.pesos)}")
    click.echo(f"  Neto:            {format_pesos(result.net.pesos)}")
    click.echo(f"  Deuda TC:        {format_pesos(result.cc_outstanding.pesos)}")
    click.echo(f"  Saldo de caja:   {format_pesos(result.cash_balance.pesos)}")

    if result.expense_by_category:
        click.echo("  Egresos por categoría:")
        for item in result.expense_by_category:
            click.echo(f"    {item.name}: {format_pesos(item.value.pesos)}")
    if result.income_by_category:
        click.echo("  Ingresos por categoría:")
        for item in result.income_by_category:
            click.echo(f"    {item.name}: {format_pesos(item.value.pesos)}")


@click.command()
@click.option("--month", default=ALL_MONTHS, show_default=True, help="Month (YYYY-MM) or ALL")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Export the monthly summary as CSV")
@click.pass_context
def iva(ctx: click.Context, month: str, csv_path: str | None) -> None:
    """Show the IVA position (débito, crédito and amount to pay)."""
    state = load_ledger(ctx)
    compras = build_libro_compras(state.expenses)
    ventas = build_libro_ventas(state.incomes)
    totals = iva_totals(compras, ventas, month)

    click.echo(f"IVA — {month_label(month)}")
    click.echo(f"  IVA Débito (ventas):   {format_pesos(totals.iva_debito.pesos)} ({totals.sale_count} ventas)")
    click.echo(f"  IVA Crédito (compras): {format_pesos(totals.iva_credito.pesos)} ({totals.purchase_count} facturas)")
    label = "Remanente IVA" if totals.is_remanente else "IVA a pagar"
    click.echo(f"  {label}: {format_pesos(abs(totals.iva_pagar.pesos))}")

    summary = summarize_iva_by_month(compras, ventas)
    if month == ALL_MONTHS and summary:
        click.echo("  Por mes:")
        for row in summary:
            click.echo(
                f"    {row.month}  débito {format_pesos(row.iva_debito.pesos)}"
                f"  crédito {format_pesos(row.iva_credito.pesos)}"
                f"  neto {format_pesos(row.iva_pagar.pesos)}"
            )

    if csv_path:
        written = export_csv(records_to_dataframe(summary), csv_path)
        click.echo(f"Exported IVA summary to {written}")


@click.command()
@click.argument("project")
@click.pass_context
def plan(ctx: click.Context, project: str) -> None:
    """Show payment-plan status of PROJECT (id, category or name)."""
    state = load_ledger(ctx)
    found = state.find_project(project)
    if found is None:
        raise click.ClickException(f"Project not found: {project}")

    click.echo(f"Plan de pagos — {found.name} (contrato {format_pesos(found.contract_total.pesos)})")
    rows = compute_payment_plan_status(found, state.incomes)
    if not rows:
        click.echo("  Define el plan de pagos y registra ingresos para ver estado.")
    for row in rows:
        note = "" if row.has_plan else "  (sin plan)"
        click.echo(
            f"  {row.type:<12} {row.pct:>6.2f}%  esperado {format_pesos(row.expected.pesos)}"
            f"  recibido {format_pesos(row.received.pesos)}  pendiente {format_pesos(row.pending.pesos)}{note}"
        )

    click.echo(f"  Total % plan: {plan_total_pct(found):.2f}%")
    for stored, shown in zip(found.payment_plan, normalize_payment_plan(found, state.settings.payment_types)):
        if stored.type != shown.type:
            click.echo(f"  Tipo '{stored.type}' no está en la configuración (se muestra como {shown.type})")


@click.command()
@click.pass_context
def profitability(ctx: click.Context) -> None:
    """Show cash profitability per project."""
    state = load_ledger(ctx)
    transactions, _ = _cash_views(state, None)
    report = compute_project_profitability(state.projects, transactions)

    for item in report.projects:
        click.echo(
            f"  {item.name}: ingresos {format_pesos(item.income)}  egresos {format_pesos(item.expense)}"
            f"  margen {format_pesos(item.margin)} ({item.margin_pct}%)  ROI {item.roi_pct}%"
        )
    click.echo(
        f"Total: margen {format_pesos(report.total_margin)} ({report.total_margin_pct}%)"
    )


@click.command("validate-docs")
@click.option("--all", "show_all", is_flag=True, help="List valid documents too")
@click.pass_context
def validate_docs(ctx: click.Context, show_all: bool) -> None:
    """Validate tax documents recorded on expenses."""
    state = load_ledger(ctx)
    result = batch_validate(state.expenses, FinancialDate.today())

    summary = result.summary
    click.echo(
        f"Documentos: {summary.total} — ok {summary.ok}, advertencias {summary.warnings}, "
        f"errores {summary.errors}, sin documento {summary.sin_documento}"
    )

    for expense in state.expenses:
        validation = result.results[expense.id]
        if not show_all and validation.status.value in ("ok", "sin_doc"):
            continue
        click.echo(f"  [{validation.status.value}] {expense.vendor or expense.category} {format_pesos(expense.amount.pesos)}")
        for message in validation.errors:
            click.echo(f"      error: {message}")
        for message in validation.warnings:
            click.echo(f"      aviso: {message}")


@click.command()
@click.pass_context
def alerts(ctx: click.Context) -> None:
    """Show dashboard alerts."""
    state = load_ledger(ctx)
    transactions, rows = _cash_views(state, None)
    result = compute_kpis(transactions_for_period(transactions, ALL_MONTHS), state.cc_purchases, rows, ALL_MONTHS)

    items = build_alerts(state, transactions, rows, result)
    if not items:
        click.echo("Todo en orden — sin alertas activas")
        return
    for alert in items:
        click.echo(f"{ALERT_ICONS[alert.level.value]} {alert.title}: {alert.detail}")


@click.command("suggest-category")
@click.argument("vendor")
@click.pass_context
def suggest_category_cmd(ctx: click.Context, vendor: str) -> None:
    """Suggest scope and category for an expense from VENDOR."""
    state = load_ledger(ctx)
    suggestion = suggest_category(vendor, build_vendor_rules(state.expenses))
    if suggestion is not None:
        rule = suggestion.rule
        project = f" / {rule.project_category}" if rule.project_category else ""
        click.echo(
            f"{rule.scope.value}: {rule.category}{project} ({rule.method.value}) — confianza {suggestion.confidence}%"
        )
        return

    keyword = suggest_by_keywords(vendor)
    if keyword is not None:
        click.echo(f"{keyword.scope.value}: {keyword.category} — por palabra clave")
        return
    click.echo("Sin sugerencia")


@click.command()
@click.option("--account", help="Account id (default: all accounts)")
@click.option("--output-dir", type=click.Path(file_okay=False), help="Override output directory")
@click.pass_context
def chart(ctx: click.Context, account: str | None, output_dir: str | None) -> None:
    """Generate the monthly cashflow chart (PNG)."""
    state = load_ledger(ctx)
    _, rows = _cash_views(state, account)
    if not rows:
        raise click.ClickException("No cashflow data to plot")

    output = generate_cashflow_chart(
        rows,
        output_dir=Path(output_dir) if output_dir else None,
        title=f"Flujo de caja — {_account_label(state, account)}",
    )
    click.echo(f"Chart saved to {output}")
