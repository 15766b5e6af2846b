#!/usr/bin/env python3
"""
Bank CLI - Statement Import and Reconciliation

Commands that change the bank-statement part of the ledger state: importing
CSV exports and linking statement lines to incomes and expenses.
"""

from pathlib import Path

import click

from ..bank import (
    apply_suggestion,
    describe_match,
    parse_bank_csv,
    suggest_reconciliation,
    summarize_bank_lines,
    undo_reconciliation,
)
from ..core.currency import format_pesos
from ..core.dates import ALL_MONTHS, month_label, to_iso
from ..core.json_utils import format_json
from ..ledger import LedgerStore, add_bank_lines
from .context import load_ledger, save_ledger


@click.group()
def bank() -> None:
    """Bank statement commands."""
    pass


@bank.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Show what would be imported without saving")
@click.pass_context
def import_csv(ctx: click.Context, csv_file: str, dry_run: bool) -> None:
    """
    Import a bank statement CSV export.

    Examples:
      obrafin bank import cartola_enero.csv
      obrafin bank import cartola.csv --dry-run
    """
    text = Path(csv_file).read_text(encoding="utf-8-sig")
    lines = parse_bank_csv(text)
    if not lines:
        raise click.ClickException(
            "No transactions found. The file needs a 'Fecha' column and either Cargo/Abono or Monto columns."
        )

    click.echo(f"Parsed {len(lines)} statement lines from {csv_file}")
    if dry_run or ctx.obj.get("verbose", False):
        for line in lines[:20]:
            sign = "+" if line.type.value == "credit" else "-"
            click.echo(f"  {to_iso(line.date)}  {sign}{format_pesos(line.amount.pesos):>14}  {line.description}")
    if dry_run:
        click.echo("Dry run: nothing saved")
        return

    store = LedgerStore(load_ledger(ctx))
    store.dispatch(add_bank_lines, lines)
    path = save_ledger(ctx, store.state)
    click.echo(f"Saved {len(store.state.bank_lines)} statement lines to {path}")


@bank.command()
@click.option("--month", default=ALL_MONTHS, show_default=True, help="Month (YYYY-MM) or ALL")
@click.pass_context
def summary(ctx: click.Context, month: str) -> None:
    """Show statement totals and reconciliation progress."""
    state = load_ledger(ctx)
    result = summarize_bank_lines(state.bank_lines, month)

    click.echo(f"Cartola — {month_label(month)}")
    click.echo(f"  Abonos:      {format_pesos(result.total_credits.pesos)}")
    click.echo(f"  Cargos:      {format_pesos(result.total_debits.pesos)}")
    click.echo(f"  Conciliadas: {result.reconciled} / {result.total} ({result.pending} pendientes)")
    if result.last_balance is not None:
        click.echo(f"  Último saldo: {format_pesos(result.last_balance.pesos)}")


@click.group()
def reconcile() -> None:
    """Bank reconciliation commands."""
    pass


def _tolerance(ctx: click.Context, tolerance: int | None) -> int:
    if tolerance is not None:
        return tolerance
    return ctx.obj["config"].reconciliation.tolerance_days


@reconcile.command()
@click.option("--tolerance", type=click.IntRange(min=0), help="Maximum day difference (default: from config)")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def suggest(ctx: click.Context, tolerance: int | None, as_json: bool) -> None:
    """Suggest matches for unreconciled statement lines."""
    state = load_ledger(ctx)
    suggestions = suggest_reconciliation(state.bank_lines, state.incomes, state.expenses, _tolerance(ctx, tolerance))

    if as_json:
        click.echo(format_json({line_id: s.to_dict() for line_id, s in suggestions.items()}))
        return

    pending = sum(1 for line in state.bank_lines if not line.is_reconciled)
    click.echo(f"{len(suggestions)} suggestions for {pending} unreconciled lines")
    for line in state.bank_lines:
        suggestion = suggestions.get(line.id)
        if suggestion is None:
            continue
        if suggestion.match_type.value == "income":
            record = state.find_income(suggestion.match_id)
            target = f"Ingreso: {record.category}" if record else suggestion.match_id
        else:
            record = state.find_expense(suggestion.match_id)
            target = f"Egreso: {record.category} — {record.vendor}" if record else suggestion.match_id
        click.echo(
            f"  {line.id}  {to_iso(line.date)}  {format_pesos(line.amount.pesos)}  → {target} ({suggestion.confidence}%)"
        )


@reconcile.command()
@click.option("--line", "line_id", help="Apply only the suggestion for this statement line")
@click.option("--tolerance", type=click.IntRange(min=0), help="Maximum day difference (default: from config)")
@click.pass_context
def apply(ctx: click.Context, line_id: str | None, tolerance: int | None) -> None:
    """Accept suggestions (all of them, or the one for --line) and save."""
    state = load_ledger(ctx)
    suggestions = suggest_reconciliation(state.bank_lines, state.incomes, state.expenses, _tolerance(ctx, tolerance))

    if line_id:
        if line_id not in suggestions:
            raise click.ClickException(f"No suggestion for statement line {line_id}")
        line_ids = [line_id]
    else:
        line_ids = [line.id for line in state.bank_lines if line.id in suggestions and not line.is_reconciled]

    store = LedgerStore(state)
    for pending_id in line_ids:
        store.dispatch(apply_suggestion, pending_id, suggestions)

    if store.revision:
        save_ledger(ctx, store.state)
    click.echo(f"{store.revision} transacciones conciliadas automáticamente.")


@reconcile.command()
@click.argument("line_id")
@click.pass_context
def undo(ctx: click.Context, line_id: str) -> None:
    """Remove the reconciliation of statement line LINE_ID."""
    store = LedgerStore(load_ledger(ctx))
    line = next((x for x in store.state.bank_lines if x.id == line_id), None)
    if line is None:
        raise click.ClickException(f"Statement line not found: {line_id}")
    if not line.is_reconciled:
        click.echo(f"Statement line {line_id} is not reconciled")
        return

    label = describe_match(store.state, line)
    store.dispatch(undo_reconciliation, line_id)
    save_ledger(ctx, store.state)
    click.echo(f"Removed reconciliation of {line_id} ({label})")
