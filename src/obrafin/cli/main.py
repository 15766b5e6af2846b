#!/usr/bin/env python3
"""
Main CLI Entry Point for Obrafin

Command-line access to the project ledger: cashflow, KPIs, bank
reconciliation, IVA ledgers, payment plans and alerts over a state.json
export of the host application.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option(
    "--state",
    "state_path",
    type=click.Path(dir_okay=False),
    help="Ledger state JSON file (default: <data dir>/state.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, state_path: str | None, verbose: bool, debug: bool) -> None:
    """
    Obrafin - Cash Ledger for Construction Projects

    Cash-basis cashflow, bank reconciliation and IVA bookkeeping for a small
    construction company, computed from the host application's state export.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        os.environ["OBRAFIN_ENV"] = config_env
        reload_config()

    # Configure debug logging if requested
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("obrafin").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["state_path"] = state_path
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from obrafin import __author__, __version__

    click.echo(f"Obrafin v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Reconciliation Tolerance: {config_obj.reconciliation.tolerance_days} days")
    click.echo(f"  IVA Rate: {config_obj.tax.iva_rate_pct}%")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


# Import command groups
from .bank import bank, reconcile  # noqa: E402
from .purchasing import vendors  # noqa: E402
from .reports import (  # noqa: E402
    alerts,
    cashflow,
    chart,
    iva,
    kpis,
    plan,
    profitability,
    suggest_category_cmd,
    validate_docs,
)

main.add_command(cashflow)
main.add_command(kpis)
main.add_command(reconcile)
main.add_command(bank)
main.add_command(iva)
main.add_command(plan)
main.add_command(profitability)
main.add_command(validate_docs)
main.add_command(alerts)
main.add_command(suggest_category_cmd)
main.add_command(chart)
main.add_command(vendors)


if __name__ == "__main__":
    main()
