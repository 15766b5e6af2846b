#!/usr/bin/env python3
"""
Shared CLI helpers: loading and saving the ledger state for a command.
"""

from pathlib import Path

import click

from ..core.state import LedgerState
from ..core.storage import StateFormatError, default_state_path, load_state, save_state


def state_path(ctx: click.Context) -> Path:
    """State file chosen with --state, or the one in the data directory."""
    path = ctx.obj.get("state_path") if ctx.obj else None
    return Path(path) if path else default_state_path()


def load_ledger(ctx: click.Context) -> LedgerState:
    """Load the state file, turning load failures into CLI errors."""
    path = state_path(ctx)
    try:
        return load_state(path)
    except FileNotFoundError as e:
        raise click.ClickException(f"{e}. Use --state to point at a state.json export.") from e
    except StateFormatError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e


def save_ledger(ctx: click.Context, state: LedgerState) -> Path:
    """Write the state back to the file it was loaded from."""
    return save_state(state, state_path(ctx))
