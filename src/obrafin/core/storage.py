#!/usr/bin/env python3
"""
Ledger State Storage

Loads and saves the single JSON state blob the host application syncs. The
ledger itself never calls this module; it is the CLI's (and tests') way of
getting a snapshot in and out of a file.
"""

import logging
from pathlib import Path

from .config import get_config
from .json_utils import read_json, write_json
from .state import LedgerState

logger = logging.getLogger(__name__)

STATE_FILENAME = "state.json"


class StateFormatError(Exception):
    """Raised when a state file does not contain a JSON object."""


def default_state_path() -> Path:
    """Path of the state file inside the configured data directory."""
    return get_config().data_dir / STATE_FILENAME


def load_state(path: str | Path | None = None) -> LedgerState:
    """
    Load a ledger snapshot from a JSON state file.

    Args:
        path: State file. If None, uses config.data_dir/state.json

    Returns:
        LedgerState snapshot

    Raises:
        FileNotFoundError: If the state file does not exist
        StateFormatError: If the file is not a JSON object
    """
    state_path = Path(path) if path is not None else default_state_path()

    if not state_path.exists():
        raise FileNotFoundError(f"Ledger state not found: {state_path}")

    data = read_json(state_path)

    # The host wraps the blob as {"state": {...}} when exporting a remote row
    if isinstance(data, dict) and isinstance(data.get("state"), dict):
        data = data["state"]

    if not isinstance(data, dict):
        raise StateFormatError(f"Ledger state must be a JSON object: {state_path}")

    state = LedgerState.from_dict(data)
    logger.info("Loaded ledger state from %s (%d records)", state_path, state.item_count)
    return state


def save_state(state: LedgerState, path: str | Path | None = None) -> Path:
    """
    Write a ledger snapshot as pretty-printed JSON.

    Args:
        state: Snapshot to persist
        path: Target file. If None, uses config.data_dir/state.json

    Returns:
        Path written
    """
    state_path = Path(path) if path is not None else default_state_path()
    write_json(state_path, state.to_dict())
    logger.info("Saved ledger state to %s (%d records)", state_path, state.item_count)
    return state_path
