#!/usr/bin/env python3
"""
Derived Tables

pandas DataFrames for the ledger views (cashflow, cash transactions, IVA
ledgers, payment plans) and CSV export for the host's download buttons.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.dates import month_label

logger = logging.getLogger(__name__)

CASHFLOW_COLUMNS = ["month", "label", "opening", "incomes", "expenses", "net", "closing"]
TRANSACTION_COLUMNS = [
    "date",
    "kind",
    "category",
    "projectCategory",
    "paymentType",
    "accountId",
    "amount",
    "signedAmount",
    "note",
    "sourceType",
    "sourceId",
]


def records_to_dataframe(records: Iterable[Any], columns: Sequence[str] | None = None) -> pd.DataFrame:
    """
    Build a DataFrame from objects exposing ``to_dict()``.

    An empty input gives an empty frame that still has the expected columns.
    """
    rows = [record.to_dict() for record in records]
    df = pd.DataFrame(rows)
    if columns is not None:
        df = df.reindex(columns=list(columns))
    return df


def cashflow_to_dataframe(rows: Iterable[Any]) -> pd.DataFrame:
    """Cashflow rows with a Spanish month label column."""
    data = []
    for row in rows:
        entry = row.to_dict()
        entry["label"] = month_label(row.month)
        data.append(entry)
    return pd.DataFrame(data, columns=CASHFLOW_COLUMNS)


def transactions_to_dataframe(transactions: Iterable[Any]) -> pd.DataFrame:
    """Cash transactions, one row each, with a signed amount column."""
    data = []
    for tx in transactions:
        entry = tx.to_dict()
        entry["signedAmount"] = tx.signed_amount.to_pesos()
        data.append(entry)
    return pd.DataFrame(data, columns=TRANSACTION_COLUMNS)


def export_csv(df: pd.DataFrame, path: str | Path) -> Path:
    """
    Write a table as UTF-8 CSV (with BOM, so spreadsheet apps detect accents).

    Returns:
        Path written
    """
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output, index=False, encoding="utf-8-sig")
    logger.info("Exported %d rows to %s", len(df), output)
    return output
