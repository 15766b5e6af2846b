#!/usr/bin/env python3
"""
Bank Statement Import

Parses the CSV exports of Chilean banks into BankStatementLine records and
summarizes an imported statement.

Bank exports differ in separator (";" or ","), column names and whether the
amount comes as separate cargo/abono columns or one signed column, so the
columns are located by header keywords rather than by position.
"""

import csv
import io
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pandas as pd

from ..core.currency import parse_money
from ..core.dates import ALL_MONTHS, FinancialDate, month_key, to_iso
from ..core.models import BankLineType, BankStatementLine, new_id
from ..core.money import Money

logger = logging.getLogger(__name__)

CSV_SOURCE = "csv"

# Header keyword patterns (matched against lowercased, unquoted header text)
HEADER_PATTERNS = {
    "date": re.compile(r"fecha"),
    "description": re.compile(r"descripci[oó]n|detalle|glosa|concepto"),
    "debit": re.compile(r"cargo|d[eé]bito|egreso"),
    "credit": re.compile(r"abono|cr[eé]dito|ingreso|dep[oó]sito"),
    "amount": re.compile(r"^monto$|^amount$|^valor$"),
    "balance": re.compile(r"saldo|balance"),
    "doc_number": re.compile(r"n[uú]mero|documento|comprobante"),
}

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_DMY_DATE = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})")


def parse_bank_date(value: str | None) -> FinancialDate | None:
    """
    Parse a statement date.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and two-digit years (taken
    as 20YY). Returns None when the text is not a valid date.

    Examples:
        parse_bank_date("15/01/2025") -> 2025-01-15
        parse_bank_date("5-3-25") -> 2025-03-05
    """
    text = (value or "").strip()
    if not text:
        return None

    iso = _ISO_DATE.match(text)
    if iso:
        return FinancialDate.parse_optional(text[:10])

    dmy = _DMY_DATE.search(text)
    if dmy:
        day, month, year = dmy.groups()
        if len(year) == 2:
            year = "20" + year
        return FinancialDate.parse_optional(f"{year}-{int(month):02d}-{int(day):02d}")

    return None


def detect_separator(header_line: str) -> str:
    """';' when the header contains one, else ','."""
    return ";" if ";" in header_line else ","


def locate_columns(headers: list[str]) -> dict[str, int | None]:
    """
    Find the index of each known column (first matching header wins).

    Returns:
        Column role → index, or None when the statement lacks that column
    """
    normalized = [h.strip().replace('"', "").lower() for h in headers]
    columns: dict[str, int | None] = {}
    for role, pattern in HEADER_PATTERNS.items():
        columns[role] = next((i for i, h in enumerate(normalized) if pattern.search(h)), None)
    return columns


def _read_rows(text: str, sep: str) -> pd.DataFrame:
    """Load statement rows as strings, padding short rows with ""."""
    width = max(line.count(sep) + 1 for line in text.splitlines())
    df = pd.read_csv(
        io.StringIO(text),
        sep=sep,
        header=None,
        skiprows=1,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        skip_blank_lines=True,
        engine="python",
    )
    df = df.fillna("")
    for column in df.columns:
        df[column] = df[column].str.replace('"', "", regex=False).str.strip()
    return df


def _cell(row: Any, index: int | None) -> str:
    if index is None:
        return ""
    return row[index]


def parse_bank_csv(text: str) -> list[BankStatementLine]:
    """
    Parse a bank statement CSV export.

    Args:
        text: Whole file content

    Returns:
        New, unreconciled lines sorted by date descending. Empty when the
        file has no data rows or no date column.
    """
    text = (text or "").strip()
    lines = text.splitlines()
    if len(lines) < 2:
        return []

    sep = detect_separator(lines[0])
    columns = locate_columns(lines[0].split(sep))
    if columns["date"] is None:
        logger.warning("Bank statement has no date column; nothing imported")
        return []

    has_split_amounts = columns["debit"] is not None and columns["credit"] is not None
    has_signed_amount = columns["amount"] is not None
    if not has_split_amounts and not has_signed_amount:
        logger.warning("Bank statement has no amount columns; nothing imported")
        return []

    df = _read_rows(text, sep)

    parsed: list[BankStatementLine] = []
    skipped = 0
    for _, row in df.iterrows():
        raw_date = _cell(row, columns["date"])
        if not raw_date:
            skipped += 1
            continue

        if has_split_amounts:
            debit = parse_money(_cell(row, columns["debit"]))
            credit = parse_money(_cell(row, columns["credit"]))
            if credit > 0:
                amount, line_type = credit, BankLineType.CREDIT
            elif debit > 0:
                amount, line_type = debit, BankLineType.DEBIT
            else:
                skipped += 1
                continue
        else:
            signed = parse_money(_cell(row, columns["amount"]))
            if signed == 0:
                skipped += 1
                continue
            amount = abs(signed)
            line_type = BankLineType.CREDIT if signed > 0 else BankLineType.DEBIT

        date = parse_bank_date(raw_date)
        if date is None:
            skipped += 1
            continue

        parsed.append(
            BankStatementLine(
                id=new_id(),
                date=date,
                description=_cell(row, columns["description"]),
                amount=Money.from_pesos(amount),
                type=line_type,
                balance=(
                    Money.from_pesos(parse_money(_cell(row, columns["balance"])))
                    if columns["balance"] is not None
                    else None
                ),
                doc_number=_cell(row, columns["doc_number"]),
                source=CSV_SOURCE,
            )
        )

    logger.info("Parsed %d bank statement lines (%d rows skipped)", len(parsed), skipped)
    return sort_lines_newest_first(parsed)


def sort_lines_newest_first(lines: Iterable[BankStatementLine]) -> list[BankStatementLine]:
    """Sort by date descending; undated lines go last, ties keep their order."""
    return sorted(lines, key=lambda line: to_iso(line.date), reverse=True)


@dataclass(frozen=True)
class BankSummary:
    """Totals for a statement (or one month of it)."""

    total_credits: Money
    total_debits: Money
    reconciled: int
    pending: int
    total: int
    last_balance: Money | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "totalCredits": self.total_credits.to_pesos(),
            "totalDebits": self.total_debits.to_pesos(),
            "reconciled": self.reconciled,
            "pending": self.pending,
            "total": self.total,
            "lastBalance": self.last_balance.to_pesos() if self.last_balance is not None else None,
        }


def summarize_bank_lines(lines: Iterable[BankStatementLine], month: str = ALL_MONTHS) -> BankSummary:
    """
    Summarize statement lines for a month (or all of them).

    ``last_balance`` is the balance column of the most recent line, which
    may itself be None.
    """
    selected = [line for line in lines if month == ALL_MONTHS or month_key(line.date) == month]

    credits = sum(line.amount.to_pesos() for line in selected if line.type == BankLineType.CREDIT)
    debits = sum(line.amount.to_pesos() for line in selected if line.type == BankLineType.DEBIT)
    reconciled = sum(1 for line in selected if line.is_reconciled)
    newest = sort_lines_newest_first(selected)

    return BankSummary(
        total_credits=Money.from_pesos(credits),
        total_debits=Money.from_pesos(debits),
        reconciled=reconciled,
        pending=len(selected) - reconciled,
        total=len(selected),
        last_balance=newest[0].balance if newest else None,
    )
