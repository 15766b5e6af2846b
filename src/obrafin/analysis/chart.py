#!/usr/bin/env python3
"""
Cashflow Chart

Renders the monthly cashflow table as a two-panel PNG: income/expense bars
with the closing balance and its trend line, and monthly net flow against
its average.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend
import matplotlib.pyplot as plt
import numpy as np
from scipy import stats

from ..core.config import get_config
from ..core.currency import format_clp
from ..core.dates import month_label
from ..ledger.cashflow import MonthlyCashflowRow

logger = logging.getLogger(__name__)


def _pesos_axis(value: float, _pos: int) -> str:
    return f"${value / 1_000_000:.1f}M" if abs(value) >= 1_000_000 else f"${format_clp(int(value))}"


def closing_trend(rows: Sequence[MonthlyCashflowRow]) -> dict[str, float] | None:
    """
    Linear trend of the closing balance (pesos per month).

    Returns None with fewer than two months.
    """
    if len(rows) < 2:
        return None
    x = np.arange(len(rows))
    y = np.array([row.closing.to_pesos() for row in rows], dtype=float)
    slope, intercept, r_value, _p_value, _std_err = stats.linregress(x, y)
    return {"slope": float(slope), "intercept": float(intercept), "r_squared": float(r_value**2)}


def generate_cashflow_chart(
    rows: Sequence[MonthlyCashflowRow],
    output_dir: Path | None = None,
    title: str = "Flujo de caja mensual",
    width: int | None = None,
    height: int | None = None,
) -> Path:
    """
    Write the cashflow chart as a timestamped PNG.

    Args:
        rows: Output of compute_cashflow (at least one row)
        output_dir: Target directory (default: configured charts directory)
        title: Figure title
        width, height: Figure size in inches (default: from configuration)

    Returns:
        Path to the generated image

    Raises:
        ValueError: If there are no rows to plot
    """
    if not rows:
        raise ValueError("No cashflow rows to plot")

    config = get_config()
    if output_dir is None:
        output_dir = config.analysis.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    labels = [month_label(row.month) for row in rows]
    x = np.arange(len(rows))
    incomes = np.array([row.incomes.to_pesos() for row in rows])
    expenses = np.array([row.expenses.to_pesos() for row in rows])
    nets = np.array([row.net.to_pesos() for row in rows])
    closings = np.array([row.closing.to_pesos() for row in rows])

    fig, (top, bottom) = plt.subplots(
        2, 1, figsize=(width or config.analysis.chart_width, height or config.analysis.chart_height), sharex=True
    )

    bar_width = 0.4
    top.bar(x - bar_width / 2, incomes, bar_width, color="#16a34a", alpha=0.8, label="Ingresos")
    top.bar(x + bar_width / 2, expenses, bar_width, color="#dc2626", alpha=0.8, label="Egresos")
    top.plot(x, closings, color="#2563eb", linewidth=2, marker="o", label="Saldo final")

    trend = closing_trend(rows)
    if trend is not None:
        top.plot(x, trend["intercept"] + trend["slope"] * x, "k--", alpha=0.6, linewidth=1, label="Tendencia")

    top.set_title(title, fontsize=12, fontweight="bold")
    top.legend(loc="best", fontsize=8)
    top.grid(True, alpha=0.3, axis="y")
    top.yaxis.set_major_formatter(plt.FuncFormatter(_pesos_axis))

    colors = ["#16a34a" if value >= 0 else "#dc2626" for value in nets]
    bottom.bar(x, nets, color=colors, alpha=0.7)
    bottom.axhline(y=0, color="black", linewidth=0.5)
    average = float(np.mean(nets))
    bottom.axhline(y=average, color="blue", linestyle="--", alpha=0.7, label=f"Promedio: ${format_clp(round(average))}")
    bottom.set_title("Flujo neto mensual", fontsize=12, fontweight="bold")
    bottom.legend(loc="best", fontsize=8)
    bottom.grid(True, alpha=0.3, axis="y")
    bottom.yaxis.set_major_formatter(plt.FuncFormatter(_pesos_axis))
    bottom.set_xticks(x)
    bottom.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)

    fig.tight_layout()

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output_dir / f"{timestamp}_cashflow.png"
    fig.savefig(output_file, dpi=config.analysis.dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info("Wrote cashflow chart to %s", output_file)
    return output_file
