#!/usr/bin/env python3
"""Tests for the cashflow chart."""

import pytest

from obrafin.analysis.chart import closing_trend, generate_cashflow_chart
from obrafin.ledger.cashflow import compute_cashflow
from obrafin.ledger.projector import project_cash_transactions
from tests.fixtures.ledger_data import make_income


def _rows(months):
    incomes = [make_income(amount=100000, date_paid=f"2025-{m:02d}-05") for m in range(1, months + 1)]
    return compute_cashflow(project_cash_transactions(incomes, [], [], []), {})


class TestClosingTrend:
    """Test the closing-balance regression."""

    @pytest.mark.unit
    def test_linear_growth(self):
        """Test a steady income gives its monthly slope."""
        trend = closing_trend(_rows(4))
        assert trend["slope"] == pytest.approx(100000)
        assert trend["intercept"] == pytest.approx(100000)
        assert trend["r_squared"] == pytest.approx(1.0)

    @pytest.mark.unit
    def test_too_few_rows(self):
        """Test a single month has no trend."""
        assert closing_trend(_rows(1)) is None


class TestGenerateCashflowChart:
    """Test chart generation."""

    @pytest.mark.unit
    @pytest.mark.slow
    def test_writes_png(self, tmp_path):
        """Test a PNG file is written to the output directory."""
        output = generate_cashflow_chart(_rows(3), output_dir=tmp_path)
        assert output.exists()
        assert output.parent == tmp_path
        assert output.name.endswith("_cashflow.png")
        assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    @pytest.mark.unit
    def test_default_output_dir(self):
        """Test the configured charts directory is used by default."""
        from obrafin.core.config import get_config

        output = generate_cashflow_chart(_rows(1))
        assert output.parent == get_config().analysis.output_dir

    @pytest.mark.unit
    def test_no_rows_raises(self):
        """Test an empty table cannot be plotted."""
        with pytest.raises(ValueError):
            generate_cashflow_chart([])
