#!/usr/bin/env python3
"""Integration tests for the vendor CLI."""

import json

import pytest
from click.testing import CliRunner

from obrafin.cli.main import main


@pytest.mark.integration
@pytest.mark.purchasing
class TestVendorCommands:
    """Test vendor listing, ranking, quotes and orders."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def _invoke(self, state_file, *args):
        return self.runner.invoke(main, ["--state", str(state_file), "vendors", *args])

    def test_list_with_spend(self, state_file):
        """Test vendors are listed with their attributed spend."""
        result = self._invoke(state_file, "list")

        assert result.exit_code == 0, result.output
        assert "Ferretería Uno  —  $119.000" in result.output
        assert "Maderas Sur  —  —" in result.output

    def test_list_search(self, state_file):
        """Test --search filters the list."""
        result = self._invoke(state_file, "list", "--search", "maderas")

        assert "Maderas Sur" in result.output
        assert "Ferretería Uno" not in result.output

    def test_ranking(self, state_file):
        """Test the spend ranking."""
        result = self._invoke(state_file, "ranking")

        assert result.exit_code == 0, result.output
        assert "1. Ferretería Uno: $119.000" in result.output

    def test_ranking_json(self, state_file):
        """Test the JSON form of the ranking."""
        data = json.loads(self._invoke(state_file, "ranking", "--json").output)
        assert data == [{"id": "prov-1", "name": "Ferretería Uno", "rut": "", "spend": 119000}]

    def test_quotes(self, state_file):
        """Test quotes per item with the cheapest marked."""
        result = self._invoke(state_file, "quotes")

        assert result.exit_code == 0, result.output
        assert "Cemento (2)" in result.output
        assert "Maderas Sur: $4.900  [Mejor precio]" in result.output
        assert "Ferretería Uno: $5.200  [+$300]" in result.output
        assert "Tablas (1)" in result.output

    def test_quotes_for_one_item(self, state_file):
        """Test --item keeps a single group."""
        data = json.loads(self._invoke(state_file, "quotes", "--item", "tablas", "--json").output)
        assert [group["item"] for group in data] == ["Tablas"]

    def test_orders_newest_first(self, state_file):
        """Test orders are listed newest first with their stored numbers."""
        result = self._invoke(state_file, "orders")

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if "OC-" in line]
        assert lines[0].startswith("  OC-002  2025-01-20  Casa Test  Maderas Sur  $60.000  Pendiente")
        assert lines[1].startswith("  OC-001  2025-01-05  Casa Test  Ferretería Uno  $50.000  Aprobada")
