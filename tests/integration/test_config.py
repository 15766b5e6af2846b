#!/usr/bin/env python3
"""
Integration tests for configuration module.

Tests configuration loading from environment variables and validation.
"""

from pathlib import Path

import pytest

from obrafin.core.config import (
    DEFAULT_TOLERANCE_DAYS,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_test,
    reload_config,
)


@pytest.mark.integration
class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_loads_in_test_environment(self, tmp_path):
        """Test the test fixture environment is picked up."""
        config = get_config()

        assert config.environment == Environment.TEST
        assert is_test()
        assert config.data_dir == tmp_path / "obrafin_data"

    def test_directories_are_created(self):
        """Test data and output directories exist after loading."""
        assert get_data_dir().is_dir()
        assert get_output_dir().is_dir()
        assert get_output_dir() == get_data_dir() / "exports"
        assert isinstance(get_config().analysis.output_dir, Path)

    def test_defaults(self):
        """Test default component settings."""
        config = get_config()

        assert config.reconciliation.tolerance_days == DEFAULT_TOLERANCE_DAYS
        assert config.tax.iva_rate_pct == 19
        assert config.log_level == "INFO"
        assert config.validate() == []

    def test_environment_overrides(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("OBRAFIN_RECONCILE_TOLERANCE_DAYS", "5")
        monkeypatch.setenv("CHART_WIDTH", "8")
        monkeypatch.setenv("DEBUG", "true")
        config = reload_config()

        assert config.reconciliation.tolerance_days == 5
        assert config.analysis.chart_width == 8
        assert config.debug is True

    def test_bad_integer_falls_back_to_default(self, monkeypatch):
        """Test unparseable integers keep the default."""
        monkeypatch.setenv("OBRAFIN_RECONCILE_TOLERANCE_DAYS", "abc")
        assert reload_config().reconciliation.tolerance_days == DEFAULT_TOLERANCE_DAYS

    def test_invalid_settings_raise(self, monkeypatch):
        """Test validation failures are reported."""
        monkeypatch.setenv("OBRAFIN_RECONCILE_TOLERANCE_DAYS", "-1")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="Configuration validation failed"):
            reload_config()

    def test_to_dict_is_printable(self):
        """Test the configuration dictionary has plain values."""
        data = get_config().to_dict()

        assert data["environment"] == "test"
        assert isinstance(data["data_dir"], str)
        assert data["reconciliation"]["tolerance_days"] == DEFAULT_TOLERANCE_DAYS
