#!/usr/bin/env python3
"""Tests for RUT cleaning, check digits and formatting."""

import pytest

from obrafin.tax.rut import clean_rut, compute_check_digit, format_rut, validate_rut


class TestCheckDigit:
    """Test módulo-11 check digits."""

    @pytest.mark.tax
    @pytest.mark.parametrize(
        "body, digit",
        [
            ("12345678", "5"),
            ("11111111", "1"),
            ("76123456", "0"),
            ("10000013", "K"),
        ],
    )
    def test_compute_check_digit(self, body, digit):
        """Test known bodies."""
        assert compute_check_digit(body) == digit


class TestValidateRut:
    """Test RUT validation."""

    @pytest.mark.tax
    @pytest.mark.parametrize("rut", ["12.345.678-5", "12345678-5", "76.123.456-0", "10.000.013-k", "100000 13K"])
    def test_valid(self, rut):
        """Test well-formed RUTs with any punctuation."""
        assert validate_rut(rut)

    @pytest.mark.tax
    @pytest.mark.parametrize("rut", ["12.345.678-4", "999.999-K", "", None, "K", "abc"])
    def test_invalid(self, rut):
        """Test wrong digits, too-small bodies and junk."""
        assert not validate_rut(rut)


class TestFormatting:
    """Test cleaning and formatting."""

    @pytest.mark.tax
    def test_clean_rut(self):
        """Test punctuation removal and uppercasing."""
        assert clean_rut("76.123.456-k") == "76123456K"
        assert clean_rut(None) == ""

    @pytest.mark.tax
    def test_format_rut(self):
        """Test dotted format with dash."""
        assert format_rut("761234560") == "76.123.456-0"
        assert format_rut("10.000.013-k") == "10.000.013-K"
        assert format_rut("1") == "1"
