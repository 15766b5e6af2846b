#!/usr/bin/env python3
"""
RUT (Chilean Tax Id) Utilities

A RUT is a numeric body plus a módulo-11 check digit ("0"-"9" or "K"),
usually written as ``76.123.456-7``.
"""

import re

_NON_RUT_CHARS = re.compile(r"[^0-9kK]")
MIN_RUT_BODY = 1_000_000


def clean_rut(rut: str | None) -> str:
    """Strip everything but digits and K, uppercased ("76.123.456-k" → "76123456K")."""
    return _NON_RUT_CHARS.sub("", str(rut or "")).upper()


def compute_check_digit(body: str) -> str:
    """
    Módulo-11 check digit of a RUT body.

    Digits are weighted 2..7 from the right, cycling.
    """
    total = 0
    weight = 2
    for digit in reversed(str(body)):
        total += int(digit) * weight
        weight = 2 if weight == 7 else weight + 1

    remainder = 11 - (total % 11)
    if remainder == 11:
        return "0"
    if remainder == 10:
        return "K"
    return str(remainder)


def validate_rut(rut: str | None) -> bool:
    """True for a well-formed RUT of at least 1.000.000 with a correct check digit."""
    clean = clean_rut(rut)
    if len(clean) < 2:
        return False
    body, check = clean[:-1], clean[-1]
    if not body.isdigit():
        return False
    if int(body) < MIN_RUT_BODY:
        return False
    return compute_check_digit(body) == check


def format_rut(rut: str) -> str:
    """
    Format a RUT with thousands dots and a dash.

    Input too short to hold a body and check digit is returned unchanged.

    Example:
        format_rut("761234567") -> "76.123.456-7"
    """
    clean = clean_rut(rut)
    if len(clean) < 2:
        return rut
    body, check = clean[:-1], clean[-1]
    if body.isdigit():
        body = f"{int(body):,}".replace(",", ".")
    return f"{body}-{check}"
