#!/usr/bin/env python3
"""
Vendor Auto-Categorization

Suggests scope/category for a new expense from what was used before with the
same (or a similar) vendor, falling back to a built-in keyword table for the
construction trade.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import Expense, ExpenseScope, PaymentMethod

MIN_VENDOR_LENGTH = 2
MIN_CONFIDENCE = 30


@dataclass(frozen=True)
class VendorRule:
    """Most frequent categorization seen for one vendor."""

    scope: ExpenseScope
    category: str
    project_category: str
    method: PaymentMethod
    count: int


@dataclass(frozen=True)
class CategorySuggestion:
    """A vendor rule together with how sure we are about it (0-100)."""

    rule: VendorRule
    confidence: int


@dataclass(frozen=True)
class KeywordSuggestion:
    category: str
    scope: ExpenseScope


KEYWORD_RULES: list[tuple[tuple[str, ...], str, ExpenseScope]] = [
    (
        (
            "cemento",
            "fierro",
            "arena",
            "grava",
            "ladrillo",
            "ceramica",
            "porcelanato",
            "pvc",
            "cobre",
            "madera",
            "perno",
            "clavo",
            "tornillo",
            "pintura",
        ),
        "Materiales",
        ExpenseScope.PROYECTO,
    ),
    (
        ("sodimac", "easy", "homecenter", "ferreteria", "construmart", "chilemat", "imperial"),
        "Materiales",
        ExpenseScope.PROYECTO,
    ),
    (
        ("maestro", "instalador", "gásfiter", "gasfiter", "electricista", "soldador", "carpintero", "pintor"),
        "Subcontratos",
        ExpenseScope.PROYECTO,
    ),
    (("arquitecto", "arquitectura", "diseño", "plano", "calculista"), "Arquitectura", ExpenseScope.OFICINA),
    (("flete", "transporte", "camión", "camion", "despacho", "envio", "envío"), "Fletes", ExpenseScope.PROYECTO),
    (("arriendo", "alquiler", "renta", "bodega", "container"), "Arriendo equipos", ExpenseScope.PROYECTO),
    (("sueldo", "remuneración", "remuneracion", "salario", "honorario"), "Sueldos", ExpenseScope.OFICINA),
    (("imposición", "imposicion", "afp", "isapre", "previred", "fonasa"), "Imposiciones", ExpenseScope.OFICINA),
    (("permiso", "municipal", "dom", "sii"), "Permisos", ExpenseScope.PROYECTO),
    (
        ("bencina", "gasolina", "combustible", "copec", "shell", "petrobras"),
        "Movilización y colación",
        ExpenseScope.PROYECTO,
    ),
    (("colación", "colacion", "almuerzo", "comida", "casino"), "Movilización y colación", ExpenseScope.PROYECTO),
    (
        ("herramienta", "taladro", "sierra", "amoladora", "lijadora", "makita", "dewalt", "bosch"),
        "Herramientas",
        ExpenseScope.PROYECTO,
    ),
    (("meta", "facebook", "instagram", "google ads", "publicidad"), "Meta Ads", ExpenseScope.OFICINA),
    (("contabilidad", "contador", "auditor"), "Contabilidad", ExpenseScope.OFICINA),
    (("banco", "comisión bancaria", "mantencion cuenta", "transferencia"), "Bancos", ExpenseScope.OFICINA),
]


def normalize_vendor(vendor: str | None) -> str:
    """Lowercase, trimmed vendor key."""
    return (vendor or "").strip().lower()


def build_vendor_rules(expenses: Iterable[Expense]) -> dict[str, VendorRule]:
    """
    Learn the most used categorization per vendor.

    Vendors shorter than two characters are ignored. When two combinations
    are used equally often, the one seen first wins.

    Returns:
        Normalized vendor → VendorRule
    """
    combos_by_vendor: dict[str, dict[tuple[str, str, str], list]] = {}

    for expense in expenses:
        vendor = normalize_vendor(expense.vendor)
        if len(vendor) < MIN_VENDOR_LENGTH:
            continue

        key = (expense.scope.value, expense.category, expense.project_category or "")
        combos = combos_by_vendor.setdefault(vendor, {})
        # [expense that introduced the combo, count]
        entry = combos.setdefault(key, [expense, 0])
        entry[1] += 1

    rules: dict[str, VendorRule] = {}
    for vendor, combos in combos_by_vendor.items():
        first, count = max(combos.values(), key=lambda entry: entry[1])
        rules[vendor] = VendorRule(
            scope=first.scope,
            category=first.category,
            project_category=first.project_category or "",
            method=first.method,
            count=count,
        )
    return rules


def _prefix_score(text: str, vendor: str, rule: VendorRule) -> float | None:
    if not (vendor.startswith(text) or text.startswith(vendor)):
        return None
    similarity = min(len(text), len(vendor)) / max(len(text), len(vendor))
    return similarity * 50 + min(rule.count * 5, 30)


def _word_score(text: str, vendor: str, rule: VendorRule) -> float | None:
    words = text.split()
    vendor_words = vendor.split()
    matching = [w for w in words if any(vw in w or w in vw for vw in vendor_words)]
    if not matching:
        return None
    return len(matching) / max(len(words), len(vendor_words)) * 40 + min(rule.count * 5, 20)


def suggest_category(vendor_input: str | None, rules: dict[str, VendorRule]) -> CategorySuggestion | None:
    """
    Suggest a categorization for a vendor name.

    An exact match scores ``min(100, 60 + 10 * count)``. Otherwise every rule
    is scored by prefix similarity and by shared words, and the best score
    wins if it reaches 30.

    Args:
        vendor_input: Vendor text as typed
        rules: Output of build_vendor_rules

    Returns:
        CategorySuggestion, or None when nothing is close enough
    """
    text = normalize_vendor(vendor_input)
    if len(text) < MIN_VENDOR_LENGTH or not rules:
        return None

    if text in rules:
        rule = rules[text]
        return CategorySuggestion(rule=rule, confidence=min(100, 60 + rule.count * 10))

    best_rule: VendorRule | None = None
    best_score = 0.0
    for vendor, rule in rules.items():
        for score in (_prefix_score(text, vendor, rule), _word_score(text, vendor, rule)):
            if score is not None and score > best_score:
                best_score = score
                best_rule = rule

    if best_rule is not None and best_score >= MIN_CONFIDENCE:
        return CategorySuggestion(rule=best_rule, confidence=math.floor(best_score + 0.5))
    return None


def suggest_by_keywords(text: str | None) -> KeywordSuggestion | None:
    """
    Suggest a category from keywords in a vendor name or description.

    The first matching keyword (in table order) wins; texts shorter than three
    characters get no suggestion.
    """
    lower = (text or "").lower()
    if len(lower) < 3:
        return None

    for keywords, category, scope in KEYWORD_RULES:
        if any(keyword in lower for keyword in keywords):
            return KeywordSuggestion(category=category, scope=scope)
    return None
