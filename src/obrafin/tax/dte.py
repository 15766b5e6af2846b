#!/usr/bin/env python3
"""
Tax Document (DTE) Validation

Local checks on the tax documents recorded against expenses: required fields
per document type, provider RUT, folio format, issue date, amount and
duplicates. Nothing here talks to the SII.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from ..core.currency import format_clp
from ..core.dates import FinancialDate
from ..core.models import DocumentType, Expense
from .rut import clean_rut, validate_rut

logger = logging.getLogger(__name__)

MAX_REASONABLE_AMOUNT = 999_999_999
MAX_DOCUMENT_AGE_YEARS = 2

REQUIRED_FIELDS: dict[DocumentType, tuple[str, ...]] = {
    DocumentType.FACTURA_AFECTA: ("document_number", "document_issued_at", "document_provider", "amount"),
    DocumentType.FACTURA_EXENTA: ("document_number", "document_issued_at", "document_provider", "amount"),
    DocumentType.NOTA_CREDITO: ("document_number", "document_issued_at", "document_provider", "amount"),
    DocumentType.BOLETA: ("amount",),
    DocumentType.BOLETA_HONORARIOS: ("document_provider", "amount"),
    DocumentType.SIN_RESPALDO: (),
}

FIELD_LABELS = {
    "document_number": "N° documento",
    "document_issued_at": "Fecha emisión",
    "document_provider": "RUT proveedor",
    "amount": "Monto",
}

PROVIDER_REQUIRED_TYPES = (DocumentType.FACTURA_AFECTA, DocumentType.FACTURA_EXENTA, DocumentType.NOTA_CREDITO)

_RUT_LIKE = re.compile(r"\d{6,}")
_FOLIO = re.compile(r"^\d{1,10}$")


class ValidationStatus(str, Enum):
    """Overall verdict for one expense's document."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    SIN_DOC = "sin_doc"


@dataclass
class DocumentValidation:
    """Errors and warnings found for one expense."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    status: ValidationStatus | None = None

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class DuplicateDocument:
    """Expenses sharing document type, folio and provider."""

    document_type: DocumentType
    document_number: str
    expense_ids: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.expense_ids)


@dataclass(frozen=True)
class ValidationSummary:
    total: int
    ok: int
    warnings: int
    errors: int
    sin_documento: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "ok": self.ok,
            "warnings": self.warnings,
            "errors": self.errors,
            "sinDocumento": self.sin_documento,
        }


@dataclass(frozen=True)
class BatchValidation:
    """Result of validating a whole expense collection."""

    results: dict[str, DocumentValidation]
    duplicates: list[DuplicateDocument]
    summary: ValidationSummary


def _provider_text(expense: Expense) -> str:
    return (expense.document_provider or expense.vendor or "").strip()


def _is_missing(expense: Expense, name: str) -> bool:
    if name == "amount":
        return expense.amount.to_pesos() <= 0
    value = getattr(expense, name)
    if isinstance(value, FinancialDate):
        return False
    return not str(value or "").strip()


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def validate_expense_document(expense: Expense, today: FinancialDate | None = None) -> DocumentValidation:
    """
    Validate the tax document data of one expense.

    Args:
        expense: Expense to check
        today: Reference date for the age checks (default: today)

    Returns:
        DocumentValidation; an expense without a backing document is valid
        with a single warning
    """
    today = today or FinancialDate.today()
    result = DocumentValidation()
    doc_type = expense.document_type

    if doc_type == DocumentType.SIN_RESPALDO:
        result.warnings.append("Sin documento de respaldo tributario")
        return result

    for name in REQUIRED_FIELDS.get(doc_type, ()):
        if _is_missing(expense, name):
            result.errors.append(f"Falta: {FIELD_LABELS[name]}")

    provider = _provider_text(expense)
    if provider and _RUT_LIKE.search(clean_rut(provider)):
        if not validate_rut(provider):
            result.errors.append(f"RUT proveedor inválido: {provider}")
    elif doc_type in PROVIDER_REQUIRED_TYPES and not provider:
        result.errors.append("Factura/NC requiere RUT del proveedor")

    folio = expense.document_number.strip()
    if folio and not _FOLIO.match(folio):
        result.warnings.append(f'N° documento "{folio}" debería ser numérico (1-10 dígitos)')

    issued = expense.tax_date
    if issued is not None:
        if issued.date > today.date:
            result.warnings.append("Fecha de emisión es futura")
        if issued.date < _years_before(today.date, MAX_DOCUMENT_AGE_YEARS):
            result.warnings.append("Documento tiene más de 2 años de antigüedad")

    amount = expense.amount.to_pesos()
    if amount <= 0:
        result.errors.append("Monto debe ser mayor a 0")
    if amount > MAX_REASONABLE_AMOUNT:
        result.warnings.append(f"Monto excede ${format_clp(MAX_REASONABLE_AMOUNT)} — verificar")

    return result


def find_duplicate_documents(expenses: Sequence[Expense]) -> list[DuplicateDocument]:
    """
    Group expenses that record the same document twice.

    Two expenses are duplicates when they share document type, folio and
    (cleaned) provider RUT. Expenses without a document or folio are ignored.
    """
    seen: dict[tuple[DocumentType, str, str], list[str]] = {}
    for expense in expenses:
        if expense.document_type == DocumentType.SIN_RESPALDO:
            continue
        folio = expense.document_number.strip()
        if not folio:
            continue
        key = (expense.document_type, folio, clean_rut(expense.document_provider or expense.vendor))
        seen.setdefault(key, []).append(expense.id)

    return [
        DuplicateDocument(document_type=doc_type, document_number=folio, expense_ids=tuple(ids))
        for (doc_type, folio, _), ids in seen.items()
        if len(ids) > 1
    ]


def batch_validate(expenses: Sequence[Expense], today: FinancialDate | None = None) -> BatchValidation:
    """
    Validate every expense and flag duplicated documents.

    A duplicate adds a warning to each expense involved and downgrades an
    "ok" verdict to "warning".
    """
    results: dict[str, DocumentValidation] = {}
    counts = {status: 0 for status in ValidationStatus}

    for expense in expenses:
        validation = validate_expense_document(expense, today)
        if expense.document_type == DocumentType.SIN_RESPALDO:
            validation.status = ValidationStatus.SIN_DOC
        elif not validation.valid:
            validation.status = ValidationStatus.ERROR
        elif validation.warnings:
            validation.status = ValidationStatus.WARNING
        else:
            validation.status = ValidationStatus.OK
        counts[validation.status] += 1
        results[expense.id] = validation

    duplicates = find_duplicate_documents(expenses)
    for duplicate in duplicates:
        for expense_id in duplicate.expense_ids:
            validation = results[expense_id]
            validation.warnings.append(
                f"Documento duplicado: {duplicate.document_type.value} "
                f"#{duplicate.document_number} ({duplicate.count} registros)"
            )
            if validation.status == ValidationStatus.OK:
                validation.status = ValidationStatus.WARNING
                counts[ValidationStatus.OK] -= 1
                counts[ValidationStatus.WARNING] += 1

    if duplicates:
        logger.info("Found %d duplicated tax documents", len(duplicates))

    return BatchValidation(
        results=results,
        duplicates=duplicates,
        summary=ValidationSummary(
            total=len(expenses),
            ok=counts[ValidationStatus.OK],
            warnings=counts[ValidationStatus.WARNING],
            errors=counts[ValidationStatus.ERROR],
            sin_documento=counts[ValidationStatus.SIN_DOC],
        ),
    )
