"""
Tax Package

Chilean tax bookkeeping: IVA split and ledgers, RUT handling and local
validation of tax documents (DTE) recorded against expenses.
"""

from .dte import (
    BatchValidation,
    DocumentValidation,
    DuplicateDocument,
    ValidationStatus,
    batch_validate,
    find_duplicate_documents,
    validate_expense_document,
)
from .iva import (
    IvaMonthSummary,
    IvaSplit,
    PurchaseEntry,
    SaleEntry,
    build_libro_compras,
    build_libro_ventas,
    iva_totals,
    split_iva,
    summarize_iva_by_month,
)
from .rut import clean_rut, compute_check_digit, format_rut, validate_rut

__all__ = [
    "BatchValidation",
    "DocumentValidation",
    "DuplicateDocument",
    "IvaMonthSummary",
    "IvaSplit",
    "PurchaseEntry",
    "SaleEntry",
    "ValidationStatus",
    "batch_validate",
    "build_libro_compras",
    "build_libro_ventas",
    "clean_rut",
    "compute_check_digit",
    "find_duplicate_documents",
    "format_rut",
    "iva_totals",
    "split_iva",
    "summarize_iva_by_month",
    "validate_expense_document",
    "validate_rut",
]
