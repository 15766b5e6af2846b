"""
Purchasing Package

Vendors (proveedores), purchase orders and quotes: vendor checks, spend per
vendor and the per-item quote comparison.
"""

from .vendors import (
    UNKNOWN_VENDOR_NAME,
    QuoteComparison,
    VendorSpend,
    compare_quotes,
    compute_vendor_spend,
    order_numbers,
    search_vendors,
    sorted_purchase_orders,
    vendor_errors,
    vendor_name,
    vendor_spend_ranking,
)

__all__ = [
    "UNKNOWN_VENDOR_NAME",
    "QuoteComparison",
    "VendorSpend",
    "compare_quotes",
    "compute_vendor_spend",
    "order_numbers",
    "search_vendors",
    "sorted_purchase_orders",
    "vendor_errors",
    "vendor_name",
    "vendor_spend_ranking",
]
