#!/usr/bin/env python3
"""Tests for vendor spend, quote comparison and purchase-order views."""

import pytest

from obrafin.core.models import PaymentMethod, PurchaseOrder, PurchaseOrderStatus, Vendor
from obrafin.core.money import Money
from obrafin.purchasing import (
    UNKNOWN_VENDOR_NAME,
    compare_quotes,
    compute_vendor_spend,
    order_numbers,
    search_vendors,
    sorted_purchase_orders,
    vendor_errors,
    vendor_name,
    vendor_spend_ranking,
)
from tests.fixtures.ledger_data import make_expense, make_purchase_order, make_quote, make_vendor


class TestVendorErrors:
    """Test vendor checks before saving."""

    @pytest.mark.purchasing
    def test_valid_vendor(self):
        """Test a named vendor with a valid RUT passes."""
        assert vendor_errors(make_vendor("Maderas Sur", rut="76.123.456-0"), []) == {}

    @pytest.mark.purchasing
    def test_name_required_and_unique_ignoring_case(self):
        """Test blank and duplicate names are rejected."""
        stored = [make_vendor("Ferretería Uno", id="prov-1")]
        assert "name" in vendor_errors(make_vendor("  "), stored)
        assert vendor_errors(make_vendor(" ferretería uno "), stored)["name"].startswith("Ya existe")

    @pytest.mark.purchasing
    def test_editing_a_vendor_keeps_its_own_name(self):
        """Test the stored copy of the same vendor is not a duplicate."""
        stored = [make_vendor("Ferretería Uno", id="prov-1")]
        assert vendor_errors(make_vendor("Ferretería Uno", id="prov-1"), stored) == {}

    @pytest.mark.purchasing
    def test_rut_checked_only_when_given(self):
        """Test an empty RUT is fine and a wrong check digit is not."""
        assert "rut" not in vendor_errors(make_vendor("A"), [])
        assert vendor_errors(make_vendor("A", rut="76.123.456-1"), [])["rut"] == "RUT inválido"


class TestVendorLookup:
    """Test search and name lookup."""

    @pytest.mark.purchasing
    def test_search_matches_name_rut_giro_contact(self, sample_state):
        """Test the search covers name, giro and contact."""
        assert [v.id for v in search_vendors(sample_state.vendors, "MADERAS")] == ["prov-2"]
        assert [v.id for v in search_vendors(sample_state.vendors, "ana")] == ["prov-1"]
        assert len(search_vendors(sample_state.vendors, "")) == 2

    @pytest.mark.purchasing
    def test_unknown_vendor_name(self, sample_state):
        """Test dangling vendor ids get the unknown label."""
        assert vendor_name(sample_state.vendors, "prov-2") == "Maderas Sur"
        assert vendor_name(sample_state.vendors, "gone") == UNKNOWN_VENDOR_NAME


class TestVendorSpend:
    """Test expense attribution to vendors."""

    @pytest.mark.purchasing
    def test_expenses_matched_by_name_ignoring_case(self):
        """Test vendor text is matched case-insensitively after trimming."""
        vendors = [make_vendor("Ferretería Uno", id="prov-1"), make_vendor("Maderas Sur", id="prov-2")]
        expenses = [
            make_expense(amount=119000, vendor="Ferretería Uno"),
            make_expense(amount=30000, vendor="  FERRETERÍA UNO "),
            make_expense(amount=80000, vendor="Maderas Sur", method=PaymentMethod.TARJETA_CREDITO),
            make_expense(amount=5000, vendor="Otro"),
            make_expense(amount=7000, vendor=""),
        ]
        spend = compute_vendor_spend(expenses, vendors)
        assert spend == {"prov-1": Money.from_pesos(149000), "prov-2": Money.from_pesos(80000)}

    @pytest.mark.purchasing
    def test_refund_nets_into_vendor_spend(self):
        """Test a negative expense reduces the vendor total."""
        vendors = [make_vendor("Ferretería Uno", id="prov-1")]
        expenses = [
            make_expense(amount=100000, vendor="Ferretería Uno"),
            make_expense(amount=-20000, vendor="Ferretería Uno"),
        ]
        assert compute_vendor_spend(expenses, vendors)["prov-1"] == Money.from_pesos(80000)

    @pytest.mark.purchasing
    def test_ranking_highest_spend_first(self):
        """Test the ranking order and that vendors without expenses are left out."""
        vendors = [
            make_vendor("Ferretería Uno", id="prov-1"),
            make_vendor("Maderas Sur", id="prov-2"),
            make_vendor("Sin Compras", id="prov-3"),
        ]
        expenses = [
            make_expense(amount=50000, vendor="Ferretería Uno"),
            make_expense(amount=90000, vendor="Maderas Sur"),
        ]
        ranking = vendor_spend_ranking(expenses, vendors)

        assert [(row.vendor.id, row.spend.to_pesos()) for row in ranking] == [("prov-2", 90000), ("prov-1", 50000)]
        assert ranking[0].to_dict() == {"id": "prov-2", "name": "Maderas Sur", "rut": "", "spend": 90000}

    @pytest.mark.purchasing
    def test_ranking_from_state(self, sample_state):
        """Test the synthetic ledger attributes the hardware-store expense."""
        ranking = vendor_spend_ranking(sample_state.expenses, sample_state.vendors)
        assert [(row.vendor.name, row.spend.to_pesos()) for row in ranking] == [("Ferretería Uno", 119000)]


class TestCompareQuotes:
    """Test the per-item quote comparison."""

    @pytest.mark.purchasing
    def test_grouped_by_item_cheapest_first(self):
        """Test quotes group by description ignoring case, sorted by amount."""
        quotes = [
            make_quote("prov-1", "Cemento", 5200, id="q-1"),
            make_quote("prov-2", "Tablas", 15000, id="q-2"),
            make_quote("prov-2", "cemento", 4900, id="q-3"),
            make_quote("prov-3", "CEMENTO", 6000, id="q-4"),
        ]
        comparisons = compare_quotes(quotes)

        assert [c.item for c in comparisons] == ["Cemento", "Tablas"]
        cemento = comparisons[0]
        assert [q.id for q in cemento.quotes] == ["q-3", "q-1", "q-4"]
        assert cemento.best.id == "q-3"
        assert cemento.premium(cemento.quotes[2]) == Money.from_pesos(1100)

    @pytest.mark.purchasing
    def test_to_dict_marks_best_and_premium(self, sample_state):
        """Test the JSON form names vendors and flags the best quote."""
        cemento = compare_quotes(sample_state.quotes)[0]
        assert cemento.to_dict(sample_state.vendors) == {
            "item": "Cemento",
            "quotes": [
                {"id": "q-2", "vendor": "Maderas Sur", "amount": 4900, "premium": 0, "best": True},
                {"id": "q-1", "vendor": "Ferretería Uno", "amount": 5200, "premium": 300, "best": False},
            ],
        }

    @pytest.mark.purchasing
    def test_no_quotes(self):
        """Test an empty list gives no groups."""
        assert compare_quotes([]) == []


class TestPurchaseOrders:
    """Test purchase-order records and listing."""

    @pytest.mark.purchasing
    def test_total_from_items(self):
        """Test the order total is the sum of quantity times unit price."""
        order = make_purchase_order(items=[("Cemento", 10, 5000), ("Arena", 1.5, 20000)])
        assert order.total == Money.from_pesos(80000)
        assert order.status == PurchaseOrderStatus.PENDIENTE

    @pytest.mark.purchasing
    def test_from_dict_reads_host_keys(self):
        """Test the stored keys, an unknown status and the derived total."""
        order = PurchaseOrder.from_dict(
            {
                "id": "oc-9",
                "projectId": "prj-1",
                "proveedorId": "prov-1",
                "items": [{"description": "Clavos", "quantity": "3", "unitPrice": 1000}],
                "status": "Perdida",
            }
        )
        assert order.vendor_id == "prov-1"
        assert order.status == PurchaseOrderStatus.PENDIENTE
        assert order.to_dict()["total"] == 3000
        assert order.to_dict()["items"] == [{"description": "Clavos", "quantity": 3, "unitPrice": 1000}]

    @pytest.mark.purchasing
    def test_newest_first_undated_last(self):
        """Test the listing order."""
        orders = [
            make_purchase_order(date="2025-01-05", id="a"),
            make_purchase_order(date=None, id="b"),
            make_purchase_order(date="2025-02-01", id="c"),
        ]
        assert [o.id for o in sorted_purchase_orders(orders)] == ["c", "a", "b"]

    @pytest.mark.purchasing
    def test_order_numbers_follow_stored_position(self, sample_state):
        """Test display numbers come from the stored order, not the listing."""
        assert order_numbers(sample_state.purchase_orders) == {"oc-1": "OC-001", "oc-2": "OC-002"}


class TestVendorRecord:
    """Test the vendor record's stored shape."""

    @pytest.mark.purchasing
    def test_missing_fields_default_to_empty(self):
        """Test a minimal stored vendor."""
        vendor = Vendor.from_dict({"id": "prov-9", "name": "Solo Nombre"})
        assert vendor.rut == ""
        assert vendor.to_dict()["address"] == ""
