# pos/tests/test_api.py

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APIClient

from pos.models import Expense, InventoryItem, Sale

User = get_user_model()


class PosApiTests(TestCase):
    """
    POS feed API tests.

    GUARANTEES:
    - Staff roles can record sales, expenses and inventory
    - Expense amounts must be positive; sale totals may be negative (returns)
    """

    def setUp(self):
        self.client = APIClient()
        self.cashier = User.objects.create_user(email="cashier@example.com", password="pass", role="cashier")
        self.client.force_authenticate(self.cashier)

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(None)
        res = self.client.get("/api/pos/sales/")
        self.assertEqual(res.status_code, 401)

    def test_record_sale(self):
        res = self.client.post(
            "/api/pos/sales/",
            {"total": "12000.00", "profit": "3000.00", "payment_method": "cash"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)

        sale = Sale.objects.get(pk=res.data["id"])
        self.assertEqual(sale.user, self.cashier)
        self.assertEqual(sale.total, Decimal("12000.00"))

    def test_return_row_may_be_negative(self):
        res = self.client.post(
            "/api/pos/sales/", {"total": "-500.00", "payment_method": "cash"}, format="json"
        )
        self.assertEqual(res.status_code, 201)
        self.assertIsNone(Sale.objects.get(pk=res.data["id"]).profit)

    def test_list_sales_filters_by_payment_method(self):
        Sale.objects.create(total=Decimal("100"), payment_method="cash")
        Sale.objects.create(total=Decimal("200"), payment_method="Credit", customer_name="Acme")

        res = self.client.get("/api/pos/sales/", {"payment_method": "Credit"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["customer_name"], "Acme")

    def test_record_expense(self):
        res = self.client.post(
            "/api/pos/expenses/", {"description": "Transport", "amount": "3500"}, format="json"
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(Expense.objects.get().recorded_by, self.cashier)

    def test_expense_amount_must_be_positive(self):
        res = self.client.post(
            "/api/pos/expenses/", {"description": "Transport", "amount": "0"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("amount", res.data)
        self.assertFalse(Expense.objects.exists())

    def test_record_inventory_item(self):
        res = self.client.post(
            "/api/pos/inventory/",
            {"sku": "RICE-5", "name": "Rice 5kg", "stock": 12, "cost_price": "18000", "selling_price": "22000"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(InventoryItem.objects.get().stock, 12)


class InventoryModelTests(TestCase):
    def test_sku_must_be_unique(self):
        InventoryItem.objects.create(sku="IBU-200", name="Ibuprofen")

        with self.assertRaises(IntegrityError):
            InventoryItem.objects.create(sku="IBU-200", name="Ibuprofen Duplicate")
