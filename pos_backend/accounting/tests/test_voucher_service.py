# accounting/tests/test_voucher_service.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models.voucher import Voucher
from accounting.services.account_service import add_account
from accounting.services.exceptions import AccountingPermissionError, InvalidVoucherError
from accounting.services.voucher_service import add_voucher

User = get_user_model()


class VoucherServiceTests(TestCase):
    """
    GUARANTEES:
    - Only valid vouchers are stored
    - Stored vouchers are immutable
    """

    def setUp(self):
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        add_account(user=self.admin, name="Rent Expense", account_type="expense")

    def _add(self, **overrides):
        payload = {
            "user": self.admin,
            "date": date(2026, 3, 1),
            "voucher_type": "Payment",
            "amount": "15000",
            "debit_account": "Rent Expense",
            "credit_account": "Cash/Bank",
            "narration": "March rent",
        }
        payload.update(overrides)
        return add_voucher(**payload)

    def test_valid_voucher_is_recorded(self):
        with self.assertLogs("accounting.services.voucher_service", level="INFO"):
            voucher = self._add()

        self.assertEqual(voucher.amount, Decimal("15000.00"))
        self.assertEqual(voucher.debit_account.name, "Rent Expense")
        self.assertEqual(voucher.credit_account.name, "Cash/Bank")
        self.assertEqual(voucher.reference, f"V-{voucher.pk}")
        self.assertEqual(voucher.created_by, self.admin)

    def test_account_names_match_case_insensitively(self):
        voucher = self._add(debit_account="rent expense")
        self.assertEqual(voucher.debit_account.name, "Rent Expense")

    def test_rejections_store_nothing(self):
        bad_payloads = [
            {"amount": "0"},
            {"amount": "-5"},
            {"amount": "abc"},
            {"voucher_type": "Sales"},
            {"credit_account": "Rent Expense"},
            {"debit_account": "Unknown Account"},
            {"credit_account": ""},
            {"narration": "   "},
        ]
        for overrides in bad_payloads:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidVoucherError):
                    self._add(**overrides)

        self.assertEqual(Voucher.objects.count(), 0)

    def test_non_admin_cannot_record_voucher(self):
        cashier = User.objects.create_user(email="cashier@example.com", password="pass", role="cashier")
        with self.assertRaises(AccountingPermissionError):
            self._add(user=cashier)

    def test_voucher_is_immutable(self):
        voucher = self._add()

        voucher.narration = "Edited"
        with self.assertRaises(ValidationError):
            voucher.save()

        with self.assertRaises(ValidationError):
            voucher.delete()
