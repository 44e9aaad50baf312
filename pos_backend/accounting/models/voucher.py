# accounting/models/voucher.py

"""
======================================================
PATH: accounting/models/voucher.py
======================================================
VOUCHER MODEL

A manual double-entry posting (Payment / Receipt / Journal / Contra).

Guarantees:
- Immutable once created (no updates, no deletes)
- Debit and credit accounts are distinct chart accounts
- Amount is strictly positive
- Journal reference is V-<id>
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from accounting.models.account import Account


class Voucher(models.Model):
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    JOURNAL = "Journal"
    CONTRA = "Contra"

    VOUCHER_TYPES = [
        (PAYMENT, "Payment"),
        (RECEIPT, "Receipt"),
        (JOURNAL, "Journal"),
        (CONTRA, "Contra"),
    ]

    date = models.DateTimeField(
        default=timezone.now,
        help_text="Accounting effective date",
    )

    voucher_type = models.CharField(max_length=10, choices=VOUCHER_TYPES)

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )

    debit_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="debit_vouchers",
    )
    credit_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="credit_vouchers",
    )

    narration = models.CharField(max_length=255)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="accounting_vouchers",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        verbose_name = "Voucher"
        verbose_name_plural = "Vouchers"
        indexes = [
            models.Index(fields=["date"], name="accounting__date_5e3d82_idx"),
            models.Index(fields=["voucher_type"], name="accounting__voucher_7c0a4b_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="chk_voucher_amount_positive",
            ),
            models.CheckConstraint(
                condition=~Q(debit_account=F("credit_account")),
                name="chk_voucher_accounts_distinct",
            ),
        ]

    def __str__(self):
        return f"{self.reference} – {self.voucher_type} {self.amount}"

    @property
    def reference(self) -> str:
        return f"V-{self.pk}" if self.pk else "V-new"

    def clean(self):
        self.narration = (self.narration or "").strip()
        if not self.narration:
            raise ValidationError("Voucher narration is required")

        if self.debit_account_id and self.debit_account_id == self.credit_account_id:
            raise ValidationError("Debit and credit accounts must be different")

        if self.date and timezone.is_naive(self.date):
            self.date = timezone.make_aware(self.date, timezone.get_current_timezone())

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Voucher records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Voucher records are immutable and cannot be deleted")

    def as_raw(self) -> dict:
        return {
            "id": self.reference,
            "date": self.date,
            "voucher_type": self.voucher_type,
            "amount": self.amount,
            "debit_account": self.debit_account.name,
            "credit_account": self.credit_account.name,
            "narration": self.narration,
        }
