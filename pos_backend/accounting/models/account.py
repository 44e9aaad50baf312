# accounting/models/account.py

"""
======================================================
PATH: accounting/models/account.py
======================================================
ACCOUNT MODEL (CHART OF ACCOUNTS)

Guarantees:
- Account name is the join key used by the derivation engine (unique, trimmed)
- Name, code and type are immutable once created (journal lines reference the
  name; the type decides the sign of every posted line)
- Account codes are unique
- System accounts cannot be deleted
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from accounting import derivation


class Account(models.Model):
    ASSET = derivation.ASSET
    LIABILITY = derivation.LIABILITY
    EQUITY = derivation.EQUITY
    REVENUE = derivation.REVENUE
    EXPENSE = derivation.EXPENSE

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=150, unique=True)

    account_type = models.CharField(
        max_length=20,
        choices=ACCOUNT_TYPES,
    )

    is_system = models.BooleanField(
        default=False,
        help_text="System accounts are seeded and cannot be removed",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["account_type"], name="accounting__account_9a1c4e_idx"),
            models.Index(fields=["is_system"], name="accounting__is_syst_2f7b10_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                name="uniq_account_name_ci",
            ),
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")

    def save(self, *args, **kwargs):
        if self.pk:
            stored = type(self).objects.filter(pk=self.pk).values("name", "code", "account_type").first()
            if stored is not None:
                if stored["name"] != (self.name or "").strip():
                    raise ValidationError("Account name cannot be changed once created")
                if stored["code"] != (self.code or "").strip():
                    raise ValidationError("Account code cannot be changed once created")
                if stored["account_type"] != self.account_type:
                    # Retyping flips the sign of every posted ledger line.
                    raise ValidationError("Account type cannot be changed once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self.is_system:
            raise ValidationError("System accounts cannot be deleted")
        return super().delete(*args, **kwargs)

    def as_record(self) -> derivation.AccountRecord:
        return derivation.AccountRecord(
            name=self.name,
            account_type=self.account_type,
            id=self.pk,
            code=self.code,
        )
