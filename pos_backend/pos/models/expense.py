# pos/models/expense.py

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Expense(models.Model):
    """
    Operating expense paid from the till.
    Accounting posts it as Operating Expenses / Cash-Bank.
    """

    timestamp = models.DateTimeField(default=timezone.now)

    description = models.CharField(max_length=255)

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
    )

    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pos_expenses",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["timestamp"], name="pos_expense_timesta_8d4e21_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="chk_pos_expense_amount_positive",
            )
        ]

    def __str__(self):
        return f"Expense #{self.pk} – {self.amount} ({self.description})"

    def as_raw(self) -> dict:
        return {
            "id": self.pk,
            "timestamp": self.timestamp,
            "description": self.description,
            "amount": self.amount,
        }
