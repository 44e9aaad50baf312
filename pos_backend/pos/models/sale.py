# pos/models/sale.py

from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Sale(models.Model):
    """
    A completed POS transaction as seen by accounting.

    RULES:
    - total is the amount received (or owed, for credit sales)
    - profit is optional; when present, total - profit is the cost of goods sold
    - returns are recorded as separate reversing rows (negative total)
    """

    PAYMENT_CASH = "cash"
    PAYMENT_MOBILE = "mobile"
    PAYMENT_CARD = "card"
    PAYMENT_CREDIT = "credit"

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pos_sales",
        help_text="Cashier / staff who processed the sale",
    )

    timestamp = models.DateTimeField(default=timezone.now)

    total = models.DecimalField(max_digits=14, decimal_places=2)

    profit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Gross profit on this sale; null when unknown.",
    )

    payment_method = models.CharField(
        max_length=32,
        default=PAYMENT_CASH,
        help_text="cash/mobile/card/credit",
    )

    customer_name = models.CharField(max_length=150, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["timestamp"], name="pos_sale_timesta_6b1f0e_idx"),
            models.Index(fields=["payment_method"], name="pos_sale_payment_3c2a9d_idx"),
        ]

    def __str__(self):
        return f"Sale #{self.pk} – {self.total}"

    def as_raw(self) -> dict:
        return {
            "id": self.pk,
            "timestamp": self.timestamp,
            "total": self.total,
            "profit": self.profit,
            "payment_method": self.payment_method,
            "customer_name": self.customer_name,
        }
