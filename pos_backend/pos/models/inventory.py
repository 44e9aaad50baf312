# pos/models/inventory.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class InventoryItem(models.Model):
    """
    Live stock position for one product.

    Stock valuation reads these rows directly (stock x cost_price);
    it is never reconciled against the Inventory ledger.
    """

    sku = models.CharField(max_length=128, unique=True, db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=100, blank=True, default="")

    stock = models.PositiveIntegerField(default=0)

    cost_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(0)],
    )
    selling_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(0)],
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def as_raw(self) -> dict:
        return {
            "id": self.pk,
            "sku": self.sku,
            "name": self.name,
            "category": self.category,
            "stock": self.stock,
            "cost_price": self.cost_price,
            "selling_price": self.selling_price,
        }
