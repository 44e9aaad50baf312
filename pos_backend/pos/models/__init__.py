# pos/models/__init__.py

from .expense import Expense
from .inventory import InventoryItem
from .sale import Sale

__all__ = [
    "Sale",
    "Expense",
    "InventoryItem",
]
