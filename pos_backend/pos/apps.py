# pos/apps.py

"""
POS APP CONFIG

Point-of-sale records consumed by accounting:
- Sales (including reversing return rows)
- Expenses
- Inventory items
"""

from django.apps import AppConfig


class PosConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pos"
    verbose_name = "Point of Sale"
