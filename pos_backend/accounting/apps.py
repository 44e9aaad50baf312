# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Chart of accounts, manual vouchers and the ledger derivation engine:
- Journal / ledgers / trial balance
- Profit & loss / balance sheet
- Stock valuation
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
