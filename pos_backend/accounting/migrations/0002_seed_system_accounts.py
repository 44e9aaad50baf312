"""
======================================================
PATH: accounting/migrations/0002_seed_system_accounts.py
======================================================
MIGRATION: SEED SYSTEM ACCOUNTS

Purpose:
- Every database starts with the non-removable system chart.
- Rows are inlined (migrations must not import live app code).
"""

from __future__ import annotations

from django.db import migrations

SYSTEM_ACCOUNTS = [
    ("1000", "Cash/Bank", "asset"),
    ("1100", "Accounts Receivable", "asset"),
    ("1200", "Inventory", "asset"),
    ("2000", "Accounts Payable", "liability"),
    ("4000", "Sales", "revenue"),
    ("5000", "Cost of Goods Sold", "expense"),
    ("6000", "Operating Expenses", "expense"),
]


def seed_system_accounts(apps, schema_editor):
    Account = apps.get_model("accounting", "Account")

    for code, name, account_type in SYSTEM_ACCOUNTS:
        Account.objects.update_or_create(
            name=name,
            defaults={
                "code": code,
                "account_type": account_type,
                "is_system": True,
            },
        )


class Migration(migrations.Migration):
    dependencies = [
        ("accounting", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_system_accounts, migrations.RunPython.noop),
    ]
