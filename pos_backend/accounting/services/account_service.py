# PATH: accounting/services/account_service.py

"""
CHART OF ACCOUNTS SERVICE

Responsibilities:
- Decide who may read / change the chart (accounting admins only)
- Load the chart as engine records (degrades to an empty chart, never raises)
- Create accounts only after every check passes
- Seed the non-removable system accounts (idempotent)

Rule:
- An empty chart still derives: the engine always merges in the system seed.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models.functions import Lower
from django.utils import timezone

from accounting import derivation
from accounting.models.account import Account
from accounting.services.exceptions import AccountCreationError, AccountingPermissionError
from users.models import ROLE_ADMIN

logger = logging.getLogger(__name__)

ACCOUNTING_ADMIN_ROLE = ROLE_ADMIN

# First code handed out per type when the caller leaves code blank.
CODE_RANGE_START = {
    derivation.ASSET: 1000,
    derivation.LIABILITY: 2000,
    derivation.EQUITY: 3000,
    derivation.REVENUE: 4000,
    derivation.EXPENSE: 5000,
}
CODE_STEP = 10


def user_is_accounting_admin(user) -> bool:
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_superuser", False):
        return True
    return getattr(user, "role", None) == ACCOUNTING_ADMIN_ROLE


def load_chart_of_accounts(user) -> list[derivation.AccountRecord]:
    """
    Chart rows visible to `user`, as engine records.

    Non-admins (and anonymous callers) get an empty chart.
    A database failure is logged and also yields an empty chart.
    """
    if not user_is_accounting_admin(user):
        return []

    try:
        rows = list(Account.objects.order_by("code"))
    except DatabaseError:
        logger.exception("Failed to load chart of accounts; continuing with an empty chart")
        return []

    return [row.as_record() for row in rows]


def _next_code(account_type: str) -> str:
    start = CODE_RANGE_START[account_type]
    ceiling = start + 1000

    used = {
        int(code)
        for code in Account.objects.values_list("code", flat=True)
        if code.isdigit() and start <= int(code) < ceiling
    }

    candidate = start
    while candidate in used:
        candidate += CODE_STEP

    if candidate >= ceiling:
        raise AccountCreationError(f"No free account code left for type '{account_type}'")
    return str(candidate)


@transaction.atomic
def add_account(*, user, name: str, account_type: str, code: str = "") -> Account:
    if not user_is_accounting_admin(user):
        raise AccountingPermissionError("Only accounting admins can add accounts.")

    name = (name or "").strip()
    if not name:
        raise AccountCreationError("Account name is required")

    account_type = (account_type or "").strip().lower()
    if account_type not in derivation.ACCOUNT_TYPES:
        allowed = ", ".join(derivation.ACCOUNT_TYPES)
        raise AccountCreationError(f"Invalid account type '{account_type}'. Use one of: {allowed}.")

    if Account.objects.annotate(lname=Lower("name")).filter(lname=name.lower()).exists():
        raise AccountCreationError(f"Account '{name}' already exists")

    code = (code or "").strip()
    if code and Account.objects.filter(code=code).exists():
        raise AccountCreationError(f"Account code '{code}' is already in use")
    if not code:
        code = _next_code(account_type)

    try:
        with transaction.atomic():
            account = Account.objects.create(code=code, name=name, account_type=account_type)
    except ValidationError as exc:
        raise AccountCreationError("; ".join(exc.messages)) from exc
    except IntegrityError as exc:
        raise AccountCreationError(f"Account '{name}' could not be created") from exc

    logger.info("Account created: %s %s (%s)", account.code, account.name, account.account_type)
    return account


@transaction.atomic
def seed_system_accounts() -> tuple[int, int]:
    """
    Returns (created, updated).
    """
    created_count = 0
    updated_count = 0

    for acc in derivation.SystemAccount:
        account, created = Account.objects.get_or_create(
            name=acc.value,
            defaults={
                "code": acc.code,
                "account_type": acc.account_type,
                "is_system": True,
            },
        )

        if created:
            created_count += 1
            continue

        if account.account_type != acc.account_type or not account.is_system:
            # Repair path for seeded rows; Account.save() refuses a type change.
            Account.objects.filter(pk=account.pk).update(
                account_type=acc.account_type,
                is_system=True,
                updated_at=timezone.now(),
            )
            updated_count += 1

    if created_count or updated_count:
        logger.info("System accounts seeded (%s created, %s updated)", created_count, updated_count)
    return created_count, updated_count
