# PATH: accounting/services/voucher_service.py

"""
VOUCHER SERVICE

Responsibilities:
- Validate a manual voucher (Payment / Receipt / Journal / Contra)
- Resolve both accounts in the chart of accounts
- Persist the immutable Voucher (atomic)

Rules:
- Nothing is stored unless every check passes
- The next snapshot picks the voucher up as V-<id>

Accounting Effect:
- Dr debit_account
- Cr credit_account
"""

from __future__ import annotations

import logging
from datetime import date as date_type, datetime, time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting import derivation
from accounting.models.account import Account
from accounting.models.voucher import Voucher
from accounting.services.account_service import user_is_accounting_admin
from accounting.services.exceptions import AccountingPermissionError, InvalidVoucherError

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or isinstance(v, bool):
        raise InvalidVoucherError("Amount is required")
    try:
        amount = Decimal(str(v).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidVoucherError(f"Invalid amount: {v!r}") from exc
    if not amount.is_finite():
        raise InvalidVoucherError(f"Invalid amount: {v!r}")
    return amount.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _normalize_voucher_date(value) -> datetime:
    if value is None or value == "":
        return timezone.now()

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidVoucherError("Invalid date format (YYYY-MM-DD)") from exc

    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value, timezone.get_current_timezone())
        return value

    if isinstance(value, date_type):
        return timezone.make_aware(datetime.combine(value, time(12, 0)), timezone.get_current_timezone())

    raise InvalidVoucherError("date must be a date")


def _resolve_account(*, name: str, side: str) -> Account:
    name = (name or "").strip()
    if not name:
        raise InvalidVoucherError(f"{side.capitalize()} account is required")

    try:
        return Account.objects.get(name__iexact=name)
    except Account.DoesNotExist as exc:
        raise InvalidVoucherError(f"{side.capitalize()} account '{name}' is not in the chart of accounts") from exc


@transaction.atomic
def add_voucher(
    *,
    user,
    date,
    voucher_type: str,
    amount,
    debit_account: str,
    credit_account: str,
    narration: str,
) -> Voucher:
    if not user_is_accounting_admin(user):
        raise AccountingPermissionError("Only accounting admins can record vouchers.")

    voucher_type = (voucher_type or "").strip()
    if voucher_type not in derivation.VOUCHER_TYPES:
        allowed = ", ".join(derivation.VOUCHER_TYPES)
        raise InvalidVoucherError(f"Invalid voucher type '{voucher_type}'. Use one of: {allowed}.")

    amount = _money(amount)
    if amount <= Decimal("0.00"):
        raise InvalidVoucherError("Amount must be greater than zero")

    narration = (narration or "").strip()
    if not narration:
        raise InvalidVoucherError("Narration is required")

    debit = _resolve_account(name=debit_account, side="debit")
    credit = _resolve_account(name=credit_account, side="credit")
    if debit.pk == credit.pk:
        raise InvalidVoucherError("Debit and credit accounts must be different")

    try:
        voucher = Voucher.objects.create(
            date=_normalize_voucher_date(date),
            voucher_type=voucher_type,
            amount=amount,
            debit_account=debit,
            credit_account=credit,
            narration=narration,
            created_by=user if getattr(user, "pk", None) else None,
        )
    except ValidationError as exc:
        raise InvalidVoucherError("; ".join(exc.messages)) from exc

    logger.info(
        "Voucher %s recorded: %s %s Dr %s / Cr %s",
        voucher.reference,
        voucher.voucher_type,
        voucher.amount,
        debit.name,
        credit.name,
    )
    return voucher
