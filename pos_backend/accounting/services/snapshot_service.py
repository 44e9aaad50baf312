# PATH: accounting/services/snapshot_service.py

"""
ACCOUNTING SNAPSHOT SERVICE

Builds one consistent, read-only view of the books for a request:
- loads chart, sales, expenses, vouchers and inventory from the DB
- ingests every row through the engine records (bad rows are rejected, not fatal)
- runs the derivation engine once

Rules:
- Nothing derived is persisted; each call recomputes from scratch.
- as_of_date keeps only records dated on/before the end of that (local) day.
  Inventory is a live position and is never date-filtered.
- strict defaults to "chart loaded": with an empty chart (non-admin or DB
  failure) unknown accounts fall back to credit-normal instead of failing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as date_cls, datetime, time
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.utils import timezone

from accounting import derivation
from accounting.models.voucher import Voucher
from accounting.services.account_service import load_chart_of_accounts
from accounting.services.exceptions import AccountingServiceError, MalformedRecordError
from pos.models import Expense, InventoryItem, Sale

logger = logging.getLogger(__name__)


@dataclass
class AccountingSnapshot:
    accounts: list
    sales: list
    expenses: list
    vouchers: list
    inventory: list
    transactions: list
    ledgers: dict
    trial_balance: derivation.TrialBalance
    profit_and_loss: derivation.ProfitAndLoss
    balance_sheet: derivation.BalanceSheet
    stock_valuation: list
    stock_value_total: Decimal
    as_of_date: Optional[date_cls] = None
    strict: bool = True
    rejected: list = field(default_factory=list)

    @property
    def inventory_ledger_balance(self) -> Decimal:
        return derivation.ledger_balance(self.ledgers, derivation.SystemAccount.INVENTORY)

    def day_book(self, day: date_cls) -> list:
        return derivation.derive_day_book(self.transactions, day, tz=timezone.get_current_timezone())


def parse_as_of_date(as_of_date) -> date_cls | None:
    if as_of_date in (None, ""):
        return None
    if isinstance(as_of_date, date_cls):
        return as_of_date
    try:
        return date_cls.fromisoformat(str(as_of_date).strip())
    except ValueError as exc:
        raise AccountingServiceError("Invalid as_of_date format (YYYY-MM-DD)") from exc


def _end_of_day_aware(d: date_cls) -> datetime:
    # Inclusive end-of-day snapshot
    naive = datetime.combine(d, time.max)
    return timezone.make_aware(naive, timezone.get_current_timezone())


def credit_payment_method() -> str:
    return getattr(settings, "ACCOUNTING_CREDIT_PAYMENT_METHOD", derivation.DEFAULT_CREDIT_PAYMENT_METHOD)


def _ingest(rows, record_cls, *, source: str, rejected: list) -> list:
    records = []
    for raw in rows:
        try:
            records.append(record_cls.from_raw(raw))
        except MalformedRecordError as exc:
            logger.warning("Rejected %s row %s: %s", source, raw.get("id"), exc)
            rejected.append({"source": source, "id": raw.get("id"), "error": str(exc)})
    return records


def build_snapshot(*, user, as_of_date=None, strict: bool | None = None) -> AccountingSnapshot:
    as_of = parse_as_of_date(as_of_date)

    accounts = load_chart_of_accounts(user)
    if strict is None:
        strict = bool(accounts)

    sales_qs = Sale.objects.all()
    expenses_qs = Expense.objects.all()
    vouchers_qs = Voucher.objects.select_related("debit_account", "credit_account")

    if as_of is not None:
        cutoff = _end_of_day_aware(as_of)
        sales_qs = sales_qs.filter(timestamp__lte=cutoff)
        expenses_qs = expenses_qs.filter(timestamp__lte=cutoff)
        vouchers_qs = vouchers_qs.filter(date__lte=cutoff)

    # Insertion order inside each source decides ties on equal dates.
    sales_qs = sales_qs.order_by("timestamp", "id")
    expenses_qs = expenses_qs.order_by("timestamp", "id")
    vouchers_qs = vouchers_qs.order_by("date", "id")
    inventory_qs = InventoryItem.objects.filter(is_active=True).order_by("name", "id")

    rejected: list = []
    sales = _ingest((s.as_raw() for s in sales_qs), derivation.SaleRecord, source="sale", rejected=rejected)
    expenses = _ingest(
        (e.as_raw() for e in expenses_qs), derivation.ExpenseRecord, source="expense", rejected=rejected
    )
    vouchers = _ingest(
        (v.as_raw() for v in vouchers_qs), derivation.VoucherRecord, source="voucher", rejected=rejected
    )
    inventory = _ingest(
        (i.as_raw() for i in inventory_qs), derivation.InventoryRecord, source="inventory", rejected=rejected
    )

    transactions = derivation.derive_transactions(
        sales,
        expenses,
        vouchers,
        credit_payment_method=credit_payment_method(),
    )
    ledgers = derivation.derive_ledgers(transactions, accounts, strict=strict)
    trial_balance = derivation.derive_trial_balance(ledgers)
    profit_and_loss = derivation.derive_profit_and_loss(ledgers)
    balance_sheet = derivation.derive_balance_sheet(ledgers, profit_and_loss)
    stock_valuation = derivation.derive_stock_valuation(inventory)

    if not trial_balance.balanced:
        logger.error(
            "Trial balance out of balance: debit=%s credit=%s",
            trial_balance.total_debit,
            trial_balance.total_credit,
        )

    return AccountingSnapshot(
        accounts=accounts,
        sales=sales,
        expenses=expenses,
        vouchers=vouchers,
        inventory=inventory,
        transactions=transactions,
        ledgers=ledgers,
        trial_balance=trial_balance,
        profit_and_loss=profit_and_loss,
        balance_sheet=balance_sheet,
        stock_valuation=stock_valuation,
        stock_value_total=derivation.total_stock_value(stock_valuation),
        as_of_date=as_of,
        strict=strict,
        rejected=rejected,
    )
