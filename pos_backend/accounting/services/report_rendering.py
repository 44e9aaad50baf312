# PATH: accounting/services/report_rendering.py

"""
REPORT RENDERING

Turns engine results into JSON-safe dicts.

Contract:
- API emits numeric JSON values (not strings)
- Provide both major-unit numbers (floats, 2dp) and minor-unit ints (exact)
- Dates are ISO-8601 strings
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

from accounting import derivation

TWOPLACES = Decimal("0.01")


def _q2(amount: Decimal) -> Decimal:
    return (amount or Decimal("0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _to_major_number(amount: Decimal) -> float:
    return float(_q2(amount))


def _to_minor_int(amount: Decimal) -> int:
    return int((_q2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def _money_pair(prefix: str, amount: Decimal) -> dict:
    return {
        prefix: _to_major_number(amount),
        f"{prefix}_minor": _to_minor_int(amount),
    }


def currency() -> str:
    return getattr(settings, "ACCOUNTING_CURRENCY", "UGX")


# ------------------------------------------------------------
# JOURNAL
# ------------------------------------------------------------


def render_transaction(tx: derivation.Transaction) -> dict:
    return {
        "id": tx.id,
        "date": tx.date.isoformat(),
        "type": tx.type,
        "narration": tx.narration,
        "debit": {"account": tx.debit.account, **_money_pair("amount", tx.debit.amount)},
        "credit": {"account": tx.credit.account, **_money_pair("amount", tx.credit.amount)},
    }


def render_transactions(transactions) -> list[dict]:
    return [render_transaction(tx) for tx in transactions]


def render_day_book(day, transactions) -> dict:
    total = sum((tx.debit.amount for tx in transactions), Decimal("0.00"))
    return {
        "date": day.isoformat(),
        "count": len(transactions),
        "results": render_transactions(transactions),
        **_money_pair("total", total),
    }


# ------------------------------------------------------------
# SOURCE RECORDS
# ------------------------------------------------------------


def render_vouchers(vouchers) -> list[dict]:
    return [
        {
            "id": v.id,
            "date": v.date.isoformat(),
            "voucher_type": v.voucher_type,
            **_money_pair("amount", v.amount),
            "debit_account": v.debit_account,
            "credit_account": v.credit_account,
            "narration": v.narration,
        }
        for v in vouchers
    ]


def render_sales(sales) -> list[dict]:
    rows = []
    for sale in sales:
        row = {
            "id": sale.id,
            "timestamp": sale.timestamp.isoformat(),
            **_money_pair("total", sale.total),
            "payment_method": sale.payment_method,
            "customer_name": sale.customer_name,
        }
        # Unknown profit stays null; it is what suppresses COGS.
        row.update(_money_pair("profit", sale.profit) if sale.profit is not None else {"profit": None})
        rows.append(row)
    return rows


def render_expenses(expenses) -> list[dict]:
    return [
        {
            "id": e.id,
            "timestamp": e.timestamp.isoformat(),
            "description": e.description,
            **_money_pair("amount", e.amount),
        }
        for e in expenses
    ]


# ------------------------------------------------------------
# LEDGERS
# ------------------------------------------------------------


def render_ledger(ledger: derivation.AccountLedger) -> dict:
    return {
        "account": ledger.account,
        "account_type": ledger.account_type,
        "normal_balance": derivation.DEBIT if ledger.is_debit_normal else derivation.CREDIT,
        "classified": ledger.is_classified,
        **_money_pair("balance", ledger.balance),
        "entries": [
            {
                "transaction_id": line.transaction.id,
                "date": line.transaction.date.isoformat(),
                "type": line.transaction.type,
                "narration": line.transaction.narration,
                "side": line.side,
                **_money_pair("amount", line.amount),
                **_money_pair("balance", line.balance),
            }
            for line in ledger.entries
        ],
    }


def render_ledgers(ledgers: dict) -> dict:
    return {name: render_ledger(ledger) for name, ledger in ledgers.items()}


# ------------------------------------------------------------
# TRIAL BALANCE
# ------------------------------------------------------------


def render_trial_balance(trial_balance: derivation.TrialBalance) -> dict:
    return {
        "currency": currency(),
        "rows": [
            {
                "account": name,
                **_money_pair("debit", row.debit),
                **_money_pair("credit", row.credit),
            }
            for name, row in trial_balance.rows.items()
        ],
        "totals": {
            **_money_pair("debit", trial_balance.total_debit),
            **_money_pair("credit", trial_balance.total_credit),
        },
        "is_balanced": trial_balance.balanced,
    }


# ------------------------------------------------------------
# FINANCIAL STATEMENTS
# ------------------------------------------------------------


def render_profit_and_loss(pnl: derivation.ProfitAndLoss) -> dict:
    return {
        "currency": currency(),
        **_money_pair("revenue", pnl.revenue),
        **_money_pair("cogs", pnl.cogs),
        **_money_pair("gross_profit", pnl.gross_profit),
        **_money_pair("operating_expenses", pnl.operating_expenses),
        **_money_pair("net_profit", pnl.net_profit),
    }


def render_balance_sheet(sheet: derivation.BalanceSheet) -> dict:
    return {
        "currency": currency(),
        "assets": {
            **_money_pair("cash_and_bank", sheet.assets.cash_and_bank),
            **_money_pair("accounts_receivable", sheet.assets.accounts_receivable),
            **_money_pair("inventory", sheet.assets.inventory),
            **_money_pair("total", sheet.assets.total),
        },
        "liabilities": {
            **_money_pair("accounts_payable", sheet.liabilities.accounts_payable),
            **_money_pair("total", sheet.liabilities.total),
        },
        "equity": {
            **_money_pair("retained_earnings", sheet.equity.retained_earnings),
            **_money_pair("total", sheet.equity.total),
        },
        **_money_pair("liabilities_plus_equity", sheet.liabilities_plus_equity),
        **_money_pair("difference", sheet.difference),
        "is_balanced": sheet.balanced,
    }


# ------------------------------------------------------------
# STOCK VALUATION
# ------------------------------------------------------------


def _json_safe(value):
    if isinstance(value, Decimal):
        return _to_major_number(value)
    return value


def render_stock_valuation(rows, *, total: Decimal, inventory_ledger_balance: Decimal) -> dict:
    items = []
    for row in rows:
        data = {key: _json_safe(value) for key, value in row.as_dict().items()}
        data["value_minor"] = _to_minor_int(row.value)
        items.append(data)

    return {
        "currency": currency(),
        "items": items,
        **_money_pair("total_value", total),
        # Shown side by side with the valuation; the two are never reconciled.
        **_money_pair("inventory_ledger_balance", inventory_ledger_balance),
    }


# ------------------------------------------------------------
# OVERVIEW
# ------------------------------------------------------------


def render_snapshot(snapshot) -> dict:
    return {
        "as_of_date": snapshot.as_of_date.isoformat() if snapshot.as_of_date else None,
        "currency": currency(),
        "accounts": [
            {"id": acc.id, "code": acc.code, "name": acc.name, "account_type": acc.account_type}
            for acc in snapshot.accounts
        ],
        "sales": render_sales(snapshot.sales),
        "expenses": render_expenses(snapshot.expenses),
        "vouchers": render_vouchers(snapshot.vouchers),
        "transactions": render_transactions(snapshot.transactions),
        "ledgers": render_ledgers(snapshot.ledgers),
        "trial_balance": render_trial_balance(snapshot.trial_balance),
        "profit_and_loss": render_profit_and_loss(snapshot.profit_and_loss),
        "balance_sheet": render_balance_sheet(snapshot.balance_sheet),
        "stock_valuation": render_stock_valuation(
            snapshot.stock_valuation,
            total=snapshot.stock_value_total,
            inventory_ledger_balance=snapshot.inventory_ledger_balance,
        ),
        "rejected": snapshot.rejected,
    }
