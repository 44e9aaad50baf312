# accounting/derivation.py

"""
PATH: accounting/derivation.py

LEDGER DERIVATION ENGINE (FRAMEWORK-AGNOSTIC)

Builds every accounting view from raw POS records, from scratch, on each call:
- journal (one balanced transaction per sale / COGS / expense / voucher)
- per-account ledgers with running balances
- trial balance
- profit & loss
- balance sheet
- stock valuation (live inventory, NOT the Inventory ledger)
- day book

Rules:
- Pure functions over explicit inputs. No Django, no DB, no hidden state.
- Money is Decimal, normalized to 2dp.
- Every row is validated on ingestion (*Record.from_raw). A bad row raises
  MalformedRecordError; callers exclude it instead of corrupting the ledger.
- System accounts are always part of the chart and cannot be re-typed.
- Debit-normal: asset, expense. Credit-normal: liability, equity, revenue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone as dt_timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from accounting.services.exceptions import MalformedRecordError, UnclassifiedAccountError

MONEY_QUANT = Decimal("0.01")
ZERO = Decimal("0.00")

# ------------------------------------------------------------
# ACCOUNT TYPES
# ------------------------------------------------------------

ASSET = "asset"
LIABILITY = "liability"
EQUITY = "equity"
REVENUE = "revenue"
EXPENSE = "expense"

ACCOUNT_TYPES = (ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE)
DEBIT_NORMAL_TYPES = frozenset({ASSET, EXPENSE})

DEBIT = "debit"
CREDIT = "credit"

# Exact-match payment method that books a sale to Accounts Receivable.
DEFAULT_CREDIT_PAYMENT_METHOD = "Credit"

VOUCHER_TYPES = ("Payment", "Receipt", "Journal", "Contra")

TX_SALE = "Sale"
TX_COGS = "COGS"
TX_EXPENSE = "Expense"


class SystemAccount(str, Enum):
    CASH_BANK = "Cash/Bank"
    ACCOUNTS_RECEIVABLE = "Accounts Receivable"
    INVENTORY = "Inventory"
    ACCOUNTS_PAYABLE = "Accounts Payable"
    SALES = "Sales"
    COST_OF_GOODS_SOLD = "Cost of Goods Sold"
    OPERATING_EXPENSES = "Operating Expenses"

    @property
    def account_type(self) -> str:
        return SYSTEM_ACCOUNTS[self][0]

    @property
    def code(self) -> str:
        return SYSTEM_ACCOUNTS[self][1]


SYSTEM_ACCOUNTS = {
    SystemAccount.CASH_BANK: (ASSET, "1000"),
    SystemAccount.ACCOUNTS_RECEIVABLE: (ASSET, "1100"),
    SystemAccount.INVENTORY: (ASSET, "1200"),
    SystemAccount.ACCOUNTS_PAYABLE: (LIABILITY, "2000"),
    SystemAccount.SALES: (REVENUE, "4000"),
    SystemAccount.COST_OF_GOODS_SOLD: (EXPENSE, "5000"),
    SystemAccount.OPERATING_EXPENSES: (EXPENSE, "6000"),
}


def is_debit_normal(account_type: Optional[str]) -> bool:
    return account_type in DEBIT_NORMAL_TYPES


# ------------------------------------------------------------
# INGESTION HELPERS
# ------------------------------------------------------------


def _q2(amount: Decimal) -> Decimal:
    return (amount or ZERO).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def _pick(raw: Mapping, *keys, default=None):
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _to_money(value, *, label: str, source: str, record_id=None) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedRecordError(f"{label} is required", source=source, record_id=record_id)
    if isinstance(value, bool):
        raise MalformedRecordError(f"Invalid {label}: {value!r}", source=source, record_id=record_id)

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedRecordError(
            f"Invalid {label}: {value!r}", source=source, record_id=record_id
        ) from exc

    if not amount.is_finite():
        raise MalformedRecordError(f"Invalid {label}: {value!r}", source=source, record_id=record_id)

    return _q2(amount)


def _to_datetime(value, *, label: str, source: str, record_id=None) -> datetime:
    """
    Accepts datetime, date or ISO-8601 string.
    Naive values are read as UTC so every date in the journal is comparable.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedRecordError(f"{label} is required", source=source, record_id=record_id)

    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = f"{raw[:-1]}+00:00"
        try:
            value = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise MalformedRecordError(
                f"Invalid {label}: {value!r}", source=source, record_id=record_id
            ) from exc

    if isinstance(value, datetime):
        if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
            return value.replace(tzinfo=dt_timezone.utc)
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=dt_timezone.utc)

    raise MalformedRecordError(f"Invalid {label}: {value!r}", source=source, record_id=record_id)


def _required_id(raw: Mapping, *, source: str):
    record_id = _pick(raw, "id")
    if record_id is None or str(record_id).strip() == "":
        raise MalformedRecordError("id is required", source=source)
    return record_id


def _text(value) -> str:
    return "" if value is None else str(value).strip()


# ------------------------------------------------------------
# INPUT RECORDS
# ------------------------------------------------------------


@dataclass(frozen=True)
class AccountRecord:
    name: str
    account_type: str
    id: Any = None
    code: str = ""

    @staticmethod
    def from_raw(raw: Mapping) -> "AccountRecord":
        record_id = _pick(raw, "id")
        name = _text(_pick(raw, "name"))
        if not name:
            raise MalformedRecordError("Account name is required", source="account", record_id=record_id)

        account_type = _text(_pick(raw, "account_type", "type")).lower()
        if account_type not in ACCOUNT_TYPES:
            raise MalformedRecordError(
                f"Invalid account type {account_type!r} for account '{name}'",
                source="account",
                record_id=record_id,
            )

        return AccountRecord(
            name=name,
            account_type=account_type,
            id=record_id,
            code=_text(_pick(raw, "code")),
        )


@dataclass(frozen=True)
class SaleRecord:
    id: Any
    timestamp: datetime
    total: Decimal
    profit: Optional[Decimal] = None
    payment_method: str = ""
    customer_name: str = ""

    @staticmethod
    def from_raw(raw: Mapping) -> "SaleRecord":
        record_id = _required_id(raw, source="sale")
        profit_raw = _pick(raw, "profit")
        if isinstance(profit_raw, str) and not profit_raw.strip():
            profit_raw = None

        return SaleRecord(
            id=record_id,
            timestamp=_to_datetime(
                _pick(raw, "timestamp"), label="timestamp", source="sale", record_id=record_id
            ),
            total=_to_money(_pick(raw, "total"), label="total", source="sale", record_id=record_id),
            profit=(
                None
                if profit_raw is None
                else _to_money(profit_raw, label="profit", source="sale", record_id=record_id)
            ),
            payment_method=_text(_pick(raw, "payment_method", "paymentMethod")),
            customer_name=_text(_pick(raw, "customer_name", "customerName")),
        )


@dataclass(frozen=True)
class ExpenseRecord:
    id: Any
    timestamp: datetime
    description: str
    amount: Decimal

    @staticmethod
    def from_raw(raw: Mapping) -> "ExpenseRecord":
        record_id = _required_id(raw, source="expense")
        return ExpenseRecord(
            id=record_id,
            timestamp=_to_datetime(
                _pick(raw, "timestamp"), label="timestamp", source="expense", record_id=record_id
            ),
            description=_text(_pick(raw, "description")),
            amount=_to_money(_pick(raw, "amount"), label="amount", source="expense", record_id=record_id),
        )


@dataclass(frozen=True)
class VoucherRecord:
    id: Any
    date: datetime
    voucher_type: str
    amount: Decimal
    debit_account: str
    credit_account: str
    narration: str = ""

    @staticmethod
    def from_raw(raw: Mapping) -> "VoucherRecord":
        record_id = _required_id(raw, source="voucher")

        voucher_type = _text(_pick(raw, "voucher_type", "type"))
        if voucher_type not in VOUCHER_TYPES:
            raise MalformedRecordError(
                f"Invalid voucher type {voucher_type!r}", source="voucher", record_id=record_id
            )

        debit_account = _text(_pick(raw, "debit_account", "debitAccount"))
        credit_account = _text(_pick(raw, "credit_account", "creditAccount"))
        if not debit_account or not credit_account:
            raise MalformedRecordError(
                "Both debit and credit accounts are required", source="voucher", record_id=record_id
            )

        return VoucherRecord(
            id=record_id,
            date=_to_datetime(_pick(raw, "date"), label="date", source="voucher", record_id=record_id),
            voucher_type=voucher_type,
            amount=_to_money(_pick(raw, "amount"), label="amount", source="voucher", record_id=record_id),
            debit_account=debit_account,
            credit_account=credit_account,
            narration=_text(_pick(raw, "narration")),
        )


@dataclass(frozen=True)
class InventoryRecord:
    id: Any
    stock: int
    cost_price: Decimal
    attributes: Mapping = field(default_factory=dict)

    @staticmethod
    def from_raw(raw: Mapping) -> "InventoryRecord":
        record_id = _required_id(raw, source="inventory")

        stock_raw = _pick(raw, "stock")
        try:
            stock = int(stock_raw)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(
                f"Invalid stock: {stock_raw!r}", source="inventory", record_id=record_id
            ) from exc

        cost_price = _to_money(
            _pick(raw, "cost_price", "costPrice"),
            label="cost_price",
            source="inventory",
            record_id=record_id,
        )

        passthrough = {
            k: v
            for k, v in raw.items()
            if k not in ("id", "stock", "cost_price", "costPrice")
        }
        return InventoryRecord(id=record_id, stock=stock, cost_price=cost_price, attributes=passthrough)


# ------------------------------------------------------------
# DERIVED TYPES
# ------------------------------------------------------------


@dataclass(frozen=True)
class Posting:
    account: str
    amount: Decimal


@dataclass(frozen=True)
class Transaction:
    """
    One journal entry. Debit and credit always carry the same amount.
    """

    id: str
    date: datetime
    type: str
    narration: str
    debit: Posting
    credit: Posting

    @property
    def is_balanced(self) -> bool:
        return self.debit.amount == self.credit.amount


def _journal(*, tx_id, tx_date, tx_type, narration, debit_account, credit_account, amount) -> Transaction:
    amount = _q2(amount)
    return Transaction(
        id=str(tx_id),
        date=tx_date,
        type=tx_type,
        narration=narration,
        debit=Posting(account=str(debit_account), amount=amount),
        credit=Posting(account=str(credit_account), amount=amount),
    )


@dataclass(frozen=True)
class LedgerLine:
    transaction: Transaction
    side: str
    amount: Decimal
    balance: Decimal


@dataclass
class AccountLedger:
    account: str
    account_type: Optional[str]
    entries: list = field(default_factory=list)
    balance: Decimal = ZERO

    @property
    def is_debit_normal(self) -> bool:
        return is_debit_normal(self.account_type)

    @property
    def is_classified(self) -> bool:
        return self.account_type is not None


@dataclass(frozen=True)
class TrialBalanceRow:
    debit: Decimal = ZERO
    credit: Decimal = ZERO


@dataclass(frozen=True)
class TrialBalance:
    rows: dict
    total_debit: Decimal
    total_credit: Decimal

    @property
    def balanced(self) -> bool:
        return self.total_debit == self.total_credit


@dataclass(frozen=True)
class ProfitAndLoss:
    revenue: Decimal
    cogs: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class BalanceSheetAssets:
    cash_and_bank: Decimal
    accounts_receivable: Decimal
    inventory: Decimal

    @property
    def total(self) -> Decimal:
        return _q2(self.cash_and_bank + self.accounts_receivable + self.inventory)


@dataclass(frozen=True)
class BalanceSheetLiabilities:
    accounts_payable: Decimal

    @property
    def total(self) -> Decimal:
        return _q2(self.accounts_payable)


@dataclass(frozen=True)
class BalanceSheetEquity:
    retained_earnings: Decimal

    @property
    def total(self) -> Decimal:
        return _q2(self.retained_earnings)


@dataclass(frozen=True)
class BalanceSheet:
    """
    Simplified statement: equity is retained earnings only.

    An imbalance is reported, never raised. It means equity moved through an
    account this statement does not model (e.g. owner capital via a voucher).
    """

    assets: BalanceSheetAssets
    liabilities: BalanceSheetLiabilities
    equity: BalanceSheetEquity

    @property
    def liabilities_plus_equity(self) -> Decimal:
        return _q2(self.liabilities.total + self.equity.total)

    @property
    def difference(self) -> Decimal:
        return _q2(self.assets.total - self.liabilities_plus_equity)

    @property
    def balanced(self) -> bool:
        return self.difference == ZERO


@dataclass(frozen=True)
class StockValuationRow:
    item: InventoryRecord
    value: Decimal

    def as_dict(self) -> dict:
        return {
            **dict(self.item.attributes),
            "id": self.item.id,
            "stock": self.item.stock,
            "cost_price": self.item.cost_price,
            "value": self.value,
        }


# ------------------------------------------------------------
# CHART OF ACCOUNTS
# ------------------------------------------------------------


def build_chart(accounts: Iterable[AccountRecord]) -> dict:
    """
    name -> account_type. System accounts come first and keep their type.
    """
    chart = {acc.value: acc.account_type for acc in SystemAccount}
    system_names = set(chart)

    for acc in accounts or ():
        if acc.name in system_names:
            continue
        chart[acc.name] = acc.account_type

    return chart


# ------------------------------------------------------------
# JOURNAL
# ------------------------------------------------------------


def derive_transactions(
    sales: Iterable[SaleRecord],
    expenses: Iterable[ExpenseRecord],
    vouchers: Iterable[VoucherRecord],
    *,
    credit_payment_method: str = DEFAULT_CREDIT_PAYMENT_METHOD,
) -> list:
    """
    Journal, most recent first. Equal dates keep insertion order:
    sales, then expenses, then vouchers, each in input order.
    """
    transactions: list = []

    for sale in sales or ():
        is_credit = sale.payment_method == credit_payment_method
        customer = sale.customer_name if is_credit else "Customer"

        transactions.append(
            _journal(
                tx_id=f"S-{sale.id}",
                tx_date=sale.timestamp,
                tx_type=TX_SALE,
                narration=f"Sale to {customer} (Receipt #{sale.id})",
                debit_account=(
                    SystemAccount.ACCOUNTS_RECEIVABLE.value if is_credit else SystemAccount.CASH_BANK.value
                ),
                credit_account=SystemAccount.SALES.value,
                amount=sale.total,
            )
        )

        if sale.profit is None:
            continue

        cost = _q2(sale.total - sale.profit)
        if cost > ZERO:
            transactions.append(
                _journal(
                    tx_id=f"COGS-{sale.id}",
                    tx_date=sale.timestamp,
                    tx_type=TX_COGS,
                    narration=f"Cost for Sale #{sale.id}",
                    debit_account=SystemAccount.COST_OF_GOODS_SOLD.value,
                    credit_account=SystemAccount.INVENTORY.value,
                    amount=cost,
                )
            )

    for expense in expenses or ():
        transactions.append(
            _journal(
                tx_id=f"E-{expense.id}",
                tx_date=expense.timestamp,
                tx_type=TX_EXPENSE,
                narration=expense.description,
                debit_account=SystemAccount.OPERATING_EXPENSES.value,
                credit_account=SystemAccount.CASH_BANK.value,
                amount=expense.amount,
            )
        )

    for voucher in vouchers or ():
        transactions.append(
            _journal(
                tx_id=voucher.id,
                tx_date=voucher.date,
                tx_type=voucher.voucher_type,
                narration=voucher.narration,
                debit_account=voucher.debit_account,
                credit_account=voucher.credit_account,
                amount=voucher.amount,
            )
        )

    # sorted() is stable with reverse=True as well
    return sorted(transactions, key=lambda tx: tx.date, reverse=True)


# ------------------------------------------------------------
# LEDGERS
# ------------------------------------------------------------


def derive_ledgers(
    transactions: Iterable[Transaction],
    accounts: Iterable[AccountRecord],
    *,
    strict: bool = True,
) -> dict:
    """
    name -> AccountLedger with chronological running balances.

    strict=True: an account missing from the chart raises UnclassifiedAccountError.
    strict=False: legacy fallback, the account is treated as credit-normal
    and its ledger carries account_type=None.
    """
    chart = build_chart(accounts)
    ledgers = {name: AccountLedger(account=name, account_type=acc_type) for name, acc_type in chart.items()}
    pending = {name: [] for name in ledgers}

    for tx in transactions or ():
        for side, posting in ((DEBIT, tx.debit), (CREDIT, tx.credit)):
            name = posting.account
            if name not in ledgers:
                if strict:
                    raise UnclassifiedAccountError(name, transaction_id=tx.id)
                ledgers[name] = AccountLedger(account=name, account_type=None)
                pending[name] = []
            pending[name].append((tx, side, posting.amount))

    for name, ledger in ledgers.items():
        balance = ZERO
        debit_normal = ledger.is_debit_normal

        for tx, side, amount in sorted(pending[name], key=lambda item: item[0].date):
            increases = (side == DEBIT) == debit_normal
            balance = _q2(balance + amount if increases else balance - amount)
            ledger.entries.append(LedgerLine(transaction=tx, side=side, amount=amount, balance=balance))

        ledger.balance = balance

    return ledgers


def ledger_balance(ledgers: Mapping, account) -> Decimal:
    name = account.value if isinstance(account, SystemAccount) else str(account)
    ledger = ledgers.get(name)
    return ledger.balance if ledger is not None else ZERO


# ------------------------------------------------------------
# TRIAL BALANCE
# ------------------------------------------------------------


def derive_trial_balance(ledgers: Mapping) -> TrialBalance:
    """
    Positive balance -> normal side; negative balance (abs) -> opposite side.
    Zero balances are omitted.
    """
    rows: dict = {}
    total_debit = ZERO
    total_credit = ZERO

    for name, ledger in ledgers.items():
        balance = ledger.balance
        if balance == ZERO:
            continue

        on_debit_side = ledger.is_debit_normal if balance > ZERO else not ledger.is_debit_normal
        amount = abs(balance)

        if on_debit_side:
            rows[name] = TrialBalanceRow(debit=amount, credit=ZERO)
            total_debit += amount
        else:
            rows[name] = TrialBalanceRow(debit=ZERO, credit=amount)
            total_credit += amount

    return TrialBalance(rows=rows, total_debit=_q2(total_debit), total_credit=_q2(total_credit))


# ------------------------------------------------------------
# FINANCIAL STATEMENTS
# ------------------------------------------------------------


def derive_profit_and_loss(ledgers: Mapping) -> ProfitAndLoss:
    revenue = ledger_balance(ledgers, SystemAccount.SALES)
    cogs = ledger_balance(ledgers, SystemAccount.COST_OF_GOODS_SOLD)
    gross_profit = _q2(revenue - cogs)
    operating_expenses = ledger_balance(ledgers, SystemAccount.OPERATING_EXPENSES)

    return ProfitAndLoss(
        revenue=revenue,
        cogs=cogs,
        gross_profit=gross_profit,
        operating_expenses=operating_expenses,
        net_profit=_q2(gross_profit - operating_expenses),
    )


def derive_balance_sheet(ledgers: Mapping, profit_and_loss: ProfitAndLoss) -> BalanceSheet:
    return BalanceSheet(
        assets=BalanceSheetAssets(
            cash_and_bank=ledger_balance(ledgers, SystemAccount.CASH_BANK),
            accounts_receivable=ledger_balance(ledgers, SystemAccount.ACCOUNTS_RECEIVABLE),
            inventory=ledger_balance(ledgers, SystemAccount.INVENTORY),
        ),
        liabilities=BalanceSheetLiabilities(
            accounts_payable=ledger_balance(ledgers, SystemAccount.ACCOUNTS_PAYABLE),
        ),
        equity=BalanceSheetEquity(retained_earnings=profit_and_loss.net_profit),
    )


# ------------------------------------------------------------
# STOCK VALUATION
# ------------------------------------------------------------


def derive_stock_valuation(inventory: Iterable[InventoryRecord]) -> list:
    return [
        StockValuationRow(item=item, value=_q2(item.cost_price * item.stock))
        for item in inventory or ()
    ]


def total_stock_value(rows: Iterable[StockValuationRow]) -> Decimal:
    return _q2(sum((row.value for row in rows), ZERO))


# ------------------------------------------------------------
# DAY BOOK
# ------------------------------------------------------------


def derive_day_book(transactions: Iterable[Transaction], day: date, *, tz: tzinfo = dt_timezone.utc) -> list:
    """
    Transactions dated on `day` (in tz), oldest first.
    """
    on_day = [tx for tx in transactions or () if tx.date.astimezone(tz).date() == day]
    return sorted(on_day, key=lambda tx: tx.date)
