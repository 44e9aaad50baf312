# accounting/tests/test_derivation.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from django.test import SimpleTestCase

from accounting import derivation as d
from accounting.services.exceptions import MalformedRecordError, UnclassifiedAccountError

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _sale(sale_id, total, *, profit=None, method="cash", customer="", ts=T0):
    return d.SaleRecord.from_raw(
        {
            "id": sale_id,
            "timestamp": ts,
            "total": total,
            "profit": profit,
            "payment_method": method,
            "customer_name": customer,
        }
    )


def _expense(expense_id, amount, *, description="Rent", ts=T0):
    return d.ExpenseRecord.from_raw(
        {"id": expense_id, "timestamp": ts, "description": description, "amount": amount}
    )


def _voucher(voucher_id, amount, debit, credit, *, voucher_type="Journal", narration="Adj", ts=T0):
    return d.VoucherRecord.from_raw(
        {
            "id": voucher_id,
            "date": ts,
            "voucher_type": voucher_type,
            "amount": amount,
            "debit_account": debit,
            "credit_account": credit,
            "narration": narration,
        }
    )


def _derive(sales=(), expenses=(), vouchers=(), accounts=(), strict=True):
    transactions = d.derive_transactions(sales, expenses, vouchers)
    ledgers = d.derive_ledgers(transactions, accounts, strict=strict)
    return transactions, ledgers


class ScenarioTests(SimpleTestCase):
    """
    Worked examples for the derivation engine.

    GUARANTEES:
    - Sale / COGS / expense / voucher postings land on the right accounts
    - Normal-balance sign conventions per account type
    """

    def test_cash_sale_with_profit_posts_sale_and_cogs(self):
        transactions, ledgers = _derive(sales=[_sale(1, 100000, profit=40000)])

        self.assertEqual([tx.id for tx in transactions], ["S-1", "COGS-1"])

        sale_tx, cogs_tx = transactions
        self.assertEqual(sale_tx.debit.account, "Cash/Bank")
        self.assertEqual(sale_tx.credit.account, "Sales")
        self.assertEqual(sale_tx.debit.amount, Decimal("100000.00"))
        self.assertEqual(sale_tx.narration, "Sale to Customer (Receipt #1)")

        self.assertEqual(cogs_tx.debit.account, "Cost of Goods Sold")
        self.assertEqual(cogs_tx.credit.account, "Inventory")
        self.assertEqual(cogs_tx.credit.amount, Decimal("60000.00"))
        self.assertEqual(cogs_tx.narration, "Cost for Sale #1")

        self.assertEqual(ledgers["Sales"].balance, Decimal("100000.00"))
        self.assertEqual(ledgers["Cash/Bank"].balance, Decimal("100000.00"))
        self.assertEqual(ledgers["Inventory"].balance, Decimal("-60000.00"))

        pnl = d.derive_profit_and_loss(ledgers)
        self.assertEqual(pnl.gross_profit, Decimal("40000.00"))
        self.assertEqual(pnl.net_profit, Decimal("40000.00"))

    def test_credit_sale_without_profit_posts_receivable_only(self):
        transactions, ledgers = _derive(
            sales=[_sale(2, 50000, method="Credit", customer="Acme Ltd")]
        )

        self.assertEqual(len(transactions), 1)
        tx = transactions[0]
        self.assertEqual(tx.debit.account, "Accounts Receivable")
        self.assertEqual(tx.credit.account, "Sales")
        self.assertEqual(tx.debit.amount, Decimal("50000.00"))
        self.assertEqual(tx.narration, "Sale to Acme Ltd (Receipt #2)")
        self.assertEqual(ledgers["Accounts Receivable"].balance, Decimal("50000.00"))

    def test_lowercase_credit_is_cash_by_default(self):
        transactions, _ = _derive(sales=[_sale(3, 1000, method="credit", customer="Acme")])
        self.assertEqual(transactions[0].debit.account, "Cash/Bank")
        self.assertEqual(transactions[0].narration, "Sale to Customer (Receipt #3)")

    def test_credit_payment_method_is_configurable(self):
        transactions = d.derive_transactions(
            [_sale(3, 1000, method="credit")], [], [], credit_payment_method="credit"
        )
        self.assertEqual(transactions[0].debit.account, "Accounts Receivable")

    def test_expense_reduces_cash_and_profit(self):
        _, ledgers = _derive(expenses=[_expense(1, 20000)])

        self.assertEqual(ledgers["Operating Expenses"].balance, Decimal("20000.00"))
        self.assertEqual(ledgers["Cash/Bank"].balance, Decimal("-20000.00"))
        self.assertEqual(d.derive_profit_and_loss(ledgers).net_profit, Decimal("-20000.00"))

    def test_unregistered_voucher_account_fails_fast(self):
        transactions = d.derive_transactions([], [], [_voucher("V-1", 15000, "Rent Expense", "Cash/Bank")])

        with self.assertRaises(UnclassifiedAccountError) as ctx:
            d.derive_ledgers(transactions, [])

        self.assertEqual(ctx.exception.account, "Rent Expense")
        self.assertEqual(ctx.exception.transaction_id, "V-1")

    def test_unregistered_voucher_account_legacy_fallback_is_credit_normal(self):
        _, ledgers = _derive(
            vouchers=[_voucher("V-1", 15000, "Rent Expense", "Cash/Bank")],
            strict=False,
        )

        rent = ledgers["Rent Expense"]
        self.assertIsNone(rent.account_type)
        self.assertFalse(rent.is_classified)
        # Debit on a credit-normal fallback decreases the balance.
        self.assertEqual(rent.balance, Decimal("-15000.00"))
        self.assertEqual(ledgers["Cash/Bank"].balance, Decimal("-15000.00"))

    def test_registered_voucher_account_is_debit_normal(self):
        accounts = [d.AccountRecord.from_raw({"name": "Rent Expense", "account_type": "expense"})]
        _, ledgers = _derive(
            vouchers=[_voucher("V-1", 15000, "Rent Expense", "Cash/Bank")],
            accounts=accounts,
        )
        self.assertEqual(ledgers["Rent Expense"].balance, Decimal("15000.00"))

    def test_empty_inputs_derive_empty_views(self):
        transactions, ledgers = _derive()

        self.assertEqual(transactions, [])
        self.assertEqual(set(ledgers), {acc.value for acc in d.SystemAccount})
        for ledger in ledgers.values():
            self.assertEqual(ledger.entries, [])
            self.assertEqual(ledger.balance, Decimal("0.00"))

        trial = d.derive_trial_balance(ledgers)
        self.assertEqual(trial.rows, {})
        self.assertTrue(trial.balanced)

        sheet = d.derive_balance_sheet(ledgers, d.derive_profit_and_loss(ledgers))
        self.assertEqual(sheet.assets.total, Decimal("0.00"))
        self.assertTrue(sheet.balanced)

        self.assertEqual(d.derive_stock_valuation([]), [])
        self.assertEqual(d.total_stock_value([]), Decimal("0.00"))


class CogsRuleTests(SimpleTestCase):
    def test_zero_cost_sale_has_no_cogs(self):
        transactions, _ = _derive(sales=[_sale(1, 500, profit=500)])
        self.assertEqual([tx.type for tx in transactions], ["Sale"])

    def test_loss_making_profit_above_total_has_no_cogs(self):
        transactions, _ = _derive(sales=[_sale(1, 500, profit=700)])
        self.assertEqual(len(transactions), 1)

    def test_return_row_reverses_cash_and_sales(self):
        _, ledgers = _derive(sales=[_sale(1, 1000), _sale(2, -1000, ts=T0 + timedelta(hours=1))])
        self.assertEqual(ledgers["Cash/Bank"].balance, Decimal("0.00"))
        self.assertEqual(ledgers["Sales"].balance, Decimal("0.00"))


class OrderingTests(SimpleTestCase):
    def test_transactions_newest_first(self):
        transactions, _ = _derive(
            sales=[_sale(1, 100, ts=T0)],
            expenses=[_expense(1, 10, ts=T0 + timedelta(days=1))],
        )
        self.assertEqual([tx.id for tx in transactions], ["E-1", "S-1"])

    def test_equal_dates_keep_insertion_order(self):
        transactions, _ = _derive(
            sales=[_sale(1, 100), _sale(2, 200)],
            expenses=[_expense(1, 10)],
            vouchers=[_voucher("V-1", 5, "Accounts Payable", "Cash/Bank")],
        )
        self.assertEqual([tx.id for tx in transactions], ["S-1", "S-2", "E-1", "V-1"])

    def test_ledger_entries_are_chronological_with_running_balance(self):
        _, ledgers = _derive(
            sales=[_sale(1, 100, ts=T0 + timedelta(days=2)), _sale(2, 50, ts=T0)],
            expenses=[_expense(1, 30, ts=T0 + timedelta(days=1))],
        )

        cash = ledgers["Cash/Bank"]
        self.assertEqual([line.transaction.id for line in cash.entries], ["S-2", "E-1", "S-1"])
        self.assertEqual(
            [line.balance for line in cash.entries],
            [Decimal("50.00"), Decimal("20.00"), Decimal("120.00")],
        )
        self.assertEqual([line.side for line in cash.entries], ["debit", "credit", "debit"])

    def test_derivation_is_deterministic(self):
        sales = [_sale(i, 100 + i, profit=10) for i in range(1, 6)]
        expenses = [_expense(i, 5) for i in range(1, 4)]

        first = _derive(sales=sales, expenses=expenses)
        second = _derive(sales=sales, expenses=expenses)

        self.assertEqual(first[0], second[0])
        self.assertEqual(
            {k: v.balance for k, v in first[1].items()},
            {k: v.balance for k, v in second[1].items()},
        )


class TrialBalanceAndStatementTests(SimpleTestCase):
    def _mixed(self):
        accounts = [
            d.AccountRecord.from_raw({"name": "Owner Capital", "account_type": "equity"}),
        ]
        return _derive(
            sales=[
                _sale(1, 100000, profit=40000),
                _sale(2, 50000, profit=20000, method="Credit", customer="Acme"),
            ],
            expenses=[_expense(1, 20000)],
            vouchers=[_voucher("V-1", 10000, "Inventory", "Accounts Payable", voucher_type="Payment")],
            accounts=accounts,
        )

    def test_every_transaction_is_balanced(self):
        transactions, _ = self._mixed()
        self.assertTrue(all(tx.is_balanced for tx in transactions))

    def test_trial_balance_totals_agree(self):
        _, ledgers = self._mixed()
        trial = d.derive_trial_balance(ledgers)

        self.assertTrue(trial.balanced)
        self.assertEqual(trial.total_debit, trial.total_credit)
        self.assertNotIn("Owner Capital", trial.rows)

    def test_negative_balance_goes_to_opposite_side(self):
        _, ledgers = _derive(expenses=[_expense(1, 20000)])
        trial = d.derive_trial_balance(ledgers)

        self.assertEqual(trial.rows["Cash/Bank"], d.TrialBalanceRow(debit=Decimal("0.00"), credit=Decimal("20000.00")))
        self.assertEqual(trial.rows["Operating Expenses"].debit, Decimal("20000.00"))

    def test_debit_to_credit_normal_account_goes_negative(self):
        _, ledgers = _derive(vouchers=[_voucher("V-1", 50, "Sales", "Accounts Payable")])

        self.assertFalse(ledgers["Sales"].is_debit_normal)
        self.assertEqual(ledgers["Sales"].balance, Decimal("-50.00"))
        self.assertEqual(ledgers["Accounts Payable"].balance, Decimal("50.00"))

        trial = d.derive_trial_balance(ledgers)
        self.assertEqual(trial.rows["Sales"], d.TrialBalanceRow(debit=Decimal("50.00"), credit=Decimal("0.00")))
        self.assertEqual(trial.rows["Accounts Payable"].credit, Decimal("50.00"))
        self.assertTrue(trial.balanced)

    def test_equal_activity_is_omitted(self):
        _, ledgers = _derive(
            vouchers=[
                _voucher("V-1", 500, "Accounts Receivable", "Sales"),
                _voucher("V-2", 500, "Cash/Bank", "Accounts Receivable"),
            ]
        )
        trial = d.derive_trial_balance(ledgers)
        self.assertNotIn("Accounts Receivable", trial.rows)

    def test_profit_and_loss(self):
        _, ledgers = self._mixed()
        pnl = d.derive_profit_and_loss(ledgers)

        self.assertEqual(pnl.revenue, Decimal("150000.00"))
        self.assertEqual(pnl.cogs, Decimal("90000.00"))
        self.assertEqual(pnl.gross_profit, Decimal("60000.00"))
        self.assertEqual(pnl.operating_expenses, Decimal("20000.00"))
        self.assertEqual(pnl.net_profit, Decimal("40000.00"))

    def test_balance_sheet_identity_for_modelled_accounts(self):
        _, ledgers = self._mixed()
        sheet = d.derive_balance_sheet(ledgers, d.derive_profit_and_loss(ledgers))

        self.assertEqual(sheet.assets.cash_and_bank, Decimal("80000.00"))
        self.assertEqual(sheet.assets.accounts_receivable, Decimal("50000.00"))
        self.assertEqual(sheet.assets.inventory, Decimal("-80000.00"))
        self.assertEqual(sheet.liabilities.accounts_payable, Decimal("10000.00"))
        self.assertEqual(sheet.equity.retained_earnings, Decimal("40000.00"))
        self.assertEqual(sheet.assets.total, sheet.liabilities_plus_equity)
        self.assertTrue(sheet.balanced)

    def test_unmodelled_equity_movement_is_reported_not_raised(self):
        accounts = [d.AccountRecord.from_raw({"name": "Owner Capital", "account_type": "equity"})]
        _, ledgers = _derive(
            vouchers=[_voucher("V-1", 5000, "Cash/Bank", "Owner Capital", voucher_type="Receipt")],
            accounts=accounts,
        )
        sheet = d.derive_balance_sheet(ledgers, d.derive_profit_and_loss(ledgers))

        self.assertFalse(sheet.balanced)
        self.assertEqual(sheet.difference, Decimal("5000.00"))


class ChartTests(SimpleTestCase):
    def test_system_accounts_cannot_be_retyped(self):
        chart = d.build_chart([d.AccountRecord(name="Sales", account_type="expense")])
        self.assertEqual(chart["Sales"], "revenue")

    def test_system_account_enum_carries_type_and_code(self):
        self.assertEqual(d.SystemAccount.CASH_BANK.account_type, "asset")
        self.assertEqual(d.SystemAccount.OPERATING_EXPENSES.code, "6000")
        self.assertEqual(d.SystemAccount.ACCOUNTS_PAYABLE.value, "Accounts Payable")


class IngestionTests(SimpleTestCase):
    def test_camel_case_rows_are_accepted(self):
        sale = d.SaleRecord.from_raw(
            {
                "id": 9,
                "timestamp": "2026-03-01T10:00:00Z",
                "total": "1500",
                "paymentMethod": "Credit",
                "customerName": "  Jane ",
            }
        )
        self.assertEqual(sale.total, Decimal("1500.00"))
        self.assertEqual(sale.customer_name, "Jane")
        self.assertEqual(sale.timestamp.tzinfo, timezone.utc)
        self.assertIsNone(sale.profit)

    def test_missing_timestamp_is_rejected(self):
        with self.assertRaises(MalformedRecordError) as ctx:
            d.SaleRecord.from_raw({"id": 1, "total": 100})
        self.assertEqual(ctx.exception.source, "sale")
        self.assertEqual(ctx.exception.record_id, 1)

    def test_non_numeric_amount_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.ExpenseRecord.from_raw({"id": 1, "timestamp": T0, "amount": "abc"})

    def test_nan_amount_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.ExpenseRecord.from_raw({"id": 1, "timestamp": T0, "amount": "NaN"})

    def test_bad_voucher_type_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.VoucherRecord.from_raw(
                {
                    "id": "V-1",
                    "date": T0,
                    "type": "Sales",
                    "amount": 10,
                    "debitAccount": "Cash/Bank",
                    "creditAccount": "Sales",
                }
            )

    def test_voucher_without_accounts_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.VoucherRecord.from_raw({"id": "V-1", "date": T0, "type": "Journal", "amount": 10})

    def test_invalid_account_type_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.AccountRecord.from_raw({"name": "Misc", "type": "other"})

    def test_naive_and_date_values_are_utc(self):
        expense = d.ExpenseRecord.from_raw({"id": 1, "timestamp": date(2026, 3, 1), "amount": 1})
        self.assertEqual(expense.timestamp, datetime(2026, 3, 1, tzinfo=timezone.utc))


class StockValuationTests(SimpleTestCase):
    def test_value_is_stock_times_cost(self):
        items = [
            d.InventoryRecord.from_raw({"id": 1, "name": "Soap", "stock": 10, "cost_price": "2500"}),
            d.InventoryRecord.from_raw({"id": 2, "name": "Rice", "stock": 3, "costPrice": 1200.5}),
        ]
        rows = d.derive_stock_valuation(items)

        self.assertEqual([row.value for row in rows], [Decimal("25000.00"), Decimal("3601.50")])
        self.assertEqual(d.total_stock_value(rows), Decimal("28601.50"))
        self.assertEqual(rows[0].as_dict()["name"], "Soap")

    def test_bad_stock_is_rejected(self):
        with self.assertRaises(MalformedRecordError):
            d.InventoryRecord.from_raw({"id": 1, "stock": "many", "cost_price": 1})


class DayBookTests(SimpleTestCase):
    def test_day_book_filters_one_day_oldest_first(self):
        transactions, _ = _derive(
            sales=[_sale(1, 100, ts=T0 + timedelta(hours=3)), _sale(2, 100, ts=T0 + timedelta(days=1))],
            expenses=[_expense(1, 10, ts=T0)],
        )
        day = d.derive_day_book(transactions, date(2026, 3, 1))
        self.assertEqual([tx.id for tx in day], ["E-1", "S-1"])
