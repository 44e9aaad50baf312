# accounting/api/views/__init__.py

"""
accounting.api.views package

Do NOT import accounting.api.urls from here to avoid circular imports.
"""

# Master data / posting actions
from accounting.api.views.accounts import AccountListCreateView
from accounting.api.views.vouchers import VoucherDetailView, VoucherListCreateView

# Read-only reports
from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.journal import DayBookView, TransactionListView
from accounting.api.views.ledgers import LedgerView
from accounting.api.views.overview import AccountingOverviewView
from accounting.api.views.profit_and_loss import ProfitAndLossView
from accounting.api.views.stock_valuation import StockValuationView
from accounting.api.views.trial_balance import TrialBalanceView

__all__ = [
    "AccountListCreateView",
    "VoucherListCreateView",
    "VoucherDetailView",
    "TransactionListView",
    "DayBookView",
    "LedgerView",
    "TrialBalanceView",
    "ProfitAndLossView",
    "BalanceSheetView",
    "StockValuationView",
    "AccountingOverviewView",
]
