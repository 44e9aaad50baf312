# accounting/api/urls.py

from django.urls import path

from accounting.api.views import (
    AccountingOverviewView,
    AccountListCreateView,
    BalanceSheetView,
    DayBookView,
    LedgerView,
    ProfitAndLossView,
    StockValuationView,
    TransactionListView,
    TrialBalanceView,
    VoucherDetailView,
    VoucherListCreateView,
)

urlpatterns = [
    # Master data + posting actions
    path("accounts/", AccountListCreateView.as_view(), name="accounts"),
    path("vouchers/", VoucherListCreateView.as_view(), name="vouchers"),
    path("vouchers/<int:pk>/", VoucherDetailView.as_view(), name="voucher-detail"),
    # Journal
    path("transactions/", TransactionListView.as_view(), name="transactions"),
    path("day-book/", DayBookView.as_view(), name="day-book"),
    path("ledgers/", LedgerView.as_view(), name="ledgers"),
    # Reports
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("profit-and-loss/", ProfitAndLossView.as_view(), name="profit-and-loss"),
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("stock-valuation/", StockValuationView.as_view(), name="stock-valuation"),
    path("overview/", AccountingOverviewView.as_view(), name="accounting-overview"),
]
