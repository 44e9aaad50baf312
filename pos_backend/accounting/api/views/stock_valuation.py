"""
PATH: accounting/api/views/stock_valuation.py

STOCK VALUATION API VIEW (READ-ONLY)

Live inventory at cost (stock x cost_price), next to the Inventory ledger balance.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_stock_valuation


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class StockValuationView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return render_stock_valuation(
            snapshot.stock_valuation,
            total=snapshot.stock_value_total,
            inventory_ledger_balance=snapshot.inventory_ledger_balance,
        )
