"""
PATH: accounting/api/views/balance_sheet.py

BALANCE SHEET API VIEW (READ-ONLY)

Equity is retained earnings only. An unbalanced sheet is returned with
is_balanced=false and the difference, never as an error.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_balance_sheet


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class BalanceSheetView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return render_balance_sheet(snapshot.balance_sheet)
