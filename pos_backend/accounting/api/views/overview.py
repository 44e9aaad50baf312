"""
PATH: accounting/api/views/overview.py

ACCOUNTING OVERVIEW API VIEW (READ-ONLY)

One call returns the whole derived book: chart, journal, ledgers,
trial balance, P&L, balance sheet, stock valuation and rejected rows.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_snapshot


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class AccountingOverviewView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return render_snapshot(snapshot)
