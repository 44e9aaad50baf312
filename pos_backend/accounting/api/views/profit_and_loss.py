"""
PATH: accounting/api/views/profit_and_loss.py

PROFIT & LOSS API VIEW (READ-ONLY)
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_profit_and_loss


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class ProfitAndLossView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return render_profit_and_loss(snapshot.profit_and_loss)
