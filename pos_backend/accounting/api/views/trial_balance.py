"""
PATH: accounting/api/views/trial_balance.py

TRIAL BALANCE API VIEW (READ-ONLY)

Every non-zero ledger balance on its side; totals + is_balanced.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_trial_balance


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class TrialBalanceView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return render_trial_balance(snapshot.trial_balance)
