"""
PATH: accounting/api/views/ledgers.py

LEDGERS API VIEW (READ-ONLY)

GET /api/accounting/ledgers/             every chart account (system seed included)
GET /api/accounting/ledgers/?account=    one account, by exact name
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_ledger, render_ledgers


@extend_schema(
    tags=["accounting"],
    parameters=[
        AS_OF_DATE_PARAM,
        OpenApiParameter(
            name="account",
            type=str,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Account name (e.g. Cash/Bank). Omit for all ledgers.",
        ),
    ],
    responses={200: dict},
)
class LedgerView(SnapshotReportView):
    def build_report(self, request, snapshot):
        account = (request.query_params.get("account") or "").strip()
        if not account:
            return {"ledgers": render_ledgers(snapshot.ledgers)}

        ledger = snapshot.ledgers.get(account)
        if ledger is None:
            return Response(
                {"detail": f"No ledger for account '{account}'"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return {"ledger": render_ledger(ledger)}
