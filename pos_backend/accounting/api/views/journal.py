"""
PATH: accounting/api/views/journal.py

JOURNAL + DAY BOOK API VIEWS (READ-ONLY)

GET /api/accounting/transactions/        all derived transactions, newest first
GET /api/accounting/day-book/?date=      one day's transactions, oldest first
"""

from __future__ import annotations

from django.utils import timezone
from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response

from accounting.api.views.base import AS_OF_DATE_PARAM, SnapshotReportView
from accounting.services.report_rendering import render_day_book, render_transactions


@extend_schema(
    tags=["accounting"],
    parameters=[AS_OF_DATE_PARAM],
    responses={200: dict},
)
class TransactionListView(SnapshotReportView):
    def build_report(self, request, snapshot):
        return {
            "count": len(snapshot.transactions),
            "results": render_transactions(snapshot.transactions),
            "rejected": snapshot.rejected,
        }


@extend_schema(
    tags=["accounting"],
    parameters=[
        OpenApiParameter(
            name="date",
            type=str,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Day to list (YYYY-MM-DD). Defaults to today.",
        ),
    ],
    responses={200: dict},
)
class DayBookView(SnapshotReportView):
    def build_report(self, request, snapshot):
        raw = (request.query_params.get("date") or "").strip()
        if raw:
            try:
                day = parse_date(raw)
            except ValueError:
                day = None
            if day is None:
                return Response(
                    {"detail": "Invalid date (expected YYYY-MM-DD)"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        else:
            day = timezone.localdate()

        return render_day_book(day, snapshot.day_book(day))
