"""
PATH: accounting/api/views/base.py

SNAPSHOT REPORT BASE VIEW

Every read-only report derives from one fresh AccountingSnapshot:
- JWT-authenticated, accounting admins only
- optional ?as_of_date=YYYY-MM-DD (inclusive end-of-day)
- service errors -> 400 {"detail": ...}
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.permissions import IsAccountingAdmin
from accounting.services.exceptions import AccountingServiceError
from accounting.services.snapshot_service import build_snapshot

AS_OF_DATE_PARAM = OpenApiParameter(
    name="as_of_date",
    type=str,
    location=OpenApiParameter.QUERY,
    required=False,
    description="End-of-day snapshot (YYYY-MM-DD). Omit for all records.",
)


class SnapshotReportView(APIView):
    permission_classes = [IsAuthenticated, IsAccountingAdmin]

    def build_report(self, request, snapshot) -> dict:
        raise NotImplementedError

    def get(self, request, *args, **kwargs):
        try:
            snapshot = build_snapshot(
                user=request.user,
                as_of_date=request.query_params.get("as_of_date"),
            )
            data = self.build_report(request, snapshot)
        except AccountingServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        if isinstance(data, Response):
            return data

        data["as_of_date"] = snapshot.as_of_date.isoformat() if snapshot.as_of_date else None
        return Response(data, status=status.HTTP_200_OK)
