# accounting/api/views/vouchers.py

"""
PATH: accounting/api/views/vouchers.py

VOUCHERS API

GET  /api/accounting/vouchers/          recorded vouchers, newest first
                                        (?start_date=&end_date=&voucher_type=)
GET  /api/accounting/vouchers/<id>/     one voucher (404 when missing)
POST /api/accounting/vouchers/          add_voucher (validated, immutable once stored)
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import VoucherFilter
from accounting.api.permissions import IsAccountingAdmin
from accounting.api.serializers.vouchers import VoucherCreateSerializer, VoucherSerializer
from accounting.models.voucher import Voucher
from accounting.services.exceptions import AccountingPermissionError, InvalidVoucherError
from accounting.services.voucher_service import add_voucher


class VoucherListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAccountingAdmin]
    serializer_class = VoucherCreateSerializer
    queryset = Voucher.objects.select_related("debit_account", "credit_account").order_by("-date", "-id")
    filterset_class = VoucherFilter

    @extend_schema(
        tags=["accounting"],
        responses=VoucherSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return Response(VoucherSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=VoucherCreateSerializer,
        responses={201: VoucherSerializer, 400: dict, 403: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            voucher = add_voucher(
                user=request.user,
                date=data.get("date"),
                voucher_type=data["voucher_type"],
                amount=data["amount"],
                debit_account=data["debit_account"],
                credit_account=data["credit_account"],
                narration=data["narration"],
            )
        except AccountingPermissionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidVoucherError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VoucherSerializer(voucher).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["accounting"], responses={200: VoucherSerializer, 404: dict})
class VoucherDetailView(RetrieveAPIView):
    permission_classes = [IsAuthenticated, IsAccountingAdmin]
    serializer_class = VoucherSerializer
    queryset = Voucher.objects.select_related("debit_account", "credit_account")
