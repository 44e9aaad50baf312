# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

CHART OF ACCOUNTS API

GET  /api/accounting/accounts/   chart rows, ordered by code
POST /api/accounting/accounts/   add_account (admin only, unique name)
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.permissions import IsAccountingAdmin
from accounting.api.serializers.accounts import AccountCreateSerializer, AccountListSerializer
from accounting.models.account import Account
from accounting.services.account_service import add_account
from accounting.services.exceptions import AccountCreationError, AccountingPermissionError


class AccountListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAccountingAdmin]
    serializer_class = AccountCreateSerializer

    @extend_schema(
        tags=["accounting"],
        responses=AccountListSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = Account.objects.order_by("code")
        return Response(AccountListSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountCreateSerializer,
        responses={201: AccountListSerializer, 400: dict, 403: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            account = add_account(
                user=request.user,
                name=data["name"],
                account_type=data["account_type"],
                code=data.get("code", ""),
            )
        except AccountingPermissionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except AccountCreationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AccountListSerializer(account).data, status=status.HTTP_201_CREATED)
