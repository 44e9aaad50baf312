# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import AccountCreateSerializer, AccountListSerializer
from accounting.api.serializers.vouchers import VoucherCreateSerializer, VoucherSerializer

__all__ = [
    "AccountListSerializer",
    "AccountCreateSerializer",
    "VoucherSerializer",
    "VoucherCreateSerializer",
]
