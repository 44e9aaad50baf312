# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting import derivation
from accounting.models.account import Account


class AccountListSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for the chart of accounts.
    UI needs: code, name, type (and id for keys).
    """

    class Meta:
        model = Account
        fields = ("id", "code", "name", "account_type", "is_system")
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    """
    Input serializer (Swagger-visible).
    Type / duplicate / blank checks live in account_service so the message
    reaches the caller ("Asset" and "asset" are both accepted there).
    """

    name = serializers.CharField(allow_blank=True, max_length=150)
    account_type = serializers.CharField(help_text="One of: " + ", ".join(derivation.ACCOUNT_TYPES))
    code = serializers.CharField(required=False, allow_blank=True, max_length=10)
