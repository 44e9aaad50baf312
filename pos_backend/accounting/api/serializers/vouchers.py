# accounting/api/serializers/vouchers.py

from rest_framework import serializers

from accounting.models.voucher import Voucher


class VoucherSerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth).
    """

    reference = serializers.CharField(read_only=True)
    debit_account = serializers.CharField(source="debit_account.name", read_only=True)
    credit_account = serializers.CharField(source="credit_account.name", read_only=True)

    class Meta:
        model = Voucher
        fields = [
            "id",
            "reference",
            "date",
            "voucher_type",
            "amount",
            "debit_account",
            "credit_account",
            "narration",
            "created_at",
        ]
        read_only_fields = fields


class VoucherCreateSerializer(serializers.Serializer):
    """
    Input serializer (Swagger-visible).
    Business checks (amount > 0, distinct accounts, accounts in chart) run in voucher_service.
    """

    date = serializers.DateField(required=False, allow_null=True)
    voucher_type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    debit_account = serializers.CharField(allow_blank=True)
    credit_account = serializers.CharField(allow_blank=True)
    narration = serializers.CharField(allow_blank=True, max_length=255)

    def validate(self, attrs):
        for k in ("voucher_type", "debit_account", "credit_account", "narration"):
            attrs[k] = str(attrs.get(k) or "").strip()
        return attrs
