# pos/api/serializers.py

from rest_framework import serializers

from pos.models import Expense, InventoryItem, Sale


class SaleSerializer(serializers.ModelSerializer):
    """
    Totals may be negative: returns are recorded as reversing rows.
    """

    class Meta:
        model = Sale
        fields = [
            "id",
            "timestamp",
            "total",
            "profit",
            "payment_method",
            "customer_name",
            "created_at",
        ]
        read_only_fields = ("id", "created_at")

    def validate_payment_method(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("payment_method is required")
        return v

    def validate_customer_name(self, value):
        return (value or "").strip()


class ExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = [
            "id",
            "timestamp",
            "description",
            "amount",
            "created_at",
        ]
        read_only_fields = ("id", "created_at")

    def validate_amount(self, value):
        if value is None:
            raise serializers.ValidationError("amount is required")
        if value <= 0:
            raise serializers.ValidationError("amount must be > 0")
        return value

    def validate_description(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("description is required")
        return v


class InventoryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "sku",
            "name",
            "category",
            "stock",
            "cost_price",
            "selling_price",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_sku(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("sku is required")
        return v
