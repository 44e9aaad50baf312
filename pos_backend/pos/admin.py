# pos/admin.py

from django.contrib import admin

from .models import Expense, InventoryItem, Sale

# =====================================================
# SALE
# =====================================================


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "timestamp",
        "total",
        "profit",
        "payment_method",
        "customer_name",
        "user",
    )
    list_filter = ("payment_method", "timestamp")
    search_fields = ("customer_name",)
    ordering = ("-timestamp",)
    readonly_fields = ("created_at",)


# =====================================================
# EXPENSE
# =====================================================


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("id", "timestamp", "description", "amount", "recorded_by")
    list_filter = ("timestamp",)
    search_fields = ("description",)
    ordering = ("-timestamp",)
    readonly_fields = ("created_at",)


# =====================================================
# INVENTORY
# =====================================================


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "category", "stock", "cost_price", "selling_price", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("sku", "name")
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at")
