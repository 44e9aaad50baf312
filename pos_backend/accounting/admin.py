# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.voucher import Voucher

# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "is_system",
    )
    list_filter = ("account_type", "is_system")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("is_system", "created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("code", "name", "account_type"),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("is_system", "created_at", "updated_at"),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        # Identity is frozen after creation (Account.save enforces the same).
        if obj is not None:
            return self.readonly_fields + ("code", "name", "account_type")
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_system:
            return False
        return super().has_delete_permission(request, obj)


# ============================================================
# VOUCHER (READ-ONLY)
# ============================================================


@admin.register(Voucher)
class VoucherAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "date",
        "voucher_type",
        "amount",
        "debit_account",
        "credit_account",
        "narration",
    )
    list_filter = ("voucher_type", "date")
    search_fields = ("narration", "debit_account__name", "credit_account__name")
    ordering = ("-date",)

    readonly_fields = (
        "date",
        "voucher_type",
        "amount",
        "debit_account",
        "credit_account",
        "narration",
        "created_by",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
