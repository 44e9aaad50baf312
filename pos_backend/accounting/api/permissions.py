# accounting/api/permissions.py

from users.permissions import IsAdmin


class IsAccountingAdmin(IsAdmin):
    """
    Books are visible to accounting admins only: role=admin, plus superusers
    whatever their role.
    """

    message = "You do not have permission to view accounting data."

    def has_permission(self, request, view):
        if super().has_permission(request, view):
            return True
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and user.is_superuser)
