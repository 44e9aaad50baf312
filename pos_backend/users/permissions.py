# users/permissions.py

from rest_framework.permissions import BasePermission

from users.models import ROLE_ADMIN, STAFF_ROLES


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {ROLE_ADMIN}


class IsStaff(HasRole):
    """
    Any staff member:
    - admin
    - manager
    - cashier
    """

    allowed_roles = set(STAFF_ROLES)
