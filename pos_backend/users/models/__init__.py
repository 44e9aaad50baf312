from .user import ROLE_ADMIN, ROLE_CASHIER, ROLE_MANAGER, STAFF_ROLES, User, UserManager

__all__ = [
    "User",
    "UserManager",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_CASHIER",
    "STAFF_ROLES",
]
