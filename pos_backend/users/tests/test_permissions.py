# users/tests/test_permissions.py

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIClient, APIRequestFactory

from users.permissions import IsAdmin, IsStaff

User = get_user_model()


class PermissionRoleTests(TestCase):
    """
    Tests for role-based permissions.

    GUARANTEES:
    - Correct role access
    - No privilege escalation
    - Anonymous users denied everywhere
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.manager = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        self.cashier = User.objects.create_user(email="cashier@example.com", password="pass", role="cashier")

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user=None):
        request = self.factory.get("/")
        request.user = user
        return request

    def test_admin_permissions(self):
        request = self._request_for(self.admin)

        self.assertTrue(IsAdmin().has_permission(request, None))
        self.assertTrue(IsStaff().has_permission(request, None))

    def test_manager_permissions(self):
        request = self._request_for(self.manager)

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertTrue(IsStaff().has_permission(request, None))

    def test_cashier_permissions(self):
        request = self._request_for(self.cashier)

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertTrue(IsStaff().has_permission(request, None))

    def test_anonymous_denied(self):
        request = self._request_for(AnonymousUser())

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertFalse(IsStaff().has_permission(request, None))


class UserModelTests(TestCase):
    def test_email_is_normalized_and_role_defaults_to_cashier(self):
        user = User.objects.create_user(email="Jane@EXAMPLE.com", password="pass")

        self.assertEqual(user.email, "Jane@example.com")
        self.assertEqual(user.role, "cashier")
        self.assertFalse(user.is_staff)

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="pass")

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(email="root@example.com", password="pass")

        self.assertEqual(user.role, "admin")
        self.assertTrue(user.is_superuser)


class MeViewTests(TestCase):
    def test_me_returns_role(self):
        user = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        client = APIClient()
        client.force_authenticate(user)

        res = client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["role"], "manager")

    def test_jwt_login_with_email(self):
        User.objects.create_user(email="admin@example.com", password="s3cret-pass", role="admin")
        client = APIClient()

        res = client.post(
            "/api/auth/jwt/create/",
            {"email": "admin@example.com", "password": "s3cret-pass"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.data)
