from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIClient

from apps.users.models import User


class TestUserCheck(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_no_users(self):
        response = self.client.get("/api/users/check")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"exists": False})

    def test_user_exists(self):
        User.objects.create(email="admin@example.com", password="x", is_admin=True)

        response = self.client.get("/api/users/check")

        self.assertEqual(response.data, {"exists": True})


class TestAdminBootstrap(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_first_admin_is_created(self):
        response = self.client.post(
            "/api/admin/create",
            {"email": "Admin@Example.com", "password": "s3cret-pass"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["message"], "Admin user created successfully")
        self.assertEqual(response.data["user"]["email"], "admin@example.com")
        self.assertTrue(response.data["user"]["isAdmin"])
        self.assertNotIn("password", response.data["user"])

        user = User.objects.get()
        self.assertTrue(user.is_admin)
        self.assertTrue(user.first_admin)
        self.assertNotEqual(user.password, "s3cret-pass")
        self.assertTrue(user.check_password("s3cret-pass"))

    def test_second_bootstrap_is_refused(self):
        self.client.post("/api/admin/create", {"email": "admin@example.com", "password": "one"}, format="json")

        response = self.client.post(
            "/api/admin/create",
            {"email": "other@example.com", "password": "two"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Admin user already exists")
        self.assertEqual(User.objects.count(), 1)

    def test_concurrent_bootstrap_loses_on_constraint(self):
        self.client.post("/api/admin/create", {"email": "admin@example.com", "password": "one"}, format="json")

        # The loser passed the existence check before the winner committed.
        with patch.object(User.objects, "exists", return_value=False):
            response = self.client.post(
                "/api/admin/create",
                {"email": "other@example.com", "password": "two"},
                format="json",
            )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Admin user already exists")
        self.assertEqual(User.objects.count(), 1)

    def test_second_bootstrap_is_refused_before_validation(self):
        self.client.post("/api/admin/create", {"email": "admin@example.com", "password": "one"}, format="json")

        response = self.client.post("/api/admin/create", {"email": "not-an-email"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Admin user already exists")

    def test_password_longer_than_bcrypt_limit_is_rejected(self):
        response = self.client.post(
            "/api/admin/create",
            {"email": "admin@example.com", "password": "y" * 80},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.data["details"])
        self.assertFalse(User.objects.exists())

    def test_password_at_bcrypt_limit_is_accepted(self):
        response = self.client.post(
            "/api/admin/create",
            {"email": "admin@example.com", "password": "y" * 72},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(User.objects.get().check_password("y" * 72))

    def test_missing_credentials(self):
        response = self.client.post("/api/admin/create", {"email": "admin@example.com"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.data["details"])
        self.assertFalse(User.objects.exists())


class TestLogin(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User(email="admin@example.com", is_admin=True, first_admin=True)
        self.user.set_password("correct-horse")
        self.user.save()

    def test_login(self):
        response = self.client.post(
            "/api/login",
            {"email": "admin@example.com", "password": "correct-horse"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"id": self.user.id, "email": "admin@example.com", "isAdmin": True})

    def test_login_ignores_email_case(self):
        response = self.client.post(
            "/api/login",
            {"email": "ADMIN@example.com", "password": "correct-horse"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)

    def test_wrong_password_and_unknown_email_look_the_same(self):
        wrong_password = self.client.post(
            "/api/login",
            {"email": "admin@example.com", "password": "wrong"},
            format="json",
        )
        unknown_email = self.client.post(
            "/api/login",
            {"email": "nobody@example.com", "password": "correct-horse"},
            format="json",
        )

        self.assertEqual(wrong_password.status_code, 400)
        self.assertEqual(wrong_password.status_code, unknown_email.status_code)
        self.assertEqual(wrong_password.data, unknown_email.data)
        self.assertEqual(wrong_password.data, {"error": "Invalid credentials"})

    def test_overlong_password_is_invalid_credentials(self):
        for email in ("admin@example.com", "nobody@example.com"):
            response = self.client.post(
                "/api/login",
                {"email": email, "password": "x" * 80},
                format="json",
            )

            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.data, {"error": "Invalid credentials"})

    def test_login_issues_no_token(self):
        response = self.client.post(
            "/api/login",
            {"email": "admin@example.com", "password": "correct-horse"},
            format="json",
        )

        self.assertNotIn("token", response.data)
        self.assertNotIn("sessionid", response.cookies)
