from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.decorators import SESSION_KEY


@override_settings(BOARD_ADMIN_USERNAME="dosen", BOARD_ADMIN_PASSWORD="rahasia")
class AdminLoginTests(TestCase):
    def test_login_page_renders(self):
        response = self.client.get(reverse("accounts:login"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Silakan login untuk melanjutkan")

    def test_valid_credentials_open_panel(self):
        response = self.client.post(
            reverse("accounts:login"), {"username": "dosen", "password": "rahasia"}
        )
        self.assertRedirects(response, reverse("groups:panel"))
        self.assertTrue(self.client.session[SESSION_KEY])

    def test_invalid_credentials(self):
        with self.assertLogs("accounts.views", "WARNING"):
            response = self.client.post(
                reverse("accounts:login"), {"username": "dosen", "password": "salah"}
            )
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Username atau Password salah. Silakan coba lagi.")
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_redirects_to_next(self):
        response = self.client.post(
            reverse("accounts:login"),
            {"username": "dosen", "password": "rahasia", "next": reverse("group_parser:generate")},
        )
        self.assertRedirects(
            response, reverse("group_parser:generate"), fetch_redirect_response=False
        )

    def test_ignores_offsite_next(self):
        response = self.client.post(
            reverse("accounts:login"),
            {"username": "dosen", "password": "rahasia", "next": "https://example.org/"},
        )
        self.assertRedirects(response, reverse("groups:panel"), fetch_redirect_response=False)


class AdminLogoutTests(TestCase):
    def test_logout_closes_session(self):
        session = self.client.session
        session[SESSION_KEY] = True
        session.save()

        response = self.client.post(reverse("accounts:logout"))
        self.assertRedirects(response, reverse("students:home"))
        self.assertNotIn(SESSION_KEY, self.client.session)
        self.assertEqual(self.client.get(reverse("groups:panel")).status_code, 302)

    def test_logout_requires_post(self):
        self.assertEqual(self.client.get(reverse("accounts:logout")).status_code, 405)

    def test_admin_link_follows_session(self):
        self.assertContains(self.client.get(reverse("students:home")), "Login Admin")
        session = self.client.session
        session[SESSION_KEY] = True
        session.save()
        self.assertContains(self.client.get(reverse("students:home")), "Admin Dashboard")
