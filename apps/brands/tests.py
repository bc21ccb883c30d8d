from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework.test import APIClient

from apps.brands.models import Brand


class TestBrandList(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.zeta = Brand.objects.create(name="Zeta")
        self.acme = Brand.objects.create(name="Acme")

    def test_list_brands_by_name(self):
        response = self.client.get("/api/brands")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data,
            [{"id": self.acme.id, "name": "Acme"}, {"id": self.zeta.id, "name": "Zeta"}],
        )

    def test_brands_are_read_only(self):
        response = self.client.post("/api/brands", {"name": "Globex"}, format="json")

        self.assertEqual(response.status_code, 405)
        self.assertFalse(Brand.objects.filter(name="Globex").exists())


class TestSeedBrands(TestCase):
    def test_creates_missing_brands_only(self):
        Brand.objects.create(name="Acme")
        out = StringIO()

        call_command("seed_brands", names=["Acme", "Globex", " Initech ", "Globex"], stdout=out)

        self.assertEqual(sorted(Brand.objects.values_list("name", flat=True)), ["Acme", "Globex", "Initech"])
        self.assertIn("2 brand(s) created, 1 already present.", out.getvalue())

    def test_requires_names(self):
        with self.assertRaises(CommandError):
            call_command("seed_brands", stdout=StringIO())
