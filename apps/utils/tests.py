import tempfile
from pathlib import Path

from django.test import TestCase, override_settings
from rest_framework.test import APIClient


class TestSpaShell(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.dist = tempfile.TemporaryDirectory()
        self.addCleanup(self.dist.cleanup)
        (Path(self.dist.name) / "index.html").write_text("<div id=\"root\"></div>", encoding="utf-8")

    def test_client_routes_get_the_shell(self):
        with override_settings(SPA_DIST_DIR=Path(self.dist.name)):
            for url in ("/", "/admin", "/track/ORD-1"):
                response = self.client.get(url)
                self.assertEqual(response.status_code, 200)
                self.assertIn(b"root", b"".join(response.streaming_content))

    def test_built_assets_are_served(self):
        assets = Path(self.dist.name) / "assets"
        assets.mkdir()
        (assets / "app.js").write_text("console.log(\"dashboard\");", encoding="utf-8")

        with override_settings(SPA_DIST_DIR=Path(self.dist.name)):
            response = self.client.get("/assets/app.js")

        self.assertEqual(response.status_code, 200)
        self.assertIn("javascript", response["Content-Type"])
        self.assertEqual(b"".join(response.streaming_content), b"console.log(\"dashboard\");")

    def test_files_outside_the_build_are_not_served(self):
        (Path(self.dist.name) / "secret.txt").write_text("top secret", encoding="utf-8")
        dist = Path(self.dist.name) / "dist"
        dist.mkdir()
        (dist / "index.html").write_text("shell", encoding="utf-8")

        with override_settings(SPA_DIST_DIR=dist):
            response = self.client.get("/..%2Fsecret.txt")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(b"".join(response.streaming_content), b"shell")

    def test_missing_build(self):
        with override_settings(SPA_DIST_DIR=Path(self.dist.name) / "missing"):
            response = self.client.get("/")

        self.assertEqual(response.status_code, 404)

    def test_unknown_api_path_is_not_the_shell(self):
        with override_settings(SPA_DIST_DIR=Path(self.dist.name)):
            response = self.client.get("/api/does-not-exist")

        self.assertEqual(response.status_code, 404)
