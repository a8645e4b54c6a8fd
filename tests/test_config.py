import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from storefront.config import DEFAULT_SEED_PATH, Settings, load_seed_catalog, load_settings


class SettingsTestCase(unittest.TestCase):
    def test_defaults(self):
        cfg = load_settings()
        self.assertEqual(cfg.api_prefix, "/api")
        self.assertEqual(cfg.session_header, "x-session-id")
        self.assertEqual(cfg.anonymous_session, "anonymous")
        self.assertEqual(Path(cfg.seed_path), DEFAULT_SEED_PATH)

    def test_environment_overrides(self):
        env = {"STOREFRONT_API_PREFIX": "/v2", "STOREFRONT_PORT": "9001"}
        with mock.patch.dict(os.environ, env):
            cfg = load_settings()
        self.assertEqual(cfg.api_prefix, "/v2")
        self.assertEqual(cfg.port, 9001)

    def test_settings_use_storefront_prefix(self):
        self.assertEqual(Settings.model_config["env_prefix"], "STOREFRONT_")
        with mock.patch.dict(os.environ, {"STOREFRONT_SESSION_HEADER": "x-cart"}):
            self.assertEqual(Settings().session_header, "x-cart")


class SeedCatalogTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, text):
        path = Path(self.temp_dir.name) / "seed.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_bundled_catalog(self):
        data = load_seed_catalog(DEFAULT_SEED_PATH)
        self.assertEqual(len(data["categories"]), 6)
        self.assertEqual([m["id"] for m in data["medicines"]], ["med1", "med2", "med3", "med4"])
        self.assertEqual(len(data["reviews"]), 3)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_seed_catalog(Path(self.temp_dir.name) / "absent.yaml")

    def test_categories_required(self):
        with self.assertRaises(ValueError):
            load_seed_catalog(self._write("medicines: []\n"))

    def test_top_level_must_be_a_mapping(self):
        with self.assertRaises(ValueError):
            load_seed_catalog(self._write("- cat1\n- cat2\n"))

    def test_optional_sections_default_to_empty(self):
        data = load_seed_catalog(self._write("categories: []\n"))
        self.assertEqual(data["medicines"], [])
        self.assertEqual(data["reviews"], [])


if __name__ == "__main__":
    unittest.main()
