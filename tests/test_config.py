"""Tests for settings and the configuration manager."""
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from plutus.config.manager import Config, ConfigManager
from plutus.config.settings import AppSettings
from plutus.ledger.preferences import API_KEY, PreferenceStore
from plutus.utils.exceptions import ConfigError


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_bundled_defaults(self):
        settings = AppSettings.load(Path(__file__).parent.parent / "src" / "plutus" / "config" / "config.yaml")
        self.assertEqual(settings.app_name, "Plutus")
        self.assertEqual(
            (settings.daily_window, settings.weekly_window, settings.monthly_window), (7, 4, 6)
        )
        self.assertEqual(settings.llm_model_name, "gemini-2.5-flash")

    def test_plutus_home_overrides_data_dir(self):
        settings = AppSettings.load(Path(__file__).parent.parent / "src" / "plutus" / "config" / "config.yaml")
        with mock.patch.dict(os.environ, {"PLUTUS_HOME": str(self.test_dir)}):
            self.assertEqual(settings.database_path, self.test_dir / "plutus.db")
            self.assertEqual(settings.exports_path, self.test_dir / "exports")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            AppSettings.load(self.test_dir / "absent.yaml")

    def test_missing_section(self):
        path = self.test_dir / "config.yaml"
        path.write_text("app:\n  name: Plutus\n  version: 1.0.0\n", encoding="utf-8")
        with self.assertRaises(ConfigError):
            AppSettings.load(path)


class TestConfigManager(unittest.TestCase):
    """Test ConfigManager functionality."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.preferences = PreferenceStore(self.test_dir / "prefs.db")
        self.config_manager = ConfigManager(self.preferences, model_name="gemini-test")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_unset_key_loads_empty(self):
        config = self.config_manager.load_config()
        self.assertEqual(config.gemini_api_key, "")
        self.assertFalse(config.has_api_key)

    def test_save_and_load_config(self):
        self.config_manager.save_config(Config(gemini_api_key=" test_key ", model_name="gemini-test"))

        loaded = self.config_manager.load_config()
        self.assertEqual(loaded.gemini_api_key, "test_key")
        self.assertEqual(loaded.model_name, "gemini-test")
        self.assertEqual(self.preferences.get_string(API_KEY), "test_key")

    def test_clear_config(self):
        self.config_manager.save_config(Config(gemini_api_key="test_key", model_name="gemini-test"))

        self.assertTrue(self.config_manager.clear_config())
        self.assertFalse(self.config_manager.load_config().has_api_key)
        self.assertIsNone(self.preferences.get_string(API_KEY))
        self.assertFalse(self.config_manager.clear_config())

    def test_validate_config_valid(self):
        is_valid, _ = self.config_manager.validate_config(Config("test_key", "gemini-test"))
        self.assertTrue(is_valid)

    def test_validate_config_missing_key(self):
        is_valid, message = self.config_manager.validate_config(Config("", "gemini-test"))
        self.assertFalse(is_valid)
        self.assertIn("API key", message)

    def test_validate_config_whitespace_in_key(self):
        is_valid, _ = self.config_manager.validate_config(Config("abc def", "gemini-test"))
        self.assertFalse(is_valid)


if __name__ == "__main__":
    unittest.main()
