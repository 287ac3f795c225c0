"""Tests for config.Settings."""

import os
import unittest
from unittest.mock import patch

import support  # noqa: F401

from pydantic import ValidationError

from config import ConfigurationError, Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.gemini_model, "gemini-2.5-flash")
        self.assertEqual(settings.default_font, "Montserrat")
        self.assertFalse(settings.prefers_dark)
        self.assertEqual(settings.copy_ack_seconds, 2.0)

    def test_api_key_from_either_variable(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "gemini"}, clear=True):
            self.assertEqual(Settings(_env_file=None).require_api_key(), "gemini")
        with patch.dict(os.environ, {"API_KEY": "legacy"}, clear=True):
            self.assertEqual(Settings(_env_file=None).require_api_key(), "legacy")

    def test_missing_api_key(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        with self.assertRaises(ConfigurationError):
            settings.require_api_key()

    def test_color_scheme_from_environment(self):
        with patch.dict(os.environ, {"PREFERS_COLOR_SCHEME": " Dark "}, clear=True):
            self.assertTrue(Settings(_env_file=None).prefers_dark)

    def test_invalid_color_scheme(self):
        with self.assertRaises(ValidationError):
            Settings(prefers_color_scheme="sepia", _env_file=None)

    def test_allowed_origins_parsing(self):
        settings = Settings(cors_allowed_origins="https://a.example, ,https://b.example", _env_file=None)
        self.assertEqual(settings.allowed_origins, ["https://a.example", "https://b.example"])


if __name__ == "__main__":
    unittest.main()
