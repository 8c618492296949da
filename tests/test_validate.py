from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cdn_replacer.errors import ConfigurationError
from cdn_replacer.validate.rules import require_static_root, validate_cdn_prefix, validate_encoding


class ValidateCdnPrefixTests(unittest.TestCase):
    def test_accepts_http_https_and_protocol_relative_origins(self) -> None:
        for value in (
            "https://cdn.example.com",
            "http://cdn.example.com/assets",
            "HTTPS://CDN.EXAMPLE.COM",
            "//cdn.example.com",
        ):
            self.assertEqual(validate_cdn_prefix(value), value)

    def test_rejects_values_that_are_not_urls(self) -> None:
        for value in ("ftp:example", "ftp://cdn.example.com", "png", "/static", "https://", "h", "cdn.example.com"):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    validate_cdn_prefix(value)

    def test_missing_prefix_is_rejected(self) -> None:
        for value in (None, "", "   "):
            with self.assertRaises(ConfigurationError):
                validate_cdn_prefix(value)

    def test_configuration_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            validate_cdn_prefix("ftp:example")


class ValidateEncodingTests(unittest.TestCase):
    def test_known_encoding_is_canonicalised(self) -> None:
        self.assertEqual(validate_encoding("UTF8"), "utf-8")

    def test_unknown_encoding_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            validate_encoding("not-a-codec")


class RequireStaticRootTests(unittest.TestCase):
    def test_existing_directory_passes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(require_static_root(Path(tmp)), Path(tmp))

    def test_missing_directory_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigurationError):
                require_static_root(Path(tmp) / "missing")


if __name__ == "__main__":
    unittest.main()
