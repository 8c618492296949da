from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cdn_replacer.errors import ConfigurationError
from cdn_replacer.resources.prefixes import index_resource_prefixes


class IndexResourcePrefixesTests(unittest.TestCase):
    def test_files_and_directories_become_single_segment_prefixes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            static_root = Path(tmp)
            (static_root / "logo.png").write_bytes(b"\x89PNG")
            (static_root / "images").mkdir()
            (static_root / "images" / "nested.png").write_bytes(b"\x89PNG")

            prefixes = index_resource_prefixes(static_root)

            self.assertEqual(set(prefixes), {"/logo.png", "/images"})
            self.assertEqual(prefixes, ("/images", "/logo.png"))
            for prefix in prefixes:
                self.assertTrue(prefix.startswith("/"))
                self.assertNotIn("/", prefix[1:])

    def test_hidden_entries_are_indexed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            static_root = Path(tmp)
            (static_root / ".well-known").mkdir()
            (static_root / "favicon.ico").write_bytes(b"")

            self.assertEqual(index_resource_prefixes(static_root), ("/.well-known", "/favicon.ico"))

    def test_empty_root_yields_no_prefixes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(index_resource_prefixes(Path(tmp)), ())

    def test_missing_root_is_a_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigurationError):
                index_resource_prefixes(Path(tmp) / "public")

    def test_file_root_is_a_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            not_a_dir = Path(tmp) / "public"
            not_a_dir.write_text("x", encoding="utf-8")
            with self.assertRaises(ConfigurationError):
                index_resource_prefixes(not_a_dir)


if __name__ == "__main__":
    unittest.main()
