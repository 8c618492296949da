from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cdn_replacer.config import DEFAULT_OUT_DIR, DEFAULT_STATIC_RESOURCE_DIRECTORY, BuildConfig, load_settings
from cdn_replacer.errors import ConfigurationError

SETTINGS_YAML = """
replacer:
  cdnPrefix: https://yaml.example.com
  staticResourceDirectory: web/public
  ignore:
    - "**/*.map"
build:
  outDir: web/dist
  ssrManifest: true
"""


def _clean_env() -> dict[str, str]:
    return {key: value for key, value in os.environ.items() if not key.startswith("CDN_REPLACER_")}


class LoadSettingsTests(unittest.TestCase):
    def test_yaml_values_accept_camel_case_and_resolve_paths_against_project_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            config_file = root / "configs" / "settings.yaml"
            config_file.parent.mkdir()
            config_file.write_text(SETTINGS_YAML, encoding="utf-8")

            with mock.patch.dict(os.environ, _clean_env(), clear=True):
                settings = load_settings(config_file)

            self.assertEqual(settings.replacer.cdn_prefix, "https://yaml.example.com")
            self.assertEqual(settings.replacer.static_resource_directory, root / "web" / "public")
            self.assertEqual(settings.replacer.ignore, ["**/*.map"])
            self.assertEqual(settings.build.out_dir, root / "web" / "dist")
            self.assertIs(settings.build.ssr_manifest, True)
            self.assertIs(settings.build.ssr, False)
            self.assertTrue(settings.replacer.enabled)

    def test_environment_overrides_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            config_file = root / "configs" / "settings.yaml"
            config_file.parent.mkdir()
            config_file.write_text(SETTINGS_YAML, encoding="utf-8")
            env = _clean_env()
            env.update(
                {
                    "CDN_REPLACER_REPLACER__CDN_PREFIX": "https://env.example.com",
                    "CDN_REPLACER_REPLACER__ENABLED": "false",
                    "CDN_REPLACER_BUILD__SSR": "true",
                }
            )

            with mock.patch.dict(os.environ, env, clear=True):
                settings = load_settings(config_file)

            self.assertEqual(settings.replacer.cdn_prefix, "https://env.example.com")
            self.assertFalse(settings.replacer.enabled)
            self.assertIs(settings.build.ssr, True)

    def test_missing_settings_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch.dict(os.environ, _clean_env(), clear=True):
                settings = load_settings(root / "configs" / "settings.yaml")

            self.assertIsNone(settings.replacer.cdn_prefix)
            self.assertEqual(settings.replacer.static_resource_directory, root / DEFAULT_STATIC_RESOURCE_DIRECTORY)
            self.assertEqual(settings.build.out_dir, root / DEFAULT_OUT_DIR)
            self.assertIsNone(settings.replacer.ignore)
            self.assertEqual(settings.replacer.workers, 1)
            self.assertIsNone(settings.paths.log_file)

    def test_invalid_values_raise_configuration_error(self) -> None:
        cases = {
            "zero workers": "replacer:\n  workers: 0\n",
            "ignore as a bare string": "replacer:\n  ignore: \"**/*.map\"\n",
            "malformed yaml": "replacer: [unclosed\n",
        }
        for label, text in cases.items():
            with self.subTest(label), tempfile.TemporaryDirectory() as tmp:
                config_file = Path(tmp) / "configs" / "settings.yaml"
                config_file.parent.mkdir()
                config_file.write_text(text, encoding="utf-8")

                with mock.patch.dict(os.environ, _clean_env(), clear=True):
                    with self.assertRaises(ConfigurationError) as ctx:
                        load_settings(config_file)

                self.assertIn(str(config_file), str(ctx.exception))

    def test_invalid_environment_value_raises_configuration_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env = _clean_env()
            env["CDN_REPLACER_REPLACER__WORKERS"] = "many"
            with mock.patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ConfigurationError):
                    load_settings(Path(tmp) / "configs" / "settings.yaml")


class BuildConfigTests(unittest.TestCase):
    def test_flag_strings_become_booleans(self) -> None:
        config = BuildConfig(ssr="no", ssr_manifest="1")
        self.assertIs(config.ssr, False)
        self.assertIs(config.ssr_manifest, True)

    def test_manifest_path_string_is_kept(self) -> None:
        config = BuildConfig(ssrManifest=".vite/ssr-manifest.json")
        self.assertEqual(config.ssr_manifest, ".vite/ssr-manifest.json")


if __name__ == "__main__":
    unittest.main()
