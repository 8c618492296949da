"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from cdn_replacer.errors import ConfigurationError

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "CDN_REPLACER_SETTINGS_FILE"
DEFAULT_STATIC_RESOURCE_DIRECTORY = Path("public")
DEFAULT_OUT_DIR = Path("dist")

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"", "0", "false", "no", "off"}


class ReplacerConfig(BaseModel):
    """Options controlling which references are rewritten and how."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    cdn_prefix: str | None = Field(default=None, validation_alias=AliasChoices("cdn_prefix", "cdnPrefix"))
    static_resource_directory: Path = Field(
        default=DEFAULT_STATIC_RESOURCE_DIRECTORY,
        validation_alias=AliasChoices("static_resource_directory", "staticResourceDirectory"),
    )
    ignore: list[str] | None = None
    encoding: str = "utf-8"
    workers: int = Field(default=1, ge=1)


class BuildConfig(BaseModel):
    """Build-output metadata delivered by the host build pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    out_dir: Path = Field(default=DEFAULT_OUT_DIR, validation_alias=AliasChoices("out_dir", "outDir"))
    ssr_manifest: bool | str = Field(default=False, validation_alias=AliasChoices("ssr_manifest", "ssrManifest"))
    ssr: bool | str = False

    @field_validator("ssr_manifest", "ssr", mode="before")
    @classmethod
    def coerce_flag_strings(cls, value: object) -> object:
        # Env vars arrive as strings; only non-boolean text names a manifest path.
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return value


class PathsConfig(BaseModel):
    """Optional filesystem locations outside the build output."""

    log_file: Path | None = None


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    replacer: ReplacerConfig = Field(default_factory=ReplacerConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    model_config = SettingsConfigDict(
        env_prefix="CDN_REPLACER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")

    def resolved(self, project_root: Path) -> "AppSettings":
        """Return a copy with project-relative paths resolved to absolute paths."""

        def _absolute(value: Path) -> Path:
            return value if value.is_absolute() else (project_root / value).resolve()

        replacer = self.replacer.model_copy(
            update={"static_resource_directory": _absolute(self.replacer.static_resource_directory)}
        )
        build = self.build.model_copy(update={"out_dir": _absolute(self.build.out_dir)})
        log_file = self.paths.log_file
        paths = self.paths.model_copy(update={"log_file": _absolute(log_file) if log_file is not None else None})
        return self.model_copy(update={"replacer": replacer, "build": build, "paths": paths})


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides.

    Relative paths are resolved against the project root, which is the parent
    of the ``configs/`` directory holding the settings file.
    """

    settings_file = resolve_settings_file(config_file)
    project_root = settings_file.parent.parent.resolve()
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    except (ValidationError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Invalid settings in {settings_file}: {exc}") from exc
    finally:
        AppSettings._yaml_file_override = None
    return settings.resolved(project_root=project_root)
