"""Resolve the build mode and the artifact exclusion rule derived from it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from cdn_replacer.config import AppSettings
from cdn_replacer.utils.paths import normalize_path

DEFAULT_SSR_MANIFEST_GLOB = "**/ssr-manifest.json"
EXCLUDE_EVERYTHING: tuple[str, ...] = ("**",)
EXCLUDE_NOTHING: tuple[str, ...] = ()


class BuildMode(str, Enum):
    """Classification of the current build output."""

    DEFAULT = "default"
    CLIENT_WITH_MANIFEST = "client_with_manifest"
    SERVER_BUNDLE = "server_bundle"


@dataclass(frozen=True, slots=True)
class BuildModeContext:
    """Resolved inputs for artifact selection."""

    out_dir: Path
    mode: BuildMode
    manifest_glob: str | None = None
    ignore: tuple[str, ...] | None = None


def resolve_build_mode(ssr_manifest: bool | str | None, ssr: bool | str | None) -> BuildMode:
    """Map the two build signals to a mode; the manifest signal is checked first."""

    if ssr_manifest:
        return BuildMode.CLIENT_WITH_MANIFEST
    if ssr:
        return BuildMode.SERVER_BUNDLE
    return BuildMode.DEFAULT


def manifest_glob_for(ssr_manifest: bool | str | None) -> str:
    """Return the exclusion glob for the SSR manifest emitted by a client build."""

    if isinstance(ssr_manifest, str) and ssr_manifest.strip():
        return ssr_manifest.strip().replace("\\", "/").lstrip("/")
    return DEFAULT_SSR_MANIFEST_GLOB


def build_mode_context(
    out_dir: Path,
    *,
    ssr_manifest: bool | str | None = False,
    ssr: bool | str | None = False,
    ignore: Sequence[str] | None = None,
) -> BuildModeContext:
    """Compute the build mode once from raw host-build signals."""

    mode = resolve_build_mode(ssr_manifest, ssr)
    return BuildModeContext(
        out_dir=normalize_path(out_dir),
        mode=mode,
        manifest_glob=manifest_glob_for(ssr_manifest) if mode is BuildMode.CLIENT_WITH_MANIFEST else None,
        ignore=tuple(ignore) if ignore is not None else None,
    )


def context_from_settings(settings: AppSettings) -> BuildModeContext:
    """Build the mode context from loaded settings."""

    return build_mode_context(
        settings.build.out_dir,
        ssr_manifest=settings.build.ssr_manifest,
        ssr=settings.build.ssr,
        ignore=settings.replacer.ignore,
    )


def resolve_exclusion(context: BuildModeContext) -> tuple[str, ...]:
    """Return exclusion globs; explicit ignore patterns override the build mode."""

    if context.ignore is not None:
        return context.ignore

    match context.mode:
        case BuildMode.CLIENT_WITH_MANIFEST:
            return (context.manifest_glob or DEFAULT_SSR_MANIFEST_GLOB,)
        case BuildMode.SERVER_BUNDLE:
            return EXCLUDE_EVERYTHING
        case BuildMode.DEFAULT:
            return EXCLUDE_NOTHING
    raise ValueError(f"Unsupported build mode: {context.mode!r}")
