"""Static inputs computed once per run: resource prefixes and build mode."""

from cdn_replacer.resources.modes import (
    DEFAULT_SSR_MANIFEST_GLOB,
    BuildMode,
    BuildModeContext,
    build_mode_context,
    context_from_settings,
    resolve_build_mode,
    resolve_exclusion,
)
from cdn_replacer.resources.prefixes import index_resource_prefixes

__all__ = [
    "DEFAULT_SSR_MANIFEST_GLOB",
    "BuildMode",
    "BuildModeContext",
    "build_mode_context",
    "context_from_settings",
    "resolve_build_mode",
    "resolve_exclusion",
    "index_resource_prefixes",
]
