"""Shared utility helpers."""

from cdn_replacer.utils.paths import normalize_path, relative_posix

__all__ = [
    "normalize_path",
    "relative_posix",
]
