"""Run-start validation rules for replacer options."""

from __future__ import annotations

import codecs
import os
import re
from pathlib import Path

from cdn_replacer.errors import ConfigurationError

# Absolute http(s) origin or protocol-relative "//host".
CDN_PREFIX_PATTERN = re.compile(r"^(?:https?:)?//[^/\s]", re.IGNORECASE)


def validate_cdn_prefix(value: str | None) -> str:
    """Return the CDN prefix unchanged or raise if it does not look like a URL."""

    if value is None or value.strip() == "":
        raise ConfigurationError("cdn_prefix is required")
    if not CDN_PREFIX_PATTERN.match(value):
        raise ConfigurationError(f"cdn_prefix must be a url (http://, https:// or //), got {value!r}")
    return value


def require_static_root(path: Path) -> Path:
    """Ensure the static-asset root exists, is a directory and can be listed."""

    if not path.exists():
        raise ConfigurationError(f"static_resource_directory does not exist: {path}")
    if not path.is_dir():
        raise ConfigurationError(f"static_resource_directory is not a directory: {path}")
    if not os.access(path, os.R_OK | os.X_OK):
        raise ConfigurationError(f"static_resource_directory is not readable: {path}")
    return path


def validate_encoding(encoding: str) -> str:
    """Return the canonical codec name for ``encoding`` or raise if Python does not know it."""

    try:
        return codecs.lookup(encoding).name
    except LookupError as exc:
        raise ConfigurationError(f"Unknown artifact encoding: {encoding!r}") from exc
