"""Derive rewritable resource prefixes from the static-asset root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from cdn_replacer.errors import ConfigurationError
from cdn_replacer.validate.rules import require_static_root

LOGGER = logging.getLogger(__name__)


def index_resource_prefixes(static_root: Path, logger: logging.Logger | None = None) -> tuple[str, ...]:
    """Return ``/<name>`` for every immediate entry (file or directory) of ``static_root``.

    Only top-level names are indexed. Quoted strings that start with ``/`` but
    do not begin with one of these names are never rewritten.
    """

    effective_logger = logger or LOGGER
    require_static_root(static_root)
    try:
        with os.scandir(static_root) as entries:
            names = sorted(entry.name for entry in entries)
    except OSError as exc:
        raise ConfigurationError(f"static_resource_directory is not readable: {static_root} ({exc})") from exc

    prefixes = tuple(f"/{name}" for name in names)
    effective_logger.debug("prefixes.indexed static_root=%s count=%s", static_root, len(prefixes))
    return prefixes
