"""Enumerate build artifacts eligible for CDN rewriting."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Sequence

from wcmatch import glob

from cdn_replacer.errors import ScanError
from cdn_replacer.utils.paths import normalize_path, relative_posix

LOGGER = logging.getLogger(__name__)

# Minimatch-style matching: "**" spans zero or more directories and wildcards match dot names.
EXCLUDE_GLOB_FLAGS = glob.GLOBSTAR | glob.DOTGLOB | glob.BRACE | glob.FORCEUNIX


def is_excluded(relative_path: str, exclude: Sequence[str]) -> bool:
    """Return whether a POSIX path relative to the output directory matches any exclusion glob."""

    patterns = [pattern for pattern in exclude if pattern]
    if not patterns:
        return False
    return glob.globmatch(relative_path, patterns, flags=EXCLUDE_GLOB_FLAGS)


def _raise_scan_error(exc: OSError) -> None:
    raise ScanError(f"Output directory is not readable: {exc.filename} ({exc.strerror or exc})") from exc


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield every non-directory entry under ``root``; any unlistable directory is fatal."""

    for dir_path, _dir_names, file_names in os.walk(root, onerror=_raise_scan_error):
        for file_name in file_names:
            yield Path(dir_path) / file_name


def scan_artifacts(
    out_dir: Path,
    exclude: Sequence[str] = (),
    logger: logging.Logger | None = None,
) -> list[Path]:
    """Recursively list non-directory files under ``out_dir``, hidden names included.

    Paths are absolute, sorted, and filtered by ``exclude``.
    """

    effective_logger = logger or LOGGER
    root = normalize_path(out_dir)
    if not root.exists():
        raise ScanError(f"Output directory does not exist: {root}")
    if not root.is_dir():
        raise ScanError(f"Output path is not a directory: {root}")

    if not os.access(root, os.R_OK | os.X_OK):
        raise ScanError(f"Output directory is not readable: {root}")

    artifacts: list[Path] = []
    excluded_count = 0
    for file_path in sorted(_walk_files(root)):
        if not file_path.is_file():
            continue
        if is_excluded(relative_posix(file_path, root), exclude):
            excluded_count += 1
            continue
        artifacts.append(file_path)

    effective_logger.debug(
        "scan.complete out_dir=%s artifacts=%s excluded=%s",
        root,
        len(artifacts),
        excluded_count,
    )
    return artifacts
