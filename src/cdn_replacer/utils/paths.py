"""Path and filesystem helper functions."""

from __future__ import annotations

from pathlib import Path


def normalize_path(path: Path | str) -> Path:
    """Return an absolute path with user and relative segments resolved."""

    return Path(path).expanduser().resolve(strict=False)


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""

    return path.relative_to(root).as_posix()
