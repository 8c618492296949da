"""Atomic in-place replacement of artifact files."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from uuid import uuid4

from cdn_replacer.errors import ArtifactIOError


def _atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the same directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def write_text_atomically(path: Path, content: str, *, encoding: str = "utf-8", errors: str = "strict") -> Path:
    """Replace ``path`` with ``content`` keeping its permission bits.

    A symlinked artifact keeps its link; the content lands in the link target.
    """

    target_path = path.resolve() if path.is_symlink() else path
    temp_path = _atomic_temp_path(target_path)
    try:
        with temp_path.open("w", encoding=encoding, errors=errors, newline="") as handle:
            handle.write(content)
        shutil.copymode(target_path, temp_path)
        os.replace(temp_path, target_path)
    except (OSError, UnicodeError) as exc:
        raise ArtifactIOError(path, "write", str(exc)) from exc
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return path
