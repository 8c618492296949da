"""Exception hierarchy for CDN rewrite runs."""

from __future__ import annotations

from pathlib import Path


class CdnReplacerError(Exception):
    """Base class for fatal run errors surfaced to the invoking build."""


class ConfigurationError(CdnReplacerError, ValueError):
    """Raised for invalid options before any artifact is touched."""


class ScanError(CdnReplacerError, OSError):
    """Raised when the build output directory cannot be enumerated."""


class ArtifactIOError(CdnReplacerError, OSError):
    """Raised when a single artifact cannot be read or written back."""

    def __init__(self, path: Path, action: str, reason: str) -> None:
        super().__init__(f"Failed to {action} artifact {path}: {reason}")
        self.path = path
        self.action = action
