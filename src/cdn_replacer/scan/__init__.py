"""Artifact discovery under the build output directory."""

from cdn_replacer.scan.artifacts import EXCLUDE_GLOB_FLAGS, is_excluded, scan_artifacts

__all__ = [
    "EXCLUDE_GLOB_FLAGS",
    "is_excluded",
    "scan_artifacts",
]
