"""Rewrite quoted resource references inside artifact text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from cdn_replacer.errors import ArtifactIOError
from cdn_replacer.rewrite.writer import write_text_atomically

LOGGER = logging.getLogger(__name__)

QUOTE_CHARACTERS = "\"'"

# Bytes that are not valid in the configured encoding round-trip unchanged.
TEXT_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class RewriteOutcome:
    """Original and rewritten text for one artifact."""

    original: str
    rewritten: str
    replacements: int

    @property
    def changed(self) -> bool:
        return self.rewritten != self.original


@dataclass(frozen=True, slots=True)
class ArtifactResult:
    """Per-file rewrite result fed to the run summary."""

    path: Path
    replacements: int
    changed: bool
    written: bool


def escape_resource_name(prefix: str) -> str:
    """Escape every character with special meaning to ``re`` so the prefix matches literally."""

    return re.escape(prefix)


@lru_cache(maxsize=1024)
def build_prefix_pattern(prefix: str) -> re.Pattern[str]:
    """Compile the pattern for a quoted literal starting with ``prefix``.

    Groups: opening quote, the full prefix, trailing characters up to the same
    closing quote on the same line.
    """

    return re.compile(rf"([{QUOTE_CHARACTERS}])({escape_resource_name(prefix)})(.*?)\1")


def rewrite_content(text: str, prefixes: Sequence[str], cdn_prefix: str) -> RewriteOutcome:
    """Prefix every quoted reference to one of ``prefixes`` with ``cdn_prefix``.

    A reference that already carries the CDN origin starts with the origin
    rather than ``/`` after its quote, so it is not matched a second time.
    """

    def _replace(match: re.Match[str]) -> str:
        quote, matched_prefix, trailing = match.group(1), match.group(2), match.group(3)
        return f"{quote}{cdn_prefix}{matched_prefix}{trailing}{quote}"

    rewritten = text
    replacements = 0
    for prefix in prefixes:
        rewritten, count = build_prefix_pattern(prefix).subn(_replace, rewritten)
        replacements += count
    return RewriteOutcome(original=text, rewritten=rewritten, replacements=replacements)


def read_artifact_text(path: Path, encoding: str = "utf-8") -> str:
    """Read artifact text without newline translation."""

    try:
        with path.open("r", encoding=encoding, errors=TEXT_ERRORS, newline="") as handle:
            return handle.read()
    except (OSError, UnicodeError) as exc:
        raise ArtifactIOError(path, "read", str(exc)) from exc


def rewrite_artifact(
    path: Path,
    prefixes: Sequence[str],
    cdn_prefix: str,
    *,
    encoding: str = "utf-8",
    dry_run: bool = False,
    logger: logging.Logger | None = None,
) -> ArtifactResult:
    """Read, rewrite, and write back one artifact when its content changed."""

    effective_logger = logger or LOGGER
    outcome = rewrite_content(read_artifact_text(path, encoding=encoding), prefixes, cdn_prefix)
    written = False
    if outcome.changed and not dry_run:
        write_text_atomically(path, outcome.rewritten, encoding=encoding, errors=TEXT_ERRORS)
        written = True
    if outcome.changed:
        effective_logger.debug("rewrite.file path=%s replacements=%s written=%s", path, outcome.replacements, written)
    return ArtifactResult(
        path=path,
        replacements=outcome.replacements,
        changed=outcome.changed,
        written=written,
    )
