"""Aggregate per-file rewrite results into a run summary."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable

from cdn_replacer.rewrite.content import ArtifactResult


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Totals for one rewrite run."""

    files_scanned: int = 0
    files_changed: int = 0
    replacements: int = 0
    duration_sec: float = 0.0

    def as_dict(self) -> dict[str, object]:
        return {
            "files_scanned": self.files_scanned,
            "files_changed": self.files_changed,
            "replacements": self.replacements,
            "duration_sec": round(self.duration_sec, 3),
        }


def accumulate_summary(summary: RunSummary, result: ArtifactResult) -> RunSummary:
    """Fold one artifact result into the running totals."""

    return replace(
        summary,
        files_scanned=summary.files_scanned + 1,
        files_changed=summary.files_changed + (1 if result.changed else 0),
        replacements=summary.replacements + result.replacements,
    )


def reduce_results(results: Iterable[ArtifactResult], duration_sec: float = 0.0) -> RunSummary:
    """Reduce all artifact results and stamp the elapsed time."""

    totals = reduce(accumulate_summary, results, RunSummary())
    return replace(totals, duration_sec=max(0.0, duration_sec))


def format_summary(summary: RunSummary) -> str:
    """Render the one-line human-readable run summary."""

    file_word = "file" if summary.files_changed == 1 else "files"
    replacement_word = "replacement" if summary.replacements == 1 else "replacements"
    return (
        f"Updated {summary.files_changed} {file_word}, "
        f"{summary.replacements} {replacement_word} in {summary.duration_sec:.2f}s"
    )
