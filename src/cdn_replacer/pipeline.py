"""Run orchestration for rewriting build artifacts to CDN references."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Iterator, Sequence
from uuid import uuid4

from cdn_replacer.config import AppSettings
from cdn_replacer.resources.modes import BuildMode, context_from_settings, resolve_exclusion
from cdn_replacer.resources.prefixes import index_resource_prefixes
from cdn_replacer.rewrite.content import ArtifactResult, rewrite_artifact
from cdn_replacer.rewrite.report import RunSummary, accumulate_summary, format_summary, reduce_results
from cdn_replacer.scan.artifacts import scan_artifacts
from cdn_replacer.utils.paths import relative_posix
from cdn_replacer.validate.rules import validate_cdn_prefix, validate_encoding

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReplacerRunOptions:
    """Runtime options for one rewrite run."""

    dry_run: bool = False
    progress_every: int = 100
    workers: int | None = None


@dataclass(frozen=True, slots=True)
class ReplacerRunResult:
    """Return object for rewrite run outcomes."""

    run_id: str
    skipped: bool
    summary: RunSummary
    dry_run: bool = False
    out_dir: Path | None = None
    mode: BuildMode | None = None
    prefixes: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    results: tuple[ArtifactResult, ...] = ()

    @property
    def summary_line(self) -> str:
        if self.skipped:
            return "cdn replacer disabled; nothing rewritten"
        return format_summary(self.summary)


def _iter_results_sequential(
    artifacts: Sequence[Path],
    rewrite_one: Callable[[Path], ArtifactResult],
) -> Iterator[ArtifactResult]:
    for artifact_path in artifacts:
        yield rewrite_one(artifact_path)


def _iter_results_parallel(
    artifacts: Sequence[Path],
    rewrite_one: Callable[[Path], ArtifactResult],
    workers: int,
) -> Iterator[ArtifactResult]:
    # Each task owns one file's read/rewrite/write; results come back in scan order.
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cdn-replacer-rewrite")
    try:
        yield from executor.map(rewrite_one, artifacts)
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)


def run_cdn_replacer(
    settings: AppSettings,
    *,
    options: ReplacerRunOptions | None = None,
    logger: logging.Logger | None = None,
) -> ReplacerRunResult:
    """Rewrite quoted static-asset references in the build output to the CDN origin.

    Validation and scanning failures are raised before any artifact is read.
    A read or write failure on one artifact aborts the rest of the run; files
    already processed stay rewritten.
    """

    effective_logger = logger or LOGGER
    run_options = options or ReplacerRunOptions()
    progress_every = max(1, run_options.progress_every)
    run_id = f"cdn-replacer-{uuid4().hex[:12]}"
    replacer = settings.replacer

    if not replacer.enabled:
        effective_logger.info("cdn_replacer.skipped run_id=%s reason=disabled", run_id)
        return ReplacerRunResult(run_id=run_id, skipped=True, summary=RunSummary(), dry_run=run_options.dry_run)

    cdn_prefix = validate_cdn_prefix(replacer.cdn_prefix)
    encoding = validate_encoding(replacer.encoding)
    prefixes = index_resource_prefixes(replacer.static_resource_directory, logger=effective_logger)
    context = context_from_settings(settings)
    exclude = resolve_exclusion(context)
    workers = max(1, run_options.workers if run_options.workers is not None else replacer.workers)

    started_mono = time.monotonic()
    artifacts = scan_artifacts(context.out_dir, exclude, logger=effective_logger)
    files_selected_total = len(artifacts)

    effective_logger.info(
        "cdn_replacer.start run_id=%s out_dir=%s mode=%s prefixes=%s exclude=%s artifacts=%s workers=%s dry_run=%s",
        run_id,
        context.out_dir,
        context.mode.value,
        len(prefixes),
        list(exclude),
        files_selected_total,
        workers,
        run_options.dry_run,
    )

    rewrite_one = partial(
        rewrite_artifact,
        prefixes=prefixes,
        cdn_prefix=cdn_prefix,
        encoding=encoding,
        dry_run=run_options.dry_run,
        logger=effective_logger,
    )
    if workers > 1 and files_selected_total > 1:
        result_iter = _iter_results_parallel(artifacts, rewrite_one, min(workers, files_selected_total))
    else:
        result_iter = _iter_results_sequential(artifacts, rewrite_one)

    running = RunSummary()
    results: list[ArtifactResult] = []
    for processed_idx, result in enumerate(result_iter, start=1):
        results.append(result)
        running = accumulate_summary(running, result)
        if result.changed:
            display_path = f"{context.out_dir.name}/{relative_posix(result.path, context.out_dir)}"
            effective_logger.info("%s: %s", "Would update" if run_options.dry_run else "Updated", display_path)
        if processed_idx % progress_every == 0 or processed_idx == files_selected_total:
            effective_logger.debug(
                "cdn_replacer.progress processed=%s/%s files_changed=%s replacements=%s elapsed_sec=%.2f",
                processed_idx,
                files_selected_total,
                running.files_changed,
                running.replacements,
                time.monotonic() - started_mono,
            )

    summary = reduce_results(results, duration_sec=time.monotonic() - started_mono)
    effective_logger.info(format_summary(summary))
    effective_logger.info("cdn_replacer.complete run_id=%s summary=%s", run_id, summary.as_dict())

    return ReplacerRunResult(
        run_id=run_id,
        skipped=False,
        summary=summary,
        dry_run=run_options.dry_run,
        out_dir=context.out_dir,
        mode=context.mode,
        prefixes=prefixes,
        exclude=exclude,
        results=tuple(results),
    )
