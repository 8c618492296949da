"""Content rewriting and run reporting."""

from cdn_replacer.rewrite.content import (
    QUOTE_CHARACTERS,
    ArtifactResult,
    RewriteOutcome,
    build_prefix_pattern,
    escape_resource_name,
    read_artifact_text,
    rewrite_artifact,
    rewrite_content,
)
from cdn_replacer.rewrite.report import RunSummary, accumulate_summary, format_summary, reduce_results
from cdn_replacer.rewrite.writer import write_text_atomically

__all__ = [
    "QUOTE_CHARACTERS",
    "ArtifactResult",
    "RewriteOutcome",
    "build_prefix_pattern",
    "escape_resource_name",
    "read_artifact_text",
    "rewrite_artifact",
    "rewrite_content",
    "RunSummary",
    "accumulate_summary",
    "format_summary",
    "reduce_results",
    "write_text_atomically",
]
