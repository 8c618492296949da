"""Typer CLI entrypoint for cdn_replacer."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from cdn_replacer.config import AppSettings, load_settings
from cdn_replacer.errors import CdnReplacerError
from cdn_replacer.logging_utils import configure_logging
from cdn_replacer.pipeline import ReplacerRunOptions, run_cdn_replacer
from cdn_replacer.resources.modes import context_from_settings, resolve_exclusion
from cdn_replacer.resources.prefixes import index_resource_prefixes
from cdn_replacer.scan.artifacts import scan_artifacts
from cdn_replacer.utils.paths import normalize_path, relative_posix

app = typer.Typer(
    add_completion=False,
    help="Rewrite static-asset references in a build output to a CDN origin.",
    no_args_is_help=True,
)

CONFIG_FILE_OPTION = typer.Option(
    None,
    "--config-file",
    help="Optional settings YAML path.",
    exists=False,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    verbose: bool = False,
) -> tuple[AppSettings, logging.Logger]:
    try:
        settings = load_settings(config_file=config_file)
    except CdnReplacerError as exc:
        raise _fail(logging.getLogger("cdn_replacer"), exc) from exc
    if configure:
        level = logging.DEBUG if verbose else logging.INFO
        logger = configure_logging(settings.paths.log_file, level=level)
    else:
        logger = logging.getLogger("cdn_replacer")
    return settings, logger


def _parse_flag_or_path(value: str | None, option_name: str) -> bool | str | None:
    if value is None:
        return None
    normalized = value.strip()
    lowered = normalized.lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    if normalized == "":
        raise typer.BadParameter(f"{option_name} must be true, false, or a manifest path.")
    return normalized


def _apply_overrides(
    settings: AppSettings,
    *,
    out_dir: Path | None = None,
    cdn_prefix: str | None = None,
    static_dir: Path | None = None,
    ignore: list[str] | None = None,
    ssr: bool | None = None,
    ssr_manifest: bool | str | None = None,
    enabled: bool | None = None,
) -> AppSettings:
    replacer_updates: dict[str, object] = {}
    if cdn_prefix is not None:
        replacer_updates["cdn_prefix"] = cdn_prefix
    if static_dir is not None:
        replacer_updates["static_resource_directory"] = normalize_path(static_dir)
    if ignore:
        replacer_updates["ignore"] = list(ignore)
    if enabled is not None:
        replacer_updates["enabled"] = enabled

    build_updates: dict[str, object] = {}
    if out_dir is not None:
        build_updates["out_dir"] = normalize_path(out_dir)
    if ssr is not None:
        build_updates["ssr"] = ssr
    if ssr_manifest is not None:
        build_updates["ssr_manifest"] = ssr_manifest

    return settings.model_copy(
        update={
            "replacer": settings.replacer.model_copy(update=replacer_updates),
            "build": settings.build.model_copy(update=build_updates),
        }
    )


def _fail(logger: logging.Logger, exc: CdnReplacerError) -> typer.Exit:
    logger.error("cdn_replacer.failed error_type=%s error=%s", type(exc).__name__, exc)
    typer.echo(f"fatal: {exc}", err=True)
    return typer.Exit(code=1)


@app.command("show-config")
def show_config(config_file: Path | None = CONFIG_FILE_OPTION) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("run")
def run(
    out_dir: Path | None = typer.Option(None, "--out-dir", help="Build output directory to rewrite."),
    cdn_prefix: str | None = typer.Option(None, "--cdn-prefix", help="CDN origin prepended to references."),
    static_dir: Path | None = typer.Option(None, "--static-dir", help="Static-asset root listing rewritable names."),
    ignore: list[str] | None = typer.Option(
        None,
        "--ignore",
        help="Exclusion glob relative to the output directory (repeatable). Overrides build-mode exclusion.",
    ),
    ssr: bool | None = typer.Option(None, "--ssr/--no-ssr", help="Output is a server-rendering server bundle."),
    ssr_manifest: str | None = typer.Option(
        None,
        "--ssr-manifest",
        help="true/false, or the manifest path emitted by a client build.",
    ),
    enabled: bool | None = typer.Option(None, "--enabled/--disabled", help="Turn the whole run on or off."),
    workers: int | None = typer.Option(None, "--workers", min=1, help="Rewrite files with N threads."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Count replacements without writing files."),
    progress_every: int = typer.Option(100, "--progress-every", min=1, help="Log progress every N files."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Rewrite quoted static-asset references in the build output."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, verbose=verbose)
    settings = _apply_overrides(
        settings,
        out_dir=out_dir,
        cdn_prefix=cdn_prefix,
        static_dir=static_dir,
        ignore=ignore,
        ssr=ssr,
        ssr_manifest=_parse_flag_or_path(ssr_manifest, "ssr-manifest"),
        enabled=enabled,
    )
    options = ReplacerRunOptions(dry_run=dry_run, progress_every=progress_every, workers=workers)
    try:
        result = run_cdn_replacer(settings, options=options, logger=logger)
    except CdnReplacerError as exc:
        raise _fail(logger, exc) from exc

    typer.echo(result.summary_line)
    if not result.skipped:
        typer.echo(f"run_id: {result.run_id}")
        typer.echo(f"mode: {result.mode.value if result.mode else 'unknown'}")
        typer.echo(f"files_scanned: {result.summary.files_scanned}")
        typer.echo(f"files_changed: {result.summary.files_changed}")
        typer.echo(f"replacements: {result.summary.replacements}")
        typer.echo(f"dry_run: {result.dry_run}")


@app.command("prefixes")
def prefixes(
    static_dir: Path | None = typer.Option(None, "--static-dir", help="Static-asset root to index."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """Print the resource prefixes eligible for rewriting."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    settings = _apply_overrides(settings, static_dir=static_dir)
    try:
        indexed = index_resource_prefixes(settings.replacer.static_resource_directory, logger=logger)
    except CdnReplacerError as exc:
        raise _fail(logger, exc) from exc
    for prefix in indexed:
        typer.echo(prefix)


@app.command("scan")
def scan(
    out_dir: Path | None = typer.Option(None, "--out-dir", help="Build output directory to scan."),
    ignore: list[str] | None = typer.Option(None, "--ignore", help="Exclusion glob (repeatable)."),
    ssr: bool | None = typer.Option(None, "--ssr/--no-ssr", help="Output is a server-rendering server bundle."),
    ssr_manifest: str | None = typer.Option(None, "--ssr-manifest", help="true/false, or the manifest path."),
    config_file: Path | None = CONFIG_FILE_OPTION,
) -> None:
    """List artifacts that a run would consider for the current build mode."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=False)
    settings = _apply_overrides(
        settings,
        out_dir=out_dir,
        ignore=ignore,
        ssr=ssr,
        ssr_manifest=_parse_flag_or_path(ssr_manifest, "ssr-manifest"),
    )
    context = context_from_settings(settings)
    try:
        artifacts = scan_artifacts(context.out_dir, resolve_exclusion(context), logger=logger)
    except CdnReplacerError as exc:
        raise _fail(logger, exc) from exc
    typer.echo(f"mode: {context.mode.value}")
    for artifact_path in artifacts:
        typer.echo(relative_posix(artifact_path, context.out_dir))


def main() -> None:
    """Console-script entrypoint."""

    app()


if __name__ == "__main__":
    main()
