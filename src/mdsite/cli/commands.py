"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.models import BuildReport
from mdsite.core.pipeline import build_site, scan_documents
from mdsite.core.serve import serve
from mdsite.errors import IOUnreadable


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context, overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply its log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)
    if not (ctx.obj or {}).get("verbose"):
        logging.getLogger("mdsite").setLevel(settings.log_level)
    return settings


def _echo_report(report: BuildReport, output_dir: str) -> None:
    """Print written files, failures and a summary line."""
    for rel_path in report.written:
        typer.echo(f"  {output_dir}/{rel_path}")
    for source in report.skipped:
        typer.echo(f"  skipped (draft): {source}")
    for f in report.failed:
        typer.echo(f"  FAILED {f.source}: {f.kind}: {f.message}", err=True)
    for f in report.artifact_failures:
        typer.echo(f"  warning: {f.source}: {f.message}", err=True)
    typer.echo(
        f"Build complete - "
        f"{len(report.succeeded)} succeeded, "
        f"{len(report.failed)} failed, "
        f"{len(report.skipped)} skipped"
    )


def build_cmd(
    ctx: typer.Context,
    path: Annotated[Optional[str], typer.Argument(help="Content directory (or single file)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    site_name: Annotated[Optional[str], typer.Option("--site-name", help="Site name shown in the layout")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Documents processed in parallel")] = None,
    clean: Annotated[bool, typer.Option("--clean", help="Remove the output directory first")] = False,
    ):
    """Render every document and write pages plus tag indexes."""
    settings = _settings(ctx, overrides={
        "content_dir": path, "output_dir": out, "site_name": site_name, "workers": workers,
    })
    try:
        report = build_site(settings, clean=clean)
    except IOUnreadable as e:
        _fail("Cannot read content", e)
    except ValueError as e:
        _fail("Cannot clean output directory", e)
    _echo_report(report, settings.output_dir)
    if not report.ok:
        raise typer.Exit(1)


def _newest_first(item) -> tuple:
    source, meta = item
    return (meta.date is None, -meta.date.toordinal() if meta.date else 0, meta.title, source)


def list_cmd(
    ctx: typer.Context,
    path: Annotated[Optional[str], typer.Argument(help="Content directory (or single file)")] = None,
    ):
    """List documents with their date, title and tags, newest first."""
    settings = _settings(ctx, overrides={"content_dir": path})
    try:
        parsed, failures = scan_documents(Path(settings.content_dir))
    except IOUnreadable as e:
        _fail("Cannot read content", e)
    if not parsed and not failures:
        typer.echo("No documents found.")
        raise typer.Exit(1)

    for source, meta in sorted(parsed, key=_newest_first):
        date = meta.date.isoformat() if meta.date else "----------"
        tags = f"  [{', '.join(meta.tags)}]" if meta.tags else ""
        draft = "  (draft)" if meta.draft else ""
        typer.echo(f"{date}  {meta.title}{tags}{draft}  ({source})")
    for f in failures:
        typer.echo(f"  FAILED {f.source}: {f.kind}: {f.message}", err=True)
    if failures:
        raise typer.Exit(1)


def serve_cmd(
    ctx: typer.Context,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Directory to serve")] = None,
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
    ):
    """Serve the built site over HTTP until interrupted."""
    settings = _settings(ctx, overrides={"output_dir": out})
    directory = Path(settings.output_dir)
    if not directory.is_dir():
        _fail(f"Output directory not found: {directory}. Run 'mdsite build' first.")
    typer.echo(f"Serving {directory} at http://{host}:{port} (Ctrl+C to stop)")
    try:
        serve(directory, host, port)
    except OSError as e:
        _fail(f"Cannot bind {host}:{port}", e)
