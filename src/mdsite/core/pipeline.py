"""Pipeline orchestration: load -> parse -> render -> compose per document, then write the site"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from mdsite.config import Settings
from mdsite.core.compose import compose_page
from mdsite.core.frontmatter import parse_front_matter
from mdsite.core.load import discover_files, load_document, source_id
from mdsite.core.models import BuildReport, Failure, Metadata, Page
from mdsite.core.render.render import render_body
from mdsite.core.site import clean_output_dir, copy_static, prune_output, reserved_paths, write_site
from mdsite.core.utils.hashing import sha256
from mdsite.errors import SiteError


logger = logging.getLogger(__name__)


def _failure(err: SiteError) -> Failure:
    return Failure(source=err.source, kind=type(err).__name__, message=err.reason)


def process_document(path: Path, root: Path, settings: Settings) -> Optional[Page]:
    """Load, parse, render and compose one document. Returns None for drafts."""
    document = load_document(path, root)
    metadata, body_text = parse_front_matter(document)
    if metadata.draft:
        logger.info("skipping draft %s", document.source)
        return None
    body = render_body(body_text, settings.parser_config)
    return compose_page(document.source, metadata, body, settings.site_name, settings.toc_depth)


def _process_all(
    paths: list[Path],
    root: Path,
    settings: Settings,
    ) -> list[tuple[str, Optional[Page], Optional[SiteError]]]:
    """Run every document independently; results come back in path order."""
    def run(path: Path):
        source = source_id(path, root)
        try:
            return source, process_document(path, root, settings), None
        except SiteError as e:
            logger.warning("failed %s", e)
            return source, None, e

    if settings.workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=min(settings.workers, len(paths))) as executor:
            return list(executor.map(run, paths))
    return [run(p) for p in paths]


def _disambiguate(page: Page, taken: set[str]) -> str:
    stem = page.output_path.removesuffix(".html")
    digest = sha256(page.source)
    for length in (8, 12, 16, 64):
        candidate = f"{stem}-{digest[:length]}.html"
        if candidate not in taken:
            return candidate
    counter = 2
    while f"{stem}-{digest}-{counter}.html" in taken:
        counter += 1
    return f"{stem}-{digest}-{counter}.html"


def resolve_collisions(pages: list[Page]) -> list[Page]:
    """Give each page a unique output path; later sources (by path order) get a hash suffix."""
    taken = reserved_paths(pages)
    resolved = []
    for page in sorted(pages, key=lambda p: p.source):
        if page.output_path in taken:
            path = _disambiguate(page, taken)
            logger.warning("%s: output path %s taken, using %s", page.source, page.output_path, path)
            page = page.model_copy(update={"output_path": path})
        taken.add(page.output_path)
        resolved.append(page)
    return resolved


def scan_documents(root: Path) -> tuple[list[tuple[str, Metadata]], list[Failure]]:
    """Load and parse front matter only. Returns ((source, metadata) pairs, failures)."""
    parsed, failures = [], []
    for path in discover_files(root):
        try:
            metadata, _ = parse_front_matter(load_document(path, root))
        except SiteError as e:
            failures.append(_failure(e))
            continue
        parsed.append((source_id(path, root), metadata))
    return parsed, failures


def _owns_output_dir(output_dir: Path, sources: list[Path], project_root: Path) -> bool:
    """True when output_dir is a dedicated build directory safe to prune."""
    out = output_dir.resolve()
    return not any(p.resolve().is_relative_to(out) for p in [project_root, *sources])


def build_site(settings: Settings, clean: bool = False, project_root: Path = None) -> BuildReport:
    """Run the full pipeline and write the site.

    Per-document failures are collected into the report rather than raised. A
    missing content root raises IOUnreadable. Files left in the output
    directory by an earlier build and not produced by this one are removed.
    """
    root = Path(settings.content_dir)
    output_dir = Path(settings.output_dir)
    static_dir = Path(settings.static_dir)
    project_root = project_root or Path.cwd()
    paths = discover_files(root)

    if clean:
        clean_output_dir(output_dir, project_root)

    failed: list[Failure] = []
    skipped: list[str] = []
    pages: list[Page] = []
    for source, page, err in _process_all(paths, root, settings):
        if err is not None:
            failed.append(_failure(err))
        elif page is None:
            skipped.append(source)
        else:
            pages.append(page)
    pages = resolve_collisions(pages)

    static = copy_static(static_dir, output_dir)
    artifact_failures = [_failure(err) for err in static.failures]

    result = write_site(pages, output_dir, settings.site_name)
    page_sources = {p.source for p in pages}
    for err in result.failures:
        (failed if err.source in page_sources else artifact_failures).append(_failure(err))
    for rel in sorted(set(static.written) & set(result.written)):
        logger.warning("static file %s overwritten by a generated page", rel)

    if _owns_output_dir(output_dir, [root, static_dir], project_root):
        pruned = prune_output(output_dir, set(static.written) | set(result.written))
        artifact_failures.extend(_failure(err) for err in pruned.failures)
    else:
        logger.warning("not pruning %s: it holds the project or its sources", output_dir)

    failed_sources = {f.source for f in failed}
    succeeded = tuple(p.source for p in pages if p.source not in failed_sources)
    logger.info(
        "built %d page(s): %d failed, %d skipped", len(succeeded), len(failed), len(skipped)
    )
    return BuildReport(
        succeeded=succeeded,
        skipped=tuple(skipped),
        failed=tuple(sorted(failed, key=lambda f: f.source)),
        artifact_failures=tuple(artifact_failures),
        written=tuple(result.written),
    )
