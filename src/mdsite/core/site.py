"""Site writer: page files, derived index pages, static assets"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable

from mdsite.core.compose import (
    INDEX_PATH,
    TAGS_INDEX_PATH,
    compose_index,
    compose_tag_page,
    compose_tags_overview,
    tag_path,
)
from mdsite.core.models import Page, Site
from mdsite.errors import IOWriteFailure


logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    written:  list[str] = field(default_factory=list)        # output paths, relative to output root
    failures: list[IOWriteFailure] = field(default_factory=list)


def _sort_key(page: Page):
    d = page.metadata.date
    return (d is None, -d.toordinal() if d else 0, page.metadata.title, page.output_path)


def sort_pages(pages: Iterable[Page]) -> list[Page]:
    """Date descending, ties by title ascending; undated pages last."""
    return sorted(pages, key=_sort_key)


def build_tag_index(pages: Iterable[Page]) -> dict[str, tuple[Page, ...]]:
    """Map tag label -> sorted pages carrying it.

    A page appears once per tag even when its front matter repeats the tag.
    Tags whose slugs collide share a single index page, labelled with the
    lexically smallest spelling.
    """
    grouped: dict[str, list[Page]] = {}
    labels: dict[str, set[str]] = {}
    for page in pages:
        seen: set[str] = set()
        for tag in page.metadata.tags:
            key = tag_path(tag)
            labels.setdefault(key, set()).add(tag)
            if key in seen:
                continue
            seen.add(key)
            grouped.setdefault(key, []).append(page)
    index = {min(labels[key]): tuple(sort_pages(grouped[key])) for key in grouped}
    return dict(sorted(index.items()))


def assemble_site(pages: Iterable[Page]) -> Site:
    ordered = sort_pages(pages)
    return Site(pages=tuple(ordered), tags=build_tag_index(ordered))


def _write(output_dir: Path, rel_path: str, text: str) -> None:
    dest = output_dir / rel_path
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(text.encode("utf-8"))


def write_site(pages: list[Page], output_dir: Path, site_name: str = "mdsite") -> WriteResult:
    """Write every page plus index pages; failures are collected, not raised."""
    result = WriteResult()

    def attempt(source: str, rel_path: str, text: str) -> None:
        try:
            _write(output_dir, rel_path, text)
        except OSError as e:
            logger.warning("could not write %s: %s", rel_path, e)
            result.failures.append(IOWriteFailure(source, f"{rel_path}: {e}"))
            return
        logger.debug("wrote %s", rel_path)
        result.written.append(rel_path)

    site = assemble_site(pages)
    for page in sorted(site.pages, key=lambda p: p.output_path):
        attempt(page.source, page.output_path, page.content)

    attempt(INDEX_PATH, INDEX_PATH, compose_index(list(site.pages), site_name))
    attempt(TAGS_INDEX_PATH, TAGS_INDEX_PATH, compose_tags_overview(site.tags, site_name))
    for label, tagged in site.tags.items():
        attempt(tag_path(label), tag_path(label), compose_tag_page(label, list(tagged), site_name))
    return result


def reserved_paths(pages: Iterable[Page]) -> set[str]:
    """Output paths taken by derived index pages for this page set."""
    return {INDEX_PATH, TAGS_INDEX_PATH} | {tag_path(t) for p in pages for t in p.metadata.tags}


def copy_static(static_dir: Path, output_dir: Path) -> WriteResult:
    """Copy the static asset tree into output_dir; failures are collected per file."""
    result = WriteResult()
    if not static_dir.is_dir():
        return result
    for src in sorted(p for p in static_dir.rglob("*") if p.is_file()):
        rel = src.relative_to(static_dir).as_posix()
        dest = output_dir / rel
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
        except OSError as e:
            logger.warning("could not copy static %s: %s", rel, e)
            result.failures.append(IOWriteFailure(rel, str(e)))
            continue
        result.written.append(rel)
    return result


def prune_output(output_dir: Path, keep: Iterable[str]) -> WriteResult:
    """Remove files under output_dir not in keep (POSIX paths relative to output_dir).

    Output left over from an earlier build, such as the page of a document
    that now fails, must not stay published. Directories emptied by the
    removal are dropped too. Hidden entries (a `.git` checkout, `.nojekyll`)
    are left alone. `written` lists the removed paths.
    """
    result = WriteResult()
    if not output_dir.is_dir():
        return result
    keep = set(keep)
    for path in sorted(output_dir.rglob("*"), reverse=True):
        rel = path.relative_to(output_dir).as_posix()
        if any(part.startswith(".") for part in PurePosixPath(rel).parts):
            continue
        try:
            if path.is_dir() and not path.is_symlink():
                if not any(path.iterdir()):
                    path.rmdir()
            elif rel not in keep:
                path.unlink()
                logger.info("removed stale %s", rel)
                result.written.append(rel)
        except OSError as e:
            logger.warning("could not remove stale %s: %s", rel, e)
            result.failures.append(IOWriteFailure(rel, str(e)))
    result.written.sort()
    return result


def clean_output_dir(output_dir: Path, project_root: Path) -> None:
    """Remove output_dir; refuses the project root itself or anything outside it."""
    if not output_dir.exists():
        return
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved:
        raise ValueError("Refusing to clean project root.")
    if not output_resolved.is_relative_to(root_resolved):
        raise ValueError("Refusing to clean output directory outside project root.")
    shutil.rmtree(output_dir)
