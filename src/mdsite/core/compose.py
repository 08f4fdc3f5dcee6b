"""Template composition: wrap rendered bodies and listings in the site layout"""

from functools import lru_cache
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape

from mdsite.core.models import Body, Metadata, Page
from mdsite.core.render.html import render_html
from mdsite.core.render.toc import table_of_contents
from mdsite.core.utils.slug import slugify


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
INDEX_PATH = "index.html"
TAGS_INDEX_PATH = "tags/index.html"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def output_path_for(source: str, metadata: Metadata) -> str:
    """Deterministic output path: <source parent>/<slug>.html (POSIX, relative to output root)."""
    src = PurePosixPath(source)
    slug = slugify(metadata.slug) if metadata.slug else slugify(src.stem)
    return (src.parent / f"{slug or 'page'}.html").as_posix()


def tag_path(tag: str) -> str:
    return f"tags/{slugify(tag) or 'tag'}.html"


def root_prefix(output_path: str) -> str:
    """Relative prefix from output_path back to the output root ('' at top level)."""
    return "../" * output_path.count("/")


def href(root: str, output_path: str) -> str:
    """Relative URL of output_path from a page at depth `root`, percent-encoded."""
    return root + quote(output_path)


def compose_page(
    source: str,
    metadata: Metadata,
    body: Body,
    site_name: str = "mdsite",
    toc_depth: int = 3,
    ) -> Page:
    """Render a document page. Identical inputs always give identical output."""
    output_path = output_path_for(source, metadata)
    root = root_prefix(output_path)
    content = _environment().get_template("page.html").render(
        site_name=site_name,
        root=root,
        meta=metadata,
        description=metadata.description,
        tags=[(t, href(root, tag_path(t))) for t in metadata.tags],
        toc=table_of_contents(body, toc_depth),
        content=render_html(body),
    )
    return Page(source=source, metadata=metadata, content=content, output_path=output_path)


def _entries(pages: list[Page], root: str) -> list[dict]:
    return [
        {
            "title": p.metadata.title,
            "date": p.metadata.date.isoformat() if p.metadata.date else "",
            "description": p.metadata.description,
            "url": href(root, p.output_path),
        }
        for p in pages
    ]


def compose_index(pages: list[Page], site_name: str = "mdsite") -> str:
    """Site front page listing every page in the given order."""
    return _environment().get_template("listing.html").render(
        site_name=site_name, root="", heading=site_name, entries=_entries(pages, ""),
    )


def compose_tag_page(label: str, pages: list[Page], site_name: str = "mdsite") -> str:
    root = root_prefix(tag_path(label))
    return _environment().get_template("listing.html").render(
        site_name=site_name, root=root, heading=f"Tagged: {label}", entries=_entries(pages, root),
    )


def compose_tags_overview(tags: dict[str, tuple[Page, ...]], site_name: str = "mdsite") -> str:
    root = root_prefix(TAGS_INDEX_PATH)
    items = [
        {"label": label, "url": href(root, tag_path(label)), "count": len(pages)}
        for label, pages in sorted(tags.items(), key=lambda kv: kv[0])
    ]
    return _environment().get_template("tags.html").render(site_name=site_name, root=root, tags=items)
