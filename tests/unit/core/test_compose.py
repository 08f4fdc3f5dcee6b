"""Unit tests for core/compose.py"""

import datetime as dt

import pytest

from mdsite.core.compose import (
    compose_index,
    compose_page,
    href,
    output_path_for,
    root_prefix,
    tag_path,
)
from mdsite.core.models import Metadata
from mdsite.core.render.render import render_body


@pytest.fixture(name="meta")
def meta_fixture():
    return Metadata(
        title="Kinds",
        date=dt.date(2020, 3, 1),
        description="Types of types",
        tags=("haskell", "type-level"),
    )


@pytest.mark.parametrize("source,slug,expected", [
    ("kinds.md", None, "kinds.html"),
    ("posts/Type Families.md", None, "posts/type-families.html"),
    ("posts/a.md", "Custom Slug", "posts/custom-slug.html"),
    ("!!!.md", None, "page.html"),
])
def test_output_path_for(source, slug, expected):
    """Output path mirrors the source directory with a slugified file name."""
    assert output_path_for(source, Metadata(title="T", slug=slug)) == expected


def test_root_prefix():
    assert root_prefix("a.html") == ""
    assert root_prefix("posts/deep/a.html") == "../../"


def test_tag_path():
    assert tag_path("Type Level") == "tags/type-level.html"


def test_compose_page_layout(meta):
    """The page wraps the body with title, date, tag links, navigation and footer."""
    page = compose_page("kinds.md", meta, render_body("# Heading\n\nSome *text*.\n"), site_name="Blog")
    assert page.output_path == "kinds.html"
    html = page.content
    assert "<title>Kinds | Blog</title>" in html
    assert '<time datetime="2020-03-01">2020-03-01</time>' in html
    assert '<a href="tags/haskell.html">haskell</a>' in html
    assert '<a href="tags/type-level.html">type-level</a>' in html
    assert '<a href="index.html">Blog</a>' in html
    assert '<h1 id="heading">Heading</h1>' in html
    assert '<p>Some <em>text</em>.</p>' in html
    assert '<a href="#heading">Heading</a>' in html
    assert '<footer class="site-footer">' in html


def test_compose_page_nested_links_relative(meta):
    """Pages in subdirectories link back to the root relatively."""
    page = compose_page("posts/kinds.md", meta, render_body("x\n"))
    assert '<a href="../index.html">' in page.content
    assert '<a href="../tags/haskell.html">haskell</a>' in page.content


def test_compose_page_escapes_metadata():
    """Title and tags are HTML-escaped by the template."""
    meta = Metadata(title="a <b> & c", tags=("<x>",))
    html = compose_page("a.md", meta, render_body("")).content
    assert "a &lt;b&gt; &amp; c" in html
    assert "<b>" not in html


def test_compose_page_deterministic(meta):
    """Identical inputs give identical pages."""
    body = render_body("# H\n\ntext\n")
    assert compose_page("k.md", meta, body) == compose_page("k.md", meta, body)


def test_compose_page_without_toc(meta):
    page = compose_page("k.md", meta, render_body("# H\n"), toc_depth=0)
    assert 'class="toc"' not in page.content


def test_compose_index_lists_pages_in_given_order(meta):
    a = compose_page("a.md", meta, render_body("a"))
    b = compose_page("posts/b.md", Metadata(title="Bee"), render_body("b"))
    html = compose_index([b, a], site_name="Blog")
    assert html.index('href="posts/b.html"') < html.index('href="a.html"')
    assert "Types of types" in html


def test_links_are_percent_encoded(meta):
    """Source directories with URL-significant characters still give working links."""
    page = compose_page("c# 100%/intro.md", meta, render_body("x"))
    assert page.output_path == "c# 100%/intro.html"
    html = compose_index([page])
    assert 'href="c%23%20100%25/intro.html"' in html
    assert href("../", "tags/haskell.html") == "../tags/haskell.html"
