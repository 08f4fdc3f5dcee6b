"""Unit tests for core/render/blocks.py and render.py"""

import pytest

from mdsite.core.models import (
    Blockquote,
    CodeBlock,
    Emphasis,
    Heading,
    ListBlock,
    LiteralBlock,
    Paragraph,
    Rule,
    Text,
)
from mdsite.core.render import blocks
from mdsite.core.render.render import render_body


def test_kinds_example_shape():
    """A level-1 heading then a paragraph holding one emphasis node."""
    body = render_body("# Heading\n\nSome *text*.\n")
    assert [b.kind for b in body.blocks] == ["heading", "paragraph"]
    heading, para = body.blocks
    assert isinstance(heading, Heading) and heading.level == 1
    assert isinstance(para, Paragraph)
    emphasis = [c for c in para.children if isinstance(c, Emphasis)]
    assert len(emphasis) == 1
    assert emphasis[0].children == (Text(text="text"),)


@pytest.mark.parametrize("md,level", [("# A\n", 1), ("### C\n", 3), ("###### F\n", 6)])
def test_heading_levels(md, level):
    """Heading level follows the number of #s."""
    (heading,) = render_body(md).blocks
    assert heading.level == level


def test_heading_anchors_unique():
    """Repeated heading text gets suffixed anchors."""
    body = render_body("# Intro\n\n## Intro\n\n## Type *Kinds*\n")
    assert [b.anchor for b in body.blocks] == ["intro", "intro-1", "type-kinds"]


def test_fenced_code_verbatim():
    """Fenced code keeps its content byte-for-byte, including spacing and markup characters."""
    code = "data Proxy (a :: k) = Proxy\n\n  -- *not emphasis*   \n<T> & [x](y)\n"
    (block,) = render_body(f"```haskell\n{code}```\n").blocks
    assert isinstance(block, CodeBlock)
    assert block.info == "haskell"
    assert block.text == code


def test_indented_code_block():
    """Indented code maps to a CodeBlock without info string."""
    (block,) = render_body("    x = 1\n").blocks
    assert block == CodeBlock(info="", text="x = 1\n")


def test_unordered_list():
    """Bullet lists become unordered ListBlocks with one item per bullet."""
    (lst,) = render_body("- one\n- two\n").blocks
    assert isinstance(lst, ListBlock)
    assert not lst.ordered
    assert lst.tight
    assert len(lst.items) == 2
    assert lst.items[0].blocks == (Paragraph(children=(Text(text="one"),)),)


def test_ordered_list_start():
    """Ordered lists keep their start number."""
    (lst,) = render_body("3. three\n4. four\n").blocks
    assert lst.ordered
    assert lst.start == 3


def test_loose_list_not_tight():
    """Blank lines between items make a loose list."""
    (lst,) = render_body("- one\n\n- two\n").blocks
    assert not lst.tight


def test_nested_list_in_item():
    """A nested list is owned by its parent item."""
    (lst,) = render_body("- outer\n  - inner\n").blocks
    inner = lst.items[0].blocks[-1]
    assert isinstance(inner, ListBlock)
    assert inner.items[0].blocks[0].children == (Text(text="inner"),)


def test_blockquote():
    """Blockquotes own their nested blocks."""
    (quote,) = render_body("> quoted *words*\n").blocks
    assert isinstance(quote, Blockquote)
    assert isinstance(quote.blocks[0], Paragraph)


def test_thematic_break():
    """A horizontal rule becomes a Rule block."""
    assert render_body("a\n\n***\n\nb\n").blocks[1] == Rule()


def test_raw_html_passes_through_as_literal():
    """Block HTML has no builder and is kept as literal source text."""
    body = render_body("<div>raw</div>\n\nafter\n")
    assert body.blocks[0] == LiteralBlock(text="<div>raw</div>")
    assert isinstance(body.blocks[1], Paragraph)


def test_table_passes_through_as_literal():
    """Tables (gfm-like preset) degrade to literal source text."""
    md = "| a | b |\n|---|---|\n| 1 | 2 |\n"
    (block,) = render_body(md, "gfm-like").blocks
    assert block == LiteralBlock(text=md.rstrip())


def test_failing_builder_isolated(monkeypatch):
    """A construct whose builder raises degrades alone; siblings still render."""
    def boom(node, ctx):
        raise ValueError("bad construct")

    monkeypatch.setitem(blocks.BLOCK_BUILDERS, "blockquote", boom)
    body = render_body("# A\n\n> q\n\nafter\n")
    assert [b.kind for b in body.blocks] == ["heading", "literal", "paragraph"]
    assert body.blocks[1].text == "> q"


def test_failing_builder_inside_list_isolated(monkeypatch):
    """Failure isolation applies to nested blocks too."""
    def boom(node, ctx):
        raise KeyError("code")

    monkeypatch.setitem(blocks.BLOCK_BUILDERS, "fence", boom)
    (lst,) = render_body("- item\n\n  ```\n  x\n  ```\n- next\n").blocks
    assert isinstance(lst, ListBlock)
    assert [b.kind for b in lst.items[0].blocks] == ["paragraph", "literal"]
    assert len(lst.items) == 2


def test_render_deterministic():
    """Identical input text yields identical trees."""
    md = "# T\n\n- a\n- *b*\n\n```\ncode\n```\n"
    assert render_body(md) == render_body(md)


def test_empty_body():
    """Empty markdown yields an empty Body."""
    assert render_body("").blocks == ()
