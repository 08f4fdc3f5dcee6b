"""Table of contents from the headings of a Body"""

from typing import Iterator

from mdsite.core.models import Block, Blockquote, Body, Heading, ListBlock, TocEntry
from mdsite.core.render.inline import plain_text


def _headings(blocks: tuple[Block, ...]) -> Iterator[Heading]:
    for b in blocks:
        if isinstance(b, Heading):
            yield b
        elif isinstance(b, Blockquote):
            yield from _headings(b.blocks)
        elif isinstance(b, ListBlock):
            for item in b.items:
                yield from _headings(item.blocks)


def table_of_contents(body: Body, depth: int) -> tuple[TocEntry, ...]:
    """Headings at level <= depth in document order, nested ones included; depth 0 disables the TOC."""
    if depth <= 0:
        return ()
    return tuple(
        TocEntry(level=h.level, text=plain_text(h.children).strip(), anchor=h.anchor)
        for h in _headings(body.blocks)
        if h.level <= depth
    )
