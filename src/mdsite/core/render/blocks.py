"""markdown-it block nodes -> Block models, isolating failures per construct"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from markdown_it.tree import SyntaxTreeNode

from mdsite.core.models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    LiteralBlock,
    Paragraph,
    Rule,
)
from mdsite.core.render.inline import build_inlines, plain_text
from mdsite.core.utils.slug import unique_slug


logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """Per-document state shared by the block builders."""
    source_lines: list[str]
    anchors:      set[str] = field(default_factory=set)


def heading_level(node: SyntaxTreeNode) -> int:
    """Return the heading level (1-6) from an hN tag."""
    if node.tag and node.tag[0] == 'h' and node.tag[1:].isdigit():
        return int(node.tag[1:])
    raise ValueError(f"unexpected heading tag {node.tag!r}")


def _inline_children(node: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Children of the single `inline` node under a heading or paragraph."""
    return [c for child in node.children for c in child.children]


def _heading(node: SyntaxTreeNode, ctx: BuildContext) -> Heading:
    children = build_inlines(_inline_children(node))
    return Heading(
        level=heading_level(node),
        anchor=unique_slug(plain_text(children), ctx.anchors),
        children=children,
    )


def _paragraph(node: SyntaxTreeNode, ctx: BuildContext) -> Paragraph:
    return Paragraph(children=build_inlines(_inline_children(node)))


def _fence(node: SyntaxTreeNode, ctx: BuildContext) -> CodeBlock:
    return CodeBlock(info=node.info.strip(), text=node.content)


def _code_block(node: SyntaxTreeNode, ctx: BuildContext) -> CodeBlock:
    return CodeBlock(text=node.content)


def _items(node: SyntaxTreeNode, ctx: BuildContext) -> tuple[ListItem, ...]:
    return tuple(ListItem(blocks=build_blocks(item.children, ctx)) for item in node.children)


def _is_tight(node: SyntaxTreeNode) -> bool:
    return any(
        child.type == 'paragraph' and child.hidden
        for item in node.children for child in item.children
    )


def _bullet_list(node: SyntaxTreeNode, ctx: BuildContext) -> ListBlock:
    return ListBlock(ordered=False, tight=_is_tight(node), items=_items(node, ctx))


def _ordered_list(node: SyntaxTreeNode, ctx: BuildContext) -> ListBlock:
    return ListBlock(
        ordered=True,
        start=int(node.attrs.get('start', 1)),
        tight=_is_tight(node),
        items=_items(node, ctx),
    )


def _blockquote(node: SyntaxTreeNode, ctx: BuildContext) -> Blockquote:
    return Blockquote(blocks=build_blocks(node.children, ctx))


BLOCK_BUILDERS: dict[str, Callable[[SyntaxTreeNode, BuildContext], Block]] = {
    'heading':      _heading,
    'paragraph':    _paragraph,
    'fence':        _fence,
    'code_block':   _code_block,
    'bullet_list':  _bullet_list,
    'ordered_list': _ordered_list,
    'blockquote':   _blockquote,
    'hr':           lambda node, ctx: Rule(),
}


def _source_slice(node: SyntaxTreeNode, source_lines: list[str]) -> str:
    """Extract raw source for a block via node.map; fallback to node.content."""
    if node.map:
        start, end = node.map
        return ''.join(source_lines[start:end]).rstrip()
    return (node.content or '').rstrip()


def build_block(node: SyntaxTreeNode, ctx: BuildContext) -> Block:
    """Convert one block node; unknown or failing constructs pass through as literal source."""
    builder = BLOCK_BUILDERS.get(node.type)
    if builder is None:
        logger.debug("no builder for %s, passing source through", node.type)
        return LiteralBlock(text=_source_slice(node, ctx.source_lines))
    try:
        return builder(node, ctx)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("%s at lines %s rendered as literal text: %s", node.type, node.map, e)
        return LiteralBlock(text=_source_slice(node, ctx.source_lines))


def build_blocks(nodes: list[SyntaxTreeNode], ctx: BuildContext) -> tuple[Block, ...]:
    return tuple(build_block(n, ctx) for n in nodes)
