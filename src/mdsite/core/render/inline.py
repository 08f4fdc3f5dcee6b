"""markdown-it inline nodes -> Inline models"""

import logging
from typing import Callable

from markdown_it.tree import SyntaxTreeNode

from mdsite.core.models import CodeSpan, Emphasis, Inline, LineBreak, Link, Strong, Text


logger = logging.getLogger(__name__)


def _link(node: SyntaxTreeNode) -> Link:
    return Link(
        href=node.attrs['href'],
        title=node.attrs.get('title') or None,
        children=build_inlines(node.children),
    )


INLINE_BUILDERS: dict[str, Callable[[SyntaxTreeNode], Inline]] = {
    'text':        lambda n: Text(text=n.content),
    'em':          lambda n: Emphasis(children=build_inlines(n.children)),
    'strong':      lambda n: Strong(children=build_inlines(n.children)),
    'code_inline': lambda n: CodeSpan(text=n.content),
    'softbreak':   lambda n: LineBreak(hard=False),
    'hardbreak':   lambda n: LineBreak(hard=True),
    'link':        _link,
}


def literal_text(node: SyntaxTreeNode) -> str:
    """Best-effort reconstruction of the markup an inline node came from."""
    if node.type == 'image':
        return f"![{node.content}]({node.attrs.get('src', '')})"
    if node.children:
        inner = ''.join(literal_text(c) for c in node.children)
        if node.type == 'link':
            return f"[{inner}]({node.attrs.get('href', '')})"
        return f"{node.markup}{inner}{node.markup}"
    return node.content or node.markup or ''


def _merge_text(nodes: list[Inline]) -> tuple[Inline, ...]:
    merged: list[Inline] = []
    for n in nodes:
        if isinstance(n, Text) and not n.text:
            continue
        if isinstance(n, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(text=merged[-1].text + n.text)
        else:
            merged.append(n)
    return tuple(merged)


def build_inline(node: SyntaxTreeNode) -> Inline:
    """Convert one inline node; unknown or failing constructs fall back to literal text."""
    builder = INLINE_BUILDERS.get(node.type)
    if builder is None:
        return Text(text=literal_text(node))
    try:
        return builder(node)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning("inline %s rendered as text: %s", node.type, e)
        return Text(text=literal_text(node))


def build_inlines(nodes: list[SyntaxTreeNode]) -> tuple[Inline, ...]:
    return _merge_text([build_inline(n) for n in nodes])


def plain_text(inlines: tuple[Inline, ...]) -> str:
    """Concatenated visible text of an inline sequence (used for anchors and TOC labels)."""
    parts = []
    for n in inlines:
        if isinstance(n, (Text, CodeSpan)):
            parts.append(n.text)
        elif isinstance(n, LineBreak):
            parts.append(' ')
        else:
            parts.append(plain_text(n.children))
    return ''.join(parts)
