"""Serialize a Body tree to an HTML fragment"""

from html import escape

from mdsite.core.models import (
    Block,
    Blockquote,
    Body,
    CodeBlock,
    CodeSpan,
    Emphasis,
    Heading,
    Inline,
    LineBreak,
    Link,
    ListBlock,
    LiteralBlock,
    Paragraph,
    Rule,
    Strong,
    Text,
)


def _text(s: str) -> str:
    return escape(s, quote=False)


def _attr(s: str) -> str:
    return escape(s, quote=True)


def render_inline(node: Inline) -> str:
    if isinstance(node, Text):
        return _text(node.text)
    if isinstance(node, CodeSpan):
        return f"<code>{_text(node.text)}</code>"
    if isinstance(node, LineBreak):
        return "<br>\n" if node.hard else "\n"
    if isinstance(node, Emphasis):
        return f"<em>{render_inlines(node.children)}</em>"
    if isinstance(node, Strong):
        return f"<strong>{render_inlines(node.children)}</strong>"
    if isinstance(node, Link):
        title = f' title="{_attr(node.title)}"' if node.title else ''
        return f'<a href="{_attr(node.href)}"{title}>{render_inlines(node.children)}</a>'
    raise TypeError(f"unknown inline node {type(node).__name__}")


def render_inlines(nodes: tuple[Inline, ...]) -> str:
    return ''.join(render_inline(n) for n in nodes)


def _code(node: CodeBlock) -> str:
    lang = node.info.split()[0] if node.info else ''
    cls = f' class="language-{_attr(lang)}"' if lang else ''
    return f"<pre><code{cls}>{_text(node.text)}</code></pre>"


def _list(node: ListBlock) -> str:
    tag = 'ol' if node.ordered else 'ul'
    start = f' start="{node.start}"' if node.ordered and node.start not in (None, 1) else ''
    items = []
    for item in node.items:
        parts = [
            render_inlines(b.children) if node.tight and isinstance(b, Paragraph) else render_block(b)
            for b in item.blocks
        ]
        inner = "\n".join(parts)
        items.append(f"<li>{inner}</li>")
    return f"<{tag}{start}>\n" + "\n".join(items) + f"\n</{tag}>"


def render_block(node: Block) -> str:
    if isinstance(node, Heading):
        return f'<h{node.level} id="{_attr(node.anchor)}">{render_inlines(node.children)}</h{node.level}>'
    if isinstance(node, Paragraph):
        return f"<p>{render_inlines(node.children)}</p>"
    if isinstance(node, CodeBlock):
        return _code(node)
    if isinstance(node, ListBlock):
        return _list(node)
    if isinstance(node, Blockquote):
        inner = "\n".join(render_block(b) for b in node.blocks)
        return f"<blockquote>\n{inner}\n</blockquote>"
    if isinstance(node, Rule):
        return "<hr>"
    if isinstance(node, LiteralBlock):
        return f'<pre class="literal">{_text(node.text)}</pre>'
    raise TypeError(f"unknown block node {type(node).__name__}")


def render_html(body: Body) -> str:
    """Return the HTML fragment for body; code block text is only entity-escaped."""
    return "".join(render_block(b) + "\n" for b in body.blocks)
