"""Markdown body text -> Body tree"""

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdsite.core.models import Body
from mdsite.core.render.blocks import BuildContext, build_blocks


def make_parser(preset: str = 'commonmark') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def render_body(text: str, parser_config: str = 'commonmark') -> Body:
    """Parse markdown text into a Body; bad constructs degrade locally to literal text."""
    tokens = make_parser(parser_config).parse(text)
    root = SyntaxTreeNode(tokens)
    ctx = BuildContext(source_lines=text.splitlines(keepends=True))
    return Body(blocks=build_blocks(root.children, ctx))
