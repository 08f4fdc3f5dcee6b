"""Data models flowing through the load -> parse -> render -> compose -> write pipeline"""

import datetime as dt
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Document(_Frozen):
    """A loaded source file; `source` is its POSIX path relative to the content root."""
    source: str
    path:   Path
    text:   str


class Metadata(_Frozen):
    """Front matter fields recognised by the pipeline."""
    title:       str
    date:        Optional[dt.date] = None
    description: str = ""
    tags:        tuple[str, ...] = ()   # order and duplicates preserved for display
    slug:        Optional[str] = None
    draft:       bool = False


# --- inline nodes ---

class Text(_Frozen):
    kind: Literal["text"] = "text"
    text: str


class CodeSpan(_Frozen):
    kind: Literal["code_span"] = "code_span"
    text: str


class LineBreak(_Frozen):
    kind: Literal["break"] = "break"
    hard: bool = False


class Emphasis(_Frozen):
    kind:     Literal["emphasis"] = "emphasis"
    children: tuple["Inline", ...] = ()


class Strong(_Frozen):
    kind:     Literal["strong"] = "strong"
    children: tuple["Inline", ...] = ()


class Link(_Frozen):
    kind:     Literal["link"] = "link"
    href:     str
    title:    Optional[str] = None
    children: tuple["Inline", ...] = ()


Inline = Annotated[
    Union[Text, CodeSpan, LineBreak, Emphasis, Strong, Link],
    Field(discriminator="kind"),
]


# --- block nodes ---

class Heading(_Frozen):
    kind:     Literal["heading"] = "heading"
    level:    int = Field(ge=1, le=6)
    anchor:   str = ""
    children: tuple[Inline, ...] = ()


class Paragraph(_Frozen):
    kind:     Literal["paragraph"] = "paragraph"
    children: tuple[Inline, ...] = ()


class CodeBlock(_Frozen):
    """Literal code; `text` is kept exactly as written in the source."""
    kind: Literal["code"] = "code"
    info: str = ""
    text: str


class Rule(_Frozen):
    kind: Literal["rule"] = "rule"


class LiteralBlock(_Frozen):
    """Source text passed through for markup that could not be rendered."""
    kind: Literal["literal"] = "literal"
    text: str


class ListItem(_Frozen):
    kind:   Literal["item"] = "item"
    blocks: tuple["Block", ...] = ()


class ListBlock(_Frozen):
    kind:    Literal["list"] = "list"
    ordered: bool = False
    start:   Optional[int] = None
    tight:   bool = False
    items:   tuple[ListItem, ...] = ()


class Blockquote(_Frozen):
    kind:   Literal["blockquote"] = "blockquote"
    blocks: tuple["Block", ...] = ()


Block = Annotated[
    Union[Heading, Paragraph, CodeBlock, Rule, LiteralBlock, ListBlock, Blockquote],
    Field(discriminator="kind"),
]


class Body(_Frozen):
    blocks: tuple[Block, ...] = ()


for _model in (Emphasis, Strong, Link, Heading, Paragraph, ListItem, ListBlock, Blockquote, Body):
    _model.model_rebuild()


class TocEntry(_Frozen):
    level:  int
    text:   str
    anchor: str


class Page(_Frozen):
    """A composed HTML page and where it goes, relative to the output root."""
    source:      str
    metadata:    Metadata
    content:     str
    output_path: str


class Site(_Frozen):
    """Every page of one generation run, in index order, plus the derived tag index."""
    pages: tuple[Page, ...] = ()
    tags:  dict[str, tuple[Page, ...]] = {}


class Failure(_Frozen):
    source:  str
    kind:    str      # error class name, e.g. "MalformedFrontMatter"
    message: str


class BuildReport(_Frozen):
    """Outcome of one generation run.

    `failed` holds per-document failures (load, parse or page write); `artifact_failures`
    holds failures writing derived indexes or static assets. Only the former fail a run.
    """
    succeeded:         tuple[str, ...] = ()
    skipped:           tuple[str, ...] = ()   # drafts
    failed:            tuple[Failure, ...] = ()
    artifact_failures: tuple[Failure, ...] = ()
    written:           tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed
