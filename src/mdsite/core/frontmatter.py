"""Front matter extraction: split a Document into Metadata and markdown body"""

import datetime as dt
import re
from typing import Any

import yaml
from pydantic import ValidationError

from mdsite.core.models import Document, Metadata
from mdsite.errors import MalformedFrontMatter


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


def _split(document: Document) -> tuple[dict[str, Any], str]:
    """Return (yaml_mapping, body) or raise MalformedFrontMatter."""
    m = FRONTMATTER_RE.match(document.text)
    if not m:
        raise MalformedFrontMatter(document.source, "missing '---' delimited front matter block")
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise MalformedFrontMatter(document.source, f"invalid YAML: {e}") from e
    if not isinstance(fm, dict):
        raise MalformedFrontMatter(
            document.source, f"expected a mapping, got {type(fm).__name__}"
        )
    return fm, document.text[m.end():]


def _tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(',') if t.strip()]
    if isinstance(value, (list, tuple)):
        tags = []
        for item in value:
            if isinstance(item, (dict, list)):
                raise ValueError(f"tag must be a scalar, got {type(item).__name__}")
            if str(item).strip():
                tags.append(str(item).strip())
        return tags
    raise ValueError(f"tags must be a list or comma-separated string, got {type(value).__name__}")


def _date(value: Any) -> Any:
    if isinstance(value, dt.datetime):
        return value.date()
    if value == '':
        return None
    return value


def _normalize(fm: dict[str, Any]) -> dict[str, Any]:
    """Coerce YAML scalars into the shapes Metadata expects."""
    title = fm.get('title')
    data = {
        'title': str(title).strip() if title is not None else None,
        'date': _date(fm.get('date')),
        'description': str(fm.get('description') or '').strip(),
        'tags': _tags(fm.get('tags')),
        'draft': fm.get('draft') or False,
    }
    if fm.get('slug'):
        data['slug'] = str(fm['slug']).strip()
    return data


def _describe(err: ValidationError) -> str:
    first = err.errors()[0]
    field = '.'.join(str(p) for p in first['loc']) or 'front matter'
    return f"{field}: {first['msg']}"


def parse_front_matter(document: Document) -> tuple[Metadata, str]:
    """Split document into (Metadata, body text). Requires a non-blank title."""
    fm, body = _split(document)
    try:
        data = _normalize(fm)
    except ValueError as e:
        raise MalformedFrontMatter(document.source, f"tags: {e}") from e
    if not data['title']:
        raise MalformedFrontMatter(document.source, "required field 'title' is missing")
    try:
        return Metadata(**data), body
    except ValidationError as e:
        raise MalformedFrontMatter(document.source, _describe(e)) from e
