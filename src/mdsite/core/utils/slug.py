"""Slug generation for page paths, tag pages and heading anchors"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def unique_slug(text: str, seen: set[str], fallback: str = "section") -> str:
    """Slugify text, suffixing -1, -2... until it is not in seen; records the result."""
    base = slugify(text) or fallback
    candidate, n = base, 0
    while candidate in seen:
        n += 1
        candidate = f"{base}-{n}"
    seen.add(candidate)
    return candidate
