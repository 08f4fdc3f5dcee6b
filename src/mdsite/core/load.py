"""Content discovery and loading of markdown sources"""

import logging
from pathlib import Path
from typing import Iterator

from mdsite.core.models import Document
from mdsite.errors import IOUnreadable


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown', '.mdx'}


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith('.') for part in path.relative_to(root).parts)


def source_id(path: Path, root: Path) -> str:
    """POSIX path of path relative to root (or the file name when root is the file)."""
    if path == root:
        return path.name
    return path.relative_to(root).as_posix()


def discover_files(root: Path) -> list[Path]:
    """Return sorted markdown files under root, or [root] if a single markdown file."""
    if not root.exists():
        raise IOUnreadable(str(root), "content root does not exist")
    if root.is_file():
        return [root] if root.suffix.lower() in MD_EXTENSIONS else []
    return sorted(
        (p for p in root.rglob('*')
         if p.is_file() and p.suffix.lower() in MD_EXTENSIONS and not _is_hidden(p, root)),
        key=lambda p: p.as_posix(),
    )


def load_document(path: Path, root: Path) -> Document:
    """Read a single source file as UTF-8 text."""
    source = source_id(path, root)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise IOUnreadable(source, str(e)) from e
    logger.debug("loaded %s (%d chars)", source, len(text))
    return Document(source=source, path=path, text=text.removeprefix('\ufeff'))


def load_documents(root: Path) -> Iterator[Document]:
    """Lazily yield a Document per markdown file under root, in source order."""
    for path in discover_files(root):
        yield load_document(path, root)
