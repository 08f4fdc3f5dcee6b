"""Root test configuration: sample content trees and session-level cleanup"""

import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["_site"]


KINDS_MD = """\
---
title: "Kinds"
date: 2020-03-01
description: Types of types
tags: [haskell, type-level]
---
# Heading

Some *text*.
"""

FUNCTORS_MD = """\
---
title: Functors
date: 2020-03-01
tags:
  - haskell
---
# Functors

```haskell
fmap :: (a -> b) -> f a -> f b
```
"""

NOTES_MD = """\
---
title: Notes
tags: haskell
---
Undated notes.
"""

NO_TITLE_MD = """\
---
date: 2020-01-01
---
# Untitled
"""


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove output directories created in the project root during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """A content tree with three valid articles and one missing its title."""
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    (root / "kinds.md").write_text(KINDS_MD)
    (root / "posts" / "functors.md").write_text(FUNCTORS_MD)
    (root / "posts" / "notes.md").write_text(NOTES_MD)
    (root / "broken.md").write_text(NO_TITLE_MD)
    (root / "README.txt").write_text("not content")
    return root
