"""Filesystem access for decision record collections.

Discovery is glob-based relative to the input directory.  Parsing lives in
:mod:`adrscope.infrastructure.parser`; this module only touches bytes and
paths.
"""

from __future__ import annotations

import shutil
from pathlib import Path

DEFAULT_PATTERN = "**/*.md"

# Directories never searched for documents.
_SKIP_DIRS = frozenset({".adrscope", ".git", "node_modules", "__pycache__"})


def find_documents(root: Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Return files under *root* matching the glob *pattern*, sorted by path.

    Paths inside :data:`_SKIP_DIRS` are ignored.
    """
    if not root.is_dir():
        return []
    results: list[Path] = []
    for path in root.glob(pattern):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(root).parts
        if any(part in _SKIP_DIRS for part in rel_parts):
            continue
        results.append(path)
    return sorted(results)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def copy_file(src: Path, dest: Path) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)


def display_path(path: Path, base: Path) -> str:
    """*path* relative to *base* when possible, else as given."""
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)
