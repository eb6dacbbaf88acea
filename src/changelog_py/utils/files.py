"""File helpers used by the changelog core.

Writes go through a temporary file in the target directory followed by
an atomic rename, so a crash mid-write never leaves a truncated file.
"""

from __future__ import annotations

import os
import tempfile
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def read_text(path: Path, encoding: str = "utf-8") -> str | None:
    """Read a text file, returning None if it does not exist."""
    try:
        # newline="" keeps offsets identical to what is written back
        with path.open(encoding=encoding, newline="") as fh:
            return fh.read()
    except FileNotFoundError:
        return None


def write_text_atomic(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` via temp file + rename.

    Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def file_size(path: Path) -> int:
    """Size of ``path`` in bytes, 0 if it does not exist."""
    try:
        return path.stat().st_size
    except FileNotFoundError:
        return 0
