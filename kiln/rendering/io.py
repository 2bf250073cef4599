"""File I/O operations for rendering."""

from __future__ import annotations

import os
import re
import shutil
import tempfile
from pathlib import Path

_NON_WHITESPACE = re.compile(rb"\S")


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def is_only_whitespace(data: bytes) -> bool:
    """Return True when ``data`` is empty or holds nothing but whitespace."""
    return _NON_WHITESPACE.search(data) is None


def make_dir(path: Path, mode: int = 0o755) -> None:
    """Create a single directory, tolerating one that already exists."""
    try:
        path.mkdir(mode=mode)
    except FileExistsError:
        if not path.is_dir():
            raise


def atomic_write_bytes(path: Path, data: bytes, mode: int = 0o644) -> None:
    """Write bytes to a file atomically using a temporary file.

    Any existing file at ``path`` is replaced.

    Args:
        path: Destination file path
        data: Content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write UTF-8 text to a file atomically."""
    atomic_write_bytes(path, text.encode("utf-8"), mode=mode)


def copy_tree(source: Path, target: Path) -> None:
    """Copy ``source`` recursively into ``target``, merging with existing content.

    ``target`` itself may be created; its parent must already exist.
    """
    shutil.copytree(source, target, dirs_exist_ok=True)
