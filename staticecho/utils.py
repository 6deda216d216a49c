"""Utility helpers for filesystem access and path handling."""

from __future__ import annotations

from pathlib import Path
from typing import List
import os

from .text import Messages


def relative_posix(path: Path, root: Path) -> str:
    rel = path.relative_to(root)
    if rel == Path("."):
        return ""
    return rel.as_posix()


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def collect_files(root: Path | str) -> List[Path]:
    """Collect every regular file below *root*, recursing into subdirectories.

    Symlinks to files are kept; symlinked directories are not descended into.
    Any error while listing a directory (including a missing *root*) aborts
    the walk with the underlying ``OSError``.
    """

    directory = Path(root)
    if not directory.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {directory}")

    files: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
        current_dir = Path(dirpath)
        for filename in filenames:
            candidate = current_dir / filename
            if candidate.is_file():
                files.append(candidate)

    files.sort()
    return files


def format_path(path: Path, base: Path | None = None) -> str:
    """Return a user friendly representation of *path* relative to *base* when possible."""
    if base:
        try:
            relative = path.relative_to(base)
            return f"./{relative.as_posix()}"
        except ValueError:
            return str(path)
    return str(path)


def ensure_positive(value: float, name: str) -> float:
    """Validate that *value* is positive."""
    if value <= 0:
        raise ValueError(Messages.ERROR_POSITIVE.format(name=name))
    return value


def ensure_port(value: int) -> int:
    """Validate that *value* is a usable TCP port number."""
    if not 0 < value < 65536:
        raise ValueError(Messages.ERROR_PORT_RANGE.format(value=value))
    return value
