"""Logic helpers for the `staticecho index` command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..resolver import FileResolver, content_type


@dataclass(slots=True)
class IndexEntry:
    request_path: str
    file: Path
    content_type: str


def describe_index(root: Path | str) -> tuple[Path, list[IndexEntry]]:
    """Build the index for *root* once and return its entries sorted by request path."""

    resolver = FileResolver(root)
    entries = [
        IndexEntry(request_path=key, file=file, content_type=content_type(file))
        for key, file in resolver.items()
    ]
    return resolver.root, entries
