"""Map request paths to files under a root folder, with a rate-limited rescan on misses."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Dict, Iterator
from urllib.parse import unquote, urlsplit

from . import output
from .text import Messages
from .utils import collect_files, relative_posix

DEFAULT_REFRESH_INTERVAL = 5.0
DEFAULT_CONTENT_TYPE = "text/plain"
INDEX_DOCUMENT = "index.html"

CONTENT_TYPES: dict[str, str] = {
    "html": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "ico": "image/x-icon",
    "svg": "image/svg+xml",
}


def content_type(path: Path | str) -> str:
    """Return the MIME type for *path* based on its (case-sensitive) extension."""
    name = Path(path).name
    extension = name.rsplit(".", 1)[-1]
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def normalize_request_path(raw: str) -> str:
    """Turn a raw request target into an index key.

    Query and fragment are dropped, percent escapes decoded, and paths that
    name a directory (trailing ``/``) point at its ``index.html``.
    """

    path = unquote(urlsplit(raw).path) or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    if path.endswith("/"):
        path += INDEX_DOCUMENT
    return path


class FileResolver:
    """In-memory index of the files under *root*, keyed by request path.

    The index is built on construction and rebuilt wholesale. A lookup miss
    triggers a rebuild only when more than ``refresh_interval`` seconds have
    passed since the previous one; :meth:`rebuild` itself is never limited.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.root = Path(root).expanduser().absolute()
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._files: Dict[str, Path] = {}
        self.last_refresh = 0.0
        self.rebuild()

    def resolve(self, requested_path: str) -> Path | None:
        """Return the file mapped to *requested_path*, or None when unknown."""
        file = self._files.get(requested_path)
        if file is None and self._clock() - self.last_refresh > self.refresh_interval:
            output.log_muted(Messages.LOG_REFRESHING)
            self.rebuild()
            file = self._files.get(requested_path)
        return file

    def rebuild(self) -> int:
        """Rescan the root folder and replace the index; returns the file count."""
        try:
            files = collect_files(self.root)
        except OSError as exc:
            output.log_error(Messages.LOG_WALK_ERROR.format(error=exc))
            files = []

        self._files = {f"/{relative_posix(file, self.root)}": file for file in files}
        self.last_refresh = self._clock()
        return len(self._files)

    def paths(self) -> list[str]:
        return sorted(self._files)

    def items(self) -> Iterator[tuple[str, Path]]:
        for key in self.paths():
            yield key, self._files[key]

    def __contains__(self, requested_path: object) -> bool:
        return requested_path in self._files

    def __len__(self) -> int:
        return len(self._files)
