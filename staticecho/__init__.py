"""staticecho package initialization."""

from __future__ import annotations

from .resolver import FileResolver, content_type, normalize_request_path
from .server import Dispatcher, build_chat_server, build_file_server

__all__ = [
    "__version__",
    "Dispatcher",
    "FileResolver",
    "build_chat_server",
    "build_file_server",
    "content_type",
    "get_version",
    "normalize_request_path",
]

__version__ = "0.3.0"


def get_version() -> str:
    """Return the current package version."""
    return __version__
