"""Helpers for writing timestamped server logs to the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .text import Styles

LOG_TIME_FORMAT = "[%Y-%m-%d %H:%M:%S]"

console = Console(log_path=False, log_time_format=LOG_TIME_FORMAT)
error_console = Console(stderr=True, log_path=False, log_time_format=LOG_TIME_FORMAT)


def styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/{style}]"


def log_info(message: str) -> None:
    """Log a routine server event; *message* is treated as plain text."""
    console.log(escape(message))


def log_muted(message: str) -> None:
    console.log(styled(escape(message), Styles.INFO))


def log_error(message: str) -> None:
    error_console.log(styled(escape(message), Styles.ERROR))
