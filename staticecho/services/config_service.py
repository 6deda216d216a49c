"""Logic helpers for the `staticecho config` command."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import (
    Config,
    load_config,
    reset_config,
    set_chat_port,
    set_host,
    set_port,
    set_refresh_interval,
    set_root,
)
from ..utils import ensure_port, ensure_positive


@dataclass(slots=True)
class ConfigUpdateResult:
    root_set: bool = False
    host_set: bool = False
    port_set: bool = False
    chat_port_set: bool = False
    refresh_interval_set: bool = False
    reset: bool = False

    @property
    def changed(self) -> bool:
        return any(
            (
                self.root_set,
                self.host_set,
                self.port_set,
                self.chat_port_set,
                self.refresh_interval_set,
                self.reset,
            )
        )


def apply_config_updates(
    *,
    root: str | None = None,
    host: str | None = None,
    port: int | None = None,
    chat_port: int | None = None,
    refresh_interval: float | None = None,
    reset: bool = False,
) -> ConfigUpdateResult:
    """Apply config mutations and report which fields were updated.

    A reset is applied first, so ``--reset --set-port 9000`` keeps the port.
    Invalid values raise ``ValueError`` before anything is written.
    """

    if port is not None:
        ensure_port(port)
    if chat_port is not None:
        ensure_port(chat_port)
    if refresh_interval is not None:
        ensure_positive(refresh_interval, "refresh interval")

    result = ConfigUpdateResult()
    if reset:
        reset_config()
        result.reset = True
    if root is not None:
        set_root(root)
        result.root_set = True
    if host is not None:
        set_host(host)
        result.host_set = True
    if port is not None:
        set_port(port)
        result.port_set = True
    if chat_port is not None:
        set_chat_port(chat_port)
        result.chat_port_set = True
    if refresh_interval is not None:
        set_refresh_interval(refresh_interval)
        result.refresh_interval_set = True
    return result


def get_config_snapshot() -> Config:
    """Return the current configuration."""
    return load_config()
