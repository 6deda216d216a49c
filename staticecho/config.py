"""Global configuration management for staticecho."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict

from .resolver import DEFAULT_REFRESH_INTERVAL
from .server import DEFAULT_CACHE_MAX_AGE, DEFAULT_CHAT_PORT, DEFAULT_PORT
from .text import Messages

CONFIG_DIR = Path(os.path.expanduser("~")) / ".staticecho"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_ROOT = "public"
DEFAULT_HOST = ""


@dataclass
class Config:
    root: str = DEFAULT_ROOT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    chat_port: int = DEFAULT_CHAT_PORT
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE


def load_config() -> Config:
    if not CONFIG_FILE.exists():
        return Config()
    try:
        raw = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(
            Messages.ERROR_CONFIG_INVALID.format(path=CONFIG_FILE, reason=exc.msg)
        ) from exc
    if not isinstance(raw, dict):
        raw = {}
    try:
        return Config(
            root=raw.get("root") or DEFAULT_ROOT,
            host=str(raw.get("host") or DEFAULT_HOST),
            port=int(raw.get("port", DEFAULT_PORT)),
            chat_port=int(raw.get("chat_port", DEFAULT_CHAT_PORT)),
            refresh_interval=float(raw.get("refresh_interval", DEFAULT_REFRESH_INTERVAL)),
            cache_max_age=int(raw.get("cache_max_age", DEFAULT_CACHE_MAX_AGE)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(
            Messages.ERROR_CONFIG_VALUE.format(path=CONFIG_FILE, reason=exc)
        ) from exc


def save_config(config: Config) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = {}
    if config.root:
        data["root"] = config.root
    if config.host:
        data["host"] = config.host
    data["port"] = config.port
    data["chat_port"] = config.chat_port
    data["refresh_interval"] = config.refresh_interval
    data["cache_max_age"] = config.cache_max_age
    CONFIG_FILE.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def set_root(value: str) -> None:
    config = load_config()
    config.root = value
    save_config(config)


def set_host(value: str) -> None:
    config = load_config()
    config.host = value.strip()
    save_config(config)


def set_port(value: int) -> None:
    config = load_config()
    config.port = value
    save_config(config)


def set_chat_port(value: int) -> None:
    config = load_config()
    config.chat_port = value
    save_config(config)


def set_refresh_interval(value: float) -> None:
    config = load_config()
    config.refresh_interval = value
    save_config(config)


def reset_config() -> None:
    save_config(Config())


def with_overrides(config: Config, **overrides: Any) -> Config:
    """Return a copy of *config* with every non-None override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes)
