"""Command line interface for staticecho."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import typer
from rich.markup import escape
from rich.table import Table

from . import __version__, output
from .config import Config, with_overrides
from .output import console, styled
from .server import StaticEchoServer, build_chat_server, build_file_server, serve_until_interrupted
from .services.config_service import apply_config_updates, get_config_snapshot
from .services.index_service import describe_index
from .text import Messages, Styles
from .utils import ensure_port, ensure_positive, format_path

ServerBuilder = Callable[..., StaticEchoServer]

app = typer.Typer(
    help=Messages.APP_HELP,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _print(message: str, style: str) -> None:
    console.print(styled(escape(message), style))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"staticecho v{__version__}")
        raise typer.Exit()


def _load_config_or_exit() -> Config:
    try:
        return get_config_snapshot()
    except ValueError as exc:
        _print(str(exc), Styles.ERROR)
        raise typer.Exit(code=1)


def _resolve_root(root: Path | None, config: Config) -> Path:
    default = Path(config.root).expanduser()
    if root is not None:
        directory = root.expanduser()
        if directory.is_dir():
            return directory
        _print(
            Messages.WARNING_ROOT_IGNORED.format(path=directory, fallback=default),
            Styles.WARNING,
        )
    if not default.is_dir():
        _print(Messages.WARNING_ROOT_MISSING.format(path=default), Styles.WARNING)
    return default


def _start_server(builder: ServerBuilder, root: Path, port: int, config: Config) -> None:
    try:
        ensure_port(port)
        ensure_positive(config.refresh_interval, "refresh interval")
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    try:
        server = builder(
            root,
            port,
            host=config.host,
            refresh_interval=config.refresh_interval,
            cache_max_age=config.cache_max_age,
        )
    except OSError as exc:
        output.log_error(Messages.ERROR_START.format(error=exc))
        raise typer.Exit(code=1)
    serve_until_interrupted(server)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    )
) -> None:
    """Global Typer callback for shared options."""
    return None


@app.command(help=Messages.HELP_SERVE)
def serve(
    root: Path | None = typer.Argument(
        None,
        metavar="[ROOT_FOLDER]",
        help=Messages.HELP_ROOT,
        show_default=False,
    ),
    port: int | None = typer.Option(None, "--port", "-p", help=Messages.HELP_PORT),
    host: str | None = typer.Option(None, "--host", help=Messages.HELP_HOST),
    refresh_interval: float | None = typer.Option(
        None,
        "--refresh-interval",
        help=Messages.HELP_REFRESH,
    ),
) -> None:
    config = with_overrides(
        _load_config_or_exit(),
        host=host,
        refresh_interval=refresh_interval,
    )
    directory = _resolve_root(root, config)
    _start_server(
        build_file_server,
        directory,
        port if port is not None else config.port,
        config,
    )


@app.command(help=Messages.HELP_CHAT)
def chat(
    root: Path | None = typer.Argument(
        None,
        metavar="[ROOT_FOLDER]",
        help=Messages.HELP_ROOT,
        show_default=False,
    ),
    port: int | None = typer.Option(None, "--port", "-p", help=Messages.HELP_PORT),
    host: str | None = typer.Option(None, "--host", help=Messages.HELP_HOST),
    refresh_interval: float | None = typer.Option(
        None,
        "--refresh-interval",
        help=Messages.HELP_REFRESH,
    ),
) -> None:
    config = with_overrides(
        _load_config_or_exit(),
        host=host,
        refresh_interval=refresh_interval,
    )
    directory = _resolve_root(root, config)
    _start_server(
        build_chat_server,
        directory,
        port if port is not None else config.chat_port,
        config,
    )


@app.command(help=Messages.HELP_INDEX)
def index(
    root: Path | None = typer.Argument(
        None,
        metavar="[ROOT_FOLDER]",
        help=Messages.HELP_ROOT,
        show_default=False,
    ),
) -> None:
    config = _load_config_or_exit()
    directory = _resolve_root(root, config)
    base, entries = describe_index(directory)
    if not entries:
        _print(Messages.INFO_NO_FILES.format(path=base), Styles.WARNING)
        return

    table = Table(
        title=escape(Messages.TABLE_TITLE.format(path=base)),
        show_header=True,
        header_style=Styles.TABLE_HEADER,
    )
    table.add_column(Messages.TABLE_HEADER_REQUEST, overflow="fold")
    table.add_column(Messages.TABLE_HEADER_FILE, overflow="fold")
    table.add_column(Messages.TABLE_HEADER_TYPE, no_wrap=True)
    for entry in entries:
        table.add_row(
            escape(entry.request_path),
            escape(format_path(entry.file, base)),
            entry.content_type,
        )
    console.print(table)


@app.command(help=Messages.HELP_CONFIG)
def config(
    show: bool = typer.Option(False, "--show", help=Messages.HELP_SHOW_CONFIG),
    set_root_option: str | None = typer.Option(
        None,
        "--set-root",
        help=Messages.HELP_SET_ROOT,
    ),
    set_host_option: str | None = typer.Option(
        None,
        "--set-host",
        help=Messages.HELP_SET_HOST,
    ),
    set_port_option: int | None = typer.Option(
        None,
        "--set-port",
        help=Messages.HELP_SET_PORT,
    ),
    set_chat_port_option: int | None = typer.Option(
        None,
        "--set-chat-port",
        help=Messages.HELP_SET_CHAT_PORT,
    ),
    set_refresh_option: float | None = typer.Option(
        None,
        "--set-refresh-interval",
        help=Messages.HELP_SET_REFRESH,
    ),
    reset: bool = typer.Option(False, "--reset", help=Messages.HELP_RESET_CONFIG),
) -> None:
    """Configure default root, host, ports and refresh interval."""
    try:
        updates = apply_config_updates(
            root=set_root_option,
            host=set_host_option,
            port=set_port_option,
            chat_port=set_chat_port_option,
            refresh_interval=set_refresh_option,
            reset=reset,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    if updates.reset:
        _print(Messages.INFO_CONFIG_RESET, Styles.SUCCESS)
    if updates.root_set:
        _print(Messages.INFO_ROOT_SET.format(value=set_root_option), Styles.SUCCESS)
    if updates.host_set:
        _print(Messages.INFO_HOST_SET.format(value=set_host_option or "all interfaces"), Styles.SUCCESS)
    if updates.port_set:
        _print(Messages.INFO_PORT_SET.format(value=set_port_option), Styles.SUCCESS)
    if updates.chat_port_set:
        _print(Messages.INFO_CHAT_PORT_SET.format(value=set_chat_port_option), Styles.SUCCESS)
    if updates.refresh_interval_set:
        _print(Messages.INFO_REFRESH_SET.format(value=set_refresh_option), Styles.SUCCESS)

    if show:
        cfg = _load_config_or_exit()
        _print(
            Messages.INFO_CONFIG_SUMMARY.format(
                root=cfg.root,
                host=cfg.host or "all interfaces",
                port=cfg.port,
                chat_port=cfg.chat_port,
                refresh=cfg.refresh_interval,
                max_age=cfg.cache_max_age,
            ),
            Styles.INFO,
        )
    elif not updates.changed:
        _print(Messages.INFO_CONFIG_UNCHANGED, Styles.INFO)


def run(argv: list[str] | None = None) -> None:
    """Entry point wrapper allowing optional argument override."""
    args = list(argv) if argv is not None else sys.argv[1:]
    if argv is None:
        app()
    else:
        app(args=args)
