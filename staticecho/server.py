"""HTTP front end: route requests to the file resolver or the chat echo handler."""

from __future__ import annotations

from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Callable, Dict
from urllib.parse import unquote, urlsplit

from . import output
from .resolver import DEFAULT_REFRESH_INTERVAL, FileResolver, content_type, normalize_request_path
from .text import Messages

DEFAULT_PORT = 8080
DEFAULT_CHAT_PORT = 8081
DEFAULT_CACHE_MAX_AGE = 300
CHAT_PATH = "/chat"

RouteHandler = Callable[["StaticEchoRequestHandler"], None]


class FileHandler:
    """Serve ``GET`` requests from a :class:`FileResolver`."""

    def __init__(self, resolver: FileResolver, *, cache_max_age: int = DEFAULT_CACHE_MAX_AGE) -> None:
        self.resolver = resolver
        self.cache_max_age = cache_max_age

    def __call__(self, request: "StaticEchoRequestHandler") -> None:
        if request.command != "GET":
            request.send_empty(HTTPStatus.METHOD_NOT_ALLOWED)
            return

        requested_path = normalize_request_path(request.path)
        file = self.resolver.resolve(requested_path)
        if file is None:
            output.log_muted(Messages.LOG_NOT_FOUND.format(path=requested_path))
            request.send_empty(HTTPStatus.NOT_FOUND)
            return

        output.log_muted(Messages.LOG_SENDING.format(path=file))
        try:
            contents = file.read_bytes()
        except OSError as exc:
            output.log_error(Messages.LOG_READ_ERROR.format(error=exc))
            # The index still lists a file that is gone or unreadable.
            self.resolver.rebuild()
            request.send_empty(HTTPStatus.INTERNAL_SERVER_ERROR)
            return

        request.send_body(
            HTTPStatus.OK,
            contents,
            {
                "Content-Type": content_type(file),
                "Cache-Control": f"max-age={self.cache_max_age}",
            },
        )


class ChatHandler:
    """Accept ``POST`` bodies and echo them to the server log."""

    def __call__(self, request: "StaticEchoRequestHandler") -> None:
        if request.command != "POST" or request.url_path != CHAT_PATH:
            request.send_empty(HTTPStatus.METHOD_NOT_ALLOWED)
            return

        try:
            body = request.read_body()
        except ValueError as exc:
            output.log_error(Messages.LOG_BAD_BODY.format(error=exc))
            request.send_empty(HTTPStatus.BAD_REQUEST)
            return

        statement = body.decode("utf-8", errors="replace")
        output.log_info(Messages.LOG_CHAT.format(text=statement))
        request.send_empty(HTTPStatus.OK)


class Dispatcher:
    """Route requests by path prefix; the longest registered prefix wins."""

    def __init__(self) -> None:
        self._routes: Dict[str, RouteHandler] = {}

    def add_route(self, prefix: str, handler: RouteHandler) -> None:
        if not prefix.startswith("/"):
            raise ValueError(f"Route prefix must start with '/': {prefix!r}")
        self._routes[prefix] = handler

    def match(self, path: str) -> RouteHandler | None:
        candidates = [prefix for prefix in self._routes if path.startswith(prefix)]
        if not candidates:
            return None
        return self._routes[max(candidates, key=len)]

    def dispatch(self, request: "StaticEchoRequestHandler") -> None:
        output.log_info(Messages.LOG_REQUEST.format(method=request.command, path=request.url_path))
        handler = self.match(request.url_path)
        if handler is None:
            request.send_empty(HTTPStatus.NOT_FOUND)
            return
        handler(request)


class StaticEchoServer(HTTPServer):
    """Single-threaded HTTP server carrying the dispatcher its handlers use."""

    def __init__(self, server_address: tuple[str, int], dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        super().__init__(server_address, StaticEchoRequestHandler)

    @property
    def port(self) -> int:
        return self.server_address[1]


class StaticEchoRequestHandler(BaseHTTPRequestHandler):
    server: StaticEchoServer

    @property
    def url_path(self) -> str:
        return unquote(urlsplit(self.path).path) or "/"

    def _dispatch(self) -> None:
        try:
            self.server.dispatcher.dispatch(self)
        except (BrokenPipeError, ConnectionResetError) as exc:
            output.log_error(Messages.LOG_SEND_ERROR.format(error=exc))

    do_GET = _dispatch
    do_HEAD = _dispatch
    do_POST = _dispatch
    do_PUT = _dispatch
    do_PATCH = _dispatch
    do_DELETE = _dispatch
    do_OPTIONS = _dispatch

    def read_body(self) -> bytes:
        """Read the whole request body, honouring chunked transfer encoding.

        A malformed ``Content-Length`` or chunk header raises ``ValueError``.
        """
        if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
            return self._read_chunked()
        length = int(self.headers.get("Content-Length") or 0)
        if length <= 0:
            return b""
        return self.rfile.read(length)

    def _read_chunked(self) -> bytes:
        chunks = []
        while True:
            size_line = self.rfile.readline()
            size = int(size_line.split(b";", 1)[0].strip(), 16)
            if size == 0:
                break
            chunks.append(self.rfile.read(size))
            self.rfile.readline()
        # Skip trailers up to the blank line ending the message.
        while self.rfile.readline() not in (b"\r\n", b"\n", b""):
            pass
        return b"".join(chunks)

    def send_empty(self, status: HTTPStatus) -> None:
        self.send_response(status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def send_body(self, status: HTTPStatus, body: bytes, headers: Dict[str, str]) -> None:
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        output.log_muted(f"{self.client_address[0]} {format % args}")


def build_file_server(
    root: Path | str,
    port: int = DEFAULT_PORT,
    *,
    host: str = "",
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE,
) -> StaticEchoServer:
    """Bind a server that serves files from *root*.

    More handlers can be attached afterwards through ``server.dispatcher``.
    Binding errors propagate as ``OSError``.
    """

    resolver = FileResolver(root, refresh_interval=refresh_interval)
    output.log_muted(
        Messages.LOG_INDEXED.format(
            count=len(resolver),
            plural="" if len(resolver) == 1 else "s",
            path=resolver.root,
        )
    )
    dispatcher = Dispatcher()
    dispatcher.add_route("/", FileHandler(resolver, cache_max_age=cache_max_age))
    return StaticEchoServer((host, port), dispatcher)


def build_chat_server(
    root: Path | str,
    port: int = DEFAULT_CHAT_PORT,
    *,
    host: str = "",
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE,
) -> StaticEchoServer:
    """Bind a file server that also accepts ``POST /chat``."""

    server = build_file_server(
        root,
        port,
        host=host,
        refresh_interval=refresh_interval,
        cache_max_age=cache_max_age,
    )
    server.dispatcher.add_route(CHAT_PATH, ChatHandler())
    return server


def serve_until_interrupted(server: StaticEchoServer) -> None:
    """Run *server* on the calling thread until Ctrl+C, then close it."""
    host = server.server_address[0]
    if host in ("", "0.0.0.0"):
        host = "localhost"
    output.log_info(Messages.LOG_LISTENING.format(host=host, port=server.port))
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        output.log_info(Messages.LOG_STOPPED)
    finally:
        server.server_close()
