"""HTTP transfer primitives: responses, a urllib transport and progress helpers."""

from __future__ import annotations

import socket
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Mapping, Optional

CHUNK_SIZE = 64 * 1024
DEFAULT_NAME = "download"


class DownloadError(Exception):
    """Raised when a transfer cannot be started or fails on the wire."""

    def __init__(self, message: str, url: str = "", file_name: str = "", code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.file_name = file_name
        self.code = code


@dataclass
class Response:
    """An open HTTP response whose body is consumed by iterating over it."""

    status: int
    headers: Mapping[str, str]
    total: int = -1
    chunks: Iterable[bytes] = ()
    closer: Optional[Callable[[], None]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.headers = {key.lower(): value for key, value in self.headers.items()}

    def header(self, name: str, default: str = "") -> str:
        """Return a header value, looked up without regard to case."""
        return self.headers.get(name.lower(), default)

    @property
    def ok(self) -> bool:
        return self.status < 400

    @property
    def accepts_ranges(self) -> bool:
        """True when the server announces byte range support."""
        return self.header("Accept-Ranges").strip().lower() == "bytes"

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.chunks)

    def close(self) -> None:
        if self.closer is not None:
            closer, self.closer = self.closer, None
            closer()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@dataclass(frozen=True)
class Progress:
    """A snapshot of one download's progress."""

    received: int
    total: int
    percent: int
    speed: float
    unit: str
    url: str
    file_name: str


def save_file_name(url: str) -> str:
    """Return the last path component of a URL, or 'download' when there is none."""
    path = urllib.parse.urlsplit(url).path
    basename = path.rsplit("/", 1)[-1]
    return basename or DEFAULT_NAME


def format_speed(bytes_per_second: float) -> tuple[float, str]:
    """Scale a byte rate to bytes/sec, kB/s or MB/s."""
    if bytes_per_second < 1024:
        return float(bytes_per_second), "bytes/sec"
    if bytes_per_second < 1024 * 1024:
        return bytes_per_second / 1024, "kB/s"
    return bytes_per_second / (1024 * 1024), "MB/s"


def percentage(received: int, already_present: int, total: int) -> int:
    """Percentage done, counting bytes already on disk before this transfer."""
    denominator = already_present + total
    if denominator <= 0:
        return 0
    return int((already_present + received) * 100.0 / denominator)


def range_header(offset: int, total: int) -> str:
    """Build the value of a Range header starting at offset."""
    value = f"bytes={offset}-"
    if total > 0:
        value += str(total)
    return value


def _read_chunks(stream, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _content_length(headers) -> int:
    value = headers.get("Content-Length")
    if value is None:
        return -1
    try:
        return int(value)
    except ValueError:
        return -1


class HttpTransport:
    """Opens HTTP(S) requests with urllib, optionally asking for a byte range."""

    def __init__(self, headers: Optional[Mapping[str, str]] = None):
        self.headers = dict(headers or {})

    def open(self, url: str, start: int = 0, end: int = 0, timeout: float = 5.0) -> Response:
        """Start a GET request; a range is requested when start is positive."""
        request = urllib.request.Request(url, headers=self.headers, method="GET")
        request.add_header("Connection", "Keep-Alive")
        if start > 0:
            request.add_header("Range", range_header(start, end))
        try:
            handle = urllib.request.urlopen(request, timeout=timeout)
        except urllib.error.HTTPError as error:
            return Response(
                status=error.code,
                headers=dict(error.headers.items()) if error.headers else {},
                total=_content_length(error.headers or {}),
                chunks=_read_chunks(error),
                closer=error.close,
            )
        except (urllib.error.URLError, socket.timeout, OSError, ValueError) as error:
            raise DownloadError(f"cannot open {url}: {error}", url=url) from error
        return Response(
            status=handle.status,
            headers=dict(handle.headers.items()),
            total=_content_length(handle.headers),
            chunks=_read_chunks(handle),
            closer=handle.close,
        )