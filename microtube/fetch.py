"""Fetch a whole HTTP resource into memory."""

from __future__ import annotations

from typing import Optional

from microtube.transfer import DownloadError, HttpTransport


class FetchError(Exception):
    """Raised when a resource cannot be fetched."""

    def __init__(self, message: str, url: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


def fetch_bytes(url: str, timeout: float = 30.0) -> bytes:
    """Return the body of a GET request to url."""
    try:
        with HttpTransport().open(url, timeout=timeout) as response:
            if not response.ok:
                raise FetchError(f"{url} returned HTTP {response.status}", url, response.status)
            return b"".join(response)
    except DownloadError as error:
        raise FetchError(str(error), url) from error
    except OSError as error:
        raise FetchError(f"reading {url} failed: {error}", url) from error