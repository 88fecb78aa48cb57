"""Queued file downloads with resuming, pausing and one-at-a-time iteration."""

from __future__ import annotations

import argparse
import enum
import sys
import threading
import time
from collections import deque
from pathlib import Path
from typing import Callable, Optional

from microtube.transfer import (
    DownloadError,
    HttpTransport,
    Progress,
    format_speed,
    percentage,
    save_file_name,
)

FinishedCallback = Callable[[str, str], None]
ProgressCallback = Callable[[Progress], None]
ErrorCallback = Callable[[DownloadError], None]
DebugCallback = Callable[[str], None]


class _Outcome(enum.Enum):
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"
    PAUSED = "paused"


class Downloader:
    """Downloads queued URLs to files, one after another.

    Before each transfer a probing GET learns the size and whether byte
    ranges are accepted, so partially present files are continued rather
    than fetched again. In iterated mode only one entry is downloaded per
    call to run() or next().
    """

    def __init__(
        self,
        transport=None,
        folder="",
        resume: bool = True,
        iterated: bool = False,
        timeout: float = 5.0,
        on_finished: Optional[FinishedCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_debug: Optional[DebugCallback] = None,
    ):
        self.transport = transport if transport is not None else HttpTransport()
        self.folder = str(folder) if folder else ""
        self.resume_downloads = resume
        self.iterated = iterated
        self.timeout = timeout
        self.on_finished = on_finished
        self.on_progress = on_progress
        self.on_error = on_error
        self.on_debug = on_debug

        self._lock = threading.RLock()
        self._queue: deque[tuple[str, str]] = deque()
        self._paused = False
        self._active = False
        self._can_iterate = False
        self._url = ""
        self._file_name = ""
        self._accept_ranges = False
        self._total = -1
        self._offset = 0

    # --- queue -----------------------------------------------------------

    def enqueue(self, url: str, file_name: Optional[str] = None) -> str:
        """Queue a URL; the file name defaults to the URL's last path component."""
        name = file_name if file_name is not None else save_file_name(url)
        path = f"{self.folder}/{name}" if self.folder else name
        with self._lock:
            self._queue.append((url, path))
        self._debug(f"Queued:: {url} -> {name}")
        return path

    def has_next(self) -> bool:
        """True while entries are waiting in the queue."""
        with self._lock:
            return bool(self._queue)

    def _take(self) -> Optional[tuple[str, str]]:
        with self._lock:
            return self._queue.popleft() if self._queue else None

    # --- control ---------------------------------------------------------

    def run(self) -> list[tuple[str, str]]:
        """Process the queue and return the (url, path) pairs finished."""
        with self._lock:
            if self._paused or self._active:
                return []
            if self.iterated and self._can_iterate:
                return []
        return self._drive()

    def next(self) -> list[tuple[str, str]]:
        """In iterated mode, download the next queued entry."""
        with self._lock:
            if not self.iterated or not self._can_iterate:
                return []
            self._can_iterate = False
        return self._drive()

    def pause(self) -> bool:
        """Ask the running transfer to stop after the current chunk."""
        with self._lock:
            if not self._active or self._paused:
                return False
            self._paused = True
        self._debug(f"Paused:: {self._url}")
        return True

    def resume(self) -> list[tuple[str, str]]:
        """Continue a paused transfer, then the rest of the queue."""
        with self._lock:
            if not self._paused or self._active:
                return []
            self._paused = False
        self._debug(f"Resumed:: {self._url}")
        target = Path(self._file_name)
        self._offset = target.stat().st_size if target.exists() else 0
        return self._drive(self._transfer())

    # --- work ------------------------------------------------------------

    def _drive(self, outcome: Optional[_Outcome] = None) -> list[tuple[str, str]]:
        completed: list[tuple[str, str]] = []
        while True:
            if outcome is not None:
                if outcome is _Outcome.PAUSED:
                    return completed
                if outcome is _Outcome.DONE:
                    completed.append((self._url, self._file_name))
                if self.iterated:
                    with self._lock:
                        self._can_iterate = True
                    return completed
            entry = self._take()
            if entry is None:
                return completed
            outcome = self._start(entry)

    def _start(self, entry: tuple[str, str]) -> _Outcome:
        self._url, self._file_name = entry
        if not self._url or not self._file_name:
            self._debug("URL is empty , Therefore moving onto the next.")
            return _Outcome.SKIPPED
        self._debug(f"Starting:: {self._url} -> {self._file_name}")

        try:
            with self.transport.open(self._url, 0, 0, self.timeout) as head:
                status, total, accept = head.status, head.total, head.accepts_ranges
        except DownloadError as error:
            return self._fail(error)

        if status >= 400:
            self._debug("HTTP(S) Response code seems to be >= 400 , Therefore moving onto the next.")
            return _Outcome.SKIPPED

        self._accept_ranges = accept
        self._total = total
        target = Path(self._file_name)
        try:
            if not accept or not self.resume_downloads:
                target.unlink(missing_ok=True)
            with open(target, "ab"):
                pass
            self._offset = target.stat().st_size
        except OSError as error:
            return self._fail(DownloadError(f"cannot open {target}: {error}"))

        if self._total == self._offset:
            return self._finish()
        return self._transfer()

    def _transfer(self) -> _Outcome:
        target = Path(self._file_name)
        if self._accept_ranges:
            self._debug("It seems the server supports 'Range' requests.")
            start = self._offset
        else:
            self._debug(
                "The server does not support 'Range' requests , Therefore downloading the entire file."
            )
            start = 0
            if self._offset:
                target.write_bytes(b"")
                self._offset = 0

        try:
            response = self.transport.open(self._url, start, max(self._total, 0), self.timeout)
        except DownloadError as error:
            return self._fail(error)

        with self._lock:
            self._active = True
        started = time.monotonic()
        received = 0
        try:
            with response, open(target, "ab") as stream:
                if not response.ok:
                    raise DownloadError(
                        f"{self._url} returned HTTP {response.status}", code=response.status
                    )
                for chunk in response:
                    stream.write(chunk)
                    received += len(chunk)
                    self._report(received, response.total, started)
                    if self._paused:
                        stream.flush()
                        self._offset += received
                        return _Outcome.PAUSED
        except DownloadError as error:
            return self._fail(error)
        except TimeoutError as error:
            self._debug(f"Timeout:: {self._url}")
            return self._fail(DownloadError(f"timeout while reading {self._url}: {error}"))
        except OSError as error:
            return self._fail(DownloadError(f"transfer of {self._url} failed: {error}"))
        finally:
            with self._lock:
                self._active = False
        return self._finish()

    def _report(self, received: int, total: int, started: float) -> None:
        if self.on_progress is None:
            return
        reply_total = total if total >= 0 else received
        elapsed = max(time.monotonic() - started, 1e-3)
        speed, unit = format_speed(received / elapsed)
        self.on_progress(
            Progress(
                received=received,
                total=reply_total,
                percent=percentage(received, self._offset, reply_total),
                speed=speed,
                unit=unit,
                url=self._url,
                file_name=self._file_name,
            )
        )

    def _finish(self) -> _Outcome:
        self._debug(f"Finishing:: {self._url} -> {self._file_name}")
        if self.on_finished is not None:
            self.on_finished(self._url, self._file_name)
        return _Outcome.DONE

    def _fail(self, error: DownloadError) -> _Outcome:
        error.url = error.url or self._url
        error.file_name = error.file_name or self._file_name
        self._debug(f"Error:: {self._url} (Error Code -> {error.code} )")
        if self.on_error is None:
            raise error
        self.on_error(error)
        return _Outcome.FAILED

    def _debug(self, message: str) -> None:
        if self.on_debug is not None:
            self.on_debug(message)


def main(argv=None) -> int:
    """Download the URLs given on the command line."""
    parser = argparse.ArgumentParser(prog="microtube-download", description="Download files over HTTP.")
    parser.add_argument("urls", nargs="+", help="URLs to download")
    parser.add_argument("-d", "--folder", default="", help="directory to save files in")
    parser.add_argument("--no-resume", action="store_true", help="overwrite partial files")
    parser.add_argument("--iterated", action="store_true", help="download one file at a time")
    parser.add_argument("--timeout", type=float, default=5.0, help="network timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="print debug messages")
    args = parser.parse_args(argv)

    failures: list[DownloadError] = []

    def finished(url: str, file_name: str) -> None:
        print(f"Downloaded :: {file_name} :: FROM :: {url}")

    def debug(message: str) -> None:
        print(message, file=sys.stderr)

    downloader = Downloader(
        folder=args.folder,
        resume=not args.no_resume,
        iterated=args.iterated,
        timeout=args.timeout,
        on_finished=finished,
        on_error=failures.append,
        on_debug=debug if args.verbose else None,
    )
    for url in args.urls:
        downloader.enqueue(url)

    downloader.run()
    while downloader.has_next():
        downloader.next()

    for failure in failures:
        print(f"error: {failure}", file=sys.stderr)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())