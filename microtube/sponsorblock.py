"""Look up sponsored segments of a video so that playback can skip them."""

from __future__ import annotations

import hashlib
import json
import urllib.parse
from typing import Callable, Iterable, Optional, Union

from microtube.fetch import FetchError, fetch_bytes

API_URL = "https://sponsor.ajay.app/api"


def hash_prefix(video_id: str) -> str:
    """First four hex digits of the SHA-256 of the video id."""
    return hashlib.sha256(video_id.encode("utf-8")).hexdigest()[:4]


def _compact(value) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def skip_segments_url(video_id: str, categories: Iterable[str] = ()) -> str:
    """URL asking for the segments of every video sharing the id's hash prefix."""
    query = urllib.parse.urlencode({"categories": _compact(list(categories))})
    return f"{API_URL}/skipSegments/{hash_prefix(video_id)}?{query}"


class SponsorBlock:
    """Segments to skip for the current video, fetched once per video."""

    def __init__(
        self,
        fetch: Callable[[str], bytes] = fetch_bytes,
        enabled: bool = False,
        categories: Optional[Iterable[str]] = None,
    ):
        self.fetch = fetch
        self.enabled = enabled
        self.categories = list(categories or [])
        self._video_id = ""
        self._skip_segments = ""

    @property
    def video_id(self) -> str:
        return self._video_id

    @video_id.setter
    def video_id(self, value: str) -> None:
        if value != self._video_id:
            self._skip_segments = ""
        self._video_id = value

    def skip_segments(self) -> str:
        """Segments of the current video as compact JSON, or '' when none are known."""
        if not self.enabled:
            return ""
        if self._skip_segments:
            return self._skip_segments
        try:
            payload = self.fetch(skip_segments_url(self._video_id, self.categories))
        except FetchError:
            return ""
        return self.parse_skip_segments(payload)

    def parse_skip_segments(self, payload: Union[bytes, str]) -> str:
        """Pick the current video's segments out of an API response."""
        try:
            document = json.loads(payload)
        except (ValueError, TypeError):
            document = []
        if not isinstance(document, list):
            document = []
        for entry in document:
            if not isinstance(entry, dict) or entry.get("videoID") != self._video_id:
                continue
            segments = entry.get("segments")
            self._skip_segments = _compact(segments if isinstance(segments, list) else [])
        return self._skip_segments