"""Recently searched keywords and recently watched channels."""

from __future__ import annotations

from typing import Iterable, Optional

MAX_RECENT = 10


def _remember(entries: list[str], value: str, *also_remove: str) -> None:
    for stale in (value, *also_remove):
        while stale in entries:
            entries.remove(stale)
    entries.insert(0, value)
    del entries[MAX_RECENT:]


class RecentHistory:
    """Most-recent-first lists of keywords and channels, each at most ten long."""

    def __init__(
        self,
        keywords: Optional[Iterable[str]] = None,
        channels: Optional[Iterable[str]] = None,
    ):
        self.keywords = list(keywords or [])
        self.channels = list(channels or [])

    def remember_keywords(self, query: str, first_title: str = "") -> list[str]:
        """Record a search; for a URL the first result's title is stored with it."""
        if not query:
            return self.keywords
        if query.startswith("http://"):
            query = f"{query}|{first_title}"
        _remember(self.keywords, query)
        return self.keywords

    def remember_channel(
        self, channel_id: str, video_channel_id: str, video_channel_title: str
    ) -> list[str]:
        """Record a channel search as 'id|title', or the title alone when they agree."""
        if not channel_id:
            return self.channels
        if video_channel_id and video_channel_id != video_channel_title:
            value = f"{video_channel_id}|{video_channel_title}"
        else:
            value = video_channel_title
        _remember(self.channels, value, channel_id)
        return self.channels