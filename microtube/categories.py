"""The fixed list of video categories and the feed each one maps to."""

from __future__ import annotations

from dataclasses import dataclass

_CATEGORY_NAMES = ("Most Popular", "Trending", "Music", "News", "Movies", "Gaming")

_FEEDS = {
    1: "trending?",
    2: "trending?type=music&",
    3: "trending?type=news&",
    4: "trending?type=movies&",
    5: "trending?type=gaming&",
}
_DEFAULT_FEED = "popular?"


@dataclass(frozen=True)
class Category:
    """A browsable category; its id is its row in the category list."""

    id: int
    name: str
    photo: str = ""


def default_categories() -> list[Category]:
    """The categories offered for browsing, in display order."""
    return [Category(id=index, name=name) for index, name in enumerate(_CATEGORY_NAMES)]


def category_feed_path(category_id: int, region: str) -> str:
    """API path, with query, of the feed that lists a category's videos.

    Unknown ids fall back to the most popular feed.
    """
    prefix = _FEEDS.get(category_id, _DEFAULT_FEED)
    return f"{prefix}region={region}"