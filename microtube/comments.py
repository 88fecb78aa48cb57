"""Video comment threads loaded page by page from a comments API."""

from __future__ import annotations

import json
import urllib.parse
from dataclasses import dataclass
from typing import Callable, Optional, Union

from microtube.fetch import fetch_bytes

PAGE_SIZE = 20


@dataclass
class Comment:
    """A top-level comment."""

    id: str = ""
    text: str = ""
    author: str = ""
    author_profile_image: str = ""


SHOW_MORE = Comment(id="-1", text="Show more", author="", author_profile_image="")


def comments_url(base_url: str, video_id: str, continuation: Optional[str] = None) -> str:
    """URL of a page of comments; the first page when continuation is None."""
    if not base_url:
        raise ValueError("no base URL for the comments API")
    if continuation is None:
        query = {"maxResults": str(PAGE_SIZE)}
    else:
        query = {"continuation": continuation}
    path = urllib.parse.quote(video_id, safe="")
    return f"{base_url.rstrip('/')}/comments/{path}?{urllib.parse.urlencode(query)}"


def _string(value) -> str:
    return value if isinstance(value, str) else ""


def _comment_from(item: dict) -> Comment:
    thumbnails = item.get("authorThumbnails")
    image = ""
    if isinstance(thumbnails, list) and thumbnails and isinstance(thumbnails[-1], dict):
        image = _string(thumbnails[-1].get("url"))
    return Comment(
        id=_string(item.get("commentId")),
        text=_string(item.get("content")),
        author=_string(item.get("author")),
        author_profile_image=image,
    )


class CommentList:
    """The comments of one video, followed by a 'Show more' row."""

    def __init__(self, base_url: str, fetch: Callable[[str], bytes] = fetch_bytes):
        self.base_url = base_url
        self.fetch = fetch
        self.video_id = ""
        self.continuation = ""
        self.comments: list[Comment] = []

    def load(self, video_id: str) -> list[Comment]:
        """Replace the list with the first page of comments of video_id."""
        url = comments_url(self.base_url, video_id)
        self.comments = []
        self.video_id = video_id
        return self.parse(self.fetch(url))

    def load_more(self) -> list[Comment]:
        """Append the next page of comments."""
        if not self.video_id:
            raise ValueError("no video loaded")
        url = comments_url(self.base_url, self.video_id, self.continuation)
        return self.parse(self.fetch(url))

    def parse(self, payload: Union[bytes, str]) -> list[Comment]:
        """Append the comments of one API response and return them."""
        try:
            document = json.loads(payload)
        except (ValueError, TypeError):
            document = {}
        if not isinstance(document, dict):
            document = {}
        self.continuation = _string(document.get("continuation"))
        items = document.get("comments")
        if not isinstance(items, list):
            return []
        added = [_comment_from(item) for item in items if isinstance(item, dict)]
        self.comments.extend(added)
        return added

    def rows(self) -> list[Comment]:
        """The comments followed by the 'Show more' row."""
        return [*self.comments, SHOW_MORE]

    def __len__(self) -> int:
        return len(self.comments) + 1