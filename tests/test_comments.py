import json

import pytest

from microtube.comments import SHOW_MORE, Comment, CommentList, comments_url

BASE = "https://inv.example.com/api/v1"


def page(comments, continuation="next-page"):
    return json.dumps({"continuation": continuation, "comments": comments}).encode()


FIRST = page(
    [
        {
            "commentId": "c1",
            "content": "Great video",
            "author": "Alice",
            "authorThumbnails": [{"url": "small.jpg"}, {"url": "large.jpg"}],
        },
        {"commentId": "c2", "content": "Thanks", "author": "Bob", "authorThumbnails": []},
        "not an object",
    ]
)
SECOND = page([{"commentId": "c3", "content": "More", "author": "Carol"}], continuation="")


class FakeFetch:
    def __init__(self, *payloads):
        self.payloads = list(payloads)
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)
        return self.payloads.pop(0)


def test_first_page_url():
    assert comments_url(BASE, "abc") == f"{BASE}/comments/abc?maxResults=20"


def test_continuation_url():
    assert comments_url(BASE + "/", "abc", "tok") == f"{BASE}/comments/abc?continuation=tok"


def test_missing_base_url_raises():
    with pytest.raises(ValueError):
        comments_url("", "abc")


def test_load_parses_comments():
    fetch = FakeFetch(FIRST)
    comments = CommentList(BASE, fetch)
    added = comments.load("abc")
    assert fetch.urls == [comments_url(BASE, "abc")]
    assert added[0] == Comment("c1", "Great video", "Alice", "large.jpg")
    assert added[1].author_profile_image == ""
    assert len(comments) == len(added) + 1
    assert comments.rows()[-1] == SHOW_MORE
    assert SHOW_MORE.text == "Show more"


def test_load_more_uses_continuation_and_appends():
    fetch = FakeFetch(FIRST, SECOND)
    comments = CommentList(BASE, fetch)
    comments.load("abc")
    added = comments.load_more()
    assert fetch.urls[1] == comments_url(BASE, "abc", "next-page")
    assert [c.id for c in comments.rows()[:-1]] == ["c1", "c2", "c3"]
    assert added == [Comment("c3", "More", "Carol", "")]
    assert comments.continuation == ""


def test_load_replaces_previous_comments():
    fetch = FakeFetch(FIRST, SECOND)
    comments = CommentList(BASE, fetch)
    comments.load("abc")
    comments.load("xyz")
    assert [c.id for c in comments.comments] == ["c3"]
    assert comments.video_id == "xyz"


def test_load_more_without_video_raises():
    with pytest.raises(ValueError):
        CommentList(BASE, FakeFetch()).load_more()


def test_invalid_payload_adds_nothing():
    comments = CommentList(BASE, FakeFetch())
    assert comments.parse(b"not json") == []
    assert comments.parse(b"[1, 2]") == []
    assert len(comments) == 1
    assert comments.rows() == [SHOW_MORE]


def test_non_string_fields_become_empty():
    comments = CommentList(BASE, FakeFetch())
    added = comments.parse(page([{"commentId": 7, "content": None, "author": ["x"]}]))
    assert added == [Comment("", "", "", "")]