import json
import urllib.parse

from microtube.fetch import FetchError
from microtube.sponsorblock import API_URL, SponsorBlock, hash_prefix, skip_segments_url


def _payload(video_id, segments, other="other"):
    return json.dumps(
        [
            {"videoID": other, "segments": [{"segment": [1, 2]}]},
            {"videoID": video_id, "segments": segments},
        ]
    ).encode()


def test_hash_prefix_known_value():
    assert hash_prefix("abc") == "ba78"


def test_hash_prefix_length_and_hex():
    prefix = hash_prefix("dQw4w9WgXcQ")
    assert len(prefix) == 4
    assert int(prefix, 16) >= 0


def test_skip_segments_url_shape():
    url = skip_segments_url("abc", ["sponsor", "intro"])
    parts = urllib.parse.urlsplit(url)
    assert url.startswith(API_URL + "/skipSegments/ba78?")
    query = urllib.parse.parse_qs(parts.query)
    assert json.loads(query["categories"][0]) == ["sponsor", "intro"]


def test_disabled_returns_empty_without_fetching():
    calls = []
    block = SponsorBlock(fetch=lambda url: calls.append(url) or b"[]", enabled=False)
    block.video_id = "abc"
    assert block.skip_segments() == ""
    assert calls == []


def test_fetch_and_cache():
    calls = []
    segments = [{"segment": [10, 20], "category": "sponsor"}]

    def fetch(url):
        calls.append(url)
        return _payload("vid", segments)

    block = SponsorBlock(fetch=fetch, enabled=True, categories=["sponsor"])
    block.video_id = "vid"
    first = block.skip_segments()
    assert json.loads(first) == segments
    assert " " not in first
    assert block.skip_segments() == first
    assert len(calls) == 1


def test_changing_video_clears_cache():
    block = SponsorBlock(fetch=lambda url: b"[]", enabled=True)
    block.video_id = "one"
    block.parse_skip_segments(_payload("one", [{"segment": [1, 3]}]))
    assert block.skip_segments() != ""
    block.video_id = "two"
    assert block.skip_segments() == ""


def test_same_video_keeps_cache():
    block = SponsorBlock(fetch=lambda url: b"[]", enabled=True)
    block.video_id = "one"
    result = block.parse_skip_segments(_payload("one", [{"segment": [1, 3]}]))
    block.video_id = "one"
    assert block.skip_segments() == result


def test_parse_ignores_other_videos():
    block = SponsorBlock()
    block.video_id = "mine"
    assert block.parse_skip_segments(_payload("theirs", [{"segment": [5, 6]}], other="x")) == ""


def test_parse_invalid_json():
    block = SponsorBlock()
    block.video_id = "mine"
    assert block.parse_skip_segments(b"not json") == ""


def test_fetch_error_yields_empty():
    def fetch(url):
        raise FetchError("down", url)

    block = SponsorBlock(fetch=fetch, enabled=True)
    block.video_id = "vid"
    assert block.skip_segments() == ""