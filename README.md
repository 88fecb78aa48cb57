# microtube

A small toolkit for working with online video feeds, built on the Python
standard library alone:

- **Resumable downloads** from a queue, with pause and resume, byte-range
  requests and progress reporting (`microtube.downloader`,
  `microtube.transfer`).
- **Whole-resource fetching** into memory (`microtube.fetch`).
- **Comments** of a video, loaded page by page with continuation tokens
  (`microtube.comments`).
- **Categories** (Most Popular, Trending, Music, News, Movies, Gaming) and
  the feed path for each in a region (`microtube.categories`).
- **SponsorBlock** skip segments, looked up through a four-digit hash
  prefix of the video id (`microtube.sponsorblock`).
- **Recent history** of searched keywords and channels
  (`microtube.history`).

## Installation

```
pip install .
```

Python 3.10 or newer is required.

## Command line

```
microtube-download URL [URL ...]
```

Downloads each URL in turn. The file name is the last component of the URL
path, or `download` when the path has none. Options:

- `-d`, `--folder DIR` – save files in `DIR`.
- `--no-resume` – delete a partial file and start again instead of continuing it.
- `--iterated` – download one file at a time, moving on to the next after each.
- `--timeout SECONDS` – network timeout (default 5).
- `-v`, `--verbose` – print debug messages to standard error.

Each finished file is reported as `Downloaded :: FILE :: FROM :: URL`.
Errors are printed at the end, and the exit status is 1 if any download
failed.

## Library use

### Downloading

```python
from microtube.downloader import Downloader

downloader = Downloader(
    folder="videos",
    on_finished=lambda url, path: print("saved", path),
    on_progress=lambda p: print(p.percent, "%", round(p.speed, 1), p.unit),
)
downloader.enqueue("https://example.com/video.mp4", "video.mp4")
downloader.enqueue("https://example.com/media/clip.mp4")  # saved as clip.mp4
finished = downloader.run()  # list of (url, path) pairs
```

Before each transfer a probing request learns the size and whether the
server accepts byte ranges. If it does and resuming is on (`resume=True`,
the default), a partly present file is continued; otherwise it is
replaced. Responses with status 400 or above on the probe are skipped.

With `iterated=True`, `run()` downloads one entry and stops; call
`has_next()` and `next()` to go on with the queue. `pause()` stops the
running transfer after its current chunk, and `resume()` continues it and
then the rest of the queue.

Failures are passed to `on_error` as `microtube.transfer.DownloadError`;
without an `on_error` callback they are raised.

### Transfer helpers

```python
from microtube.transfer import format_speed, percentage, range_header, save_file_name

save_file_name("https://example.com/media/clip.mp4")  # "clip.mp4"
save_file_name("https://example.com/")                # "download"
format_speed(2048)                                    # (2.0, "kB/s")
range_header(100, 0)                                  # "bytes=100-"
range_header(100, 500)                                # "bytes=100-500"
percentage(50, 50, 100)                               # 66
```

`HttpTransport.open(url, start, end, timeout)` opens a GET request with
urllib and returns a `Response` whose body is read by iterating over it.

### Fetching

```python
from microtube.fetch import FetchError, fetch_bytes

try:
    body = fetch_bytes("https://example.com/data.json", timeout=10)
except FetchError as error:
    print(error.url, error.status)
```

### Comments

```python
from microtube.comments import CommentList

comments = CommentList("https://api.example.com/v1")
comments.load("video-id")        # first page, 20 comments at most
comments.load_more()             # next page, via the continuation token
for comment in comments.rows():  # the last row is the "Show more" entry
    print(comment.author, comment.text)
```

`CommentList` takes any `fetch(url) -> bytes` callable in place of
`fetch_bytes`, and `comments_url(base_url, video_id, continuation)` builds
the request URLs.

### Categories

```python
from microtube.categories import category_feed_path, default_categories

[c.name for c in default_categories()]
# ['Most Popular', 'Trending', 'Music', 'News', 'Movies', 'Gaming']
category_feed_path(2, "US")   # "trending?type=music&region=US"
category_feed_path(0, "US")   # "popular?region=US"
```

### SponsorBlock

```python
from microtube.sponsorblock import SponsorBlock, hash_prefix, skip_segments_url

blocker = SponsorBlock(enabled=True, categories=["sponsor", "intro"])
blocker.video_id = "video-id"
segments = blocker.skip_segments()  # compact JSON text, or "" when none are known
```

Segments are fetched once per video and cached until `video_id` changes.
When `enabled` is false, `skip_segments()` returns `""` without a request.

### Recent history

```python
from microtube.history import RecentHistory

history = RecentHistory()
history.remember_keywords("cats")
history.remember_channel("UCexample", "UCexample", "Example channel")
```

Both lists keep the most recent entry first and hold at most ten entries.

## What it does not do

The package has no graphical interface and no video player. It does not
search a video service, keep playlists, or store channel subscriptions and
check them for new videos; it provides the download, comment, category,
SponsorBlock and history pieces such a program would use.

## Running the tests

```
pip install .[test]
pytest
```