import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from microtube.fetch import FetchError, fetch_bytes

PAYLOAD = b'{"comments": []}'


class _Handler(BaseHTTPRequestHandler):
    routes = {"/data.json": PAYLOAD, "/empty": b""}

    def do_GET(self):
        body = self.routes.get(self.path)
        if body is None:
            self.send_error(404)
            return
        self.send_response(200)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def test_fetch_returns_body(server):
    assert fetch_bytes(f"{server}/data.json") == PAYLOAD


def test_fetch_empty_body(server):
    assert fetch_bytes(f"{server}/empty", timeout=5.0) == b""


def test_fetch_http_error_carries_status(server):
    url = f"{server}/missing"
    with pytest.raises(FetchError) as info:
        fetch_bytes(url)
    assert info.value.status == 404
    assert info.value.url == url