import io

from conftest import FakeGitHub
from stats_cards.cache import MemoryCache
from stats_cards.server import respond


class FakeHandler:
    """Just enough of BaseHTTPRequestHandler for respond()."""

    def __init__(self, command, path):
        self.command = command
        self.path = path
        self.status = None
        self.headers_out = {}
        self.wfile = io.BytesIO()

    def send_response(self, code):
        self.status = code

    def send_header(self, name, value):
        self.headers_out[name] = value

    def end_headers(self):
        pass


def test_respond_writes_status_headers_and_body():
    handler = FakeHandler("GET", "/")
    respond(handler)
    body = handler.wfile.getvalue()
    assert handler.status == 200
    assert handler.headers_out["Content-Length"] == str(len(body))
    assert handler.headers_out["Access-Control-Allow-Origin"] == "*"
    assert body.startswith(b"<!DOCTYPE html>")


def test_respond_error_card():
    handler = FakeHandler("GET", "/api/languages?username=doesnotexist123")
    respond(handler, cache=MemoryCache(), client=FakeGitHub())
    assert handler.status == 500
    assert handler.headers_out["Content-Type"] == "image/svg+xml"
    assert b"User not found: doesnotexist123" in handler.wfile.getvalue()


def test_respond_head_has_no_body():
    handler = FakeHandler("HEAD", "/")
    respond(handler)
    assert handler.status == 200
    assert int(handler.headers_out["Content-Length"]) > 0
    assert handler.wfile.getvalue() == b""


def test_respond_options():
    handler = FakeHandler("OPTIONS", "/api/stats")
    respond(handler)
    assert handler.status == 200
    assert handler.headers_out["Content-Length"] == "0"
    assert handler.headers_out["Access-Control-Allow-Methods"] == "GET, OPTIONS"
