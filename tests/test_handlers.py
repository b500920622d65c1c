import xml.etree.ElementTree as ET

import pytest

from conftest import FakeGitHub, repo
from stats_cards import handlers
from stats_cards.cache import MemoryCache, cache_key
from stats_cards.errors import MissingParameter, UpstreamTransportFailure
from stats_cards.models import CardResponse
from stats_cards.router import CORS_HEADERS, dispatch

PROFILE = {"login": "x", "name": "Ex", "public_repos": 1, "followers": 3, "following": 1}


def github():
    return FakeGitHub({
        "/users/x": PROFILE,
        "/users/x/repos?per_page=100": [repo("a", stars=10, forks=2)],
        "https://api.github.com/repos/x/a/languages": {"Go": 800, "Rust": 200},
    })


class RecordingCache(MemoryCache):
    def __init__(self):
        super().__init__()
        self.gets, self.puts = [], []

    def get(self, key):
        self.gets.append(key)
        return super().get(key)

    def put(self, key, value, ttl):
        self.puts.append((key, ttl))
        super().put(key, value, ttl)


def test_stats_miss_renders_and_stores():
    cache, gh = RecordingCache(), github()
    resp = handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    assert resp.status == 200
    assert resp.headers["Content-Type"] == "image/svg+xml"
    assert resp.headers["Cache-Control"] == "public, max-age=3600"
    assert "Total Stars: 10" in resp.body
    assert cache.puts == [(cache_key("stats", "x"), 3600)]
    assert cache.get(cache_key("stats", "x")) == resp


def test_stats_hit_skips_github():
    cache, gh = RecordingCache(), github()
    first = handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    calls = len(gh.calls)
    second = handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    assert second == first
    assert len(gh.calls) == calls
    assert len(cache.puts) == 1


def test_cache_is_keyed_by_kind():
    cache, gh = RecordingCache(), github()
    handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    resp = handlers.handle_languages({"username": ["x"]}, cache=cache, client=gh)
    assert "Most Used Languages" in resp.body
    assert "80.0%" in resp.body
    assert [key for key, _ in cache.puts] == [cache_key("stats", "x"), cache_key("languages", "x")]


def test_expired_entry_is_refreshed():
    now = [1000.0]
    cache, gh = MemoryCache(clock=lambda: now[0]), github()
    handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    calls = len(gh.calls)
    now[0] += 3600
    handlers.handle_stats({"username": ["x"]}, cache=cache, client=gh)
    assert len(gh.calls) == calls * 2


@pytest.mark.parametrize("query", [{}, {"username": [""]}, {"username": ["   "]}])
@pytest.mark.parametrize("handle", [handlers.handle_stats, handlers.handle_languages])
def test_missing_username_fails_before_cache_or_network(handle, query):
    cache, gh = RecordingCache(), github()
    with pytest.raises(MissingParameter):
        handle(query, cache=cache, client=gh)
    assert gh.calls == []
    assert cache.gets == []


def test_unknown_user_returns_error_card():
    cache = RecordingCache()
    resp = handlers.handle_stats({"username": ["doesnotexist123"]}, cache=cache, client=FakeGitHub())
    assert resp.status == 500
    assert resp.headers["Content-Type"] == "image/svg+xml"
    root = ET.fromstring(resp.body)
    assert "User not found: doesnotexist123" in "".join(root.itertext())
    assert cache.puts == []


def test_transport_failure_returns_error_card():
    gh = FakeGitHub({"/users/x/repos?per_page=100": UpstreamTransportFailure("GitHub unreachable: timed out")})
    resp = handlers.handle_languages({"username": ["x"]}, cache=MemoryCache(), client=gh)
    assert resp.status == 500
    assert "GitHub unreachable: timed out" in resp.body


def test_unexpected_error_is_not_raised():
    class Broken:
        def get(self, path):
            raise KeyError("boom")

    resp = handlers.handle_stats({"username": ["x"]}, cache=MemoryCache(), client=Broken())
    assert resp.status == 500
    ET.fromstring(resp.body)


def test_default_cache_used_when_none_given(monkeypatch):
    shared = MemoryCache()
    monkeypatch.setattr(handlers, "get_cache", lambda: shared)
    handlers.handle_stats({"username": ["x"]}, client=github())
    assert shared.get(cache_key("stats", "x")) is not None


# --- router ---

def test_options_any_path():
    resp = dispatch("OPTIONS", "/whatever")
    assert resp.status == 200
    assert resp.body == ""
    for name, value in CORS_HEADERS.items():
        assert resp.headers[name] == value


def test_homepage():
    resp = dispatch("GET", "/")
    assert resp.status == 200
    assert resp.headers["Content-Type"].startswith("text/html")
    assert "/api/stats" in resp.body
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_unknown_route_is_404():
    resp = dispatch("GET", "/api/nope?username=x")
    assert resp.status == 404
    assert resp.body == "Not Found"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert dispatch("POST", "/api/stats?username=x").status == 404


@pytest.mark.parametrize("path", ["/api/stats", "/api/languages"])
def test_router_missing_username_is_400(path):
    gh = github()
    resp = dispatch("GET", path, cache=MemoryCache(), client=gh)
    assert resp.status == 400
    assert resp.body == "Missing username parameter"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert gh.calls == []


def test_router_serves_cards_with_cors():
    cache, gh = MemoryCache(), github()
    resp = dispatch("GET", "/api/stats/?username=x&theme=dark", cache=cache, client=gh)
    assert resp.status == 200
    assert "#0d1117" in resp.body
    assert resp.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
    # CORS headers are attached on the way out, not stored
    assert "Access-Control-Allow-Origin" not in cache.get(cache_key("stats", "x")).headers


def test_router_error_card_for_missing_user():
    resp = dispatch("GET", "/api/stats?username=doesnotexist123", cache=MemoryCache(), client=FakeGitHub())
    assert resp.status == 500
    assert "User not found: doesnotexist123" in resp.body
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_card_response_json_round_trip():
    resp = CardResponse(200, {"Content-Type": "image/svg+xml"}, "<svg/>")
    assert CardResponse.from_json(resp.to_json()) == resp
