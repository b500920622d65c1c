import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from stats_cards.cache import MemoryCache
from stats_cards.github_client import GitHubResponse


class FakeGitHub:
    """Canned GitHub responses keyed by request path; records every call."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, path):
        self.calls.append(path)
        if path not in self.routes:
            return GitHubResponse(404, {"message": "Not Found"})
        result = self.routes[path]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, GitHubResponse):
            return result
        return GitHubResponse(200, result)


def repo(name, stars=0, forks=0, fork=False, owner="x"):
    return {
        "name": name,
        "stargazers_count": stars,
        "forks_count": forks,
        "fork": fork,
        "languages_url": f"https://api.github.com/repos/{owner}/{name}/languages",
    }


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def memory_cache():
    return MemoryCache()
