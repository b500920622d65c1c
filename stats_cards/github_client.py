from __future__ import annotations

import json
import logging
import socket
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Optional

from . import config
from .errors import UpstreamTransportFailure

logger = logging.getLogger(__name__)


def build_headers(token: str = "") -> dict:
    """Identifying User-Agent, plus Authorization when a token is set."""
    headers = {"User-Agent": config.USER_AGENT, "Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


@dataclass(frozen=True)
class GitHubResponse:
    status: int
    data: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class GitHubClient:
    """Blocking GET client for the GitHub REST API.

    Non-success statuses are returned to the caller, who decides what they
    mean. Transport failures (DNS, refused connection, timeout) are retried
    ``retries`` times and then raised as ``UpstreamTransportFailure``.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = config.GITHUB_API,
        timeout: float = config.GITHUB_TIMEOUT,
        retries: int = 1,
        retry_delay: float = config.GITHUB_RETRY_DELAY,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = build_headers(config.TOKEN if token is None else token)
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str) -> GitHubResponse:
        url = self.url(path)
        attempt = 0
        while True:
            try:
                return self._request(url)
            except (urllib.error.URLError, socket.timeout, TimeoutError, ConnectionError) as e:
                reason = getattr(e, "reason", e)
                if attempt >= self.retries:
                    raise UpstreamTransportFailure(f"GitHub unreachable: {reason}") from e
                attempt += 1
                logger.warning("GET %s failed (%s), retry %d/%d", url, reason, attempt, self.retries)
                time.sleep(self.retry_delay)

    def _request(self, url: str) -> GitHubResponse:
        logger.debug("GET %s", url)
        req = urllib.request.Request(url, headers=self.headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return GitHubResponse(resp.status, json.load(resp))
        except urllib.error.HTTPError as e:
            # An HTTP status is an answer, not a transport failure
            logger.info("GET %s -> %s %s", url, e.code, e.reason)
            return GitHubResponse(e.code, _read_error_body(e))


def _read_error_body(err: urllib.error.HTTPError):
    try:
        return json.loads(err.read().decode("utf-8", errors="ignore") or "null")
    except ValueError:
        return None
