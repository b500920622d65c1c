from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from urllib.parse import quote

from . import config
from .errors import UpstreamError, UpstreamTransportFailure, UserNotFound
from .models import LanguageEntry, Stats

logger = logging.getLogger(__name__)

REPOS_PER_PAGE = 100
TOP_LANGUAGES = 5


def _count(value) -> int:
    """Upstream numbers that are missing, null or junk count as zero."""
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def _fetch_repos(username, client):
    # Only the first page: anything past 100 repos is left out
    resp = client.get(f"/users/{quote(username)}/repos?per_page={REPOS_PER_PAGE}")
    if resp.status == 404:
        raise UserNotFound(username)
    if not resp.ok:
        raise UpstreamError(f"GitHub API Error: {resp.status} listing repos for {username}", resp.status)
    return [r for r in (resp.data or []) if isinstance(r, dict)]


def fetch_user_stats(username, client) -> Stats:
    resp = client.get(f"/users/{quote(username)}")
    if not resp.ok:
        raise UserNotFound(username)
    user = resp.data or {}

    repos = _fetch_repos(username, client)
    # Forks are counted here, unlike the language breakdown
    total_stars = sum(_count(r.get("stargazers_count")) for r in repos)
    total_forks = sum(_count(r.get("forks_count")) for r in repos)

    login = user.get("login") or username
    return Stats(
        username=login,
        display_name=user.get("name") or login,
        total_stars=total_stars,
        total_forks=total_forks,
        total_repos=_count(user.get("public_repos")),
        followers=_count(user.get("followers")),
        following=_count(user.get("following")),
    )


def _languages_url(username, repo):
    if repo.get("languages_url"):
        return repo["languages_url"]
    owner = (repo.get("owner") or {}).get("login") or username
    return f"/repos/{quote(owner)}/{quote(repo.get('name', ''))}/languages"


def _fetch_repo_languages(client, url) -> dict:
    resp = client.get(url)
    if not resp.ok or not isinstance(resp.data, dict):
        logger.warning("Skipping languages for %s: status %s", url, resp.status)
        return {}
    return resp.data


def top_languages(lang_bytes, limit=TOP_LANGUAGES):
    """Top ``limit`` languages by bytes, as percentages of the retained total.

    The base is the sum over the retained entries only, so a long tail of
    small languages does not shrink the shares shown on the card.
    """
    ranked = sorted(lang_bytes.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
    total = sum(count for _, count in ranked)
    if total <= 0:
        return []
    return [LanguageEntry(name, f"{count / total * 100:.1f}") for name, count in ranked]


def fetch_user_languages(
    username,
    client,
    max_workers: int = config.LANGUAGE_WORKERS,
    budget: float = config.LANGUAGE_BUDGET,
) -> list:
    repos = _fetch_repos(username, client)
    urls = [_languages_url(username, r) for r in repos if not r.get("fork")]
    if not urls:
        return []
    lang_bytes = {}

    # Parallel fetch; summation is order-independent
    executor = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(urls))))
    try:
        futures = [executor.submit(_fetch_repo_languages, client, url) for url in urls]
        for future in as_completed(futures, timeout=budget):
            for lang, count in future.result().items():
                lang_bytes[lang] = lang_bytes.get(lang, 0) + _count(count)
    except FuturesTimeout:
        raise UpstreamTransportFailure(
            f"Timed out after {budget:g}s fetching languages for {username}"
        ) from None
    finally:
        # Don't wait on in-flight fetches once the result is decided
        executor.shutdown(wait=False, cancel_futures=True)

    return top_languages(lang_bytes)
