from __future__ import annotations

import logging
from typing import Callable, Optional

from . import config
from .aggregators import fetch_user_languages, fetch_user_stats
from .cache import cache_key, get_cache
from .errors import MissingParameter
from .github_client import GitHubClient
from .models import CardResponse
from .render import render_error_card, render_languages_card, render_stats_card
from .themes import DEFAULT_THEME

logger = logging.getLogger(__name__)

SVG_CONTENT_TYPE = "image/svg+xml"


def _param(query: dict, name: str, default: str = "") -> str:
    return (query.get(name) or [default])[0].strip()


def _serve_card(kind: str, query: dict, cache, client, build: Callable[[str, object, str], str]) -> CardResponse:
    """Cache-lookaside: hit returns stored card, miss aggregates, renders and stores."""
    username = _param(query, "username")
    if not username:
        raise MissingParameter("username")
    theme = _param(query, "theme", DEFAULT_THEME) or DEFAULT_THEME

    cache = cache if cache is not None else get_cache()
    key = cache_key(kind, username)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached

    logger.info("Cache miss %s, fetching from GitHub", key)
    try:
        svg = build(username, client if client is not None else GitHubClient(), theme)
    except Exception as e:
        logger.warning("Failed to build %s card for %s: %s", kind, username, e)
        return CardResponse(
            status=500,
            headers={"Content-Type": SVG_CONTENT_TYPE, "Cache-Control": "no-cache, max-age=0"},
            body=render_error_card(e),
        )

    response = CardResponse(
        status=200,
        headers={"Content-Type": SVG_CONTENT_TYPE, "Cache-Control": f"public, max-age={config.CACHE_TTL}"},
        body=svg,
    )
    cache.put(key, response, config.CACHE_TTL)
    return response


def handle_stats(query: dict, cache=None, client: Optional[GitHubClient] = None) -> CardResponse:
    return _serve_card(
        "stats", query, cache, client,
        lambda username, gh, theme: render_stats_card(fetch_user_stats(username, gh), theme),
    )


def handle_languages(query: dict, cache=None, client: Optional[GitHubClient] = None) -> CardResponse:
    return _serve_card(
        "languages", query, cache, client,
        lambda username, gh, theme: render_languages_card(fetch_user_languages(username, gh), theme),
    )
