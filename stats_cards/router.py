from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from .errors import StatsCardError, UnknownRoute
from .handlers import handle_languages, handle_stats
from .models import CardResponse

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

HOMEPAGE = """<!DOCTYPE html>
<html lang="en"><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>GitHub Stats Card</title>
<style>
body { font-family: system-ui, sans-serif; max-width: 820px; margin: 40px auto; padding: 20px; line-height: 1.6; }
h1 { color: #2f80ed; border-bottom: 1px solid #e4e2e2; padding-bottom: 10px; }
code { background: #f4f4f4; padding: 2px 6px; border-radius: 4px; }
pre { background: #f4f4f4; padding: 16px; border-radius: 6px; overflow-x: auto; }
.endpoint { margin: 20px 0; padding: 16px; background: #f8f9fb; border-radius: 6px; border-left: 3px solid #2f80ed; }
</style>
</head><body>
<h1>GitHub Stats Card</h1>
<p>Self-hosted SVG cards for GitHub profiles. Embed them in READMEs or anywhere that renders images.</p>

<div class="endpoint">
<h3>GET <code>/api/stats</code></h3>
<p>Stars, forks, public repos, followers and following.</p>
<pre>?username=octocat
&amp;theme=default|dark|radical</pre>
<img src="/api/stats?username=octocat" alt="Example Stats" />
</div>

<div class="endpoint">
<h3>GET <code>/api/languages</code></h3>
<p>Top 5 languages by bytes across non-fork repositories.</p>
<pre>?username=octocat
&amp;theme=default|dark|radical</pre>
<img src="/api/languages?username=octocat" alt="Example Languages" />
</div>

<h3>Example</h3>
<pre>&lt;img src="https://your-domain.vercel.app/api/stats?username=octocat&amp;theme=dark" /&gt;</pre>

<h3>Self-hosting</h3>
<p>Deploy to Vercel, or run <code>python -m stats_cards</code> locally.
Set <code>GITHUB_TOKEN</code> for the higher authenticated rate limit, and
<code>KV_REST_API_URL</code> / <code>KV_REST_API_TOKEN</code> to share the cache across instances.
Cards are cached for one hour.</p>
</body></html>"""

HOME_PATHS = frozenset({"/", "/api", "/api/index"})

ROUTES = {
    "/api/stats": handle_stats,
    "/api/languages": handle_languages,
}


def _plain(status: int, text: str) -> CardResponse:
    return CardResponse(status=status, headers={"Content-Type": "text/plain; charset=utf-8"}, body=text)


def route(method: str, target: str, cache=None, client=None) -> CardResponse:
    if method == "OPTIONS":
        return CardResponse(status=200)

    parsed = urlparse(target)
    path = parsed.path.rstrip("/") or "/"
    if method in ("GET", "HEAD"):
        if path in HOME_PATHS:
            return CardResponse(status=200, headers={"Content-Type": "text/html; charset=utf-8"}, body=HOMEPAGE)
        card_handler = ROUTES.get(path)
        if card_handler is not None:
            return card_handler(parse_qs(parsed.query), cache=cache, client=client)
    raise UnknownRoute(path)


def dispatch(method: str, target: str, cache=None, client=None) -> CardResponse:
    """Route a request and attach CORS headers. Client errors become plain text."""
    try:
        response = route(method.upper(), target, cache=cache, client=client)
    except StatsCardError as e:
        logger.info("%s %s -> %s %s", method, target, e.status, e)
        response = _plain(e.status, str(e))
    return response.with_headers(CORS_HEADERS)
