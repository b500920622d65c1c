"""Module-level settings read from the process environment."""

import os

# --- SHARED CONFIG ---
TOKEN = os.environ.get("GITHUB_TOKEN", "")
USER_AGENT = "github-stats-card"
GITHUB_API = os.environ.get("GITHUB_API_URL", "https://api.github.com").rstrip("/")

# Upstream budgets (seconds)
GITHUB_TIMEOUT = float(os.environ.get("GITHUB_TIMEOUT", "10"))
GITHUB_RETRY_DELAY = float(os.environ.get("GITHUB_RETRY_DELAY", "0.5"))
LANGUAGE_WORKERS = int(os.environ.get("LANGUAGE_WORKERS", "8"))
LANGUAGE_BUDGET = float(os.environ.get("LANGUAGE_BUDGET", "25"))

# Rendered cards live for one hour
CACHE_TTL = int(os.environ.get("CACHE_TTL", "3600"))

# Vercel KV (Upstash Redis)
KV_REST_API_URL = os.environ.get("KV_REST_API_URL", "")
KV_REST_API_TOKEN = os.environ.get("KV_REST_API_TOKEN", "")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
PORT = int(os.environ.get("PORT", "8000"))
