"""SVG GitHub stats and top-language cards."""

from .aggregators import fetch_user_languages, fetch_user_stats
from .handlers import handle_languages, handle_stats
from .models import CardResponse, LanguageEntry, Stats
from .router import dispatch

__all__ = [
    "CardResponse",
    "LanguageEntry",
    "Stats",
    "dispatch",
    "fetch_user_languages",
    "fetch_user_stats",
    "handle_languages",
    "handle_stats",
]
