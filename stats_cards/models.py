from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Stats:
    username: str
    display_name: str
    total_stars: int
    total_forks: int
    total_repos: int
    followers: int
    following: int


@dataclass(frozen=True)
class LanguageEntry:
    name: str
    percentage: str  # one fractional digit, e.g. "80.0"


@dataclass(frozen=True)
class CardResponse:
    """A complete HTTP response; also the unit stored in the cache."""

    status: int
    headers: dict = field(default_factory=dict)
    body: str = ""

    def with_headers(self, extra: dict) -> "CardResponse":
        return replace(self, headers={**self.headers, **extra})

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: Any) -> "CardResponse":
        data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
        return cls(
            status=int(data["status"]),
            headers=dict(data.get("headers") or {}),
            body=data.get("body", ""),
        )
