"""Dev.to fetcher: finds active authors through articles tagged with a keyword."""

import re
from collections import Counter
from collections.abc import Iterator
from typing import Any

from src.core.schemas import CandidateRecord
from src.platforms.base import PlatformFetcher, require_list, require_mapping

ARTICLES_URL = "https://dev.to/api/articles"


def to_tag(keyword: str) -> str:
    """Dev.to tags are lowercase alphanumerics ("Node.js" -> "nodejs")."""
    return re.sub(r"[^a-z0-9]", "", keyword.lower())


class DevToFetcher(PlatformFetcher):
    """Search Dev.to articles by the top keyword and collect their authors."""

    @property
    def platform_id(self) -> str:
        return "devto"

    @property
    def display_name(self) -> str:
        return "Dev.to"

    def build_request(
        self, keywords: list[str], per_page: int, location: str,
    ) -> tuple[str, dict[str, Any]]:
        return ARTICLES_URL, {"tag": to_tag(keywords[0]), "per_page": per_page}

    def parse(
        self, payload: Any, keywords: list[str], location: str,
    ) -> Iterator[CandidateRecord]:
        articles = [require_mapping(a, "article") for a in require_list(payload, "articles")]
        per_author = Counter(
            (a.get("user") or {}).get("username") for a in articles
        )

        for article in articles:
            user = require_mapping(article.get("user"), "article.user")
            username = user.get("username")
            if not username:
                continue
            tags = article.get("tag_list") or []
            if isinstance(tags, str):
                tags = [t.strip() for t in tags.split(",") if t.strip()]
            bio = user.get("summary") or "Dev.to writer"
            reactions = article.get("public_reactions_count") or 0
            yield CandidateRecord(
                name=user.get("name") or username,
                username=username,
                platform="devto",
                profile_url=f"https://dev.to/{username}",
                summary=f"{bio} | {reactions} reactions",
                location=location,
                skills=list(tags)[:5],
                articles=per_author[username],
            )
