"""GitHub user-search fetcher."""

from collections.abc import Iterator
from typing import Any

from src.core.schemas import CandidateRecord
from src.platforms.base import PlatformFetcher, require_list, require_mapping

SEARCH_URL = "https://api.github.com/search/users"


class GitHubFetcher(PlatformFetcher):
    """Search GitHub users by keyword, optionally narrowed by location."""

    @property
    def platform_id(self) -> str:
        return "github"

    @property
    def display_name(self) -> str:
        return "GitHub"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self._config.user_agent,
        }

    def build_request(
        self, keywords: list[str], per_page: int, location: str,
    ) -> tuple[str, dict[str, Any]]:
        query = " ".join(keywords)
        if location:
            query += f" location:{_quote_qualifier(location)}"
        return SEARCH_URL, {"q": query, "per_page": per_page}

    def parse(
        self, payload: Any, keywords: list[str], location: str,
    ) -> Iterator[CandidateRecord]:
        data = require_mapping(payload, "search response")
        items = require_list(data.get("items", []), "items")
        for item in items:
            user = require_mapping(item, "user item")
            login = user.get("login")
            if not login:
                continue
            yield CandidateRecord(
                name=login,
                username=login,
                platform="github",
                profile_url=user.get("html_url") or f"https://github.com/{login}",
                summary=f"GitHub user | Score: {user.get('score') or 0}",
                location=location,
            )


def _quote_qualifier(value: str) -> str:
    """GitHub qualifiers need quotes when the value contains spaces."""
    value = value.strip()
    return f'"{value}"' if " " in value else value
