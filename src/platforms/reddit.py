"""Reddit fetcher: collects post authors from a topic subreddit."""

from collections.abc import Iterator
from typing import Any

from src.core.schemas import CandidateRecord
from src.platforms.base import PlatformFetcher, require_list, require_mapping

DEFAULT_SUBREDDIT = "programming"

# First match wins; checked against the lower-cased joined keywords.
SUBREDDIT_ROUTES: list[tuple[tuple[str, ...], str]] = [
    (("python",), "Python"),
    (("javascript", "react"), "javascript"),
    (("devops",), "devops"),
]


def choose_subreddit(keywords: list[str]) -> str:
    text = " ".join(keywords).lower()
    for needles, subreddit in SUBREDDIT_ROUTES:
        if any(n in text for n in needles):
            return subreddit
    return DEFAULT_SUBREDDIT


class RedditFetcher(PlatformFetcher):
    """Search one subreddit for the keywords and collect post authors."""

    @property
    def platform_id(self) -> str:
        return "reddit"

    @property
    def display_name(self) -> str:
        return "Reddit"

    def build_request(
        self, keywords: list[str], per_page: int, location: str,
    ) -> tuple[str, dict[str, Any]]:
        subreddit = choose_subreddit(keywords)
        url = f"https://www.reddit.com/r/{subreddit}/search.json"
        params = {
            "q": " ".join(keywords),
            "limit": per_page,
            "t": "year",
            "restrict_sr": 1,
        }
        return url, params

    def parse(
        self, payload: Any, keywords: list[str], location: str,
    ) -> Iterator[CandidateRecord]:
        subreddit = choose_subreddit(keywords)
        listing = require_mapping(payload, "listing")
        data = require_mapping(listing.get("data", {}), "listing.data")
        for child in require_list(data.get("children", []), "listing.data.children"):
            post = require_mapping(require_mapping(child, "post").get("data"), "post.data")
            author = post.get("author")
            if not author or author == "[deleted]":
                continue
            karma = post.get("score") or 0
            yield CandidateRecord(
                name=author,
                username=author,
                platform="reddit",
                profile_url=f"https://reddit.com/u/{author}",
                summary=f"r/{subreddit} | {karma} karma",
                location=location,
                skills=[subreddit.lower()],
                karma=karma,
            )
