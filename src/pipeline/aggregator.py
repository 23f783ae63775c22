"""Fan-out aggregator: runs every platform fetcher concurrently and merges results.

Data flow:
  1. Clamp limit to 1-30, keep the top 3 keywords
  2. Mock detection ("MOCK" in description or keywords) → MockSource, no network
  3. No keywords → empty result, no network
  4. asyncio.gather over all fetchers (settle-all: exceptions are collected)
  5. Merge in fetcher order (GitHub, Dev.to, Reddit), truncate to limit
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from src.core.config import HttpConfig
from src.core.schemas import AggregateResult, CandidateRecord, PlatformDebugEntry, PlatformDebugLog
from src.platforms.base import FetchOutcome, PlatformFetcher, top_keywords
from src.platforms.devto import DevToFetcher
from src.platforms.github import GitHubFetcher
from src.platforms.mock import MockSource
from src.platforms.reddit import RedditFetcher

logger = logging.getLogger(__name__)

MIN_LIMIT = 1
MAX_LIMIT = 30
MOCK_TOKEN = "MOCK"


def default_fetchers(
    client: httpx.AsyncClient, config: HttpConfig | None = None,
) -> list[PlatformFetcher]:
    """The three fetchers in display-priority order."""
    return [
        GitHubFetcher(client, config),
        DevToFetcher(client, config),
        RedditFetcher(client, config),
    ]


def clamp_limit(limit: int | None, default: int = 5) -> int:
    if limit is None:
        limit = default
    return max(MIN_LIMIT, min(limit, MAX_LIMIT))


def is_mock_mode(raw_description: str, keywords: Sequence[str]) -> bool:
    """True when the description or the search keywords contain "MOCK"."""
    joined = " ".join(top_keywords(keywords))
    return MOCK_TOKEN in (raw_description or "").upper() or MOCK_TOKEN in joined.upper()


async def aggregate_search(
    keywords: Sequence[str],
    limit: int,
    location: str,
    raw_description: str,
    *,
    fetchers: Sequence[PlatformFetcher],
    mock_source: MockSource | None = None,
) -> AggregateResult:
    """Search every platform and return merged, truncated candidates.

    Args:
        keywords: Search keywords in priority order; only the top 3 are used.
        limit: Maximum number of merged candidates (clamped to 1-30).
        location: Location hint forwarded to each fetcher.
        raw_description: The original job description, used for mock detection.
        fetchers: Platform fetchers, in merge order.
        mock_source: Canned source used in mock mode.

    Returns:
        AggregateResult with candidates, per-platform counts and a debug log.
    """
    limit = clamp_limit(limit)
    used = top_keywords(keywords)
    debug_log = PlatformDebugLog(
        input={
            "keywords": list(keywords),
            "limit": limit,
            "location": location,
            "keywords_used": used,
        },
    )

    if is_mock_mode(raw_description, used):
        logger.info("Mock mode detected, skipping platform fetchers")
        return (mock_source or MockSource()).search(used, limit, location)

    stats: dict[str, int] = {f.platform_id: 0 for f in fetchers}
    if not used:
        logger.info("No keywords available, nothing to search")
        stats["total"] = 0
        return AggregateResult(candidates=[], platform_stats=stats, debug_log=debug_log)

    logger.info("Searching %d platforms for '%s'", len(fetchers), " ".join(used))
    outcomes = await asyncio.gather(
        *(f.fetch(used, limit, location) for f in fetchers),
        return_exceptions=True,
    )

    merged: list[CandidateRecord] = []
    for fetcher, outcome in zip(fetchers, outcomes):
        entry = PlatformDebugEntry(name=fetcher.display_name)
        if isinstance(outcome, FetchOutcome):
            merged.extend(outcome.candidates)
            stats[fetcher.platform_id] = len(outcome.candidates)
            entry.candidates_count = len(outcome.candidates)
            entry.errors.extend(outcome.errors)
        else:
            logger.warning("%s fetcher raised: %r", fetcher.display_name, outcome)
            entry.errors.append(str(outcome) or type(outcome).__name__)
        debug_log.platforms[fetcher.platform_id] = entry

    stats["total"] = len(merged)
    logger.info("Merged %d candidates, returning up to %d", len(merged), limit)
    return AggregateResult(
        candidates=merged[:limit],
        platform_stats=stats,
        debug_log=debug_log,
    )
