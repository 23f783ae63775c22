"""Tests for the fan-out aggregator."""

import asyncio
from collections.abc import Iterator, Sequence
from typing import Any

import httpx
import pytest

from src.core.schemas import CandidateRecord
from src.pipeline.aggregator import (
    MAX_LIMIT,
    aggregate_search,
    clamp_limit,
    default_fetchers,
    is_mock_mode,
)
from src.platforms.base import FetchOutcome, PlatformFetcher
from src.platforms.mock import MockSource

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeFetcher(PlatformFetcher):
    """Returns pre-configured candidates, or raises, without any HTTP."""

    def __init__(
        self,
        platform: str,
        count: int = 3,
        *,
        errors: list[str] | None = None,
        raises: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self._platform = platform
        self._count = count
        self._errors = errors or []
        self._raises = raises
        self._delay = delay
        self.calls: list[tuple[list[str], int, str]] = []

    @property
    def platform_id(self) -> str:
        return self._platform

    @property
    def display_name(self) -> str:
        return self._platform.title()

    def build_request(
        self, keywords: list[str], per_page: int, location: str,
    ) -> tuple[str, dict[str, Any]]:
        return "", {}

    def parse(
        self, payload: Any, keywords: list[str], location: str,
    ) -> Iterator[CandidateRecord]:
        yield from ()

    async def fetch(
        self, keywords: Sequence[str], limit: int, location: str = "",
    ) -> FetchOutcome:
        self.calls.append((list(keywords), limit, location))
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._raises is not None:
            raise self._raises
        candidates = [
            CandidateRecord(
                name=f"{self._platform}-{i}",
                username=f"{self._platform}-{i}",
                platform=self._platform,  # type: ignore[arg-type]
                profile_url=f"https://example.com/{self._platform}/{i}",
            )
            for i in range(self._count)
        ]
        if self._errors:
            candidates = []
        return FetchOutcome(platform=self._platform, candidates=candidates, errors=self._errors)


class SpyMockSource(MockSource):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[list[str], int, str]] = []

    def search(self, keywords: Sequence[str], limit: int, location: str = ""):  # type: ignore[no-untyped-def]
        self.calls.append((list(keywords), limit, location))
        return super().search(keywords, limit, location)


def _fetchers(**overrides: FakeFetcher) -> list[FakeFetcher]:
    fetchers = {
        "github": FakeFetcher("github"),
        "devto": FakeFetcher("devto"),
        "reddit": FakeFetcher("reddit"),
    }
    fetchers.update(overrides)
    return [fetchers["github"], fetchers["devto"], fetchers["reddit"]]


# ---------------------------------------------------------------------------
# Mock detection and limits
# ---------------------------------------------------------------------------


class TestMockDetection:
    def test_description_contains_mock(self) -> None:
        assert is_mock_mode("Senior React dev (MOCK run)", ["react"])

    def test_case_insensitive(self) -> None:
        assert is_mock_mode("please use mock data", [])

    def test_keyword_contains_mock(self) -> None:
        assert is_mock_mode("Senior React dev", ["react", "Mockito"])

    def test_keyword_beyond_top_three_ignored(self) -> None:
        assert not is_mock_mode("Senior React dev", ["react", "node", "aws", "mock"])

    def test_no_mock(self) -> None:
        assert not is_mock_mode("Senior React dev", ["react"])


class TestClampLimit:
    def test_bounds(self) -> None:
        assert clamp_limit(0) == 1
        assert clamp_limit(-5) == 1
        assert clamp_limit(31) == MAX_LIMIT
        assert clamp_limit(12) == 12

    def test_none_uses_default(self) -> None:
        assert clamp_limit(None) == 5
        assert clamp_limit(None, default=8) == 8


def test_default_fetchers_order() -> None:
    client = httpx.AsyncClient()
    assert [f.platform_id for f in default_fetchers(client)] == ["github", "devto", "reddit"]


# ---------------------------------------------------------------------------
# aggregate_search
# ---------------------------------------------------------------------------


class TestAggregateSearch:
    async def test_merges_in_platform_order(self) -> None:
        result = await aggregate_search(
            ["react"], 30, "Brazil", "Senior React dev", fetchers=_fetchers(),
        )

        platforms = [c.platform for c in result.candidates]
        assert platforms == ["github"] * 3 + ["devto"] * 3 + ["reddit"] * 3
        assert result.platform_stats == {"github": 3, "devto": 3, "reddit": 3, "total": 9}
        assert result.debug_log.mode == "real"
        assert set(result.debug_log.platforms) == {"github", "devto", "reddit"}

    @pytest.mark.parametrize("limit", [1, 2, 5, 7, 30])
    async def test_never_exceeds_limit(self, limit: int) -> None:
        fetchers = _fetchers(
            github=FakeFetcher("github", 10),
            devto=FakeFetcher("devto", 10),
            reddit=FakeFetcher("reddit", 10),
        )
        result = await aggregate_search(["react"], limit, "", "job", fetchers=fetchers)
        assert len(result.candidates) <= limit

    async def test_truncation_keeps_priority_prefix(self) -> None:
        result = await aggregate_search(["react"], 4, "", "job", fetchers=_fetchers())
        assert [c.name for c in result.candidates] == [
            "github-0", "github-1", "github-2", "devto-0",
        ]
        assert result.platform_stats["total"] == 9

    async def test_only_top_three_keywords_passed(self) -> None:
        fetchers = _fetchers()
        await aggregate_search(
            ["react", "typescript", "node", "aws"], 5, "Brazil", "job", fetchers=fetchers,
        )
        assert fetchers[0].calls == [(["react", "typescript", "node"], 5, "Brazil")]

    async def test_failing_fetcher_does_not_block_others(self) -> None:
        fetchers = _fetchers(devto=FakeFetcher("devto", errors=["HTTP 500"]))
        result = await aggregate_search(["react"], 30, "", "job", fetchers=fetchers)

        platforms = {c.platform for c in result.candidates}
        assert platforms == {"github", "reddit"}
        assert result.platform_stats["devto"] == 0
        assert result.debug_log.platforms["devto"].errors == ["HTTP 500"]

    async def test_raising_fetcher_is_settled(self) -> None:
        fetchers = _fetchers(
            github=FakeFetcher("github", raises=RuntimeError("boom")),
            reddit=FakeFetcher("reddit", delay=0.01),
        )
        result = await aggregate_search(["react"], 30, "", "job", fetchers=fetchers)

        assert [c.platform for c in result.candidates] == ["devto"] * 3 + ["reddit"] * 3
        assert result.platform_stats["github"] == 0
        assert result.debug_log.platforms["github"].errors == ["boom"]

    async def test_all_fail_returns_empty(self) -> None:
        fetchers = _fetchers(
            github=FakeFetcher("github", errors=["HTTP 403"]),
            devto=FakeFetcher("devto", raises=ValueError("bad json")),
            reddit=FakeFetcher("reddit", errors=["timeout"]),
        )
        result = await aggregate_search(["react"], 5, "", "job", fetchers=fetchers)
        assert result.candidates == []
        assert result.platform_stats["total"] == 0

    async def test_no_keywords_short_circuits(self) -> None:
        fetchers = _fetchers()
        result = await aggregate_search([], 5, "Brazil", "A job", fetchers=fetchers)

        assert result.candidates == []
        assert result.platform_stats == {"github": 0, "devto": 0, "reddit": 0, "total": 0}
        assert all(f.calls == [] for f in fetchers)

    async def test_mock_mode_skips_fetchers(self) -> None:
        fetchers = _fetchers()
        mock = SpyMockSource()
        result = await aggregate_search(
            ["react"], 5, "Brazil", "MOCK: senior react dev",
            fetchers=fetchers, mock_source=mock,
        )

        assert all(f.calls == [] for f in fetchers)
        assert mock.calls == [(["react"], 5, "Brazil")]
        assert result.debug_log.mode == "mock"
        assert len(result.candidates) == 5
        assert result.platform_stats == {"mock": 5, "total": 5}

    async def test_mock_mode_wins_over_empty_keywords(self) -> None:
        fetchers = _fetchers()
        result = await aggregate_search([], 3, "", "mock please", fetchers=fetchers)
        assert len(result.candidates) == 3
        assert all(f.calls == [] for f in fetchers)

    async def test_limit_clamped_before_fetch(self) -> None:
        fetchers = _fetchers()
        await aggregate_search(["react"], 99, "", "job", fetchers=fetchers)
        assert fetchers[0].calls[0][1] == MAX_LIMIT
