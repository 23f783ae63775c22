"""Abstract base class for platform fetchers.

Each fetcher turns a keyword list into a bounded list of CandidateRecords
from one public API. Failures never propagate: a non-200 status, a bad body
or a transport error yields an empty outcome with the error recorded.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from itertools import islice
from typing import Any

import httpx
from pydantic import BaseModel, Field

from src.core.config import HttpConfig
from src.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)

FAN_OUT_WIDTH = 3
MAX_PAGE_SIZE = 10
MAX_KEYWORDS = 3


class FetchOutcome(BaseModel):
    """Result of one fetcher call: candidates plus any contained errors."""

    platform: str
    candidates: list[CandidateRecord] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


def page_size(limit: int, width: int = FAN_OUT_WIDTH) -> int:
    """Per-source page size: min(ceil(limit / width), 10)."""
    return min(math.ceil(max(limit, 1) / width), MAX_PAGE_SIZE)


def top_keywords(keywords: Sequence[str]) -> list[str]:
    """Return the first 1-3 non-blank keywords in priority order."""
    cleaned = [kw.strip() for kw in keywords if kw and kw.strip()]
    return cleaned[:MAX_KEYWORDS]


class PlatformFetcher(ABC):
    """Base class that every platform fetcher must implement."""

    def __init__(self, client: httpx.AsyncClient, config: HttpConfig | None = None) -> None:
        self._client = client
        self._config = config or HttpConfig()

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'github')."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name used in the diagnostic log."""

    @abstractmethod
    def build_request(
        self, keywords: list[str], per_page: int, location: str,
    ) -> tuple[str, dict[str, Any]]:
        """Return (url, query params) for the single search request."""

    @abstractmethod
    def parse(
        self, payload: Any, keywords: list[str], location: str,
    ) -> Iterator[CandidateRecord]:
        """Yield validated candidates from a decoded JSON payload.

        Raises ValueError (or ValidationError) when the payload has the wrong shape.
        """

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self._config.user_agent}

    async def fetch(
        self,
        keywords: Sequence[str],
        limit: int,
        location: str = "",
    ) -> FetchOutcome:
        """Run the search, returning at most page_size(limit) unique candidates."""
        outcome = FetchOutcome(platform=self.platform_id)
        used = top_keywords(keywords)
        if not used:
            return outcome

        per_page = page_size(limit)
        url, params = self.build_request(used, per_page, location)
        logger.debug("%s request: %s %s", self.display_name, url, params)

        try:
            response = await self._client.get(
                url, params=params, headers=self.headers, timeout=self._config.timeout_s,
            )
            if response.status_code != 200:
                outcome.errors.append(f"HTTP {response.status_code}")
                logger.warning(
                    "%s search returned HTTP %d", self.display_name, response.status_code,
                )
                return outcome

            payload = response.json()
            records = self._unique(self.parse(payload, used, location))
            outcome.candidates = list(islice(records, per_page))
        except Exception as e:
            outcome.candidates = []
            outcome.errors.append(str(e) or type(e).__name__)
            logger.warning("%s search failed: %s", self.display_name, e)
            return outcome

        logger.info("%s: %d candidates", self.display_name, len(outcome.candidates))
        return outcome

    @staticmethod
    def _unique(records: Iterator[CandidateRecord]) -> Iterator[CandidateRecord]:
        """Drop repeated usernames within a single call."""
        seen: set[str] = set()
        for record in records:
            key = (record.username or record.name).lower()
            if key in seen:
                continue
            seen.add(key)
            yield record


def require_mapping(value: Any, what: str) -> dict[str, Any]:
    """Shape check used by the parsers."""
    if not isinstance(value, dict):
        msg = f"expected {what} to be an object, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        msg = f"expected {what} to be a list, got {type(value).__name__}"
        raise ValueError(msg)
    return value
