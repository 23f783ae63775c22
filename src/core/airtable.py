"""Airtable persistence for ranked candidates.

Each candidate becomes one flat record:
  {jobTitle, location, name, platform, profileUrl, score, rationale}
posted in batches of at most 10 (the Airtable per-request cap).
"""

import logging
import os
from typing import Any
from urllib.parse import quote

import httpx

from src.core.config import AirtableConfig
from src.core.schemas import PersistenceResult, ScoredCandidate

logger = logging.getLogger(__name__)

API_ROOT = "https://api.airtable.com/v0"
BATCH_SIZE = 10


def to_airtable_fields(
    job_title: str, location: str, scored: ScoredCandidate,
) -> dict[str, Any]:
    """Flatten a scored candidate into the table's field set."""
    c = scored.candidate
    return {
        "jobTitle": job_title or "Unknown",
        "location": location or "Unknown",
        "name": c.name or "Unknown",
        "platform": c.platform,
        "profileUrl": c.profile_url,
        "score": scored.score,
        "rationale": scored.rationale,
    }


class AirtableSink:
    """Writes candidates to one Airtable table via the REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        token: str,
        base_id: str,
        table_name: str,
        timeout_s: float = 30.0,
    ) -> None:
        self._client = client
        self._token = token
        self._base_id = base_id
        self._table_name = table_name
        self._timeout_s = timeout_s

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: AirtableConfig) -> "AirtableSink":
        """Build a sink from settings, falling back to AIRTABLE_* env vars."""
        return cls(
            client,
            token=os.environ.get(config.token_env, ""),
            base_id=config.base_id or os.environ.get("AIRTABLE_BASE_ID", ""),
            table_name=config.table_name or os.environ.get("AIRTABLE_TABLE_NAME", ""),
            timeout_s=config.timeout_s,
        )

    @property
    def url(self) -> str:
        return f"{API_ROOT}/{self._base_id}/{quote(self._table_name, safe='')}"

    async def save(
        self,
        job_title: str,
        location: str,
        candidates: list[ScoredCandidate],
    ) -> PersistenceResult:
        """Persist candidates, returning counts instead of raising on failure."""
        result = PersistenceResult()

        if not (self._token and self._base_id and self._table_name):
            result.logs.append("Missing Airtable credentials")
            result.error = "Missing credentials"
            logger.warning("Airtable credentials not configured, skipping save")
            return result

        if not candidates:
            return result

        records = [{"fields": to_airtable_fields(job_title, location, c)} for c in candidates]
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

        for start in range(0, len(records), BATCH_SIZE):
            batch = records[start:start + BATCH_SIZE]
            result.logs.append(f"POST {self.url} ({len(batch)} records)")
            try:
                response = await self._client.post(
                    self.url,
                    json={"records": batch},
                    headers=headers,
                    timeout=self._timeout_s,
                )
                body = _json_or_empty(response)
            except httpx.HTTPError as e:
                result.failure_count += len(batch)
                result.error = str(e) or type(e).__name__
                result.logs.append(f"Request failed: {result.error}")
                logger.warning("Airtable request failed: %s", result.error)
                continue

            if 200 <= response.status_code < 300:
                saved = body.get("records") or []
                result.records.extend(saved)
                result.saved_count += len(saved)
                result.logs.append(f"{len(saved)} saved")
            else:
                result.failure_count += len(batch)
                result.error = _error_message(body) or f"HTTP {response.status_code}"
                result.logs.append(f"FAILED {response.status_code}: {result.error}")
                logger.warning(
                    "Airtable rejected batch (HTTP %d): %s", response.status_code, result.error,
                )

        logger.info(
            "Airtable: %d saved, %d failed", result.saved_count, result.failure_count,
        )
        return result


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(body: dict[str, Any]) -> str:
    error = body.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or error.get("type") or "")
    return str(error or "")
