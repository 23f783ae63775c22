"""Orchestrator: wires analyzer, fan-out search, scorer, ranker and Airtable write.

Data flow:
  1. Analyze job description → JobProfile
  2. Fan-out search (or mock source) → candidates
  3. Score → scored candidates (input order)
  4. Rank → top N + summary
  5. Persist top N
  6. Format report
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from src.core.airtable import AirtableSink
from src.core.config import Settings
from src.core.schemas import (
    AggregateResult,
    CandidateRecord,
    HuntReport,
    JobProfile,
    PersistenceResult,
    RankedResult,
    ReportCandidate,
    ReportJob,
    ScoredCandidate,
)
from src.pipeline.aggregator import aggregate_search, clamp_limit, default_fetchers
from src.pipeline.llm_scorer import score_candidates_llm
from src.pipeline.ranker import rank_candidates
from src.pipeline.scorer import score_candidates
from src.platforms.base import PlatformFetcher
from src.platforms.mock import MockSource
from src.profile.job_analyzer import analyze_job_description, extract_profile_heuristic
from src.profile.llm import get_provider
from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

PERSISTENCE_DISABLED = "persistence disabled"


async def analyze(
    description: str,
    location: str,
    settings: Settings,
    provider: LLMProvider | None = None,
) -> tuple[JobProfile, str | None]:
    """Step 1: build the JobProfile with the configured analyzer."""
    config = settings.analyzer
    if config.mode == "heuristic":
        return extract_profile_heuristic(description, location), None

    provider = provider or get_provider(config.provider)
    return await asyncio.to_thread(
        analyze_job_description,
        description,
        location,
        provider,
        model=config.model,
        temperature=config.temperature,
    )


async def score(
    profile: JobProfile,
    candidates: list[CandidateRecord],
    settings: Settings,
    provider: LLMProvider | None = None,
) -> list[ScoredCandidate]:
    """Step 3: score with the configured strategy. Empty input makes no calls."""
    if not candidates:
        return []
    config = settings.scoring
    if config.strategy == "llm":
        provider = provider or get_provider(config.llm_provider)
        return await score_candidates_llm(profile, candidates, provider, config)
    return score_candidates(profile, candidates, config)


async def run_hunt(
    description: str,
    settings: Settings,
    *,
    client: httpx.AsyncClient,
    provider: LLMProvider | None = None,
    sink: AirtableSink | None = None,
    fetchers: Sequence[PlatformFetcher] | None = None,
    mock_source: MockSource | None = None,
    location: str | None = None,
    limit: int | None = None,
    top_count: int | None = None,
) -> HuntReport:
    """Run the six-step hunt for one job description.

    Args:
        description: Free-text job description.
        settings: Loaded settings.
        client: Shared HTTP client for fetchers.
        provider: LLM provider for analysis and LLM scoring. None resolves
            each step's provider from settings.
        sink: Persistence sink. None disables persistence.
        fetchers: Platform fetchers; defaults to GitHub, Dev.to, Reddit.
        mock_source: Canned source for mock mode.
        location, limit, top_count: Per-run overrides of settings.search.

    Returns:
        HuntReport with the ranked shortlist, stats and diagnostics.
    """
    search = settings.search
    location = location if location is not None else search.location
    limit = clamp_limit(limit, default=search.limit)
    top_count = top_count if top_count is not None else search.top_count
    if top_count < 1:
        msg = f"top_count must be at least 1, got {top_count}"
        raise ValueError(msg)

    logger.info("Step 1/6: analyzing job description")
    profile, analyzer_error = await analyze(description, location, settings, provider)
    location = profile.location or location

    logger.info("Step 2/6: searching candidates")
    aggregate = await aggregate_search(
        profile.keywords,
        limit,
        location,
        description,
        fetchers=fetchers if fetchers is not None else default_fetchers(client, settings.http),
        mock_source=mock_source,
    )

    logger.info("Step 3/6: scoring %d candidates", len(aggregate.candidates))
    scored = await score(profile, aggregate.candidates, settings, provider)

    logger.info("Step 4/6: ranking")
    ranked = rank_candidates(scored, top_count)

    logger.info("Step 5/6: saving top %d candidates", len(ranked.top_candidates))
    if sink is None:
        persistence = PersistenceResult(error=PERSISTENCE_DISABLED)
    else:
        persistence = await sink.save(profile.role, location, ranked.top_candidates)

    logger.info("Step 6/6: formatting results")
    return format_results(profile, ranked, aggregate, persistence, analyzer_error)


def format_results(
    profile: JobProfile,
    ranked: RankedResult,
    aggregate: AggregateResult,
    persistence: PersistenceResult,
    analyzer_error: str | None = None,
) -> HuntReport:
    """Assemble the final report from the step outputs."""
    job = ReportJob(
        role=profile.role or "Unknown",
        seniority=profile.seniority,
        location=profile.location or "Unknown",
    )
    rows = [
        ReportCandidate(
            name=s.candidate.name,
            platform=s.candidate.platform,
            profile_url=s.candidate.profile_url,
            score=s.score,
            rationale=s.rationale,
            location=s.candidate.location,
        )
        for s in ranked.top_candidates
    ]
    return HuntReport(
        job=job,
        candidates=rows,
        summary=ranked.summary,
        platform_stats=aggregate.platform_stats,
        persistence=persistence,
        debug=aggregate.debug_log,
        analyzer_error=analyzer_error,
    )


def export_results_json(report: HuntReport) -> str:
    """Export a hunt report as a JSON string."""
    return report.model_dump_json(indent=2)
