"""Canned candidate source used when a hunt runs in mock mode."""

import logging
from collections.abc import Sequence

from src.core.schemas import (
    AggregateResult,
    CandidateRecord,
    PlatformDebugEntry,
    PlatformDebugLog,
)

logger = logging.getLogger(__name__)

MAX_MOCK_CANDIDATES = 10

MOCK_CANDIDATES: tuple[CandidateRecord, ...] = (
    CandidateRecord(
        name="Ana Silva",
        username="anasilva-dev",
        platform="mock",
        profile_url="https://github.com/anasilva-dev",
        summary="8 years exp. | TypeScript, React, Node.js | Open-source contributor | 500+ repos",
        location="São Paulo, Brazil",
        followers=820,
        repos=512,
    ),
    CandidateRecord(
        name="Carlos Mendes",
        username="carlos-mendes-dev",
        platform="mock",
        profile_url="https://linkedin.com/in/carlos-mendes-dev",
        summary="Tech Lead @ Nubank | 10+ years | Cloudflare Workers, Deno, AI tools",
        location="Rio de Janeiro, Brazil",
        followers=95,
    ),
    CandidateRecord(
        name="Beatriz Costa",
        username="beatrizcosta",
        platform="mock",
        profile_url="https://github.com/beatrizcosta",
        summary="Senior Frontend Engineer | React 18+, TypeScript | Ex-Google",
        location="São Paulo, Brazil",
        followers=150,
        repos=30,
    ),
    CandidateRecord(
        name="Rafael Oliveira",
        username="rafaeloliveira",
        platform="mock",
        profile_url="https://dev.to/rafaeloliveira",
        summary="Full-Stack Dev | Node.js, React, CI/CD | 2500+ followers | Weekly blogger",
        location="Belo Horizonte, Brazil",
        followers=2500,
        articles=48,
    ),
    CandidateRecord(
        name="Juliana Santos",
        username="juliana-santos-tech",
        platform="mock",
        profile_url="https://linkedin.com/in/juliana-santos-tech",
        summary="Senior Software Engineer @ iFood | React, TypeScript, GraphQL | Speaker",
        location="Campinas, Brazil",
        followers=430,
    ),
    CandidateRecord(
        name="Pedro Almeida",
        username="pedroalmeida",
        platform="mock",
        profile_url="https://github.com/pedroalmeida",
        summary="Staff Engineer | Deno core contributor | Rust + TypeScript",
        location="São Paulo, Brazil",
        followers=1200,
        repos=85,
    ),
    CandidateRecord(
        name="Mariana Ferreira",
        username="mariana-ferreira-dev",
        platform="mock",
        profile_url="https://linkedin.com/in/mariana-ferreira-dev",
        summary="Lead Frontend @ Stone | React, Next.js, A11y advocate | 7 years exp",
        location="Rio de Janeiro, Brazil",
        articles=12,
    ),
    CandidateRecord(
        name="Lucas Martins",
        username="lucasmartins",
        platform="mock",
        profile_url="https://github.com/lucasmartins",
        summary="Senior Backend Dev | Node.js, TypeScript, Cloudflare Workers | 500+ stars",
        location="São Paulo, Brazil",
        followers=310,
        repos=64,
        karma=1800,
    ),
)


class MockSource:
    """Deterministic stand-in for the fan-out search. Keywords are ignored."""

    def __init__(self, candidates: Sequence[CandidateRecord] = MOCK_CANDIDATES) -> None:
        self._candidates = tuple(candidates)

    def search(
        self,
        keywords: Sequence[str],
        limit: int,
        location: str = "",
    ) -> AggregateResult:
        limit = max(1, min(limit, MAX_MOCK_CANDIDATES))
        selected = list(self._candidates[:limit])
        logger.info("Mock mode: returning %d canned candidates", len(selected))

        debug_log = PlatformDebugLog(
            mode="mock",
            input={"keywords": list(keywords), "limit": limit, "location": location},
            platforms={
                "mock": PlatformDebugEntry(
                    name="Mock Data",
                    candidates_count=len(selected),
                    note="Using mock data for testing",
                ),
            },
        )
        return AggregateResult(
            candidates=selected,
            platform_stats={"mock": len(selected), "total": len(selected)},
            debug_log=debug_log,
        )
