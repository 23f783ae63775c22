"""LLM-delegated fit scoring for candidates.

One generate_object request per candidate, issued concurrently. A failed
request scores that candidate 0 with an error rationale and never aborts the
rest of the batch.
"""

import asyncio
import json
import logging
import math
from typing import Any

from src.core.config import ScoringConfig
from src.core.schemas import CandidateRecord, JobProfile, ScoredCandidate
from src.pipeline.scorer import round_half_up
from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

_SCORING_SYSTEM_PROMPT = (
    "You are a senior technical recruiter evaluating candidate fit for a job.\n\n"
    "Score the candidate 0-100 using this rubric:\n"
    "  90-100: Perfect fit: skills, seniority and focus all align\n"
    "  70-89:  Strong fit: minor gaps in 1-2 areas\n"
    "  50-69:  Moderate fit: some relevant experience, notable gaps\n"
    "  30-49:  Weak fit: partial skill overlap\n"
    "  0-29:   Poor fit: fundamentally misaligned\n\n"
    "Be concise: the rationale is one sentence."
)

SCORE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "score": {"type": "number", "minimum": 0, "maximum": 100},
        "rationale": {"type": "string", "maxLength": 200},
    },
    "required": ["score", "rationale"],
}


def _build_user_prompt(profile: JobProfile, candidate: CandidateRecord) -> str:
    """Assemble the user prompt from the job profile and the candidate."""
    job = profile.model_dump(exclude={"boolean_search"})
    person = candidate.model_dump(exclude_none=True)
    return f"JOB: {json.dumps(job)}\n\nCANDIDATE: {json.dumps(person, ensure_ascii=False)}"


def _parse_llm_score(data: dict[str, Any]) -> tuple[int, str]:
    """Turn a {score, rationale} object into a clamped integer score.

    Raises ValueError on a non-numeric or non-finite score (NaN, Infinity).
    """
    try:
        raw_score = float(data.get("score") or 0)
    except (TypeError, ValueError) as e:
        msg = f"LLM score is not a number: {data.get('score')!r}"
        raise ValueError(msg) from e

    if not math.isfinite(raw_score):
        msg = f"LLM score is not a finite number: {raw_score!r}"
        raise ValueError(msg)

    score = int(round_half_up(max(0.0, min(100.0, raw_score))))
    rationale = str(data.get("rationale") or "")
    return score, rationale


async def score_candidate_llm(
    profile: JobProfile,
    candidate: CandidateRecord,
    provider: LLMProvider,
    config: ScoringConfig,
) -> ScoredCandidate:
    """Score a single candidate with the LLM.

    On any LLM error, logs a warning and returns score 0 with the error as rationale.
    """
    messages = [
        {"role": "system", "content": _SCORING_SYSTEM_PROMPT},
        {"role": "user", "content": _build_user_prompt(profile, candidate)},
    ]
    try:
        data = await asyncio.to_thread(
            provider.generate_object,
            messages,
            SCORE_SCHEMA,
            temperature=config.temperature,
            model=config.llm_model,
        )
        score, rationale = _parse_llm_score(data)
    except Exception as e:
        logger.warning(
            "LLM scoring failed for '%s' (%s), scoring 0",
            candidate.name,
            candidate.platform,
            exc_info=True,
        )
        error = str(e)[: config.rationale_error_chars]
        return ScoredCandidate(candidate=candidate, score=0, rationale=f"Error: {error}")

    return ScoredCandidate(candidate=candidate, score=score, rationale=rationale)


async def score_candidates_llm(
    profile: JobProfile,
    candidates: list[CandidateRecord],
    provider: LLMProvider,
    config: ScoringConfig,
) -> list[ScoredCandidate]:
    """Score a batch concurrently, preserving input order."""
    if not candidates:
        return []
    logger.info(
        "Scoring %d candidates with %s", len(candidates), provider.provider_id,
    )
    return list(
        await asyncio.gather(
            *(score_candidate_llm(profile, c, provider, config) for c in candidates)
        )
    )
