"""Ranking of scored candidates and summary statistics."""

import logging

from src.core.schemas import RankedResult, ScoredCandidate, SearchSummary
from src.pipeline.scorer import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_TOP_COUNT = 3


def rank_candidates(
    scored: list[ScoredCandidate],
    top_count: int = DEFAULT_TOP_COUNT,
) -> RankedResult:
    """Sort candidates by score descending and slice the top N.

    The sort is stable: equal scores keep their input order.

    Raises:
        ValueError: If top_count is less than 1.
    """
    if top_count < 1:
        msg = f"top_count must be at least 1, got {top_count}"
        raise ValueError(msg)

    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    top = ranked[:top_count]

    total = len(ranked)
    average = round_half_up(sum(s.score for s in ranked) / total, 2) if total else 0.0
    highest = ranked[0].score if ranked else 0

    summary = SearchSummary(
        total_candidates=total,
        top_candidates_count=len(top),
        average_score=average,
        highest_score=highest,
    )
    logger.info(
        "Ranked %d candidates: top %d, average %.2f, highest %d",
        total, len(top), average, highest,
    )
    return RankedResult(top_candidates=top, all_ranked=ranked, summary=summary)
