"""Rule-based fit scoring for candidates.

Base score 40-80 from must-have skill overlap, plus a flat bonus for each
engagement threshold crossed (followers, repos, karma, articles).
Score range: 0-100 (clamped).
"""

import logging
import math

from src.core.config import ScoringConfig
from src.core.schemas import CandidateRecord, JobProfile, ScoredCandidate

logger = logging.getLogger(__name__)

TECH_VOCABULARY = (
    "react", "typescript", "javascript", "node", "python", "java", "rust", "go",
    "docker", "kubernetes", "aws", "graphql", "mongodb", "postgresql",
    "next.js", "vue", "angular", "deno", "cloudflare",
)


def extract_skills(text: str) -> list[str]:
    """Return vocabulary terms that appear as substrings of text."""
    if not text:
        return []
    lower = text.lower()
    return [term for term in TECH_VOCABULARY if term in lower]


def count_skill_matches(job_skills: list[str], candidate_skills: list[str]) -> int:
    """Count job skills that substring-match any candidate skill, in either direction."""
    candidate_lower = [s.lower() for s in candidate_skills if s]
    matches = 0
    for skill in job_skills:
        skill = skill.lower()
        if any(cs in skill or skill in cs for cs in candidate_lower):
            matches += 1
    return matches


def score_candidate(
    profile: JobProfile,
    candidate: CandidateRecord,
    config: ScoringConfig,
) -> ScoredCandidate:
    """Score a single candidate against the job's must-have skills.

    Args:
        profile: The job profile being hunted for.
        candidate: The candidate to score.
        config: Scoring weights from settings.

    Returns:
        ScoredCandidate wrapping the candidate with an integer score 0-100.
    """
    job_skills = [s for s in profile.must_have_skills if s.strip()]
    candidate_skills = extract_skills(candidate.summary)
    match_count = count_skill_matches(job_skills, candidate_skills)

    raw = config.base_score + config.match_weight * match_count / max(len(job_skills), 1)
    score = int(round_half_up(raw))

    thresholds = (
        (candidate.followers, config.followers_threshold),
        (candidate.repos, config.repos_threshold),
        (candidate.karma, config.karma_threshold),
        (candidate.articles, config.articles_threshold),
    )
    for value, threshold in thresholds:
        if value is not None and value > threshold:
            score += config.engagement_bonus

    score = max(0, min(score, 100))
    rationale = _rationale(candidate, match_count, len(job_skills))
    logger.debug("Scored %s (%s): %d", candidate.name, candidate.platform, score)
    return ScoredCandidate(candidate=candidate, score=score, rationale=rationale)


def score_candidates(
    profile: JobProfile,
    candidates: list[CandidateRecord],
    config: ScoringConfig,
) -> list[ScoredCandidate]:
    """Score a batch of candidates, preserving input order."""
    return [score_candidate(profile, c, config) for c in candidates]


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves upward: 42.5 -> 43, 80.125 -> 80.13 with ndigits=2."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def _rationale(candidate: CandidateRecord, match_count: int, skill_count: int) -> str:
    parts = [f"Matched {match_count}/{skill_count} required skills."]
    if candidate.followers:
        parts.append(f"{candidate.followers} followers.")
    if candidate.repos:
        parts.append(f"{candidate.repos} public repos.")
    if candidate.karma:
        parts.append(f"{candidate.karma} karma.")
    if candidate.articles:
        parts.append(f"{candidate.articles} articles.")
    return " ".join(parts)
