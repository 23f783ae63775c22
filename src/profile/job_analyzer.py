"""Turn a free-text job description into a JobProfile.

Two analyzers:
  - analyze_job_description: one structured LLM call (generate_object)
  - extract_profile_heuristic: offline word filter, no network
"""

import logging
import re
from typing import Any

from src.core.schemas import JobProfile
from src.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are an expert at analyzing job descriptions.\n"
    "Extract the following fields:\n"
    "- role: job title\n"
    "- seniority: junior|mid|senior|lead\n"
    "- must_have_skills: required skills\n"
    "- nice_to_have_skills: desirable skills\n"
    "- keywords: search terms, most important first\n"
    "- location: {location}\n"
    "- boolean_search: boolean search string"
)

JOB_PROFILE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "role": {"type": "string"},
        "seniority": {"type": "string", "enum": ["junior", "mid", "senior", "lead"]},
        "must_have_skills": {"type": "array", "items": {"type": "string"}},
        "nice_to_have_skills": {"type": "array", "items": {"type": "string"}},
        "keywords": {"type": "array", "items": {"type": "string"}},
        "location": {"type": "string"},
        "boolean_search": {"type": "string"},
    },
    "required": ["role", "seniority", "must_have_skills", "keywords", "location", "boolean_search"],
}

STOP_WORDS = frozenset({
    "with", "about", "must", "need", "needs", "looking", "seeking", "developer",
    "experience", "years", "that", "this", "have", "will", "from", "work",
    "team", "role", "good", "strong", "knowledge", "want", "should", "and",
})

MAX_KEYWORDS = 8
MAX_SKILLS = 5


def analyze_job_description(
    description: str,
    location: str,
    provider: LLMProvider,
    *,
    model: str | None = None,
    temperature: float = 0.3,
) -> tuple[JobProfile, str | None]:
    """Extract a JobProfile with a single structured LLM call.

    Never raises on LLM or validation failure: returns a profile carrying only
    the location, plus the error text, so the hunt can continue.

    Returns:
        (profile, error) where error is None on success.
    """
    messages = [
        {"role": "system", "content": _SYSTEM_PROMPT.format(location=location)},
        {"role": "user", "content": f"{description}\n\nLocation: {location}"},
    ]
    try:
        data = provider.generate_object(
            messages, JOB_PROFILE_SCHEMA, temperature=temperature, model=model,
        )
        data.setdefault("location", location)
        if not data.get("location"):
            data["location"] = location
        profile = JobProfile.model_validate(data)
    except Exception as e:
        logger.warning("Job description analysis failed: %s", e, exc_info=True)
        return JobProfile(location=location), str(e)

    logger.info(
        "Analyzed job: %s (%s), keywords=%s",
        profile.role, profile.seniority, profile.keywords,
    )
    return profile, None


def extract_profile_heuristic(description: str, location: str) -> JobProfile:
    """Build a JobProfile from the description words alone.

    Words longer than 3 characters that are not stop words become keywords
    (first 8) and must-have skills (first 5).
    """
    lower = description.lower()
    words = [w.strip(".,;:!?()[]\"'") for w in re.split(r"\s+", lower)]
    keywords: list[str] = []
    for word in words:
        if len(word) > 3 and word not in STOP_WORDS and word not in keywords:
            keywords.append(word)

    if re.search(r"\blead\b", lower):
        seniority = "lead"
    elif "senior" in lower or "sênior" in lower:
        seniority = "senior"
    elif "junior" in lower or "júnior" in lower:
        seniority = "junior"
    else:
        seniority = "mid"

    return JobProfile(
        role="Developer",
        seniority=seniority,
        must_have_skills=keywords[:MAX_SKILLS],
        keywords=keywords[:MAX_KEYWORDS],
        location=location,
    )
