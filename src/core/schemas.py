"""Core data models for the candidate hunter."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALLOWED_SENIORITY = {"junior", "mid", "senior", "lead"}

Platform = Literal["github", "devto", "reddit", "mock"]


class JobProfile(BaseModel):
    """Structured view of a job description. Built once per hunt."""

    model_config = ConfigDict(frozen=True)

    role: str = ""
    seniority: str = "mid"
    must_have_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    location: str = ""
    boolean_search: str = ""

    @field_validator("seniority")
    @classmethod
    def seniority_in_allowed(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ALLOWED_SENIORITY:
            msg = f"seniority must be one of {sorted(ALLOWED_SENIORITY)}, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("must_have_skills", "nice_to_have_skills", "keywords")
    @classmethod
    def drop_blank_and_duplicates(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        result: list[str] = []
        for item in v:
            item = item.strip()
            if item and item.lower() not in seen:
                seen.add(item.lower())
                result.append(item)
        return result


class CandidateRecord(BaseModel):
    """A developer profile discovered by a platform fetcher or the mock source.

    Frozen: score and rationale live on the ScoredCandidate wrapper.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    username: str = ""
    platform: Platform
    profile_url: str = ""
    summary: str = ""
    location: str = ""
    skills: list[str] = Field(default_factory=list)
    followers: int | None = Field(default=None, ge=0)
    repos: int | None = Field(default=None, ge=0)
    karma: int | None = None
    articles: int | None = Field(default=None, ge=0)


class ScoredCandidate(BaseModel):
    """Wrapper that pairs a frozen CandidateRecord with a fit score."""

    model_config = ConfigDict(frozen=True)

    candidate: CandidateRecord
    score: int = Field(default=0, ge=0, le=100)
    rationale: str = ""


class SearchSummary(BaseModel):
    """Aggregate statistics over a ranked candidate list."""

    total_candidates: int = 0
    top_candidates_count: int = 0
    average_score: float = 0.0
    highest_score: int = 0


class RankedResult(BaseModel):
    """Output of the ranker: full ordering, top prefix and summary."""

    top_candidates: list[ScoredCandidate] = Field(default_factory=list)
    all_ranked: list[ScoredCandidate] = Field(default_factory=list)
    summary: SearchSummary = Field(default_factory=SearchSummary)


class PlatformDebugEntry(BaseModel):
    """Diagnostic record for one platform attempt."""

    name: str
    candidates_count: int = 0
    errors: list[str] = Field(default_factory=list)
    note: str = ""


class PlatformDebugLog(BaseModel):
    """Per-search diagnostic log. Observational only."""

    timestamp: datetime = Field(default_factory=datetime.now)
    mode: Literal["real", "mock"] = "real"
    input: dict[str, Any] = Field(default_factory=dict)
    platforms: dict[str, PlatformDebugEntry] = Field(default_factory=dict)


class AggregateResult(BaseModel):
    """Merged fan-out output."""

    candidates: list[CandidateRecord] = Field(default_factory=list)
    platform_stats: dict[str, int] = Field(default_factory=dict)
    debug_log: PlatformDebugLog = Field(default_factory=PlatformDebugLog)


class PersistenceResult(BaseModel):
    """Outcome of writing candidates to the persistence sink."""

    saved_count: int = 0
    failure_count: int = 0
    records: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None
    logs: list[str] = Field(default_factory=list)


class ReportJob(BaseModel):
    """Job header of the final report."""

    role: str
    seniority: str
    location: str
    analyzed_at: datetime = Field(default_factory=datetime.now)


class ReportCandidate(BaseModel):
    """One row of the final report."""

    name: str
    platform: str
    profile_url: str
    score: int
    rationale: str
    location: str


class HuntReport(BaseModel):
    """Formatted result of a full hunt."""

    job: ReportJob
    candidates: list[ReportCandidate] = Field(default_factory=list)
    summary: SearchSummary = Field(default_factory=SearchSummary)
    platform_stats: dict[str, int] = Field(default_factory=dict)
    persistence: PersistenceResult = Field(default_factory=PersistenceResult)
    debug: PlatformDebugLog | None = None
    analyzer_error: str | None = None
