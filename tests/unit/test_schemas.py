"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from src.core.schemas import (
    CandidateRecord,
    HuntReport,
    JobProfile,
    PersistenceResult,
    ReportJob,
    ScoredCandidate,
)


class TestJobProfile:
    def test_defaults(self) -> None:
        p = JobProfile()
        assert p.seniority == "mid"
        assert p.keywords == []

    def test_seniority_normalized(self) -> None:
        assert JobProfile(seniority=" Senior ").seniority == "senior"

    def test_invalid_seniority(self) -> None:
        with pytest.raises(ValidationError, match="seniority must be one of"):
            JobProfile(seniority="principal")

    def test_skill_lists_deduped(self) -> None:
        p = JobProfile(keywords=["React", "react", " ", "TypeScript "])
        assert p.keywords == ["React", "TypeScript"]

    def test_frozen(self) -> None:
        p = JobProfile(role="Dev")
        with pytest.raises(ValidationError):
            p.role = "Other"  # type: ignore[misc]


class TestCandidateRecord:
    def test_minimal(self) -> None:
        c = CandidateRecord(name="Ana", platform="github")
        assert c.followers is None
        assert c.skills == []

    def test_unknown_platform(self) -> None:
        with pytest.raises(ValidationError):
            CandidateRecord(name="Ana", platform="linkedin")  # type: ignore[arg-type]

    def test_negative_followers(self) -> None:
        with pytest.raises(ValidationError):
            CandidateRecord(name="Ana", platform="github", followers=-1)

    def test_frozen(self) -> None:
        c = CandidateRecord(name="Ana", platform="github")
        with pytest.raises(ValidationError):
            c.name = "Bia"  # type: ignore[misc]


class TestScoredCandidate:
    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, score: int) -> None:
        c = CandidateRecord(name="Ana", platform="github")
        with pytest.raises(ValidationError):
            ScoredCandidate(candidate=c, score=score)

    def test_wraps_candidate_unchanged(self) -> None:
        c = CandidateRecord(name="Ana", platform="github", followers=10)
        s = ScoredCandidate(candidate=c, score=77, rationale="ok")
        assert s.candidate is c


class TestHuntReport:
    def test_json_dump(self) -> None:
        report = HuntReport(
            job=ReportJob(role="Dev", seniority="mid", location="Brazil"),
            persistence=PersistenceResult(error="persistence disabled"),
        )
        data = report.model_dump(mode="json")
        assert data["job"]["role"] == "Dev"
        assert data["candidates"] == []
        assert data["persistence"]["error"] == "persistence disabled"
        assert data["debug"] is None
