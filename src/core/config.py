"""Configuration models and YAML loader for the candidate hunter."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class HttpConfig(BaseModel):
    """Outbound HTTP settings shared by every platform fetcher."""

    timeout_s: float = Field(default=15.0, ge=1.0, le=60.0)
    user_agent: str = "CandidateHunter/1.0"


class SearchSettings(BaseModel):
    """Defaults for a single hunt."""

    limit: int = Field(default=5, ge=1, le=30)
    location: str = "Brazil"
    top_count: int = Field(default=3, ge=1)

    @field_validator("location")
    @classmethod
    def location_stripped(cls, v: str) -> str:
        return v.strip()


class ScoringConfig(BaseModel):
    """Scoring strategy plus the weights used by the heuristic scorer."""

    strategy: Literal["heuristic", "llm"] = "heuristic"
    llm_provider: str = "openai"
    llm_model: str | None = None
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    base_score: float = 40.0
    match_weight: float = 40.0
    engagement_bonus: int = Field(default=5, ge=0)
    followers_threshold: int = 100
    repos_threshold: int = 20
    karma_threshold: int = 1000
    articles_threshold: int = 5

    rationale_error_chars: int = Field(default=100, ge=10)


class AnalyzerConfig(BaseModel):
    """How the job description is turned into a JobProfile."""

    mode: Literal["llm", "heuristic"] = "llm"
    provider: str = "openai"
    model: str | None = None
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)


class AirtableConfig(BaseModel):
    """Airtable persistence target. Token is read from the environment."""

    enabled: bool = True
    base_id: str = ""
    table_name: str = ""
    token_env: str = "AIRTABLE_TOKEN"
    timeout_s: float = Field(default=30.0, ge=1.0, le=120.0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    http: HttpConfig = Field(default_factory=HttpConfig)
    search: SearchSettings = Field(default_factory=SearchSettings)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    airtable: AirtableConfig = Field(default_factory=AirtableConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
