"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    narrative_model: str = "claude-sonnet-4-5-20250929"
    max_retries: int = 3
    timeout: int = 60


@dataclass(frozen=True)
class SearchConfig:
    max_results: int = 6
    search_depth: str = "advanced"


@dataclass(frozen=True)
class ScoringConfig:
    resume_weight: float = 0.30
    linkedin_weight: float = 0.25
    skills_match_weight: float = 0.25
    network_weight: float = 0.10
    experience_weight: float = 0.10

    @property
    def weights(self) -> dict[str, float]:
        return {
            "resume": self.resume_weight,
            "linkedin": self.linkedin_weight,
            "skillsMatch": self.skills_match_weight,
            "network": self.network_weight,
            "experience": self.experience_weight,
        }


@dataclass(frozen=True)
class AnalysisConfig:
    min_job_description_chars: int = 50
    min_tasks: int = 15
    include_narrative: bool = False


@dataclass(frozen=True)
class CacheConfig:
    ttl_days: int = 7
    db_path: str = "~/.career-readiness/cache.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class UsageConfig:
    db_path: str = "~/.career-readiness/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        search=SearchConfig(**raw.get("search", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        analysis=AnalysisConfig(**raw.get("analysis", {})),
        cache=CacheConfig(**raw.get("cache", {})),
        usage=UsageConfig(**raw.get("usage", {})),
    )
