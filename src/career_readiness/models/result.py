"""The single bundle returned by an analysis run."""

from __future__ import annotations

from typing import Any

from career_readiness.models.base import CamelModel
from career_readiness.models.insights import AIInsights, CareerAnalysis, CompanyMatch
from career_readiness.models.readiness import ReadinessScore
from career_readiness.models.skills import SkillsAnalysis

DATA_DRIVEN_MODEL = "data-driven"


class AnalysisResult(CamelModel):
    ai_insights: AIInsights | None = None
    resume_analysis: dict[str, Any] | None = None
    linkedin_analysis: dict[str, Any] | None = None
    company_matches: list[CompanyMatch] | None = None
    action_plan: dict[str, Any] | None = None
    week1_plan: dict[str, Any] | None = None
    career_analysis: CareerAnalysis | None = None
    market_intelligence: dict[str, Any] | None = None
    skill_match_data: SkillsAnalysis | None = None
    readiness_score: ReadinessScore | None = None
    ai_model: str = DATA_DRIVEN_MODEL
    ai_failed: bool = False
    ai_failure_reason: str | None = None

    @classmethod
    def failed(cls, reason: str) -> AnalysisResult:
        return cls(ai_failed=True, ai_failure_reason=reason)
