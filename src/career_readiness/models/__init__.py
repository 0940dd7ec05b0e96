"""Data models for the career readiness engine."""

from career_readiness.models.answers import AssessmentAnswers, TargetCompany, TargetRole
from career_readiness.models.insights import (
    AIInsights,
    CareerAnalysis,
    CompanyMatch,
    ExecutiveSummary,
    StrengthToLeverage,
)
from career_readiness.models.market import (
    CompanyTrend,
    MarketIntel,
    RoleKeyword,
    SalaryData,
    SalaryRange,
    SalarySignals,
    SearchSources,
)
from career_readiness.models.plan import DayPlan, Task, WeekPlan
from career_readiness.models.profile import (
    CandidateProfile,
    ExperienceEntry,
    LinkedinProfile,
    ParsedProfile,
    ResumeProfile,
)
from career_readiness.models.readiness import ReadinessBreakdown, ReadinessScore
from career_readiness.models.result import AnalysisResult
from career_readiness.models.skills import SkillItem, SkillsAnalysis

__all__ = [
    "AIInsights",
    "AnalysisResult",
    "AssessmentAnswers",
    "CandidateProfile",
    "CareerAnalysis",
    "CompanyMatch",
    "CompanyTrend",
    "DayPlan",
    "ExecutiveSummary",
    "ExperienceEntry",
    "LinkedinProfile",
    "MarketIntel",
    "ParsedProfile",
    "ReadinessBreakdown",
    "ReadinessScore",
    "ResumeProfile",
    "RoleKeyword",
    "SalaryData",
    "SalaryRange",
    "SalarySignals",
    "SearchSources",
    "SkillItem",
    "SkillsAnalysis",
    "StrengthToLeverage",
    "TargetCompany",
    "TargetRole",
    "Task",
    "WeekPlan",
]
