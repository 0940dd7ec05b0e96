"""Pydantic models for skill extraction and matching."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from career_readiness.models.base import CamelModel

FoundIn = Literal["resume", "linkedin", "both", "job", "market"]
RequiredLevel = Literal["critical", "preferred", "nice-to-have"]
KeywordCategory = Literal["technical", "soft", "domain", "tool", "certification"]
KeywordImportance = Literal["critical", "important", "nice-to-have"]


class SkillItem(CamelModel):
    name: str
    found_in: FoundIn
    required_level: RequiredLevel | None = None
    where_in_job_description: str | None = None
    example_usage: str | None = None


class ATSKeyword(CamelModel):
    keyword: str
    category: KeywordCategory = "technical"
    importance: KeywordImportance = "important"
    frequency: int = 0
    context: str | None = None


class ATSAnalysis(CamelModel):
    """Coverage of job-description keywords by resume keywords."""

    score: int = Field(default=0, ge=0, le=100)
    total_keywords: int = 0
    matched_keywords: list[ATSKeyword] = []
    missing_keywords: list[ATSKeyword] = []
    match_percentage: int = Field(default=0, ge=0, le=100)


class SkillsAnalysis(CamelModel):
    overall_score: int = Field(default=0, ge=0, le=100)
    match_percentage: int = Field(default=0, ge=0, le=100)
    ats_pass: bool = False
    your_skills: list[SkillItem] = []
    required_skills: list[SkillItem] = []
    matching_skills: list[SkillItem] = []
    missing_critical_skills: list[SkillItem] = []
    missing_nice_to_have_skills: list[SkillItem] = []
    required_education: str | None = None
    education_met: bool = True
    role_alignment_score: int = Field(default=0, ge=0, le=100)
    ats_analysis: ATSAnalysis | None = None
    ats_score: int | None = None
