"""Pydantic models for the readiness score."""

from __future__ import annotations

from pydantic import Field

from career_readiness.models.base import CamelModel


class ReadinessBreakdown(CamelModel):
    resume: int = Field(ge=0, le=100)
    linkedin: int = Field(ge=0, le=100)
    skills_match: int = Field(ge=0, le=100)
    network: int = Field(ge=0, le=100)
    experience: int = Field(ge=0, le=100)


class ReadinessScore(CamelModel):
    overall: int = Field(ge=0, le=100)
    breakdown: ReadinessBreakdown
    gaps: list[str] = []
    strengths: list[str] = []
