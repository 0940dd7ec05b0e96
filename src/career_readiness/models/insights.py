"""Pydantic models for the templated narrative layer."""

from __future__ import annotations

from typing import Any

from career_readiness.models.base import CamelModel


class StrengthToLeverage(CamelModel):
    strength: str
    evidence: str
    how_to_use: str


class AIInsights(CamelModel):
    primary_gap: str
    primary_gap_explanation: str
    primary_gap_evidence: list[str] = []
    secondary_gap: str = ""
    secondary_gap_explanation: str = ""
    secondary_gap_evidence: list[str] = []
    quick_win: str
    quick_win_reasoning: str
    quick_win_evidence: list[str] = []
    strengths_to_leverage: list[StrengthToLeverage] = []
    reality_check: str
    coach_summary: str


class ExecutiveSummary(CamelModel):
    coach_summary: str
    current_state: str
    target_state: str
    primary_challenge: str
    estimated_timeline: str
    confidence_level: str
    evidence_highlights: list[str] = []


class CareerAnalysis(CamelModel):
    executive_summary: ExecutiveSummary
    narrative: str | None = None


class CompanyMatch(CamelModel):
    company: str
    signals: list[dict[str, Any]] = []
