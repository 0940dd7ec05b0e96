"""Pydantic models for the self-reported assessment answers."""

from __future__ import annotations

from typing import Any

from career_readiness.models.base import CamelModel


class TargetRole(CamelModel):
    name: str
    is_custom: bool = False


class TargetCompany(CamelModel):
    name: str
    domain: str | None = None
    logo_url: str | None = None
    industry: str | None = None
    size: str | None = None


class AssessmentAnswers(CamelModel):
    """Canonical answers record. Treated as immutable input."""

    target_roles: list[TargetRole] = []
    level: str | None = None
    comp_target: str | None = None
    timeline: str | None = None
    location_preference: str | None = None
    hours_per_week: int | None = None
    resume_status: str | None = None
    linkedin_status: str | None = None
    network_strength: str | None = None
    outreach_comfort: str | None = None
    target_companies: list[TargetCompany] = []
    job_description: str | None = None
    biggest_blocker: str | None = None
    linkedin_manual_data: dict[str, Any] | None = None

    model_config = {**CamelModel.model_config, "frozen": True}

    @property
    def primary_role(self) -> str | None:
        return self.target_roles[0].name if self.target_roles else None

    @property
    def company_names(self) -> list[str]:
        return [c.name for c in self.target_companies if c.name]
