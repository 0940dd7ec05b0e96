"""Coerce heterogeneous client input into a canonical answers record."""

from __future__ import annotations

import logging
from typing import Any

from career_readiness.errors import ValidationError
from career_readiness.models.answers import AssessmentAnswers, TargetCompany, TargetRole

logger = logging.getLogger(__name__)

MIN_ROLES, MAX_ROLES = 1, 3
MIN_COMPANIES, MAX_COMPANIES = 5, 30

_OPTIONAL_STRINGS = (
    "level",
    "compTarget",
    "timeline",
    "locationPreference",
    "resumeStatus",
    "linkedinStatus",
    "networkStrength",
    "outreachComfort",
    "jobDescription",
    "biggestBlocker",
)

_SNAKE_ALIASES = {
    "target_roles": "targetRoles",
    "target_companies": "targetCompanies",
    "comp_target": "compTarget",
    "location_preference": "locationPreference",
    "hours_per_week": "hoursPerWeek",
    "resume_status": "resumeStatus",
    "linkedin_status": "linkedinStatus",
    "network_strength": "networkStrength",
    "outreach_comfort": "outreachComfort",
    "job_description": "jobDescription",
    "biggest_blocker": "biggestBlocker",
    "linkedin_manual_data": "linkedinManualData",
}


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    value = str(value).strip()
    return value or None


def _role(item: Any) -> TargetRole | None:
    if isinstance(item, str):
        name = _text(item)
        return TargetRole(name=name) if name else None
    if isinstance(item, dict):
        name = _text(item.get("name") or item.get("title"))
        if name:
            return TargetRole(name=name, is_custom=bool(item.get("isCustom") or item.get("is_custom")))
    return None


def _company(item: Any) -> TargetCompany | None:
    if isinstance(item, str):
        name = _text(item)
        return TargetCompany(name=name) if name else None
    if not isinstance(item, dict):
        return None
    name = _text(item.get("name") or item.get("company") or item.get("title") or item.get("domain") or item.get("slug"))
    if not name:
        return None
    return TargetCompany(
        name=name,
        domain=_text(item.get("domain")),
        logo_url=_text(item.get("logoUrl") or item.get("logo")),
        industry=_text(item.get("industry") or item.get("category")),
        size=_text(item.get("size") or item.get("sizeRange")),
    )


def _hours(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = _text(value)
    if not text:
        return None
    digits = "".join(ch for ch in text if ch.isdigit())
    return int(digits) if digits else None


def normalize_answers(raw: Any) -> AssessmentAnswers:
    """Build an AssessmentAnswers record from loosely-shaped client input.

    Roles and companies may be plain strings or partial objects; entries
    without a usable name are dropped. Blank optional strings become None.
    Shape constraints are not enforced here, see ``validate_answers``.
    """
    data = dict(raw) if isinstance(raw, dict) else {}
    for snake, camel in _SNAKE_ALIASES.items():
        if snake in data and camel not in data:
            data[camel] = data.pop(snake)

    roles = data.get("targetRoles") or data.get("roles") or []
    companies = data.get("targetCompanies") or data.get("companyTargets") or []
    if not isinstance(roles, list):
        roles = [roles]
    if not isinstance(companies, list):
        companies = [companies]

    manual = data.get("linkedinManualData")
    fields = {key: _text(data.get(key)) for key in _OPTIONAL_STRINGS}
    answers = AssessmentAnswers(
        target_roles=[r for r in (_role(item) for item in roles) if r],
        target_companies=[c for c in (_company(item) for item in companies) if c],
        hours_per_week=_hours(data.get("hoursPerWeek")),
        linkedin_manual_data=manual if isinstance(manual, dict) else None,
        **fields,
    )
    logger.debug(
        "Normalized answers: %d roles, %d companies",
        len(answers.target_roles),
        len(answers.target_companies),
    )
    return answers


def validate_answers(answers: AssessmentAnswers) -> AssessmentAnswers:
    """Enforce role and company count bounds.

    Raises:
        ValidationError: naming the field that violates its bounds.
    """
    roles = len(answers.target_roles)
    if not MIN_ROLES <= roles <= MAX_ROLES:
        raise ValidationError(
            "targetRoles", f"expected {MIN_ROLES}-{MAX_ROLES} roles, got {roles}"
        )
    companies = len(answers.target_companies)
    if not MIN_COMPANIES <= companies <= MAX_COMPANIES:
        raise ValidationError(
            "targetCompanies",
            f"expected {MIN_COMPANIES}-{MAX_COMPANIES} companies, got {companies}",
        )
    return answers
