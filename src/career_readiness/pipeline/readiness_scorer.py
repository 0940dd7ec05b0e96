"""Readiness Scorer: five 0-100 subscores and their weighted composite.

Pure functions only; identical inputs always yield identical output.
"""

from __future__ import annotations

import re

from career_readiness.models.profile import CandidateProfile, LinkedinProfile, ResumeProfile
from career_readiness.models.readiness import ReadinessBreakdown, ReadinessScore
from career_readiness.models.skills import SkillsAnalysis
from career_readiness.utils.numbers import clamp

DEFAULT_WEIGHTS: dict[str, float] = {
    "resume": 0.30,
    "linkedin": 0.25,
    "skillsMatch": 0.25,
    "network": 0.10,
    "experience": 0.10,
}

METRIC_RE = re.compile(r"\d+%|\$\d+|\b(?:increased|decreased|improved|reduced|saved|grew)\b", re.IGNORECASE)

# (minimum connections, score), checked top-down.
NETWORK_BUCKETS = ((500, 100), (300, 80), (100, 60), (50, 40), (10, 20))

EXPECTED_YEARS: dict[str, int] = {
    "entry": 0,
    "junior": 1,
    "mid": 3,
    "senior": 5,
    "staff": 8,
    "principal": 10,
    "lead": 7,
    "manager": 6,
    "director": 8,
}
DEFAULT_EXPECTED_YEARS = 3

# (breakdown key, comparison, threshold, message) in declaration order.
GAP_RULES = (
    ("skillsMatch", "lt", 60, "Missing critical skills for your target role"),
    ("resume", "lt", 70, "Resume needs ATS-ready optimization"),
    ("linkedin", "lt", 60, "LinkedIn profile is incomplete or not optimized"),
)
STRENGTH_RULES = (
    ("experience", "ge", 90, "Strong experience level for target role"),
    ("skillsMatch", "ge", 70, "Skills alignment with job requirements"),
    ("resume", "ge", 80, "Resume is structured with strong signal"),
)


def resume_score(resume: ResumeProfile) -> int:
    """Additive rubric minus 5 per formatting/grammar issue."""
    score = 0
    if resume.email:
        score += 10
    if resume.summary:
        score += 10
    if resume.experience:
        score += 20
    if any(METRIC_RE.search(entry.description) for entry in resume.experience):
        score += 20
    if resume.skills:
        score += 15
    if resume.education:
        score += 10
    score -= 5 * resume.formatting_issue_count
    return clamp(score)


def linkedin_score(linkedin: LinkedinProfile, target_role: str | None) -> int:
    score = 0
    headline = linkedin.headline
    if len(headline) > 20:
        score += 20
    role_word = (target_role or "").strip().lower().split(" ")[0]
    if role_word and role_word in headline.lower():
        score += 10
    if len(linkedin.about) > 100:
        score += 20
    if len(linkedin.about) > 500:
        score += 10
    if linkedin.current_role and linkedin.current_company:
        score += 15
    if len(linkedin.skills) >= 5:
        score += 15
    if len(linkedin.skills) >= 10:
        score += 10
    return clamp(score)


def network_score(connections: int) -> int:
    for minimum, score in NETWORK_BUCKETS:
        if connections >= minimum:
            return score
    return 0


def experience_score(years: float, level: str | None) -> int:
    expected = EXPECTED_YEARS.get((level or "mid").strip().lower(), DEFAULT_EXPECTED_YEARS)
    if years >= expected:
        return 100
    return clamp(years / expected * 100)


def overall_score(breakdown: ReadinessBreakdown, weights: dict[str, float] | None = None) -> int:
    weights = weights or DEFAULT_WEIGHTS
    values = breakdown.model_dump(by_alias=True)
    return clamp(sum(values[key] * weight for key, weight in weights.items()))


def _passes(value: int, op: str, threshold: int) -> bool:
    return value < threshold if op == "lt" else value >= threshold


def calculate_readiness_score(
    profile: CandidateProfile,
    skills: SkillsAnalysis,
    weights: dict[str, float] | None = None,
) -> ReadinessScore:
    breakdown = ReadinessBreakdown(
        resume=resume_score(profile.resume),
        linkedin=linkedin_score(profile.linkedin, profile.target_role),
        skills_match=clamp(skills.overall_score),
        network=network_score(profile.linkedin.connections),
        experience=experience_score(profile.resume.years_experience, profile.level),
    )
    values = breakdown.model_dump(by_alias=True)
    return ReadinessScore(
        overall=overall_score(breakdown, weights),
        breakdown=breakdown,
        gaps=[msg for key, op, limit, msg in GAP_RULES if _passes(values[key], op, limit)],
        strengths=[msg for key, op, limit, msg in STRENGTH_RULES if _passes(values[key], op, limit)],
    )
