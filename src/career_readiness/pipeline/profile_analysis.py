"""Resume and LinkedIn analysis bundles, and per-company market signals."""

from __future__ import annotations

from typing import Any

from career_readiness.models.answers import AssessmentAnswers
from career_readiness.models.insights import CompanyMatch
from career_readiness.models.market import MarketIntel
from career_readiness.models.profile import LinkedinProfile
from career_readiness.models.readiness import ReadinessScore
from career_readiness.models.skills import SkillsAnalysis
from career_readiness.utils.numbers import round_half_up

MAX_KEYWORD_ISSUES = 4
WHERE_TO_ADD = "Skills section + relevant experience bullet"


def _missing_keyword(keyword: str, reason: str | None) -> dict[str, Any]:
    return {
        "keyword": keyword,
        "importance": "high",
        "currentlyPresent": False,
        "whereToAdd": WHERE_TO_ADD,
        "howToAdd": f'Add "{keyword}" to Skills and one experience bullet with context.',
        "reason": reason or "Required by the job description.",
    }


def _missing_keywords(skills: SkillsAnalysis) -> list[dict[str, Any]]:
    """Critical ATS keywords missing from the resume, else the missing critical skills."""
    ats = skills.ats_analysis
    critical = [k for k in ats.missing_keywords if k.importance == "critical"] if ats else []
    if critical:
        return [_missing_keyword(k.keyword, k.context) for k in critical]
    return [_missing_keyword(s.name, s.where_in_job_description) for s in skills.missing_critical_skills]


def build_resume_analysis(scores: ReadinessScore, skills: SkillsAnalysis) -> dict[str, Any]:
    overall = scores.breakdown.resume
    missing = _missing_keywords(skills)

    issues = [
        {
            "id": f"missing-keyword-{i}",
            "category": "Keywords",
            "severity": "HIGH",
            "issue": f"Missing {item['keyword']}",
            "location": "Skills section",
            "suggestedFix": item["howToAdd"],
            "reasoning": item["reason"],
            "impactScore": 90,
            "timeToFix": "15 min",
            "stepByStepFix": [
                "Open your resume",
                "Find the Skills section",
                f'Add "{item["keyword"]}" with related tools',
                "Save as updated resume",
            ],
        }
        for i, item in enumerate(missing[:MAX_KEYWORD_ISSUES])
    ]
    if skills.required_education and not skills.education_met:
        issues.append(
            {
                "id": "education-required",
                "category": "Requirements",
                "severity": "HIGH",
                "issue": "Education requirement not clearly stated",
                "location": "Education section",
                "suggestedFix": f'Add your degree info to match: "{skills.required_education}"',
                "reasoning": "Hiring managers verify minimum requirements after ATS screening.",
                "impactScore": 85,
                "timeToFix": "10 min",
                "stepByStepFix": ["Open Education section", "Add degree, major, school, and year"],
            }
        )

    return {
        "overallScore": overall,
        "atsScore": round_half_up(overall * 0.9),
        "issues": issues,
        "missingKeywords": missing,
    }


def build_linkedin_analysis(
    answers: AssessmentAnswers,
    linkedin: LinkedinProfile,
    scores: ReadinessScore,
    skills: SkillsAnalysis,
) -> dict[str, Any]:
    overall = scores.breakdown.linkedin
    role = answers.primary_role or "your target role"
    top = [s.name for s in skills.matching_skills[:3]]
    headline = " | ".join([role, *top])
    keywords = [s.name for s in skills.matching_skills[:5]]
    return {
        "overallScore": overall,
        "headline": {
            "current": linkedin.headline,
            "score": overall,
            "optimized": headline,
            "keywords": keywords,
            "reasoning": "Recruiters search by title + skills.",
            "alternatives": [headline],
        },
        "about": {
            "current": linkedin.about,
            "score": overall,
            "keywords": keywords,
        },
    }


def build_company_matches(
    answers: AssessmentAnswers, market_intel: MarketIntel | None
) -> list[CompanyMatch]:
    """Each target company with the market trend signals that name it."""
    trends = market_intel.company_trends if market_intel else []
    matches = []
    for name in answers.company_names:
        key = name.lower()
        signals = [
            trend.to_json_dict()
            for trend in trends
            if trend.company and (key in trend.company.lower() or trend.company.lower() in key)
        ]
        matches.append(CompanyMatch(company=name, signals=signals))
    return matches
