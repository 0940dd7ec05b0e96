"""Skill Match Engine: candidate skills vs job- and market-derived requirements.

Scoring, insights and the task plan all consume the ``SkillsAnalysis``
produced here.
"""

from __future__ import annotations

import logging
import re

from career_readiness.models.market import MarketIntel
from career_readiness.models.profile import LinkedinProfile, ResumeProfile
from career_readiness.models.skills import SkillItem, SkillsAnalysis
from career_readiness.pipeline.skill_extractor import (
    JobDescriptionSkillExtractor,
    extract_resume_skills,
)
from career_readiness.utils.numbers import round_half_up
from career_readiness.utils.text import ci_key, split_sentences

logger = logging.getLogger(__name__)

ATS_PASS_THRESHOLD = 70
ROLE_ALIGNMENT_POINTS = 35

EDUCATION_KEYWORDS = ("bachelor", "bs", "ba", "master", "ms", "phd", "b.sc", "m.sc")
_EDUCATION_SENTENCE_RE = re.compile(r"bachelor|master|phd|degree", re.IGNORECASE)
_EDUCATION_PHRASE_RE = re.compile(r"(bachelor|master|phd)[^.,;]*", re.IGNORECASE)


def merge_candidate_skills(
    resume_skills: list[SkillItem], linkedin_skills: list[str]
) -> list[SkillItem]:
    """Union resume and LinkedIn skills.

    A LinkedIn skill whose name matches a resume skill (case-insensitive)
    upgrades that entry to ``both`` instead of being added twice.
    """
    merged = [skill.model_copy() for skill in resume_skills]
    index = {ci_key(skill.name): i for i, skill in enumerate(merged)}
    for name in linkedin_skills:
        key = ci_key(name)
        if not key:
            continue
        if key in index:
            existing = merged[index[key]]
            if existing.found_in == "resume":
                merged[index[key]] = existing.model_copy(update={"found_in": "both"})
            continue
        index[key] = len(merged)
        merged.append(SkillItem(name=name.strip(), found_in="linkedin"))
    return merged


def build_required_skills(
    job_skills: list[SkillItem], market_intel: MarketIntel | None
) -> list[SkillItem]:
    """Job-description skills followed by market role keywords (always preferred)."""
    required: list[SkillItem] = []
    seen: set[str] = set()
    for skill in job_skills:
        key = ci_key(skill.name)
        if key and key not in seen:
            seen.add(key)
            required.append(skill)
    for keyword in market_intel.role_keywords if market_intel else []:
        key = ci_key(keyword.keyword)
        if key and key not in seen:
            seen.add(key)
            required.append(
                SkillItem(name=keyword.keyword, found_in="market", required_level="preferred")
            )
    return required


def skills_match(candidate: str, required: str) -> bool:
    """Equal or substring in either direction, case-insensitive.

    Deliberately lenient: required "Go" also matches candidate "Google Cloud".
    """
    a, b = ci_key(candidate), ci_key(required)
    if not a or not b:
        return False
    return a == b or b in a or a in b


def match_skills(
    your_skills: list[SkillItem], required_skills: list[SkillItem]
) -> tuple[list[SkillItem], list[SkillItem], list[SkillItem], int]:
    """Classify each required skill as matched, missing-critical or missing-preferred.

    The first candidate skill that matches wins; candidates are not ranked.
    Returns ``(matching, missing_critical, missing_nice_to_have, match_pct)``.
    """
    matching: list[SkillItem] = []
    missing_critical: list[SkillItem] = []
    missing_nice: list[SkillItem] = []

    for required in required_skills:
        hit = next((s for s in your_skills if skills_match(s.name, required.name)), None)
        if hit is not None:
            matching.append(
                SkillItem(
                    name=required.name,
                    found_in=hit.found_in,
                    required_level=required.required_level or "preferred",
                    where_in_job_description=required.where_in_job_description,
                    example_usage=hit.example_usage,
                )
            )
        elif required.required_level == "critical":
            missing_critical.append(required)
        else:
            missing_nice.append(required)

    if not required_skills:
        return matching, missing_critical, missing_nice, 0
    percentage = round_half_up(len(matching) / len(required_skills) * 100)
    return matching, missing_critical, missing_nice, max(0, min(100, percentage))


def extract_education_requirement(job_description: str) -> str | None:
    sentence = next(
        (s for s in split_sentences(job_description) if _EDUCATION_SENTENCE_RE.search(s)),
        None,
    )
    if not sentence:
        return None
    match = _EDUCATION_PHRASE_RE.search(sentence)
    return match.group(0).strip() if match else sentence


def has_education_match(resume: ResumeProfile, requirement: str | None) -> bool:
    if not requirement:
        return True
    requirement = requirement.lower()
    education = " ".join(str(v) for entry in resume.education for v in entry.values()).lower()
    return any(
        re.search(rf"\b{re.escape(k)}\b", requirement) and re.search(rf"\b{re.escape(k)}\b", education)
        for k in EDUCATION_KEYWORDS
    )


def role_alignment_score(
    target_role: str | None, resume: ResumeProfile, linkedin: LinkedinProfile
) -> int:
    """35 points per source (resume titles, headline, current role) naming the role."""
    target = (target_role or "").strip().lower()
    if not target:
        return 0
    sources = [
        " ".join(entry.title for entry in resume.experience).lower(),
        linkedin.headline.lower(),
        linkedin.current_role.lower(),
    ]
    hits = sum(1 for text in sources if target in text)
    return min(100, hits * ROLE_ALIGNMENT_POINTS)


class SkillMatchEngine:
    """Builds a SkillsAnalysis for one analysis run."""

    def __init__(self, job_skill_extractor: JobDescriptionSkillExtractor):
        self.job_skill_extractor = job_skill_extractor

    async def analyze(
        self,
        *,
        resume: ResumeProfile,
        linkedin: LinkedinProfile,
        job_description: str,
        market_intel: MarketIntel | None,
        target_role: str | None = None,
    ) -> SkillsAnalysis:
        your_skills = merge_candidate_skills(extract_resume_skills(resume), linkedin.skills)
        job_skills = await self.job_skill_extractor.extract(job_description)
        required = build_required_skills(job_skills, market_intel)

        matching, missing_critical, missing_nice, percentage = match_skills(your_skills, required)
        requirement = extract_education_requirement(job_description)

        logger.info(
            "Skill match: %d/%d required skills matched (%d%%), %d critical missing",
            len(matching),
            len(required),
            percentage,
            len(missing_critical),
        )
        return SkillsAnalysis(
            overall_score=percentage,
            match_percentage=percentage,
            ats_pass=percentage >= ATS_PASS_THRESHOLD,
            your_skills=your_skills,
            required_skills=required,
            matching_skills=matching,
            missing_critical_skills=missing_critical,
            missing_nice_to_have_skills=missing_nice,
            required_education=requirement,
            education_met=has_education_match(resume, requirement),
            role_alignment_score=role_alignment_score(target_role, resume, linkedin),
        )
