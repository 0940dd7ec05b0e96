"""Optional free-text coaching narrative."""

from __future__ import annotations

import logging

from career_readiness.clients.llm_client import LLMClient
from career_readiness.errors import ExternalServiceError
from career_readiness.models.readiness import ReadinessScore
from career_readiness.models.skills import SkillsAnalysis

logger = logging.getLogger(__name__)

NARRATIVE_SYSTEM = """\
You are a direct, practical career coach. Write in second person ("you").
Only reference facts given in the prompt. Do not invent employers, skills,
numbers or credentials. Plain prose, no headings, no bullet lists."""


def _names(skills) -> str:
    return ", ".join(s.name for s in skills) or "none"


async def write_narrative(
    llm: LLMClient,
    *,
    target_role: str,
    scores: ReadinessScore,
    skills: SkillsAnalysis,
    model: str | None = None,
) -> str | None:
    """Return a 2-3 paragraph narrative, or None when the completion service fails."""
    b = scores.breakdown
    gaps = "; ".join(scores.gaps) or "none"
    strengths = "; ".join(scores.strengths) or "none"
    prompt = f"""Write a 2-3 paragraph coaching narrative for someone targeting {target_role} roles.

Readiness: {scores.overall}/100
Breakdown: resume {b.resume}, LinkedIn {b.linkedin}, skills match {b.skills_match}, network {b.network}, experience {b.experience}
Gaps: {gaps}
Strengths: {strengths}
Matching skills: {_names(skills.matching_skills)}
Missing critical skills: {_names(skills.missing_critical_skills)}
Missing preferred skills: {_names(skills.missing_nice_to_have_skills)}

Output only the narrative text."""

    try:
        resp = await llm.generate(
            prompt=prompt,
            system=NARRATIVE_SYSTEM,
            model=model,
            max_tokens=1024,
            temperature=0.3,
        )
    except ExternalServiceError as e:
        logger.warning("Narrative generation failed: %s", e)
        return None
    text = resp.text.strip()
    return text or None
