"""ATS keyword coverage: job-description keywords found in the resume.

Both keyword sets come from completions. When either comes back empty the
job description is scanned against the common-skills vocabulary and the
resume side falls back to the extracted resume skills.

Score weights by keyword importance: critical 60, important 30,
nice-to-have 10. A tier with no job keywords contributes its full weight.
"""

from __future__ import annotations

import asyncio
import logging
import re

from career_readiness.clients.llm_client import LLMClient
from career_readiness.models.profile import ResumeProfile
from career_readiness.models.skills import ATSAnalysis, ATSKeyword
from career_readiness.pipeline.skill_extractor import VOCAB_PATTERNS, extract_resume_skills
from career_readiness.utils.numbers import clamp, round_half_up
from career_readiness.utils.text import ci_key, split_sentences

logger = logging.getLogger(__name__)

JD_SYSTEM_PROMPT = "You extract ATS keywords from job descriptions. Return valid JSON only."
RESUME_SYSTEM_PROMPT = "You extract resume keywords for ATS matching. Return valid JSON only."

IMPORTANCE_WEIGHTS = {"critical": 60, "important": 30, "nice-to-have": 10}
MAX_JOB_KEYWORDS = 25
MAX_RESUME_KEYWORDS = 40

_CATEGORIES = {"technical", "soft", "domain", "tool", "certification"}
_REQUIREMENT_CUES = re.compile(r"required|must|need to|needs to|strongly|minimum|5\+ years|3\+ years", re.I)
_DISPLAY_NAMES = {
    "aws": "AWS",
    "gcp": "GCP",
    "sql": "SQL",
    "sre": "SRE",
    "ci/cd": "CI/CD",
    "devops": "DevOps",
    "node.js": "Node.js",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "mongodb": "MongoDB",
    "postgresql": "PostgreSQL",
    "github actions": "GitHub Actions",
}


def _display_name(term: str) -> str:
    return _DISPLAY_NAMES.get(term) or " ".join(part[:1].upper() + part[1:] for part in term.split(" "))


def _frequency(value, default: int) -> int:
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError):
        return default


def parse_keywords(
    data: dict | None, *, importance: str | None = None, frequency: int = 1, limit: int = MAX_JOB_KEYWORDS
) -> list[ATSKeyword]:
    """Keywords from a completion payload, de-duplicated case-insensitively.

    ``importance`` forces one importance level (resume keywords carry none);
    otherwise unknown levels read as "important".
    """
    items = data.get("keywords") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []

    keywords: list[ATSKeyword] = []
    seen: set[str] = set()
    for item in items:
        if isinstance(item, str):
            item = {"keyword": item}
        if not isinstance(item, dict):
            continue
        name = str(item.get("keyword") or item.get("name") or "").strip()
        if not name or ci_key(name) in seen:
            continue
        seen.add(ci_key(name))
        category = str(item.get("category") or "").lower()
        level = importance or str(item.get("importance") or "").lower()
        context = item.get("context") or item.get("whereInJobDescription")
        keywords.append(
            ATSKeyword(
                keyword=name,
                category=category if category in _CATEGORIES else "technical",
                importance=level if level in IMPORTANCE_WEIGHTS else "important",
                frequency=_frequency(item.get("frequency") or frequency, frequency) if importance is None else frequency,
                context=str(context) if context else None,
            )
        )
        if len(keywords) >= limit:
            break
    return keywords


def _matches(job_key: str, resume_keys: list[str]) -> bool:
    return any(key == job_key or key in job_key or job_key in key for key in resume_keys)


def score_keywords(job_keywords: list[ATSKeyword], resume_keywords: list[ATSKeyword]) -> ATSAnalysis:
    """Match job keywords against resume keywords (equal or substring either way)."""
    resume_keys = [ci_key(k.keyword) for k in resume_keywords if k.keyword.strip()]
    matched: list[ATSKeyword] = []
    missing: list[ATSKeyword] = []
    for keyword in job_keywords:
        job_key = ci_key(keyword.keyword)
        if job_key and _matches(job_key, resume_keys):
            matched.append(keyword)
        else:
            missing.append(keyword)

    score = 0.0
    for importance, weight in IMPORTANCE_WEIGHTS.items():
        total = sum(1 for k in job_keywords if k.importance == importance)
        hits = sum(1 for k in matched if k.importance == importance)
        score += weight * hits / total if total else weight

    total = len(job_keywords)
    return ATSAnalysis(
        score=clamp(score),
        total_keywords=total,
        matched_keywords=matched,
        missing_keywords=missing,
        match_percentage=round_half_up(len(matched) / total * 100) if total else 0,
    )


def scan_job_description(job_description: str) -> list[ATSKeyword]:
    """Vocabulary terms in the job description.

    A term is critical when the first sentence naming it reads as a
    requirement ("required", "must", "5+ years", ...).
    """
    sentences = split_sentences(job_description)
    lowered = (job_description or "").lower()
    keywords = []
    for term, pattern in VOCAB_PATTERNS.items():
        count = len(pattern.findall(lowered))
        if not count:
            continue
        context = next((s for s in sentences if pattern.search(s.lower())), None)
        keywords.append(
            ATSKeyword(
                keyword=_display_name(term),
                importance="critical" if context and _REQUIREMENT_CUES.search(context) else "important",
                frequency=count,
                context=context,
            )
        )
    return keywords


def fallback_analysis(job_description: str, resume: ResumeProfile) -> ATSAnalysis:
    resume_keywords = [
        ATSKeyword(keyword=skill.name, importance="nice-to-have")
        for skill in extract_resume_skills(resume)
    ]
    return score_keywords(scan_job_description(job_description), resume_keywords)


class ATSAnalyzer:
    """Completion-backed keyword extraction with a vocabulary fallback. Never raises."""

    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def job_keywords(self, job_description: str) -> list[ATSKeyword]:
        prompt = f"""Analyze this job description and extract the most important ATS keywords.

Rules:
- Return at most {MAX_JOB_KEYWORDS} keywords.
- Include technical skills, tools, certifications, domain terms, and key soft skills.
- Provide frequency (approximate count of mentions).
- Importance levels: critical, important, nice-to-have.

Job Description:
{job_description}

Return JSON:
{{
  "keywords": [
    {{
      "keyword": "Kubernetes",
      "category": "technical",
      "importance": "critical",
      "frequency": 5,
      "context": "5+ years experience with Kubernetes required"
    }}
  ]
}}"""

        data = await self.llm.complete_json(JD_SYSTEM_PROMPT, prompt, model=self.model)
        return parse_keywords(data)

    async def resume_keywords(self, resume_text: str) -> list[ATSKeyword]:
        if not resume_text.strip():
            return []
        prompt = f"""Extract keywords from this resume.

Rules:
- Include technical skills, tools, certifications, methodologies, and key soft skills.
- Return at most {MAX_RESUME_KEYWORDS} keywords.

Resume:
{resume_text}

Return JSON:
{{
  "keywords": [
    {{ "keyword": "Python", "category": "technical" }}
  ]
}}"""

        data = await self.llm.complete_json(RESUME_SYSTEM_PROMPT, prompt, model=self.model)
        return parse_keywords(data, importance="nice-to-have", frequency=0, limit=MAX_RESUME_KEYWORDS)

    async def analyze(self, job_description: str, resume: ResumeProfile) -> ATSAnalysis:
        job_keywords, resume_keywords = await asyncio.gather(
            self.job_keywords(job_description),
            self.resume_keywords(resume.as_text()),
        )
        if not job_keywords or not resume_keywords:
            logger.info("ATS keyword extraction incomplete; using vocabulary fallback")
            return fallback_analysis(job_description, resume)
        analysis = score_keywords(job_keywords, resume_keywords)
        logger.info(
            "ATS keywords: %d/%d matched, score=%d",
            len(analysis.matched_keywords),
            analysis.total_keywords,
            analysis.score,
        )
        return analysis
