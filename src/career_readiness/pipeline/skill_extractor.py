"""Skill extraction from resume data and job descriptions."""

from __future__ import annotations

import logging
import re

from career_readiness.clients.llm_client import LLMClient
from career_readiness.models.profile import ResumeProfile
from career_readiness.models.skills import SkillItem
from career_readiness.utils.text import ci_key

logger = logging.getLogger(__name__)

# Infra/tech vocabulary scanned in resume experience text.
COMMON_SKILLS = (
    "python",
    "java",
    "javascript",
    "typescript",
    "react",
    "node.js",
    "aws",
    "azure",
    "gcp",
    "docker",
    "kubernetes",
    "terraform",
    "sql",
    "mongodb",
    "postgresql",
    "redis",
    "devops",
    "ci/cd",
    "jenkins",
    "github actions",
    "linux",
    "bash",
    "networking",
    "observability",
    "go",
    "golang",
    "ansible",
    "helm",
    "prometheus",
    "grafana",
    "splunk",
    "datadog",
    "sre",
)

VOCAB_PATTERNS = {
    term: re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])") for term in COMMON_SKILLS
}

SYSTEM_PROMPT = """\
You extract required skills from job descriptions. Return valid JSON only.

Respond with exactly this shape:
{
  "skills": [
    {
      "name": "Kubernetes",
      "requiredLevel": "critical",
      "whereInJobDescription": "5+ years experience with Kubernetes required"
    }
  ]
}

Rules:
- Return at most 25 skills: technical skills, tools, platforms, certifications.
- requiredLevel is "critical" when the posting marks the skill as required,
  a must-have or a minimum qualification; otherwise "preferred".
- whereInJobDescription quotes the sentence the skill appears in, verbatim.
- Do not invent skills the posting does not mention."""


def extract_resume_skills(resume: ResumeProfile) -> list[SkillItem]:
    """Declared resume skills plus a vocabulary scan of experience text.

    Names are de-duplicated case-insensitively, declared skills first. When
    the resume has no experience entries the raw resume text is scanned.
    """
    skills: list[SkillItem] = []
    seen: set[str] = set()

    for name in resume.skills:
        key = ci_key(name)
        if key in seen:
            continue
        seen.add(key)
        skills.append(SkillItem(name=name, found_in="resume"))

    evidence = [entry.description for entry in resume.experience if entry.description]
    if not resume.experience and resume.raw_text:
        evidence = [resume.raw_text]

    for text in evidence:
        lowered = text.lower()
        for term, pattern in VOCAB_PATTERNS.items():
            if term in seen or not pattern.search(lowered):
                continue
            seen.add(term)
            skills.append(SkillItem(name=term, found_in="resume", example_usage=text))
    return skills


class JobDescriptionSkillExtractor:
    """Classifies job-description skills as critical or preferred via completion."""

    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def extract(self, job_description: str) -> list[SkillItem]:
        """Return the job's required skills, or [] when completion fails."""
        if not job_description or not job_description.strip():
            return []
        prompt = f"""Extract the skills this job description requires.

Job Description:
---
{job_description}
---

Respond with JSON only."""

        data = await self.llm.complete_json(SYSTEM_PROMPT, prompt, model=self.model)
        if data is None:
            logger.warning("Job description skill extraction unavailable; no job skills")
            return []
        raw_skills = data.get("skills")
        if not isinstance(raw_skills, list):
            logger.warning("Job description skills missing from completion payload")
            return []

        skills: list[SkillItem] = []
        seen: set[str] = set()
        for item in raw_skills:
            if isinstance(item, str):
                item = {"name": item}
            if not isinstance(item, dict):
                continue
            name = str(item.get("name") or item.get("keyword") or "").strip()
            if not name or ci_key(name) in seen:
                continue
            seen.add(ci_key(name))
            level = str(item.get("requiredLevel") or item.get("importance") or "").lower()
            where = item.get("whereInJobDescription") or item.get("context")
            skills.append(
                SkillItem(
                    name=name,
                    found_in="job",
                    required_level="critical" if level == "critical" else "preferred",
                    where_in_job_description=str(where) if where else None,
                )
            )
        logger.info(
            "Extracted %d job skills (%d critical)",
            len(skills),
            sum(1 for s in skills if s.required_level == "critical"),
        )
        return skills
