"""Typed views over loosely-structured resume / LinkedIn parser output.

The parsing collaborator emits JSON whose field names drift between
versions. Each view is built once with a fixed fallback order per field so
consumers never reach into the raw payload:

Resume
    skills          ``skills`` -> ``topSkills`` -> ``raw.skills``
    experience      ``experience`` -> ``raw.experience``
                    (entry text: ``description`` -> ``summary``)
    education       ``education`` -> ``raw.education`` (a mapping is one entry)
    email           ``email`` -> ``contact.email`` -> ``personalInfo.email``
    summary         ``summary`` -> ``objective``
    years           ``totalYearsExperience`` -> ``yearsExperience``
                    -> ``totalExperience.years``
    format issues   ``issues[]`` (category formatting/grammar)
                    -> ``formattingIssues[]``

LinkedIn (manual answers, then parsed data, then the exported document text)
    headline        manual -> ``headline`` -> ``profileBasics.headline`` -> export
    about           manual -> ``about`` -> export Summary section
    current role    manual -> ``currentRole`` -> ``experience[0].title`` -> export
    current company manual -> ``currentCompany`` -> ``experience[0].company`` -> export
    skills          manual skills + (``skills`` -> ``topSkills`` -> export skills)
    connections     ``connectionCount`` -> ``connections``
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from career_readiness.models.answers import AssessmentAnswers
from career_readiness.models.base import CamelModel
from career_readiness.parsers.document_parser import parse_linkedin_export

_FORMAT_CATEGORIES = {"formatting", "grammar"}


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _dig(data: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return [item for item in value if item]
    if isinstance(value, dict) and value:
        return [value]
    return []


def _names(items: list) -> list[str]:
    names = []
    for item in items:
        if isinstance(item, str):
            name = item
        elif isinstance(item, dict):
            name = item.get("name") or item.get("skill") or ""
        else:
            name = ""
        name = str(name).strip()
        if name:
            names.append(name)
    return names


def _text(value: Any) -> str | None:
    """Loose parser value as a string: lists are joined, mappings yield their first text value."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        parts = [part for part in (_text(item) for item in value) if part]
        return " ".join(parts) or None
    if isinstance(value, dict):
        for item in value.values():
            found = _text(item)
            if found:
                return found
    return None


def _number(value: Any) -> float:
    try:
        return max(0.0, float(value or 0))
    except (TypeError, ValueError):
        return 0.0


class ExperienceEntry(BaseModel):
    title: str = ""
    company: str = ""
    description: str = ""


class ResumeProfile(BaseModel):
    email: str | None = None
    summary: str | None = None
    skills: list[str] = []
    experience: list[ExperienceEntry] = []
    education: list[dict[str, Any]] = []
    years_experience: float = 0.0
    formatting_issue_count: int = 0
    raw_text: str = ""

    @classmethod
    def from_parsed(cls, data: dict | None, raw_text: str | None = None) -> ResumeProfile:
        data = data if isinstance(data, dict) else {}

        experience = []
        for entry in _as_list(_first(data.get("experience"), _dig(data, "raw", "experience"))):
            if not isinstance(entry, dict):
                continue
            experience.append(
                ExperienceEntry(
                    title=_text(entry.get("title")) or "",
                    company=_text(entry.get("company")) or "",
                    description=_text(_first(entry.get("description"), entry.get("summary"))) or "",
                )
            )

        education = [
            e if isinstance(e, dict) else {"value": str(e)}
            for e in _as_list(_first(data.get("education"), _dig(data, "raw", "education")))
        ]

        issues = data.get("issues")
        if isinstance(issues, list):
            issue_count = sum(
                1
                for i in issues
                if isinstance(i, dict) and str(i.get("category", "")).lower() in _FORMAT_CATEGORIES
            )
        else:
            issue_count = len(_as_list(data.get("formattingIssues")))

        return cls(
            email=_text(_first(data.get("email"), _dig(data, "contact", "email"), _dig(data, "personalInfo", "email"))),
            summary=_text(_first(data.get("summary"), data.get("objective"))),
            skills=_names(_as_list(_first(data.get("skills"), data.get("topSkills"), _dig(data, "raw", "skills")))),
            experience=experience,
            education=education,
            years_experience=_number(
                _first(
                    data.get("totalYearsExperience"),
                    data.get("yearsExperience"),
                    _dig(data, "totalExperience", "years"),
                )
            ),
            formatting_issue_count=issue_count,
            raw_text=_text(_first(raw_text, data.get("rawText"))) or "",
        )

    def as_text(self) -> str:
        """Raw resume text, or one composed from the structured fields when none was uploaded."""
        if self.raw_text:
            return self.raw_text
        lines = [self.summary or "", ", ".join(self.skills)]
        for entry in self.experience:
            lines.append(" ".join(part for part in (entry.title, entry.company, entry.description) if part))
        return "\n".join(line for line in lines if line)


class LinkedinProfile(BaseModel):
    headline: str = ""
    about: str = ""
    current_role: str = ""
    current_company: str = ""
    skills: list[str] = []
    connections: int = 0

    @classmethod
    def from_sources(
        cls, manual: dict | None, parsed: dict | None, exported: dict | None = None
    ) -> LinkedinProfile:
        manual = manual if isinstance(manual, dict) else {}
        parsed = parsed if isinstance(parsed, dict) else {}
        exported = exported if isinstance(exported, dict) else {}
        first_job = _as_list(parsed.get("experience"))[:1]
        first_job = first_job[0] if first_job and isinstance(first_job[0], dict) else {}

        listed = _names(_as_list(_first(parsed.get("skills"), parsed.get("topSkills"))))
        skills = _names(_as_list(manual.get("skills"))) + (listed or _names(_as_list(exported.get("skills"))))
        return cls(
            headline=_text(
                _first(
                    manual.get("headline"),
                    parsed.get("headline"),
                    _dig(parsed, "profileBasics", "headline"),
                    exported.get("headline"),
                )
            )
            or "",
            about=_text(_first(manual.get("about"), parsed.get("about"), exported.get("about"))) or "",
            current_role=_text(
                _first(manual.get("currentRole"), parsed.get("currentRole"), first_job.get("title"), exported.get("currentRole"))
            )
            or "",
            current_company=_text(
                _first(
                    manual.get("currentCompany"),
                    parsed.get("currentCompany"),
                    first_job.get("company"),
                    exported.get("currentCompany"),
                )
            )
            or "",
            skills=skills,
            connections=int(_number(_first(parsed.get("connectionCount"), parsed.get("connections")))),
        )


class ParsedProfile(CamelModel):
    """Raw parser output handed over by the caller."""

    resume_parsed_data: dict[str, Any] | None = None
    linkedin_parsed_data: dict[str, Any] | None = None
    resume_raw_text: str | None = None
    linkedin_raw_text: str | None = None


class CandidateProfile(BaseModel):
    """Everything the deterministic scorers read, resolved once per run."""

    target_role: str | None = None
    level: str | None = None
    resume: ResumeProfile = ResumeProfile()
    linkedin: LinkedinProfile = LinkedinProfile()

    @classmethod
    def build(cls, answers: AssessmentAnswers, parsed: ParsedProfile | None) -> CandidateProfile:
        parsed = parsed or ParsedProfile()
        return cls(
            target_role=answers.primary_role,
            level=answers.level,
            resume=ResumeProfile.from_parsed(parsed.resume_parsed_data, parsed.resume_raw_text),
            linkedin=LinkedinProfile.from_sources(
                answers.linkedin_manual_data,
                parsed.linkedin_parsed_data,
                parse_linkedin_export(parsed.linkedin_raw_text) if parsed.linkedin_raw_text else None,
            ),
        )
