"""Small text helpers shared by the narrative builders."""

from __future__ import annotations

import re
from typing import Any

_SECOND_PERSON_RULES = [
    (re.compile(r"\bthe candidate's\b", re.IGNORECASE), "your"),
    (re.compile(r"\bthe applicant's\b", re.IGNORECASE), "your"),
    (re.compile(r"\bthe candidate\b", re.IGNORECASE), "you"),
    (re.compile(r"\bthe applicant\b", re.IGNORECASE), "you"),
    (re.compile(r"\bcandidate's\b", re.IGNORECASE), "your"),
    (re.compile(r"\bapplicant's\b", re.IGNORECASE), "your"),
]

_LEADERSHIP_LEVELS = {"manager", "director", "vp", "cto"}

LEVEL_PREFIXES: dict[str, str] = {
    "entry": "Entry-Level",
    "junior": "Junior",
    "mid": "",
    "senior": "Senior",
    "staff": "Staff",
    "principal": "Principal",
    "lead": "Lead",
    "manager": "Engineering Manager",
    "director": "Director of Engineering",
    "vp": "VP of Engineering",
    "cto": "CTO",
}


def to_second_person(text: str) -> str:
    """Rewrite third-person references to the reader as "you"/"your"."""
    for pattern, replacement in _SECOND_PERSON_RULES:
        text = pattern.sub(replacement, text)
    return text


def second_person_deep(value: Any) -> Any:
    """Apply to_second_person to every string in a nested JSON-like value."""
    if isinstance(value, str):
        return to_second_person(value)
    if isinstance(value, list):
        return [second_person_deep(item) for item in value]
    if isinstance(value, dict):
        return {key: second_person_deep(item) for key, item in value.items()}
    return value


def format_target_role(target_role: str | None, level: str | None = None) -> str:
    """Prefix the target role with the seniority level.

    Leadership levels replace the role title entirely, e.g.
    ``("Platform Engineer", "director")`` -> ``"Director of Engineering"``.
    """
    if not target_role:
        return "your target role"
    normalized = (level or "").strip().lower()
    if normalized in _LEADERSHIP_LEVELS:
        return LEVEL_PREFIXES.get(normalized) or target_role
    prefix = LEVEL_PREFIXES.get(normalized, "")
    return f"{prefix} {target_role}" if prefix else target_role


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in re.split(r"(?<=[.!?])\s+", text or "") if s.strip()]


def ci_key(value: str) -> str:
    """Case-insensitive comparison key for skill and keyword names."""
    return value.strip().lower()
