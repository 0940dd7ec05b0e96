"""Plain-text extraction from uploaded resume / LinkedIn export documents."""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".docx", ".txt", ".md")


def extract_document_text(data: bytes, filename: str) -> str:
    """Extract clean text from document bytes.

    Returns an empty string for unsupported formats or unreadable content;
    never raises.
    """
    suffix = Path(filename or "").suffix.lower()
    if not data or suffix not in SUPPORTED_SUFFIXES:
        logger.warning("Unsupported or empty document: %s", filename)
        return ""
    try:
        if suffix == ".pdf":
            text = _pdf_text(data)
        elif suffix == ".docx":
            text = _docx_text(data)
        else:
            text = data.decode("utf-8", errors="replace")
    except Exception:
        logger.warning("Text extraction failed for %s", filename, exc_info=True)
        return ""
    return clean_text(text)


def clean_text(text: str) -> str:
    """Normalise whitespace and bullets left behind by PDF/DOCX exports."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = re.sub(r"^(\s*)[●•◦◆■▪★○]\s*", r"\1- ", text, flags=re.MULTILINE)
    lines = [re.sub(r"[ \t]{2,}", " ", line).rstrip() for line in text.splitlines()]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _pdf_text(data: bytes) -> str:
    import fitz  # pymupdf

    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


def _docx_text(data: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())


_LINKEDIN_HEADINGS = {
    "summary": "about",
    "about": "about",
    "experience": "experience",
    "education": "education",
    "top skills": "skills",
    "skills": "skills",
    "contact": "contact",
    "languages": "other",
    "certifications": "other",
    "honors-awards": "other",
    "publications": "other",
}
# The PDF export lists exactly three skills under "Top Skills"; the name and
# headline follow them in the sidebar-first reading order.
_TOP_SKILLS_LIMIT = 3


def parse_linkedin_export(text: str) -> dict:
    """Best-effort fields from a LinkedIn profile export (PDF "Save to PDF" or pasted text).

    Returns the same keys the parsed-profile payload uses (``headline``,
    ``about``, ``currentRole``, ``currentCompany``, ``skills``); fields that
    cannot be found are left out.
    """
    intro: list[str] = []
    sections: dict[str, list[str]] = {}
    section = None
    top_skills = False
    for line in (line.strip() for line in (text or "").splitlines()):
        if not line:
            continue
        heading = _LINKEDIN_HEADINGS.get(line.lower())
        if heading:
            section = heading
            top_skills = line.lower() == "top skills"
            sections.setdefault(section, [])
            continue
        if section in (None, "contact"):
            if section is None:
                intro.append(line)
            continue
        if section == "skills" and top_skills and len(sections["skills"]) >= _TOP_SKILLS_LIMIT:
            section = None
            intro.append(line)
            continue
        sections[section].append(line)

    result: dict = {}
    if intro:
        # Name first, then headline; a lone line is taken as the headline.
        result["headline"] = intro[1] if len(intro) > 1 else intro[0]
    if sections.get("about"):
        result["about"] = " ".join(sections["about"])
    skills = [
        part.strip()
        for line in sections.get("skills", [])
        for part in re.split(r"[·,]", line)
        if part.strip()
    ]
    if skills:
        result["skills"] = skills
    experience = sections.get("experience", [])
    if experience:
        result["currentCompany"] = experience[0]
    if len(experience) > 1:
        result["currentRole"] = experience[1]
    return result
