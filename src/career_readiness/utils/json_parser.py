"""Pull a JSON payload out of a completion response."""

from __future__ import annotations

import json
import re

from career_readiness.errors import ParseError

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


def extract_json(text: str | None) -> dict | list:
    """Extract a JSON object or array from completion text.

    Tries the whole text first, then the body of a fenced code block, then
    the widest ``{...}`` span, then the widest ``[...]`` span.

    Raises:
        ParseError: if no candidate parses.
    """
    if not text or not text.strip():
        raise ParseError("Empty completion text")
    text = text.strip()

    candidates = [text]
    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    for opener, closer in (("{", "}"), ("[", "]")):
        span = _span(text, opener, closer)
        if span:
            candidates.append(span)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, (dict, list)):
            return parsed

    raise ParseError(f"Could not extract JSON from text: {text[:200]}...")


def _span(text: str, opener: str, closer: str) -> str | None:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]
