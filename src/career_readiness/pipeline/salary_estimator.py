"""Salary intelligence with a three-step fallback chain.

1. A range stated in the job description (completion).
2. A range distilled from the market salary search results (completion).
3. A static level-keyed table.

The last step cannot fail, so every run carries salary data.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from career_readiness.clients.llm_client import LLMClient
from career_readiness.models.market import MarketIntel, SalaryData, SalaryRange
from career_readiness.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

JD_SYSTEM_PROMPT = "You extract salary information from job descriptions. Return valid JSON only."
MARKET_SYSTEM_PROMPT = "You analyze salary data from search results. Return valid JSON only."

MAX_SALARY_RESULTS = 5

# Level -> (min, max) USD base salary.
FALLBACK_RANGES: dict[str, tuple[int, int]] = {
    "entry": (60_000, 90_000),
    "junior": (80_000, 110_000),
    "mid": (100_000, 140_000),
    "senior": (140_000, 190_000),
    "staff": (180_000, 250_000),
    "principal": (220_000, 320_000),
    "lead": (160_000, 220_000),
    "manager": (150_000, 210_000),
    "director": (200_000, 300_000),
    "vp": (250_000, 400_000),
}
DEFAULT_RANGE = (100_000, 150_000)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _amount(value) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _midpoint(low: int, high: int) -> int:
    return round_half_up((low + high) / 2)


def fallback_salary(role: str, level: str | None, location: str | None = None) -> SalaryData:
    low, high = FALLBACK_RANGES.get((level or "").strip().lower(), DEFAULT_RANGE)
    return SalaryData(
        role=role,
        level=level or "",
        ranges=SalaryRange(min=low, max=high, median=_midpoint(low, high)),
        source="Industry estimates",
        location=location,
        last_updated=_now(),
    )


class SalaryEstimator:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def from_job_description(self, job_description: str) -> SalaryData | None:
        prompt = f"""Analyze the job description and extract salary info if present.

Return JSON:
{{
  "found": true,
  "min": 150000,
  "max": 200000,
  "currency": "USD",
  "notes": "Salary range mentioned in benefits section"
}}

If none found: {{"found": false}}

Job Description:
{job_description}"""

        data = await self.llm.complete_json(JD_SYSTEM_PROMPT, prompt, model=self.model)
        if not data or data.get("found") is not True:
            return None
        low, high = _amount(data.get("min")), _amount(data.get("max"))
        if not low or not high:
            return None
        return SalaryData(
            role="From Job Description",
            ranges=SalaryRange(
                min=low,
                max=high,
                median=_midpoint(low, high),
                currency=str(data.get("currency") or "USD"),
            ),
            source="Job Description",
            last_updated=_now(),
        )

    async def from_market_results(
        self, results: list[dict], role: str, level: str | None, location: str | None = None
    ) -> SalaryData | None:
        level_label = f"{level} " if level else ""
        prompt = f"""Based on these search results, estimate the salary range for a {level_label}{role}.

Search Results:
{json.dumps(results[:MAX_SALARY_RESULTS])}

Return JSON:
{{
  "min": 120000,
  "max": 180000,
  "median": 150000,
  "source": "Levels.fyi, Glassdoor",
  "currency": "USD"
}}"""

        data = await self.llm.complete_json(MARKET_SYSTEM_PROMPT, prompt, model=self.model)
        if not data:
            return None
        low, high = _amount(data.get("min")), _amount(data.get("max"))
        if not low or not high:
            return None
        return SalaryData(
            role=role,
            level=level or "",
            ranges=SalaryRange(
                min=low,
                max=high,
                median=_amount(data.get("median")) or _midpoint(low, high),
                currency=str(data.get("currency") or "USD"),
            ),
            source=str(data.get("source") or "Market research"),
            location=location,
            last_updated=_now(),
        )

    async def estimate(
        self,
        *,
        role: str,
        level: str | None,
        job_description: str | None,
        market_intel: MarketIntel | None,
        location: str | None = None,
    ) -> SalaryData:
        if job_description:
            extracted = await self.from_job_description(job_description)
            if extracted is not None:
                logger.info("Salary taken from job description")
                return extracted

        results = market_intel.sources.salary_results if market_intel and market_intel.sources else []
        if results:
            parsed = await self.from_market_results(results, role, level, location)
            if parsed is not None:
                logger.info("Salary distilled from %d market results", len(results))
                return parsed

        logger.info("Using fallback salary table for level %r", level)
        return fallback_salary(role, level, location)
