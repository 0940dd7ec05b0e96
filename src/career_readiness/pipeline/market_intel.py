"""Market intelligence: role, salary and company-hiring signals from web search."""

from __future__ import annotations

import asyncio
import json
import logging

from career_readiness.cache.market_cache import MarketIntelCache
from career_readiness.clients.llm_client import LLMClient
from career_readiness.clients.search_client import SearchClient
from career_readiness.errors import ExternalServiceError
from career_readiness.models.market import (
    CompanyTrend,
    MarketIntel,
    RoleKeyword,
    SalarySignals,
    SearchSources,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a job market analyst. Return valid JSON only."

RESULTS_PER_QUERY = 6


def build_queries(role: str, companies: list[str]) -> tuple[str, str, str]:
    """Return the (role requirements, salary, company news) search queries."""
    return (
        f"{role} job requirements",
        f"{role} salary total compensation",
        f"{' '.join(companies[:3])} hiring news".strip(),
    )


class MarketIntelGatherer:
    """Runs three concurrent searches, then one distillation completion."""

    def __init__(
        self,
        llm: LLMClient,
        search: SearchClient | None,
        model: str | None = None,
        *,
        cache: MarketIntelCache | None = None,
        results_per_query: int = RESULTS_PER_QUERY,
    ):
        self.llm = llm
        self.search = search
        self.model = model
        self.cache = cache
        self.results_per_query = results_per_query

    async def gather(self, role: str, companies: list[str]) -> MarketIntel:
        """Gather market intelligence for a role and its target companies.

        Raises:
            ExternalServiceError: if search credentials are missing or any
                search request fails. A failed distillation only empties the
                distilled fields.
        """
        if self.cache is not None:
            cached = self.cache.get(role, companies)
            if cached is not None:
                logger.info("Using cached market intelligence for %s", role)
                return cached

        if self.search is None:
            raise ExternalServiceError("search", "search credentials are not configured")

        role_query, salary_query, news_query = build_queries(role, companies)
        role_results, salary_results, news_results = await asyncio.gather(
            self.search.search(role_query, self.results_per_query),
            self.search.search(salary_query, self.results_per_query),
            self.search.search(news_query, self.results_per_query),
        )
        sources = SearchSources(
            role_results=role_results,
            salary_results=salary_results,
            news_results=news_results,
        )

        intel = await self._distill(sources)
        if self.cache is not None and intel.role_keywords:
            self.cache.put(role, companies, intel)
        return intel

    async def _distill(self, sources: SearchSources) -> MarketIntel:
        prompt = f"""Extract actionable market intelligence from these results.

ROLE RESULTS:
{json.dumps(sources.role_results)}

SALARY RESULTS:
{json.dumps(sources.salary_results)}

NEWS RESULTS:
{json.dumps(sources.news_results)}

Return JSON with:
{{
  "roleKeywords": [{{ "keyword": "", "frequency": "", "notes": "" }}],
  "salarySignals": {{ "range": "", "sources": [""], "notes": "" }},
  "companyTrends": [{{ "company": "", "signal": "", "source": "" }}]
}}"""

        analysis = await self.llm.complete_json(SYSTEM_PROMPT, prompt, model=self.model)
        if analysis is None:
            logger.warning("Market intelligence distillation failed; keeping raw sources only")
            return MarketIntel(sources=sources)

        return MarketIntel(
            role_keywords=_role_keywords(analysis.get("roleKeywords")),
            salary_signals=_salary_signals(analysis.get("salarySignals")),
            company_trends=_company_trends(analysis.get("companyTrends")),
            sources=sources,
        )


def _role_keywords(value) -> list[RoleKeyword]:
    keywords = []
    for item in value if isinstance(value, list) else []:
        if isinstance(item, str):
            item = {"keyword": item}
        if not isinstance(item, dict) or not str(item.get("keyword") or "").strip():
            continue
        keywords.append(
            RoleKeyword(
                keyword=str(item["keyword"]).strip(),
                frequency=str(item.get("frequency") or ""),
                notes=str(item.get("notes") or ""),
            )
        )
    return keywords


def _salary_signals(value) -> SalarySignals | None:
    if not isinstance(value, dict) or not any(value.values()):
        return None
    sources = value.get("sources")
    return SalarySignals(
        range=str(value.get("range") or ""),
        sources=[str(s) for s in sources if s] if isinstance(sources, list) else [],
        notes=str(value.get("notes") or ""),
    )


def _company_trends(value) -> list[CompanyTrend]:
    trends = []
    for item in value if isinstance(value, list) else []:
        if not isinstance(item, dict) or not item.get("company"):
            continue
        trends.append(
            CompanyTrend(
                company=str(item["company"]),
                signal=str(item.get("signal") or ""),
                source=str(item.get("source") or ""),
            )
        )
    return trends
