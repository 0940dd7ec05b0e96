"""Pydantic models for market intelligence and salary data."""

from __future__ import annotations

from typing import Any

from career_readiness.models.base import CamelModel


class RoleKeyword(CamelModel):
    keyword: str
    frequency: str = ""
    notes: str = ""


class SalarySignals(CamelModel):
    range: str = ""
    sources: list[str] = []
    notes: str = ""


class CompanyTrend(CamelModel):
    company: str = ""
    signal: str = ""
    source: str = ""


class SearchSources(CamelModel):
    role_results: list[dict[str, Any]] = []
    salary_results: list[dict[str, Any]] = []
    news_results: list[dict[str, Any]] = []


class MarketIntel(CamelModel):
    role_keywords: list[RoleKeyword] = []
    salary_signals: SalarySignals | None = None
    company_trends: list[CompanyTrend] = []
    sources: SearchSources | None = None


class SalaryRange(CamelModel):
    min: int
    max: int
    median: int
    currency: str = "USD"


class SalaryData(CamelModel):
    role: str
    level: str = ""
    ranges: SalaryRange
    source: str
    location: str | None = None
    last_updated: str
