"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from career_readiness.clients.llm_client import LLMClient, LLMResponse
from career_readiness.clients.search_client import SearchClient
from career_readiness.models.answers import AssessmentAnswers, TargetCompany, TargetRole
from career_readiness.models.profile import ParsedProfile


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior DevOps Engineer

We run a multi-region Kubernetes platform serving 40M requests a day.

Requirements:
- 5+ years experience with Kubernetes required.
- Strong Terraform and AWS background.
- Bachelor's degree in Computer Science or equivalent experience.

Nice to have:
- Prometheus and Grafana observability stacks.
"""


@pytest.fixture
def sample_answers(sample_jd_text) -> AssessmentAnswers:
    return AssessmentAnswers(
        target_roles=[TargetRole(name="DevOps Engineer")],
        level="senior",
        timeline="4-6 weeks",
        location_preference="Remote",
        hours_per_week=8,
        target_companies=[
            TargetCompany(name=n) for n in ("Stripe", "Datadog", "Cloudflare", "Shopify", "Atlassian")
        ],
        job_description=sample_jd_text,
    )


@pytest.fixture
def sample_resume_data() -> dict:
    return {
        "email": "jane@example.com",
        "summary": "Platform engineer focused on reliability.",
        "skills": ["Python", "Docker", "AWS", "Linux", "Bash", "CI/CD"],
        "experience": [
            {
                "title": "DevOps Engineer",
                "company": "Acme",
                "description": "Increased deployment frequency 20% with Jenkins pipelines on Kubernetes.",
            },
            {
                "title": "Systems Administrator",
                "company": "Initech",
                "description": "Maintained Linux fleet and Ansible playbooks.",
            },
        ],
        "education": [{"degree": "Bachelor of Science", "school": "State University"}],
        "totalYearsExperience": 6,
    }


@pytest.fixture
def sample_linkedin_data() -> dict:
    return {
        "headline": "DevOps Engineer | Kubernetes | AWS | Terraform",
        "about": "I build and run cloud platforms. " * 5,
        "experience": [{"title": "DevOps Engineer", "company": "Acme"}],
        "skills": ["Kubernetes", "AWS", "Docker", "Python", "Linux"],
        "connectionCount": 320,
    }


@pytest.fixture
def sample_parsed_profile(sample_resume_data, sample_linkedin_data) -> ParsedProfile:
    return ParsedProfile(
        resume_parsed_data=sample_resume_data,
        linkedin_parsed_data=sample_linkedin_data,
    )


@pytest.fixture
def job_skills_payload() -> dict:
    return {
        "skills": [
            {
                "name": "Kubernetes",
                "requiredLevel": "critical",
                "whereInJobDescription": "5+ years experience with Kubernetes required.",
            },
            {
                "name": "Terraform",
                "requiredLevel": "critical",
                "whereInJobDescription": "Strong Terraform and AWS background.",
            },
            {"name": "Prometheus", "requiredLevel": "preferred"},
        ]
    }


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Mock LLM client whose completions fail soft (None) by default."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="Narrative text.", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    client.complete_json = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_search_client() -> SearchClient:
    """Mock search client."""
    client = AsyncMock(spec=SearchClient)
    client.search = AsyncMock(
        return_value=[
            {"title": "Test", "description": "Test content", "url": "https://example.com"}
        ]
    )
    return client
