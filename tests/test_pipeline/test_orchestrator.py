"""Tests for the analysis orchestrator."""

from __future__ import annotations

import pytest

from career_readiness.config import AppConfig, AnalysisConfig
from career_readiness.errors import ExternalServiceError
from career_readiness.pipeline import market_intel, salary_estimator, skill_extractor
from career_readiness.pipeline.orchestrator import MISSING_JOB_DESCRIPTION, AnalysisOrchestrator


@pytest.fixture
def completions(job_skills_payload) -> dict:
    """Completion payloads keyed by the system prompt that requests them."""
    return {
        skill_extractor.SYSTEM_PROMPT: job_skills_payload,
        market_intel.SYSTEM_PROMPT: {
            "roleKeywords": [{"keyword": "Kubernetes"}, {"keyword": "Helm"}],
            "salarySignals": {"range": "$150k-$190k", "sources": ["levels.fyi"], "notes": ""},
            "companyTrends": [
                {"company": "Stripe", "signal": "The candidate's stack matches their platform team", "source": "news"}
            ],
        },
        salary_estimator.JD_SYSTEM_PROMPT: {"found": False},
        salary_estimator.MARKET_SYSTEM_PROMPT: None,
    }


@pytest.fixture
def wired_llm(mock_llm_client, completions):
    async def fake_complete_json(system, prompt, model=None):
        return completions.get(system)

    mock_llm_client.complete_json.side_effect = fake_complete_json
    return mock_llm_client


class TestMissingJobDescription:
    async def test_empty_job_description_returns_failure(
        self, mock_llm_client, mock_search_client, sample_answers, sample_parsed_profile
    ):
        answers = sample_answers.model_copy(update={"job_description": None})
        orchestrator = AnalysisOrchestrator(mock_llm_client, mock_search_client)

        run = await orchestrator.run(answers, sample_parsed_profile)

        assert run.result.ai_failed is True
        assert run.result.ai_failure_reason == MISSING_JOB_DESCRIPTION
        assert run.result.ai_model == "data-driven"
        assert run.result.readiness_score is None
        mock_search_client.search.assert_not_called()
        mock_llm_client.complete_json.assert_not_called()
        mock_llm_client.generate.assert_not_called()

    async def test_short_job_description_returns_failure(
        self, mock_llm_client, mock_search_client, sample_answers
    ):
        answers = sample_answers.model_copy(update={"job_description": "Need a DevOps person."})
        orchestrator = AnalysisOrchestrator(mock_llm_client, mock_search_client)

        run = await orchestrator.run(answers)

        assert run.result.ai_failed is True
        assert run.metadata == {"skipped": True}

    async def test_failure_serializes_camel_case(self, mock_llm_client, mock_search_client, sample_answers):
        answers = sample_answers.model_copy(update={"job_description": ""})
        run = await AnalysisOrchestrator(mock_llm_client, mock_search_client).run(answers)
        data = run.result.to_json_dict()
        assert data["aiFailed"] is True
        assert data["aiFailureReason"].startswith("Job description is required")


class TestFullRun:
    async def test_full_analysis(self, wired_llm, mock_search_client, sample_answers, sample_parsed_profile):
        orchestrator = AnalysisOrchestrator(wired_llm, mock_search_client)

        run = await orchestrator.run(sample_answers, sample_parsed_profile)
        result = run.result

        assert result.ai_failed is False
        assert result.ai_failure_reason is None
        skills = result.skill_match_data
        assert [s.name for s in skills.missing_critical_skills] == ["Terraform"]
        assert [s.name for s in skills.matching_skills] == ["Kubernetes"]
        assert skills.match_percentage == 25
        assert skills.education_met is True
        assert 0 <= result.readiness_score.overall <= 100
        assert result.ai_insights.quick_win == "Add Terraform to your resume Skills section"
        assert mock_search_client.search.await_count == 3
        assert run.metadata["market_degraded"] is False

    async def test_bundle_shape(self, wired_llm, mock_search_client, sample_answers, sample_parsed_profile):
        run = await AnalysisOrchestrator(wired_llm, mock_search_client).run(sample_answers, sample_parsed_profile)
        data = run.result.to_json_dict()

        assert data["aiModel"] == "data-driven"
        assert data["actionPlan"] == data["week1Plan"]
        assert data["week1Plan"]["week2Preview"] == {"title": "Execution Week", "previewTasks": []}
        tasks = data["week1Plan"]["week1"]["tasks"]
        assert len(tasks) == 15
        assert tasks[0]["priority"] == "CRITICAL"
        assert set(data["week1Plan"]["week1"]["dailyPlan"]) == {f"day{i}" for i in range(1, 8)}
        assert data["marketIntelligence"]["salaryData"]["source"] == "Industry estimates"
        assert data["marketIntelligence"]["salaryData"]["ranges"]["min"] == 140_000
        assert data["careerAnalysis"]["executiveSummary"]["estimatedTimeline"] == "4-6 weeks"
        assert data["resumeAnalysis"]["issues"][0]["issue"] == "Missing Terraform"
        assert data["linkedinAnalysis"]["headline"]["optimized"] == "DevOps Engineer | Kubernetes"

    async def test_ats_analysis_attached(self, wired_llm, mock_search_client, sample_answers, sample_parsed_profile):
        run = await AnalysisOrchestrator(wired_llm, mock_search_client).run(sample_answers, sample_parsed_profile)
        skills = run.result.to_json_dict()["skillMatchData"]

        ats = skills["atsAnalysis"]
        assert skills["atsScore"] == ats["score"] == 79
        assert ats["totalKeywords"] == 7
        assert [k["keyword"] for k in ats["matchedKeywords"]] == ["AWS", "Kubernetes"]
        strengths = run.result.ai_insights.strengths_to_leverage
        assert strengths[0].strength == "You have AWS, Kubernetes"
        assert run.result.career_analysis.executive_summary.coach_summary.startswith("You clear ATS screening")

    async def test_second_person_rewrite(self, wired_llm, mock_search_client, sample_answers, sample_parsed_profile):
        run = await AnalysisOrchestrator(wired_llm, mock_search_client).run(sample_answers, sample_parsed_profile)
        matches = {m.company: m.signals for m in run.result.company_matches}
        assert matches["Stripe"][0]["signal"] == "your stack matches their platform team"
        assert matches["Datadog"] == []

    async def test_market_failure_degrades(
        self, wired_llm, mock_search_client, sample_answers, sample_parsed_profile
    ):
        mock_search_client.search.side_effect = ExternalServiceError("tavily", "rate limited")
        run = await AnalysisOrchestrator(wired_llm, mock_search_client).run(sample_answers, sample_parsed_profile)

        assert run.result.ai_failed is False
        assert run.metadata["market_degraded"] is True
        market = run.result.market_intelligence
        assert market["roleKeywords"] == []
        assert market["sources"] is None
        assert market["salaryData"]["ranges"]["min"] == 140_000
        # Job skills still drive the match: Kubernetes, Terraform, Prometheus.
        assert run.result.skill_match_data.match_percentage == 33
        assert len(run.result.week1_plan["week1"]["tasks"]) >= 15

    async def test_no_search_client_degrades(self, wired_llm, sample_answers, sample_parsed_profile):
        run = await AnalysisOrchestrator(wired_llm, None).run(sample_answers, sample_parsed_profile)
        assert run.result.ai_failed is False
        assert run.metadata["market_degraded"] is True

    async def test_all_completions_failing_still_completes(
        self, mock_llm_client, mock_search_client, sample_answers
    ):
        run = await AnalysisOrchestrator(mock_llm_client, mock_search_client).run(sample_answers)
        result = run.result
        assert result.ai_failed is False
        assert result.skill_match_data.match_percentage == 0
        assert result.skill_match_data.required_skills == []
        assert len(result.week1_plan["week1"]["tasks"]) == 15
        assert result.career_analysis.narrative is None

    async def test_on_phase_callback(self, wired_llm, mock_search_client, sample_answers):
        phases = []
        await AnalysisOrchestrator(wired_llm, mock_search_client).run(
            sample_answers, on_phase=lambda phase, detail: phases.append(phase)
        )
        assert phases == ["market", "skills", "scoring", "salary", "done"]


class TestNarrative:
    async def test_narrative_included(self, wired_llm, mock_search_client, sample_answers):
        orchestrator = AnalysisOrchestrator(wired_llm, mock_search_client, narrative_model="narrator")
        run = await orchestrator.run(sample_answers, include_narrative=True)

        assert run.result.career_analysis.narrative == "Narrative text."
        assert wired_llm.generate.call_args.kwargs["model"] == "narrator"

    async def test_narrative_failure_is_isolated(self, wired_llm, mock_search_client, sample_answers):
        wired_llm.generate.side_effect = ExternalServiceError("anthropic", "overloaded")
        run = await AnalysisOrchestrator(wired_llm, mock_search_client).run(sample_answers, include_narrative=True)

        assert run.result.ai_failed is False
        assert run.result.career_analysis.narrative is None
        assert run.metadata["narrative"] is False


class TestFromConfig:
    async def test_config_threshold_applies(self, mock_llm_client, mock_search_client, sample_answers):
        config = AppConfig(analysis=AnalysisConfig(min_job_description_chars=10_000))
        orchestrator = AnalysisOrchestrator.from_config(mock_llm_client, mock_search_client, config)
        run = await orchestrator.run(sample_answers)
        assert run.result.ai_failed is True

    def test_weights_from_config(self, mock_llm_client, mock_search_client):
        orchestrator = AnalysisOrchestrator.from_config(mock_llm_client, mock_search_client, AppConfig())
        assert orchestrator.weights["skillsMatch"] == 0.25
        assert orchestrator.min_tasks == 15
