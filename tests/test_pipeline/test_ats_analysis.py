"""Tests for ATS keyword coverage."""

from __future__ import annotations

from career_readiness.models.profile import ExperienceEntry, ResumeProfile
from career_readiness.models.skills import ATSKeyword
from career_readiness.pipeline.ats_analysis import (
    JD_SYSTEM_PROMPT,
    RESUME_SYSTEM_PROMPT,
    ATSAnalyzer,
    fallback_analysis,
    parse_keywords,
    scan_job_description,
    score_keywords,
)


def _job(keyword: str, importance: str) -> ATSKeyword:
    return ATSKeyword(keyword=keyword, importance=importance)


def _resume(*keywords: str) -> list[ATSKeyword]:
    return [ATSKeyword(keyword=k, importance="nice-to-have") for k in keywords]


class TestScoreKeywords:
    def test_weighted_by_importance(self):
        job = [
            _job("Kubernetes", "critical"),
            _job("Terraform", "critical"),
            _job("Helm", "important"),
            _job("Grafana", "nice-to-have"),
        ]
        analysis = score_keywords(job, _resume("kubernetes", "Helm"))

        # 60 * 1/2 + 30 * 1/1 + 10 * 0/1
        assert analysis.score == 60
        assert analysis.total_keywords == 4
        assert analysis.match_percentage == 50
        assert [k.keyword for k in analysis.matched_keywords] == ["Kubernetes", "Helm"]
        assert [k.keyword for k in analysis.missing_keywords] == ["Terraform", "Grafana"]

    def test_empty_tiers_count_in_full(self):
        analysis = score_keywords([_job("Kubernetes", "critical")], _resume("Kubernetes"))
        assert analysis.score == 100
        assert analysis.match_percentage == 100

    def test_fractional_score_rounds_half_up(self):
        job = [_job(f"c{i}", "critical") for i in range(3)] + [_job(f"i{i}", "important") for i in range(7)]
        analysis = score_keywords(job, _resume("c0", "i0", "i1"))
        # 20 + 8.57 + 10
        assert analysis.score == 39
        assert analysis.match_percentage == 30

    def test_substring_matches_either_way(self):
        job = [_job("Kubernetes", "important"), _job("AWS Lambda", "important"), _job("SQL", "important")]
        analysis = score_keywords(job, _resume("Kubernetes (EKS)", "aws", "  "))
        assert [k.keyword for k in analysis.matched_keywords] == ["Kubernetes", "AWS Lambda"]

    def test_no_job_keywords(self):
        analysis = score_keywords([], _resume("Python"))
        assert analysis.score == 100
        assert analysis.total_keywords == 0
        assert analysis.match_percentage == 0


class TestParseKeywords:
    def test_defaults_and_deduplication(self):
        keywords = parse_keywords(
            {
                "keywords": [
                    {"keyword": "Kubernetes", "importance": "critical", "frequency": 3, "context": "K8s required"},
                    {"keyword": "kubernetes"},
                    {"keyword": "Terraform", "importance": "must", "category": "infra", "frequency": "x"},
                    {"name": "Helm", "whereInJobDescription": "Helm charts", "frequency": 0},
                    "Go",
                    {"keyword": ""},
                    42,
                ]
            }
        )
        assert [(k.keyword, k.importance, k.frequency) for k in keywords] == [
            ("Kubernetes", "critical", 3),
            ("Terraform", "important", 1),
            ("Helm", "important", 1),
            ("Go", "important", 1),
        ]
        assert keywords[1].category == "technical"
        assert keywords[2].context == "Helm charts"

    def test_forced_importance_and_limit(self):
        data = {"keywords": [{"keyword": f"k{i}", "importance": "critical", "frequency": 9} for i in range(50)]}
        keywords = parse_keywords(data, importance="nice-to-have", frequency=0, limit=40)
        assert len(keywords) == 40
        assert {(k.importance, k.frequency) for k in keywords} == {("nice-to-have", 0)}

    def test_malformed_payload(self):
        assert parse_keywords(None) == []
        assert parse_keywords({"keywords": "Kubernetes"}) == []


class TestVocabularyFallback:
    def test_scan_job_description(self, sample_jd_text):
        keywords = scan_job_description(sample_jd_text)
        assert [k.keyword for k in keywords] == [
            "AWS",
            "Kubernetes",
            "Terraform",
            "DevOps",
            "Observability",
            "Prometheus",
            "Grafana",
        ]
        assert keywords[1].frequency == 2

    def test_requirement_sentence_marks_critical(self):
        keywords = scan_job_description("You must know Terraform. Docker is a plus.")
        assert [(k.keyword, k.importance) for k in keywords] == [("Docker", "important"), ("Terraform", "critical")]
        assert keywords[1].context == "You must know Terraform."

    def test_fallback_uses_resume_skills(self):
        resume = ResumeProfile(
            skills=["Docker"],
            experience=[ExperienceEntry(description="Ran Terraform for every environment")],
        )
        analysis = fallback_analysis("Terraform is required. Kubernetes experience helps.", resume)
        assert [k.keyword for k in analysis.matched_keywords] == ["Terraform"]
        assert [k.keyword for k in analysis.missing_keywords] == ["Kubernetes"]
        # 60 * 1/1 + 30 * 0/1 + 10
        assert analysis.score == 70


class TestATSAnalyzer:
    async def test_uses_completion_keywords(self, mock_llm_client):
        payloads = {
            JD_SYSTEM_PROMPT: {
                "keywords": [
                    {"keyword": "Kubernetes", "importance": "critical", "frequency": 3},
                    {"keyword": "Go", "importance": "nice-to-have"},
                ]
            },
            RESUME_SYSTEM_PROMPT: {"keywords": [{"keyword": "kubernetes", "category": "tool"}]},
        }

        async def fake_complete_json(system, prompt, model=None):
            return payloads[system]

        mock_llm_client.complete_json.side_effect = fake_complete_json
        analyzer = ATSAnalyzer(mock_llm_client, model="test-model")

        analysis = await analyzer.analyze("Kubernetes required.", ResumeProfile(raw_text="Kubernetes admin"))

        assert analysis.score == 90
        assert [k.keyword for k in analysis.missing_keywords] == ["Go"]
        assert mock_llm_client.complete_json.await_count == 2
        assert mock_llm_client.complete_json.call_args.kwargs["model"] == "test-model"

    async def test_failed_completions_fall_back(self, mock_llm_client, sample_jd_text):
        resume = ResumeProfile(skills=["AWS", "Kubernetes"])
        analysis = await ATSAnalyzer(mock_llm_client).analyze(sample_jd_text, resume)

        assert analysis.total_keywords == 7
        assert [k.keyword for k in analysis.matched_keywords] == ["AWS", "Kubernetes"]
        # 60 + 30 * 2/7 + 10
        assert analysis.score == 79

    async def test_empty_resume_skips_resume_completion(self, mock_llm_client):
        mock_llm_client.complete_json.return_value = {"keywords": [{"keyword": "Terraform"}]}
        analysis = await ATSAnalyzer(mock_llm_client).analyze("Terraform is required here.", ResumeProfile())

        assert mock_llm_client.complete_json.await_count == 1
        assert [k.keyword for k in analysis.missing_keywords] == ["Terraform"]
        assert analysis.missing_keywords[0].importance == "critical"
