"""Tests for readiness scoring."""

from __future__ import annotations

import pytest

from career_readiness.models.profile import (
    CandidateProfile,
    ExperienceEntry,
    LinkedinProfile,
    ResumeProfile,
)
from career_readiness.models.readiness import ReadinessBreakdown
from career_readiness.models.skills import SkillsAnalysis
from career_readiness.pipeline.readiness_scorer import (
    calculate_readiness_score,
    experience_score,
    linkedin_score,
    network_score,
    overall_score,
    resume_score,
)


@pytest.fixture
def complete_resume() -> ResumeProfile:
    return ResumeProfile(
        email="jane@example.com",
        summary="Platform engineer.",
        skills=["Python", "Docker", "AWS", "Linux", "Bash", "Terraform"],
        experience=[
            ExperienceEntry(title="Engineer", description="Increased revenue 20% via pricing tooling"),
            ExperienceEntry(title="Analyst", description="Built dashboards"),
        ],
        education=[{"degree": "BSc"}],
        formatting_issue_count=0,
    )


class TestResumeScore:
    def test_full_rubric(self, complete_resume):
        assert resume_score(complete_resume) == 85

    def test_formatting_issues_subtract_five_each(self, complete_resume):
        resume = complete_resume.model_copy(update={"formatting_issue_count": 3})
        assert resume_score(resume) == 70

    def test_never_negative(self):
        assert resume_score(ResumeProfile(formatting_issue_count=10)) == 0

    def test_empty_resume(self):
        assert resume_score(ResumeProfile()) == 0

    def test_metric_keyword_without_number(self):
        resume = ResumeProfile(experience=[ExperienceEntry(description="Reduced on-call load")])
        assert resume_score(resume) == 40

    def test_no_metric(self):
        resume = ResumeProfile(experience=[ExperienceEntry(description="Maintained servers")])
        assert resume_score(resume) == 20


class TestLinkedinScore:
    def test_strong_profile(self):
        linkedin = LinkedinProfile(
            headline="DevOps Engineer | Kubernetes | AWS",
            about="x" * 600,
            current_role="DevOps Engineer",
            current_company="Acme",
            skills=[f"skill{i}" for i in range(10)],
        )
        assert linkedin_score(linkedin, "DevOps Engineer") == 100

    def test_role_word_must_appear_in_headline(self):
        linkedin = LinkedinProfile(headline="Cloud platform specialist, AWS")
        assert linkedin_score(linkedin, "DevOps Engineer") == 20
        assert linkedin_score(linkedin, "Cloud Engineer") == 30

    def test_role_needs_company(self):
        assert linkedin_score(LinkedinProfile(current_role="Engineer"), None) == 0

    def test_empty(self):
        assert linkedin_score(LinkedinProfile(), None) == 0


class TestNetworkScore:
    @pytest.mark.parametrize(
        "connections,expected",
        [(0, 0), (9, 0), (10, 20), (49, 20), (50, 40), (99, 40), (100, 60), (150, 60), (300, 80), (499, 80), (500, 100), (5000, 100)],
    )
    def test_buckets(self, connections, expected):
        assert network_score(connections) == expected


class TestExperienceScore:
    def test_meets_expected_years(self):
        assert experience_score(6, "senior") == 100

    def test_proportional_below_expected(self):
        assert experience_score(2.5, "senior") == 50

    def test_entry_level_always_full(self):
        assert experience_score(0, "entry") == 100

    def test_unknown_level_expects_three_years(self):
        assert experience_score(1.5, "wizard") == 50

    def test_missing_level_defaults_to_mid(self):
        assert experience_score(3, None) == 100


class TestOverallScore:
    def test_weighted_composite(self):
        breakdown = ReadinessBreakdown(resume=80, linkedin=60, skills_match=52, network=40, experience=100)
        # 24 + 15 + 13 + 4 + 10
        assert overall_score(breakdown) == 66

    def test_bounds(self):
        high = ReadinessBreakdown(resume=100, linkedin=100, skills_match=100, network=100, experience=100)
        low = ReadinessBreakdown(resume=0, linkedin=0, skills_match=0, network=0, experience=0)
        assert overall_score(high) == 100
        assert overall_score(low) == 0

    def test_custom_weights(self):
        breakdown = ReadinessBreakdown(resume=100, linkedin=0, skills_match=0, network=0, experience=0)
        weights = {"resume": 0.5, "linkedin": 0.5, "skillsMatch": 0, "network": 0, "experience": 0}
        assert overall_score(breakdown, weights) == 50


class TestCalculateReadinessScore:
    def _profile(self, resume: ResumeProfile, connections: int = 0) -> CandidateProfile:
        return CandidateProfile(
            target_role="DevOps Engineer",
            level="mid",
            resume=resume.model_copy(update={"years_experience": 4}),
            linkedin=LinkedinProfile(connections=connections),
        )

    def test_deterministic(self, complete_resume):
        profile = self._profile(complete_resume, 320)
        skills = SkillsAnalysis(overall_score=75, match_percentage=75)
        first = calculate_readiness_score(profile, skills)
        second = calculate_readiness_score(profile, skills)
        assert first.model_dump_json() == second.model_dump_json()

    def test_breakdown_and_rules(self, complete_resume):
        profile = self._profile(complete_resume, 320)
        skills = SkillsAnalysis(overall_score=75, match_percentage=75)

        score = calculate_readiness_score(profile, skills)

        assert score.breakdown.resume == 85
        assert score.breakdown.linkedin == 0
        assert score.breakdown.skills_match == 75
        assert score.breakdown.network == 80
        assert score.breakdown.experience == 100
        assert score.overall == 62
        assert score.gaps == ["LinkedIn profile is incomplete or not optimized"]
        assert score.strengths == [
            "Strong experience level for target role",
            "Skills alignment with job requirements",
            "Resume is structured with strong signal",
        ]

    def test_gap_rules_in_declaration_order(self):
        profile = self._profile(ResumeProfile())
        score = calculate_readiness_score(profile, SkillsAnalysis())
        assert score.gaps == [
            "Missing critical skills for your target role",
            "Resume needs ATS-ready optimization",
            "LinkedIn profile is incomplete or not optimized",
        ]
        assert 0 <= score.overall <= 100

    def test_network_has_no_gap_or_strength_rule(self):
        skills = SkillsAnalysis(overall_score=65)
        weak = calculate_readiness_score(self._profile(ResumeProfile(), 0), skills)
        strong = calculate_readiness_score(self._profile(ResumeProfile(), 900), skills)
        assert weak.breakdown.network == 0
        assert strong.breakdown.network == 100
        assert weak.gaps == strong.gaps
        assert weak.strengths == strong.strengths
