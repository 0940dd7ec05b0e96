"""Main analysis orchestrator - coordinates every pipeline stage."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from career_readiness.cache.market_cache import MarketIntelCache
from career_readiness.clients.llm_client import DEFAULT_MODEL, LLMClient
from career_readiness.clients.search_client import SearchClient
from career_readiness.config import AppConfig
from career_readiness.errors import ExternalServiceError
from career_readiness.models.answers import AssessmentAnswers
from career_readiness.models.insights import CareerAnalysis
from career_readiness.models.market import MarketIntel
from career_readiness.models.profile import CandidateProfile, ParsedProfile
from career_readiness.models.result import AnalysisResult
from career_readiness.pipeline.ats_analysis import ATSAnalyzer
from career_readiness.pipeline.insight_synthesizer import build_executive_summary, synthesize_insights
from career_readiness.pipeline.market_intel import RESULTS_PER_QUERY, MarketIntelGatherer
from career_readiness.pipeline.narrative_writer import write_narrative
from career_readiness.pipeline.profile_analysis import (
    build_company_matches,
    build_linkedin_analysis,
    build_resume_analysis,
)
from career_readiness.pipeline.readiness_scorer import DEFAULT_WEIGHTS, calculate_readiness_score
from career_readiness.pipeline.salary_estimator import SalaryEstimator
from career_readiness.pipeline.skill_extractor import JobDescriptionSkillExtractor
from career_readiness.pipeline.skill_matcher import SkillMatchEngine
from career_readiness.pipeline.task_planner import MIN_TASKS, build_week1_plan
from career_readiness.utils.text import format_target_role, second_person_deep

logger = logging.getLogger(__name__)

MISSING_JOB_DESCRIPTION = "Job description is required for personalized insights."
DEFAULT_ROLE = "target role"
WEEK2_PREVIEW = {"title": "Execution Week", "previewTasks": []}


@dataclass
class AnalysisRun:
    """One analysis run: the result bundle plus run bookkeeping."""

    result: AnalysisResult
    elapsed_seconds: float = 0.0
    metadata: dict = field(default_factory=dict)


class AnalysisOrchestrator:
    """Runs market intel, skill match, scoring, insights and planning for one candidate."""

    def __init__(
        self,
        llm: LLMClient,
        search: SearchClient | None,
        *,
        model: str = DEFAULT_MODEL,
        narrative_model: str = "claude-sonnet-4-5-20250929",
        cache: MarketIntelCache | None = None,
        weights: dict[str, float] | None = None,
        min_job_description_chars: int = 50,
        min_tasks: int = MIN_TASKS,
        results_per_query: int = RESULTS_PER_QUERY,
    ):
        self.llm = llm
        self.market = MarketIntelGatherer(
            llm, search, model=model, cache=cache, results_per_query=results_per_query
        )
        self.skill_engine = SkillMatchEngine(JobDescriptionSkillExtractor(llm, model=model))
        self.ats = ATSAnalyzer(llm, model=model)
        self.salary = SalaryEstimator(llm, model=model)
        self.narrative_model = narrative_model
        self.weights = weights or DEFAULT_WEIGHTS
        self.min_job_description_chars = min_job_description_chars
        self.min_tasks = min_tasks

    @classmethod
    def from_config(
        cls,
        llm: LLMClient,
        search: SearchClient | None,
        config: AppConfig,
        *,
        cache: MarketIntelCache | None = None,
    ) -> AnalysisOrchestrator:
        return cls(
            llm,
            search,
            model=config.llm.model,
            narrative_model=config.llm.narrative_model,
            cache=cache,
            weights=config.scoring.weights,
            min_job_description_chars=config.analysis.min_job_description_chars,
            min_tasks=config.analysis.min_tasks,
            results_per_query=config.search.max_results,
        )

    def _has_job_description(self, answers: AssessmentAnswers) -> bool:
        text = (answers.job_description or "").strip()
        return bool(text) and len(text) >= self.min_job_description_chars

    async def _market_intel(self, role: str, companies: list[str]) -> tuple[MarketIntel, bool]:
        try:
            return await self.market.gather(role, companies), False
        except ExternalServiceError as e:
            logger.warning("Market intelligence unavailable, continuing without it: %s", e)
            return MarketIntel(), True

    async def run(
        self,
        answers: AssessmentAnswers,
        parsed_profile: ParsedProfile | None = None,
        *,
        include_narrative: bool = False,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> AnalysisRun:
        """Run the full analysis.

        Args:
            answers: Normalized assessment answers.
            parsed_profile: Parsed resume/LinkedIn data, if any.
            include_narrative: Also request a free-text coaching narrative.
            on_phase: Optional callback(phase_name, detail) for progress.

        Returns an ``aiFailed`` result instead of raising when the job
        description is missing or too short; no external calls are made then.
        """
        start = time.monotonic()

        def _notify(phase: str, detail: str = ""):
            if on_phase:
                on_phase(phase, detail)

        if not self._has_job_description(answers):
            logger.info("Skipping analysis: job description missing or too short")
            return AnalysisRun(
                result=AnalysisResult.failed(MISSING_JOB_DESCRIPTION),
                elapsed_seconds=time.monotonic() - start,
                metadata={"skipped": True},
            )

        role = answers.primary_role or DEFAULT_ROLE
        profile = CandidateProfile.build(answers, parsed_profile)

        # --- Phase 1: market intelligence (external, may degrade) ---
        _notify("market", f"Researching market for {role}")
        market, market_degraded = await self._market_intel(role, answers.company_names)

        # --- Phase 2: deterministic core ---
        _notify("skills", "Matching skills")
        skills, ats = await asyncio.gather(
            self.skill_engine.analyze(
                resume=profile.resume,
                linkedin=profile.linkedin,
                job_description=answers.job_description or "",
                market_intel=market,
                target_role=answers.primary_role,
            ),
            self.ats.analyze(answers.job_description or "", profile.resume),
        )
        skills = skills.model_copy(update={"ats_analysis": ats, "ats_score": ats.score})

        _notify("scoring", "Scoring readiness")
        scores = calculate_readiness_score(profile, skills, self.weights)
        insights = synthesize_insights(answers, scores, skills)
        plan = build_week1_plan(answers, skills, min_tasks=self.min_tasks)

        # --- Phase 3: salary + optional narrative ---
        _notify("salary", "Estimating salary range")
        salary = await self.salary.estimate(
            role=role,
            level=answers.level or "mid",
            job_description=answers.job_description,
            market_intel=market,
            location=answers.location_preference,
        )

        narrative = None
        if include_narrative:
            _notify("narrative", "Writing coaching narrative")
            narrative = await write_narrative(
                self.llm,
                target_role=format_target_role(answers.primary_role, answers.level),
                scores=scores,
                skills=skills,
                model=self.narrative_model,
            )

        weekly = {"week1": plan.to_json_dict(), "week2Preview": dict(WEEK2_PREVIEW)}
        result = AnalysisResult(
            ai_insights=insights,
            resume_analysis=build_resume_analysis(scores, skills),
            linkedin_analysis=build_linkedin_analysis(answers, profile.linkedin, scores, skills),
            company_matches=build_company_matches(answers, market),
            action_plan=weekly,
            week1_plan=weekly,
            career_analysis=CareerAnalysis(
                executive_summary=build_executive_summary(answers, scores, skills),
                narrative=narrative,
            ),
            market_intelligence={**market.to_json_dict(), "salaryData": salary.to_json_dict()},
            skill_match_data=skills,
            readiness_score=scores,
        )
        result = AnalysisResult.model_validate(second_person_deep(result.to_json_dict()))

        elapsed = time.monotonic() - start
        _notify("done", f"Readiness {scores.overall}/100 in {elapsed:.1f}s")
        logger.info("Analysis complete: readiness=%d elapsed=%.1fs", scores.overall, elapsed)

        return AnalysisRun(
            result=result,
            elapsed_seconds=elapsed,
            metadata={
                "market_degraded": market_degraded,
                "salary_source": salary.source,
                "required_skills": len(skills.required_skills),
                "narrative": narrative is not None,
            },
        )
