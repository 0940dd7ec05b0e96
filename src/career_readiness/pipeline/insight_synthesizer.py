"""Insight Synthesizer: templated narrative fields derived from scores and gaps.

No free-form generation happens here. Every evidence string quotes a
concrete field of the skills analysis or readiness score.
"""

from __future__ import annotations

from career_readiness.models.answers import AssessmentAnswers
from career_readiness.models.insights import AIInsights, ExecutiveSummary, StrengthToLeverage
from career_readiness.models.readiness import ReadinessScore
from career_readiness.models.skills import SkillItem, SkillsAnalysis
from career_readiness.utils.text import format_target_role

MAX_QUOTED_SKILLS = 3
SECONDARY_GAP_THRESHOLD = 60
ATS_PASS_SCORE = 70

_SUBSCORE_GAPS = {
    "resume": (
        "Your resume is not yet ATS-ready",
        "Your resume scores {score}/100: contact info, summary, quantified bullets and a skills section are what ATS parsers and recruiters look for first.",
    ),
    "linkedin": (
        "Your LinkedIn profile is underselling you",
        "Your LinkedIn profile scores {score}/100. Recruiters search by headline keywords and read the About section before reaching out.",
    ),
    "network": (
        "Your network is too small for warm referrals",
        "Your network scores {score}/100. Referrals convert far better than cold applications, and they start with connections in your target companies.",
    ),
    "experience": (
        "Your experience reads below the target level",
        "Your experience scores {score}/100 against the years typically expected at this level. Lead with scope and ownership to close the gap.",
    ),
}


def _quoted(skill: SkillItem) -> str:
    return skill.where_in_job_description or skill.name


def _secondary_gap(scores: ReadinessScore) -> tuple[str, str, list[str]]:
    """Weakest non-skills subscore below the threshold; ties keep declaration order."""
    values = scores.breakdown.model_dump(by_alias=True)
    candidates = [(values[key], key) for key in _SUBSCORE_GAPS if values[key] < SECONDARY_GAP_THRESHOLD]
    if not candidates:
        return "", "", []
    score, key = min(candidates, key=lambda pair: pair[0])
    title, explanation = _SUBSCORE_GAPS[key]
    return title, explanation.format(score=score), [f"Readiness breakdown: {key} = {score}/100"]


def _ats_strengths(skills: SkillsAnalysis) -> list[StrengthToLeverage]:
    ats = skills.ats_analysis
    matched = [k for k in ats.matched_keywords if k.importance != "nice-to-have"] if ats else []
    if not matched:
        return []
    top = [k.keyword for k in matched[:MAX_QUOTED_SKILLS]]
    return [
        StrengthToLeverage(
            strength=f"You have {', '.join(top)}",
            evidence=" • ".join(f"✓ {k.keyword} mentioned {k.frequency or 1}x in the job description" for k in matched),
            how_to_use=(
                f"Move {top[0]} to your first resume bullet and add "
                f'"{" | ".join(top)}" to your LinkedIn headline.'
            ),
        )
    ]


def _strengths(skills: SkillsAnalysis, scores: ReadinessScore) -> list[StrengthToLeverage]:
    ats_strengths = _ats_strengths(skills)
    if ats_strengths:
        return ats_strengths
    required = [s for s in skills.matching_skills if s.required_level != "nice-to-have"]
    if required:
        top = [s.name for s in required[:MAX_QUOTED_SKILLS]]
        return [
            StrengthToLeverage(
                strength=f"You have {', '.join(top)}",
                evidence=" • ".join(
                    f"✓ {s.name} (found in {s.found_in})"
                    + (f': "{s.where_in_job_description}"' if s.where_in_job_description else "")
                    for s in required[:MAX_QUOTED_SKILLS]
                ),
                how_to_use=(
                    f"Move {top[0]} to your first resume bullet and add "
                    f'"{" | ".join(top)}" to your LinkedIn headline.'
                ),
            )
        ]
    if scores.breakdown.experience >= 80:
        return [
            StrengthToLeverage(
                strength="Strong experience level",
                evidence=f"Readiness breakdown: experience = {scores.breakdown.experience}/100",
                how_to_use="Lead with scope, ownership, and scale in your summary.",
            )
        ]
    return []


def _reality_check(scores: ReadinessScore) -> str:
    if scores.overall >= 75:
        return (
            f"At {scores.overall}/100 you are interview-ready on paper. "
            "The risk now is spreading applications too thin; focus on your top companies."
        )
    if scores.overall >= 50:
        return (
            f"At {scores.overall}/100 ATS clears you or blocks you. After that, hiring managers "
            "validate role alignment, experience, and LinkedIn consistency."
        )
    return (
        f"At {scores.overall}/100 most applications will be filtered before a human reads them. "
        "Fix the gaps below before applying broadly."
    )


def coach_summary(answers: AssessmentAnswers, skills: SkillsAnalysis) -> str:
    role = format_target_role(answers.primary_role, answers.level)
    passes = skills.ats_score >= ATS_PASS_SCORE if skills.ats_score else skills.ats_pass
    if passes:
        return (
            f"You clear ATS screening for {role} roles. The next bottleneck is hiring-manager "
            "alignment: summary clarity, role relevance, and proof."
        )
    return (
        f"You are at risk of ATS rejection for {role} roles. The immediate priority is adding "
        "missing technical keywords from the job description."
    )


def synthesize_insights(
    answers: AssessmentAnswers, scores: ReadinessScore, skills: SkillsAnalysis
) -> AIInsights:
    role = format_target_role(answers.primary_role, answers.level)
    missing = skills.missing_critical_skills[:MAX_QUOTED_SKILLS]

    if missing:
        noun = "skill" if len(missing) == 1 else "skills"
        primary_gap = f"You're missing {len(missing)} required {noun}"
        quoted = ", ".join(f'"{s.name}"' for s in missing)
        primary_explanation = (
            f"The job description lists {quoted} as required, "
            "but they're not in your resume or LinkedIn."
        )
        primary_evidence = [
            f'Job description mentions: "{_quoted(missing[0])}"',
            "Your resume: missing from Skills section",
            "Your LinkedIn: not listed in skills",
        ]
        quick_win = f"Add {missing[0].name} to your resume Skills section"
        quick_win_reasoning = "ATS systems prioritize exact keyword matches from the job description."
        quick_win_evidence = [f"Missing: {', '.join(s.name for s in missing)}"]
    elif skills.missing_nice_to_have_skills:
        preferred = skills.missing_nice_to_have_skills[:MAX_QUOTED_SKILLS]
        primary_gap = "Your required skills are covered. Preferred skills are the next gap."
        primary_explanation = (
            f"You match every critical requirement, but {', '.join(s.name for s in preferred)} "
            f"would strengthen your case for {role}."
        )
        primary_evidence = [f'Preferred by the job or market: "{_quoted(s)}"' for s in preferred[:1]]
        quick_win = f"Add one bullet showing {preferred[0].name} exposure"
        quick_win_reasoning = "Preferred skills break ties between candidates who pass ATS."
        quick_win_evidence = [f"Missing preferred: {', '.join(s.name for s in preferred)}"]
    else:
        primary_gap = "Your ATS coverage is solid. The next gap is hiring-manager alignment."
        primary_explanation = f"Your resume and LinkedIn need clearer role alignment and proof for {role}."
        primary_evidence = []
        quick_win = f"Align your summary to {role} with concrete proof"
        quick_win_reasoning = "Hiring managers scan the summary first to validate role fit."
        quick_win_evidence = []

    if (
        not missing
        and scores.breakdown.resume < scores.breakdown.linkedin
        and scores.breakdown.resume < 70
    ):
        quick_win = "Add a metric to each of your top 3 resume bullets"
        quick_win_reasoning = "Your resume scores lower than your LinkedIn; quantified bullets are the fastest lift."
        quick_win_evidence = [
            f"Readiness breakdown: resume = {scores.breakdown.resume}/100, linkedin = {scores.breakdown.linkedin}/100"
        ]

    secondary_gap, secondary_explanation, secondary_evidence = _secondary_gap(scores)

    return AIInsights(
        primary_gap=primary_gap,
        primary_gap_explanation=primary_explanation,
        primary_gap_evidence=primary_evidence,
        secondary_gap=secondary_gap,
        secondary_gap_explanation=secondary_explanation,
        secondary_gap_evidence=secondary_evidence,
        quick_win=quick_win,
        quick_win_reasoning=quick_win_reasoning,
        quick_win_evidence=quick_win_evidence,
        strengths_to_leverage=_strengths(skills, scores),
        reality_check=_reality_check(scores),
        coach_summary=coach_summary(answers, skills),
    )


def build_executive_summary(
    answers: AssessmentAnswers, scores: ReadinessScore, skills: SkillsAnalysis
) -> ExecutiveSummary:
    role = format_target_role(answers.primary_role, answers.level)
    highlights = [f"Missing critical skill: {s.name}" for s in skills.missing_critical_skills[:2]]
    highlights += [f"Matching skill: {s.name}" for s in skills.matching_skills[:2]]
    if skills.required_education and not skills.education_met:
        highlights.append(f"Education requirement not verified: {skills.required_education}")

    first_gap = scores.gaps[0] if scores.gaps else ""
    return ExecutiveSummary(
        coach_summary=coach_summary(answers, skills),
        current_state=first_gap,
        target_state=f"ATS pass + hiring-manager alignment for {role} roles",
        primary_challenge=first_gap,
        estimated_timeline=answers.timeline or "4-6 weeks",
        confidence_level="High" if scores.overall >= 70 else "Moderate",
        evidence_highlights=highlights,
    )
