"""Task Plan Builder: the day-bucketed week-one plan."""

from __future__ import annotations

import logging

from career_readiness.models.answers import AssessmentAnswers
from career_readiness.models.plan import (
    BeforeAfter,
    DayPlan,
    Task,
    TaskContext,
    TaskState,
    TaskTemplate,
    TaskValidation,
    WeekPlan,
)
from career_readiness.models.skills import SkillItem, SkillsAnalysis
from career_readiness.utils.text import format_target_role

logger = logging.getLogger(__name__)

MIN_TASKS = 15
DAYS = 7

KEYWORD_STEPS = (
    "Open your resume",
    "Add the keyword to Skills",
    "Update one relevant experience bullet",
    "Add the keyword to LinkedIn Skills",
)

# Rotated through by filler tasks.
IMPACT_FOCUS = (
    "your most recent role",
    "your largest project",
    "a reliability or cost win",
    "a team or process improvement",
    "your LinkedIn experience entries",
)

_MOTIVATION = {
    1: "Your highest leverage ATS fix.",
    2: "Clarity increases interview rate.",
    3: "Proof beats adjectives.",
    4: "Consistency builds confidence.",
    5: "Specific outreach converts.",
    6: "Small wins compound.",
    7: "Finish the week strong.",
}


def _minutes(estimate: str) -> int:
    digits = "".join(ch for ch in estimate if ch.isdigit())
    return int(digits) if digits else 0


def _keyword_task(task_id: int, index: int, skill: SkillItem) -> Task:
    name = skill.name
    why_now = (
        f'Job description: "{skill.where_in_job_description}"'
        if skill.where_in_job_description
        else "ATS screening depends on exact keyword matches."
    )
    return Task(
        id=f"week1-task-{task_id}",
        day=min(DAYS, index + 1),
        title=f'Add critical keyword: "{name}" to your resume',
        category="Resume Optimization",
        priority="CRITICAL",
        time_estimate="20 min",
        context=TaskContext(why_now=why_now),
        current_state=TaskState(
            issue=f"Missing {name} in your resume and LinkedIn.",
            consequence="ATS filters may reject your application.",
        ),
        before_after=BeforeAfter(
            before="Skills section missing required keyword.",
            after=f"Skills section includes {name} + one experience bullet.",
        ),
        exact_steps=list(KEYWORD_STEPS),
        template=TaskTemplate(example=f"Implemented {name} to improve deployment reliability."),
        validation=TaskValidation(
            checkpoints=[
                f"☐ {name} appears in Skills section",
                f"☐ {name} appears in one experience bullet",
            ]
        ),
    )


def _impact_task(task_id: int, index: int, role: str) -> Task:
    focus = IMPACT_FOCUS[(task_id - 1) % len(IMPACT_FOCUS)]
    return Task(
        id=f"week1-task-{task_id}",
        day=(index % DAYS) + 1,
        title=f"Strengthen impact metrics in {focus}",
        category="Resume Optimization",
        priority="HIGH",
        time_estimate="15 min",
        context=TaskContext(why_now=f"Quantified impact is what separates {role} candidates."),
        current_state=TaskState(
            issue=f"Bullets in {focus} describe duties, not results.",
            consequence="Hiring managers cannot gauge the scale of your work.",
        ),
        before_after=BeforeAfter(
            before="Responsible for maintaining CI/CD pipelines.",
            after="Cut CI/CD pipeline time 40% across 12 services.",
        ),
        exact_steps=[
            f"Pick one bullet from {focus}",
            "Identify the measurable outcome (%, $, time, scale)",
            "Rewrite the bullet starting with an action verb",
        ],
        template=TaskTemplate(example="Reduced incident response time 30% by automating alert triage."),
        validation=TaskValidation(
            checkpoints=["☐ Bullet contains a number", "☐ Bullet starts with an action verb"]
        ),
    )


def _daily_plan(tasks: list[Task]) -> dict[str, DayPlan]:
    plan: dict[str, DayPlan] = {}
    for day in range(1, DAYS + 1):
        todays = [t for t in tasks if t.day == day]
        critical = [t for t in todays if t.priority == "CRITICAL"]
        if critical:
            focus = f"Close {len(critical)} critical keyword gap{'s' if len(critical) != 1 else ''}."
        elif todays:
            focus = "Quantify impact in your resume bullets."
        else:
            focus = "Review progress and catch up."
        minutes = sum(_minutes(t.time_estimate) for t in todays)
        plan[f"day{day}"] = DayPlan(
            theme="Skills Alignment" if day == 1 else "Execution",
            focus=focus,
            time_needed=f"{minutes} min" if minutes else "15 min",
            motivational=_MOTIVATION[day],
        )
    return plan


def build_week1_plan(
    answers: AssessmentAnswers, skills: SkillsAnalysis, min_tasks: int = MIN_TASKS
) -> WeekPlan:
    """One CRITICAL task per missing critical skill, padded with HIGH filler tasks.

    Keyword tasks land on ``min(7, index + 1)``; filler tasks continue the
    task index and cycle ``(index % 7) + 1`` until ``min_tasks`` is reached.
    """
    role = format_target_role(answers.primary_role, answers.level)
    tasks: list[Task] = [
        _keyword_task(i + 1, i, skill) for i, skill in enumerate(skills.missing_critical_skills)
    ]
    critical = len(tasks)
    while len(tasks) < min_tasks:
        tasks.append(_impact_task(len(tasks) + 1, len(tasks), role))

    logger.info("Week 1 plan: %d tasks (%d critical)", len(tasks), critical)
    return WeekPlan(daily_plan=_daily_plan(tasks), tasks=tasks)
