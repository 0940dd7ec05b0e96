"""Pydantic models for the week-one task plan."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from career_readiness.models.base import CamelModel

Priority = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW"]


class TaskContext(CamelModel):
    why_now: str


class TaskState(CamelModel):
    issue: str
    consequence: str


class BeforeAfter(CamelModel):
    before: str
    after: str


class TaskTemplate(CamelModel):
    example: str


class TaskValidation(CamelModel):
    checkpoints: list[str]


class Task(CamelModel):
    id: str
    day: int = Field(ge=1, le=7)
    title: str
    category: str
    priority: Priority
    time_estimate: str
    context: TaskContext
    current_state: TaskState
    before_after: BeforeAfter
    exact_steps: list[str]
    template: TaskTemplate
    validation: TaskValidation


class DayPlan(CamelModel):
    theme: str
    focus: str
    time_needed: str
    motivational: str


class WeekPlan(CamelModel):
    title: str = "Week 1 Execution"
    daily_plan: dict[str, DayPlan]
    tasks: list[Task]
