"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UsageLog(BaseModel):
    """One persisted record per analysis run."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str = "anonymous"
    timestamp: datetime = Field(default_factory=datetime.now)
    target_role: str | None = None
    level: str | None = None
    overall_score: int | None = None
    ai_failed: bool = False
    failure_reason: str | None = None
    market_degraded: bool = False
    elapsed_seconds: float = 0.0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    search_count: int = 0
    estimated_cost_usd: float = 0.0
    success: bool = True
    error_message: str | None = None
