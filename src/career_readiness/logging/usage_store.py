"""SQLite-backed usage log storage."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from career_readiness.logging.models import UsageLog

if TYPE_CHECKING:
    from career_readiness.models.answers import AssessmentAnswers
    from career_readiness.pipeline.orchestrator import AnalysisRun

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".career-readiness" / "usage.db"

# USD per 1M tokens.
MODEL_PRICING: dict[str, dict[str, float]] = {
    "claude-haiku-4-5-20251001": {"input": 1.00, "output": 5.00},
    "claude-sonnet-4-5-20250929": {"input": 3.00, "output": 15.00},
}
# Market research runs advanced-depth searches, billed at two credits each.
SEARCH_COST_USD = 0.016

_COLUMNS = (
    "id",
    "session_id",
    "timestamp",
    "target_role",
    "level",
    "overall_score",
    "ai_failed",
    "failure_reason",
    "market_degraded",
    "elapsed_seconds",
    "total_input_tokens",
    "total_output_tokens",
    "search_count",
    "estimated_cost_usd",
    "success",
    "error_message",
)
_BOOL_COLUMNS = {"ai_failed", "market_degraded", "success"}


def estimate_cost(token_summary: dict, search_count: int = 0) -> float:
    """USD estimate for one run from ``LLMClient.get_token_summary()`` plus searches.

    Calls to models missing from ``MODEL_PRICING`` are logged and left unpriced.
    """
    total = search_count * SEARCH_COST_USD
    for model_id, input_tokens, output_tokens in token_summary.get("calls", []):
        pricing = MODEL_PRICING.get(model_id)
        if pricing is None:
            logger.warning("No pricing for model %s; its tokens are not costed", model_id)
            continue
        total += (input_tokens * pricing["input"] + output_tokens * pricing["output"]) / 1_000_000
    return total


class UsageStore:
    """Analysis run logs in SQLite (WAL mode)."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS analysis_runs (
                    id TEXT PRIMARY KEY,
                    session_id TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    target_role TEXT,
                    level TEXT,
                    overall_score INTEGER,
                    ai_failed INTEGER NOT NULL DEFAULT 0,
                    failure_reason TEXT,
                    market_degraded INTEGER NOT NULL DEFAULT 0,
                    elapsed_seconds REAL NOT NULL DEFAULT 0.0,
                    total_input_tokens INTEGER NOT NULL DEFAULT 0,
                    total_output_tokens INTEGER NOT NULL DEFAULT 0,
                    search_count INTEGER NOT NULL DEFAULT 0,
                    estimated_cost_usd REAL NOT NULL DEFAULT 0.0,
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save_log(self, log: UsageLog) -> None:
        values = log.model_dump()
        values["timestamp"] = log.timestamp.isoformat()
        for column in _BOOL_COLUMNS:
            values[column] = 1 if values[column] else 0
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO analysis_runs ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                tuple(values[c] for c in _COLUMNS),
            )

    def record_run(
        self,
        run: AnalysisRun,
        answers: AssessmentAnswers,
        *,
        token_summary: dict,
        search_count: int,
        session_id: str = "anonymous",
    ) -> UsageLog:
        """Build the usage log for a finished analysis run and save it."""
        result = run.result
        log = UsageLog(
            session_id=session_id,
            target_role=answers.primary_role,
            level=answers.level,
            overall_score=result.readiness_score.overall if result.readiness_score else None,
            ai_failed=result.ai_failed,
            failure_reason=result.ai_failure_reason,
            market_degraded=bool(run.metadata.get("market_degraded", False)),
            elapsed_seconds=run.elapsed_seconds,
            total_input_tokens=token_summary.get("input", 0),
            total_output_tokens=token_summary.get("output", 0),
            search_count=search_count,
            estimated_cost_usd=estimate_cost(token_summary, search_count),
        )
        self.save_log(log)
        return log

    def get_logs(self, session_id: str | None = None, limit: int = 50) -> list[UsageLog]:
        """Most recent logs first, optionally for one session."""
        with self._connect() as conn:
            if session_id is not None:
                rows = conn.execute(
                    "SELECT * FROM analysis_runs WHERE session_id = ? ORDER BY timestamp DESC LIMIT ?",
                    (session_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM analysis_runs ORDER BY timestamp DESC LIMIT ?",
                    (limit,),
                ).fetchall()
        return [self._row_to_log(row) for row in rows]

    def get_monthly_stats(self) -> dict:
        """Aggregates for the current calendar month."""
        now = datetime.now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        with self._connect() as conn:
            row = conn.execute(
                """SELECT
                       COUNT(*) AS total_runs,
                       SUM(total_input_tokens) AS total_input,
                       SUM(total_output_tokens) AS total_output,
                       SUM(search_count) AS total_searches,
                       SUM(estimated_cost_usd) AS total_cost,
                       AVG(overall_score) AS avg_score,
                       SUM(ai_failed) AS failed_runs,
                       SUM(CASE WHEN success = 1 THEN 1 ELSE 0 END) AS success_count
                   FROM analysis_runs
                   WHERE timestamp >= ?""",
                (month_start.isoformat(),),
            ).fetchone()
        total = row["total_runs"] or 0
        return {
            "total_runs": total,
            "total_input_tokens": row["total_input"] or 0,
            "total_output_tokens": row["total_output"] or 0,
            "total_searches": row["total_searches"] or 0,
            "total_cost_usd": row["total_cost"] or 0.0,
            "avg_readiness_score": round(row["avg_score"], 1) if row["avg_score"] is not None else None,
            "failed_runs": row["failed_runs"] or 0,
            "success_rate": (row["success_count"] / total * 100) if total else 0.0,
            "month": now.strftime("%Y-%m"),
        }

    def get_total_cost(self) -> float:
        with self._connect() as conn:
            row = conn.execute("SELECT SUM(estimated_cost_usd) FROM analysis_runs").fetchone()
        return row[0] or 0.0

    @staticmethod
    def _row_to_log(row: sqlite3.Row) -> UsageLog:
        data = {key: row[key] for key in row.keys()}
        data["timestamp"] = datetime.fromisoformat(data["timestamp"])
        for column in _BOOL_COLUMNS:
            data[column] = bool(data[column])
        return UsageLog(**data)
