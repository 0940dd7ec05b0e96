"""SQLite cache for market intelligence results (TTL 7 days)."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

from career_readiness.models.market import MarketIntel

DEFAULT_DB_PATH = Path.home() / ".career-readiness" / "cache.db"
DEFAULT_TTL_DAYS = 7


def cache_key(role: str, companies: list[str]) -> str:
    """Key on the role plus the first three companies, which drive the queries."""
    parts = [role.strip().lower()] + sorted(c.strip().lower() for c in companies[:3])
    return "|".join(parts)


class MarketIntelCache:
    """SQLite-backed market intelligence cache with TTL expiration.

    Injected into ``MarketIntelGatherer``; nothing in the engine holds one
    globally.
    """

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        ttl_days: float = DEFAULT_TTL_DAYS,
    ):
        self.db_path = Path(db_path)
        self.ttl_seconds = ttl_days * 86400
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS market_cache (
                    cache_key TEXT PRIMARY KEY,
                    intel_json TEXT NOT NULL,
                    cached_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def get(self, role: str, companies: list[str]) -> MarketIntel | None:
        """Return cached intel if present and not expired."""
        key = cache_key(role, companies)
        with self._connect() as conn:
            row = conn.execute(
                "SELECT intel_json, cached_at FROM market_cache WHERE cache_key = ?",
                (key,),
            ).fetchone()
        if row is None:
            return None

        intel_json, cached_at = row
        if time.time() - cached_at > self.ttl_seconds:
            self.delete(role, companies)
            return None
        return MarketIntel.model_validate_json(intel_json)

    def put(self, role: str, companies: list[str], intel: MarketIntel) -> None:
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO market_cache
                   (cache_key, intel_json, cached_at)
                   VALUES (?, ?, ?)""",
                (cache_key(role, companies), intel.model_dump_json(), time.time()),
            )

    def delete(self, role: str, companies: list[str]) -> None:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM market_cache WHERE cache_key = ?",
                (cache_key(role, companies),),
            )

    def clear(self) -> int:
        """Clear all cached entries. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM market_cache")
            return cursor.rowcount

    def stats(self) -> dict:
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM market_cache").fetchone()[0]
            expired = conn.execute(
                "SELECT COUNT(*) FROM market_cache WHERE ? - cached_at > ?",
                (time.time(), self.ttl_seconds),
            ).fetchone()[0]
        return {"total": total, "expired": expired, "active": total - expired}
