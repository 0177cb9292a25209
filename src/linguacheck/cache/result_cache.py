"""SQLite cache of settled check results (TTL 7 days)."""

from __future__ import annotations

import hashlib
import sqlite3
import time
from pathlib import Path

from pydantic import BaseModel

DEFAULT_DB_PATH = Path.home() / ".linguacheck" / "cache.db"
DEFAULT_TTL_DAYS = 7


def cache_key(kind: str, language: str, tone: str | None, text: str) -> str:
    raw = "\x1f".join((kind, language, tone or "", text))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class ResultCache:
    """SQLite-backed result cache with TTL expiration.

    Keys cover the check kind, language, tone and exact text, so any edit to
    the input misses the cache.
    """

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        ttl_days: int = DEFAULT_TTL_DAYS,
    ):
        self.db_path = Path(db_path)
        self.ttl_seconds = ttl_days * 86400
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS result_cache (
                    key TEXT PRIMARY KEY,
                    kind TEXT NOT NULL,
                    result_json TEXT NOT NULL,
                    cached_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def get(
        self,
        kind: str,
        language: str,
        tone: str | None,
        text: str,
        model: type[BaseModel],
    ) -> BaseModel | None:
        """Return the cached result parsed as ``model``, or None if absent or expired."""
        key = cache_key(kind, language, tone, text)
        with self._connect() as conn:
            row = conn.execute(
                "SELECT result_json, cached_at FROM result_cache WHERE key = ?",
                (key,),
            ).fetchone()

        if row is None:
            return None

        result_json, cached_at = row
        if time.time() - cached_at > self.ttl_seconds:
            self._delete(key)
            return None

        return model.model_validate_json(result_json)

    def put(
        self,
        kind: str,
        language: str,
        tone: str | None,
        text: str,
        result: BaseModel,
    ) -> None:
        key = cache_key(kind, language, tone, text)
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO result_cache
                   (key, kind, result_json, cached_at)
                   VALUES (?, ?, ?, ?)""",
                (key, kind, result.model_dump_json(by_alias=True), time.time()),
            )

    def _delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM result_cache WHERE key = ?", (key,))

    def clear(self) -> int:
        """Clear all cached entries. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM result_cache")
            return cursor.rowcount

    def stats(self) -> dict:
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM result_cache").fetchone()[0]
            expired = conn.execute(
                "SELECT COUNT(*) FROM result_cache WHERE ? - cached_at > ?",
                (time.time(), self.ttl_seconds),
            ).fetchone()[0]
        return {"total": total, "expired": expired, "active": total - expired}
