"""SQLite-backed usage log storage."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from linguacheck.logging.models import UsageLog

DEFAULT_DB_PATH = Path.home() / ".linguacheck" / "usage.db"

_COLUMNS = (
    "id, session_id, timestamp, kind, language, tone, word_count, "
    "elapsed_seconds, outcome, result_count, error_message"
)


class UsageStore:
    """SQLite-backed store for check usage logs with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS usage_logs (
                    id TEXT PRIMARY KEY,
                    session_id TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    kind TEXT NOT NULL,
                    language TEXT NOT NULL,
                    tone TEXT,
                    word_count INTEGER NOT NULL DEFAULT 0,
                    elapsed_seconds REAL NOT NULL DEFAULT 0.0,
                    outcome TEXT NOT NULL,
                    result_count INTEGER NOT NULL DEFAULT 0,
                    error_message TEXT
                )
            """)

    def save_log(self, log: UsageLog) -> None:
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO usage_logs ({_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    log.id,
                    log.session_id,
                    log.timestamp.isoformat(),
                    log.kind,
                    log.language,
                    log.tone,
                    log.word_count,
                    log.elapsed_seconds,
                    log.outcome,
                    log.result_count,
                    log.error_message,
                ),
            )

    def get_logs(
        self,
        session_id: str | None = None,
        limit: int = 50,
    ) -> list[UsageLog]:
        """Retrieve usage logs, newest first, optionally filtered by session_id."""
        with self._connect() as conn:
            if session_id is not None:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM usage_logs WHERE session_id = ? "
                    "ORDER BY timestamp DESC LIMIT ?",
                    (session_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {_COLUMNS} FROM usage_logs ORDER BY timestamp DESC LIMIT ?",
                    (limit,),
                ).fetchall()
        return [self._row_to_log(row) for row in rows]

    def get_monthly_stats(self) -> dict:
        """Get aggregated stats for the current month."""
        now = datetime.now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        with self._connect() as conn:
            row = conn.execute(
                """SELECT
                       COUNT(*),
                       SUM(CASE WHEN kind = 'grammar' THEN 1 ELSE 0 END),
                       SUM(CASE WHEN kind = 'content_suggestion' THEN 1 ELSE 0 END),
                       SUM(word_count),
                       AVG(elapsed_seconds),
                       SUM(CASE WHEN outcome IN ('resolved', 'cached') THEN 1 ELSE 0 END),
                       SUM(CASE WHEN outcome = 'stale' THEN 1 ELSE 0 END)
                   FROM usage_logs
                   WHERE timestamp >= ?""",
                (month_start.isoformat(),),
            ).fetchone()
        total = row[0] or 0
        return {
            "total_checks": total,
            "grammar_checks": row[1] or 0,
            "suggestion_checks": row[2] or 0,
            "total_words": row[3] or 0,
            "avg_elapsed_seconds": round(row[4], 2) if row[4] is not None else None,
            "success_rate": (row[5] / total * 100) if total else 0.0,
            "stale_discarded": row[6] or 0,
            "month": now.strftime("%Y-%m"),
        }

    @staticmethod
    def _row_to_log(row: tuple) -> UsageLog:
        return UsageLog(
            id=row[0],
            session_id=row[1],
            timestamp=datetime.fromisoformat(row[2]),
            kind=row[3],
            language=row[4],
            tone=row[5],
            word_count=row[6],
            elapsed_seconds=row[7],
            outcome=row[8],
            result_count=row[9],
            error_message=row[10],
        )
