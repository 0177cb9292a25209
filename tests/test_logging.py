"""Tests for UsageLog model and UsageStore."""

from __future__ import annotations

from datetime import datetime

import pytest

from linguacheck.logging.models import UsageLog
from linguacheck.logging.usage_store import UsageStore


class TestUsageLog:
    def test_create_minimal(self):
        log = UsageLog(kind="grammar", language="english")
        assert log.session_id == "anonymous"
        assert log.outcome == "resolved"
        assert log.success is True
        assert log.id

    def test_rejected_and_stale_are_not_success(self):
        assert not UsageLog(kind="grammar", language="english", outcome="rejected").success
        assert not UsageLog(kind="grammar", language="english", outcome="stale").success
        assert UsageLog(kind="grammar", language="english", outcome="cached").success

    def test_unique_ids(self):
        a = UsageLog(kind="grammar", language="english")
        b = UsageLog(kind="grammar", language="english")
        assert a.id != b.id

    def test_timestamp_auto(self):
        before = datetime.now()
        log = UsageLog(kind="grammar", language="english")
        after = datetime.now()
        assert before <= log.timestamp <= after


@pytest.fixture
def store(tmp_path):
    return UsageStore(db_path=tmp_path / "usage.db")


class TestUsageStore:
    def test_save_and_get(self, store):
        log = UsageLog(
            kind="content_suggestion",
            language="hindi",
            tone="casual",
            word_count=12,
            elapsed_seconds=1.25,
            result_count=3,
            session_id="sess-1",
        )
        store.save_log(log)
        logs = store.get_logs()
        assert len(logs) == 1
        saved = logs[0]
        assert saved.id == log.id
        assert saved.tone == "casual"
        assert saved.word_count == 12
        assert saved.result_count == 3

    def test_filter_by_session(self, store):
        store.save_log(UsageLog(kind="grammar", language="english", session_id="a"))
        store.save_log(UsageLog(kind="grammar", language="english", session_id="b"))
        assert len(store.get_logs(session_id="a")) == 1

    def test_limit(self, store):
        for _ in range(5):
            store.save_log(UsageLog(kind="grammar", language="english"))
        assert len(store.get_logs(limit=3)) == 3

    def test_monthly_stats(self, store):
        store.save_log(UsageLog(kind="grammar", language="english", word_count=10, elapsed_seconds=1.0))
        store.save_log(
            UsageLog(kind="content_suggestion", language="english", word_count=6, elapsed_seconds=3.0)
        )
        store.save_log(
            UsageLog(kind="grammar", language="english", outcome="rejected", error_message="timeout")
        )
        store.save_log(UsageLog(kind="grammar", language="english", outcome="stale"))

        stats = store.get_monthly_stats()
        assert stats["total_checks"] == 4
        assert stats["grammar_checks"] == 3
        assert stats["suggestion_checks"] == 1
        assert stats["total_words"] == 16
        assert stats["success_rate"] == pytest.approx(50.0)
        assert stats["stale_discarded"] == 1

    def test_monthly_stats_empty(self, store):
        stats = store.get_monthly_stats()
        assert stats["total_checks"] == 0
        assert stats["success_rate"] == 0.0
        assert stats["avg_elapsed_seconds"] is None
