"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UsageLog(BaseModel):
    """One settled collaborator call."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str = "anonymous"
    timestamp: datetime = Field(default_factory=datetime.now)
    kind: str  # "grammar" | "content_suggestion"
    language: str
    tone: str | None = None
    word_count: int = 0
    elapsed_seconds: float = 0.0
    outcome: str = "resolved"  # "resolved" | "rejected" | "stale" | "cached"
    result_count: int = 0
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome in ("resolved", "cached")
