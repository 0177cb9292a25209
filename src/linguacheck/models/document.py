"""Paragraph state for document mode."""

from __future__ import annotations

from dataclasses import dataclass

from linguacheck.models.correction import CorrectionResult


@dataclass
class ParagraphItem:
    id: str
    original_text: str
    user_modified_text: str
    check_result: CorrectionResult | None = None
    is_loading: bool = False
    error: str | None = None

    @property
    def is_checked(self) -> bool:
        return self.check_result is not None
