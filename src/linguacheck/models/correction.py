"""Pydantic models for grammar check output."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class FlaggedWord(BaseModel):
    """A word or short phrase the checker flagged, with replacement candidates."""

    word: str
    suggestions: list[str] = []  # most relevant first

    @field_validator("suggestions", mode="before")
    @classmethod
    def _drop_blank(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [s for s in value if isinstance(s, str) and s.strip()]


class CorrectionResult(BaseModel):
    corrected_content: str = Field(alias="correctedContent")
    suggestions: list[FlaggedWord] = []

    model_config = {"populate_by_name": True}

    @classmethod
    def unchanged(cls, text: str) -> CorrectionResult:
        """Fallback used when the checker fails: the input is treated as correct."""
        return cls(corrected_content=text, suggestions=[])
