"""Pydantic model for content suggestions.

The backend has answered in two shapes over time: ``{"suggestions": [...]}``
and ``{"enhancedContent": "..."}``. Both are normalised to one ordered list.
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator


class ContentSuggestions(BaseModel):
    suggestions: list[str] = []

    @model_validator(mode="before")
    @classmethod
    def _normalise_shape(cls, data):
        if isinstance(data, str):
            return {"suggestions": [data]}
        if isinstance(data, list):
            return {"suggestions": data}
        if isinstance(data, dict) and "suggestions" not in data:
            for key in ("enhancedContent", "enhanced_content", "suggestion"):
                if key in data:
                    return {"suggestions": [data[key]]}
        return data

    @model_validator(mode="after")
    def _strip_blank(self) -> ContentSuggestions:
        self.suggestions = [s.strip() for s in self.suggestions if s and s.strip()]
        return self

    @property
    def best(self) -> str | None:
        return self.suggestions[0] if self.suggestions else None

    @classmethod
    def empty(cls) -> ContentSuggestions:
        return cls(suggestions=[])
