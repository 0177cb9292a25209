"""Segments produced by the segmenter and consumed by the corrector."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """A contiguous slice of checked text.

    ``id`` is unique within one segmentation only. Plain segments carry no
    ``original_word`` and no ``suggestions``.
    """

    id: str
    text: str
    is_error: bool = False
    original_word: str | None = None
    suggestions: tuple[str, ...] | None = None

    @property
    def has_suggestions(self) -> bool:
        return self.is_error and bool(self.suggestions)


def join_segments(segments: list[Segment]) -> str:
    return "".join(s.text for s in segments)
