"""Data models for LinguaCheck."""

from linguacheck.models.correction import CorrectionResult, FlaggedWord
from linguacheck.models.document import ParagraphItem
from linguacheck.models.language import Language, Tone
from linguacheck.models.segment import Segment, join_segments
from linguacheck.models.suggestion import ContentSuggestions

__all__ = [
    "ContentSuggestions",
    "CorrectionResult",
    "FlaggedWord",
    "Language",
    "ParagraphItem",
    "Segment",
    "Tone",
    "join_segments",
]
