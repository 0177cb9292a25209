"""Tests for LinguaCheck data models."""

import pytest

from linguacheck.models import (
    ContentSuggestions,
    CorrectionResult,
    FlaggedWord,
    Language,
    ParagraphItem,
    Segment,
    Tone,
    join_segments,
)


class TestCorrectionResult:
    def test_accepts_wire_names(self):
        result = CorrectionResult.model_validate(
            {
                "correctedContent": "The cat.",
                "suggestions": [{"word": "Teh", "suggestions": ["The"]}],
            }
        )
        assert result.corrected_content == "The cat."
        assert result.suggestions == [FlaggedWord(word="Teh", suggestions=["The"])]

    def test_accepts_python_names(self):
        result = CorrectionResult(corrected_content="ok")
        assert result.suggestions == []

    def test_missing_corrected_content_rejected(self):
        with pytest.raises(Exception):
            CorrectionResult.model_validate({"suggestions": []})

    def test_unchanged_fallback(self):
        result = CorrectionResult.unchanged("as typed")
        assert result.corrected_content == "as typed"
        assert result.suggestions == []

    def test_dumps_wire_names(self):
        dumped = CorrectionResult(corrected_content="x").model_dump(by_alias=True)
        assert "correctedContent" in dumped


class TestFlaggedWord:
    def test_blank_suggestions_dropped(self):
        flag = FlaggedWord(word="teh", suggestions=["the", "", "  "])
        assert flag.suggestions == ["the"]

    def test_single_string_suggestion(self):
        assert FlaggedWord(word="teh", suggestions="the").suggestions == ["the"]

    def test_missing_suggestions_is_empty(self):
        assert FlaggedWord(word="teh").suggestions == []


class TestContentSuggestions:
    def test_list_shape(self):
        result = ContentSuggestions.model_validate({"suggestions": ["a", "b"]})
        assert result.suggestions == ["a", "b"]
        assert result.best == "a"

    def test_enhanced_content_shape(self):
        result = ContentSuggestions.model_validate({"enhancedContent": "Better text"})
        assert result.suggestions == ["Better text"]

    def test_bare_string_and_list(self):
        assert ContentSuggestions.model_validate("one").suggestions == ["one"]
        assert ContentSuggestions.model_validate(["x", "y"]).suggestions == ["x", "y"]

    def test_blank_entries_stripped(self):
        result = ContentSuggestions.model_validate({"suggestions": ["  keep  ", "", "   "]})
        assert result.suggestions == ["keep"]

    def test_empty(self):
        assert ContentSuggestions.empty().best is None


class TestEnums:
    def test_languages(self):
        assert [lang.value for lang in Language] == ["english", "hindi", "gujarati"]
        assert Language("hindi") is Language.HINDI

    def test_tone_count_and_label(self):
        assert len(Tone) == 16
        assert Tone.MEDICAL_HEALTHCARE.label == "Medical & Healthcare"
        assert Tone.CASUAL.label == "Casual"

    def test_unknown_language_rejected(self):
        with pytest.raises(ValueError):
            Language("french")


class TestSegmentAndParagraph:
    def test_join_segments(self):
        segments = [Segment(id="part_0", text="a "), Segment(id="error_1", text="b", is_error=True)]
        assert join_segments(segments) == "a b"

    def test_has_suggestions(self):
        assert Segment(id="e", text="x", is_error=True, suggestions=("y",)).has_suggestions
        assert not Segment(id="e", text="x", is_error=True, suggestions=()).has_suggestions
        assert not Segment(id="p", text="x").has_suggestions

    def test_paragraph_is_checked(self):
        item = ParagraphItem(id="para_0", original_text="t", user_modified_text="t")
        assert not item.is_checked
        item.check_result = CorrectionResult.unchanged("t")
        assert item.is_checked
