"""Tests for extract_json."""

import pytest

from linguacheck.utils.json_parser import extract_json


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_fenced_block(self):
        text = '```json\n{"correctedContent": "Hi", "suggestions": []}\n```'
        assert extract_json(text) == {"correctedContent": "Hi", "suggestions": []}

    def test_object_surrounded_by_prose(self):
        text = 'Here is the result:\n{"suggestions": ["one"]}\nHope that helps!'
        assert extract_json(text) == {"suggestions": ["one"]}

    def test_array(self):
        assert extract_json('Sure: ["a", "b"]') == ["a", "b"]

    def test_unicode_content(self):
        text = '{"correctedContent": "मेरा नाम राम है।", "suggestions": []}'
        assert extract_json(text)["correctedContent"] == "मेरा नाम राम है।"

    def test_truncated_object_is_repaired(self):
        text = '{"correctedContent": "Hello", "suggestions": [{"word": "teh", "suggestions": ["the"]}'
        result = extract_json(text)
        assert result["correctedContent"] == "Hello"
        assert result["suggestions"][0]["word"] == "teh"

    def test_truncated_nested_closes_in_order(self):
        text = '{"suggestions": [{"word": "teh", "suggestions": ["the", "tea"'
        result = extract_json(text)
        assert result == {"suggestions": [{"word": "teh", "suggestions": ["the", "tea"]}]}

    def test_truncated_inside_string(self):
        assert extract_json('{"correctedContent": "Hel') == {"correctedContent": "Hel"}

    def test_brackets_inside_strings_are_ignored(self):
        result = extract_json('{"a": "x]}", "b": [1, 2')
        assert result == {"a": "x]}", "b": [1, 2]}

    def test_plain_text_raises(self):
        with pytest.raises(ValueError):
            extract_json("this is plain text, not json")

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            extract_json("")
