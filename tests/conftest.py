"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from linguacheck.clients.llm_client import LLMClient, LLMResponse
from linguacheck.models.correction import CorrectionResult, FlaggedWord
from linguacheck.models.suggestion import ContentSuggestions
from linguacheck.pipeline.content_checker import ContentChecker
from linguacheck.pipeline.content_suggester import ContentSuggester


@pytest.fixture
def sample_text() -> str:
    return "Teh catalog is old and their are many cat in it."


@pytest.fixture
def sample_flags() -> list[FlaggedWord]:
    return [
        FlaggedWord(word="Teh", suggestions=["The"]),
        FlaggedWord(word="their", suggestions=["there"]),
        FlaggedWord(word="many cat", suggestions=["many cats", "a lot of cats"]),
    ]


@pytest.fixture
def sample_correction(sample_flags) -> CorrectionResult:
    return CorrectionResult(
        corrected_content="The catalog is old and there are many cats in it.",
        suggestions=sample_flags,
    )


@pytest.fixture
def sample_suggestions() -> ContentSuggestions:
    return ContentSuggestions(
        suggestions=[
            "Our catalog may be old, but it's packed with cats! 🐱",
            "Discover a classic catalog full of cats.",
        ]
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client


@pytest.fixture
def mock_checker(sample_correction) -> ContentChecker:
    checker = AsyncMock(spec=ContentChecker)
    checker.check = AsyncMock(return_value=sample_correction)
    return checker


@pytest.fixture
def mock_suggester(sample_suggestions) -> ContentSuggester:
    suggester = AsyncMock(spec=ContentSuggester)
    suggester.suggest = AsyncMock(return_value=sample_suggestions)
    return suggester
