"""Grammar and spelling check backed by the LLM."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from linguacheck.clients.llm_client import DEFAULT_MODEL, LLMClient
from linguacheck.errors import CollaboratorError
from linguacheck.models.correction import CorrectionResult
from linguacheck.models.language import Language

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert editor. Your goal is to help the user improve their writing.
For the given content in the specified language:
1. Provide a fully corrected version of the text that addresses issues in
   grammar, spelling, punctuation, clarity, conciseness and overall flow.
   This is "correctedContent".
2. For significant errors or areas of improvement, provide specific
   suggestions. Each suggestion identifies the original "word" or short
   phrase exactly as it appears in the input text (same case, same spacing)
   and offers one or more replacement "suggestions", most relevant first.

Respond with JSON only:
{"correctedContent": "...", "suggestions": [{"word": "...", "suggestions": ["..."]}]}"""


class ContentChecker:
    """``checkContent``: corrected text plus per-word suggestions."""

    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL):
        self.llm = llm
        self.model = model

    async def check(self, content: str, language: Language | str) -> CorrectionResult:
        """Check ``content`` and return the corrected text with flagged words.

        Raises CollaboratorError when the call fails or the reply is unusable.
        """
        language = Language(language)
        prompt = f"Language: {language.value}\nContent: {content}"

        try:
            data = await self.llm.generate_json(prompt=prompt, system=SYSTEM_PROMPT, model=self.model)
        except Exception as exc:
            raise CollaboratorError("checkContent", str(exc) or type(exc).__name__) from exc

        if not isinstance(data, dict):
            raise CollaboratorError("checkContent", "expected a JSON object")
        try:
            result = CorrectionResult.model_validate(data)
        except ValidationError as exc:
            raise CollaboratorError("checkContent", f"malformed response: {exc}") from exc

        logger.debug(
            "checkContent(%s): %d flagged words", language.value, len(result.suggestions)
        )
        return result
