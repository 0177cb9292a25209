"""Content suggestions (enhanced rewrites) backed by the LLM."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from linguacheck.clients.llm_client import DEFAULT_MODEL, LLMClient
from linguacheck.errors import CollaboratorError
from linguacheck.models.language import Language, Tone
from linguacheck.models.suggestion import ContentSuggestions

logger = logging.getLogger(__name__)

TONE_GUIDE: dict[Tone, str] = {
    Tone.NEUTRAL: "Impartial and objective language, suitable for informative updates.",
    Tone.FORMAL: "Serious, official and adhering to conventions.",
    Tone.CASUAL: "Relaxed, informal and conversational.",
    Tone.PERSUASIVE: "Aiming to convince or influence, ideal for ad copy.",
    Tone.CREATIVE: "Original, imaginative and artistic.",
    Tone.PROFESSIONAL: "Business-oriented and polished.",
    Tone.MEDICAL_HEALTHCARE: (
        "Clear and respectful language for health topics. Never give medical advice."
    ),
    Tone.FINANCIAL_INVESTMENT: (
        "Appropriate financial terminology. Never give financial advice or "
        "specific investment recommendations."
    ),
    Tone.TECHNICAL: "Precise and informative for technical subjects.",
    Tone.TIPS: "Short, actionable, practical tips.",
    Tone.EXPLAIN: "Break the concept down so it is easy to understand.",
    Tone.INFORMATION: "Key facts and details in a straightforward way.",
    Tone.PROCESS: "The steps needed to reach the outcome, in order.",
    Tone.EDUCATION: "Teach the concept as short learning material.",
    Tone.ENGAGING: "Captivating, encouraging interaction.",
    Tone.GUIDE: "Step-by-step instructions that lead the reader through a task.",
}

SYSTEM_PROMPT = """\
You are an expert copywriter specialising in concise, engaging content for
social media posts, advertisements and similar short-form writing.
Rewrite the user's text into enhanced, ready-to-use versions in the same
language. Use calls-to-action, strong hooks and sparing emojis where they fit.
Return {num_suggestions} alternatives, best first.

Respond with JSON only:
{"suggestions": ["...", "..."]}"""


class ContentSuggester:
    """``suggestContent``: one or more enhanced versions of the input."""

    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL, num_suggestions: int = 3):
        self.llm = llm
        self.model = model
        self.num_suggestions = num_suggestions

    def build_prompt(self, content: str, language: Language, tone: Tone | None) -> str:
        lines = [f"Language: {language.value}"]
        if tone is not None:
            lines.append(f"Desired Style/Tone: {tone.value} ({TONE_GUIDE[tone]})")
        lines.append(f"Original Text: {content}")
        return "\n".join(lines)

    async def suggest(
        self,
        content: str,
        language: Language | str,
        tone: Tone | str | None = None,
    ) -> ContentSuggestions:
        """Return at least one suggestion, or raise CollaboratorError."""
        language = Language(language)
        tone = Tone(tone) if tone else None
        system = SYSTEM_PROMPT.replace("{num_suggestions}", str(self.num_suggestions))

        try:
            data = await self.llm.generate_json(
                prompt=self.build_prompt(content, language, tone),
                system=system,
                model=self.model,
                temperature=0.7,
            )
        except Exception as exc:
            raise CollaboratorError("suggestContent", str(exc) or type(exc).__name__) from exc

        try:
            result = ContentSuggestions.model_validate(data)
        except ValidationError as exc:
            raise CollaboratorError("suggestContent", f"malformed response: {exc}") from exc
        if not result.suggestions:
            raise CollaboratorError("suggestContent", "no suggestions returned")

        result.suggestions = result.suggestions[: self.num_suggestions]
        logger.debug(
            "suggestContent(%s, tone=%s): %d suggestions",
            language.value,
            tone.value if tone else None,
            len(result.suggestions),
        )
        return result
