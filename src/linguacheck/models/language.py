"""Languages and tones understood by the AI backend."""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    ENGLISH = "english"
    HINDI = "hindi"
    GUJARATI = "gujarati"

    @property
    def label(self) -> str:
        return LANGUAGE_LABELS[self]


LANGUAGE_LABELS: dict[Language, str] = {
    Language.ENGLISH: "English",
    Language.HINDI: "हिन्दी (Hindi)",
    Language.GUJARATI: "ગુજરાતી (Gujarati)",
}


class Tone(str, Enum):
    NEUTRAL = "neutral"
    FORMAL = "formal"
    CASUAL = "casual"
    PERSUASIVE = "persuasive"
    CREATIVE = "creative"
    PROFESSIONAL = "professional"
    MEDICAL_HEALTHCARE = "medical_healthcare"
    FINANCIAL_INVESTMENT = "financial_investment"
    TECHNICAL = "technical"
    TIPS = "tips"
    EXPLAIN = "explain"
    INFORMATION = "information"
    PROCESS = "process"
    EDUCATION = "education"
    ENGAGING = "engaging"
    GUIDE = "guide"

    @property
    def label(self) -> str:
        return self.value.replace("_", " & ").title()
