"""Small text helpers shared by the pipeline and the surfaces."""

from __future__ import annotations

import re

_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def word_count(text: str) -> int:
    """Number of whitespace-delimited words."""
    return len(text.split())


def is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines and drop entries that trim to nothing."""
    normalised = text.replace("\r\n", "\n").replace("\r", "\n")
    return [p.strip() for p in _BLANK_LINE_RE.split(normalised) if p.strip()]
