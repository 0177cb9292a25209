"""Split checked text into plain and flagged segments.

Matching is a plain regex alternation over the flagged words, longest word
first, so a flag like ``catalog`` wins over ``cat`` at the same position.
Words the checker flagged but that do not occur literally in the text are
dropped without complaint.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from linguacheck.models.correction import FlaggedWord
from linguacheck.models.segment import Segment


def unique_flags(flags: Iterable[FlaggedWord]) -> dict[str, tuple[str, ...]]:
    """Map each flagged word to its first-seen suggestion list."""
    seen: dict[str, tuple[str, ...]] = {}
    for flag in flags:
        if flag.word and flag.word not in seen:
            seen[flag.word] = tuple(flag.suggestions)
    return seen


def build_pattern(words: Iterable[str]) -> re.Pattern[str]:
    # sorted() is stable, so equal-length words keep first-seen order
    ordered = sorted(words, key=len, reverse=True)
    return re.compile("|".join(re.escape(w) for w in ordered))


def segment_text(
    text: str, flags: Iterable[FlaggedWord], id_prefix: str = ""
) -> list[Segment]:
    """Partition ``text`` around the flagged words.

    Concatenating the returned segment texts always gives back ``text``.
    Ids are ``part_N`` / ``error_N`` behind ``id_prefix``, so callers that
    re-segment can keep ids from different segmentations apart.
    """
    lookup = unique_flags(flags)
    counter = 0

    def next_id(prefix: str) -> str:
        nonlocal counter
        counter += 1
        return f"{id_prefix}{prefix}_{counter - 1}"

    if not text or not lookup:
        return [Segment(id=next_id("part"), text=text or "")]

    segments: list[Segment] = []
    position = 0
    for match in build_pattern(lookup).finditer(text):
        if match.start() > position:
            segments.append(Segment(id=next_id("part"), text=text[position : match.start()]))
        word = match.group(0)
        segments.append(
            Segment(
                id=next_id("error"),
                text=word,
                is_error=True,
                original_word=word,
                suggestions=lookup[word],
            )
        )
        position = match.end()

    if position < len(text):
        segments.append(Segment(id=next_id("part"), text=text[position:]))
    return segments
