"""Click-to-apply correction state for one block of checked text."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from linguacheck.editor.segmenter import segment_text
from linguacheck.models.correction import FlaggedWord
from linguacheck.models.segment import Segment, join_segments

logger = logging.getLogger(__name__)

ORIGINAL_KEY = "original"


@dataclass(frozen=True)
class PlainSpan:
    segment_id: str
    text: str


@dataclass(frozen=True)
class ControlOption:
    """One clickable choice: a suggestion, or keeping the original word."""

    segment_id: str
    key: str
    label: str
    value: str
    is_original: bool = False


@dataclass(frozen=True)
class SuggestionControl:
    segment_id: str
    text: str
    original_word: str
    options: tuple[ControlOption, ...]


RenderItem = PlainSpan | SuggestionControl


def option_key(segment_id: str, index: int | None) -> str:
    return f"{segment_id}:{ORIGINAL_KEY if index is None else index}"


class InteractiveCorrector:
    """Holds a segmentation and applies the user's choices to it.

    The owner feeds ``(text, flags)`` through :meth:`sync`; every applied
    choice reassembles the text and hands it back through ``on_text_change``.
    The local segmentation stays authoritative until the owner supplies a
    different ``(text, flags)`` pair.
    """

    def __init__(
        self,
        text: str = "",
        flags: Sequence[FlaggedWord] = (),
        on_text_change: Callable[[str], None] | None = None,
    ):
        self.on_text_change = on_text_change
        self._flags: list[FlaggedWord] = list(flags)
        self._generation = 0
        self._segments: list[Segment] = self._segment(text)

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    @property
    def text(self) -> str:
        return join_segments(self._segments)

    @property
    def flags(self) -> list[FlaggedWord]:
        return list(self._flags)

    @property
    def has_open_errors(self) -> bool:
        return any(s.has_suggestions for s in self._segments)

    def sync(self, text: str, flags: Sequence[FlaggedWord]) -> bool:
        """Re-segment if ``(text, flags)`` differs from the current state.

        Returns True when the segmentation was rebuilt.
        """
        flags = list(flags)
        if text == self.text and flags == self._flags:
            return False
        self._flags = flags
        self._segments = self._segment(text)
        return True

    def _segment(self, text: str) -> list[Segment]:
        # ids carry the generation so clicks from an older render never match
        self._generation += 1
        return segment_text(text, self._flags, id_prefix=f"g{self._generation}-")

    def render(self) -> list[RenderItem]:
        items: list[RenderItem] = []
        for segment in self._segments:
            if not segment.has_suggestions:
                items.append(PlainSpan(segment_id=segment.id, text=segment.text))
                continue
            original = segment.original_word or segment.text
            options = [
                ControlOption(
                    segment_id=segment.id,
                    key=option_key(segment.id, i),
                    label=suggestion,
                    value=suggestion,
                )
                for i, suggestion in enumerate(segment.suggestions or ())
            ]
            options.append(
                ControlOption(
                    segment_id=segment.id,
                    key=option_key(segment.id, None),
                    label="Keep original",
                    value=original,
                    is_original=True,
                )
            )
            items.append(
                SuggestionControl(
                    segment_id=segment.id,
                    text=segment.text,
                    original_word=original,
                    options=tuple(options),
                )
            )
        return items

    def apply_suggestion(self, segment_id: str, chosen_text: str) -> bool:
        """Replace one segment's text and publish the reassembled whole.

        Unknown ids (e.g. a click from an earlier render) are ignored and
        return False.
        """
        for index, segment in enumerate(self._segments):
            if segment.id == segment_id:
                break
        else:
            logger.debug("Ignoring suggestion for unknown segment %s", segment_id)
            return False

        self._segments[index] = replace(
            segment, text=chosen_text, is_error=False, suggestions=None
        )
        if self.on_text_change is not None:
            self.on_text_change(self.text)
        return True

    def keep_original(self, segment_id: str) -> bool:
        for segment in self._segments:
            if segment.id == segment_id:
                return self.apply_suggestion(segment_id, segment.original_word or segment.text)
        return False

    def apply_option(self, key: str) -> bool:
        """Apply the choice identified by a :class:`ControlOption` key."""
        segment_id, _, choice = key.rpartition(":")
        segment = next((s for s in self._segments if s.id == segment_id), None)
        if segment is None or not segment.has_suggestions:
            return False
        if choice == ORIGINAL_KEY:
            return self.keep_original(segment_id)
        try:
            chosen = segment.suggestions[int(choice)]
        except (ValueError, IndexError):
            return False
        return self.apply_suggestion(segment_id, chosen)
