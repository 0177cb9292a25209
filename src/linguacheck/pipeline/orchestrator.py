"""Coordinates grammar checks and content suggestions for one text input.

Each check kind owns a :class:`RequestSlot`, a small state machine
``idle -> pending -> resolved | rejected``. Every request captures the slot's
sequence number when issued and may only settle the slot if that number is
still current, so a slow early request can never overwrite a later one.
Nothing here aborts an in-flight call; superseded results are dropped when
they arrive.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from linguacheck.cache.result_cache import ResultCache
from linguacheck.logging.models import UsageLog
from linguacheck.logging.usage_store import UsageStore
from linguacheck.models.correction import CorrectionResult
from linguacheck.models.language import Language, Tone
from linguacheck.models.suggestion import ContentSuggestions
from linguacheck.pipeline.content_checker import ContentChecker
from linguacheck.pipeline.content_suggester import ContentSuggester
from linguacheck.utils.scheduler import DebouncedTask
from linguacheck.utils.text import is_blank, word_count

logger = logging.getLogger(__name__)

DEFAULT_MIN_WORDS = 5
DEFAULT_QUIET_PERIOD = 1.5


class CheckKind(str, Enum):
    GRAMMAR = "grammar"
    CONTENT_SUGGESTION = "content_suggestion"


class RequestStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


CheckResult = CorrectionResult | ContentSuggestions


@dataclass(frozen=True)
class RequestState:
    status: RequestStatus = RequestStatus.IDLE
    requested_text: str = ""
    requested_language: Language | None = None
    requested_tone: Tone | None = None
    result: CheckResult | None = None
    error: str | None = None
    sequence: int = 0

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    @property
    def is_settled(self) -> bool:
        return self.status in (RequestStatus.RESOLVED, RequestStatus.REJECTED)


@dataclass(frozen=True)
class Notice:
    """A non-fatal message for the user."""

    level: str  # "warning" | "error"
    title: str
    message: str


class RequestSlot:
    """The single authoritative request state for one check kind."""

    def __init__(self, kind: CheckKind):
        self.kind = kind
        self._sequence = 0
        self.state = RequestState()

    @property
    def sequence(self) -> int:
        return self._sequence

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def matches(self, text: str, language: Language, tone: Tone | None = None) -> bool:
        """True if the current state was issued for exactly this input."""
        state = self.state
        if state.status is RequestStatus.IDLE:
            return False
        if self.kind is CheckKind.GRAMMAR:
            tone = state.requested_tone
        return (
            state.requested_text == text
            and state.requested_language == language
            and state.requested_tone == tone
        )

    def begin(self, text: str, language: Language, tone: Tone | None) -> int:
        self._sequence += 1
        self.state = RequestState(
            status=RequestStatus.PENDING,
            requested_text=text,
            requested_language=language,
            requested_tone=tone,
            sequence=self._sequence,
        )
        return self._sequence

    def resolve(self, sequence: int, result: CheckResult) -> bool:
        if not self.is_current(sequence):
            return False
        self.state = replace(self.state, status=RequestStatus.RESOLVED, result=result, error=None)
        return True

    def reject(self, sequence: int, error: str, fallback: CheckResult) -> bool:
        if not self.is_current(sequence):
            return False
        self.state = replace(self.state, status=RequestStatus.REJECTED, result=fallback, error=error)
        return True

    def invalidate(self) -> None:
        """Forget the current state; anything still in flight becomes stale."""
        self._sequence += 1
        self.state = RequestState(sequence=self._sequence)


class SuggestionOrchestrator:
    """Runs checks on demand or as the user types, keeping only current results.

    ``on_text_changed`` must be called from inside the running event loop;
    it is the single place where input changes reset state and (re)arm the
    as-you-type timer.
    """

    def __init__(
        self,
        checker: ContentChecker,
        suggester: ContentSuggester,
        *,
        min_words: int = DEFAULT_MIN_WORDS,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        auto_suggest: bool = False,
        cache: ResultCache | None = None,
        usage_store: UsageStore | None = None,
        session_id: str = "anonymous",
        on_notice: Callable[[Notice], None] | None = None,
    ):
        self.checker = checker
        self.suggester = suggester
        self.min_words = min_words
        self.auto_suggest = auto_suggest
        self.cache = cache
        self.usage_store = usage_store
        self.session_id = session_id
        self.on_notice = on_notice
        self.slots = {kind: RequestSlot(kind) for kind in CheckKind}
        self._scheduled = DebouncedTask(quiet_period, self._run_scheduled)
        self._draft: tuple[str, Language, Tone | None] | None = None
        self._scheduled_sequence: int | None = None

    @property
    def grammar(self) -> RequestState:
        return self.slots[CheckKind.GRAMMAR].state

    @property
    def content(self) -> RequestState:
        return self.slots[CheckKind.CONTENT_SUGGESTION].state

    @property
    def has_scheduled_call(self) -> bool:
        return self._scheduled.pending

    # -- explicit triggers ------------------------------------------------

    async def check_grammar(self, text: str, language: Language | str) -> RequestState:
        """Run ``checkContent``; blank input only produces a warning notice."""
        if is_blank(text):
            self._notify("warning", "Input required", "Please enter some text to check.")
            return self.grammar
        return await self._run(CheckKind.GRAMMAR, text, Language(language), None)

    async def suggest_content(
        self,
        text: str,
        language: Language | str,
        tone: Tone | str | None = None,
    ) -> RequestState:
        """Run ``suggestContent``; blank input only produces a warning notice."""
        if is_blank(text):
            self._notify("warning", "Input required", "Please enter some text to get suggestions.")
            return self.content
        return await self._run(
            CheckKind.CONTENT_SUGGESTION, text, Language(language), Tone(tone) if tone else None
        )

    # -- input changes ----------------------------------------------------

    def on_text_changed(
        self,
        text: str,
        language: Language | str,
        tone: Tone | str | None = None,
        *,
        from_corrector: bool = False,
    ) -> None:
        """Reset state for a new input and re-arm the as-you-type timer.

        ``from_corrector`` marks text produced by applying a suggestion; the
        grammar result being edited is kept in that case.
        """
        language = Language(language)
        tone = Tone(tone) if tone else None
        self._scheduled.cancel()
        self._draft = None

        content = self.slots[CheckKind.CONTENT_SUGGESTION]
        if content.state.status is not RequestStatus.IDLE and not content.matches(
            text, language, tone
        ):
            content.invalidate()

        grammar = self.slots[CheckKind.GRAMMAR]
        if (
            not from_corrector
            and grammar.state.status is not RequestStatus.IDLE
            and not grammar.matches(text, language)
        ):
            grammar.invalidate()

        if not self.auto_suggest or word_count(text) < self.min_words:
            return
        if content.matches(text, language, tone):
            return
        self._draft = (text, language, tone)
        self._scheduled.arm()

    def set_auto_suggest(self, enabled: bool) -> None:
        """Toggle as-you-type suggestions.

        Disabling drops the scheduled call and an as-you-type request still in
        flight; requests the user asked for explicitly keep running.
        """
        self.auto_suggest = enabled
        if not enabled:
            self.cancel_scheduled()
            content = self.slots[CheckKind.CONTENT_SUGGESTION]
            if content.state.is_pending and content.sequence == self._scheduled_sequence:
                content.invalidate()

    def cancel_scheduled(self) -> bool:
        """Drop the scheduled as-you-type call. Safe to call when none is armed."""
        self._draft = None
        return self._scheduled.cancel()

    async def wait_for_scheduled(self) -> None:
        """Wait until the scheduled call (if any) has fired and settled."""
        await self._scheduled.wait()

    async def _run_scheduled(self) -> None:
        draft, self._draft = self._draft, None
        if draft is None:
            return
        text, language, tone = draft
        await self._run(CheckKind.CONTENT_SUGGESTION, text, language, tone, scheduled=True)

    # -- request lifecycle ------------------------------------------------

    async def _run(
        self,
        kind: CheckKind,
        text: str,
        language: Language,
        tone: Tone | None,
        scheduled: bool = False,
    ) -> RequestState:
        slot = self.slots[kind]
        sequence = slot.begin(text, language, tone)
        if scheduled:
            self._scheduled_sequence = sequence
        started = time.monotonic()

        cached = self._cache_get(kind, text, language, tone)
        if cached is not None:
            slot.resolve(sequence, cached)
            self._record(kind, text, language, tone, started, "cached", cached)
            return slot.state

        try:
            if kind is CheckKind.GRAMMAR:
                result: CheckResult = await self.checker.check(text, language)
            else:
                result = await self.suggester.suggest(text, language, tone)
        except Exception as exc:
            fallback = self._fallback(kind, text)
            if not slot.reject(sequence, str(exc), fallback):
                logger.debug("Discarding stale %s failure (request %d)", kind.value, sequence)
                self._record(kind, text, language, tone, started, "stale", None)
                return slot.state
            logger.warning("%s request failed: %s", kind.value, exc)
            self._notify("error", *_FAILURE_NOTICES[kind])
            self._record(kind, text, language, tone, started, "rejected", fallback, error=str(exc))
            return slot.state

        if not slot.resolve(sequence, result):
            logger.debug("Discarding stale %s result (request %d)", kind.value, sequence)
            self._record(kind, text, language, tone, started, "stale", result)
            return slot.state

        self._cache_put(kind, text, language, tone, result)
        self._record(kind, text, language, tone, started, "resolved", result)
        return slot.state

    @staticmethod
    def _fallback(kind: CheckKind, text: str) -> CheckResult:
        if kind is CheckKind.GRAMMAR:
            return CorrectionResult.unchanged(text)
        return ContentSuggestions.empty()

    def _notify(self, level: str, title: str, message: str) -> None:
        if self.on_notice is not None:
            self.on_notice(Notice(level=level, title=title, message=message))

    # -- cache and usage log (best effort) --------------------------------

    def _cache_get(
        self, kind: CheckKind, text: str, language: Language, tone: Tone | None
    ) -> CheckResult | None:
        if self.cache is None:
            return None
        model = CorrectionResult if kind is CheckKind.GRAMMAR else ContentSuggestions
        try:
            return self.cache.get(kind.value, language.value, _tone_value(tone), text, model)
        except Exception:
            logger.exception("Result cache lookup failed")
            return None

    def _cache_put(
        self,
        kind: CheckKind,
        text: str,
        language: Language,
        tone: Tone | None,
        result: CheckResult,
    ) -> None:
        if self.cache is None:
            return
        try:
            self.cache.put(kind.value, language.value, _tone_value(tone), text, result)
        except Exception:
            logger.exception("Result cache write failed")

    def _record(
        self,
        kind: CheckKind,
        text: str,
        language: Language,
        tone: Tone | None,
        started: float,
        outcome: str,
        result: CheckResult | None,
        error: str | None = None,
    ) -> None:
        if self.usage_store is None:
            return
        try:
            self.usage_store.save_log(
                UsageLog(
                    session_id=self.session_id,
                    kind=kind.value,
                    language=language.value,
                    tone=_tone_value(tone),
                    word_count=word_count(text),
                    elapsed_seconds=time.monotonic() - started,
                    outcome=outcome,
                    result_count=len(result.suggestions) if result is not None else 0,
                    error_message=error,
                )
            )
        except Exception:
            logger.exception("Failed to save usage log")


_FAILURE_NOTICES: dict[CheckKind, tuple[str, str]] = {
    CheckKind.GRAMMAR: (
        "Check failed",
        "Could not check your text right now. It is shown unchanged; you can keep editing.",
    ),
    CheckKind.CONTENT_SUGGESTION: (
        "Suggestions unavailable",
        "Could not fetch suggestions right now. Please try again in a moment.",
    ),
}


def _tone_value(tone: Tone | None) -> str | None:
    return tone.value if tone is not None else None
