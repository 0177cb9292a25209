"""Paragraph-by-paragraph review of an uploaded document."""

from __future__ import annotations

import logging
from collections.abc import Callable

from linguacheck.models.document import ParagraphItem
from linguacheck.models.language import Language
from linguacheck.pipeline.content_checker import ContentChecker
from linguacheck.pipeline.orchestrator import DEFAULT_QUIET_PERIOD, Notice
from linguacheck.utils.scheduler import DebouncedTask
from linguacheck.utils.text import is_blank, split_paragraphs

logger = logging.getLogger(__name__)


class DocumentSession:
    """Independent check state for every non-empty paragraph of one document.

    Paragraphs are created once, from the extracted text, and are only ever
    replaced together with the whole session. Each paragraph keeps its own
    request sequence so results for an edited paragraph are discarded.
    """

    def __init__(
        self,
        paragraphs: list[ParagraphItem],
        checker: ContentChecker,
        language: Language | str = Language.ENGLISH,
        *,
        auto_check: bool = False,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        on_notice: Callable[[Notice], None] | None = None,
    ):
        self.paragraphs = paragraphs
        self.checker = checker
        self.language = Language(language)
        self.auto_check = auto_check
        self.quiet_period = quiet_period
        self.on_notice = on_notice
        self._index = {p.id: p for p in paragraphs}
        self._sequences = {p.id: 0 for p in paragraphs}
        self._scheduled: dict[str, DebouncedTask] = {}

    @classmethod
    def from_text(cls, text: str, checker: ContentChecker, language: Language | str, **kwargs):
        paragraphs = [
            ParagraphItem(id=f"para_{i}", original_text=p, user_modified_text=p)
            for i, p in enumerate(split_paragraphs(text))
        ]
        logger.info("Document session created with %d paragraphs", len(paragraphs))
        return cls(paragraphs, checker, language, **kwargs)

    def get(self, paragraph_id: str) -> ParagraphItem:
        """Look up a paragraph (KeyError if the id is unknown)."""
        return self._index[paragraph_id]

    @property
    def checked_count(self) -> int:
        return sum(1 for p in self.paragraphs if p.is_checked)

    @property
    def is_busy(self) -> bool:
        return any(p.is_loading for p in self.paragraphs)

    async def check_one(self, paragraph_id: str) -> ParagraphItem:
        """Check one paragraph. Failures are recorded on the paragraph, never raised."""
        item = self.get(paragraph_id)
        text = item.user_modified_text
        if is_blank(text):
            self._notify("warning", "Input required", "This paragraph is empty.")
            return item

        self._sequences[paragraph_id] += 1
        sequence = self._sequences[paragraph_id]
        item.is_loading = True
        item.error = None

        try:
            result = await self.checker.check(text, self.language)
        except Exception as exc:
            if self._sequences[paragraph_id] != sequence:
                return item
            logger.warning("Paragraph %s check failed: %s", paragraph_id, exc)
            item.error = str(exc)
            item.is_loading = False
            self._notify("error", "Check failed", f"Could not check paragraph {paragraph_id}.")
            return item

        if self._sequences[paragraph_id] != sequence:
            logger.debug("Discarding stale result for paragraph %s", paragraph_id)
            return item
        item.check_result = result
        item.is_loading = False
        return item

    async def check_all(self) -> int:
        """Check every unchecked, idle paragraph one after another.

        Returns the number of paragraphs that ended up with a result.
        """
        done = 0
        for item in list(self.paragraphs):
            if item.is_checked or item.is_loading:
                continue
            await self.check_one(item.id)
            if item.is_checked:
                done += 1
        logger.info("Checked %d of %d paragraphs", self.checked_count, len(self.paragraphs))
        return done

    def update_text(self, paragraph_id: str, text: str, *, from_corrector: bool = False) -> None:
        """Record the user's edit of one paragraph.

        Edits made outside the corrector drop the paragraph's result and make
        any in-flight check stale; with ``auto_check`` a new check is scheduled.
        Corrector edits keep the result but still make a running check stale.
        """
        item = self.get(paragraph_id)
        changed = text != item.user_modified_text
        item.user_modified_text = text
        if from_corrector:
            if changed:
                self._drop_in_flight(item)
            return

        self._sequences[paragraph_id] += 1
        item.check_result = None
        item.is_loading = False
        item.error = None

        task = self._scheduled.get(paragraph_id)
        if task is not None:
            task.cancel()
        if self.auto_check and not is_blank(text):
            if task is None:
                task = DebouncedTask(self.quiet_period, lambda: self.check_one(paragraph_id))
                self._scheduled[paragraph_id] = task
            task.arm()

    def _drop_in_flight(self, item: ParagraphItem) -> None:
        """Make a running check for ``item`` stale; its text no longer matches."""
        if item.is_loading:
            self._sequences[item.id] += 1
            item.is_loading = False

    def cancel_scheduled(self) -> None:
        for task in self._scheduled.values():
            task.cancel()

    def apply_correction(self, paragraph_id: str) -> bool:
        """Adopt the checker's fully corrected text for one paragraph."""
        item = self.get(paragraph_id)
        if item.check_result is None:
            return False
        if item.check_result.corrected_content != item.user_modified_text:
            self._drop_in_flight(item)
        item.user_modified_text = item.check_result.corrected_content
        item.check_result = item.check_result.model_copy(update={"suggestions": []})
        return True

    def combined_text(self) -> str:
        return "\n\n".join(p.user_modified_text for p in self.paragraphs)

    def _notify(self, level: str, title: str, message: str) -> None:
        if self.on_notice is not None:
            self.on_notice(Notice(level=level, title=title, message=message))
