"""Exceptions raised inside LinguaCheck.

None of these are fatal: the orchestrator turns collaborator failures into
fallback results and the surfaces turn parse failures into user messages.
"""

from __future__ import annotations


class LinguaCheckError(Exception):
    """Base class for all LinguaCheck errors."""


class CollaboratorError(LinguaCheckError):
    """The AI backend failed, timed out, or returned an unusable response."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class DocumentParseError(LinguaCheckError):
    """An uploaded document could not be turned into plain text."""
