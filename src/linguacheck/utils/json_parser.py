"""Pull a JSON value out of a chatty LLM reply."""

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$")


def extract_json(text: str) -> dict | list:
    """Extract JSON from an LLM response.

    Tries, in order: the whole text, the text without ```json fences, the
    outermost ``{...}`` slice, the outermost ``[...]`` slice, and finally a
    repair of an object whose closing brackets were cut off.

    Raises ValueError when nothing parses.
    """
    text = (text or "").strip()
    unfenced = _FENCE_RE.sub("", text).strip()

    for candidate in (text, unfenced):
        parsed = _loads(candidate)
        if parsed is not None:
            return parsed

    for source in (unfenced, text):
        for opener, closer in (("{", "}"), ("[", "]")):
            parsed = _loads(_slice(source, opener, closer))
            if parsed is not None:
                return parsed

    repaired = _repair_truncated(unfenced)
    if repaired is not None:
        return repaired

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _loads(candidate: str | None) -> dict | list | None:
    if not candidate:
        return None
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, (dict, list)) else None


def _slice(text: str, opener: str, closer: str) -> str | None:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _repair_truncated(text: str) -> dict | None:
    """Close the brackets of a JSON object that was cut off mid-stream."""
    start = text.find("{")
    if start == -1:
        return None
    candidate = text[start:].rstrip()

    # Retry at the full length, then cut back to the last complete string.
    cut_points = [len(candidate)]
    last_quote = candidate.rfind('"')
    if last_quote > 0:
        cut_points.append(last_quote + 1)

    for cut in cut_points:
        body = candidate[:cut].rstrip().rstrip(",")
        scanned = _open_brackets(body)
        if scanned is None:
            continue
        stack, in_string = scanned
        if not stack:
            continue
        suffix = ('"' if in_string else "") + "".join(_CLOSERS[c] for c in reversed(stack))
        parsed = _loads(body + suffix)
        if isinstance(parsed, dict):
            return parsed
    return None


_CLOSERS = {"{": "}", "[": "]"}


def _open_brackets(body: str) -> tuple[list[str], bool] | None:
    """Brackets still open at the end of ``body``, innermost last.

    Returns None when a closer does not match its opener.
    """
    stack: list[str] = []
    in_string = False
    escaped = False
    for char in body:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(char)
        elif char in "}]":
            if not stack or _CLOSERS[stack.pop()] != char:
                return None
    return stack, in_string
