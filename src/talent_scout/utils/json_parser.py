"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json

from talent_scout.errors import ParseError

_PAIRS = {"{": "}", "[": "]"}


def extract_json(text: str) -> dict | list:
    """Extract a JSON object or array from an LLM response.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip fenced code block markers and parse
    3. The outermost {...} or [...] span, whichever opens first
    4. Close a truncated object or array

    Raises ParseError (a ValueError) when nothing parses.
    """
    text = (text or "").strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    stripped = _strip_code_fences(text)
    if stripped != text:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    result = _extract_span(stripped)
    if result is not None:
        return result

    result = _try_repair_truncated(stripped)
    if result is not None:
        return result

    raise ParseError(f"Could not extract JSON from text: {text[:200]}...")


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers from text."""
    start = text.find("```")
    if start == -1:
        return text
    lines = text[start:].split("\n")[1:]
    while lines and lines[-1].strip() in ("```", ""):
        lines = lines[:-1]
    body = "\n".join(lines)
    # Trailing prose after the closing fence
    end = body.find("```")
    if end != -1:
        body = body[:end]
    return body.strip()


def _first_opener(text: str) -> int:
    positions = [p for p in (text.find("{"), text.find("[")) if p != -1]
    return min(positions) if positions else -1


def _extract_span(text: str) -> dict | list | None:
    """Parse from the first opening bracket to its last matching closer."""
    start = _first_opener(text)
    if start == -1:
        return None
    end = text.rfind(_PAIRS[text[start]])
    if end <= start:
        return None
    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None


def _try_repair_truncated(text: str) -> dict | list | None:
    """Close open brackets of a response cut off mid-stream."""
    start = _first_opener(text)
    if start == -1:
        return None

    candidate = text[start:]
    # Cut back to the last complete string so no value is left half-written
    last_quote = candidate.rfind('"')
    if candidate.count('"') % 2 == 1 and last_quote > 0:
        candidate = candidate[:last_quote]
    candidate = candidate.rstrip().rstrip(",").rstrip()
    if candidate.endswith(":"):
        candidate = candidate[: candidate.rfind('"', 0, candidate.rfind('"'))].rstrip().rstrip(",")

    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in candidate:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _PAIRS:
            stack.append(_PAIRS[ch])
        elif ch in "}]" and stack:
            stack.pop()

    if not stack:
        return None
    try:
        return json.loads(candidate + "".join(reversed(stack)))
    except json.JSONDecodeError:
        return None
