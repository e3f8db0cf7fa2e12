"""Turns the raw AI reply into a JSON object, repairing truncated output."""

import json
import re
from typing import Any

from paperblog.conversion.exceptions import BlogResponseParseError
from paperblog.logging.logger import Log

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_blog_response(raw: str) -> dict[str, Any]:
    """Parse the reply as a JSON object.

    Code fences and anything outside the outermost ``{...}`` are dropped.
    When the direct parse fails the text is handed to ``repair_json``.

    Raises:
        BlogResponseParseError: if neither the text nor its repair parses
            to a JSON object.
    """
    text = strip_code_fences(raw)
    first = text.find("{")
    last = text.rfind("}")
    if first == -1:
        raise BlogResponseParseError("Blog conversion failed: AI response contains no JSON object")

    candidate = text[first : last + 1] if last > first else text[first:]
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        Log.warning(f"Initial JSON parse failed ({exc}), attempting repair")
        Log.debug(f"Unparseable AI response tail:\n{text[-1000:]}")
        repaired = repair_json(text[first:])
        try:
            parsed = json.loads(repaired)
        except json.JSONDecodeError as repair_exc:
            raise BlogResponseParseError(
                f"Blog conversion failed: invalid JSON response: {repair_exc}"
            ) from repair_exc

    if not isinstance(parsed, dict):
        raise BlogResponseParseError("Blog conversion failed: JSON response must be an object")
    return parsed


def repair_json(text: str) -> str:
    """Best-effort completion of a truncated JSON document.

    The text is scanned once, tracking string state and the stack of open
    containers. If the top-level value closes, everything after it is
    dropped. Otherwise candidates are tried in order: the whole text with
    an open string and every open container closed, then the text cut at
    each container-level comma from right to left, closed the same way.
    The first candidate that parses is returned; if none does, the last
    one is.
    """
    stack: list[str] = []
    cuts: list[tuple[int, tuple[str, ...]]] = []
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in "}]":
            if stack and stack[-1] == char:
                stack.pop()
                if not stack:
                    return text[: index + 1]
        elif char == "," and stack:
            cuts.append((index, tuple(stack)))

    candidates = [text.rstrip() + ('"' if in_string else "") + _close(stack)]
    candidates.extend(text[:index] + _close(open_stack) for index, open_stack in reversed(cuts))

    for candidate in candidates:
        try:
            json.loads(candidate)
        except json.JSONDecodeError:
            continue
        return candidate
    return candidates[-1]


def _close(open_stack: list[str] | tuple[str, ...]) -> str:
    return "".join(reversed(open_stack))
