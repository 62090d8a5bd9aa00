"""
Structural repair applied before the second strict-parse attempt.
"""
from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_MULTI_BACKSLASH_RE = re.compile(r"\\{2,}")
_BAD_ESCAPE_RE = re.compile(r'\\([^"\\/bfnrtu])')
_ESCAPED_KEY_RE = re.compile(r'"([^"\\]*)\\([^"\\]*)"\s*:')
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_BLANK_RUN_RE = re.compile(r"\s*")

_BOUNDARY_CHARS = set(",:}]")
_CLOSER_FOR = {"{": "}", "[": "]"}
_OPENER_FOR = {"}": "{", "]": "["}


def collapse_backslashes(text: str) -> str:
    return _MULTI_BACKSLASH_RE.sub(lambda m: "\\", text)


def drop_invalid_escapes(text: str) -> str:
    text = _ESCAPED_KEY_RE.sub(lambda m: f'"{m.group(1)}{m.group(2)}":', text)
    return _BAD_ESCAPE_RE.sub(lambda m: m.group(1), text)


def _next_significant(text: str, index: int) -> str:
    end = _BLANK_RUN_RE.match(text, index).end()
    return text[end] if end < len(text) else ""


def escape_embedded_quotes(text: str) -> str:
    """Escape quotes that appear inside an open string value.

    A quote only closes the current string when the next non-blank character
    looks like a JSON boundary (comma, colon, closing brace/bracket or end of
    text); any other quote is treated as part of the value.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                following = _next_significant(text, i + 1)
                if following == "" or following in _BOUNDARY_CHARS:
                    in_string = False
                else:
                    out.append('\\"')
                    continue
        elif ch == '"':
            in_string = True
        out.append(ch)
    return "".join(out)


def balance_delimiters(text: str) -> str:
    """Close what truncation left open and open what has no opener.

    Delimiters inside string literals are ignored. An unterminated string is
    closed first, then missing closers are appended innermost-first and
    missing openers are prepended.
    """
    stack: list[str] = []
    missing_openers: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSER_FOR:
            stack.append(ch)
        elif ch in _OPENER_FOR:
            if stack and stack[-1] == _OPENER_FOR[ch]:
                stack.pop()
            else:
                missing_openers.append(_OPENER_FOR[ch])

    if in_string:
        text += '"'
    if stack:
        logger.debug("Appending %d missing closing delimiters", len(stack))
        text += "".join(_CLOSER_FOR[opener] for opener in reversed(stack))
    if missing_openers:
        logger.debug("Prepending %d missing opening delimiters", len(missing_openers))
        text = "".join(reversed(missing_openers)) + text
    return text


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(lambda m: m.group(1), text)


def repair_structure(text: str) -> str:
    text = collapse_backslashes(text)
    text = drop_invalid_escapes(text)
    text = escape_embedded_quotes(text)
    text = balance_delimiters(text)
    return remove_trailing_commas(text)
