"""
Normalise raw model output into a best-effort JSON object string.

The model wraps its answer in prose and code fences, doubles escape
sequences and occasionally emits raw control bytes. Every step here is a
plain string transformation so the function cannot fail on any input.
"""
from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)```")
_OPEN_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*")
_DOUBLED_ESCAPE_RE = re.compile(r'\\\\([nrt"])')

_KEPT_CONTROLS = {"\t", "\n", "\r"}
_STRING_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def strip_code_fence(text: str) -> str:
    match = _FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()
    # Truncated responses can open a fence and never close it
    return _OPEN_FENCE_RE.sub("", text, count=1)


def slice_to_braces(text: str) -> str:
    """Drop prose before the first '{' and after the last '}'."""
    start = text.find("{")
    if start == -1:
        return ""
    end = text.rfind("}")
    if end < start:
        return text[start:]
    return text[start:end + 1]


def collapse_doubled_escapes(text: str) -> str:
    return _DOUBLED_ESCAPE_RE.sub(lambda m: "\\" + m.group(1), text)


def strip_control_characters(text: str) -> str:
    cleaned = "".join(
        ch for ch in text
        if (ord(ch) >= 0x20 and ord(ch) != 0x7F) or ch in _KEPT_CONTROLS
    )
    removed = len(text) - len(cleaned)
    if removed:
        logger.debug("Removed %d control characters", removed)
    return cleaned


def escape_string_controls(text: str) -> str:
    """Escape raw LF/CR/TAB that sit inside string literals."""
    out: list[str] = []
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
            elif ch in _STRING_CONTROL_ESCAPES:
                out.append(_STRING_CONTROL_ESCAPES[ch])
                continue
        elif ch == '"':
            in_string = True
        out.append(ch)
    return "".join(out)


def wrap_in_braces(text: str) -> str:
    stripped = text.strip()
    if not stripped:
        return "{}"
    if not stripped.startswith("{"):
        stripped = "{" + stripped
    if not stripped.endswith("}"):
        stripped = stripped + "}"
    return stripped


def preprocess(raw: str | None) -> str:
    """Turn raw model output into a best-effort JSON object string.

    Steps run in a fixed order: code-fence removal, slicing to the outermost
    braces, collapsing doubled escapes, dropping control bytes (tab, LF and CR
    survive and are escaped when they sit inside a string), and finally
    wrapping in braces when either side is missing. Empty input yields "{}".
    """
    if not raw:
        return "{}"
    text = str(raw)
    text = strip_code_fence(text)
    text = slice_to_braces(text)
    text = collapse_doubled_escapes(text)
    text = strip_control_characters(text)
    text = escape_string_controls(text)
    result = wrap_in_braces(text)
    logger.debug("Preprocessed %d raw chars into %d chars", len(raw), len(result))
    return result
