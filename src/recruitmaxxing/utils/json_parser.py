"""Turn raw model text into a parseable JSON object.

Three steps, each returning a Result instead of raising:

1. ``normalize``: strip markdown fences, straighten typographic quotes and
   isolate the ``{`` ... ``}`` substring.
2. ``repair``: fix near-valid JSON (single quotes, bare keys, trailing or
   missing commas, truncation) with a single string-aware scan.
3. ``parse_object``: ``json.loads`` the repaired text and check it is an object.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from recruitmaxxing.errors import NoJsonFound, UnrepairableStructure
from recruitmaxxing.utils.result import Failure, Ok, Result

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")

_QUOTE_TABLE = str.maketrans({
    "“": '"',
    "”": '"',
    "„": '"',
    "‟": '"',
    "″": '"',
    "«": '"',
    "»": '"',
    "‘": "'",
    "’": "'",
    "‚": "'",
    "‛": "'",
    "′": "'",
})

_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_HEX4_RE = re.compile(r"[0-9a-fA-F]{4}")

_LITERALS = {
    "true": "true",
    "True": "true",
    "false": "false",
    "False": "false",
    "null": "null",
    "None": "null",
    "undefined": "null",
    "NaN": "null",
}

_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_PUNCTUATION = "{}[]:,"
_BARE_STOP = _PUNCTUATION + '"\n'


def normalize(raw: str | None) -> Result[str]:
    """Strip fences and typographic quotes, then isolate the JSON object."""
    if not raw:
        return Failure(NoJsonFound("Model returned no text"))

    text = _FENCE_RE.sub("", raw)
    text = text.translate(_QUOTE_TABLE).strip()

    if not text.startswith("{"):
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1 or end < start:
            return Failure(NoJsonFound(f"No JSON object in model text: {raw[:200]!r}"))
        text = text[start : end + 1]

    return Ok(text)


def repair(text: str | None) -> Result[str]:
    """Return strictly valid JSON object text, repairing it if needed."""
    if not text:
        return Failure(UnrepairableStructure("Nothing to repair"))

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        pass
    else:
        if isinstance(parsed, dict):
            return Ok(text)
        return Failure(UnrepairableStructure(f"Expected a JSON object, got {type(parsed).__name__}"))

    try:
        repaired = _rebuild(text)
    except _GiveUp as exc:
        logger.debug("Repair gave up: %s", exc)
        return Failure(UnrepairableStructure(f"Could not repair JSON: {exc}"))

    try:
        parsed = json.loads(repaired)
    except json.JSONDecodeError as exc:
        logger.debug("Repaired text still invalid: %s", exc)
        return Failure(UnrepairableStructure(f"Could not repair JSON: {exc.msg}"))

    if not isinstance(parsed, dict):
        return Failure(UnrepairableStructure(f"Expected a JSON object, got {type(parsed).__name__}"))

    logger.debug("Repaired model JSON (%d -> %d chars)", len(text), len(repaired))
    return Ok(repaired)


def parse_object(text: str) -> Result[dict]:
    """json.loads that reports failures as UnrepairableStructure."""
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        return Failure(UnrepairableStructure(f"Invalid JSON: {exc}"))
    if not isinstance(parsed, dict):
        return Failure(UnrepairableStructure(f"Expected a JSON object, got {type(parsed).__name__}"))
    return Ok(parsed)


def extract_object(raw: str | None) -> Result[dict]:
    """normalize -> repair -> parse_object."""
    return normalize(raw).then(repair).then(parse_object)


# ---------------------------------------------------------------------------
# Repair internals
# ---------------------------------------------------------------------------


class _GiveUp(Exception):
    pass


@dataclass
class _Token:
    kind: str  # "punct", "string", "bare"
    value: str
    terminated: bool = True


@dataclass
class _Frame:
    bracket: str  # "{" or "["
    state: str  # object: key/colon/value/after, array: value/after
    key_mark: int = 0


@dataclass
class _Builder:
    out: list[str] = field(default_factory=list)
    stack: list[_Frame] = field(default_factory=list)
    done: bool = False


def _tokens(text: str):
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
        elif ch in _PUNCTUATION:
            yield _Token("punct", ch)
            i += 1
        elif ch in "\"'":
            value, i, terminated = _read_string(text, i, ch)
            yield _Token("string", value, terminated)
        else:
            start = i
            while i < n and text[i] not in _BARE_STOP:
                i += 1
            word = text[start:i].strip()
            if word:
                yield _Token("bare", word)


def _read_string(text: str, i: int, quote: str) -> tuple[str, int, bool]:
    chars: list[str] = []
    n = len(text)
    i += 1
    while i < n:
        ch = text[i]
        if ch == "\\":
            if i + 1 >= n:
                i += 1
                break
            nxt = text[i + 1]
            if nxt == "u" and _HEX4_RE.fullmatch(text, i + 2, i + 6):
                code, i = _read_code_point(text, i)
                chars.append(chr(code))
                continue
            chars.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        if ch == quote and _closes_string(text, i + 1, quote):
            return "".join(chars), i + 1, True
        chars.append(ch)
        i += 1
    return "".join(chars), n, False


def _read_code_point(text: str, i: int) -> tuple[int, int]:
    """Decode the ``\\uXXXX`` escape at ``i``, joining a UTF-16 surrogate pair."""
    code = int(text[i + 2 : i + 6], 16)
    i += 6
    if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", i) and _HEX4_RE.fullmatch(text, i + 2, i + 6):
        low = int(text[i + 2 : i + 6], 16)
        if 0xDC00 <= low <= 0xDFFF:
            return 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00), i + 6
    if 0xD800 <= code <= 0xDFFF:
        # lone surrogate, not encodable as UTF-8
        return 0xFFFD, i
    return code, i


def _closes_string(text: str, j: int, quote: str) -> bool:
    # An unescaped quote only ends the string when structure follows it.
    saw_newline = False
    n = len(text)
    while j < n and text[j].isspace():
        saw_newline = saw_newline or text[j] == "\n"
        j += 1
    if j >= n:
        return True
    nxt = text[j]
    if nxt in ",:}]":
        return True
    if nxt not in ('"', quote):
        return False
    return saw_newline or _starts_string(text, j)


def _starts_string(text: str, j: int) -> bool:
    """True if a complete one-line string opens at ``j`` and structure follows it."""
    quote = text[j]
    j += 1
    n = len(text)
    while j < n and text[j] != "\n":
        if text[j] == "\\":
            j += 2
            continue
        if text[j] == quote:
            j += 1
            while j < n and text[j] in " \t":
                j += 1
            return j >= n or text[j] in ",:}]"
        j += 1
    return False


def _scalar(token: _Token) -> str:
    if token.kind == "string":
        return json.dumps(token.value, ensure_ascii=False)
    if token.value in _LITERALS:
        return _LITERALS[token.value]
    if _NUMBER_RE.fullmatch(token.value):
        return token.value
    return json.dumps(token.value, ensure_ascii=False)


def _close_top(b: _Builder) -> None:
    frame = b.stack.pop()
    if frame.bracket == "{" and frame.state in ("colon", "value"):
        # dangling key with no value
        del b.out[frame.key_mark :]
    b.out.append("}" if frame.bracket == "{" else "]")
    if not b.stack:
        b.done = True


def _begin_value(b: _Builder) -> None:
    """Emit whatever separator must precede a value in the current frame."""
    frame = b.stack[-1]
    if frame.bracket == "{":
        if frame.state == "colon":
            b.out.append(":")
        elif frame.state != "value":
            raise _GiveUp("value where an object key was expected")
    elif frame.state == "after":
        b.out.append(",")
    frame.state = "after"


def _feed(b: _Builder, token: _Token) -> None:
    if token.kind == "punct":
        ch = token.value
        if ch in "{[":
            if b.stack:
                _begin_value(b)
            b.out.append(ch)
            b.stack.append(_Frame(ch, "key" if ch == "{" else "value"))
        elif ch in "}]":
            want = "{" if ch == "}" else "["
            if not any(f.bracket == want for f in b.stack):
                return
            while b.stack and not b.done:
                matched = b.stack[-1].bracket == want
                _close_top(b)
                if matched:
                    break
        elif ch == ":":
            frame = b.stack[-1]
            if frame.bracket == "{" and frame.state == "colon":
                b.out.append(":")
                frame.state = "value"
        # commas are re-emitted lazily in _begin_value / key handling
        return

    frame = b.stack[-1]
    if frame.bracket == "{" and frame.state in ("key", "after"):
        frame.key_mark = len(b.out)
        if frame.state == "after":
            b.out.append(",")
        b.out.append(json.dumps(token.value, ensure_ascii=False))
        frame.state = "colon"
        return
    _begin_value(b)
    b.out.append(_scalar(token))


def _rebuild(text: str) -> str:
    start = text.find("{")
    if start == -1:
        raise _GiveUp("no opening brace")

    b = _Builder()
    for token in _tokens(text[start:]):
        _feed(b, token)
        if b.done:
            break

    while b.stack:
        _close_top(b)

    return "".join(b.out)
