# toon_scanner.py
# Character-level scanning shared by the TOON encoder and decoder
#
# =============================================================================
#  QUOTE-AWARE SCANNING
# =============================================================================
#
# Every search for a structural character (':' after a key, '[' opening an
# array header, ',' between row fields, '}' closing a field list) runs through
# the same two-flag state machine:
#
#   in_quotes - toggled by an unescaped '"'
#   escaped   - set by '\', consumes exactly the next character
#
# A structural character only counts when in_quotes is False. Numbers are the
# one token class matched with a regex, since their grammar is fixed.
# =============================================================================

import re
from typing import List

from toon_values import TAB_WIDTH

# ---------------------------------------------------------------------------
# TABLES
# ---------------------------------------------------------------------------
_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")

_QUOTE_TRIGGERS = frozenset(",:{}[]\n\r\t\"\\")

_ESCAPES   = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}

_SCALAR_LITERALS = {"null": None, "true": True, "false": False}

# ---------------------------------------------------------------------------
# QUOTING
# ---------------------------------------------------------------------------
def needs_quoting(text: str) -> bool:
    """Empty, holding a structural, quote or escape character, or padded with whitespace."""
    if not text:
        return True
    if any(ch in _QUOTE_TRIGGERS for ch in text):
        return True
    return text.strip() != text


def quote(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def unquote(token: str) -> str:
    """
    Strip one pair of surrounding double quotes and resolve escapes.

    Unquoted tokens come back trimmed but otherwise verbatim. Unknown escapes
    such as \\x are kept as written.
    """
    token = token.strip()
    if len(token) < 2 or token[0] != '"' or token[-1] != '"':
        return token

    inner = token[1:-1]
    out: List[str] = []
    i = 0
    n = len(inner)
    while i < n:
        ch = inner[i]
        if ch == "\\" and i + 1 < n:
            nxt = inner[i + 1]
            if nxt in _UNESCAPES:
                out.append(_UNESCAPES[nxt])
            else:
                out.append(ch + nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)

# ---------------------------------------------------------------------------
# STRUCTURAL SEARCH
# ---------------------------------------------------------------------------
def find_unquoted(text: str, target: str, start: int = 0) -> int:
    """Index of the first target char outside double quotes, or -1."""
    in_quotes = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if escaped:
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if ch == '"':
            in_quotes = not in_quotes
            continue
        if ch == target and not in_quotes:
            return i
    return -1


def split_delimited(text: str, delimiter: str = ",") -> List[str]:
    """
    Split on delimiters outside quotes and return the trimmed raw segments.

    Escape pairs stay in the segment so a later unquote() still sees them.
    A trailing blank segment ("a,b," or "a,b, ") is dropped.
    """
    segments: List[str] = []
    current: List[str] = []
    in_quotes = False
    escaped = False

    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\":
            current.append(ch)
            escaped = True
            continue
        if ch == '"':
            in_quotes = not in_quotes
            current.append(ch)
            continue
        if ch == delimiter and not in_quotes:
            segments.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    tail = "".join(current).strip()
    if tail:
        segments.append(tail)
    return segments


def indent_width(line: str) -> int:
    """Leading whitespace width: a space counts 1, a tab counts TAB_WIDTH."""
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH
        else:
            break
    return width

# ---------------------------------------------------------------------------
# SCALARS
# ---------------------------------------------------------------------------
def parse_scalar(token: str):
    """Literal, number, or string - in that order."""
    token = token.strip()
    if token in _SCALAR_LITERALS:
        return _SCALAR_LITERALS[token]
    if _NUMBER.fullmatch(token):
        return float(token) if any(c in token for c in ".eE") else int(token)
    return unquote(token)


def parse_fields(text: str) -> list:
    return [parse_scalar(segment) for segment in split_delimited(text)]
