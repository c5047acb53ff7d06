# toon_decoder.py
# TOON text -> value tree, by line-oriented recursive descent
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER LINES
# =============================================================================
#
# The text is split on '\n' once and walked forward with explicit indices.
# Each parse routine takes the index of its first line and returns
# (value, next_index), where next_index is the first line it did not consume.
#
# Scope is decided by indentation alone:
#   - an object owns every following line deeper than its parent's line and
#     not shallower than its own first line;
#   - an array owns the lines deeper than its header line, up to its
#     declared [count].
#
# An expanded array element is an object when it opens with a "-" marker
# line, or when its own line already reads "key: ..." or "key[...".
#
# The default mode is lenient: lines that are neither "key: value" nor
# "key[count]..." are skipped, tabular rows with the wrong field count are
# dropped, and a header without a count becomes []. strict=True turns each of
# those recoveries into a ToonDecodeError carrying the line number.
#
# Nesting is bounded by max_depth (same counting as the encoder), so hostile
# indentation can only produce a ToonDepthError, never a RecursionError.
# =============================================================================

import json
import logging
from typing import Dict, List, Tuple

from toon_scanner import (
    find_unquoted,
    indent_width,
    parse_fields,
    parse_scalar,
    split_delimited,
    unquote,
)
from toon_values import (
    DEPTH_LIMIT_DEFAULT,
    LIST_MARKER,
    ToonDecodeError,
    ToonDepthError,
)

logger = logging.getLogger(__name__)

ROOT_INDENT = -1


def _next_content(lines: List[str], index: int) -> int:
    """Index of the first non-blank line at or after index."""
    while index < len(lines) and not lines[index].strip():
        index += 1
    return index


def _opens_entry(text: str) -> bool:
    """True for "key: ..." or "key[...", judged outside quotes."""
    return find_unquoted(text, ":") != -1 or find_unquoted(text, "[") > 0

# ---------------------------------------------------------------------------
# DECODER
# ---------------------------------------------------------------------------
class ToonDecoder:
    """
    Reads TOON text back into dicts, lists and scalars.

    strict     raise ToonDecodeError where lenient mode skips or drops input
    max_depth  nested objects/arrays allowed; the root container is depth 1
    """

    def __init__(self, *, strict: bool = False, max_depth: int = DEPTH_LIMIT_DEFAULT):
        self.strict = strict
        self.max_depth = max_depth

    def decode(self, text: str):
        """
        Decode a TOON document.

        A document whose first line opens with '[' is a root array; anything
        else is a root object. Blank input decodes to {}.
        """
        lines = text.split("\n")
        first = _next_content(lines, 0)
        if first == len(lines):
            return {}

        head = lines[first].strip()
        if head.startswith("["):
            value, index = self._parse_array(lines, first, head, 1)
        else:
            value, index = self._parse_object(lines, first, ROOT_INDENT, 1)

        leftover = _next_content(lines, index)
        if leftover < len(lines):
            self._recover("unexpected content after root value", leftover)
        return value

    def decode_to_json(self, text: str) -> str:
        return json.dumps(self.decode(text), ensure_ascii=False, separators=(",", ":"))

    # -----------------------------------------------------------------------
    # OBJECTS
    # -----------------------------------------------------------------------
    def _parse_object(self, lines: List[str], start: int, parent_indent: int, depth: int) -> Tuple[Dict, int]:
        """
        Collect "key: value", "key:" (nested object) and "key[...]" (array)
        entries until the indentation drops out of this object's scope.
        """
        self._check_depth(depth, start)
        obj: Dict = {}
        base = None
        index = start

        while index < len(lines):
            line = lines[index]
            text = line.strip()
            if not text:
                index += 1
                continue

            width = indent_width(line)
            if width <= parent_indent:
                break
            if base is None:
                base = width
            elif width < base:
                break

            colon = find_unquoted(text, ":")
            bracket = find_unquoted(text, "[")
            line_no = index

            if bracket > 0 and (colon == -1 or bracket < colon):
                key = unquote(text[:bracket])
                value, index = self._parse_array(lines, index, text[bracket:], depth + 1)
            elif colon == -1:
                self._recover("expected 'key: value' or 'key[count]'", index)
                index += 1
                continue
            else:
                key = unquote(text[:colon])
                rest = text[colon + 1:].strip()
                if rest:
                    value = parse_scalar(rest)
                    index += 1
                else:
                    value, index = self._parse_object(lines, index + 1, width, depth + 1)

            if self.strict and key in obj:
                raise ToonDecodeError(f"duplicate key {key!r}", line_no + 1)
            obj[key] = value

        return obj, index

    # -----------------------------------------------------------------------
    # ARRAYS
    # -----------------------------------------------------------------------
    def _parse_array(self, lines: List[str], index: int, header: str, depth: int) -> Tuple[List, int]:
        """
        Dispatch on the header fragment starting at '[':

            []              empty
            [n]{k1,k2}:...  tabular rows
            [n]: a,b        inline scalars
            [n]:            expanded, one element per deeper line
        """
        self._check_depth(depth, index)
        close = header.find("]")
        digits = header[1:close] if close > 0 else ""
        if not (digits.isascii() and digits.isdigit()):
            if header != "[]":
                self._recover("array header without a [count]", index)
            return [], index + 1

        count = int(digits)
        base = indent_width(lines[index])
        after = header[close + 1:]

        if after.startswith("{"):
            brace = find_unquoted(after, "}")
            if brace == -1 or after[brace + 1:brace + 2] != ":":
                self._recover("malformed field list in array header", index)
                return [], index + 1
            fields = [unquote(field) for field in split_delimited(after[1:brace])]
            self._check_depth(depth + 1, index)
            return self._parse_rows(lines, index, base, count, fields, after[brace + 2:].strip())

        if after.startswith(":"):
            inline = after[1:].strip()
            if inline:
                values = parse_fields(inline)
                if len(values) != count:
                    self._recover(f"array declares {count} values, found {len(values)}", index)
                return values, index + 1
            return self._parse_items(lines, index, base, count, depth)

        self._recover("expected ':' after array header", index)
        return [], index + 1

    def _parse_rows(self, lines, index, base, count, fields, first_row):
        rows: List[Dict] = []
        if first_row:
            self._add_row(rows, fields, first_row, index)

        cursor = index + 1
        while len(rows) < count and cursor < len(lines):
            line = lines[cursor]
            text = line.strip()
            if not text:
                cursor += 1
                continue
            if indent_width(line) <= base:
                break
            self._add_row(rows, fields, text, cursor)
            cursor += 1

        if len(rows) < count:
            self._recover(f"array declares {count} rows, found {len(rows)}", index)
        return rows, cursor

    def _add_row(self, rows, fields, text, index):
        values = parse_fields(text)
        if len(values) != len(fields):
            self._recover(f"row has {len(values)} fields, header declares {len(fields)}", index)
            return
        rows.append(dict(zip(fields, values)))

    def _parse_items(self, lines, index, base, count, depth):
        items: List = []
        cursor = index + 1
        while len(items) < count and cursor < len(lines):
            line = lines[cursor]
            text = line.strip()
            if not text:
                cursor += 1
                continue
            width = indent_width(line)
            if width <= base:
                break

            if text == LIST_MARKER:
                item, cursor = self._parse_object(lines, cursor + 1, width, depth + 1)
            elif text.startswith("["):
                item, cursor = self._parse_array(lines, cursor, text, depth + 1)
            elif _opens_entry(text):
                # Unmarked object element: owns this line and its same-width siblings
                item, cursor = self._parse_object(lines, cursor, base, depth + 1)
            else:
                item = parse_scalar(text)
                cursor += 1
            items.append(item)

        if len(items) < count:
            self._recover(f"array declares {count} items, found {len(items)}", index)
        return items, cursor

    # -----------------------------------------------------------------------
    # RECOVERY
    # -----------------------------------------------------------------------
    def _recover(self, msg: str, index: int):
        if self.strict:
            raise ToonDecodeError(msg, index + 1)
        logger.debug("%s at line %d - skipped", msg, index + 1)

    def _check_depth(self, depth: int, index: int):
        if depth > self.max_depth:
            raise ToonDepthError(self.max_depth, index + 1)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def decode(text: str, *, strict: bool = False, max_depth: int = DEPTH_LIMIT_DEFAULT):
    """Decode TOON text into a value tree."""
    return ToonDecoder(strict=strict, max_depth=max_depth).decode(text)
