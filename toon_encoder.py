# toon_encoder.py
# Value tree -> TOON text
#
# =============================================================================
#  ARRAY LAYOUT SELECTION
# =============================================================================
#
# Objects are indentation-nested "key: value" lines. Arrays pick the first
# layout that fits, in this order:
#
#   []                      empty
#   [n]: a,b,c              every element is a scalar
#   [n]{k1,k2}:             every element is an object with the same key set
#     1,x                   and only scalar values; one row per element,
#     2,y                   columns in the first element's key order
#   [n]:                    anything else; one element per deeper line,
#     scalar                object elements open with a "-" marker line
#     -
#       key: value
#
# The output carries no trailing newline. Encoding is deterministic: key order
# is the mapping's iteration order, never sorted.
# =============================================================================

import json
from typing import List

from toon_scanner import needs_quoting, quote
from toon_values import (
    DEPTH_LIMIT_DEFAULT,
    INDENT_DEFAULT,
    LIST_MARKER,
    LITERALS,
    SCALAR_KINDS,
    Kind,
    ToonDepthError,
    ToonTypeError,
    is_scalar,
    key_text,
    kind_of,
    number_text,
)

# ---------------------------------------------------------------------------
# SCALARS AND KEYS
# ---------------------------------------------------------------------------
def encode_scalar(value, kind: Kind = None) -> str:
    """
    Text for a null, bool, number or string.

    Strings equal to true/false/null are NOT quoted here, so they read back
    as literals. Keys get the extra check in encode_key().
    """
    if kind is None:
        kind = kind_of(value)
    if kind is Kind.NULL:
        return "null"
    if kind is Kind.BOOL:
        return "true" if value else "false"
    if kind is Kind.NUMBER:
        return number_text(value)
    if kind is Kind.STRING:
        return quote(value) if needs_quoting(value) else value
    raise ToonTypeError(f"{kind.value} is not a scalar")


def encode_key(key) -> str:
    text = key_text(key)
    if needs_quoting(text) or text in LITERALS:
        return quote(text)
    return text

# ---------------------------------------------------------------------------
# ENCODER
# ---------------------------------------------------------------------------
class ToonEncoder:
    """
    Renders values as TOON text.

    indent is repeated once per nesting level. max_depth bounds how many
    objects/arrays may be nested; the root container is depth 1.
    """

    def __init__(self, indent: str = INDENT_DEFAULT, *, max_depth: int = DEPTH_LIMIT_DEFAULT):
        self.indent = indent
        self.max_depth = max_depth

    def encode(self, value) -> str:
        kind = kind_of(value)
        if kind is Kind.OBJECT:
            return "\n".join(self._object_lines(value, 0, 1))
        if kind is Kind.ARRAY:
            return "\n".join(self._array_lines(value, 0, 1))
        return encode_scalar(value, kind)

    def encode_from_json(self, json_text: str) -> str:
        """Parse JSON text with the json module, then encode the result."""
        return self.encode(json.loads(json_text))

    # -----------------------------------------------------------------------
    # OBJECTS
    # -----------------------------------------------------------------------
    def _object_lines(self, obj, level: int, depth: int) -> List[str]:
        self._check_depth(depth)
        pad = self.indent * level
        lines: List[str] = []
        for key, value in obj.items():
            name = encode_key(key)
            kind = kind_of(value)
            if kind is Kind.OBJECT:
                lines.append(f"{pad}{name}:")
                lines.extend(self._object_lines(value, level + 1, depth + 1))
            elif kind is Kind.ARRAY:
                header, *rows = self._array_lines(value, level, depth + 1)
                lines.append(f"{pad}{name}{header}")
                lines.extend(rows)
            else:
                lines.append(f"{pad}{name}: {encode_scalar(value, kind)}")
        return lines

    # -----------------------------------------------------------------------
    # ARRAYS
    # -----------------------------------------------------------------------
    def _array_lines(self, items, level: int, depth: int) -> List[str]:
        """
        Header first (no indentation, no key), then any child lines already
        indented for level + 1.
        """
        self._check_depth(depth)
        if not items:
            return ["[]"]

        count = len(items)
        kinds = [kind_of(item) for item in items]

        if all(kind in SCALAR_KINDS for kind in kinds):
            values = ",".join(encode_scalar(item, kind) for item, kind in zip(items, kinds))
            return [f"[{count}]: {values}"]

        pad = self.indent * (level + 1)
        fields = _tabular_fields(items, kinds)
        if fields is not None:
            self._check_depth(depth + 1)
            header = ",".join(encode_key(field) for field in fields)
            lines = [f"[{count}]{{{header}}}:"]
            for row in items:
                lines.append(pad + ",".join(encode_scalar(row[field]) for field in fields))
            return lines

        lines = [f"[{count}]:"]
        for item, kind in zip(items, kinds):
            if kind is Kind.OBJECT:
                lines.append(pad + LIST_MARKER)
                lines.extend(self._object_lines(item, level + 2, depth + 1))
            elif kind is Kind.ARRAY:
                header, *rows = self._array_lines(item, level + 1, depth + 1)
                lines.append(pad + header)
                lines.extend(rows)
            else:
                text = encode_scalar(item, kind)
                if text == LIST_MARKER:
                    text = quote(text)
                lines.append(pad + text)
        return lines

    def _check_depth(self, depth: int):
        if depth > self.max_depth:
            raise ToonDepthError(self.max_depth)


def _tabular_fields(items, kinds):
    """
    Column keys when every element is a non-empty object with the first
    element's key set and scalar values only, else None.
    """
    if any(kind is not Kind.OBJECT for kind in kinds):
        return None
    fields = list(items[0].keys())
    if not fields:
        return None
    expected = set(fields)
    for row in items:
        if set(row.keys()) != expected:
            return None
        if not all(is_scalar(value) for value in row.values()):
            return None
    return fields

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def encode(value, *, indent: str = INDENT_DEFAULT, max_depth: int = DEPTH_LIMIT_DEFAULT) -> str:
    """Encode a value tree as TOON text."""
    return ToonEncoder(indent, max_depth=max_depth).encode(value)
