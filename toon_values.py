# toon_values.py
# Value model and error hierarchy shared by the TOON encoder and decoder
#
# =============================================================================
#  VALUE MODEL
# =============================================================================
#
# Values are plain Python objects: None, bool, int/float/Decimal, str, any
# Mapping, and list/tuple. kind_of() is the one place that decides which of the
# six kinds a value belongs to. Everything outside those kinds is rejected with
# ToonTypeError instead of being stringified.
#
# bool is a subclass of int, so it is tested before numbers.
# =============================================================================

import enum
import math
from collections.abc import Mapping
from decimal import Decimal

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 128      # Nested objects/arrays allowed before ToonDepthError
INDENT_DEFAULT      = "  "     # One nesting level on encode
TAB_WIDTH           = 2        # Indentation width of a leading tab on decode
INTEGRAL_FLOAT_MAX  = 1e16     # Integral floats below this render without a fraction

LITERALS = ("true", "false", "null")
LIST_MARKER = "-"             # Opens an object element inside an expanded array

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ToonError(ValueError):
    """Base class for every error raised by the codec."""


class ToonTypeError(ToonError, TypeError):
    """A value or object key outside the six supported kinds."""


class ToonDepthError(ToonError):
    """Nesting deeper than the configured max_depth."""

    def __init__(self, max_depth: int, lineno: int = 0):
        self.max_depth = max_depth
        self.lineno = lineno
        where = f" at line {lineno}" if lineno else ""
        super().__init__(f"too deeply nested (max depth {max_depth}){where}")


class ToonDecodeError(ToonError):
    """
    Strict-mode decode failure.

    lineno is 1-based and always points at the line that triggered the error.
    """

    def __init__(self, msg: str, lineno: int):
        self.msg = msg
        self.lineno = lineno
        super().__init__(f"{msg} at line {lineno}")

# ---------------------------------------------------------------------------
# KINDS
# ---------------------------------------------------------------------------
class Kind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


SCALAR_KINDS = frozenset({Kind.NULL, Kind.BOOL, Kind.NUMBER, Kind.STRING})


def kind_of(value) -> Kind:
    """Classify a value, raising ToonTypeError for anything out of model."""
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, (int, float, Decimal)):
        if not _is_finite(value):
            raise ToonTypeError(f"non-finite number {value!r} has no TOON form")
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, Mapping):
        return Kind.OBJECT
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    raise ToonTypeError(f"unsupported type {type(value).__name__} - expected null, bool, number, string, object or array")


def is_scalar(value) -> bool:
    return kind_of(value) in SCALAR_KINDS


def _is_finite(value) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)

# ---------------------------------------------------------------------------
# TEXT FORMS
# ---------------------------------------------------------------------------
def number_text(value) -> str:
    """
    Standard decimal text for a number.

    Integral values drop the fractional part (30.0 -> 30). Other floats use
    repr(), which is the shortest text that reads back to the same float.
    """
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return str(int(value))
        return format(value.normalize(), "f")
    if value.is_integer() and abs(value) < INTEGRAL_FLOAT_MAX:
        return str(int(value))
    return repr(value)


def key_text(key) -> str:
    """Textual form of an object key. Non-string scalars use their literal text."""
    if isinstance(key, str):
        return key
    kind = kind_of(key)
    if kind is Kind.NULL:
        return "null"
    if kind is Kind.BOOL:
        return "true" if key else "false"
    if kind is Kind.NUMBER:
        return number_text(key)
    raise ToonTypeError(f"unsupported key type {type(key).__name__}")
