"""Value resolution, literal parsing and conversions.

Resolved values form a small closed set of types:

    str         string (``Bareword`` for unquoted literals)
    int, float  number
    bool        boolean
    None        null
    UNDEFINED   missing value, distinct from null

Everything here is total: no input makes these functions raise.
"""

import json
import math
import re
from collections.abc import Mapping
from typing import Any

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class _Undefined:
    """Sentinel for a value that does not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Any = _Undefined()

_KEYWORDS = {"true": True, "false": False, "null": None, "undefined": UNDEFINED}


class Bareword(str):
    """An unquoted literal that is neither a number nor a keyword.

    Compares exactly like a string; the type only records that the
    template author did not quote it.
    """

    def __repr__(self) -> str:
        return f"Bareword({str.__repr__(self)})"


def resolve_path(path: str, data: Any) -> Any:
    """Get a nested value from the data context using dot notation.

    Strings, lists and tuples answer ``length`` and numeric indexes.

    Examples:
        resolve_path("a.b", {"a": {"b": 1}}) -> 1
        resolve_path("items.0", {"items": ["x"]}) -> "x"
        resolve_path("name.length", {"name": "Ann"}) -> 3
        resolve_path("a.b.c", {"a": None}) -> UNDEFINED
    """
    current = data
    for key in path.split("."):
        if current is None or current is UNDEFINED:
            return UNDEFINED
        if isinstance(current, Mapping):
            current = current.get(key, UNDEFINED)
        elif isinstance(current, (str, list, tuple)):
            if key == "length":
                current = len(current)
            elif key.isdecimal():
                index = int(key)
                current = current[index] if index < len(current) else UNDEFINED
            else:
                return UNDEFINED
        else:
            return UNDEFINED
    return current


def parse_literal(text: str) -> Any:
    """Parse the right-hand side of a comparison into a typed value."""
    value = text.strip()

    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]

    if _NUMBER_RE.fullmatch(value):
        number = float(value)
        if math.isfinite(number):
            if "." in value or "e" in value.lower():
                return number
            return int(value)

    if value in _KEYWORDS:
        return _KEYWORDS[value]

    return Bareword(value)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Truthiness as the template language sees it.

    Only the empty string, zero, NaN, false, null and undefined are
    falsy. Empty mappings and lists count as present, hence truthy.
    """
    if value is None or value is UNDEFINED or value is False:
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def to_number(value: Any) -> float:
    """Numeric coercion used by loose equality and ordering."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if value is None:
        return 0.0
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0.0
        if _NUMBER_RE.fullmatch(stripped):
            return float(stripped)
        return math.nan
    return math.nan


def to_text(value: Any) -> str:
    """String form of a resolved value for substitution into output."""
    if value is UNDEFINED:
        return ""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)
