"""Condition evaluator for conditional blocks.

Supports:
    - Negation prefix: !flag
    - Comparison: ===, !==, ==, !=, >=, <=, >, <
    - Field access: user.profile.age
    - Literals: strings, numbers, true, false, null, undefined, bare words

A condition holds at most one comparison. The operator is the first entry
of OPERATORS that occurs anywhere in the condition text, so an operand
containing an operator token can win over the real one: ``label > "a==b"``
is split at ``==``, not at ``>``. The right operand is the text between
the first and second occurrence of that operator; anything after a second
occurrence is ignored.
"""

import logging
import math
from typing import Any

from .values import UNDEFINED, is_number, is_truthy, parse_literal, resolve_path, to_number

logger = logging.getLogger(__name__)

# Longer operators first so "===" is never read as "==".
OPERATORS = ("===", "!==", "==", "!=", ">=", "<=", ">", "<")


def _family(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    return "object"


def strict_equal(left: Any, right: Any) -> bool:
    """Equal type family and equal value."""
    family = _family(left)
    if family != _family(right):
        return False
    if family == "object":
        return left is right
    return left == right


def loose_equal(left: Any, right: Any) -> bool:
    """Equality with coercion between numbers, strings and booleans."""
    left_family, right_family = _family(left), _family(right)
    if left_family == right_family:
        return strict_equal(left, right)

    missing = {"null", "undefined"}
    if left_family in missing or right_family in missing:
        return left_family in missing and right_family in missing

    if "object" in (left_family, right_family):
        return False

    # Remaining mixes of number, string and boolean meet as numbers.
    return to_number(left) == to_number(right)


def _order(left: Any, right: Any) -> tuple[Any, Any] | None:
    """Operands ready for ordering, or None when they are incomparable."""
    if isinstance(left, str) and isinstance(right, str):
        return str(left), str(right)
    left_num, right_num = to_number(left), to_number(right)
    if math.isnan(left_num) or math.isnan(right_num):
        return None
    return left_num, right_num


def compare(left: Any, op: str, right: Any) -> bool:
    """Apply a comparison operator to two resolved values."""
    match op:
        case "===": return strict_equal(left, right)
        case "!==": return not strict_equal(left, right)
        case "==": return loose_equal(left, right)
        case "!=": return not loose_equal(left, right)

    operands = _order(left, right)
    if operands is None:
        return False
    a, b = operands
    match op:
        case ">=": return a >= b
        case "<=": return a <= b
        case ">": return a > b
        case "<": return a < b
    return False


def find_operator(condition: str) -> str | None:
    """Return the first operator of OPERATORS present in the condition."""
    for op in OPERATORS:
        if op in condition:
            return op
    return None


def evaluate(condition: str | None, data: Any) -> bool:
    """Evaluate a condition expression against a data context.

    Args:
        condition: Condition text (e.g., "user.age >= 18")
        data: Data context for field access

    Returns:
        Boolean result. Missing paths resolve to undefined, so conditions
        over absent data are false rather than errors.
    """
    if not condition:
        return False

    condition = condition.strip()
    if condition.startswith("!"):
        return not evaluate(condition[1:], data)

    op = find_operator(condition)
    if op is None:
        return is_truthy(resolve_path(condition, data))

    parts = condition.split(op)
    left_text, right_text = parts[0], parts[1]
    left = resolve_path(left_text.strip(), data)
    right = parse_literal(right_text)
    result = compare(left, op, right)
    logger.debug("Condition %r: %r %s %r -> %s", condition, left, op, right, result)
    return result
