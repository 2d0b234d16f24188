"""
Pure predicates used by the built-in rules.

None of these functions know about chains, schemas or execution state, so
they can be tested (and reused) in isolation. Predicates raise BadSchemaError
only when the rule *parameter* is unusable, never because of the value.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from fast_rules.exceptions import BadSchemaError

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_plain_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_equal(value1: Any, value2: Any) -> bool:
    # True == 1 in Python; booleans only equal booleans here
    if isinstance(value1, bool) or isinstance(value2, bool):
        return isinstance(value1, bool) and isinstance(value2, bool) and value1 is value2
    return bool(value1 == value2)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return math.floor(value) == value


def is_null(value: Any) -> bool:
    return value is None or value == ""


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_empty(value: Any) -> bool:
    if is_null(value):
        return True
    if isinstance(value, (list, tuple, Mapping)):
        return not len(value)
    return False


def is_email(value: Any) -> bool:
    if not is_string(value):
        return False
    return EMAIL_RE.fullmatch(value) is not None


def is_valid_by(value: Any, pattern: Any) -> bool:
    if not isinstance(pattern, re.Pattern):
        raise BadSchemaError(f"A regular expression was expected, but {pattern!r} received instead.")
    if not is_string(value):
        return False
    return pattern.search(value) is not None


def is_greater_than_or_equal(value: Any, limit: Any) -> bool:
    if not is_number(limit):
        raise BadSchemaError(f"A number was expected, but {limit!r} received instead.")
    if not is_number(value):
        return False
    return value >= limit


def is_lower_than_or_equal(value: Any, limit: Any) -> bool:
    if not is_number(limit):
        raise BadSchemaError(f"A number was expected, but {limit!r} received instead.")
    if not is_number(value):
        return False
    return value <= limit


def is_one_of(value: Any, options: Any) -> bool:
    if not is_array(options):
        raise BadSchemaError(f"A list was expected, but {options!r} received instead.")
    if is_empty(options):
        raise BadSchemaError(f"This rule will always fail. {value!r} cannot be one of the elements of an empty list.")
    return any(is_equal(value, option) for option in options)


def has_min(value: Any, limit: Any) -> bool:
    """Length for strings, magnitude for everything else."""
    if is_string(value):
        return is_greater_than_or_equal(len(value), limit)
    return is_greater_than_or_equal(value, limit)


def has_max(value: Any, limit: Any) -> bool:
    if is_string(value):
        return is_lower_than_or_equal(len(value), limit)
    return is_lower_than_or_equal(value, limit)
