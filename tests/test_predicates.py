import math
import re

import pytest

from fast_rules import SR, BadSchemaError, Schema
from fast_rules.core import predicates as p


def test_type_predicates():
    assert p.is_string("abc") and not p.is_string(1)
    assert p.is_number(0) and p.is_number(1.5) and not p.is_number("1")
    assert not p.is_number(True)
    assert not p.is_number(math.nan)
    assert p.is_integer(5) and p.is_integer(5.0)
    assert not p.is_integer(5.5) and not p.is_integer(math.inf)
    assert p.is_object({}) and not p.is_object([]) and not p.is_object(None)
    assert p.is_array([]) and p.is_array((1,)) and not p.is_array("abc")


def test_null_and_empty():
    assert p.is_null(None) and p.is_null("")
    assert not p.is_null(0) and not p.is_null(False) and not p.is_null([])
    assert p.is_empty([]) and p.is_empty({}) and p.is_empty("")
    assert not p.is_empty([0])


def test_equality_keeps_booleans_apart():
    assert p.is_equal(1, 1.0)
    assert p.is_equal("a", "a")
    assert not p.is_equal(True, 1)
    assert not p.is_equal(0, False)
    assert p.is_equal(False, False)


def test_email():
    assert p.is_email("someone@example.com")
    assert not p.is_email("someone@example")
    assert not p.is_email(123)


def test_pattern_requires_compiled_regex():
    assert p.is_valid_by("123", re.compile(r"^\d+$"))
    assert not p.is_valid_by(123, re.compile(r"^\d+$"))
    with pytest.raises(BadSchemaError):
        p.is_valid_by("123", r"^\d+$")


def test_limits_use_length_for_strings():
    assert p.has_min("abcde", 5) and not p.has_min("abc", 5)
    assert p.has_max("abc", 3) and not p.has_max("abcd", 3)
    assert p.has_min(10, 10) and not p.has_max(11, 10)
    assert not p.has_min([1, 2, 3], 1)


def test_non_numeric_limit_is_a_schema_error():
    with pytest.raises(BadSchemaError):
        p.has_min(3, None)
    with pytest.raises(BadSchemaError):
        p.has_max(3, "10")


def test_one_of():
    assert p.is_one_of("admin", ["admin", "user"])
    assert not p.is_one_of("guest", ("admin", "user"))
    assert not p.is_one_of(1, [True])
    with pytest.raises(BadSchemaError):
        p.is_one_of("x", [])
    with pytest.raises(BadSchemaError):
        p.is_one_of("x", "xyz")


class _BrokenEquality:
    def __eq__(self, other):
        raise RuntimeError("cannot compare")

    __hash__ = object.__hash__


def test_is_equal_propagates_comparison_errors():
    with pytest.raises(RuntimeError, match="cannot compare"):
        p.is_equal(_BrokenEquality(), 1)


@pytest.mark.asyncio
async def test_comparison_errors_escape_validate():
    schema = Schema({"a": SR.equal(1)})
    with pytest.raises(RuntimeError, match="cannot compare"):
        await schema.validate({"a": _BrokenEquality()})
