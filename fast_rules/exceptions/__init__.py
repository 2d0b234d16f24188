"""Exceptions raised by fast_rules."""

from .common_exceptions import (
    BadSchemaError,
    DataTypeError,
)


__all__ = [
    "BadSchemaError",
    "DataTypeError",
]
