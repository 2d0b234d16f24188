from __future__ import annotations

from typing import Any, Optional


class DataTypeError(ValueError):
    """
    Raised by `Schema.validate` when the data violates at least one rule.

    The exception carries the full, shape-preserving report so callers can map
    messages back to fields:

        {"name": ["This value is required."], "address": {"zip": [...]}}

    For raw-chain schemas the report is the bare message list of the value.
    """

    def __init__(self, message: str = "Data validation failed.", report: Any = None):
        super().__init__(message)
        self.message = message
        self.report = report

    def errors(self) -> list[dict[str, Any]]:
        """Flatten the report into pydantic-like `loc`/`msg`/`type` records."""
        from fast_rules.utils.report_utils import flatten_report

        return flatten_report(self.report)


class BadSchemaError(Exception):
    """
    Raised while building chains or schemas that can never be evaluated.

    Deliberately not a ValueError: it signals a programming mistake (conflicting
    gates, unknown rule names, malformed rule arguments) and must never be
    mistaken for a data failure.
    """

    def __init__(self, message: str, *, rule: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.rule = rule
