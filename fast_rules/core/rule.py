from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict


class CastType:
    """Input type a rule expects; consumed by binding layers before validation."""

    NUMBER = 'number'
    BOOLEAN = 'boolean'
    STRING = 'string'
    UNKNOWN = 'unknown'

    ALL = frozenset({NUMBER, BOOLEAN, STRING, UNKNOWN})


class Rule(BaseModel):
    """
    One step of a rule chain.

    `check` is called as `check(value, *params, *args, data)` (plus the
    execution state when `pass_context` is set) and returns a truthy/falsy
    outcome, a `DataTypeError` for nested failures, or a new `ExecutionState`
    for context-aware rules.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    check: Callable[..., Any]
    params: tuple[Any, ...] = ()
    error_message: Any = None
    cast: Optional[str] = None
    pass_context: bool = False
    name: Optional[str] = None

    def with_message(self, message: Any) -> "Rule":
        return self.model_copy(update={"error_message": message})
