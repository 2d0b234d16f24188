from __future__ import annotations

import re
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict

from fast_rules.core.localization import __
from fast_rules.exceptions import BadSchemaError
from fast_rules.utils.signature_utils import call_fitted

_TOKEN_RE = re.compile(r"\{([^}]+)\}")


class ErrorMessages:
    """English defaults of the built-in rule messages."""

    STRING = 'This value must be a string.'
    NUMBER = 'This value must be a number.'
    INTEGER = 'This value must be an integer.'
    OBJECT = 'This value must be an object.'
    ARRAY = 'This value must be an array.'
    EMAIL = 'This value must be a valid email address.'

    REQUIRED = 'This value is required.'

    MIN = 'This value is below the allowed minimum.'
    MAX = 'This value exceeds the allowed maximum.'

    EQUAL = 'This value does not match the expected value.'
    ONE_OF = 'This value is not one of the allowed values.'

    MATCHES = 'This value does not match the required pattern.'

    CUSTOM = 'This value is invalid.'


class MessageKey(BaseModel):
    """Catalog key of a built-in message plus its English default."""

    model_config = ConfigDict(frozen=True)

    key: str
    default: str

    def translate(self) -> str:
        return __(self.key, default=self.default)


class DynamicMessage:
    """
    Explicit wrapper for error messages set through `.error()`.

    Wraps either a template string or a callable receiving the execution state
    and the resolved rule params:

        SR.string().min(8).error(lambda ctx, params: f"{ctx.name} needs {params[0]} chars")
    """

    __slots__ = ("fn",)

    def __init__(self, fn: Union[str, Callable[..., Any]]):
        if not isinstance(fn, str) and not callable(fn):
            raise BadSchemaError("Dynamic error messages expect a string or a callable.")
        self.fn = fn

    def compute(self, ctx: Any, params: tuple[Any, ...]) -> Any:
        if isinstance(self.fn, str):
            return self.fn
        return call_fitted(self.fn, ctx, list(params))

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"DynamicMessage({self.fn!r})"


MessageTemplate = Union[str, MessageKey, DynamicMessage, None]


def _stringify(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def format_message(template: MessageTemplate, ctx: Any) -> str:
    """
    Render a rule's error template for the given execution state.

    Tokens:
      - {name}   field name
      - {value}  current (possibly transformed) value
      - {0}, {1} resolved rule params by position

    Unknown tokens render as an empty string. Exceptions raised by a dynamic
    message callable propagate.
    """
    params = tuple(getattr(ctx, "params", ()) or ())

    if isinstance(template, DynamicMessage):
        template = template.compute(ctx, params)

    if isinstance(template, MessageKey):
        template = template.translate()

    if not isinstance(template, str):
        return ''

    def replace(match: re.Match) -> str:
        token = match.group(1)
        if token == 'value':
            return _stringify(getattr(ctx, "value", None))
        if token == 'name':
            return _stringify(getattr(ctx, "name", None))
        if token.isdigit():
            idx = int(token)
            return _stringify(params[idx]) if idx < len(params) else ''
        return ''

    return _TOKEN_RE.sub(replace, template)
