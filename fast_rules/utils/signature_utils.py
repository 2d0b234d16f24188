from __future__ import annotations

import inspect
from typing import Any, Callable, Sequence

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def fit_arguments(fn: Callable[..., Any], args: Sequence[Any]) -> tuple[Any, ...]:
    """
    Trim `args` to the leading positional arguments `fn` can accept.

    - Callables declaring `*args` receive everything.
    - Plain Python functions and methods receive one argument per positional
      parameter, defaults included.
    - Other callables (builtins, partials, callable objects) receive only their
      required positional parameters, at least one.
    - Callables without an introspectable signature (`int`, `float`) receive
      only the first argument.
    """
    args = tuple(args)
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return args[:1]

    params = list(sig.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return args

    positional = [p for p in params if p.kind in _POSITIONAL_KINDS]
    if not (inspect.isfunction(fn) or inspect.ismethod(fn)):
        positional = [p for p in positional if p.default is inspect.Parameter.empty] or positional[:1]

    return args[: len(positional)]


def call_fitted(fn: Callable[..., Any], *args: Any) -> Any:
    """Call `fn` with as many leading positional `args` as it accepts."""
    return fn(*fit_arguments(fn, args))
