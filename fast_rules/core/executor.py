"""
Rule execution engine.

Resolves reference-valued parameters against the root data, invokes rule
checks (sync or async) and normalizes their outcomes. State is never shared:
each field validation starts from a fresh `ExecutionState` and every rule
hands back the state the next rule should see.
"""

from __future__ import annotations

import dataclasses
import inspect
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from fast_rules.core.messages import format_message
from fast_rules.core.predicates import is_plain_object
from fast_rules.core.reference import Reference
from fast_rules.core.rule import Rule
from fast_rules.exceptions import DataTypeError
from fast_rules.utils.signature_utils import call_fitted


@dataclass(frozen=True, slots=True)
class ExecutionState:
    """Per-field, per-call view of a validation in progress."""

    name: str
    value: Any
    root: Any
    args: tuple[Any, ...] = ()
    bypass: bool = False
    params: tuple[Any, ...] = ()

    def evolve(self, **changes: Any) -> "ExecutionState":
        return dataclasses.replace(self, **changes)


def resolve_params(param: Any, root: Any) -> Any:
    """
    Replace every Reference inside `param` with the value it points to in `root`.

    Lists, tuples and plain dicts are rebuilt with resolved children; anything
    else passes through untouched. Missing paths resolve to None.
    """
    if isinstance(param, Reference):
        return param.resolve(root)

    if isinstance(param, list):
        return [resolve_params(item, root) for item in param]

    if isinstance(param, tuple):
        return tuple(resolve_params(item, root) for item in param)

    if is_plain_object(param):
        return {key: resolve_params(value, root) for key, value in param.items()}

    return param


async def run_rule(rule: Rule, state: ExecutionState) -> tuple[Any, ExecutionState]:
    """
    Run one rule and return `(outcome, next_state)`.

    Exceptions raised by the check propagate to the caller unchanged.
    """
    if state.bypass:
        return True, state

    params = tuple(resolve_params(rule.params, state.root)) + tuple(state.args)
    state = state.evolve(params=params)

    call_args: list[Any] = [state.value, *params, state.root]
    if rule.pass_context:
        call_args.append(state)

    result = call_fitted(rule.check, *call_args)
    if inspect.isawaitable(result):
        result = await result

    if isinstance(result, ExecutionState):
        return True, result

    return result, state


def _merge(errors: Any, new: Any) -> Any:
    if errors is None:
        return new
    if not isinstance(errors, list):
        errors = [errors]
    if isinstance(new, list):
        errors.extend(new)
    else:
        errors.append(new)
    return errors


async def execute_rules(
    state: ExecutionState,
    rules: Sequence[Rule],
    abort_early: bool = False,
) -> tuple[Optional[Any], ExecutionState]:
    """
    Run `rules` in order and collect their failures.

    Returns `(errors, final_state)` where `errors` is None when every rule
    passed, a list of messages for ordinary failures, or the nested report of a
    composite rule (wrapped as `[own_message, report]` when the rule has its
    own message).
    """
    errors: Any = None

    for rule in rules:
        result, state = await run_rule(rule, state)

        if isinstance(result, DataTypeError):
            message = format_message(rule.error_message, state)
            errors = _merge(errors, [message, result.report] if message else result.report)
            if abort_early:
                break
            continue

        if not result:
            errors = _merge(errors, [format_message(rule.error_message, state)])
            if abort_early:
                break

    return errors, state
