"""
Named rule registry.

Consumers name reusable rules once and apply them on any chain:

    register("password", SR.string().min(8).matches(r"[A-Z]"), "{name} is not a valid password.")
    register("between", lambda value, low, high: low <= value <= high, "{name} must be between {0} and {1}")

    Schema({"secret": SR.required().use("password"), "age": SR.use("between", 18, 99)})

A registered rule runs its chain as a nested raw-chain Schema against the
field value. When it fails, the registered message (if any) is reported first,
followed by the inner report.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.core.chain import NATIVE_BUILDERS, NATIVE_TYPE_RULES, SR, RuleChain
from fast_rules.core.messages import DynamicMessage
from fast_rules.core.rule import CastType, Rule
from fast_rules.core.schema import Schema
from fast_rules.exceptions import BadSchemaError, DataTypeError


def infer_cast(chain: RuleChain) -> Optional[str]:
    """
    Cast hint of a chain: the cast of its first typed rule.

    Returns CastType.UNKNOWN when that rule is free-form (custom, transform)
    and None when no rule declares an input type.
    """
    if not isinstance(chain, RuleChain):
        return None
    for rule in chain.rules:
        if rule.cast:
            return rule.cast
    return None


def _composite_check(schema: Schema) -> Callable[..., Any]:
    async def check(value: Any, *rest: Any) -> Any:
        *params, _, state = rest
        try:
            await schema.validate(value, False, tuple(params), state.root)
        except DataTypeError as exc:
            return exc
        return True

    return check


def _class_rule_adapter(rule: ValidatorRule) -> Callable[..., Any]:
    async def check(value: Any, *rest: Any) -> Any:
        *params, data = rest
        result = rule.validate(value, *params, data=data)
        if inspect.isawaitable(result):
            result = await result
        return result

    return check


class RegisteredRule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    chain: RuleChain
    nested_schema: Any
    error_message: Any = None
    cast: Optional[str] = None

    def to_rule(self, params: tuple[Any, ...]) -> Rule:
        return Rule(
            check=_composite_check(self.nested_schema),
            params=params,
            error_message=self.error_message,
            cast=self.cast,
            pass_context=True,
            name=self.name,
        )


class RuleRegistry:
    """Mapping from rule name to its registered chain and cast hint."""

    def __init__(self) -> None:
        self._rules: dict[str, RegisteredRule] = {}

    # --------------- registration ---------------
    def register(
        self,
        name: str,
        rule: Any,
        error_message: Any = None,
        *,
        cast: Optional[str] = None,
    ) -> None:
        if name in NATIVE_TYPE_RULES:
            raise BadSchemaError(
                "You should not override a native rule. If you want to do this, use override().",
                rule=name,
            )
        self.override(name, rule, error_message, cast=cast)

    def override(
        self,
        name: str,
        rule: Any,
        error_message: Any = None,
        *,
        cast: Optional[str] = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            raise BadSchemaError(f"Rule names must be non-empty strings, {name!r} received.")
        if isinstance(rule, ValidatorRule):
            error_message = error_message if error_message is not None else rule.message
            cast = cast or rule.cast
            rule = SR.custom(_class_rule_adapter(rule))
        elif not isinstance(rule, RuleChain) and callable(rule):
            rule = SR.custom(rule)

        if cast is not None and cast not in CastType.ALL:
            raise BadSchemaError(f"Unknown cast type {cast!r}. Expected one of {sorted(CastType.ALL)}.", rule=name)

        if not isinstance(rule, RuleChain):
            raise BadSchemaError(
                f"register() expects a rule chain, a ValidatorRule or a callable. Received {type(rule).__name__} {rule!r}",
                rule=name,
            )

        if callable(error_message) and not isinstance(error_message, DynamicMessage):
            error_message = DynamicMessage(error_message)

        self._rules[name] = RegisteredRule(
            name=name,
            chain=rule,
            nested_schema=Schema(rule),
            error_message=error_message,
            cast=cast or infer_cast(rule),
        )
        logging.debug(f"[REGISTRY] Registered rule `{name}` (cast: {self._rules[name].cast})")

    def extend(self, rules: Mapping[str, Any], *, error_message: Any = None, cast: Optional[str] = None) -> None:
        """Register several chains at once; nothing is registered if any entry is invalid."""
        if not isinstance(rules, Mapping):
            raise BadSchemaError('extend() expects a mapping of rule name to rule chain.')

        for name, rule in rules.items():
            if name in NATIVE_TYPE_RULES:
                raise BadSchemaError(
                    "You should not override a native rule. If you want to do this, use override().",
                    rule=name,
                )
            if not isinstance(rule, RuleChain):
                raise BadSchemaError('The values passed to extend() must be rule chains, like SR.string().required().', rule=name)

        for name, rule in rules.items():
            self.override(name, rule, error_message, cast=cast)

    def unregister(self, name: str) -> None:
        self._rules.pop(name, None)

    def clear(self) -> None:
        self._rules.clear()

    # --------------- lookup ---------------
    def is_valid_rule(self, name: str) -> bool:
        return name in NATIVE_TYPE_RULES or name in self._rules

    def get(self, name: str) -> Optional[RegisteredRule]:
        return self._rules.get(name)

    def registered_names(self) -> tuple[str, ...]:
        return tuple(self._rules.keys())

    def cast_hint(self, name: str) -> Optional[str]:
        """Expected input type of a built-in or registered rule (None when unknown name)."""
        if name in self._rules:
            return self._rules[name].cast
        if name in NATIVE_BUILDERS:
            return infer_cast(NATIVE_BUILDERS[name](SR))
        return None

    def apply(self, chain: RuleChain, name: str, *params: Any) -> RuleChain:
        entry = self._rules.get(name)
        if entry is not None:
            return chain.add_rule(entry.to_rule(params))
        if name in NATIVE_BUILDERS:
            return NATIVE_BUILDERS[name](chain, *params)
        raise BadSchemaError(f"Unknown rule: {name}", rule=name)


# Public singleton registry
registry = RuleRegistry()

register = registry.register
override = registry.override
extend = registry.extend
unregister = registry.unregister
is_valid_rule = registry.is_valid_rule
cast_hint = registry.cast_hint


__all__ = [
    "RegisteredRule",
    "RuleRegistry",
    "cast_hint",
    "extend",
    "infer_cast",
    "is_valid_rule",
    "override",
    "register",
    "registry",
    "unregister",
]
