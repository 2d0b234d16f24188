"""
Fluent, immutable rule-chain builder.

`SR` is an empty chain used as the entry point. Every builder call returns a
new `RuleChain`; the receiver is never modified, so a chain can be shared and
extended freely:

    base = SR.string().min(3)
    short = base.max(5)        # base still has two rules
    schema = Schema({"name": base.required(), "nick": short.nullable()})
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from fast_rules.core import predicates
from fast_rules.core.executor import ExecutionState
from fast_rules.core.messages import DynamicMessage, ErrorMessages, MessageKey
from fast_rules.core.reference import Reference, ref as make_ref
from fast_rules.core.rule import CastType, Rule
from fast_rules.exceptions import BadSchemaError
from fast_rules.utils.signature_utils import call_fitted

NATIVE_TYPE_RULES = frozenset({
    'string',
    'number',
    'integer',
    'object',
    'array',
    'email',
})


def _message(key: str, default: str) -> MessageKey:
    return MessageKey(key=f"validation.{key}", default=default)


def _require(value: Any, *_: Any) -> bool:
    return not predicates.is_null(value)


def _nullable(value: Any, *rest: Any) -> ExecutionState:
    state: ExecutionState = rest[-1]
    return state.evolve(bypass=predicates.is_null(value))


def _noop(*_: Any) -> bool:
    return True


def _custom(value: Any, fn: Callable[..., Any], *args: Any) -> Any:
    return call_fitted(fn, value, *args)


async def _transform(value: Any, fn: Callable[..., Any], *rest: Any) -> ExecutionState:
    state: ExecutionState = rest[-1]
    result = call_fitted(fn, value, state.root)
    if inspect.isawaitable(result):
        result = await result
    return state.evolve(value=result)


def _check_number_param(limit: Any) -> None:
    if not isinstance(limit, Reference) and not predicates.is_number(limit):
        raise BadSchemaError(f"A number was expected, but {limit!r} received instead.")


class RuleChain(BaseModel):
    """
    Immutable description of how one value is validated.

    - `rules`: ordinary rules, run in order
    - `required_rule` / `nullable_rule`: gates evaluated before anything else
    - `shape_schema`: nested Schema for object values (excludes `rules`)
    - `item_schema`: Schema applied to every element of an array value
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rules: tuple[Rule, ...] = ()
    required_rule: Optional[Rule] = None
    nullable_rule: Optional[Rule] = None
    shape_schema: Any = None
    item_schema: Any = None

    @model_validator(mode="after")
    def _validate_consistency(self) -> "RuleChain":
        self._check_consistency()
        return self

    def _check_consistency(self) -> None:
        if self.required_rule is not None and self.nullable_rule is not None:
            raise BadSchemaError('A field cannot be nullable and required at the same time.')
        if self.shape_schema is not None and self.rules:
            raise BadSchemaError('Rules cannot be applied to shaped objects.')

    def _derive(self, **update: Any) -> "RuleChain":
        chain = self.model_copy(update=update)
        chain._check_consistency()
        return chain

    def add_rule(self, rule: Rule) -> "RuleChain":
        """Return a copy of this chain with `rule` appended."""
        if self.shape_schema is not None:
            raise BadSchemaError('Rules cannot be applied to shaped objects.')
        return self._derive(rules=self.rules + (rule,))

    def insert_before_last(self, rule: Rule) -> "RuleChain":
        """Return a copy with `rule` placed right before the final rule (appended when empty)."""
        if not self.rules:
            return self.add_rule(rule)
        if self.shape_schema is not None:
            raise BadSchemaError('Rules cannot be applied to shaped objects.')
        return self._derive(rules=self.rules[:-1] + (rule,) + self.rules[-1:])

    @property
    def is_empty(self) -> bool:
        return (
            not self.rules
            and self.required_rule is None
            and self.nullable_rule is None
            and self.shape_schema is None
            and self.item_schema is None
        )

    # --------------- gates ---------------
    def required(self) -> "RuleChain":
        rule = Rule(check=_require, error_message=_message('required', ErrorMessages.REQUIRED), name='required')
        return self._derive(required_rule=rule)

    def nullable(self) -> "RuleChain":
        rule = Rule(check=_nullable, error_message='', pass_context=True, name='nullable')
        return self._derive(nullable_rule=rule)

    # --------------- typed rules ---------------
    def string(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_string, params=params, cast=CastType.STRING,
            error_message=_message('string', ErrorMessages.STRING), name='string',
        ))

    def number(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_number, params=params, cast=CastType.NUMBER,
            error_message=_message('number', ErrorMessages.NUMBER), name='number',
        ))

    def integer(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_integer, params=params, cast=CastType.NUMBER,
            error_message=_message('integer', ErrorMessages.INTEGER), name='integer',
        ))

    def object(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_object, params=params,
            error_message=_message('object', ErrorMessages.OBJECT), name='object',
        ))

    def array(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_array, params=params,
            error_message=_message('array', ErrorMessages.ARRAY), name='array',
        ))

    def email(self, *params: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_email, params=params, cast=CastType.STRING,
            error_message=_message('email', ErrorMessages.EMAIL), name='email',
        ))

    # --------------- value rules ---------------
    def noop(self) -> "RuleChain":
        return self.add_rule(Rule(check=_noop, name='noop'))

    def equal(self, other: Any) -> "RuleChain":
        return self.add_rule(Rule(
            check=predicates.is_equal, params=(other,),
            error_message=_message('equal', ErrorMessages.EQUAL), name='equal',
        ))

    def matches(self, pattern: Any) -> "RuleChain":
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as exc:
                raise BadSchemaError(f"Invalid regular expression {pattern!r}: {exc}") from exc
        if not isinstance(pattern, (re.Pattern, Reference)):
            raise BadSchemaError(f"A regular expression was expected, but {pattern!r} received instead.")
        return self.add_rule(Rule(
            check=predicates.is_valid_by, params=(pattern,),
            error_message=_message('matches', ErrorMessages.MATCHES), name='matches',
        ))

    def min(self, limit: Any) -> "RuleChain":
        _check_number_param(limit)
        return self.add_rule(Rule(
            check=predicates.has_min, params=(limit,),
            error_message=_message('min', ErrorMessages.MIN), name='min',
        ))

    def max(self, limit: Any) -> "RuleChain":
        _check_number_param(limit)
        return self.add_rule(Rule(
            check=predicates.has_max, params=(limit,),
            error_message=_message('max', ErrorMessages.MAX), name='max',
        ))

    def one_of(self, options: Any) -> "RuleChain":
        if not isinstance(options, Reference):
            if not predicates.is_array(options):
                raise BadSchemaError(f"A list was expected, but {options!r} received instead.")
            if predicates.is_empty(options):
                raise BadSchemaError('This rule will always fail. No value can be one of the elements of an empty list.')
        return self.add_rule(Rule(
            check=predicates.is_one_of, params=(options,),
            error_message=_message('one_of', ErrorMessages.ONE_OF), name='one_of',
        ))

    def custom(self, fn: Callable[..., Any], *args: Any) -> "RuleChain":
        """Defer to `fn(value, *args, data)`; exceptions raised by `fn` are not caught."""
        if not callable(fn):
            raise BadSchemaError(f".custom() expects a callable, {fn!r} received instead.")
        return self.add_rule(Rule(
            check=_custom, params=(fn, *args), cast=CastType.UNKNOWN,
            error_message=_message('custom', ErrorMessages.CUSTOM), name='custom',
        ))

    def transform(self, fn: Callable[..., Any]) -> "RuleChain":
        """Replace the value seen by the following rules with `fn(value, data)`."""
        if not callable(fn):
            raise BadSchemaError(f".transform() expects a callable, {fn!r} received instead.")
        return self.add_rule(Rule(
            check=_transform, params=(fn,), cast=CastType.UNKNOWN,
            pass_context=True, name='transform',
        ))

    def error(self, message: Any) -> "RuleChain":
        """Replace the error message of the immediately preceding rule."""
        if not self.rules:
            raise BadSchemaError('.error() must follow a rule')
        if not isinstance(message, DynamicMessage):
            message = DynamicMessage(message)
        return self._derive(rules=self.rules[:-1] + (self.rules[-1].with_message(message),))

    # --------------- structure ---------------
    def shape(self, description: Any) -> "RuleChain":
        from fast_rules.core.schema import Schema

        if self.rules:
            raise BadSchemaError('Rules cannot be applied to shaped objects.')
        schema = description if isinstance(description, Schema) else Schema(description)
        return self._derive(shape_schema=schema)

    def of(self, schema: Any) -> "RuleChain":
        from fast_rules.core.schema import Schema

        if isinstance(schema, RuleChain):
            schema = Schema(schema)
        elif not isinstance(schema, Schema):
            raise BadSchemaError('.of() expects a rule chain or Schema instance')
        return self._derive(item_schema=schema)

    def ref(self, path: str) -> Reference:
        return make_ref(path)

    # --------------- registry ---------------
    def use(self, name: str, *params: Any) -> "RuleChain":
        """Append a built-in or registered rule by name: `SR.use("password")`."""
        from fast_rules.core.registry import registry

        return registry.apply(self, name, *params)

    def __repr__(self) -> str:
        names = [rule.name or rule.check.__name__ for rule in self.rules]
        gates = [g for g, r in (("required", self.required_rule), ("nullable", self.nullable_rule)) if r is not None]
        return f"RuleChain(gates={gates}, rules={names}, shape={self.shape_schema is not None}, of={self.item_schema is not None})"


SR = RuleChain()

# Builder methods backing the built-in type names
NATIVE_BUILDERS: Mapping[str, Callable[..., RuleChain]] = {
    name: getattr(RuleChain, name) for name in NATIVE_TYPE_RULES
}
