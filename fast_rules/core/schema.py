"""
Schema validator.

Drives every field of a schema through its chain:

    required/nullable gates -> nested shape -> array items -> ordinary rules

and aggregates a report that mirrors the shape of the data. Nested schemas
(shapes, array items, registered rules) always receive the root data of the
outermost call so references resolve the same way at any depth.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from fast_rules import config
from fast_rules.core.chain import RuleChain
from fast_rules.core.executor import ExecutionState, execute_rules
from fast_rules.core.messages import ErrorMessages, MessageKey, format_message
from fast_rules.core.predicates import is_array, is_object
from fast_rules.exceptions import BadSchemaError, DataTypeError

RAW_CHAIN_KEY = "value"

_OBJECT_MESSAGE = MessageKey(key="validation.object", default=ErrorMessages.OBJECT)
_ARRAY_MESSAGE = MessageKey(key="validation.array", default=ErrorMessages.ARRAY)


class Schema:
    """
    Validates a mapping of field name -> RuleChain, or a single raw chain.

        schema = Schema({"min": SR.number(), "max": SR.number().min(SR.ref("min"))})
        await schema.validate({"min": 10, "max": 5})   # raises DataTypeError

    A raw chain validates a bare value as if it were `{"value": <value>}`,
    which lets it reference itself through `SR.ref("value")`.

    Schemas hold no per-call state and can be validated concurrently.
    """

    __slots__ = ("_fields", "_is_raw_chain")

    def __init__(self, description: Any):
        if isinstance(description, RuleChain):
            fields = {RAW_CHAIN_KEY: description}
            is_raw_chain = True
        elif isinstance(description, Mapping):
            fields = dict(description)
            is_raw_chain = False
            for key, chain in fields.items():
                if not isinstance(chain, RuleChain):
                    raise BadSchemaError(
                        f"Schema field `{key}` expects a rule chain, {type(chain).__name__} received instead."
                    )
        else:
            raise BadSchemaError('Invalid schema description on Schema constructor.')

        for chain in fields.values():
            if chain.required_rule is not None and chain.nullable_rule is not None:
                raise BadSchemaError('A field cannot be nullable and required at the same time.')

        self._fields: dict[str, RuleChain] = fields
        self._is_raw_chain = is_raw_chain

    @property
    def is_raw_chain(self) -> bool:
        return self._is_raw_chain

    @property
    def fields(self) -> dict[str, RuleChain]:
        return dict(self._fields)

    def __repr__(self) -> str:
        return f"Schema(fields={list(self._fields)}, raw={self._is_raw_chain})"

    # --------------- public API ---------------
    async def validate(
        self,
        data: Any = None,
        abort_early: Optional[bool] = None,
        args: tuple[Any, ...] = (),
        root: Any = None,
    ) -> None:
        """
        Validate `data`; return None on success.

        Args:
            data: The value to check (a mapping, or any value for raw chains).
            abort_early: Stop each field at its first failing rule.
            args: Extra params appended to every rule's params (used by registered rules).
            root: Data that references resolve against; defaults to `data`.

        Raises:
            DataTypeError: With the aggregated report when any field fails.
            BadSchemaError: When a rule parameter turns out to be unusable.
        """
        if abort_early is None:
            abort_early = config.VALIDATION_ABORT_EARLY

        if self._is_raw_chain:
            data = {RAW_CHAIN_KEY: data}

        root = root if root is not None else data
        args = tuple(args or ())

        report: dict[str, Any] = {}
        for key, chain in self._fields.items():
            state = ExecutionState(
                name=key,
                value=data.get(key) if isinstance(data, Mapping) else None,
                root=root,
                args=args,
            )

            field_errors = await self._validate_field(chain, state, abort_early)
            if field_errors is not None:
                logging.debug(f"[SCHEMA] Field `{key}` failed validation")
                report[key] = field_errors

        if report:
            logging.debug(f"[SCHEMA] Validation failed: {list(report)}")
            raise DataTypeError(
                'Data validation failed.',
                report[RAW_CHAIN_KEY] if self._is_raw_chain else report,
            )

    async def is_valid(self, data: Any = None, abort_early: Optional[bool] = None) -> bool:
        try:
            await self.validate(data, abort_early)
        except DataTypeError:
            return False
        return True

    # --------------- per-field state machine ---------------
    async def _validate_field(self, chain: RuleChain, state: ExecutionState, abort_early: bool) -> Any:
        errors, state = await self._validate_pre_chain(chain, state, abort_early)
        if errors is not None:
            return errors

        if state.bypass:
            return None

        errors = await self._validate_shape(chain, state, abort_early)
        if errors is not None:
            return errors

        errors = await self._validate_items(chain, state, abort_early)
        if errors is not None:
            return errors

        if not chain.rules:
            return None

        errors, _ = await execute_rules(state, chain.rules, abort_early)
        return errors

    async def _validate_pre_chain(
        self, chain: RuleChain, state: ExecutionState, abort_early: bool
    ) -> tuple[Any, ExecutionState]:
        gates = [rule for rule in (chain.required_rule, chain.nullable_rule) if rule is not None]
        if not gates:
            return None, state
        return await execute_rules(state, gates, abort_early)

    async def _validate_shape(self, chain: RuleChain, state: ExecutionState, abort_early: bool) -> Any:
        if chain.shape_schema is None:
            return None

        if not is_object(state.value):
            return [format_message(_OBJECT_MESSAGE, state)]

        try:
            await chain.shape_schema.validate(state.value, abort_early, (), state.root)
        except DataTypeError as exc:
            return exc.report

        return None

    async def _validate_items(self, chain: RuleChain, state: ExecutionState, abort_early: bool) -> Any:
        if chain.item_schema is None:
            return None

        if not is_array(state.value):
            return [format_message(_ARRAY_MESSAGE, state)]

        item_errors: list[Any] = []
        for item in state.value:
            try:
                await chain.item_schema.validate(item, abort_early, (), state.root)
                item_errors.append(None)
            except DataTypeError as exc:
                item_errors.append(exc.report)
                if abort_early:
                    break

        return item_errors if any(error is not None for error in item_errors) else None
