"""
Build chains from declarative field descriptions.

Binding layers (HTML forms, query strings, config files) describe fields with a
type name plus `required`/`nullable` flags and an optional reference to another
field. These helpers turn such declarations into chains in a fixed order:

    required -> nullable -> typed rule (with the reference as its argument)
             -> equal(reference) when no type is declared -> noop()
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from fast_rules.core.chain import SR, RuleChain
from fast_rules.core.registry import registry
from fast_rules.core.schema import Schema
from fast_rules.exceptions import BadSchemaError


class FieldDeclaration(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    data_type: Optional[str] = None
    required: bool = False
    nullable: bool = False
    ref: Optional[str] = None


def build_chain(
    data_type: Optional[str] = None,
    *,
    required: bool = False,
    nullable: bool = False,
    ref: Optional[str] = None,
) -> RuleChain:
    chain = SR

    if required:
        chain = chain.required()

    if nullable:
        chain = chain.nullable()

    if data_type:
        if not registry.is_valid_rule(data_type):
            raise BadSchemaError(f"Unknown data-type: {data_type}", rule=data_type)
        params: tuple[Any, ...] = (SR.ref(ref),) if ref else ()
        chain = chain.use(data_type, *params)
    elif ref:
        chain = chain.equal(SR.ref(ref))

    if chain is SR:
        chain = chain.noop()

    return chain


def build_schema(
    declarations: Union[Iterable[FieldDeclaration], Iterable[Mapping[str, Any]]],
) -> Schema:
    """Build a Schema keyed by declaration name; later duplicates replace earlier ones."""
    description: dict[str, RuleChain] = {}

    for declaration in declarations:
        if not isinstance(declaration, FieldDeclaration):
            declaration = FieldDeclaration.model_validate(declaration)
        description[declaration.name] = build_chain(
            declaration.data_type,
            required=declaration.required,
            nullable=declaration.nullable,
            ref=declaration.ref,
        )

    return Schema(description)
