"""Core engine re-exported for convenient access."""

from .chain import NATIVE_TYPE_RULES, SR, RuleChain
from .declarations import FieldDeclaration, build_chain, build_schema
from .executor import ExecutionState, execute_rules, resolve_params, run_rule
from .localization import get_locale, set_locale, set_locale_path
from .messages import DynamicMessage, ErrorMessages, MessageKey, format_message
from .reference import Reference, ref
from .registry import (
    RuleRegistry,
    cast_hint,
    extend,
    infer_cast,
    is_valid_rule,
    override,
    register,
    registry,
    unregister,
)
from .rule import CastType, Rule
from .schema import Schema

__all__ = [
    "CastType",
    "DynamicMessage",
    "ErrorMessages",
    "ExecutionState",
    "FieldDeclaration",
    "MessageKey",
    "NATIVE_TYPE_RULES",
    "Reference",
    "Rule",
    "RuleChain",
    "RuleRegistry",
    "SR",
    "Schema",
    "build_chain",
    "build_schema",
    "cast_hint",
    "execute_rules",
    "extend",
    "format_message",
    "get_locale",
    "infer_cast",
    "is_valid_rule",
    "override",
    "ref",
    "register",
    "registry",
    "resolve_params",
    "run_rule",
    "set_locale",
    "set_locale_path",
    "unregister",
]
