"""Contract classes and abstract interfaces.

Exported so they can be imported directly from :mod:`fast_rules`.
"""

from .validator_rule import ValidatorRule

__all__ = [
    "ValidatorRule",
]
