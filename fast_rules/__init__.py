"""
fast_rules - chainable, async-aware schema validation

Build immutable rule chains, compose them into schemas and validate any value:

    from fast_rules import SR, Schema, DataTypeError

    schema = Schema({
        "name": SR.required().string().min(3),
        "age": SR.nullable().integer().min(18),
        "password": SR.string().min(8),
        "confirm": SR.string().equal(SR.ref("password")),
    })

    try:
        await schema.validate(payload)
    except DataTypeError as exc:
        exc.report    # {"confirm": ["This value does not match the expected value."]}

Includes:
- Rule chain builder (required, nullable, types, min/max, matches, one_of, custom, transform, shape, of)
- Cross-field references resolved at validation time
- Named rule registry with cast hints for binding layers
- Localizable error messages
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
