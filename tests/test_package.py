"""
Basic package tests to ensure fast_rules can be imported and exposes its public API.
"""

import pytest

import fast_rules


def test_package_version():
    """Test that package version is accessible."""
    assert hasattr(fast_rules, '__version__')
    assert fast_rules.__version__ == "0.1.0"


def test_package_metadata():
    assert fast_rules.__license__ == "MIT"


def test_public_api():
    for name in ("SR", "Schema", "RuleChain", "DataTypeError", "BadSchemaError", "ValidatorRule", "register"):
        assert hasattr(fast_rules, name), name


def test_schema_error_is_not_a_validation_error():
    assert issubclass(fast_rules.DataTypeError, ValueError)
    assert not issubclass(fast_rules.BadSchemaError, ValueError)


@pytest.mark.asyncio
async def test_async_functionality():
    """Smoke test of the documented usage."""
    schema = fast_rules.Schema({"name": fast_rules.SR.required().string().min(3)})
    assert await schema.is_valid({"name": "Ada"})
    assert not await schema.is_valid({"name": "Al"})
