"""
Pytest configuration and shared fixtures for fast_rules tests.
"""

import pytest
from faker import Faker

from fast_rules.core import localization
from fast_rules.core.registry import registry

fake = Faker()


@pytest.fixture(autouse=True)
def clean_registry():
    """Named rules are process-wide; start and end every test with none registered."""
    registry.clear()
    yield
    registry.clear()


@pytest.fixture
def lang_dir(tmp_path):
    """Point the message catalog to a temporary directory and restore it afterwards."""
    previous = localization.get_locale_path()
    path = tmp_path / "lang"
    path.mkdir()
    localization.set_locale_path(str(path))
    yield path
    localization.set_locale_path(previous)
    localization.set_locale("en")


@pytest.fixture
def sample_user():
    """Provide a valid user payload."""
    password = fake.password(length=12, special_chars=True, digits=True, upper_case=True, lower_case=True)
    return {
        "name": fake.name(),
        "email": fake.email(),
        "age": fake.random_int(min=18, max=90),
        "password": password,
        "confirm": password,
    }


# Configure pytest-asyncio
pytest_plugins = ['pytest_asyncio']
