"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator

import pytest
from hypothesis import settings

from exact_bps import config

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")


@pytest.fixture(autouse=True)
def restore_base_unit() -> Iterator[None]:
    """Run every test with the default base unit and undo any change it makes."""
    previous = config.set_base_unit(config.DEFAULT_BASE_UNIT)
    yield
    config.set_base_unit(previous)
