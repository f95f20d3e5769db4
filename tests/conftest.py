"""Root conftest — shared test configuration and global registry isolation."""

import os

import pytest

from envex.config import get_settings
from envex.core.functions import GLOBAL_FUNCTIONS
from envex.core.known_values import GLOBAL_KNOWN_VALUES
from envex.core.parameters import GLOBAL_PARAMETERS

# Ensure tests never pick up registry extensions from the developer's shell
os.environ.pop("ENVEX_EXTRA_FUNCTIONS", None)
os.environ.pop("ENVEX_EXTRA_PARAMETERS", None)
os.environ.setdefault("ENVEX_LOG_FORMAT", "json")


@pytest.fixture(autouse=True)
def isolated_registries():
    """Restore the process-wide registries after each test."""
    saved = [
        (registry, list(registry))
        for registry in (GLOBAL_FUNCTIONS, GLOBAL_PARAMETERS, GLOBAL_KNOWN_VALUES)
    ]
    get_settings.cache_clear()
    yield
    for registry, entries in saved:
        registry.reset(entries)
    get_settings.cache_clear()
