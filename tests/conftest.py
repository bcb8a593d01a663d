"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed apibump package.
"""

import pytest

from apibump.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    """Route structlog through stdlib at WARNING so kernel debug events stay silent."""
    configure_logging(level="WARNING")
    yield
