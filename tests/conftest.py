"""
Shared fixtures for the chainpulse test suite.
"""

import pytest

from fixtures.chain import TOKEN


@pytest.fixture
def token_address() -> str:
    return TOKEN
