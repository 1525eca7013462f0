"""
Pytest configuration and fixtures for ERP fixture tests.
"""

import random
from typing import List

import pytest

from crypto.keys import PrivateKey, PublicKey


def make_public_keys(count: int, start: int = 1) -> List[PublicKey]:
    """Deterministic public keys for private scalars start, start+1, ..."""
    return [PrivateKey.from_int(scalar).public_key() for scalar in range(start, start + count)]


@pytest.fixture
def key_factory():
    """Factory for deterministic public keys."""
    return make_public_keys


@pytest.fixture
def main_keys():
    """Three federation keys."""
    return make_public_keys(3, start=1)


@pytest.fixture
def emergency_keys():
    """Four emergency federation keys."""
    return make_public_keys(4, start=100)


@pytest.fixture
def seeded_rng():
    """Random source with a fixed seed."""
    return random.Random(1234)


# Test markers for different test categories
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths and names."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "slow" in item.name or "large" in item.name:
            item.add_marker(pytest.mark.slow)
