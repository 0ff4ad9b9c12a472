"""Pytest configuration and shared fixtures."""

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")
    config.addinivalue_line("markers", "interop: Cross-checks against solders encodings")


@pytest.fixture
def payer():
    return Keypair()


@pytest.fixture
def program_id():
    return Pubkey.new_unique()


@pytest.fixture
def blockhash():
    return Hash.from_bytes(bytes(range(32)))
