"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from clonecheck import VerifierSettings


@pytest.fixture
def settings():
    """Settings isolated from any .env file."""
    return VerifierSettings(_env_file=None)
