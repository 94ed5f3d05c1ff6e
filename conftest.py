"""
Shared pytest setup: a deterministic encryption key and a clean service cache.
"""

import os
import sys

import pytest

# Settings are read at import time, so the key must exist before securelayer loads.
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-0123456789abcdef")

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

TEST_ENCRYPTION_KEY = os.environ["ENCRYPTION_KEY"]


@pytest.fixture
def encryption_key() -> str:
    return TEST_ENCRYPTION_KEY


@pytest.fixture(autouse=True)
def _reset_key_encryption_service():
    from securelayer.security.encryption import get_key_encryption_service

    get_key_encryption_service.cache_clear()
    yield
    get_key_encryption_service.cache_clear()
