"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from coapwire import MessageIdCounter


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"21.5 C"


@pytest.fixture
def sample_token() -> bytes:
    """Sample token for testing."""
    return b"\x7a\x10\x2c\x4d"


@pytest.fixture
def counter() -> MessageIdCounter:
    """Message id counter with a fixed seed."""
    return MessageIdCounter(seed=1000)
