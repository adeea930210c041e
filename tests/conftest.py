"""Pytest configuration and shared fixtures."""

import pytest

from convmem.config.schema import ConvMemConfig, PolicyConfig
from convmem.memory.inmemory import InMemoryMessageStore
from convmem.memory.policy import SlidingWindowPolicy
from convmem.memory.storage import SQLiteMessageStore


@pytest.fixture
def default_config() -> ConvMemConfig:
    """Provide a default configuration for tests."""
    return ConvMemConfig()


@pytest.fixture
def store() -> InMemoryMessageStore:
    """Provide an empty in-process message store."""
    return InMemoryMessageStore()


@pytest.fixture(params=["memory", "sqlite"])
def backend_store(request, tmp_path):
    """Provide an empty store of each backend in turn."""
    if request.param == "memory":
        return InMemoryMessageStore()
    return SQLiteMessageStore(tmp_path / "test_memory.db")


@pytest.fixture
def policy(store) -> SlidingWindowPolicy:
    """Provide an evicting policy with a small window."""
    return SlidingWindowPolicy(store, PolicyConfig(max_messages=3))
