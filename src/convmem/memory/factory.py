"""Build message stores and memory policies from configuration."""

import logging
from pathlib import Path

from convmem.config.schema import ConvMemConfig, StoreConfig
from convmem.memory.inmemory import InMemoryMessageStore
from convmem.memory.policy import SlidingWindowPolicy
from convmem.memory.storage import SQLiteMessageStore
from convmem.memory.store import MessageStore

logger = logging.getLogger(__name__)


def create_store(config: StoreConfig) -> MessageStore:
    """Create the message store selected by configuration.

    Args:
        config: Store configuration

    Returns:
        Message store instance

    Raises:
        ValueError: If the backend is not supported
    """
    if config.backend == "memory":
        return InMemoryMessageStore()
    if config.backend == "sqlite":
        return SQLiteMessageStore(Path(config.path).expanduser(), timeout=config.timeout)

    msg = f"Unsupported store backend: {config.backend}"
    raise ValueError(msg)


def create_policy(config: ConvMemConfig | None = None) -> SlidingWindowPolicy:
    """Create a sliding-window policy with its store.

    Args:
        config: Root configuration (defaults if None)

    Returns:
        Configured memory policy
    """
    if config is None:
        config = ConvMemConfig()

    store = create_store(config.store)
    logger.info(
        "Memory policy: backend=%s max_messages=%d retention=%s",
        config.store.backend,
        config.policy.max_messages,
        config.policy.retention,
    )
    return SlidingWindowPolicy(store, config.policy)
