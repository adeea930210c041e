"""Conversation memory for convmem.

Keeps an append-only message log per conversation and returns a bounded
working memory from it. The window holds the most recent messages up to a
configured count and never drops system messages.

Components:

- :class:`SlidingWindowPolicy` - Decides which messages are retained
- :class:`AsyncMemoryPolicy` - Asyncio facade over the policy
- :class:`MessageStore` - Storage protocol implemented by backends
- :class:`InMemoryMessageStore` - Reference in-process store
- :class:`SQLiteMessageStore` - SQLite store with WAL mode
"""

from convmem.memory.aio import AsyncMemoryPolicy
from convmem.memory.factory import create_policy, create_store
from convmem.memory.inmemory import InMemoryMessageStore
from convmem.memory.policy import SlidingWindowPolicy, compute_window
from convmem.memory.schema import AddResult, MessageRecord
from convmem.memory.storage import SQLiteMessageStore
from convmem.memory.store import MessageStore

__all__ = [
    "AddResult",
    "AsyncMemoryPolicy",
    "InMemoryMessageStore",
    "MessageRecord",
    "MessageStore",
    "SQLiteMessageStore",
    "SlidingWindowPolicy",
    "compute_window",
    "create_policy",
    "create_store",
]
