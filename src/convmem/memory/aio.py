"""Asyncio facade for the memory policy."""

import asyncio
from collections.abc import Sequence

from convmem.llm.client import Message
from convmem.memory.policy import SlidingWindowPolicy
from convmem.memory.schema import AddResult


class AsyncMemoryPolicy:
    """Run a :class:`SlidingWindowPolicy` from async code.

    Store calls are blocking, so each operation runs in a worker thread.
    Per-conversation ordering is still enforced by the wrapped policy's
    locks, which also serialize async callers against threaded ones.
    """

    def __init__(self, policy: SlidingWindowPolicy):
        self.policy = policy

    async def add(self, conversation_id: str, messages: Message | Sequence[Message]) -> AddResult:
        return await asyncio.to_thread(self.policy.add, conversation_id, messages)

    async def get(self, conversation_id: str) -> list[Message]:
        return await asyncio.to_thread(self.policy.get, conversation_id)

    async def history(self, conversation_id: str) -> list[Message]:
        return await asyncio.to_thread(self.policy.history, conversation_id)

    async def clear(self, conversation_id: str) -> int:
        return await asyncio.to_thread(self.policy.clear, conversation_id)
