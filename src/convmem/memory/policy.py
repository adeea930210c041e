"""Sliding-window memory policy.

The policy sits between a conversation's append-only log and the bounded
working memory handed back to callers. It keeps the most recent messages up
to ``max_messages`` and never evicts system messages, even when they alone
exceed the bound.

Two retention modes are available and must be chosen explicitly through
:class:`~convmem.config.schema.PolicyConfig`:

- ``evict``: entries outside the window are deleted from the store after
  every add, so the stored log converges to the window.
- ``filter``: the store keeps the full history (for auditing) and the window
  is applied only when reading.

Either way :meth:`SlidingWindowPolicy.get` returns the same messages for the
same stored log, because the window is always recomputed from the log.

Eviction may lag: if deleting evicted entries fails after a successful
append, :meth:`SlidingWindowPolicy.add` still succeeds and reports the
failure in :attr:`AddResult.eviction_error`. The next add to the same
conversation retries the cleanup.
"""

import logging
from collections.abc import Sequence

from convmem.config.schema import PolicyConfig, RetentionMode
from convmem.errors import EvictionFailed, StoreError
from convmem.llm.client import Message
from convmem.memory.locks import KeyedLock
from convmem.memory.schema import AddResult, MessageRecord
from convmem.memory.store import MessageStore, check_conversation_id

logger = logging.getLogger(__name__)


def compute_window(
    records: Sequence[MessageRecord], max_messages: int
) -> tuple[list[MessageRecord], list[MessageRecord]]:
    """Split a stored log into retained and discarded entries.

    Args:
        records: Full conversation log, oldest first
        max_messages: Target window size

    Returns:
        Tuple of (kept, discarded), both in original log order
    """
    if len(records) <= max_messages:
        return list(records), []

    protected = sum(1 for record in records if record.is_system)
    candidates = len(records) - protected
    budget = max(0, max_messages - protected)
    drop = candidates - budget

    kept: list[MessageRecord] = []
    discarded: list[MessageRecord] = []
    for record in records:
        if drop > 0 and not record.is_system:
            discarded.append(record)
            drop -= 1
        else:
            kept.append(record)

    return kept, discarded


class SlidingWindowPolicy:
    """Conversation memory bounded by message count, protecting system messages."""

    def __init__(self, store: MessageStore, config: PolicyConfig | None = None):
        """Initialize the policy.

        Args:
            store: Message store holding conversation logs
            config: Policy configuration (defaults to a 20 message window
                with eviction)
        """
        self.store = store
        self.config = config if config is not None else PolicyConfig()
        self._locks = KeyedLock()

    @property
    def max_messages(self) -> int:
        return self.config.max_messages

    @property
    def retention(self) -> RetentionMode:
        return self.config.retention

    def add(self, conversation_id: str, messages: Message | Sequence[Message]) -> AddResult:
        """Add one or more messages to a conversation.

        Args:
            conversation_id: Conversation identifier
            messages: A message or an ordered batch of messages

        Returns:
            Appended records, evicted sequence numbers and any eviction error

        Raises:
            StoreError: If the append itself fails; nothing was stored
        """
        check_conversation_id(conversation_id)
        batch = [messages] if isinstance(messages, Message) else list(messages)
        result = AddResult(conversation_id=conversation_id)
        if not batch:
            return result

        with self._locks.hold(conversation_id):
            result.appended = self.store.append(conversation_id, batch)

            if self.retention == "evict":
                try:
                    result.evicted = self._evict(conversation_id)
                except EvictionFailed as e:
                    logger.warning("%s; eviction will be retried on the next add", e)
                    result.eviction_error = e

        return result

    def _evict(self, conversation_id: str) -> list[int]:
        """Delete entries outside the window. Caller holds the conversation lock."""
        try:
            records = self.store.get_all(conversation_id)
        except StoreError as e:
            raise EvictionFailed(conversation_id, []) from e

        _, discarded = compute_window(records, self.max_messages)
        seqs = [record.seq for record in discarded]
        if not seqs:
            return []

        try:
            self.store.delete(conversation_id, seqs)
        except StoreError as e:
            raise EvictionFailed(conversation_id, seqs) from e

        logger.debug("Evicted %d message(s) from %s", len(seqs), conversation_id)
        return seqs

    def get(self, conversation_id: str) -> list[Message]:
        """Get the retained window of a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Messages oldest first (empty for unknown conversations)
        """
        kept, _ = compute_window(self.store.get_all(conversation_id), self.max_messages)
        return [record.to_message() for record in kept]

    def history(self, conversation_id: str) -> list[Message]:
        """Get every message the store still holds for a conversation."""
        return [record.to_message() for record in self.store.get_all(conversation_id)]

    def clear(self, conversation_id: str) -> int:
        """Delete a conversation's messages.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Number of messages deleted (0 if already empty)
        """
        check_conversation_id(conversation_id)
        with self._locks.hold(conversation_id):
            return self.store.delete_all(conversation_id)

    def conversation_ids(self) -> set[str]:
        """List conversations that currently hold messages."""
        return self.store.list_conversation_ids()
