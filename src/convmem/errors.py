"""Error types for conversation memory."""

from collections.abc import Sequence


class ConvMemError(Exception):
    """Base class for conversation memory errors."""


class StoreError(ConvMemError):
    """A message store operation failed."""


class StoreUnavailable(StoreError):
    """The storage backend could not complete an I/O operation."""


class StoreTimeout(StoreError):
    """The storage backend did not respond in time."""


class InvalidConfiguration(ConvMemError, ValueError):
    """A memory policy was constructed with invalid settings."""


class EvictionFailed(ConvMemError):
    """Messages were appended but evicted entries could not be deleted.

    The append is durable. The store keeps the stale entries until the next
    successful eviction pass for the same conversation.
    """

    def __init__(self, conversation_id: str, seqs: Sequence[int]):
        self.conversation_id = conversation_id
        self.seqs = list(seqs)
        super().__init__(
            f"Failed to evict {len(self.seqs)} message(s) from conversation {conversation_id!r}"
        )
