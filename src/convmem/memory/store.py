"""Abstract message store interface."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from convmem.llm.client import Message
from convmem.memory.schema import MessageRecord


class MessageStore(Protocol):
    """Protocol for conversation-scoped, append-only message logs.

    Implementations keep insertion order per conversation, serialize
    concurrent writes to the same conversation, and treat deletes as
    idempotent. Nothing here evicts or reorders messages.
    """

    def append(self, conversation_id: str, messages: Sequence[Message]) -> list[MessageRecord]:
        """Append messages to a conversation in order.

        Args:
            conversation_id: Conversation identifier
            messages: Messages to append, oldest first

        Returns:
            Stored records with their assigned sequence numbers

        Raises:
            StoreError: If the backend fails
        """
        ...

    def get_all(self, conversation_id: str) -> list[MessageRecord]:
        """Get the full log of a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Records ordered by sequence number (empty if unknown)
        """
        ...

    def delete(self, conversation_id: str, seqs: Iterable[int]) -> int:
        """Delete specific entries from a conversation.

        Args:
            conversation_id: Conversation identifier
            seqs: Sequence numbers to delete; unknown ones are ignored

        Returns:
            Number of entries deleted
        """
        ...

    def delete_all(self, conversation_id: str) -> int:
        """Delete the entire log of a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Number of entries deleted
        """
        ...

    def list_conversation_ids(self) -> set[str]:
        """List conversations that currently hold messages."""
        ...

    def count(self, conversation_id: str) -> int:
        """Get the number of stored entries for a conversation."""
        ...


def check_conversation_id(conversation_id: str) -> None:
    """Reject empty conversation identifiers."""
    if not isinstance(conversation_id, str) or not conversation_id:
        msg = f"Conversation id must be a non-empty string, got {conversation_id!r}"
        raise ValueError(msg)
