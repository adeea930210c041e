"""In-process message store."""

import itertools
import logging
from collections.abc import Iterable, Sequence

from convmem.llm.client import Message
from convmem.memory.locks import KeyedLock
from convmem.memory.schema import MessageRecord
from convmem.memory.store import check_conversation_id

logger = logging.getLogger(__name__)


class InMemoryMessageStore:
    """Message store backed by a dictionary owned by this instance.

    Intended for tests and single-process deployments; contents are lost
    when the instance is garbage collected.
    """

    def __init__(self) -> None:
        self._logs: dict[str, list[MessageRecord]] = {}
        self._seq = itertools.count(1)
        self._locks = KeyedLock()

    def append(self, conversation_id: str, messages: Sequence[Message]) -> list[MessageRecord]:
        """Append messages to a conversation in order.

        Args:
            conversation_id: Conversation identifier
            messages: Messages to append, oldest first

        Returns:
            Stored records with their assigned sequence numbers
        """
        check_conversation_id(conversation_id)
        if not messages:
            return []

        with self._locks.hold(conversation_id):
            records = [
                MessageRecord.from_message(conversation_id, next(self._seq), message)
                for message in messages
            ]
            self._logs.setdefault(conversation_id, []).extend(records)

        logger.debug("Appended %d message(s) to %s", len(records), conversation_id)
        return records

    def get_all(self, conversation_id: str) -> list[MessageRecord]:
        check_conversation_id(conversation_id)
        with self._locks.hold(conversation_id):
            return list(self._logs.get(conversation_id, []))

    def delete(self, conversation_id: str, seqs: Iterable[int]) -> int:
        """Delete specific entries from a conversation.

        Args:
            conversation_id: Conversation identifier
            seqs: Sequence numbers to delete; unknown ones are ignored

        Returns:
            Number of entries deleted
        """
        check_conversation_id(conversation_id)
        doomed = set(seqs)
        if not doomed:
            return 0

        with self._locks.hold(conversation_id):
            log = self._logs.get(conversation_id)
            if not log:
                return 0

            kept = [record for record in log if record.seq not in doomed]
            removed = len(log) - len(kept)
            if kept:
                self._logs[conversation_id] = kept
            else:
                del self._logs[conversation_id]

        return removed

    def delete_all(self, conversation_id: str) -> int:
        check_conversation_id(conversation_id)
        with self._locks.hold(conversation_id):
            log = self._logs.pop(conversation_id, [])
        return len(log)

    def list_conversation_ids(self) -> set[str]:
        return set(self._logs)

    def count(self, conversation_id: str) -> int:
        check_conversation_id(conversation_id)
        with self._locks.hold(conversation_id):
            return len(self._logs.get(conversation_id, []))
