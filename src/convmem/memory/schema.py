"""Pydantic models for memory system."""

import json
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from convmem.errors import EvictionFailed
from convmem.llm.client import Message, Role, ToolCall


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessageRecord(BaseModel):
    """A message as persisted in a conversation log."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    seq: int  # Store-assigned, increasing within a conversation
    role: Role
    content: str
    tool_calls: str | None = None  # JSON string
    tool_call_id: str | None = None
    name: str | None = None
    attachments: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_system(self) -> bool:
        return self.role is Role.SYSTEM

    @classmethod
    def from_message(cls, conversation_id: str, seq: int, message: Message) -> "MessageRecord":
        """Build a record for a message about to be stored.

        Args:
            conversation_id: Conversation the message belongs to
            seq: Sequence number assigned by the store
            message: Message to persist

        Returns:
            Message record
        """
        tool_calls_json = None
        if message.tool_calls:
            tool_calls_json = json.dumps(
                [{"id": tc.id, "name": tc.name, "arguments": tc.arguments} for tc in message.tool_calls]
            )

        return cls(
            conversation_id=conversation_id,
            seq=seq,
            role=message.role,
            content=message.content,
            tool_calls=tool_calls_json,
            tool_call_id=message.tool_call_id,
            name=message.name,
            attachments=list(message.attachments),
        )

    def to_message(self) -> Message:
        """Convert the record back to a Message."""
        tool_calls = None
        if self.tool_calls:
            tool_calls = [ToolCall(**tc) for tc in json.loads(self.tool_calls)]

        return Message(
            role=self.role,
            content=self.content,
            tool_calls=tool_calls,
            tool_call_id=self.tool_call_id,
            name=self.name,
            attachments=list(self.attachments),
        )


class AddResult(BaseModel):
    """Outcome of adding messages to a conversation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    conversation_id: str
    appended: list[MessageRecord] = Field(default_factory=list)
    evicted: list[int] = Field(default_factory=list)  # Seqs removed from the store
    eviction_error: EvictionFailed | None = None

    @property
    def eviction_lagging(self) -> bool:
        """True if the store still holds entries outside the window."""
        return self.eviction_error is not None
