"""Conversation message data types."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Role classification of a conversation message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"  # Tool result


@dataclass(frozen=True)
class ToolCall:
    """A tool call requested by the LLM.

    Not hashable: ``arguments`` is a plain dict.
    """

    id: str
    name: str
    arguments: dict[str, Any]

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Message:
    """A message in the conversation.

    Fields cannot be reassigned and sequence payloads are stored as tuples.
    Messages compare by value but are not hashable, since tool call
    arguments are dicts. Two equal messages are still distinct entries once
    stored; identity is their position in the conversation.
    """

    role: Role
    content: str
    tool_calls: tuple[ToolCall, ...] | None = None
    tool_call_id: str | None = None  # For tool response messages
    name: str | None = None  # Tool name for tool response messages
    attachments: tuple[str, ...] = ()  # Media references

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # Accept plain strings such as "user"; raises ValueError for unknown roles
        object.__setattr__(self, "role", Role(self.role))
        if self.tool_calls is not None:
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))
        object.__setattr__(self, "attachments", tuple(self.attachments))

    @property
    def is_system(self) -> bool:
        """Whether this message belongs to the protected system class."""
        return self.role is Role.SYSTEM

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str, tool_calls: Sequence[ToolCall] | None = None) -> "Message":
        return cls(
            role=Role.ASSISTANT,
            content=content,
            tool_calls=tuple(tool_calls) if tool_calls is not None else None,
        )

    @classmethod
    def tool(cls, content: str, tool_call_id: str, name: str | None = None) -> "Message":
        return cls(role=Role.TOOL, content=content, tool_call_id=tool_call_id, name=name)
