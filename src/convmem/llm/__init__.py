"""Message types shared with LLM clients."""

from .client import Message, Role, ToolCall

__all__ = [
    "Message",
    "Role",
    "ToolCall",
]
