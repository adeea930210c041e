"""convmem - Conversation memory for language-model applications.

convmem decides which prior conversation messages are retained and surfaced
back into a prompt. Messages are appended to a pluggable, conversation-scoped
store and a sliding-window policy bounds what callers read back, never
evicting system messages.

Key modules:

- :mod:`convmem.memory` - Message stores and the sliding-window memory policy
- :mod:`convmem.llm` - Message value types shared with LLM clients
- :mod:`convmem.config` - YAML configuration loading and validation
"""

__version__ = "0.1.0"
