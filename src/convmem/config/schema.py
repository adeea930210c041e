"""Pydantic models for convmem.yaml configuration."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from convmem.errors import InvalidConfiguration

RetentionMode = Literal["evict", "filter"]


class FailFastModel(BaseModel):
    """Base for configuration models that reject bad values at construction.

    Validation errors from every entry point (keyword construction, nested
    dictionaries, ``model_validate``) surface as
    :class:`~convmem.errors.InvalidConfiguration`.
    """

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid {type(self).__name__}: {e}") from e

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> Any:
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid {cls.__name__}: {e}") from e


class StoreConfig(FailFastModel):
    """Message store backend configuration."""

    backend: Literal["memory", "sqlite"] = Field(
        default="memory",
        description="Storage backend: 'memory' for in-process, 'sqlite' for a database file",
    )
    path: str = Field(
        default="~/.convmem/memory.db",
        description="Path to SQLite database (sqlite backend only)",
    )
    timeout: float = Field(
        default=5.0,
        description="Seconds to wait on a locked database before failing",
        gt=0.0,
    )


class PolicyConfig(FailFastModel):
    """Sliding-window memory policy configuration.

    Immutable once built.
    """

    model_config = ConfigDict(frozen=True)

    max_messages: int = Field(
        default=20,
        description="Messages to retain per conversation; system messages are always kept",
        ge=0,
        strict=True,  # Rejects booleans and floats
    )
    retention: RetentionMode = Field(
        default="evict",
        description=(
            "'evict' deletes messages outside the window from the store, "
            "'filter' keeps full history and applies the window when reading"
        ),
    )


class ConvMemConfig(FailFastModel):
    """Root configuration schema for convmem."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
