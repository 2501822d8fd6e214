"""Change notifications emitted by the state table."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateChange(BaseModel):
    """A key whose stored value genuinely changed.

    Emitted exactly once per accepted :meth:`StateTable.update` call, never
    for a redundant write of the value already stored.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="State key")
    value: str = Field(..., description="New canonical string value")

    @field_validator("key")
    @classmethod
    def _require_key(cls, value: str) -> str:
        if not value:
            raise ValueError("key must be non-empty")
        return value


StateChangeCallback = Callable[[StateChange], None]
"""Signature of a change subscriber."""
