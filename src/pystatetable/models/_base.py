"""Base model for serialized state table documents.

Documents are what leaves the table: they are frozen snapshots, never live
views, and they know how to render themselves as the JSON text consumed by
control-panel front ends.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StateTableBaseModel(BaseModel):
    """Base for documents returned by state table queries."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def to_json(self) -> str:
        """Compact JSON text of the document."""
        return self.model_dump_json()
