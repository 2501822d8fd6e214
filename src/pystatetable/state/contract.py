"""Contract shared by every state data store.

The in-memory :class:`~pystatetable.state.store.StateTable` is one
implementation; a remotely persisted store would expose the same surface.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from pystatetable.models.documents import StateDocument, StatesDocument
from pystatetable.state.events import StateChangeCallback
from pystatetable.state.values import StateValue


@runtime_checkable
class StateDataStore(Protocol):
    def initialize(self, room_uid: str = "", auth_token: str = "") -> bool:
        """Connect the store to its backing service; ``True`` on success."""
        ...

    def update(self, key: str, value: StateValue | None) -> bool:
        """Store *value* under *key*; ``True`` only when the stored value changed."""
        ...

    def list_filtered(self, pattern: str | None = "") -> StatesDocument:
        """All states whose key matches *pattern* (case-insensitive regex)."""
        ...

    def find_by_all_substrings(self, required: Sequence[str]) -> StateDocument | None:
        """First state whose key contains every string in *required*."""
        ...

    def get_states(self, pattern: str | None = "") -> str: ...

    def get_state(self, partial_keys: Sequence[str]) -> str | None: ...

    def subscribe(self, callback: StateChangeCallback) -> Callable[[], None]:
        """Register a change subscriber; returns a function that removes it."""
        ...

    def unsubscribe(self, callback: StateChangeCallback) -> bool: ...
