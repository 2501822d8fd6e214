"""Result documents for state table queries."""

from __future__ import annotations

from pydantic import ConfigDict, Field, RootModel

from pystatetable.models._base import StateTableBaseModel


class StateRecord(StateTableBaseModel):
    """One ``(key, value)`` entry in a bulk listing."""

    guid: str
    """State key.  Named ``guid`` because front ends use the key as a stable identifier."""

    value: str
    """Canonical string value."""

    @property
    def key(self) -> str:
        return self.guid


class StatesDocument(StateTableBaseModel):
    """Result of :meth:`~pystatetable.state.store.StateTable.list_filtered`.

    Serializes as ``{"states": [{"guid": <key>, "value": <value>}, ...]}``
    with records in ascending key order.
    """

    states: list[StateRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.states)

    def as_dict(self) -> dict[str, str]:
        """Records as a plain ``{key: value}`` mapping."""
        return {record.guid: record.value for record in self.states}


class StateDocument(RootModel[dict[str, str]]):
    """Result of :meth:`~pystatetable.state.store.StateTable.find_by_all_substrings`.

    Serializes as a single-entry object ``{<key>: <value>}``.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_entry(cls, key: str, value: str) -> StateDocument:
        return cls({key: value})

    @property
    def key(self) -> str:
        return next(iter(self.root))

    @property
    def value(self) -> str:
        return next(iter(self.root.values()))

    def to_json(self) -> str:
        return self.model_dump_json()
