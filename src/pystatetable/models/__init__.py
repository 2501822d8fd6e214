"""Serialized documents returned by state table queries."""

from pystatetable.models._base import StateTableBaseModel
from pystatetable.models.documents import StateDocument, StateRecord, StatesDocument

__all__ = [
    "StateDocument",
    "StateRecord",
    "StateTableBaseModel",
    "StatesDocument",
]
