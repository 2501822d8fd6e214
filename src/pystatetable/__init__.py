"""pystatetable - In-process key-value state table with change notifications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystatetable")
except PackageNotFoundError:
    __version__ = "0+local"
from pystatetable.config import StateTableConfig
from pystatetable.exceptions import (
    InvalidPatternError,
    StateTableConfigError,
    StateTableError,
    StateTableLockTimeoutError,
    UnsupportedValueError,
)
from pystatetable.models import StateDocument, StateRecord, StatesDocument
from pystatetable.state.channel import StateChangeChannel
from pystatetable.state.contract import StateDataStore
from pystatetable.state.events import StateChange, StateChangeCallback
from pystatetable.state.store import StateTable
from pystatetable.state.values import StateValue, to_state_string

__all__ = [
    "__version__",
    "InvalidPatternError",
    "StateChange",
    "StateChangeCallback",
    "StateChangeChannel",
    "StateDataStore",
    "StateDocument",
    "StateRecord",
    "StateTable",
    "StateTableConfig",
    "StateTableConfigError",
    "StateTableError",
    "StateTableLockTimeoutError",
    "StateValue",
    "StatesDocument",
    "UnsupportedValueError",
    "to_state_string",
]
