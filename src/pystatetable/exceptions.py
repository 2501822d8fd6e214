"""Custom exception hierarchy for pystatetable."""

from __future__ import annotations


class StateTableError(Exception):
    """Base exception for all pystatetable errors."""


class StateTableConfigError(StateTableError):
    """Invalid or missing configuration."""


class UnsupportedValueError(StateTableError, TypeError):
    """A value cannot be converted to its canonical state string.

    Only ``str``, ``bool``, ``int`` and ``float`` are accepted.
    :meth:`pystatetable.state.store.StateTable.update` turns this into a
    ``False`` return rather than letting it escape.
    """

    def __init__(self, message: str, *, value_type: type | None = None) -> None:
        self.value_type = value_type
        super().__init__(message)


class InvalidPatternError(StateTableError, ValueError):
    """A filter expression passed to ``list_filtered`` is not a valid regex.

    Raised instead of returning an empty result so that a typo in the
    pattern can't be mistaken for "no matching states".
    """

    def __init__(self, message: str, *, pattern: str = "") -> None:
        self.pattern = pattern
        super().__init__(message)


class StateTableLockTimeoutError(StateTableError, TimeoutError):
    """The table lock could not be acquired within ``lock_timeout``.

    This is a transient condition; callers may retry.
    """

    def __init__(self, message: str, *, timeout: float | None = None) -> None:
        self.timeout = timeout
        super().__init__(message)
