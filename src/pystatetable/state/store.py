"""Lock-guarded in-memory state table.

This is the only component allowed to mutate state.  Every write goes through
:meth:`StateTable.update`, which stores the canonical string form of the
value and notifies subscribers when, and only when, the stored value changed.
"""

from __future__ import annotations

import contextlib
import logging
import re
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence

from pystatetable._redact import redact_for_log
from pystatetable.config import StateTableConfig
from pystatetable.exceptions import InvalidPatternError, StateTableLockTimeoutError, UnsupportedValueError
from pystatetable.models.documents import StateDocument, StateRecord, StatesDocument
from pystatetable.state.events import StateChange, StateChangeCallback
from pystatetable.state.values import StateValue, to_state_string

_logger = logging.getLogger(__name__)


def _compile_filter(pattern: str | None) -> re.Pattern[str] | None:
    """Compile a key filter; ``None`` means "match everything"."""
    if not pattern:
        return None
    try:
        return re.compile(pattern, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as exc:
        raise InvalidPatternError(f"Invalid state filter {pattern!r}: {exc}", pattern=pattern) from exc


def _contains_all(key: str, required: Sequence[str]) -> bool:
    return all(part in key for part in required)


class StateTable:
    """In-memory key-value table of control-system state.

    Keys are opaque strings (conventionally colon-delimited paths such as
    ``"RoomController:room:SourceLevel:laptop"``); values are stored as their
    canonical string form, see :func:`~pystatetable.state.values.to_state_string`.

    All reads and writes are serialized by one table-wide re-entrant lock.
    Change notifications are dispatched on the updating thread *after* the
    write is committed but before the lock is released, so subscribers see
    changes in write order.  Being re-entrant, the lock lets a subscriber
    call :meth:`update` again from its own thread.  Subscribers hold up every
    other reader and writer while they run and must return quickly; they must
    not wait on another thread that uses the table.  Hand slow work off, e.g. via
    :class:`~pystatetable.state.channel.StateChangeChannel`.

    Usage::

        table = StateTable()
        table.subscribe(lambda change: print(change.key, change.value))
        table.update("RoomController:room:SourceLevel:laptop", 60)
    """

    def __init__(
        self,
        config: StateTableConfig | None = None,
        *,
        on_change: StateChangeCallback | None = None,
    ) -> None:
        self._config = config if config is not None else StateTableConfig()
        self._lock = threading.RLock()
        self._states: dict[str, str] = {}
        self._subscribers: list[StateChangeCallback] = []
        if on_change is not None:
            self._subscribers.append(on_change)

    @property
    def config(self) -> StateTableConfig:
        return self._config

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        timeout = self._config.lock_timeout
        if not self._lock.acquire(timeout=-1 if timeout is None else timeout):
            raise StateTableLockTimeoutError(
                f"State table lock not acquired within {timeout}s",
                timeout=timeout,
            )
        try:
            yield
        finally:
            self._lock.release()

    def _loggable(self, key: str, value: str) -> str | None:
        if not self._config.log_values:
            return "<hidden>"
        return redact_for_log(key, value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, room_uid: str = "", auth_token: str = "") -> bool:
        """Connect to the backing store.

        The in-memory table has nothing to connect to; this always succeeds.
        It exists so the table can stand in for a remotely persisted store.
        """
        _logger.debug(
            "State table initialized room_uid=%s auth_token=%s",
            room_uid,
            redact_for_log("authToken", auth_token),
        )
        return True

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def update(self, key: str, value: StateValue | None) -> bool:
        """Store *value* under *key*.

        Returns ``True`` when the entry was created or its stored value
        changed; exactly one :class:`StateChange` is then dispatched to every
        subscriber before this method returns.  Returns ``False``, without
        touching the table or notifying anyone, when the value is unchanged,
        when *key* is empty, or when *value* is ``None`` or of an unsupported
        type.
        """
        if not isinstance(key, str) or not key:
            _logger.debug("Rejected state update: empty key")
            return False
        if value is None:
            _logger.debug("Rejected state update key=%s: value is None", key)
            return False
        try:
            new_value = to_state_string(value)
        except UnsupportedValueError as exc:
            _logger.debug("Rejected state update key=%s: %s", key, exc)
            return False

        with self._locked():
            if self._states.get(key) == new_value:
                _logger.debug("State unchanged key=%s", key)
                return False
            self._states[key] = new_value
            _logger.debug("State changed key=%s value=%s", key, self._loggable(key, new_value))
            # Still under the lock: a later write to the key can't overtake this notification.
            self._dispatch(tuple(self._subscribers), StateChange(key=key, value=new_value))
        return True

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: StateChangeCallback) -> Callable[[], None]:
        """Register *callback* for change notifications.

        Returns a function that removes the registration again.
        """
        with self._locked():
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: StateChangeCallback) -> bool:
        """Remove *callback*; ``False`` if it was not registered."""
        with self._locked():
            try:
                self._subscribers.remove(callback)
            except ValueError:
                return False
        return True

    @property
    def subscriber_count(self) -> int:
        with self._locked():
            return len(self._subscribers)

    def _dispatch(self, subscribers: Sequence[StateChangeCallback], change: StateChange) -> None:
        for callback in subscribers:
            try:
                callback(change)
            except Exception:
                _logger.warning("State change subscriber failed for key=%s", change.key, exc_info=True)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_filtered(self, pattern: str | None = "") -> StatesDocument:
        """All states whose key matches *pattern*, sorted by key.

        *pattern* is a regular expression searched anywhere in the key,
        ignoring case.  An empty or ``None`` pattern returns the whole table.

        Raises
        ------
        InvalidPatternError
            If *pattern* is not a valid regular expression, including patterns
            too large or too deeply nested to compile.
        """
        matcher = _compile_filter(pattern)
        with self._locked():
            items = sorted(self._states.items())
        return StatesDocument(
            states=[
                StateRecord(guid=key, value=value)
                for key, value in items
                if matcher is None or matcher.search(key) is not None
            ]
        )

    def find_by_all_substrings(self, required: Iterable[str]) -> StateDocument | None:
        """First state, in key order, whose key contains every string in *required*.

        Matching is literal and case-sensitive; position and order of the
        substrings within the key do not matter.  Returns ``None`` when no key
        qualifies, and for an empty *required* list.  A bare string is taken as
        a single substring.
        """
        parts = [required] if isinstance(required, str) else list(required)
        if not parts:
            return None
        with self._locked():
            for key in sorted(self._states):
                if _contains_all(key, parts):
                    return StateDocument.for_entry(key, self._states[key])
        return None

    def get_states(self, pattern: str | None = "") -> str:
        """JSON text of :meth:`list_filtered`."""
        return self.list_filtered(pattern).to_json()

    def get_state(self, partial_keys: Sequence[str]) -> str | None:
        """JSON text of :meth:`find_by_all_substrings`, or ``None``."""
        document = self.find_by_all_substrings(partial_keys)
        return document.to_json() if document is not None else None

    def get(self, key: str) -> str | None:
        """Stored value for *key*, or ``None``."""
        with self._locked():
            return self._states.get(key)

    def snapshot(self) -> dict[str, str]:
        """Copy of the whole table, in key order."""
        with self._locked():
            return dict(sorted(self._states.items()))

    def __contains__(self, key: object) -> bool:
        with self._locked():
            return key in self._states

    def __len__(self) -> int:
        with self._locked():
            return len(self._states)
