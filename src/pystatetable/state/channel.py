"""Async delivery of state changes.

``StateTable`` dispatches notifications synchronously on whichever thread
performed the update.  A :class:`StateChangeChannel` turns that into a bounded
``asyncio.Queue`` on one event loop: the updating thread only schedules a
``put_nowait`` via ``call_soon_threadsafe`` and never waits for the consumer.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

from pystatetable.state.events import StateChange
from pystatetable.state.store import StateTable

_logger = logging.getLogger(__name__)


class StateChangeChannel:
    """Queue of :class:`StateChange` events fed by a :class:`StateTable`.

    Usage::

        async with StateChangeChannel(table) as channel:
            async for change in channel:
                ...

    When the queue is full, further changes are dropped and counted in
    :attr:`dropped` rather than blocking the updater.
    """

    def __init__(
        self,
        table: StateTable,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        maxsize: int | None = None,
    ) -> None:
        self._loop = loop or asyncio.get_running_loop()
        size = table.config.channel_maxsize if maxsize is None else maxsize
        # ``None`` in the queue marks the end of the stream.
        self._queue: asyncio.Queue[StateChange | None] = asyncio.Queue(size)
        self._dropped = 0
        # Drops are counted on the loop thread and, once the loop is closed, on updater threads.
        self._dropped_lock = threading.Lock()
        self._closed = False
        self._unsubscribe = table.subscribe(self._on_change)

    @property
    def dropped(self) -> int:
        """Changes discarded because the queue was full."""
        return self._dropped

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._queue.qsize()

    def _on_change(self, change: StateChange) -> None:
        """Subscriber callback; runs on the updating thread."""
        if self._closed:
            return
        try:
            self._loop.call_soon_threadsafe(self._enqueue, change)
        except RuntimeError:
            _logger.debug("Event loop closed; dropping state change key=%s", change.key)
            self._count_drop()

    def _count_drop(self) -> None:
        with self._dropped_lock:
            self._dropped += 1

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def _enqueue(self, change: StateChange) -> None:
        if self._closed:
            return
        try:
            self._queue.put_nowait(change)
        except asyncio.QueueFull:
            self._count_drop()
            _logger.debug("State change channel full; dropped key=%s", change.key)

    async def get(self) -> StateChange | None:
        """Next change, or ``None`` once the channel is closed and drained."""
        if self._closed and self._queue.empty():
            return None
        return await self._queue.get()

    def close(self) -> None:
        """Stop receiving changes; pending ones can still be read.

        Safe to call from any thread: off the loop thread the end-of-stream
        marker is handed to the loop so a consumer waiting in :meth:`get` wakes.
        """
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        if self._on_loop_thread():
            self._put_end_marker()
            return
        try:
            self._loop.call_soon_threadsafe(self._put_end_marker)
        except RuntimeError:
            # Loop already closed; nobody can be waiting on the queue.
            _logger.debug("Event loop closed; state change channel closed without end marker")

    def _put_end_marker(self) -> None:
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # Consumers drain the backlog and then see ``closed``.
            pass

    def __aiter__(self) -> StateChangeChannel:
        return self

    async def __anext__(self) -> StateChange:
        change = await self.get()
        if change is None:
            raise StopAsyncIteration
        return change

    async def __aenter__(self) -> StateChangeChannel:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()
