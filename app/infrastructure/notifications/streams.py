"""Server-sent event streams backing the realtime notification channel."""

from __future__ import annotations

import json
import logging
import queue
import threading
import time
from collections.abc import AsyncIterator, Callable
from datetime import date, datetime
from enum import Enum
from typing import Any

import anyio
from anyio import from_thread
from anyio.lowlevel import EventLoopToken, current_token

logger = logging.getLogger(__name__)


class StreamSendError(RuntimeError):
    """Raised when an event cannot be written to a stream."""


class StreamConnectionError(RuntimeError):
    """Raised when a stream cannot be established for a user."""


class StreamState(str, Enum):
    """Lifecycle states of an :class:`EventStream`."""

    OPEN = "open"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_event(event: str, data: Any) -> str:
    """Return the ``text/event-stream`` frame for ``event`` carrying ``data``.

    Strings are sent verbatim; anything else is JSON encoded. Data is split
    into one ``data:`` field per line, where only ``\\r\\n``, ``\\r`` and
    ``\\n`` end a line, so a client joining the fields gets ``data`` back.
    """

    body = data if isinstance(data, str) else json.dumps(data, default=_json_default)
    body = body.replace("\r\n", "\n").replace("\r", "\n")
    lines = [f"event: {event}"]
    lines.extend(f"data: {line}" for line in body.split("\n"))
    return "\n".join(lines) + "\n\n"


class _Waiter:
    """The drain coroutine parked on an event of its own loop."""

    def __init__(self) -> None:
        self.token: EventLoopToken = current_token()
        self.thread_id = threading.get_ident()
        self.event = anyio.Event()

    def wake(self) -> None:
        if self.event.is_set():
            return
        if threading.get_ident() == self.thread_id:
            self.event.set()
            return
        try:
            from_thread.run_sync(self.event.set, token=self.token)
        except anyio.RunFinishedError:
            logger.debug("Event loop of a stream drain already finished")


class EventStream:
    """A single user's event stream with a bounded backlog of encoded frames.

    Producers call :meth:`send` from any thread; the HTTP response drains the
    backlog through :meth:`frames`. Leaving :attr:`StreamState.OPEN` through
    :meth:`complete`, :meth:`timeout` or :meth:`fail` happens at most once and
    always notifies ``on_close``.
    """

    def __init__(
        self,
        user_id: int,
        *,
        max_lifetime: float,
        backlog_size: int,
        on_close: Callable[["EventStream"], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.user_id = user_id
        self._max_lifetime = max_lifetime
        self._clock = clock
        self._opened_at = clock()
        self._frames: queue.Queue[str] = queue.Queue(maxsize=backlog_size)
        self._backlog_since: float | None = None
        self._waiter: _Waiter | None = None
        self._lock = threading.Lock()
        self._state = StreamState.OPEN
        self._on_close = on_close
        self.error: BaseException | None = None

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is StreamState.OPEN

    def remaining(self) -> float:
        return self._max_lifetime - (self._clock() - self._opened_at)

    def expired(self) -> bool:
        """Return ``True`` once the stream has outlived its maximum lifetime."""

        return self.remaining() <= 0

    def stalled(self, threshold: float) -> bool:
        """Return ``True`` when queued frames have waited ``threshold`` seconds.

        A consumer that keeps reading empties the backlog well within a
        heartbeat interval, so a frame this old means nobody is draining.
        """

        with self._lock:
            since = self._backlog_since
        return since is not None and self._clock() - since >= threshold

    def send(self, event: str, data: Any) -> None:
        """Queue ``event`` for delivery without blocking the caller."""

        frame = encode_event(event, data)
        with self._lock:
            if self._state is not StreamState.OPEN:
                raise StreamSendError(
                    f"Stream for user {self.user_id} is {self._state.value}"
                )
            try:
                self._frames.put_nowait(frame)
            except queue.Full as exc:
                raise StreamSendError(
                    f"Stream for user {self.user_id} stopped consuming events"
                ) from exc
            if self._backlog_since is None:
                self._backlog_since = self._clock()
            waiter = self._waiter
        if waiter is not None:
            waiter.wake()

    def complete(self) -> bool:
        return self._transition(StreamState.COMPLETED)

    def timeout(self) -> bool:
        return self._transition(StreamState.TIMED_OUT)

    def fail(self, error: BaseException | None = None) -> bool:
        if error is not None and self.error is None:
            self.error = error
        return self._transition(StreamState.ERRORED)

    def pending(self) -> list[str]:
        """Remove and return every frame currently waiting in the backlog."""

        frames: list[str] = []
        with self._lock:
            while True:
                try:
                    frames.append(self._frames.get_nowait())
                except queue.Empty:
                    break
            self._backlog_since = None
        return frames

    async def frames(self) -> AsyncIterator[str]:
        """Yield encoded frames until the stream leaves the open state.

        The drain sleeps until a producer queues a frame, the stream is closed
        or its lifetime runs out. Frames queued before the stream was closed
        are still flushed. When the consumer stops iterating (client
        disconnect) the stream is completed.
        """

        try:
            while True:
                waiter = _Waiter()
                with self._lock:
                    self._waiter = waiter
                for frame in self.pending():
                    yield frame
                if not self.is_open:
                    for frame in self.pending():
                        yield frame
                    return
                remaining = self.remaining()
                if remaining <= 0:
                    self.timeout()
                    continue
                with anyio.move_on_after(remaining):
                    await waiter.event.wait()
        except Exception as exc:
            self.fail(exc)
            raise
        finally:
            with self._lock:
                self._waiter = None
            self.complete()

    def _transition(self, state: StreamState) -> bool:
        with self._lock:
            if self._state is not StreamState.OPEN:
                return False
            self._state = state
            waiter = self._waiter

        if state is StreamState.ERRORED:
            logger.warning(
                "Event stream for user %s failed: %s", self.user_id, self.error
            )
        else:
            logger.info("Event stream for user %s %s", self.user_id, state.value)

        if waiter is not None:
            waiter.wake()
        if self._on_close is not None:
            self._on_close(self)
        return True


__all__ = [
    "EventStream",
    "StreamConnectionError",
    "StreamSendError",
    "StreamState",
    "encode_event",
]
