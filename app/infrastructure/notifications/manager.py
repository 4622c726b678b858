"""Connection registry for notification event streams."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from .streams import EventStream, StreamConnectionError, StreamSendError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LIFETIME_SECONDS = 30 * 60
DEFAULT_BACKLOG_SIZE = 100
CONNECTED_EVENT = "connected"
CONNECTED_MESSAGE = "SSE connection established"


class ConnectionRegistry:
    """Keep at most one live :class:`EventStream` per user.

    The registry lock only guards the mapping; events are written to streams
    outside of it so a busy stream never blocks other users.
    """

    def __init__(
        self,
        *,
        max_lifetime: float = DEFAULT_MAX_LIFETIME_SECONDS,
        backlog_size: int = DEFAULT_BACKLOG_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_lifetime = max_lifetime
        self._backlog_size = backlog_size
        self._clock = clock
        self._connections: dict[int, EventStream] = {}
        self._lock = threading.RLock()

    def open(self, user_id: int) -> EventStream:
        """Create and register a new stream for ``user_id``.

        Any stream the user already had is completed first. The stream is only
        registered once the ``connected`` handshake event has been queued.
        """

        self.close(user_id)

        stream = EventStream(
            user_id,
            max_lifetime=self._max_lifetime,
            backlog_size=self._backlog_size,
            on_close=self._release,
            clock=self._clock,
        )
        try:
            stream.send(CONNECTED_EVENT, CONNECTED_MESSAGE)
        except StreamSendError as exc:
            stream.fail(exc)
            raise StreamConnectionError(
                f"Failed to create event stream for user {user_id}"
            ) from exc

        with self._lock:
            displaced = self._connections.get(user_id)
            self._connections[user_id] = stream
        if displaced is not None and displaced is not stream:
            displaced.complete()

        logger.info("Event stream created for user %s", user_id)
        return stream

    def close(self, user_id: int) -> None:
        """Complete and forget the stream registered for ``user_id``, if any."""

        with self._lock:
            stream = self._connections.pop(user_id, None)
        if stream is not None:
            stream.complete()

    def close_all(self) -> None:
        with self._lock:
            streams = list(self._connections.values())
            self._connections.clear()
        for stream in streams:
            stream.complete()

    def get(self, user_id: int) -> EventStream | None:
        with self._lock:
            return self._connections.get(user_id)

    def is_connected(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._connections

    def is_registered(self, stream: EventStream) -> bool:
        """Return ``True`` when ``stream`` is the current stream of its user."""

        with self._lock:
            return self._connections.get(stream.user_id) is stream

    def active_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def snapshot(self) -> list[EventStream]:
        with self._lock:
            return list(self._connections.values())

    def _release(self, stream: EventStream) -> None:
        with self._lock:
            if self._connections.get(stream.user_id) is stream:
                del self._connections[stream.user_id]
                logger.debug(
                    "Event stream for user %s deregistered (%s)",
                    stream.user_id,
                    stream.state.value,
                )


__all__ = ["ConnectionRegistry", "CONNECTED_EVENT", "CONNECTED_MESSAGE"]
