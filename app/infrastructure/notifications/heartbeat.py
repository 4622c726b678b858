"""Background heartbeat keeping notification streams alive."""

from __future__ import annotations

import logging
import threading

from .manager import ConnectionRegistry
from .streams import StreamSendError

logger = logging.getLogger(__name__)

HEARTBEAT_EVENT = "heartbeat"
HEARTBEAT_MESSAGE = "ping"
DEFAULT_INTERVAL_SECONDS = 30.0


class HeartbeatScheduler:
    """Periodically ping every registered stream from a daemon thread.

    Each tick works on a snapshot of the registry. A stream that is no longer
    registered is left alone and an expired one is timed out. A stream whose
    consumer left frames undrained for a whole interval, or whose heartbeat
    cannot be written, is failed, which removes it from the registry.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        interval: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        self._registry = registry
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="notification-heartbeat", daemon=True
        )
        self._thread.start()
        logger.info("Heartbeat scheduler started (every %ss)", self._interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout)
            logger.info("Heartbeat scheduler stopped")

    def beat(self) -> int:
        """Run a single heartbeat pass and return how many streams were pinged."""

        sent = 0
        for stream in self._registry.snapshot():
            if not self._registry.is_registered(stream):
                continue
            if stream.expired():
                stream.timeout()
                continue
            if stream.stalled(self._interval):
                logger.debug(
                    "Stream for user %s stopped consuming events, removing connection",
                    stream.user_id,
                )
                stream.fail(
                    StreamSendError(
                        f"Stream for user {stream.user_id} stopped consuming events"
                    )
                )
                continue
            try:
                stream.send(HEARTBEAT_EVENT, HEARTBEAT_MESSAGE)
            except StreamSendError as exc:
                logger.debug(
                    "Heartbeat failed for user %s, removing connection", stream.user_id
                )
                stream.fail(exc)
                continue
            sent += 1
        return sent

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self.beat()
            except Exception:  # pragma: no cover - keep the thread alive
                logger.exception("Heartbeat pass failed")


__all__ = ["HeartbeatScheduler", "HEARTBEAT_EVENT", "HEARTBEAT_MESSAGE"]
