"""Wiring of the realtime notification components."""

from __future__ import annotations

from dataclasses import dataclass

from app.config import Settings

from .heartbeat import HeartbeatScheduler
from .manager import ConnectionRegistry
from .publisher import EventDispatcher


@dataclass
class RealtimeNotifications:
    """Registry, dispatcher and heartbeat sharing one set of connections."""

    registry: ConnectionRegistry
    dispatcher: EventDispatcher
    heartbeat: HeartbeatScheduler

    def start(self) -> None:
        self.heartbeat.start()

    def shutdown(self) -> None:
        self.heartbeat.stop()
        self.registry.close_all()


def build_realtime(
    *,
    max_lifetime: float,
    heartbeat_interval: float,
    backlog_size: int,
) -> RealtimeNotifications:
    """Create a fresh set of realtime components."""

    registry = ConnectionRegistry(max_lifetime=max_lifetime, backlog_size=backlog_size)
    return RealtimeNotifications(
        registry=registry,
        dispatcher=EventDispatcher(registry),
        heartbeat=HeartbeatScheduler(registry, interval=heartbeat_interval),
    )


def build_realtime_from_settings(settings: Settings) -> RealtimeNotifications:
    return build_realtime(
        max_lifetime=settings.stream_max_lifetime_seconds,
        heartbeat_interval=settings.heartbeat_interval_seconds,
        backlog_size=settings.stream_backlog_size,
    )


__all__ = [
    "RealtimeNotifications",
    "build_realtime",
    "build_realtime_from_settings",
]
