"""Realtime notification helpers for the infrastructure layer."""

from .heartbeat import HEARTBEAT_EVENT, HEARTBEAT_MESSAGE, HeartbeatScheduler
from .manager import CONNECTED_EVENT, CONNECTED_MESSAGE, ConnectionRegistry
from .publisher import DispatchResult, EventDispatcher, serialize_notification
from .realtime import (
    RealtimeNotifications,
    build_realtime,
    build_realtime_from_settings,
)
from .streams import (
    EventStream,
    StreamConnectionError,
    StreamSendError,
    StreamState,
    encode_event,
)

__all__ = [
    "ConnectionRegistry",
    "CONNECTED_EVENT",
    "CONNECTED_MESSAGE",
    "HeartbeatScheduler",
    "HEARTBEAT_EVENT",
    "HEARTBEAT_MESSAGE",
    "EventDispatcher",
    "DispatchResult",
    "serialize_notification",
    "RealtimeNotifications",
    "build_realtime",
    "build_realtime_from_settings",
    "EventStream",
    "StreamConnectionError",
    "StreamSendError",
    "StreamState",
    "encode_event",
]
