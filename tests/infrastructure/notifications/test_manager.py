"""Tests for the per-user connection registry."""

from __future__ import annotations

import threading

import pytest

from app.infrastructure.notifications import (
    CONNECTED_MESSAGE,
    ConnectionRegistry,
    EventStream,
    StreamConnectionError,
    StreamSendError,
    StreamState,
    encode_event,
)


def test_open_registers_stream_and_sends_connected_event(registry):
    stream = registry.open(7)

    assert registry.is_connected(7)
    assert registry.get(7) is stream
    assert registry.active_count() == 1
    assert stream.pending() == [encode_event("connected", CONNECTED_MESSAGE)]


def test_open_again_supersedes_previous_stream(registry):
    first = registry.open(7)
    second = registry.open(7)

    assert registry.active_count() == 1
    assert registry.get(7) is second
    assert first.state is StreamState.COMPLETED
    assert second.is_open


def test_closing_a_superseded_stream_keeps_the_new_one(registry):
    first = registry.open(7)
    second = registry.open(7)

    first.fail(RuntimeError("late error"))

    assert registry.get(7) is second


def test_close_is_idempotent(registry):
    stream = registry.open(7)

    registry.close(7)
    registry.close(7)
    registry.close(99)

    assert not registry.is_connected(7)
    assert stream.state is StreamState.COMPLETED
    assert registry.active_count() == 0


@pytest.mark.parametrize("close", ["complete", "timeout", "fail"])
def test_stream_transitions_deregister(registry, close):
    stream = registry.open(7)

    getattr(stream, close)()

    assert not registry.is_connected(7)
    assert not registry.is_registered(stream)


def test_open_fails_when_handshake_cannot_be_sent(registry, monkeypatch):
    previous = registry.open(7)

    def broken_send(self, event, data):
        raise StreamSendError("transport closed")

    monkeypatch.setattr(EventStream, "send", broken_send)

    with pytest.raises(StreamConnectionError):
        registry.open(7)

    assert not registry.is_connected(7)
    assert registry.active_count() == 0
    assert previous.state is StreamState.COMPLETED


def test_streams_of_different_users_are_independent(registry):
    registry.open(1)
    registry.open(2)

    registry.close(1)

    assert registry.is_connected(2)
    assert registry.active_count() == 1


def test_concurrent_opens_leave_a_single_live_stream():
    registry = ConnectionRegistry(max_lifetime=60, backlog_size=10)
    opened: list[EventStream] = []
    lock = threading.Lock()
    start = threading.Barrier(8)

    def worker() -> None:
        start.wait()
        stream = registry.open(5)
        with lock:
            opened.append(stream)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    live = [stream for stream in opened if stream.is_open]
    assert registry.active_count() == 1
    assert live == [registry.get(5)]


def test_close_all_completes_every_stream(registry):
    streams = [registry.open(user_id) for user_id in (1, 2, 3)]

    registry.close_all()

    assert registry.active_count() == 0
    assert all(stream.state is StreamState.COMPLETED for stream in streams)
