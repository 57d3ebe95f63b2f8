"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat fake-renderer boilerplate.

The Command Channel is exercised against ``FakeRenderer``, an in-process
connector that hands out ``FakeConnection`` objects.  Nothing opens a socket.
"""

from __future__ import annotations

import json
import queue
import threading
import time
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import websocket

from core.config import ChannelConfig
from infrastructure.reconnect import ReconnectPolicy
from world_mcp.channel import CommandChannel

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DROP = object()
"""Responder return value: abort the connection instead of replying."""

_CLOSED = object()

FAST_RECONNECT = ReconnectPolicy(base_seconds=0.01, max_seconds=0.05)


def fast_config(**overrides: Any) -> ChannelConfig:
    """ChannelConfig with short timeouts so failure paths finish quickly."""
    values: dict[str, Any] = {
        "reply_timeout": 0.3,
        "connect_grace": 1.0,
        "connect_timeout": 0.5,
        "reconnect": FAST_RECONNECT,
    }
    values.update(overrides)
    return ChannelConfig(**values)


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Poll ``predicate`` until it is true or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


# ---------------------------------------------------------------------------
# Responders
# ---------------------------------------------------------------------------


def echo_responder(text: str) -> str:
    """Reply ``{"ok": true, "echo": <request>}``; raw text is echoed as a string."""
    try:
        request: Any = json.loads(text)
    except ValueError:
        request = text
    return json.dumps({"ok": True, "echo": request})


def silent_responder(text: str) -> None:
    return None


# ---------------------------------------------------------------------------
# Fake connection + connector
# ---------------------------------------------------------------------------


class FakeConnection:
    """Stands in for ``websocket.WebSocket``: send/recv/abort/shutdown.

    Each sent frame is recorded and passed to the responder; whatever it
    returns is queued as inbound frames (a list queues several, ``DROP``
    aborts the connection).
    """

    def __init__(self, responder: Callable[[str], Any]) -> None:
        self.responder = responder
        self.sent: list[str] = []
        self.connected = True
        self.recv_calls = 0
        self.pushed = 0
        self._inbox: queue.Queue[Any] = queue.Queue()
        self._recv_lock = threading.Lock()

    def send(self, text: str) -> None:
        if not self.connected:
            raise websocket.WebSocketConnectionClosedException("socket is already closed.")
        self.sent.append(text)
        reply = self.responder(text)
        if reply is DROP:
            self.abort()
        elif isinstance(reply, list):
            for frame in reply:
                self.push(frame)
        elif reply is not None:
            self.push(reply)

    def recv(self) -> Any:
        with self._recv_lock:
            self.recv_calls += 1
        item = self._inbox.get()
        if item is _CLOSED:
            self.connected = False
            raise websocket.WebSocketConnectionClosedException("Connection to remote host was lost.")
        return item

    def push(self, frame: Any) -> None:
        """Queue an inbound frame as if the renderer had sent it."""
        with self._recv_lock:
            self.pushed += 1
        self._inbox.put(frame)

    def push_and_wait(self, frame: Any, timeout: float = 2.0) -> None:
        """Queue ``frame`` and block until the reader has handled it.

        Frames are consumed one per ``recv`` call, so once the reader has
        called ``recv`` more times than frames were pushed, every frame has
        been delivered or discarded.
        """
        self.push(frame)
        assert wait_until(lambda: self.recv_calls > self.pushed, timeout), "reader never took the frame"

    def abort(self) -> None:
        self._inbox.put(_CLOSED)

    def shutdown(self) -> None:
        self.connected = False
        self._inbox.put(_CLOSED)


class FakeRenderer:
    """Connector that opens ``FakeConnection`` objects.

    Args:
        responder: Reply policy shared by every connection.
        refuse: Fail every connection attempt.
        fail_first: Fail this many attempts before accepting.
    """

    def __init__(
        self,
        responder: Callable[[str], Any] = echo_responder,
        refuse: bool = False,
        fail_first: int = 0,
    ) -> None:
        self.responder = responder
        self.refuse = refuse
        self.fail_first = fail_first
        self.attempts = 0
        self.connections: list[FakeConnection] = []
        self.urls: list[str] = []

    def __call__(self, url: str, timeout: float) -> FakeConnection:
        self.attempts += 1
        self.urls.append(url)
        if self.refuse or self.attempts <= self.fail_first:
            raise ConnectionRefusedError(111, "Connection refused")
        conn = FakeConnection(lambda text: self.responder(text))
        self.connections.append(conn)
        return conn

    @property
    def current(self) -> FakeConnection:
        return self.connections[-1]

    def sent_payloads(self) -> list[Any]:
        """Every frame sent on every connection, JSON-decoded where possible."""
        out: list[Any] = []
        for conn in self.connections:
            for text in conn.sent:
                try:
                    out.append(json.loads(text))
                except ValueError:
                    out.append(text)
        return out


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def renderer() -> FakeRenderer:
    """Echoing fake renderer."""
    return FakeRenderer()


@pytest.fixture()
def channel(renderer: FakeRenderer) -> Iterator[CommandChannel]:
    """Started CommandChannel wired to ``renderer``; closed after the test."""
    ch = CommandChannel(fast_config(), connector=renderer)
    ch.start()
    assert ch.wait_until_open(2.0)
    yield ch
    ch.close()
