"""world_mcp/channel.py — persistent WebSocket Command Channel to the WDP renderer.

This module is the I/O boundary between the MCP adapter and the external
control service that drives the 3D scene.  All network calls live here;
core/ stays pure.

Architecture
────────────
::

    MCP handlers (asyncio)
        │   await asyncio.to_thread(channel.send, envelope)
        ▼
    CommandChannel.send()  ── _send_lock: one command in flight ──┐
        │   ws.send(json)                                         │
        ▼                                                         │
    WDP control service (ws://localhost:5151)                     │
        │   next inbound frame                                    │
        ▼                                                         │
    background thread: connect → read loop → reconnect            │
        └── delivers the frame to the pending slot ───────────────┘

Connection model
────────────────
Unlike a stateless-per-call bridge, the renderer expects one long-lived
connection.  A single daemon thread owns it: it connects, reads frames until
the socket fails, then sleeps for the reconnect delay and tries again::

    DISCONNECTED ──start()/send()──→ CONNECTING ──ok──→ OPEN
         ↑                               │                 │
         └──────(delay, retry)───────────┘  (close/error)──┘

There is no terminal state: the loop retries until :meth:`close` is called,
unless the :class:`~infrastructure.reconnect.ReconnectPolicy` caps attempts.

Correlation
───────────
The wire format carries no request id, so the reply to a command is simply
the next inbound frame.  Two rules keep that safe:

1. ``_send_lock`` serialises every send, so reply N pairs with request N.
2. A frame that arrives while no command is pending (a late reply after a
   timeout, an unsolicited event) is logged and dropped rather than being
   handed to the next command.

If the service echoes ids, set ``ChannelConfig.request_id_field``: each
envelope is tagged and mismatched replies are dropped too.

Error handling
──────────────
``ChannelNotReady``  not OPEN after the connect grace period
``CommandTimeout``   no reply within ``reply_timeout``
``MalformedReply``   reply is not JSON (``send`` only)
``ConnectionLost``   socket failed while a command was waiting
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import websocket

from core.camera.types import CommandEnvelope
from core.config import ChannelConfig
from core.errors import ChannelNotReady, CommandTimeout, ConnectionLost, MalformedReply

logger = logging.getLogger(__name__)

# Errors that mean "this connection is unusable"
_SOCKET_ERRORS: tuple[type[Exception], ...] = (OSError, websocket.WebSocketException)

Connector = Callable[[str, float], Any]
"""``(url, connect_timeout) -> connection`` with ``send``/``recv``/``abort``/``shutdown``."""


def open_websocket(url: str, timeout: float) -> websocket.WebSocket:
    """Open a blocking WebSocket with no read timeout once connected."""
    ws = websocket.create_connection(url, timeout=timeout, enable_multithread=True)
    ws.settimeout(None)
    return ws


class ChannelState(str, Enum):
    """Connection lifecycle of the channel."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"


@dataclass
class _PendingReply:
    """Slot for the single in-flight command; settled exactly once."""

    request_id: str | None = None
    reply: str | None = None
    error: Exception | None = None
    settled: threading.Event = field(default_factory=threading.Event)

    def resolve(self, raw: str) -> None:
        self.reply = raw
        self.settled.set()

    def fail(self, exc: Exception) -> None:
        self.error = exc
        self.settled.set()


class CommandChannel:
    """Request/reply abstraction over one persistent WebSocket connection.

    Args:
        config: Endpoint, timeouts, and reconnect policy.
        connector: Opens a connection; defaults to :func:`open_websocket`.
            Tests inject an in-process fake.

    Usage::

        channel = CommandChannel(ChannelConfig.from_env())
        channel.start()
        reply = channel.send(commands.get_camera_info())
        channel.close()
    """

    def __init__(self, config: ChannelConfig, connector: Connector | None = None) -> None:
        self._config = config
        self._connector: Connector = connector or open_websocket

        self._state = ChannelState.DISCONNECTED
        self._state_lock = threading.Lock()
        self._opened = threading.Event()
        self._wake = threading.Event()
        self._stop = threading.Event()
        self._closed = False

        self._ws: Any = None
        self._thread: threading.Thread | None = None

        self._send_lock = threading.Lock()
        self._pending_lock = threading.Lock()
        self._pending: _PendingReply | None = None

    # ── Introspection ───────────────────────────────────────────────────────

    @property
    def config(self) -> ChannelConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def state(self) -> ChannelState:
        """Current lifecycle state (thread-safe read)."""
        with self._state_lock:
            return self._state

    @property
    def is_open(self) -> bool:
        return self.state is ChannelState.OPEN

    def _set_state(self, new_state: ChannelState) -> None:
        with self._state_lock:
            old_state = self._state
            self._state = new_state
        if new_state is ChannelState.OPEN:
            self._opened.set()
        else:
            self._opened.clear()
        if old_state is not new_state:
            logger.debug("channel %s: %s → %s", self.url, old_state.value, new_state.value)

    # ── Lifecycle ───────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start the background connect/read loop if it is not running."""
        with self._state_lock:
            if self._closed or (self._thread is not None and self._thread.is_alive()):
                return
            self._stop.clear()
            self._thread = threading.Thread(
                target=self._run, name="world-mcp-channel", daemon=True
            )
            self._thread.start()

    def close(self, timeout: float = 2.0) -> None:
        """Stop reconnecting, drop the connection, and fail any pending command."""
        with self._state_lock:
            self._closed = True
        self._stop.set()
        self._wake.set()
        ws = self._ws
        if ws is not None:
            self._abort(ws)
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._fail_pending(ConnectionLost(f"Channel to {self.url} closed"))
        self._set_state(ChannelState.DISCONNECTED)
        logger.info("Command channel to %s closed", self.url)

    def _run(self) -> None:
        policy = self._config.reconnect
        failures = 0
        while not self._stop.is_set():
            self._set_state(ChannelState.CONNECTING)
            try:
                ws = self._connector(self.url, self._config.connect_timeout)
            except _SOCKET_ERRORS as exc:
                failures += 1
                self._set_state(ChannelState.DISCONNECTED)
                if not policy.should_retry(failures):
                    logger.error(
                        "WebSocket %s unreachable after %d attempts (%s) — giving up",
                        self.url,
                        failures,
                        exc,
                    )
                    return
                delay = policy.delay_for(failures)
                logger.warning(
                    "WebSocket connect to %s failed (%s) — retrying in %.1fs",
                    self.url,
                    exc,
                    delay,
                )
                self._sleep(delay)
                continue

            failures = 0
            # A wake-up requested before this connect must not skip the next delay
            self._wake.clear()
            self._ws = ws
            self._set_state(ChannelState.OPEN)
            logger.info("Connected to WebSocket server %s", self.url)
            try:
                self._read_loop(ws)
            finally:
                self._ws = None
                self._set_state(ChannelState.DISCONNECTED)
                self._shutdown(ws)
                self._fail_pending(ConnectionLost(f"Connection to {self.url} lost"))

            if self._stop.is_set():
                break
            delay = policy.delay_for(1)
            logger.warning(
                "Disconnected from WebSocket server %s — reconnecting in %.1fs", self.url, delay
            )
            self._sleep(delay)

    def _sleep(self, seconds: float) -> None:
        """Wait for the reconnect delay; ``send`` or ``close`` cut it short."""
        self._wake.wait(seconds)
        self._wake.clear()

    def _read_loop(self, ws: Any) -> None:
        while not self._stop.is_set():
            try:
                raw = ws.recv()
            except _SOCKET_ERRORS as exc:
                if not self._stop.is_set():
                    logger.error("WebSocket error on %s: %s", self.url, exc)
                return
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", errors="replace")
            if not raw:
                # close frame: websocket-client returns "" and marks the socket closed
                if not getattr(ws, "connected", True):
                    return
                continue
            logger.debug("Received: %s", raw[:500])
            self._deliver(raw)

    @staticmethod
    def _abort(ws: Any) -> None:
        try:
            ws.abort()
        except _SOCKET_ERRORS as exc:
            logger.debug("abort failed: %s", exc)

    @staticmethod
    def _shutdown(ws: Any) -> None:
        try:
            ws.shutdown()
        except _SOCKET_ERRORS as exc:
            logger.debug("shutdown failed: %s", exc)

    # ── Reply correlation ───────────────────────────────────────────────────

    def _deliver(self, raw: str) -> None:
        """Hand ``raw`` to the pending command, or drop it if nobody is waiting."""
        with self._pending_lock:
            pending = self._pending
            if pending is None:
                logger.warning("Discarding unsolicited message: %s", raw[:200])
                return
            if pending.request_id is not None and not self._matches(raw, pending.request_id):
                logger.warning(
                    "Discarding reply not matching request %s: %s", pending.request_id, raw[:200]
                )
                return
            self._pending = None
        pending.resolve(raw)

    def _matches(self, raw: str, request_id: str) -> bool:
        try:
            data = json.loads(raw)
        except ValueError:
            # Unparseable replies are surfaced as MalformedReply by send()
            return True
        if not isinstance(data, dict) or self._config.request_id_field not in data:
            return True
        return data[self._config.request_id_field] == request_id

    def _fail_pending(self, exc: Exception) -> None:
        with self._pending_lock:
            pending = self._pending
            self._pending = None
        if pending is not None:
            pending.fail(exc)

    # ── Public API ──────────────────────────────────────────────────────────

    def wait_until_open(self, timeout: float) -> bool:
        """Ensure the loop is running and wait up to ``timeout`` for OPEN."""
        if self.is_open:
            return True
        self.start()
        # Only a reconnect sleep (DISCONNECTED) may be cut short
        if self.state is ChannelState.DISCONNECTED:
            self._wake.set()
        return self._opened.wait(timeout)

    def send_text(
        self,
        text: str,
        *,
        description: str = "Server response",
        request_id: str | None = None,
    ) -> str:
        """Write ``text`` as one frame and return the next inbound frame unparsed.

        Args:
            text: Frame payload, sent verbatim.
            description: Label used in the timeout message.
            request_id: Id the reply must echo (only with ``request_id_field``).

        Raises:
            ChannelNotReady: Channel not OPEN after the connect grace period.
            CommandTimeout:  No reply within ``reply_timeout``.
            ConnectionLost:  Socket failed before the reply arrived.
        """
        with self._send_lock:
            if not self.wait_until_open(self._config.connect_grace):
                raise ChannelNotReady(self.url, self._config.connect_grace)
            ws = self._ws
            if ws is None:
                raise ChannelNotReady(self.url, self._config.connect_grace)

            pending = _PendingReply(request_id=request_id)
            with self._pending_lock:
                self._pending = pending
            try:
                try:
                    ws.send(text)
                except _SOCKET_ERRORS as exc:
                    raise ConnectionLost(f"Send to {self.url} failed: {exc}") from exc
                logger.debug("Sent: %s", text[:500])

                if not pending.settled.wait(self._config.reply_timeout):
                    raise CommandTimeout(description, self._config.reply_timeout)
            finally:
                with self._pending_lock:
                    if self._pending is pending:
                        self._pending = None

            if pending.error is not None:
                raise pending.error
            return pending.reply or ""

    def send(self, envelope: CommandEnvelope) -> Any:
        """Round-trip a command envelope and return the parsed JSON reply.

        Raises:
            ChannelNotReady, CommandTimeout, ConnectionLost: see :meth:`send_text`.
            MalformedReply: The reply is not valid JSON.
        """
        payload = envelope.to_dict()
        request_id: str | None = None
        if self._config.request_id_field:
            request_id = uuid.uuid4().hex[:12]
            payload[self._config.request_id_field] = request_id

        logger.info("Sending command %s", envelope.label)
        raw = self.send_text(
            json.dumps(payload), description=envelope.label, request_id=request_id
        )
        try:
            return json.loads(raw)
        except ValueError as exc:
            logger.error("Invalid response format for %s: %s", envelope.label, raw[:200])
            raise MalformedReply(raw) from exc
