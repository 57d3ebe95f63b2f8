"""
Configuration dataclasses for the Command Channel and the MCP adapter.

These immutable config objects decouple parameter passing from constructor
signatures.  ``ChannelConfig.from_env()`` is the only place environment
variables are read; everything downstream receives a validated object.

Environment variables (a ``.env`` file in the working directory is loaded):

    WORLD_WS_URL                 ws://localhost:5151
    WORLD_REPLY_TIMEOUT          5      seconds to wait for a reply
    WORLD_CONNECT_GRACE          1      seconds send() waits for OPEN
    WORLD_CONNECT_TIMEOUT        3      seconds for the TCP/WebSocket handshake
    WORLD_RECONNECT_DELAY        5      seconds between reconnect attempts
    WORLD_RECONNECT_MULTIPLIER   1.0    >1 switches to exponential backoff
    WORLD_RECONNECT_MAX_DELAY    60     cap on a single reconnect delay
    WORLD_RECONNECT_MAX_ATTEMPTS unset  unset = retry forever
    WORLD_RECONNECT_JITTER       0      1 = add ±25% random jitter to each delay
    WORLD_REQUEST_ID_FIELD       unset  envelope key for request-id matching
    WORLD_HONOR_CONTROL_MODE     0      1 = forward update_camera's controlMode
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from infrastructure.reconnect import ReconnectPolicy

DEFAULT_WS_URL = "ws://localhost:5151"

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _env_optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ChannelConfig:
    """
    Configuration for the WebSocket Command Channel.

    Attributes:
        url: WebSocket endpoint of the WDP control service.
        reply_timeout: Seconds a command waits for its reply before failing
            with ``CommandTimeout``.
        connect_grace: Seconds ``send`` waits for the channel to open before
            failing with ``ChannelNotReady``.
        connect_timeout: Handshake timeout for a single connection attempt.
        reconnect: Delay schedule for the background reconnect loop.
        request_id_field: When set, each envelope carries a generated id under
            this key and replies with a different id are discarded.  ``None``
            keeps the wire format exactly ``{apiClassName, apiFuncName, args}``.
        honor_control_mode: Forward ``update_camera``'s ``controlMode`` instead
            of pinning it to ``"RTS"``.
    """

    url: str = DEFAULT_WS_URL
    reply_timeout: float = 5.0
    connect_grace: float = 1.0
    connect_timeout: float = 3.0
    reconnect: ReconnectPolicy = field(default_factory=ReconnectPolicy)
    request_id_field: str | None = None
    honor_control_mode: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.url.startswith(("ws://", "wss://")):
            raise ValueError(f"url must start with ws:// or wss://, got {self.url!r}")
        if self.reply_timeout <= 0:
            raise ValueError(f"reply_timeout must be positive, got {self.reply_timeout}")
        if self.connect_grace < 0:
            raise ValueError(f"connect_grace must be non-negative, got {self.connect_grace}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive, got {self.connect_timeout}")
        if self.request_id_field is not None and not self.request_id_field:
            raise ValueError("request_id_field must be a non-empty string or None")

    @classmethod
    def from_env(cls) -> ChannelConfig:
        """Build a config from ``WORLD_*`` environment variables (and ``.env``)."""
        load_dotenv()
        base = _env_float("WORLD_RECONNECT_DELAY", 5.0)
        reconnect = ReconnectPolicy(
            base_seconds=base,
            multiplier=_env_float("WORLD_RECONNECT_MULTIPLIER", 1.0),
            max_seconds=_env_float("WORLD_RECONNECT_MAX_DELAY", max(60.0, base)),
            max_attempts=_env_optional_int("WORLD_RECONNECT_MAX_ATTEMPTS"),
            jitter=_env_flag("WORLD_RECONNECT_JITTER"),
        )
        return cls(
            url=os.environ.get("WORLD_WS_URL", "").strip() or DEFAULT_WS_URL,
            reply_timeout=_env_float("WORLD_REPLY_TIMEOUT", 5.0),
            connect_grace=_env_float("WORLD_CONNECT_GRACE", 1.0),
            connect_timeout=_env_float("WORLD_CONNECT_TIMEOUT", 3.0),
            reconnect=reconnect,
            request_id_field=os.environ.get("WORLD_REQUEST_ID_FIELD", "").strip() or None,
            honor_control_mode=_env_flag("WORLD_HONOR_CONTROL_MODE"),
        )


DEFAULT_CONFIG = ChannelConfig()
"""Default configuration: ws://localhost:5151, 5 s reply timeout, 1 s grace, fixed 5 s reconnect."""
