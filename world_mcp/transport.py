"""
51World camera MCP — transport configuration and logging setup.

Responsibilities:
    - Configure structured logging to stderr (NEVER stdout — corrupts stdio transport)
    - Provide transport selection: stdio (local) vs SSE (remote clients)

Transport decision matrix:
    ┌──────────────────────────┬──────────────────────────────────┐
    │ Context                  │ Transport                        │
    ├──────────────────────────┼──────────────────────────────────┤
    │ Claude Desktop / IDE     │ stdio (spawned subprocess)       │
    │ Remote agent / dashboard │ HTTP+SSE                         │
    │ Testing                  │ stdio (same process, mocked)     │
    └──────────────────────────┴──────────────────────────────────┘
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal

TransportMode = Literal["stdio", "sse"]

# ---------------------------------------------------------------------------
# Logging — must go to stderr, NEVER stdout
# ---------------------------------------------------------------------------

# MCP stdio transport uses stdout exclusively for JSON-RPC messages.
# Any print() or logging to stdout corrupts the protocol stream.

_LOG_FORMAT = "%(asctime)s.%(msecs)03d " "[%(name)s] %(levelname)s " "%(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"


def get_log_level() -> int:
    """Read WORLD_LOG_LEVEL (name or number); INFO when unset or unknown."""
    raw = os.getenv("WORLD_LOG_LEVEL", "INFO").strip().upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int | None = None) -> None:
    """
    Configure root logger to write structured output to stderr.

    Must be called BEFORE the MCP server starts to ensure no
    accidental stdout writes corrupt the stdio transport.

    Args:
        level: Python logging level (default: WORLD_LOG_LEVEL or INFO)
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level if level is not None else get_log_level())

    # websocket-client logs every frame trace at DEBUG/INFO
    logging.getLogger("websocket").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Transport selection
# ---------------------------------------------------------------------------


def get_transport_mode() -> TransportMode:
    """
    Determine the active transport mode from environment.

    Reads MCP_TRANSPORT env var:
        "sse"   → HTTP + Server-Sent Events
        default → "stdio"

    Returns:
        "stdio" or "sse"
    """
    mode = os.getenv("MCP_TRANSPORT", "stdio").lower().strip()
    if mode not in ("stdio", "sse"):
        logging.getLogger(__name__).warning(
            "Unknown MCP_TRANSPORT=%r — falling back to stdio", mode
        )
        return "stdio"
    return mode  # type: ignore[return-value]
