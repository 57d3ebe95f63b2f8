"""
51World Camera MCP Server — entrypoint.

This is the main entrypoint for the MCP server. It:
    1. Configures logging (stderr only — stdout is reserved for JSON-RPC)
    2. Creates the FastMCP instance with the camera-adapter identity
    3. Builds the note store, preset list, and Command Channel
    4. Registers all handlers (tools, resources, prompts) from handlers.py
    5. Starts the Command Channel, then the transport (stdio by default,
       SSE via MCP_TRANSPORT=sse)

Running:
    # Via Python (development)
    python -m world_mcp.server

    # Installed console script
    world-mcp

    # Different renderer endpoint
    WORLD_WS_URL=ws://10.0.0.5:5151 python -m world_mcp.server

Claude Desktop config (~/.../claude_desktop_config.json):
    {
        "mcpServers": {
            "mcp-51world-server": {
                "command": "/absolute/path/.venv/bin/python",
                "args": ["-m", "world_mcp.server"],
                "env": {
                    "WORLD_WS_URL": "ws://localhost:5151"
                }
            }
        }
    }
"""

from __future__ import annotations

import logging

from core.camera.presets import list_presets
from core.config import ChannelConfig
from core.notes import DEFAULT_NOTES, NoteStore
from world_mcp.channel import CommandChannel
from world_mcp.handlers import AdapterContext, WorldMCP
from world_mcp.transport import configure_logging, get_transport_mode

# ---------------------------------------------------------------------------
# Logging — configure FIRST before any other imports that might log
# ---------------------------------------------------------------------------

configure_logging()
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastMCP server instance
# ---------------------------------------------------------------------------

# Server identity: used in MCP client UIs as the connector name
_SERVER_NAME = "mcp-51world-server"
_SERVER_VERSION = "0.1.0"

_INSTRUCTIONS = (
    "51World camera server — keep notes, browse the office camera presets "
    "(cameradata:///Reception, Workspace, ...), and drive the live 3D camera. "
    "Read a cameradata:/// resource and pass its CameraData to update_camera to fly "
    "to a preset. Use get_camera_info to read the current camera. "
    "Use set_camera_mode to switch between RTS, TPS and FPS."
)


def build_context(config: ChannelConfig | None = None) -> AdapterContext:
    """Create the stores and an unstarted Command Channel."""
    return AdapterContext(
        notes=NoteStore(DEFAULT_NOTES),
        presets=list_presets(),
        channel=CommandChannel(config or ChannelConfig.from_env()),
    )


def create_server(context: AdapterContext) -> WorldMCP:
    """Create a FastMCP instance with every handler bound to ``context``."""
    return WorldMCP(_SERVER_NAME, context, instructions=_INSTRUCTIONS)


context = build_context()
mcp = create_server(context)

logger.info(
    "51World MCP Server v%s initialized — %d tools registered, renderer at %s",
    _SERVER_VERSION,
    len(mcp._tool_manager._tools),  # type: ignore[attr-defined]
    context.channel.url,
)

# ---------------------------------------------------------------------------
# Main entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    """
    Start the MCP server.

    The Command Channel starts connecting in the background first; the
    server accepts MCP requests whether or not the renderer is reachable.

    Transport is determined by MCP_TRANSPORT env var:
        stdio (default) — for Claude Desktop and local tools
        sse             — for remote clients
    """
    transport = get_transport_mode()
    logger.info("Starting 51World MCP Server (transport=%s)", transport)
    context.channel.start()
    try:
        mcp.run(transport=transport)
    finally:
        context.channel.close()


if __name__ == "__main__":
    main()
