"""
51World camera MCP server package.

Exposes notes, camera presets, and camera-control commands for the WDP 3D
renderer via the Model Context Protocol.  Any MCP-compatible client (Claude
Desktop, IDE agents) can read the presets and move the live camera.

Architecture:
    server.py       — FastMCP instance + startup entrypoint
    handlers.py     — Tool/resource/prompt registration
    resources.py    — Resource listing and URI-based reads
    prompts.py      — Prompt templates over the note store
    tool_schemas.py — Canonical JSON schemas + required-argument checks
    channel.py      — Persistent WebSocket Command Channel to the renderer
    schemas.py      — URI schemes, tool argument models, structured log types
    transport.py    — Transport configuration (stdio / SSE) + logging setup
"""
