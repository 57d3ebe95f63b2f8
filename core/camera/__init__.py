"""core/camera — Pure camera model for the WDP renderer.

This package contains zero I/O, zero network calls, zero filesystem access.
Types, the preset store, and command generators are deterministic functions
of their inputs.

WebSocket I/O to the renderer lives in world_mcp/channel.py.
"""
