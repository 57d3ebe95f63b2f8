"""Infrastructure layer — resilience patterns for the camera MCP adapter.

Modules:
    reconnect   Delay schedule for the Command Channel's reconnect loop.
"""
