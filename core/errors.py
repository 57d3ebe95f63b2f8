"""core/errors.py — Exception taxonomy for the camera MCP adapter.

Every failure that reaches the MCP boundary is one of these types.  FastMCP
turns a raised exception into a failed tool result (``isError``) or a
JSON-RPC error, so handlers log and re-raise rather than returning strings.

    WorldMcpError
    ├── NotFound            unknown note / preset id
    ├── UnsupportedScheme   resource URI scheme other than note: / cameradata:
    ├── MissingArgument     required tool argument absent or empty
    ├── UnknownTool         tool name not registered
    ├── UnknownPrompt       prompt name not registered
    └── ChannelError
        ├── ChannelNotReady  channel not OPEN after the grace period
        ├── CommandTimeout   no reply within the reply timeout
        ├── MalformedReply   reply body is not JSON
        └── ConnectionLost   connection dropped while a command was in flight
"""

from __future__ import annotations


class WorldMcpError(Exception):
    """Base class for all adapter errors."""


class NotFound(WorldMcpError, LookupError):
    """Raised when a note or preset id does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class UnsupportedScheme(WorldMcpError, ValueError):
    """Raised for resource URIs whose scheme is not served here."""

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"Unsupported protocol: {scheme}")


class MissingArgument(WorldMcpError, ValueError):
    """Raised when a required tool argument is absent or empty."""

    def __init__(self, tool_name: str, argument: str) -> None:
        self.tool_name = tool_name
        self.argument = argument
        super().__init__(f"{tool_name}: argument {argument!r} is required")


class UnknownTool(WorldMcpError, KeyError):
    """Raised when a tool name has no registered schema."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownPrompt(WorldMcpError, KeyError):
    """Raised when a prompt name is not registered."""

    def __init__(self, prompt_name: str) -> None:
        self.prompt_name = prompt_name
        super().__init__(f"Unknown prompt: {prompt_name}")

    def __str__(self) -> str:
        return str(self.args[0])


class ChannelError(WorldMcpError):
    """Base class for Command Channel failures."""


class ChannelNotReady(ChannelError):
    """The channel did not reach OPEN within the connect grace period."""

    def __init__(self, url: str, grace_seconds: float) -> None:
        self.url = url
        self.grace_seconds = grace_seconds
        super().__init__(
            f"WebSocket connection to {url} not open after {grace_seconds:.1f}s"
        )


class CommandTimeout(ChannelError):
    """No reply arrived within the reply timeout."""

    def __init__(self, description: str, timeout_seconds: float) -> None:
        self.description = description
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{description} timeout after {timeout_seconds:.1f}s")


class MalformedReply(ChannelError, ValueError):
    """The reply body could not be parsed as JSON."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid response format: {raw[:200]!r}")


class ConnectionLost(ChannelError):
    """The connection dropped while a command was waiting for its reply."""
