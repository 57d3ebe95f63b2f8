"""
51World camera MCP — tool, resource, and prompt handlers.

Each handler is registered with the FastMCP instance in server.py through
``register_all(mcp, context)``.  Handlers are thin: check arguments → touch the
note store or round-trip an envelope through the Command Channel → format the
response.  Every tool call emits one structured McpCallLog line.

Errors are logged and re-raised: FastMCP converts them into a failed tool
result (``isError``) or a JSON-RPC error for resource and prompt reads.
``WorldMCP`` routes those reads through resources.py and prompts.py so the
adapter's own error messages reach the client.

Handler categories:
    Tools     — create_note, get_camera_info, send_message, update_camera,
                set_camera_mode
    Resources — note:///<id>, cameradata:///<id>
    Prompts   — summarize_notes, get_camera_info
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.prompts.base import Message
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import GetPromptResult, PromptMessage
from pydantic import Field

from core.camera import commands
from core.camera.types import PresetEntry
from core.notes import NoteStore
from world_mcp.channel import CommandChannel
from world_mcp.prompts import PROMPT_DESCRIPTIONS, render_prompt
from world_mcp.resources import (
    ResourceInfo,
    list_resources,
    note_resource,
    read_note,
    read_preset,
    read_resource,
)
from world_mcp.schemas import (
    CAMERA_MIME_TYPE,
    NOTE_MIME_TYPE,
    URI_CAMERA_TEMPLATE,
    URI_NOTE_TEMPLATE,
    RotationArg,
    make_call_log,
)
from world_mcp.tool_schemas import (
    get_tool_schema,
    list_tool_names,
    require_arguments,
    validate_schema_structure,
)

logger = logging.getLogger(__name__)


@dataclass
class AdapterContext:
    """Objects owned by the server and shared by every handler.

    Built once at startup; handlers never reach for module globals.
    """

    notes: NoteStore
    presets: list[PresetEntry]
    channel: CommandChannel

    @property
    def honor_control_mode(self) -> bool:
        return self.channel.config.honor_control_mode


class WorldMCP(FastMCP):
    """FastMCP server whose reads, prompts and tool calls fail with adapter errors.

    resources/read and prompts/get go straight to ``read_resource`` and
    ``render_prompt`` so clients see ``NotFound``, ``UnsupportedScheme`` and
    ``UnknownPrompt`` messages unwrapped.  tools/call checks the name against
    the tool schemas first and raises ``UnknownTool``.
    """

    def __init__(self, name: str, context: AdapterContext, **settings: Any) -> None:
        super().__init__(name, **settings)
        self.context = context
        register_all(self, context)

    async def read_resource(self, uri: Any) -> list[ReadResourceContents]:
        contents = read_resource(str(uri), self.context.notes)
        return [ReadResourceContents(content=contents["text"], mime_type=contents["mimeType"])]

    async def get_prompt(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> GetPromptResult:
        messages = render_prompt(name, self.context.notes, self.context.presets)
        return GetPromptResult(
            description=PROMPT_DESCRIPTIONS[name],
            messages=[PromptMessage(role=m.role, content=m.content) for m in messages],
        )

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        get_tool_schema(name)
        return await super().call_tool(name, arguments)


# ---------------------------------------------------------------------------
# Timed call helper — structured log on every MCP tool call
# ---------------------------------------------------------------------------


def _log_call(
    tool_name: str,
    inputs: dict[str, Any],
    outputs: dict[str, Any],
    latency_ms: float,
    success: bool = True,
    error: str | None = None,
) -> None:
    """Emit a structured McpCallLog to the logger."""
    record = make_call_log(
        tool_name=tool_name,
        inputs=inputs,
        outputs=outputs,
        latency_ms=latency_ms,
        success=success,
        error=error,
    )
    if success:
        logger.info("%s", record)
    else:
        logger.error("%s", record)


async def _timed(
    tool_name: str,
    inputs: dict[str, Any],
    body: Callable[[], Awaitable[tuple[str, dict[str, Any]]]],
) -> str:
    """Run ``body``, log one McpCallLog, and return its text or re-raise."""
    t_start = time.perf_counter()
    try:
        text, outputs = await body()
    except Exception as exc:
        latency_ms = (time.perf_counter() - t_start) * 1000
        _log_call(tool_name, inputs, {}, latency_ms, success=False, error=str(exc))
        raise
    latency_ms = (time.perf_counter() - t_start) * 1000
    _log_call(tool_name, inputs, outputs, latency_ms)
    return text


# ---------------------------------------------------------------------------
# Handler registration — called from server.py with the FastMCP instance
# ---------------------------------------------------------------------------


def register_all(mcp: FastMCP, context: AdapterContext) -> None:
    """
    Register all tools, resources, and prompts onto the FastMCP instance.

    Args:
        mcp: FastMCP server instance to attach handlers to
        context: Stores and channel shared by the handlers
    """
    _register_tools(mcp, context)
    _register_resources(mcp, context)
    _register_prompts(mcp, context)
    logger.info("All MCP handlers registered (tools + resources + prompts)")


# ---------------------------------------------------------------------------
# TOOLS
# ---------------------------------------------------------------------------


def _register_tools(mcp: FastMCP, ctx: AdapterContext) -> None:
    """Register note and camera-control tools."""

    for name in list_tool_names():
        errors = validate_schema_structure(get_tool_schema(name))
        if errors:
            raise ValueError(f"Invalid schema for tool {name!r}: {errors}")

    # ------------------------------------------------------------------
    # create_note
    # ------------------------------------------------------------------

    @mcp.tool(description=get_tool_schema("create_note")["description"])
    async def create_note(title: str, content: str) -> str:
        """
        Create a new note.

        Args:
            title: Title of the note
            content: Text content of the note
        """
        inputs = {"title": title, "content": content[:50]}

        async def body() -> tuple[str, dict[str, Any]]:
            require_arguments("create_note", {"title": title, "content": content})
            note_id = ctx.notes.create(title, content)
            _publish_note(mcp, ctx, note_id, title)
            return f"Created note {note_id}: {title}", {"note_id": note_id}

        return await _timed("create_note", inputs, body)

    # ------------------------------------------------------------------
    # get_camera_info
    # ------------------------------------------------------------------

    @mcp.tool(description=get_tool_schema("get_camera_info")["description"])
    async def get_camera_info(guid: str = "") -> str:
        """
        Get camera information and status.

        Args:
            guid: Camera GUID (optional)
        """
        inputs = {"guid": guid}

        async def body() -> tuple[str, dict[str, Any]]:
            envelope = commands.get_camera_info(guid)
            result = await asyncio.to_thread(ctx.channel.send, envelope)
            return json.dumps(result), {"reply_type": type(result).__name__}

        return await _timed("get_camera_info", inputs, body)

    # ------------------------------------------------------------------
    # send_message
    # ------------------------------------------------------------------

    @mcp.tool(description=get_tool_schema("send_message")["description"])
    async def send_message(message: str) -> str:
        """
        Send a message to the WebSocket server.

        Args:
            message: Message to send, forwarded unchanged
        """
        inputs = {"message": message[:50]}

        async def body() -> tuple[str, dict[str, Any]]:
            require_arguments("send_message", {"message": message})
            reply = await asyncio.to_thread(ctx.channel.send_text, message)
            return f"Server response: {reply}", {"reply_chars": len(reply)}

        return await _timed("send_message", inputs, body)

    # ------------------------------------------------------------------
    # update_camera
    # ------------------------------------------------------------------

    @mcp.tool(description=get_tool_schema("update_camera")["description"])
    async def update_camera(  # noqa: PLR0913
        location: Annotated[list[float], Field(min_length=3, max_length=3)],
        rotation: RotationArg,
        guid: str = "",
        locationLimit: list[list[float]] | None = None,  # noqa: N803
        pitchLimit: list[float] | None = None,  # noqa: N803
        yawLimit: list[float] | None = None,  # noqa: N803
        viewDistanceLimit: list[float] | None = None,  # noqa: N803
        controlMode: str | None = None,  # noqa: N803
        fieldOfView: float | None = None,  # noqa: N803
        flyTime: float | None = None,  # noqa: N803
    ) -> str:
        """
        Update camera parameters and control settings.

        Omitted fields default to: locationLimit [], pitchLimit [-90, 0],
        yawLimit [-180, 180], viewDistanceLimit [1, 2000], fieldOfView 60,
        flyTime 0.  controlMode is sent as "RTS" unless the server is
        configured to honour the caller's mode.
        """
        params: dict[str, Any] = {
            "guid": guid,
            "location": location,
            "rotation": rotation.model_dump() if rotation is not None else None,
            "locationLimit": locationLimit,
            "pitchLimit": pitchLimit,
            "yawLimit": yawLimit,
            "viewDistanceLimit": viewDistanceLimit,
            "controlMode": controlMode,
            "fieldOfView": fieldOfView,
            "flyTime": flyTime,
        }
        inputs = {k: v for k, v in params.items() if v is not None}

        async def body() -> tuple[str, dict[str, Any]]:
            require_arguments("update_camera", params)
            envelope = commands.update_camera(params, honor_control_mode=ctx.honor_control_mode)
            result = await asyncio.to_thread(ctx.channel.send, envelope)
            return json.dumps(result), {"controlMode": envelope.args["controlMode"]}

        return await _timed("update_camera", inputs, body)

    # ------------------------------------------------------------------
    # set_camera_mode
    # ------------------------------------------------------------------

    @mcp.tool(description=get_tool_schema("set_camera_mode")["description"])
    async def set_camera_mode(controlMode: str) -> str:  # noqa: N803
        """
        Set camera control mode.

        Args:
            controlMode: One of RTS, TPS, FPS
        """
        inputs = {"controlMode": controlMode}

        async def body() -> tuple[str, dict[str, Any]]:
            require_arguments("set_camera_mode", {"controlMode": controlMode})
            envelope = commands.set_camera_mode(controlMode)
            result = await asyncio.to_thread(ctx.channel.send, envelope)
            return (
                f"Camera mode set successfully: {json.dumps(result)}",
                {"controlMode": controlMode},
            )

        return await _timed("set_camera_mode", inputs, body)


# ---------------------------------------------------------------------------
# RESOURCES
# ---------------------------------------------------------------------------


def _reader(uri: str, ctx: AdapterContext) -> Callable[[], str]:
    """Zero-argument reader bound to one concrete URI."""

    def read() -> str:
        return read_resource(uri, ctx.notes)["text"]

    return read


def _publish(mcp: FastMCP, info: ResourceInfo, ctx: AdapterContext) -> None:
    mcp.resource(
        info.uri,
        name=info.name,
        description=info.description,
        mime_type=info.mime_type,
    )(_reader(info.uri, ctx))


def _publish_note(mcp: FastMCP, ctx: AdapterContext, note_id: str, title: str) -> None:
    """Make a freshly created note show up in resources/list."""
    _publish(mcp, note_resource(note_id, title), ctx)


def _register_resources(mcp: FastMCP, ctx: AdapterContext) -> None:
    """
    Register every current note and preset as a concrete resource, plus the
    note:/// and cameradata:/// templates that serve reads of any id.
    """
    for info in list_resources(ctx.notes, ctx.presets):
        _publish(mcp, info, ctx)

    @mcp.resource(
        URI_NOTE_TEMPLATE,
        name="note",
        description="A text note by id",
        mime_type=NOTE_MIME_TYPE,
    )
    def get_note(note_id: str) -> str:
        return read_note(ctx.notes, note_id)

    @mcp.resource(
        URI_CAMERA_TEMPLATE,
        name="cameradata",
        description="Camera preset configuration by id",
        mime_type=CAMERA_MIME_TYPE,
    )
    def get_camera_preset(preset_id: str) -> str:
        return read_preset(preset_id)


# ---------------------------------------------------------------------------
# PROMPTS
# ---------------------------------------------------------------------------


def _prompt(name: str, ctx: AdapterContext) -> Callable[[], list[Message]]:
    def render() -> list[Message]:
        return render_prompt(name, ctx.notes, ctx.presets)

    return render


def _register_prompts(mcp: FastMCP, ctx: AdapterContext) -> None:
    """Register prompt templates over the note and preset stores."""
    for name, description in PROMPT_DESCRIPTIONS.items():
        mcp.prompt(name=name, description=description)(_prompt(name, ctx))
