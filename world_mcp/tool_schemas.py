"""
51World camera MCP — explicit JSON schemas for all tools.

FastMCP auto-generates schemas from Python type hints.  This module keeps the
*canonical* contract of each tool as a plain dict (JSON-Schema draft-07
compatible) so that:
    1. Tests can assert contract stability
    2. Handlers can check required arguments before touching any store or
       the Command Channel (``require_arguments``)
    3. Unknown tool names fail with a typed ``UnknownTool`` error

Pure module — no I/O, no FastMCP imports, no side effects.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.errors import MissingArgument, UnknownTool

_PAIR = {"type": "array", "items": {"type": "number"}, "minItems": 2, "maxItems": 2}

# ---------------------------------------------------------------------------
# Individual tool schemas (JSON Schema draft-07)
# ---------------------------------------------------------------------------

_CREATE_NOTE_SCHEMA: dict[str, Any] = {
    "name": "create_note",
    "description": "Create a new note; it becomes readable as note:///<id>.",
    "input_schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Title of the note", "minLength": 1},
            "content": {
                "type": "string",
                "description": "Text content of the note",
                "minLength": 1,
            },
        },
        "required": ["title", "content"],
    },
}

_GET_CAMERA_INFO_SCHEMA: dict[str, Any] = {
    "name": "get_camera_info",
    "description": "Get the live camera's information and status from the renderer.",
    "input_schema": {
        "type": "object",
        "properties": {
            "guid": {"type": "string", "description": "Camera GUID", "default": ""},
        },
        "required": [],
    },
}

_SEND_MESSAGE_SCHEMA: dict[str, Any] = {
    "name": "send_message",
    "description": "Send a raw text message to the renderer's WebSocket and return its reply.",
    "input_schema": {
        "type": "object",
        "properties": {
            "message": {"type": "string", "description": "Message to send", "minLength": 1},
        },
        "required": ["message"],
    },
}

_UPDATE_CAMERA_SCHEMA: dict[str, Any] = {
    "name": "update_camera",
    "description": (
        "Update camera parameters and control settings. Omitted optional fields "
        "fall back to documented defaults."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "guid": {"type": "string", "description": "Camera GUID", "default": ""},
            "location": {
                "type": "array",
                "items": {"type": "number"},
                "minItems": 3,
                "maxItems": 3,
                "description": "Camera location coordinates [lon, lat, alt]",
            },
            "rotation": {
                "type": "object",
                "properties": {
                    "pitch": {"type": "number", "description": "Camera pitch angle"},
                    "yaw": {"type": "number", "description": "Camera yaw angle"},
                },
                "required": ["pitch", "yaw"],
            },
            "locationLimit": {
                "type": "array",
                "items": {"type": "array", "items": {"type": "number"}},
                "description": "Bounding region as coordinate triples",
                "default": [],
            },
            "pitchLimit": {**_PAIR, "description": "Pitch limits [min, max]", "default": [-90, 0]},
            "yawLimit": {**_PAIR, "description": "Yaw limits [min, max]", "default": [-180, 180]},
            "viewDistanceLimit": {
                **_PAIR,
                "description": "View distance limits [min, max]",
                "default": [1, 2000],
            },
            "controlMode": {
                "type": "string",
                "enum": ["RTS", "TPS", "FPS"],
                "description": "Camera control mode (pinned to RTS unless the server honours it)",
                "default": "RTS",
            },
            "fieldOfView": {
                "type": "number",
                "description": "Horizontal field of view in degrees",
                "exclusiveMinimum": 0,
                "maximum": 120,
                "default": 60,
            },
            "flyTime": {
                "type": "number",
                "description": "Transition time in seconds",
                "minimum": 0,
                "default": 0,
            },
        },
        "required": ["location", "rotation"],
    },
}

_SET_CAMERA_MODE_SCHEMA: dict[str, Any] = {
    "name": "set_camera_mode",
    "description": "Set the camera control mode (RTS, TPS or FPS) on the renderer.",
    "input_schema": {
        "type": "object",
        "properties": {
            "controlMode": {
                "type": "string",
                "enum": ["RTS", "TPS", "FPS"],
                "description": "Camera control mode",
            },
        },
        "required": ["controlMode"],
    },
}

_TOOL_SCHEMAS: dict[str, dict[str, Any]] = {
    schema["name"]: schema
    for schema in (
        _CREATE_NOTE_SCHEMA,
        _GET_CAMERA_INFO_SCHEMA,
        _SEND_MESSAGE_SCHEMA,
        _UPDATE_CAMERA_SCHEMA,
        _SET_CAMERA_MODE_SCHEMA,
    )
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_tool_schema(tool_name: str) -> dict[str, Any]:
    """
    Return the canonical schema for ``tool_name``.

    Raises:
        UnknownTool: If tool_name is not registered
    """
    if tool_name not in _TOOL_SCHEMAS:
        raise UnknownTool(tool_name)
    return _TOOL_SCHEMAS[tool_name]


def list_tool_names() -> list[str]:
    """Return sorted list of all registered tool names."""
    return sorted(_TOOL_SCHEMAS.keys())


def get_all_schemas() -> list[dict[str, Any]]:
    """Return all tool schemas as a list, sorted by tool name."""
    return [_TOOL_SCHEMAS[name] for name in sorted(_TOOL_SCHEMAS)]


def require_arguments(tool_name: str, arguments: Mapping[str, Any]) -> None:
    """
    Check that every required argument of ``tool_name`` is present.

    ``None`` and the empty string count as absent.

    Raises:
        UnknownTool: If tool_name is not registered
        MissingArgument: For the first required argument that is absent
    """
    schema = get_tool_schema(tool_name)
    for name in schema["input_schema"]["required"]:
        value = arguments.get(name)
        if value is None or value == "":
            raise MissingArgument(tool_name, name)


def validate_schema_structure(schema: dict[str, Any]) -> list[str]:
    """
    Validate that a schema dict has the expected top-level structure.

    Returns:
        List of error strings — empty list means valid
    """
    errors: list[str] = []

    if not isinstance(schema.get("name"), str) or not schema.get("name"):
        errors.append("'name' must be a non-empty string")

    if not isinstance(schema.get("description"), str) or len(schema["description"]) < 20:
        errors.append("'description' must be at least 20 chars — be descriptive for the LLM")

    inp = schema.get("input_schema")
    if inp is None:
        errors.append("missing 'input_schema'")
        return errors
    if inp.get("type") != "object":
        errors.append("input_schema.type must be 'object'")
    if "properties" not in inp:
        errors.append("input_schema missing 'properties'")
    if "required" not in inp:
        errors.append("input_schema missing 'required' (use [] if no required params)")
    else:
        props = inp.get("properties", {})
        for r in inp["required"]:
            if r not in props:
                errors.append(f"required param {r!r} not in properties")

    return errors
