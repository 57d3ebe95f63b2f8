"""
51World camera MCP — shared schemas, URI constants, and log types.

Defines:
    - URI schemes and builders for MCP resources
    - Pydantic argument models for structured tool inputs
    - McpCallLog dataclass for per-call structured logging

Pure module — no I/O, no side effects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Resource URI schemes
# ---------------------------------------------------------------------------

# All MCP resource URIs follow the pattern:
#   {scheme}:///{identifier}

SCHEME_NOTE = "note"
SCHEME_CAMERA = "cameradata"

NOTE_MIME_TYPE = "text/plain"
CAMERA_MIME_TYPE = "application/json"


def note_uri(note_id: str) -> str:
    return f"{SCHEME_NOTE}:///{note_id}"


def camera_uri(preset_id: str) -> str:
    return f"{SCHEME_CAMERA}:///{preset_id}"


URI_NOTE_TEMPLATE = note_uri("{note_id}")
URI_CAMERA_TEMPLATE = camera_uri("{preset_id}")

# ---------------------------------------------------------------------------
# Tool argument models
# ---------------------------------------------------------------------------


class RotationArg(BaseModel):
    """Camera rotation as accepted by ``update_camera``."""

    pitch: float = Field(..., description="Camera pitch angle in degrees (negative looks down)")
    yaw: float = Field(..., description="Camera yaw angle in degrees")


# ---------------------------------------------------------------------------
# Structured logging
# ---------------------------------------------------------------------------


@dataclass
class McpCallLog:
    """
    One log record per MCP tool call.

    Attributes:
        tool_name:   Name of the tool invoked
        inputs:      Sanitized copy of the input parameters
        outputs:     Summary of the output (NOT the full payload)
        success:     Whether the call completed without error
        latency_ms:  Wall-clock duration in milliseconds
        error:       Error message if success=False, else None
        call_id:     Short id to tie related log lines together
    """

    tool_name: str
    inputs: dict[str, Any]
    outputs: dict[str, Any]
    success: bool
    latency_ms: float
    error: str | None = None
    call_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])

    def __str__(self) -> str:
        status = "OK" if self.success else f"ERR:{self.error}"
        return (
            f"[{self.call_id}] {self.tool_name} {status} {self.latency_ms:.1f}ms "
            f"in={self.inputs} out={self.outputs}"
        )


def make_call_log(
    tool_name: str,
    inputs: dict[str, Any],
    outputs: dict[str, Any],
    latency_ms: float,
    success: bool = True,
    error: str | None = None,
) -> McpCallLog:
    """Build a McpCallLog from call metadata."""
    return McpCallLog(
        tool_name=tool_name,
        inputs=inputs,
        outputs=outputs,
        success=success,
        error=error,
        latency_ms=latency_ms,
    )
