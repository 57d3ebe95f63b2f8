"""
51World camera MCP — resource listing and URI-based reads.

handlers.py registers the @mcp.resource() decorators.
resources.py contains the implementation functions called by those decorators,
so the URI contract can be tested without a FastMCP instance.

Two URI schemes are served:

    note:///<id>          text/plain         the note's content
    cameradata:///<id>    application/json   {"Name", "Description", "CameraData"}

Reads fail loudly — an unknown id raises ``NotFound`` and any other scheme
raises ``UnsupportedScheme``; FastMCP reports both as a failed read.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from core.camera.presets import get_preset
from core.camera.types import PresetEntry
from core.errors import UnsupportedScheme
from core.notes import NoteStore
from world_mcp.schemas import (
    CAMERA_MIME_TYPE,
    NOTE_MIME_TYPE,
    SCHEME_CAMERA,
    SCHEME_NOTE,
    camera_uri,
    note_uri,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceInfo:
    """One entry of the resource listing."""

    uri: str
    name: str
    description: str
    mime_type: str


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


def note_resource(note_id: str, title: str) -> ResourceInfo:
    return ResourceInfo(
        uri=note_uri(note_id),
        name=title,
        description=f"A text note: {title}",
        mime_type=NOTE_MIME_TYPE,
    )


def preset_resource(preset_id: str, entry: PresetEntry) -> ResourceInfo:
    config = entry.config
    return ResourceInfo(
        uri=camera_uri(preset_id),
        name=f"Camera: {preset_id}",
        description=(
            f"Camera configuration for {preset_id}: {entry.description} "
            f"({config.control_mode.value}, fieldOfView {config.field_of_view:g})"
        ),
        mime_type=CAMERA_MIME_TYPE,
    )


def list_resources(notes: NoteStore, presets: Iterable[PresetEntry]) -> list[ResourceInfo]:
    """All notes followed by all presets."""
    note_entries = [note_resource(note_id, note.title) for note_id, note in notes.items()]
    preset_entries = [preset_resource(entry.name, entry) for entry in presets]
    return note_entries + preset_entries


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def parse_uri(uri: str) -> tuple[str, str]:
    """Split ``scheme:///id`` into ``(scheme, id)``."""
    parts = urlsplit(uri)
    path = parts.path
    if path.startswith("/"):
        path = path[1:]
    return parts.scheme, path


def read_note(notes: NoteStore, note_id: str) -> str:
    """Note content as plain text.  Raises ``NotFound``."""
    return notes.get(note_id).content


def read_preset(preset_id: str) -> str:
    """Preset entry as JSON.  Raises ``NotFound``."""
    return json.dumps(get_preset(preset_id).to_dict(), ensure_ascii=False)


def read_resource(uri: str, notes: NoteStore) -> dict[str, Any]:
    """
    Read a resource by URI.

    Returns:
        ``{"uri", "mimeType", "text"}`` for the single content item

    Raises:
        NotFound: Unknown note or preset id
        UnsupportedScheme: Scheme other than note: / cameradata:
    """
    scheme, identifier = parse_uri(uri)
    if scheme == SCHEME_NOTE:
        return {"uri": uri, "mimeType": NOTE_MIME_TYPE, "text": read_note(notes, identifier)}
    if scheme == SCHEME_CAMERA:
        return {"uri": uri, "mimeType": CAMERA_MIME_TYPE, "text": read_preset(identifier)}
    logger.warning("read_resource: unsupported scheme in %r", uri)
    raise UnsupportedScheme(f"{scheme}:")
