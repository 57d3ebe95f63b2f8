"""
51World camera MCP — prompt templates.

Prompts are pure formatting over the note store and the preset store:

    summarize_notes   every note embedded as a note:/// resource, wrapped in
                      an opening and a closing instruction
    get_camera_info   asks the model to query the live camera and compare it
                      with the shipped presets
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from mcp.server.fastmcp.prompts.base import Message, UserMessage
from mcp.types import EmbeddedResource, TextResourceContents

from core.camera.types import PresetEntry
from core.errors import UnknownPrompt
from core.notes import NoteStore
from world_mcp.schemas import NOTE_MIME_TYPE, camera_uri, note_uri

PROMPT_DESCRIPTIONS: dict[str, str] = {
    "summarize_notes": "Summarize all notes",
    "get_camera_info": "Get camera information and status",
}


def summarize_notes(notes: NoteStore) -> list[Message]:
    """Opening instruction, one embedded resource per note, closing instruction."""
    embedded = [
        UserMessage(
            content=EmbeddedResource(
                type="resource",
                resource=TextResourceContents(
                    uri=note_uri(note_id),
                    mimeType=NOTE_MIME_TYPE,
                    text=note.content,
                ),
            )
        )
        for note_id, note in notes.items()
    ]
    return [
        UserMessage("Please summarize the following notes:"),
        *embedded,
        UserMessage("Provide a concise summary of all the notes above."),
    ]


def camera_info(presets: Iterable[PresetEntry]) -> list[Message]:
    preset_lines = "\n".join(
        f"  - {entry.name} ({camera_uri(entry.name)}): {entry.description}" for entry in presets
    )
    return [
        UserMessage(
            "Call the get_camera_info tool to read the live camera's location, rotation "
            "and control mode from the renderer.\n"
            "Then compare it with the available camera presets:\n"
            f"{preset_lines}\n"
            "Report which preset the camera is closest to, and which update_camera "
            "arguments would move it there."
        )
    ]


def render_prompt(
    name: str, notes: NoteStore, presets: Iterable[PresetEntry]
) -> list[Message]:
    """
    Render the prompt registered under ``name``.

    Raises:
        UnknownPrompt: If ``name`` is not one of PROMPT_DESCRIPTIONS
    """
    renderers: dict[str, Callable[[], list[Message]]] = {
        "summarize_notes": lambda: summarize_notes(notes),
        "get_camera_info": lambda: camera_info(presets),
    }
    if name not in renderers:
        raise UnknownPrompt(name)
    return renderers[name]()
