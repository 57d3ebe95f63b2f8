"""
In-memory note store.

Notes are keyed by sequential string ids ("1", "2", ...).  The next id is
``count + 1``, so ids stay dense only while nothing is ever removed; the
store deliberately exposes no delete or update operation.

Not persisted — the store lives for the lifetime of the server process.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from core.errors import MissingArgument, NotFound


@dataclass(frozen=True)
class Note:
    """A text note exposed as ``note:///<id>``."""

    title: str
    content: str


DEFAULT_NOTES: tuple[Note, ...] = (
    Note(title="First Note", content="This is note 1"),
    Note(title="Second Note", content="This is note 2"),
)
"""Notes the server starts with."""


class NoteStore:
    """Thread-safe, insertion-only note mapping.

    Args:
        seed: Notes to insert at construction, in order.

    Example::

        store = NoteStore()
        note_id = store.create("Idea", "Move the camera to Workspace")
        store.get(note_id).title  # "Idea"
    """

    def __init__(self, seed: Iterable[Note] = ()) -> None:
        self._notes: dict[str, Note] = {}
        self._lock = threading.Lock()
        for note in seed:
            self._insert(note)

    def _insert(self, note: Note) -> str:
        note_id = str(len(self._notes) + 1)
        self._notes[note_id] = note
        return note_id

    def create(self, title: str, content: str) -> str:
        """Insert a note and return its id.

        Raises:
            MissingArgument: If ``title`` or ``content`` is empty.
        """
        if not title:
            raise MissingArgument("create_note", "title")
        if not content:
            raise MissingArgument("create_note", "content")
        with self._lock:
            return self._insert(Note(title=title, content=content))

    def get(self, note_id: str) -> Note:
        """Return the note with ``note_id``.

        Raises:
            NotFound: If the id is unknown.
        """
        with self._lock:
            note = self._notes.get(note_id)
        if note is None:
            raise NotFound("Note", note_id)
        return note

    def items(self) -> list[tuple[str, Note]]:
        """Snapshot of ``(id, note)`` pairs in creation order."""
        with self._lock:
            return list(self._notes.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        with self._lock:
            return note_id in self._notes
