"""Common type aliases for release note structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .release_note import ReleaseNote  # noqa: F401


ReleaseNotes = dict[int, "ReleaseNote"]
ReleaseNotesHistory = list[int]
NoteList = list[str]
NoteBuckets = dict[str, NoteList]
LabelList = list[str]
