"""Load already-parsed release notes from JSON or YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import attrs
import yaml  # type: ignore[import-untyped]

from relnotes.notes.errors import NotesFileError
from relnotes.notes.release_note import ReleaseNote
from relnotes.notes.types import ReleaseNotes, ReleaseNotesHistory
from relnotes.serialize import json_loads

logger = logging.getLogger(__name__)

JSONDict = Dict[str, Any]
LoadedNotes = Tuple[ReleaseNotes, ReleaseNotesHistory]

# Alternative spellings accepted for record keys.
_ALIASES = {
    "prNumber": "pr_number",
    "actionRequired": "action_required",
}
_FIELDS = attrs.fields_dict(ReleaseNote)
_LIST_FIELDS = ("sigs", "kinds")
_BOOL_FIELDS = ("action_required", "feature", "duplicate")


def _pr_number(value: Any, where: str) -> int:  # noqa: ANN401
    """Convert a pull request number read from a file to ``int``."""

    if isinstance(value, bool):
        raise NotesFileError(f"{where}: invalid PR number {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise NotesFileError(f"{where}: invalid PR number {value!r}") from exc


def _flag(value: Any, where: str) -> bool:  # noqa: ANN401
    """Return a flag read from a file, accepting booleans and 0 or 1."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise NotesFileError(f"{where}: expected true or false, got {value!r}")


def note_from_dict(data: JSONDict, pr_number: Any = None) -> ReleaseNote:  # noqa: ANN401
    """Create a ``ReleaseNote`` from a record read from a notes file.

    Args:
        data: Record with snake_case (or camelCase) keys. Unknown keys
            are ignored.
        pr_number: Number to use when the record has none, such as the
            key of the record in a mapping.

    Returns:
        The parsed note.

    Raises:
        NotesFileError: The record lacks a number or a Markdown body, or
            has a label list or flag of the wrong type.
    """

    if not isinstance(data, dict):
        raise NotesFileError(f"release note must be a mapping, got {data!r}")

    values: JSONDict = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name in _FIELDS:
            values[name] = value

    if values.get("pr_number") is None:
        values["pr_number"] = pr_number
    values["pr_number"] = _pr_number(values["pr_number"], "release note")

    where = f"release note {values['pr_number']}"
    if not isinstance(values.get("markdown"), str):
        raise NotesFileError(f"{where}: missing markdown text")

    for name in _LIST_FIELDS:
        items = values.get(name) or []
        if isinstance(items, str) or not isinstance(items, list):
            raise NotesFileError(f"{where}: {name} must be a list")
        values[name] = [str(item) for item in items]

    for name in _BOOL_FIELDS:
        values[name] = _flag(values.get(name, False), f"{where}: {name}")

    return ReleaseNote(**values)


def _parse_notes(raw: Any) -> ReleaseNotes:  # noqa: ANN401
    """Parse the ``notes`` section, given as a list or a mapping."""

    if isinstance(raw, dict):
        parsed = [
            note_from_dict(record, _pr_number(key, "notes key"))
            for key, record in raw.items()
        ]
    elif isinstance(raw, list):
        parsed = [note_from_dict(record) for record in raw]
    else:
        raise NotesFileError("notes must be a list or a mapping")

    notes: ReleaseNotes = {}
    for note in parsed:
        if note.pr_number in notes:
            raise NotesFileError(
                f"duplicate release note for PR {note.pr_number}"
            )
        notes[note.pr_number] = note

    return notes


def parse_notes_data(data: Any) -> LoadedNotes:  # noqa: ANN401
    """Build the notes and their history from decoded file content.

    Args:
        data: Either a list of records, or a mapping with a ``notes``
            entry and an optional ``history`` list of PR numbers.

    Returns:
        The notes keyed by PR number and the order to process them in.
        Without a ``history`` the order of the records is used.

    Raises:
        NotesFileError: The data has an unexpected structure or the
            history refers to an unknown note.
    """

    if isinstance(data, list):
        notes = _parse_notes(data)
        raw_history = None
    elif isinstance(data, dict) and "notes" in data:
        notes = _parse_notes(data["notes"])
        raw_history = data.get("history")
    else:
        raise NotesFileError("expected a list of notes or a 'notes' mapping")

    if raw_history is None:
        return notes, list(notes)

    if not isinstance(raw_history, list):
        raise NotesFileError("history must be a list of PR numbers")

    history = [_pr_number(pr, "history") for pr in raw_history]
    missing = [pr for pr in history if pr not in notes]
    if missing:
        raise NotesFileError(
            f"history refers to unknown notes: {', '.join(map(str, missing))}"
        )

    return notes, history


def load_notes(path: Path) -> LoadedNotes:
    """Read release notes and their history from ``path``.

    Args:
        path: Location of a JSON (``.json``) or YAML file.

    Returns:
        The notes keyed by PR number and the order to process them in.

    Raises:
        NotesFileError: The file cannot be decoded or has an unexpected
            structure.
        OSError: The file cannot be read.
    """

    text = path.read_text(encoding="utf-8")

    # Decode JSON or YAML depending on file extension.
    try:
        if path.suffix == ".json":
            data = json_loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise NotesFileError(f"{path}: {exc}") from exc

    notes, history = parse_notes_data(data)
    logger.debug(f"Loaded {len(notes)} release notes from {path}")
    return notes, history
