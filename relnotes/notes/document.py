"""Organized structure of a release notes document."""

from __future__ import annotations

from typing import Any

from attrs import define, field

from .types import NoteBuckets, NoteList


@define(slots=True)
class Document:
    """Release notes sorted into the sections of the final document.

    Attributes:
        new_features: Notes flagged as new features.
        action_required: Notes users must act upon before upgrading.
        api_changes: Notes with an ``api-change`` or ``new-api`` kind.
        duplicates: Notes shared by several SIGs, keyed by the composed
            SIG list header (for example ``"SIG Apps and SIG Node"``).
        sigs: Notes keyed by raw SIG label. A note with several SIGs is
            stored once under each of them.
        bug_fixes: Notes with a ``bug`` kind and no other categorization.
        uncategorized: Everything else.
    """

    new_features: NoteList = field(factory=list)
    action_required: NoteList = field(factory=list)
    api_changes: NoteList = field(factory=list)
    duplicates: NoteBuckets = field(factory=dict)
    sigs: NoteBuckets = field(factory=dict)
    bug_fixes: NoteList = field(factory=list)
    uncategorized: NoteList = field(factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the document as a JSON friendly mapping."""

        return {
            "new_features": list(self.new_features),
            "action_required": list(self.action_required),
            "api_changes": list(self.api_changes),
            "duplicate_notes": {
                header: list(notes)
                for header, notes in sorted(self.duplicates.items())
            },
            "sigs": {
                sig: list(notes) for sig, notes in sorted(self.sigs.items())
            },
            "bug_fixes": list(self.bug_fixes),
            "uncategorized": list(self.uncategorized),
        }
