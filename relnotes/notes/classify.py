"""Sort release notes into the sections of a document."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable

from attrs import define

from .document import Document
from .pretty import prettify_sig_list
from .release_note import ReleaseNote
from .types import NoteBuckets, ReleaseNotes, ReleaseNotesHistory

logger = logging.getLogger(__name__)

# Kinds that place a note in the "API Changes" section.
API_KINDS: frozenset[str] = frozenset({"api-change", "new-api"})
BUG_KIND = "bug"


@define(slots=True, frozen=True)
class Rule:
    """A classification step applied to notes in order of precedence.

    Attributes:
        name: Short name used in logs and tests.
        matches: Predicate deciding whether the rule handles a note.
        apply: Adds the note to the document.
    """

    name: str
    matches: Callable[[ReleaseNote], bool]
    apply: Callable[[Document, ReleaseNote], None]


def _append(buckets: NoteBuckets, key: str, markdown: str) -> None:
    """Append ``markdown`` to the bucket ``key``, creating it if needed."""

    buckets.setdefault(key, []).append(markdown)


def _add_action_required(doc: Document, note: ReleaseNote) -> None:
    doc.action_required.append(note.markdown)


def _add_feature(doc: Document, note: ReleaseNote) -> None:
    doc.new_features.append(note.markdown)


def _add_duplicate(doc: Document, note: ReleaseNote) -> None:
    _append(doc.duplicates, prettify_sig_list(note.sigs), note.markdown)


def _add_by_labels(doc: Document, note: ReleaseNote) -> None:
    """Place a note by its SIG and kind labels.

    The note goes to every SIG bucket it is labelled with and, when it
    carries an API kind, to the API changes as well. Only notes that end
    up in neither fall back to the bug fixes or the uncategorized notes.
    """

    for sig in note.sigs:
        _append(doc.sigs, sig, note.markdown)

    is_api = any(kind in API_KINDS for kind in note.kinds)
    if is_api:
        doc.api_changes.append(note.markdown)

    if note.sigs or is_api:
        return

    # A bug kind only decides the section when nothing else did.
    if BUG_KIND in note.kinds:
        doc.bug_fixes.append(note.markdown)
    else:
        doc.uncategorized.append(note.markdown)


RULES: tuple[Rule, ...] = (
    Rule(
        "action-required",
        lambda note: note.action_required,
        _add_action_required,
    ),
    Rule("feature", lambda note: note.feature, _add_feature),
    Rule("duplicate", lambda note: note.duplicate, _add_duplicate),
    Rule("labels", lambda note: True, _add_by_labels),
)


def classify_note(
    doc: Document, note: ReleaseNote, rules: tuple[Rule, ...] = RULES
) -> str:
    """Add ``note`` to ``doc`` using the first matching rule.

    Args:
        doc: Document being assembled.
        note: Note to classify.
        rules: Rules in order of precedence.

    Returns:
        Name of the rule that handled the note.
    """

    for rule in rules:
        if rule.matches(note):
            rule.apply(doc, note)
            return rule.name

    # Only reachable with a rule set lacking a catch-all rule.
    raise ValueError(f"No rule matched release note {note.pr_number}")


def create_document(
    notes: ReleaseNotes, history: ReleaseNotesHistory
) -> Document:
    """Assemble an organized document from an unorganized set of notes.

    Args:
        notes: Release notes keyed by pull request number.
        history: Pull request numbers in the order the notes should
            appear in their sections. Every number must have an entry
            in ``notes``.

    Returns:
        The classified document.
    """

    doc = Document()
    counts: Counter[str] = Counter()

    for pr in history:
        counts[classify_note(doc, notes[pr])] += 1

    summary = ", ".join(f"{name}={n}" for name, n in sorted(counts.items()))
    logger.debug(f"Classified {len(history)} release notes: {summary}")
    return doc
