"""Render a release notes document as Markdown."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TextIO

from .document import Document
from .downloads import create_downloads_table
from .pretty import prettify_sig
from .types import NoteBuckets

BULLET = "- "


def format_note(note: str) -> str:
    """Return ``note`` as a bulleted Markdown line ending in a newline."""

    if not note.startswith(BULLET):
        note = BULLET + note
    return note + "\n"


def _write_notes(w: TextIO, notes: Iterable[str]) -> None:
    for note in notes:
        w.write(format_note(note))


def _write_section(w: TextIO, heading: str, notes: list[str]) -> None:
    """Write a heading followed by its notes; empty sections are skipped."""

    if not notes:
        return

    w.write(f"{heading}\n\n")
    _write_notes(w, notes)
    w.write("\n\n")


def _write_buckets(
    w: TextIO,
    heading: str,
    buckets: NoteBuckets,
    title: Callable[[str], str] = str,
    trailer: str = "\n",
) -> None:
    """Write a section with one sub-heading per bucket, sorted by key.

    Args:
        w: Text stream receiving the Markdown.
        heading: Heading of the whole section.
        buckets: Notes keyed by bucket name.
        title: Turns a key into its sub-heading text.
        trailer: Text written after the last bucket.
    """

    if not buckets:
        return

    w.write(f"{heading}\n\n")
    for key in sorted(buckets):
        w.write(f"#### {title(key)}\n\n")
        _write_notes(w, buckets[key])
        w.write("\n")
    w.write(trailer)


def _sig_heading(sig: str) -> str:
    return f"SIG {prettify_sig(sig)}"


def render_markdown(
    w: TextIO,
    doc: Document,
    bucket: str,
    tars: str,
    prev_tag: str,
    new_tag: str,
) -> None:
    """Write ``doc`` to ``w`` in Markdown format.

    The downloads table comes first when ``tars`` is set, followed by
    the non-empty sections of the document. Rendering stops at the first
    error; whatever was written before stays in ``w``.

    Args:
        w: Text stream receiving the Markdown.
        doc: Classified release notes.
        bucket: Storage bucket the artifacts are published to.
        tars: Directory holding the release tarballs; empty to skip the
            downloads table.
        prev_tag: Tag of the previous release.
        new_tag: Tag of the release being documented.

    Raises:
        ConfigError: ``tars`` is set but one of the tags is empty.
        OSError: An artifact cannot be read or ``w`` cannot be written.
    """

    create_downloads_table(w, bucket, tars, prev_tag, new_tag)

    _write_section(w, "## Action Required", doc.action_required)
    _write_section(w, "## New Features", doc.new_features)
    _write_section(w, "### API Changes", doc.api_changes)

    _write_buckets(w, "### Notes from Multiple SIGs", doc.duplicates)

    # Sorted by raw label, not by pretty name.
    _write_buckets(
        w,
        "### Notes from Individual SIGs",
        doc.sigs,
        title=_sig_heading,
        trailer="\n\n",
    )

    _write_section(w, "### Bug Fixes", doc.bug_fixes)

    # Uncategorized notes are published as "Other Notable Changes".
    _write_section(w, "### Other Notable Changes", doc.uncategorized)
