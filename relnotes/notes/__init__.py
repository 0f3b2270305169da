"""Classification and rendering of release notes."""

from .classify import create_document
from .document import Document
from .errors import ConfigError, NotesFileError, RelnotesError
from .pretty import prettify_sig, prettify_sig_list
from .release_note import ReleaseNote
from .render import render_markdown

__all__ = [
    "ConfigError",
    "Document",
    "NotesFileError",
    "ReleaseNote",
    "RelnotesError",
    "create_document",
    "prettify_sig",
    "prettify_sig_list",
    "render_markdown",
]
