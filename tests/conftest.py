"""Shared fixtures for the release notes tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from relnotes.notes import ReleaseNote

NoteFactory = Callable[..., ReleaseNote]


@pytest.fixture
def make_note() -> NoteFactory:
    """Return a factory building notes with sequential PR numbers."""

    counter = {"pr": 100}

    def factory(markdown: str | None = None, **kwargs: Any) -> ReleaseNote:
        counter["pr"] += 1
        pr_number = kwargs.pop("pr_number", counter["pr"])
        if markdown is None:
            markdown = f"Change from #{pr_number}"
        return ReleaseNote(pr_number=pr_number, markdown=markdown, **kwargs)

    return factory
