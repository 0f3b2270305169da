"""A single release note derived from a pull request."""

from __future__ import annotations

from attrs import define, field

from .types import LabelList


@define(slots=True, frozen=True)
class ReleaseNote:
    """A single release note derived from a pull request.

    Attributes:
        pr_number: Number of the pull request the note comes from.
        markdown: Markdown body of the note as it should be rendered.
        action_required: Users must act before upgrading.
        feature: The note announces a new feature.
        duplicate: The same note applies to several SIGs.
        sigs: SIG labels (``sig-`` prefix stripped) attached to the PR.
        kinds: Kind labels (``kind/`` prefix stripped) attached to the PR.
    """

    pr_number: int
    markdown: str
    action_required: bool = False
    feature: bool = False
    duplicate: bool = False
    sigs: LabelList = field(factory=list, repr=False)
    kinds: LabelList = field(factory=list, repr=False)
