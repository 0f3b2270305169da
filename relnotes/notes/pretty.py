"""Human readable names for SIG labels."""

from __future__ import annotations

from collections.abc import Iterable

# Tokens whose capitalization cannot be derived from a simple rule.
SPECIAL_CASES: dict[str, str] = {
    "vsphere": "vSphere",
    "vmware": "VMWare",
    "openstack": "OpenStack",
}

# Tokens rendered fully upper-cased.
ACRONYMS: frozenset[str] = frozenset({"api", "aws", "cli", "gcp"})


def _title(part: str) -> str:
    """Upper-case the first letter of ``part`` and lower-case the rest."""

    return part[:1].upper() + part[1:].lower()


def _prettify_part(part: str) -> str:
    if part in SPECIAL_CASES:
        return SPECIAL_CASES[part]
    if part in ACRONYMS:
        return part.upper()
    return _title(part)


def prettify_sig(sig: str) -> str:
    """Return a printable version of a SIG label.

    Args:
        sig: Label as parsed from a ``sig/foo`` label, for example
            ``cluster-lifecycle``.

    Returns:
        The label with each dash separated word capitalized, e.g.
        ``"Cluster Lifecycle"``.
    """

    return " ".join(_prettify_part(part) for part in sig.split("-"))


def prettify_sig_list(sigs: Iterable[str]) -> str:
    """Compose the header used for notes shared by several SIGs.

    The labels are sorted first so that any group of SIGs with the same
    content gives the same header.

    Args:
        sigs: Raw SIG labels of a note.

    Returns:
        A natural language list such as ``"SIG Apps, SIG Node, and SIG
        Storage"``.
    """

    names = [f"SIG {prettify_sig(sig)}" for sig in sorted(sigs)]

    if len(names) <= 1:
        return "".join(names)
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return ", ".join(names[:-1]) + f", and {names[-1]}"
