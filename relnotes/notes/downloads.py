"""Markdown table listing the release tarballs and their checksums."""

from __future__ import annotations

import glob
import hashlib
import logging
import os
from typing import TextIO

from .errors import ConfigError

logger = logging.getLogger(__name__)

PRODUCTION_BUCKET = "kubernetes-release"
PRODUCTION_URL = "https://dl.k8s.io"
DOCUMENTATION_URL = "https://docs.k8s.io"

# Size of the blocks streamed into the hash.
CHUNK_SIZE = 64 * 1024

# Table headings and the file patterns listed under each of them.
ARTIFACT_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("", ("kubernetes.tar.gz", "kubernetes-src.tar.gz")),
    ("Client Binaries", ("kubernetes-client*.tar.gz",)),
    ("Server Binaries", ("kubernetes-server*.tar.gz",)),
    ("Node Binaries", ("kubernetes-node*.tar.gz",)),
)


def url_prefix(bucket: str) -> str:
    """Return the download URL prefix for artifacts in ``bucket``."""

    if bucket == PRODUCTION_BUCKET:
        return PRODUCTION_URL
    return f"https://storage.googleapis.com/{bucket}/release"


def file_sha512(path: str) -> str:
    """Return the hex SHA-512 digest of the file at ``path``.

    Args:
        path: File to hash.

    Returns:
        Lower-case hexadecimal digest of the full file content.

    Raises:
        OSError: The file cannot be opened or read.
    """

    digest = hashlib.sha512()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def find_artifacts(tars: str, pattern: str) -> list[str]:
    """Return the files in ``tars`` matching ``pattern`` in sorted order.

    The directory part is escaped so that only ``pattern`` is treated as
    a wildcard.
    """

    matches = sorted(glob.glob(os.path.join(glob.escape(tars), pattern)))
    if not matches:
        logger.warning(f"No artifacts match {pattern} in {tars}")
    return matches


def create_downloads_table(
    w: TextIO, bucket: str, tars: str, prev_tag: str, new_tag: str
) -> None:
    """Write the Markdown table with the links to the tarballs.

    Nothing is written when ``tars`` is empty.

    Args:
        w: Text stream receiving the Markdown.
        bucket: Storage bucket the artifacts are published to.
        tars: Directory holding the release tarballs.
        prev_tag: Tag of the previous release.
        new_tag: Tag of the release being documented.

    Raises:
        ConfigError: ``tars`` is set but one of the tags is empty.
        OSError: An artifact cannot be read or the stream cannot be
            written.
    """

    # Do not add the table if not explicitly requested.
    if not tars:
        return
    if not prev_tag or not new_tag:
        raise ConfigError("release tags not specified")

    w.write(f"# {new_tag}\n\n")
    w.write(f"[Documentation]({DOCUMENTATION_URL})\n\n")
    w.write(f"## Downloads for {new_tag}\n\n")

    prefix = url_prefix(bucket)

    for heading, patterns in ARTIFACT_GROUPS:
        if heading:
            w.write(f"### {heading}\n\n")
        w.write("filename | sha512 hash\n")
        w.write("-------- | -----------\n")

        for pattern in patterns:
            for path in find_artifacts(tars, pattern):
                name = os.path.basename(path)
                sha = file_sha512(path)
                logger.debug(f"sha512 {name}: {sha}")
                w.write(f"[{name}]({prefix}/{new_tag}/{name}) | `{sha}`\n")

        w.write("\n")

    w.write(f"## Changelog since {prev_tag}\n\n")
