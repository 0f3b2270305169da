"""Serialization of release notes documents to JSON and YAML."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json

import yaml  # type: ignore[import-untyped]

from relnotes.notes.document import Document

# Output formats handled here; Markdown is produced by the renderer.
DATA_FORMATS = ("json", "yaml")


def json_dumps(data: object, indent: bool = False) -> str:
    """Serialize data to a JSON string, indented by two spaces if asked."""

    if orjson is not None:
        option = orjson.OPT_INDENT_2 if indent else None
        return orjson.dumps(data, option=option).decode()
    return json.dumps(data, ensure_ascii=False, indent=2 if indent else None)


def json_loads(data: str | bytes) -> object:
    """Deserialize JSON data from a string or bytes."""

    if orjson is not None:
        return orjson.loads(data)
    if isinstance(data, (bytes, bytearray)):
        data = data.decode()
    return json.loads(data)


def dump_document(doc: Document, output_format: str) -> str:
    """Serialize ``doc`` in one of the data formats.

    Args:
        doc: Classified release notes.
        output_format: ``"json"`` or ``"yaml"``.

    Returns:
        The serialized document, ending with a newline.

    Raises:
        ValueError: ``output_format`` is not a data format.
    """

    data = doc.to_dict()
    if output_format == "json":
        return json_dumps(data, indent=True) + "\n"
    if output_format == "yaml":
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    raise ValueError(f"Unsupported output format: {output_format}")
