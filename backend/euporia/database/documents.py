"""
JSON document blobs
───────────────────
Profiles, message lists and insights are arbitrary JSON values. They are
written to TEXT columns as-is and handed back untouched; nothing in the
storage layer looks inside them.
"""
import json
from typing import Any


class MalformedDocumentError(ValueError):
    """The value can't be serialized as strict JSON (e.g. NaN, non-JSON types)."""


class StoredDocumentError(RuntimeError):
    """A stored blob no longer decodes as JSON."""


def dump_document(document: Any) -> str:
    try:
        return json.dumps(document, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise MalformedDocumentError(str(exc)) from exc


def load_document(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise StoredDocumentError(f"Stored document is not valid JSON: {exc}") from exc
