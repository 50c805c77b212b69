"""
dafile schemas package.

Loaders and validators for the JSON schemas shipped with this package:

- manifest.schema.json : structure of the manifest record that links the
                         chunk blobs of an oversized payload

Example:

    from dafile.schemas import load_manifest_schema, validate_manifest

    validate_manifest({"name": "a.bin", "mimeType": "application/octet-stream",
                       "size": 3, "chunks": [{"blob": "1/…/…", "size": 3}]})
"""

from __future__ import annotations

import hashlib
import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterator

import jsonschema

_SCHEMA_FILES = {
    "manifest": "manifest.schema.json",
}


def _read_text(filename: str) -> str:
    return resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


@lru_cache(maxsize=None)
def load_manifest_schema() -> Dict[str, Any]:
    """Return the parsed `manifest.schema.json`."""
    return json.loads(_read_text(_SCHEMA_FILES["manifest"]))


@lru_cache(maxsize=1)
def _manifest_validator() -> jsonschema.Draft202012Validator:
    schema = load_manifest_schema()
    jsonschema.Draft202012Validator.check_schema(schema)
    return jsonschema.Draft202012Validator(schema)


def schema_checksum(logical: str) -> str:
    """
    Return a SHA-256 checksum (hex) of a schema resource.

    Args:
        logical: one of {"manifest"}.
    """
    if logical not in _SCHEMA_FILES:
        raise KeyError(f"unknown schema logical name: {logical}")
    return hashlib.sha256(_read_text(_SCHEMA_FILES[logical]).encode("utf-8")).hexdigest()


def validate_manifest(instance: Any) -> None:
    """
    Validate an object against `manifest.schema.json`.

    Raises:
        jsonschema.ValidationError on failure.
    """
    _manifest_validator().validate(instance)


def iter_manifest_errors(instance: Any) -> Iterator[str]:
    """Yield human-readable validation messages for `instance`."""
    for err in _manifest_validator().iter_errors(instance):
        yield err.message


def is_manifest(instance: Any) -> bool:
    return _manifest_validator().is_valid(instance)


__all__ = [
    "load_manifest_schema",
    "schema_checksum",
    "validate_manifest",
    "iter_manifest_errors",
    "is_manifest",
]
