"""
dafile • Blob • Manifest

A manifest links the chunk blobs of one oversized payload. It is created only
when a payload was split into more than one chunk, serialized as compact JSON
and stored as one more blob; its own locator is the root locator handed back
to the caller.

Wire format (no version, no checksum; extra keys are tolerated on decode):

    {"name": "movie.mp4",
     "mimeType": "video/mp4",
     "size": 3200000,
     "chunks": [{"blob": "<height>/<ns-hex>/<commitment-hex>", "size": 1500000}, …]}

Detection
---------
Fetched bytes are a manifest iff they parse as a JSON object that validates
against `dafile/schemas/manifest.schema.json`. Anything else is the raw
payload; `try_parse_manifest` returns None for it and never raises.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import jsonschema

from ..errors import ManifestFormatError
from ..schemas import validate_manifest
from ..utils.bytes import BytesLike, to_bytes
from .locator import BlobLocator

_JSON_WHITESPACE = b" \t\r\n"


@dataclass(frozen=True)
class ManifestEntry:
    """One chunk: its locator string and byte size."""
    blob: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {"blob": self.blob, "size": self.size}

    def locator(self) -> BlobLocator:
        return BlobLocator.parse(self.blob)


@dataclass(frozen=True)
class Manifest:
    """
    Descriptor of a chunked payload.

      • name      — original file name / identifier
      • mime_type — content type of the whole payload
      • size      — total payload length (sum of chunk sizes)
      • chunks    — entries in payload order
    """
    name: str
    mime_type: str
    size: int
    chunks: Tuple[ManifestEntry, ...] = field(default_factory=tuple)

    @property
    def declared_chunk_bytes(self) -> int:
        return sum(c.size for c in self.chunks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mimeType": self.mime_type,
            "size": self.size,
            "chunks": [c.to_dict() for c in self.chunks],
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Manifest":
        try:
            validate_manifest(d)
        except jsonschema.ValidationError as e:
            raise ManifestFormatError(f"not a manifest: {e.message}") from e
        for value in [d["size"]] + [c["size"] for c in d["chunks"]]:
            if not isinstance(value, int):
                raise ManifestFormatError("manifest sizes must be integers")
        return Manifest(
            name=d["name"],
            mime_type=d["mimeType"],
            size=d["size"],
            chunks=tuple(ManifestEntry(blob=c["blob"], size=c["size"]) for c in d["chunks"]),
        )

    @staticmethod
    def from_json(data: BytesLike) -> "Manifest":
        """
        Parse manifest bytes. Raises ManifestFormatError if they are not one.
        """
        raw = to_bytes(data)
        if not raw.lstrip(_JSON_WHITESPACE).startswith(b"{"):
            raise ManifestFormatError("not a JSON object")
        try:
            obj = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise ManifestFormatError(f"not JSON: {e}") from e
        return Manifest.from_dict(obj)


def try_parse_manifest(data: BytesLike) -> Optional[Manifest]:
    """
    Return the manifest encoded in `data`, or None if `data` is a raw payload.
    """
    try:
        return Manifest.from_json(data)
    except ManifestFormatError:
        return None


class ManifestBuilder:
    """
    Accumulates chunk entries in submission order.

        b = ManifestBuilder("movie.mp4", "video/mp4")
        b.add(locator, 1_500_000)
        manifest = b.build()
    """

    def __init__(self, name: str, mime_type: str) -> None:
        self.name = name
        self.mime_type = mime_type
        self._entries: List[ManifestEntry] = []

    def add(self, locator: BlobLocator, size: int) -> ManifestEntry:
        entry = ManifestEntry(blob=locator.encode(), size=int(size))
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> Tuple[ManifestEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> Manifest:
        entries = tuple(self._entries)
        return Manifest(
            name=self.name,
            mime_type=self.mime_type,
            size=sum(e.size for e in entries),
            chunks=entries,
        )


__all__ = [
    "ManifestEntry",
    "Manifest",
    "ManifestBuilder",
    "try_parse_manifest",
]
