"""
dafile • Blob package

Blob-level primitives used by the submit/read pipeline:

  • dafile.blob.chunker    — split payloads into store-sized chunks
  • dafile.blob.locator    — (height, namespace, commitment) locators
  • dafile.blob.manifest   — manifest record, builder and detection
  • dafile.blob.shares     — Celestia sparse share layout
  • dafile.blob.commitment — Celestia share commitment

Only light re-exports live here; import concrete modules for the rest.
"""

from __future__ import annotations

from .chunker import Chunk, split
from .locator import BlobLocator
from .manifest import Manifest, ManifestBuilder, ManifestEntry, try_parse_manifest

__all__ = [
    "Chunk",
    "split",
    "BlobLocator",
    "Manifest",
    "ManifestBuilder",
    "ManifestEntry",
    "try_parse_manifest",
]
