"""
dafile • Store package

Blob store implementations behind the `BlobStore` interface:

  • base.py     — BlobStore ABC and StoreResult
  • memory.py   — InMemoryBlobStore (tests, dry runs)
  • celestia.py — CelestiaBlobStore (celestia-node JSON-RPC over httpx)

Import `CelestiaBlobStore` from `dafile.store.celestia`.
"""

from __future__ import annotations

from .base import BlobStore, StoreResult
from .memory import InMemoryBlobStore

__all__ = ["BlobStore", "StoreResult", "InMemoryBlobStore"]
