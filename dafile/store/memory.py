"""
dafile • Store • In-memory blob store

Process-local stand-in for the network: every submission is committed at the
next height (starting at 1) with its real share commitment, and can be fetched
back by (height, namespace, commitment). Used by tests and `--dry-run`.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..blob.commitment import create_commitment
from ..errors import NotFound, StoreError
from ..nmt.namespace import Namespace
from .base import BlobStore, StoreResult

log = logging.getLogger("dafile.store.memory")

_Key = Tuple[int, bytes, bytes]


class InMemoryBlobStore(BlobStore):
    """
    Dict-backed blob store.

    Args:
      max_blob_bytes: optional size limit; larger blobs are rejected with
                      StoreError, as the network would.
      start_height:   height assigned to the first submission.
    """

    def __init__(self, *, max_blob_bytes: Optional[int] = None, start_height: int = 1) -> None:
        if start_height <= 0:
            raise ValueError("start_height must be > 0")
        self.max_blob_bytes = max_blob_bytes
        self._next_height = start_height
        self._blobs: Dict[_Key, bytes] = {}
        self._order: List[_Key] = []

    def submit(self, namespace: Namespace, data: bytes) -> StoreResult:
        blob = bytes(data)
        if not blob:
            raise StoreError("empty blobs are not accepted")
        if self.max_blob_bytes is not None and len(blob) > self.max_blob_bytes:
            raise StoreError(
                f"blob size {len(blob)} exceeds limit {self.max_blob_bytes}",
                data={"size": len(blob), "limit": self.max_blob_bytes},
            )
        commitment = create_commitment(namespace, blob)
        height = self._next_height
        self._next_height += 1

        key = (height, namespace.to_bytes(), commitment)
        self._blobs[key] = blob
        self._order.append(key)
        log.debug("stored blob", extra={"height": height, "size": len(blob)})
        return StoreResult(commitment=commitment, height=height)

    def get(self, height: int, namespace: Namespace, commitment: bytes) -> bytes:
        key = (int(height), namespace.to_bytes(), bytes(commitment))
        try:
            return self._blobs[key]
        except KeyError:
            raise NotFound(
                "blob not found",
                data={"height": height, "namespace": namespace.id_hex, "commitment": bytes(commitment).hex()},
            ) from None

    # --- inspection helpers ---

    def __len__(self) -> int:
        return len(self._blobs)

    @property
    def blobs(self) -> List[bytes]:
        """Stored blobs in submission order."""
        return [self._blobs[k] for k in self._order]

    @property
    def height(self) -> int:
        """Height of the most recent submission (0 if none)."""
        return self._next_height - 1 if self._order else 0


__all__ = ["InMemoryBlobStore"]
