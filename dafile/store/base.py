"""
dafile • Store • Interface

The blob store is the only network-facing collaborator of the pipeline:

- submit(namespace, data) -> StoreResult(commitment, height)
    Commit one blob. `height == 0` is a defined failure signal that stores
    may return instead of raising; the pipeline turns it into StoreError.
- get(height, namespace, commitment) -> bytes
    Fetch one blob. Raises NotFound if nothing lives at the coordinates,
    StoreError for any other failure.

Implementations must be safe to reuse across sequential calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..nmt.namespace import Namespace


@dataclass(frozen=True)
class StoreResult:
    commitment: bytes
    height: int

    @property
    def ok(self) -> bool:
        return self.height > 0


class BlobStore(ABC):
    """Abstract blob store."""

    @abstractmethod
    def submit(self, namespace: Namespace, data: bytes) -> StoreResult:
        raise NotImplementedError

    @abstractmethod
    def get(self, height: int, namespace: Namespace, commitment: bytes) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources (no-op by default)."""

    def __enter__(self) -> "BlobStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["StoreResult", "BlobStore"]
