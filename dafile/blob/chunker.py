"""
dafile • Blob • Chunker

Splits a payload into store-sized pieces.

Rules
-----
- `limit` must be a positive integer, otherwise ConfigurationError.
- Consecutive slices of exactly `limit` bytes, then one final slice holding
  the remainder if non-empty.
- Empty payload → no chunks.
- Pure and deterministic: same payload and limit, same chunk sequence.

API
---
- Chunk: dataclass(idx, offset, data, is_last)
- split(payload, limit) -> list[bytes]
- iter_chunks(payload, limit) -> Iterator[Chunk]
- chunk_count(size, limit) -> int
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from ..errors import ConfigurationError
from ..utils.bytes import BytesLike, to_bytes


@dataclass(frozen=True)
class Chunk:
    """A single contiguous chunk of a larger payload."""
    idx: int
    offset: int
    data: bytes
    is_last: bool

    def __len__(self) -> int:
        return len(self.data)


def _check_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ConfigurationError(
            f"chunk limit must be a positive integer, got {limit!r}",
            data={"field": "max_chunk_bytes"},
        )
    return limit


def chunk_count(size: int, limit: int) -> int:
    """Number of chunks needed to cover `size` bytes."""
    _check_limit(limit)
    if size < 0:
        raise ValueError("size must be >= 0")
    return -(-size // limit)


def iter_chunks(payload: BytesLike, limit: int) -> Iterator[Chunk]:
    """
    Yield `Chunk`s of `payload` in order (idx starting at 0).
    """
    _check_limit(limit)
    data = to_bytes(payload)
    total = len(data)
    idx = 0
    for off in range(0, total, limit):
        end = min(off + limit, total)
        yield Chunk(idx=idx, offset=off, data=data[off:end], is_last=end >= total)
        idx += 1


def split(payload: BytesLike, limit: int) -> List[bytes]:
    """
    Deterministically split `payload` into chunks of at most `limit` bytes.
    """
    return [c.data for c in iter_chunks(payload, limit)]


__all__ = ["Chunk", "split", "iter_chunks", "chunk_count"]
