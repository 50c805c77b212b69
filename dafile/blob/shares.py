"""
dafile • Blob • Sparse share splitting

Lays a blob out as Celestia share-version-0 sparse shares (512 bytes each):

  first share:         namespace(29) | info 0x01 | seq_len u32be | data(478)
  continuation share:  namespace(29) | info 0x00 | data(482)

The info byte is `(share_version << 1) | sequence_start`. The final share is
zero-padded to the full share size.

API
---
- split_blob(namespace, data) -> list[bytes]
- sparse_shares_needed(size) -> int
"""

from __future__ import annotations

import struct
from typing import List

from ..constants import (
    CONTINUATION_SPARSE_SHARE_CONTENT_SIZE,
    FIRST_SPARSE_SHARE_CONTENT_SIZE,
    SHARE_SIZE,
    SHARE_VERSION_ZERO,
)
from ..nmt.namespace import Namespace
from ..utils.bytes import BytesLike, to_bytes


def _info_byte(version: int, is_sequence_start: bool) -> bytes:
    return bytes([(version << 1) | int(is_sequence_start)])


def sparse_shares_needed(size: int) -> int:
    """Number of shares occupied by a blob of `size` bytes."""
    if size <= 0:
        return 0
    if size <= FIRST_SPARSE_SHARE_CONTENT_SIZE:
        return 1
    rest = size - FIRST_SPARSE_SHARE_CONTENT_SIZE
    return 1 + -(-rest // CONTINUATION_SPARSE_SHARE_CONTENT_SIZE)


def split_blob(namespace: Namespace, data: BytesLike) -> List[bytes]:
    """
    Split `data` into zero-padded sparse shares under `namespace`.

    Raises ValueError for empty data (the network does not accept empty blobs).
    """
    raw = to_bytes(data)
    if not raw:
        raise ValueError("cannot split an empty blob into shares")

    ns = namespace.to_bytes()
    shares: List[bytes] = []

    first = raw[:FIRST_SPARSE_SHARE_CONTENT_SIZE]
    head = ns + _info_byte(SHARE_VERSION_ZERO, True) + struct.pack(">I", len(raw))
    shares.append(_pad(head + first))

    off = len(first)
    while off < len(raw):
        piece = raw[off : off + CONTINUATION_SPARSE_SHARE_CONTENT_SIZE]
        shares.append(_pad(ns + _info_byte(SHARE_VERSION_ZERO, False) + piece))
        off += len(piece)

    return shares


def _pad(share: bytes) -> bytes:
    return share + bytes(SHARE_SIZE - len(share))


__all__ = ["split_blob", "sparse_shares_needed"]
