"""
dafile utilities — RFC 6962 binary Merkle root

The Tendermint/CometBFT flavour of the RFC 6962 Merkle tree, used to fold the
NMT subtree roots of a blob into its share commitment.

Hashing rules (sha256)
----------------------
  empty tree  = sha256("")
  leaf        = sha256(0x00 || item)
  inner node  = sha256(0x01 || left || right)

A list of n > 1 items is split at the largest power of two strictly smaller
than n; the left part is always a perfect tree.
"""
from __future__ import annotations

import hashlib
from typing import Sequence

LEAF_PREFIX = b"\x00"
INNER_PREFIX = b"\x01"

Hash = bytes


def empty_hash() -> Hash:
    return hashlib.sha256(b"").digest()


def leaf_hash(item: bytes) -> Hash:
    return hashlib.sha256(LEAF_PREFIX + item).digest()


def inner_hash(left: Hash, right: Hash) -> Hash:
    return hashlib.sha256(INNER_PREFIX + left + right).digest()


def split_point(length: int) -> int:
    """
    Largest power of two strictly less than `length` (length >= 2).
    """
    if length < 2:
        raise ValueError("split_point requires length >= 2")
    k = 1 << (length.bit_length() - 1)
    if k == length:
        k >>= 1
    return k


def hash_from_byte_slices(items: Sequence[bytes]) -> Hash:
    """
    Compute the Merkle root of `items` (each item is hashed as a leaf).
    """
    n = len(items)
    if n == 0:
        return empty_hash()
    if n == 1:
        return leaf_hash(bytes(items[0]))
    k = split_point(n)
    return inner_hash(hash_from_byte_slices(items[:k]), hash_from_byte_slices(items[k:]))


__all__ = [
    "LEAF_PREFIX",
    "INNER_PREFIX",
    "empty_hash",
    "leaf_hash",
    "inner_hash",
    "split_point",
    "hash_from_byte_slices",
]
