"""
dafile • NMT — Leaf/node hashing and root computation

Celestia's Namespaced Merkle Tree over sha256, with a 29-byte namespace and the
"ignore max namespace" rule enabled (the setting used for share commitments).

Node encoding
-------------
Every node digest is prefixed with the namespace range it covers:

    node := min_ns(29) || max_ns(29) || sha256(...)   (90 bytes)

  • Leaf (pushed data already starts with its namespace):
        ns || ns || sha256(0x00 || ns || share)

  • Inner node:
        min || max || sha256(0x01 || left || right)
    where min = left.min, max = right.max, except that when the right child
    starts at the maximum namespace (parity shares) the left max is kept.

A list of n > 1 leaves is split at the largest power of two strictly smaller
than n (RFC 6962 layout).
"""
from __future__ import annotations

import hashlib
from typing import Sequence

from ..constants import NAMESPACE_SIZE
from ..utils.merkle import split_point

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"

MAX_NAMESPACE = b"\xff" * NAMESPACE_SIZE


class NMTError(ValueError):
    """Raised for malformed leaves or nodes."""


def _min_ns(node: bytes) -> bytes:
    return node[:NAMESPACE_SIZE]


def _max_ns(node: bytes) -> bytes:
    return node[NAMESPACE_SIZE : 2 * NAMESPACE_SIZE]


def hash_leaf(ndata: bytes) -> bytes:
    """
    Hash a namespaced leaf. `ndata` must start with its 29-byte namespace.
    """
    if len(ndata) < NAMESPACE_SIZE:
        raise NMTError(f"leaf shorter than namespace size ({len(ndata)} < {NAMESPACE_SIZE})")
    ns = ndata[:NAMESPACE_SIZE]
    return ns + ns + hashlib.sha256(LEAF_PREFIX + ndata).digest()


def hash_node(left: bytes, right: bytes) -> bytes:
    """
    Hash two child nodes into their parent.
    """
    left_min, left_max = _min_ns(left), _max_ns(left)
    right_min, right_max = _min_ns(right), _max_ns(right)
    if right_min < left_max:
        raise NMTError("children out of namespace order")

    min_ns = left_min
    max_ns = right_max
    if right_min == MAX_NAMESPACE:
        max_ns = left_max
    return min_ns + max_ns + hashlib.sha256(NODE_PREFIX + left + right).digest()


def _root(leaf_hashes: Sequence[bytes]) -> bytes:
    n = len(leaf_hashes)
    if n == 1:
        return leaf_hashes[0]
    k = split_point(n)
    return hash_node(_root(leaf_hashes[:k]), _root(leaf_hashes[k:]))


def nmt_root(leaves: Sequence[bytes]) -> bytes:
    """
    Compute the NMT root over namespaced leaves (each `ns || data`).

    Leaves must be pushed in non-decreasing namespace order.
    """
    if not leaves:
        raise NMTError("cannot compute the root of an empty tree")
    hashed = [hash_leaf(bytes(leaf)) for leaf in leaves]
    for prev, cur in zip(hashed, hashed[1:]):
        if _min_ns(cur) < _min_ns(prev):
            raise NMTError("leaves must be pushed in namespace order")
    return _root(hashed)


__all__ = [
    "NMTError",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "MAX_NAMESPACE",
    "hash_leaf",
    "hash_node",
    "nmt_root",
]
