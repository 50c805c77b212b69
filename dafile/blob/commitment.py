"""
dafile • Blob • Share commitment

Computes the Celestia share commitment for a blob, the 32-byte value that,
together with the inclusion height and namespace, addresses the blob on the
network. The commitment is computed client-side before submission.

Algorithm
---------
1. Split the blob into sparse shares (`dafile.blob.shares`).
2. Pick the subtree width from the share count and the subtree root
   threshold (64).
3. Partition the shares into a Merkle mountain range of perfect subtrees no
   wider than that width.
4. Compute the NMT root of each subtree, pushing `namespace || share` leaves.
5. Fold the subtree roots with the RFC 6962 Merkle root.

API
---
- create_commitment(namespace, data) -> bytes
- subtree_width(share_count, threshold=SUBTREE_ROOT_THRESHOLD) -> int
- merkle_mountain_range_sizes(total, max_tree_size) -> list[int]
"""

from __future__ import annotations

import math
from typing import List

from ..constants import SUBTREE_ROOT_THRESHOLD
from ..nmt.namespace import Namespace
from ..nmt.tree import nmt_root
from ..utils.bytes import BytesLike
from ..utils.merkle import hash_from_byte_slices
from .shares import split_blob


def round_up_power_of_two(n: int) -> int:
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def round_down_power_of_two(n: int) -> int:
    if n < 1:
        raise ValueError("round_down_power_of_two requires n >= 1")
    return 1 << (n.bit_length() - 1)


def blob_min_square_size(share_count: int) -> int:
    """Smallest power-of-two square side that fits `share_count` shares."""
    if share_count <= 0:
        return 1
    # ceil(sqrt(n)) without floating point
    return round_up_power_of_two(math.isqrt(share_count - 1) + 1)


def subtree_width(share_count: int, threshold: int = SUBTREE_ROOT_THRESHOLD) -> int:
    """
    Width of the subtrees whose roots make up a blob's commitment.
    """
    if share_count <= 0:
        raise ValueError("share_count must be > 0")
    s = -(-share_count // threshold)
    s = round_up_power_of_two(s)
    return min(s, blob_min_square_size(share_count))


def merkle_mountain_range_sizes(total: int, max_tree_size: int) -> List[int]:
    """
    Greedy partition of `total` leaves into perfect trees of at most
    `max_tree_size` leaves, largest first.
    """
    sizes: List[int] = []
    while total > 0:
        if total >= max_tree_size:
            size = max_tree_size
        else:
            size = round_down_power_of_two(total)
        sizes.append(size)
        total -= size
    return sizes


def create_commitment(namespace: Namespace, data: BytesLike) -> bytes:
    """
    Return the 32-byte share commitment of `data` filed under `namespace`.
    """
    shares = split_blob(namespace, data)
    width = subtree_width(len(shares))
    ns = namespace.to_bytes()

    roots: List[bytes] = []
    cursor = 0
    for size in merkle_mountain_range_sizes(len(shares), width):
        leaves = [ns + share for share in shares[cursor : cursor + size]]
        roots.append(nmt_root(leaves))
        cursor += size

    return hash_from_byte_slices(roots)


__all__ = [
    "create_commitment",
    "subtree_width",
    "merkle_mountain_range_sizes",
    "blob_min_square_size",
    "round_up_power_of_two",
    "round_down_power_of_two",
]
