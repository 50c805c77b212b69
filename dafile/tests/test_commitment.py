from __future__ import annotations

import hashlib
import math
import struct

import pytest

from dafile.blob.commitment import (
    blob_min_square_size,
    create_commitment,
    merkle_mountain_range_sizes,
    round_down_power_of_two,
    round_up_power_of_two,
    subtree_width,
)
from dafile.blob.shares import sparse_shares_needed, split_blob
from dafile.constants import SHARE_SIZE
from dafile.nmt.namespace import Namespace
from dafile.nmt.tree import MAX_NAMESPACE, NMTError, hash_leaf, hash_node, nmt_root
from dafile.utils.merkle import empty_hash, hash_from_byte_slices, inner_hash, leaf_hash, split_point

NS = Namespace.from_hex("000008e5f679bf7116cb")


def _sha(b: bytes) -> bytes:
    return hashlib.sha256(b).digest()


# --------------------------------------------------------------------------- #
# Shares
# --------------------------------------------------------------------------- #

def test_single_share_layout() -> None:
    shares = split_blob(NS, b"hello")
    assert len(shares) == 1
    share = shares[0]
    assert len(share) == SHARE_SIZE
    ns = NS.to_bytes()
    assert share[:29] == ns
    assert share[29] == 0x01
    assert share[30:34] == struct.pack(">I", 5)
    assert share[34:39] == b"hello"
    assert share[39:] == bytes(SHARE_SIZE - 39)


def test_continuation_share_layout() -> None:
    data = bytes(range(256)) * 4  # 1024 bytes -> 478 + 482 + 64
    shares = split_blob(NS, data)
    assert len(shares) == 3 == sparse_shares_needed(len(data))
    assert all(len(s) == SHARE_SIZE for s in shares)
    assert shares[1][29] == 0x00
    assert shares[1][30:] == data[478:960]
    assert shares[2][30:94] == data[960:]
    assert shares[2][94:] == bytes(SHARE_SIZE - 94)


@pytest.mark.parametrize(
    "size, expected",
    [(0, 0), (1, 1), (478, 1), (479, 2), (960, 2), (961, 3), (1_500_000, 3113)],
)
def test_sparse_shares_needed(size: int, expected: int) -> None:
    assert sparse_shares_needed(size) == expected


def test_empty_blob_has_no_shares() -> None:
    with pytest.raises(ValueError):
        split_blob(NS, b"")


# --------------------------------------------------------------------------- #
# Commitment parameters
# --------------------------------------------------------------------------- #

def test_power_of_two_helpers() -> None:
    assert [round_up_power_of_two(n) for n in (0, 1, 2, 3, 5, 64, 65)] == [1, 1, 2, 4, 8, 64, 128]
    assert [round_down_power_of_two(n) for n in (1, 2, 3, 7, 8, 9)] == [1, 2, 2, 4, 8, 8]
    with pytest.raises(ValueError):
        round_down_power_of_two(0)
    assert [blob_min_square_size(n) for n in (1, 2, 4, 5, 64, 65)] == [1, 2, 2, 4, 8, 16]


@pytest.mark.parametrize(
    "count, width",
    [(1, 1), (2, 1), (64, 1), (65, 2), (128, 2), (129, 4), (4096, 64), (10_000, 128)],
)
def test_subtree_width(count: int, width: int) -> None:
    assert subtree_width(count) == width


def test_merkle_mountain_range_sizes() -> None:
    assert merkle_mountain_range_sizes(11, 4) == [4, 4, 2, 1]
    assert merkle_mountain_range_sizes(2, 4) == [2]
    assert merkle_mountain_range_sizes(64, 8) == [8] * 8
    assert merkle_mountain_range_sizes(0, 8) == []


# --------------------------------------------------------------------------- #
# Merkle / NMT
# --------------------------------------------------------------------------- #

def test_rfc6962_root() -> None:
    a, b, c = b"a", b"b", b"c"
    assert hash_from_byte_slices([]) == empty_hash() == _sha(b"")
    assert hash_from_byte_slices([a]) == leaf_hash(a) == _sha(b"\x00a")
    assert hash_from_byte_slices([a, b, c]) == inner_hash(
        inner_hash(leaf_hash(a), leaf_hash(b)), leaf_hash(c)
    )
    assert [split_point(n) for n in (2, 3, 4, 5, 8, 9)] == [1, 2, 2, 4, 4, 8]


def test_nmt_leaf_and_node() -> None:
    ns = NS.to_bytes()
    leaf = hash_leaf(ns + b"x")
    assert leaf == ns + ns + _sha(b"\x00" + ns + b"x")

    node = hash_node(leaf, leaf)
    assert node == ns + ns + _sha(b"\x01" + leaf + leaf)
    assert nmt_root([ns + b"x", ns + b"x"]) == node


def test_nmt_ignores_max_namespace_on_the_right() -> None:
    ns = NS.to_bytes()
    left = hash_leaf(ns + b"data")
    right = hash_leaf(MAX_NAMESPACE + b"parity")
    node = hash_node(left, right)
    assert node[:29] == ns and node[29:58] == ns


def test_nmt_rejects_bad_input() -> None:
    ns = NS.to_bytes()
    with pytest.raises(NMTError):
        nmt_root([])
    with pytest.raises(NMTError):
        hash_leaf(b"short")
    with pytest.raises(NMTError):
        nmt_root([MAX_NAMESPACE + b"a", ns + b"b"])


# --------------------------------------------------------------------------- #
# Commitment
# --------------------------------------------------------------------------- #

def test_single_share_commitment_by_hand() -> None:
    ns = NS.to_bytes()
    share = ns + b"\x01" + struct.pack(">I", 5) + b"hello"
    share += bytes(SHARE_SIZE - len(share))

    subtree_root = ns + ns + _sha(b"\x00" + ns + share)
    expected = _sha(b"\x00" + subtree_root)

    assert create_commitment(NS, b"hello") == expected


def test_commitment_over_two_subtrees_by_hand() -> None:
    # 65 shares -> width 2 -> mountain range [2] * 32 + [1]
    data = bytes(478 + 482 * 64)
    shares = split_blob(NS, data)
    assert len(shares) == 65
    ns = NS.to_bytes()
    roots = []
    for i in range(0, 64, 2):
        roots.append(nmt_root([ns + shares[i], ns + shares[i + 1]]))
    roots.append(nmt_root([ns + shares[64]]))
    assert create_commitment(NS, data) == hash_from_byte_slices(roots)


def test_commitment_properties() -> None:
    c = create_commitment(NS, b"payload")
    assert len(c) == 32
    assert create_commitment(NS, b"payload") == c
    assert create_commitment(NS, b"payload!") != c
    assert create_commitment(Namespace.from_hex("0102030405060708090a"), b"payload") != c
    with pytest.raises(ValueError):
        create_commitment(NS, b"")


# --------------------------------------------------------------------------- #
# Independent reference: a from-scratch rendition of the commitment using only
# hashlib/struct/math, checked against create_commitment on multi-subtree blobs.
# --------------------------------------------------------------------------- #

def _ref_namespace(user_id: bytes) -> bytes:
    return b"\x00" + b"\x00" * 18 + user_id


def _ref_shares(ns: bytes, data: bytes) -> list:
    out = []
    first = ns + b"\x01" + struct.pack(">I", len(data)) + data[:478]
    out.append(first.ljust(512, b"\x00"))
    for off in range(478, len(data), 482):
        out.append((ns + b"\x00" + data[off : off + 482]).ljust(512, b"\x00"))
    return out


def _ref_split(n: int) -> int:
    k = 1
    while k * 2 < n:
        k *= 2
    return k


def _ref_nmt(leaves: list) -> bytes:
    if len(leaves) == 1:
        ns = leaves[0][:29]
        return ns + ns + _sha(b"\x00" + leaves[0])
    k = _ref_split(len(leaves))
    left, right = _ref_nmt(leaves[:k]), _ref_nmt(leaves[k:])
    # single-namespace blobs: min/max never reach the parity namespace
    return left[:29] + right[29:58] + _sha(b"\x01" + left + right)


def _ref_rfc6962(items: list) -> bytes:
    if len(items) == 1:
        return _sha(b"\x00" + items[0])
    k = _ref_split(len(items))
    return _sha(b"\x01" + _ref_rfc6962(items[:k]) + _ref_rfc6962(items[k:]))


def _ref_pow2(x: int) -> int:
    return 1 if x <= 1 else 2 ** math.ceil(math.log2(x))


def _ref_commitment(ns: bytes, data: bytes) -> bytes:
    shares = _ref_shares(ns, data)
    n = len(shares)
    width = min(_ref_pow2(math.ceil(n / 64)), _ref_pow2(math.ceil(math.sqrt(n))))

    roots, cursor = [], 0
    while cursor < n:
        left = n - cursor
        size = width if left >= width else 2 ** int(math.log2(left))
        roots.append(_ref_nmt([ns + s for s in shares[cursor : cursor + size]]))
        cursor += size
    return _ref_rfc6962(roots)


@pytest.mark.parametrize(
    "user_id, size, share_count",
    [
        (bytes.fromhex("000008e5f679bf7116cb"), 5, 1),
        (b"\x01" * 10, 478 + 482 * 3, 4),
        (b"\x01" * 10, 478 + 482 * 64, 65),
        (bytes.fromhex("000008e5f679bf7116cb"), 478 + 482 * 130, 131),
        (bytes.fromhex("0102030405060708090a"), 478 + 482 * 300 + 17, 302),
    ],
)
def test_commitment_matches_reference(user_id: bytes, size: int, share_count: int) -> None:
    data = bytes((i * 7 + 3) % 251 for i in range(size))
    ns = _ref_namespace(user_id)
    assert len(_ref_shares(ns, data)) == share_count
    assert Namespace.v0(user_id).to_bytes() == ns
    assert create_commitment(Namespace.v0(user_id), data) == _ref_commitment(ns, data)
