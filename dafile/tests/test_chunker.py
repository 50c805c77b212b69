from __future__ import annotations

import random

import pytest

from dafile.blob.chunker import Chunk, chunk_count, iter_chunks, split
from dafile.constants import DEFAULT_MAX_CHUNK_BYTES
from dafile.errors import ConfigurationError


@pytest.mark.parametrize("limit", [1, 7, 32, 256])
def test_empty_payload_produces_no_chunks(limit: int) -> None:
    assert split(b"", limit) == []
    assert list(iter_chunks(b"", limit)) == []


@pytest.mark.parametrize("limit", [1, 7, 32, 256])
def test_small_payloads(limit: int) -> None:
    assert split(b"a", limit) == [b"a"]

    exact = b"b" * limit
    assert split(exact, limit) == [exact]

    over = b"c" * (limit + 1)
    chunks = split(over, limit)
    assert chunks == [b"c" * limit, b"c"]


@pytest.mark.parametrize("limit", [64, 256, 1024])
def test_chunking_invariants(limit: int) -> None:
    rnd = random.Random(42)
    blob = bytes(rnd.getrandbits(8) for _ in range(12_345))

    chunks = split(blob, limit)

    assert b"".join(chunks) == blob
    assert len(chunks) == chunk_count(len(blob), limit)
    # every chunk but the last is full; the last is non-empty
    assert all(len(c) == limit for c in chunks[:-1])
    assert 0 < len(chunks[-1]) <= limit


def test_default_limit_sizes() -> None:
    blob = bytes(3_200_000)
    sizes = [len(c) for c in split(blob, DEFAULT_MAX_CHUNK_BYTES)]
    assert sizes == [1_500_000, 1_500_000, 200_000]


def test_iter_chunks_metadata() -> None:
    chunks = list(iter_chunks(b"abcdefghij", 4))
    assert chunks == [
        Chunk(idx=0, offset=0, data=b"abcd", is_last=False),
        Chunk(idx=1, offset=4, data=b"efgh", is_last=False),
        Chunk(idx=2, offset=8, data=b"ij", is_last=True),
    ]
    assert [len(c) for c in chunks] == [4, 4, 2]


def test_split_is_deterministic() -> None:
    blob = bytes(range(256)) * 10
    assert split(blob, 100) == split(bytearray(blob), 100) == split(memoryview(blob), 100)


@pytest.mark.parametrize("limit", [0, -1, 1.5, "10", True, None])
def test_invalid_limit_rejected(limit) -> None:
    with pytest.raises(ConfigurationError) as ei:
        split(b"payload", limit)
    assert ei.value.data["field"] == "max_chunk_bytes"
    assert ei.value.exit_code == 2


def test_chunk_count() -> None:
    assert chunk_count(0, 10) == 0
    assert chunk_count(10, 10) == 1
    assert chunk_count(11, 10) == 2
    with pytest.raises(ValueError):
        chunk_count(-1, 10)
