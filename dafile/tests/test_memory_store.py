from __future__ import annotations

import pytest

from dafile.blob.commitment import create_commitment
from dafile.errors import NotFound, StoreError
from dafile.nmt.namespace import Namespace
from dafile.store.base import StoreResult
from dafile.store.memory import InMemoryBlobStore


def test_submit_and_get(namespace: Namespace) -> None:
    store = InMemoryBlobStore()
    res = store.submit(namespace, b"hello")
    assert res == StoreResult(commitment=create_commitment(namespace, b"hello"), height=1)
    assert res.ok
    assert store.get(res.height, namespace, res.commitment) == b"hello"


def test_heights_increase(namespace: Namespace) -> None:
    store = InMemoryBlobStore(start_height=100)
    heights = [store.submit(namespace, bytes([i + 1])).height for i in range(3)]
    assert heights == [100, 101, 102]
    assert store.height == 102
    assert len(store) == 3
    assert store.blobs == [b"\x01", b"\x02", b"\x03"]


def test_get_missing_raises_not_found(namespace: Namespace) -> None:
    store = InMemoryBlobStore()
    res = store.submit(namespace, b"x")
    with pytest.raises(NotFound) as ei:
        store.get(res.height + 1, namespace, res.commitment)
    assert ei.value.data["height"] == res.height + 1

    other = Namespace.from_hex("0102030405060708090a")
    with pytest.raises(NotFound):
        store.get(res.height, other, res.commitment)


def test_limits(namespace: Namespace) -> None:
    store = InMemoryBlobStore(max_blob_bytes=4)
    with pytest.raises(StoreError):
        store.submit(namespace, b"")
    with pytest.raises(StoreError) as ei:
        store.submit(namespace, b"12345")
    assert ei.value.data == {"size": 5, "limit": 4}
    assert store.submit(namespace, b"1234").height == 1
    with pytest.raises(ValueError):
        InMemoryBlobStore(start_height=0)


def test_context_manager(namespace: Namespace) -> None:
    with InMemoryBlobStore() as store:
        assert store.height == 0
        store.submit(namespace, b"x")
