from __future__ import annotations

import pytest

from dafile.config import get_config
from dafile.constants import DEFAULT_MAX_CHUNK_BYTES, DEFAULT_NAMESPACE_ID
from dafile.nmt.namespace import Namespace
from dafile.pipeline import PipelineContext
from dafile.store.memory import InMemoryBlobStore

_ENV_KEYS = (
    "DAFILE_RPC_URL",
    "DAFILE_AUTH_TOKEN",
    "CELESTIA_NODE_AUTH_TOKEN",
    "DAFILE_NAMESPACE",
    "DAFILE_MAX_CHUNK_BYTES",
    "DAFILE_TIMEOUT",
    "DAFILE_GAS_PRICE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def namespace() -> Namespace:
    return Namespace.from_hex(DEFAULT_NAMESPACE_ID)


@pytest.fixture
def store() -> InMemoryBlobStore:
    return InMemoryBlobStore(max_blob_bytes=DEFAULT_MAX_CHUNK_BYTES)


@pytest.fixture
def ctx(store: InMemoryBlobStore, namespace: Namespace) -> PipelineContext:
    return PipelineContext(store=store, namespace=namespace)

