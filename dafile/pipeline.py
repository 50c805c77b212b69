"""
dafile • Pipeline — submit and read

    payload
      → split into chunks of at most `max_chunk_bytes`
      → store each chunk in order, recording (locator, size)
      → one chunk:   its locator is the root
        many chunks: store the manifest, its locator is the root

    root locator
      → fetch
      → not a manifest: the fetched bytes are the payload
        manifest:       fetch every chunk in order and concatenate

Everything is strictly sequential. There are no retries: the first failed
store call aborts the operation. Chunks already committed before a failure
stay in the store as orphans.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .blob.chunker import _check_limit, iter_chunks
from .blob.locator import BlobLocator
from .blob.manifest import Manifest, ManifestBuilder, ManifestEntry, try_parse_manifest
from .constants import DEFAULT_MAX_CHUNK_BYTES, DEFAULT_MIME_TYPE
from .errors import ConfigurationError, EncodingError, IntegrityError, StoreError
from .mime import MimeSniffer, sniff_mime_type
from .nmt.namespace import Namespace
from .store.base import BlobStore
from .utils.bytes import BytesLike, to_bytes

log = logging.getLogger("dafile.pipeline")

MANIFEST_SLOT = "manifest"


@dataclass(frozen=True)
class PipelineContext:
    """
    Everything a submit/read needs besides the payload: the store client and
    namespace (fixed at construction, reused across calls), the chunk limit
    and the MIME sniffer.
    """
    store: BlobStore
    namespace: Namespace
    max_chunk_bytes: int = DEFAULT_MAX_CHUNK_BYTES
    mime_sniffer: MimeSniffer = field(default=sniff_mime_type)

    def __post_init__(self) -> None:
        if not isinstance(self.store, BlobStore):
            raise ConfigurationError("store must implement BlobStore", data={"field": "store"})
        if not isinstance(self.namespace, Namespace):
            raise ConfigurationError("namespace is required", data={"field": "namespace"})
        _check_limit(self.max_chunk_bytes)


@dataclass(frozen=True)
class SubmitReceipt:
    """
    Outcome of a submission.

      • root     — locator to keep for reading the payload back
      • chunks   — one entry per data chunk, in payload order
      • manifest — the stored manifest, or None for single-chunk payloads
    """
    root: BlobLocator
    chunks: Tuple[ManifestEntry, ...]
    manifest: Optional[Manifest] = None

    @property
    def size(self) -> int:
        return sum(c.size for c in self.chunks)

    @property
    def blob_count(self) -> int:
        return len(self.chunks) + (1 if self.manifest is not None else 0)


# --------------------------------------------------------------------------- #
# Submit
# --------------------------------------------------------------------------- #

def _store(ctx: PipelineContext, data: bytes, slot: object) -> BlobLocator:
    try:
        res = ctx.store.submit(ctx.namespace, data)
    except StoreError as e:
        raise StoreError(
            f"submitting {_slot_name(slot)} failed: {e.message}",
            code=e.code,
            data={**e.data, "chunk": slot},
        ) from e
    if res.height == 0:
        raise StoreError(
            f"submitting {_slot_name(slot)} failed: store returned height 0",
            data={"chunk": slot, "size": len(data)},
        )
    return BlobLocator(height=res.height, namespace=ctx.namespace, commitment=res.commitment)


def _slot_name(slot: object) -> str:
    return MANIFEST_SLOT if slot == MANIFEST_SLOT else f"chunk {slot}"


def submit(
    ctx: PipelineContext,
    payload: BytesLike,
    *,
    name: str,
    mime_type: Optional[str] = None,
) -> SubmitReceipt:
    """
    Store `payload` and return a receipt whose `root` addresses it.

    Raises:
      ConfigurationError for an empty payload (nothing is stored).
      StoreError on the first failed store call; `data["chunk"]` is the chunk
      index or "manifest".
    """
    data = to_bytes(payload)
    if not data:
        raise ConfigurationError("payload is empty", data={"field": "payload"})

    mime = mime_type or ctx.mime_sniffer(data, name) or DEFAULT_MIME_TYPE
    builder = ManifestBuilder(name, mime)
    locators: List[BlobLocator] = []

    for chunk in iter_chunks(data, ctx.max_chunk_bytes):
        locator = _store(ctx, chunk.data, chunk.idx)
        builder.add(locator, len(chunk))
        locators.append(locator)
        log.info(
            "submitted chunk %d (%d bytes) at height %d",
            chunk.idx, len(chunk), locator.height,
            extra={"chunk": chunk.idx, "locator": locator.encode()},
        )

    if len(locators) == 1:
        return SubmitReceipt(root=locators[0], chunks=builder.entries)

    manifest = builder.build()
    blob = manifest.to_json()
    root = _store(ctx, blob, MANIFEST_SLOT)
    log.info(
        "submitted manifest for %d chunks (%d bytes) at height %d",
        len(manifest.chunks), len(blob), root.height,
        extra={"locator": root.encode(), "size": manifest.size},
    )
    return SubmitReceipt(root=root, chunks=manifest.chunks, manifest=manifest)


def submit_payload(
    ctx: PipelineContext,
    payload: BytesLike,
    *,
    name: str,
    mime_type: Optional[str] = None,
) -> BlobLocator:
    """Like `submit`, returning only the root locator."""
    return submit(ctx, payload, name=name, mime_type=mime_type).root


# --------------------------------------------------------------------------- #
# Read
# --------------------------------------------------------------------------- #

def _fetch(ctx: PipelineContext, locator: BlobLocator, slot: object) -> bytes:
    try:
        return ctx.store.get(locator.height, locator.namespace, locator.commitment)
    except StoreError as e:
        raise e.__class__(
            f"fetching {_slot_name(slot) if slot is not None else 'root'} failed: {e.message}",
            code=e.code,
            data={**e.data, "chunk": slot, "locator": locator.encode()},
        ) from e


def fetch_root(ctx: PipelineContext, root: BlobLocator) -> Tuple[bytes, Optional[Manifest]]:
    """Fetch the root blob and report whether it is a manifest."""
    blob = _fetch(ctx, root, None)
    log.info(
        "fetched root blob (%d bytes) at height %d", len(blob), root.height,
        extra={"locator": root.encode()},
    )
    return blob, try_parse_manifest(blob)


def inspect(ctx: PipelineContext, root: BlobLocator) -> Optional[Manifest]:
    """Return the manifest stored at `root`, or None if it holds a raw payload."""
    return fetch_root(ctx, root)[1]


def read(ctx: PipelineContext, root: BlobLocator, *, verify_size: bool = False) -> bytes:
    """
    Reconstruct the payload addressed by `root`.

    With `verify_size`, every chunk must match its declared size and the total
    must match the manifest size, otherwise IntegrityError. Without it, the
    declared sizes are informational and a mismatch is only logged.
    """
    blob, manifest = fetch_root(ctx, root)
    if manifest is None:
        return blob

    log.info(
        "detected manifest %r: %d chunks, %d bytes", manifest.name, len(manifest.chunks), manifest.size,
        extra={"locator": root.encode()},
    )

    parts: List[bytes] = []
    fetched = 0
    for idx, entry in enumerate(manifest.chunks):
        try:
            locator = entry.locator()
        except EncodingError as e:
            raise EncodingError(
                f"manifest chunk {idx} has a malformed locator: {e.message}",
                data={**e.data, "chunk": idx, "locator": entry.blob},
            ) from e

        data = _fetch(ctx, locator, idx)
        if verify_size and len(data) != entry.size:
            raise IntegrityError(
                f"chunk {idx} is {len(data)} bytes, manifest declares {entry.size}",
                data={"chunk": idx, "locator": entry.blob, "actual": len(data), "declared": entry.size},
            )
        parts.append(data)
        fetched += len(data)
        log.info(
            "fetched chunk %d (%d/%d bytes)", idx, fetched, manifest.size,
            extra={"chunk": idx, "locator": entry.blob},
        )

    if fetched != manifest.size:
        if verify_size:
            raise IntegrityError(
                f"reconstructed {fetched} bytes, manifest declares {manifest.size}",
                data={"actual": fetched, "declared": manifest.size},
            )
        log.warning(
            "reconstructed %d bytes, manifest declares %d", fetched, manifest.size,
            extra={"locator": root.encode()},
        )
    return b"".join(parts)


__all__ = [
    "PipelineContext",
    "SubmitReceipt",
    "submit",
    "submit_payload",
    "fetch_root",
    "inspect",
    "read",
]
