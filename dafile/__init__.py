"""
dafile — arbitrarily large payloads on Celestia data availability.

Public responsibilities:
- Split payloads into chunks that fit the per-blob limit and submit them.
- Link multi-chunk payloads with a JSON manifest stored as one more blob.
- Reconstruct a payload from a single root locator
  ("<height>/<namespace-hex>/<commitment-hex>").

    from dafile import PipelineContext, submit_payload, read
    from dafile.nmt.namespace import Namespace
    from dafile.store.celestia import CelestiaBlobStore

    with CelestiaBlobStore("http://localhost:26658", auth_token=token) as store:
        ctx = PipelineContext(store=store, namespace=Namespace.from_hex("000008e5f679bf7116cb"))
        root = submit_payload(ctx, data, name="movie.mp4")
        assert read(ctx, root) == data
"""

from __future__ import annotations

from .version import __version__, get_version
from .blob.locator import BlobLocator
from .blob.manifest import Manifest, ManifestEntry
from .errors import DAFileError
from .pipeline import PipelineContext, SubmitReceipt, inspect, read, submit, submit_payload

__all__ = [
    "__version__",
    "BlobLocator",
    "Manifest",
    "ManifestEntry",
    "DAFileError",
    "PipelineContext",
    "SubmitReceipt",
    "submit",
    "submit_payload",
    "read",
    "inspect",
    "get_version",
]
