"""
dafile constants.

Protocol-level defaults for chunking and the Celestia share layout. These
values are lightweight (no heavy imports) and safe to import from anywhere.

- Chunking defaults and locator encoding
- Celestia namespace widths and reserved ranges
- Celestia share layout (share version 0) and commitment parameters

Note: runtime configuration (RPC endpoint, auth token, user namespace) lives
in `dafile.config`.
"""

from __future__ import annotations


# --------------------------------- chunking ---------------------------------

#: Default maximum chunk size in bytes (one chunk per stored blob).
DEFAULT_MAX_CHUNK_BYTES: int = 1_500_000

#: Separator between the three fields of an encoded blob locator.
LOCATOR_SEPARATOR: str = "/"

#: MIME type used when nothing better can be determined.
DEFAULT_MIME_TYPE: str = "application/octet-stream"


# ------------------------------- endpoints ----------------------------------

#: Default celestia-node JSON-RPC endpoint.
DEFAULT_RPC_URL: str = "http://localhost:26658"

#: Default user namespace id (hex of the 10-byte version-0 id).
DEFAULT_NAMESPACE_ID: str = "000008e5f679bf7116cb"


# ------------------------------ namespaces ----------------------------------

#: Width of the namespace version prefix.
NAMESPACE_VERSION_SIZE: int = 1
#: Width of the namespace id.
NAMESPACE_ID_SIZE: int = 28
#: Full namespace width (version + id).
NAMESPACE_SIZE: int = NAMESPACE_VERSION_SIZE + NAMESPACE_ID_SIZE

#: Version-0 namespaces carry 18 leading zero bytes in their id...
NAMESPACE_VERSION_ZERO: int = 0
NAMESPACE_VERSION_ZERO_PREFIX_SIZE: int = 18
#: ...followed by 10 user-chosen bytes.
NAMESPACE_VERSION_ZERO_ID_SIZE: int = NAMESPACE_ID_SIZE - NAMESPACE_VERSION_ZERO_PREFIX_SIZE

#: Highest version the network accepts (0xFF is reserved for parity shares).
NAMESPACE_VERSION_MAX: int = 0xFF


# --------------------------------- shares -----------------------------------

#: Size of a single share in bytes.
SHARE_SIZE: int = 512
#: Bytes of share info (version << 1 | sequence start flag).
SHARE_INFO_BYTES: int = 1
#: Bytes holding the sequence length in the first share of a sequence.
SEQUENCE_LEN_BYTES: int = 4
#: Only share version 0 is produced.
SHARE_VERSION_ZERO: int = 0

#: Payload capacity of the first share of a blob sequence.
FIRST_SPARSE_SHARE_CONTENT_SIZE: int = SHARE_SIZE - NAMESPACE_SIZE - SHARE_INFO_BYTES - SEQUENCE_LEN_BYTES
#: Payload capacity of every following share.
CONTINUATION_SPARSE_SHARE_CONTENT_SIZE: int = SHARE_SIZE - NAMESPACE_SIZE - SHARE_INFO_BYTES

#: Subtree root threshold used when computing share commitments.
SUBTREE_ROOT_THRESHOLD: int = 64


__all__ = [
    "DEFAULT_MAX_CHUNK_BYTES",
    "LOCATOR_SEPARATOR",
    "DEFAULT_MIME_TYPE",
    "DEFAULT_RPC_URL",
    "DEFAULT_NAMESPACE_ID",
    "NAMESPACE_VERSION_SIZE",
    "NAMESPACE_ID_SIZE",
    "NAMESPACE_SIZE",
    "NAMESPACE_VERSION_ZERO",
    "NAMESPACE_VERSION_ZERO_PREFIX_SIZE",
    "NAMESPACE_VERSION_ZERO_ID_SIZE",
    "NAMESPACE_VERSION_MAX",
    "SHARE_SIZE",
    "SHARE_INFO_BYTES",
    "SEQUENCE_LEN_BYTES",
    "SHARE_VERSION_ZERO",
    "FIRST_SPARSE_SHARE_CONTENT_SIZE",
    "CONTINUATION_SPARSE_SHARE_CONTENT_SIZE",
    "SUBTREE_ROOT_THRESHOLD",
]
