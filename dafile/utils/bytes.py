"""
dafile utilities — Byte, hex and base64 helpers

  • Lenient hex parsing (optional "0x" prefix, any case) for user input
  • Canonical lowercase hex without prefix for locators
  • Base64 helpers for celestia-node JSON byte fields

All functions are deterministic and side-effect free. Parsing failures raise
ValueError; callers at the API boundary translate them to EncodingError with
the name of the offending field.
"""
from __future__ import annotations

import base64
import binascii
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]

HEX_PREFIX = "0x"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


# -----------------------------------------------------------------------------
# Hex helpers
# -----------------------------------------------------------------------------

def strip_0x(h: str) -> str:
    """Remove a leading '0x'/'0X' (if present)."""
    return h[2:] if h[:2] in ("0x", "0X") else h


def bytes_to_hex(b: BytesLike) -> str:
    """Return lowercase hex (no prefix) for the given bytes."""
    return _b(b).hex()


def hex_to_bytes(s: str) -> bytes:
    """
    Parse a hex string, tolerating surrounding whitespace and a '0x' prefix.
    Raises ValueError on malformed input or odd-length hex.
    """
    if not isinstance(s, str):
        raise ValueError("hex input must be a string")
    t = strip_0x(s.strip())
    if len(t) % 2 != 0:
        raise ValueError("hex payload length must be even")
    if not all(c in _HEX_DIGITS for c in t):
        raise ValueError(f"invalid hex: {s!r}")
    return bytes.fromhex(t)


# -----------------------------------------------------------------------------
# Base64 helpers (celestia-node encodes []byte fields as std base64)
# -----------------------------------------------------------------------------

def b64encode(b: BytesLike) -> str:
    return base64.b64encode(_b(b)).decode("ascii")


def b64decode(s: str) -> bytes:
    """Strict standard base64 decode. Raises ValueError on malformed input."""
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"invalid base64: {e}") from e


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _b(x: BytesLike) -> bytes:
    """Coerce to `bytes` without unnecessary copies."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, bytearray):
        return bytes(x)
    if isinstance(x, memoryview):
        return x.tobytes()
    return bytes(x)  # type: ignore[arg-type]


to_bytes = _b


__all__ = [
    "BytesLike",
    "HEX_PREFIX", "strip_0x", "bytes_to_hex", "hex_to_bytes",
    "b64encode", "b64decode",
    "to_bytes",
]
