"""
dafile • Utilities package

Small, reusable helpers used across the package:

  - dafile.utils.bytes   : hex and base64 helpers, bytes-like coercion
  - dafile.utils.merkle  : RFC 6962 binary Merkle root (sha256)

Submodules are loaded lazily so importing `dafile.utils` is cheap:

    from dafile import utils
    root = utils.merkle.hash_from_byte_slices([b"a", b"b"])
"""
from __future__ import annotations

from importlib import import_module
from typing import Any

_SUBMODULES = ("bytes", "merkle")


def __getattr__(name: str) -> Any:
    """Lazily import and return one of the known utility submodules."""
    if name in _SUBMODULES:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_SUBMODULES))


__all__ = list(_SUBMODULES)
