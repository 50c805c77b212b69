"""
dafile — Namespaced Merkle Tree (NMT)

This subpackage holds the pieces of Celestia's Namespaced Merkle Tree that a
blob client needs to commit to its own data:

  • namespace.py : Namespace type, version-0 codec and blob validation
  • tree.py      : NMT leaf/node hashing and root computation (sha256)

Typical usage
-------------
    from dafile.nmt.namespace import Namespace
    from dafile.nmt.tree import nmt_root

    ns = Namespace.from_hex("000008e5f679bf7116cb")
    root = nmt_root([ns.to_bytes() + share for share in shares])

This package lazily loads its submodules to keep imports lightweight.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_SUBMODULES = ("namespace", "tree")


def __getattr__(name: str) -> Any:
    if name in _SUBMODULES:
        return import_module(f"{__name__}.{name}")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_SUBMODULES))


__all__ = list(_SUBMODULES)
