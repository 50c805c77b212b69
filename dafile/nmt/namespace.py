"""
dafile • NMT — Namespace type & version-0 codec.

A Celestia *namespace* is 29 bytes: one version byte followed by a 28-byte id.
Blobs submitted by users live in version-0 namespaces whose id is 18 zero bytes
followed by 10 user-chosen bytes:

    version(1) | 0x00 * 18 | user_id(10)

This module provides:

  • `Namespace`: a validated, frozen (version, id) pair
  • `Namespace.from_hex`: the user-facing codec (hex of the 10-byte user id,
    shorter ids are left-padded with zeros)
  • Helpers to classify reserved namespaces

Locators carry the namespace as `Namespace.id_hex` (20 lowercase hex chars),
e.g. "000008e5f679bf7116cb".
"""
from __future__ import annotations

from dataclasses import dataclass

from ..constants import (
    NAMESPACE_ID_SIZE,
    NAMESPACE_SIZE,
    NAMESPACE_VERSION_MAX,
    NAMESPACE_VERSION_ZERO,
    NAMESPACE_VERSION_ZERO_ID_SIZE,
    NAMESPACE_VERSION_ZERO_PREFIX_SIZE,
)
from ..errors import ConfigurationError, EncodingError
from ..utils.bytes import hex_to_bytes

_V0_PREFIX = bytes(NAMESPACE_VERSION_ZERO_PREFIX_SIZE)

#: Highest primary reserved namespace: version 0, id 0x00..00FF.
MAX_PRIMARY_RESERVED = bytes([NAMESPACE_VERSION_ZERO]) + bytes(NAMESPACE_ID_SIZE - 1) + b"\xff"
#: Lowest secondary reserved namespace: version 0xFF, id 0xFF..FF00.
MIN_SECONDARY_RESERVED = bytes([NAMESPACE_VERSION_MAX]) + b"\xff" * (NAMESPACE_ID_SIZE - 1) + b"\x00"


@dataclass(frozen=True)
class Namespace:
    """
    A validated Celestia namespace.

    Invariants:
      • 0 <= version <= 255
      • len(id) == 28
      • version-0 ids start with 18 zero bytes
    """
    version: int
    id: bytes

    def __post_init__(self) -> None:
        if not (0 <= int(self.version) <= NAMESPACE_VERSION_MAX):
            raise EncodingError("namespace version out of range", data={"field": "namespace"})
        if not isinstance(self.id, (bytes, bytearray)) or len(self.id) != NAMESPACE_ID_SIZE:
            raise EncodingError(
                f"namespace id must be {NAMESPACE_ID_SIZE} bytes",
                data={"field": "namespace"},
            )
        # normalize bytearray input so equality and hashing behave
        object.__setattr__(self, "id", bytes(self.id))
        object.__setattr__(self, "version", int(self.version))
        if self.version == NAMESPACE_VERSION_ZERO and not self.id.startswith(_V0_PREFIX):
            raise EncodingError(
                "version 0 namespace id must start with 18 zero bytes",
                data={"field": "namespace"},
            )

    # --- constructors ---

    @classmethod
    def v0(cls, user_id: bytes) -> "Namespace":
        """
        Build a version-0 blob namespace from up to 10 user bytes.
        """
        if len(user_id) > NAMESPACE_VERSION_ZERO_ID_SIZE:
            raise EncodingError(
                f"namespace id must be at most {NAMESPACE_VERSION_ZERO_ID_SIZE} bytes, got {len(user_id)}",
                data={"field": "namespace"},
            )
        padded = bytes(NAMESPACE_VERSION_ZERO_ID_SIZE - len(user_id)) + bytes(user_id)
        return cls(version=NAMESPACE_VERSION_ZERO, id=_V0_PREFIX + padded)

    @classmethod
    def from_hex(cls, text: str) -> "Namespace":
        """
        Decode a user-supplied namespace id (hex, optional 0x) into a blob
        namespace. Blank input is a configuration error; malformed or
        reserved ids are encoding errors.
        """
        if text is None or not str(text).strip():
            raise ConfigurationError("namespace id cannot be blank", data={"field": "namespace"})
        try:
            raw = hex_to_bytes(str(text))
        except ValueError as e:
            raise EncodingError(
                f"invalid namespace hex: {text!r}", data={"field": "namespace"}
            ) from e
        ns = cls.v0(raw)
        ns.validate_for_blob()
        return ns

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Namespace":
        """Parse the full 29-byte wire form."""
        if len(raw) != NAMESPACE_SIZE:
            raise EncodingError(
                f"namespace must be {NAMESPACE_SIZE} bytes, got {len(raw)}",
                data={"field": "namespace"},
            )
        return cls(version=raw[0], id=bytes(raw[1:]))

    # --- views ---

    def to_bytes(self) -> bytes:
        return bytes([self.version]) + bytes(self.id)

    @property
    def user_id(self) -> bytes:
        """The trailing 10 bytes of a version-0 id."""
        return bytes(self.id[NAMESPACE_VERSION_ZERO_PREFIX_SIZE:])

    @property
    def id_hex(self) -> str:
        """Hex of the user id, as carried inside locators."""
        return self.user_id.hex()

    # --- classification ---

    @property
    def is_primary_reserved(self) -> bool:
        return self.to_bytes() <= MAX_PRIMARY_RESERVED

    @property
    def is_secondary_reserved(self) -> bool:
        return self.to_bytes() >= MIN_SECONDARY_RESERVED

    @property
    def is_reserved(self) -> bool:
        return self.is_primary_reserved or self.is_secondary_reserved

    def validate_for_blob(self) -> None:
        """Raise EncodingError if blobs may not be filed under this namespace."""
        if self.version != NAMESPACE_VERSION_ZERO:
            raise EncodingError(
                f"unsupported blob namespace version {self.version}",
                data={"field": "namespace"},
            )
        if self.is_reserved:
            raise EncodingError(
                f"namespace {self.id_hex} is reserved", data={"field": "namespace"}
            )

    def __str__(self) -> str:
        return self.id_hex


__all__ = [
    "Namespace",
    "MAX_PRIMARY_RESERVED",
    "MIN_SECONDARY_RESERVED",
]
