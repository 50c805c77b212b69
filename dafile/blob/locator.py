"""
dafile • Blob • Locator

A `BlobLocator` addresses exactly one committed blob:

    (height, namespace, commitment)

and is persisted as the slash-delimited receipt string

    "<height>/<namespace-id-hex>/<commitment-hex>"

e.g. "1234/000008e5f679bf7116cb/ab12…". The root locator returned by a
submission is the only handle a caller needs to keep.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..constants import LOCATOR_SEPARATOR
from ..errors import EncodingError
from ..nmt.namespace import Namespace
from ..utils.bytes import hex_to_bytes


@dataclass(frozen=True)
class BlobLocator:
    """
    Coordinates of one committed blob.

      • height     — inclusion height (never 0 for a committed blob)
      • namespace  — namespace the blob is filed under
      • commitment — share commitment bytes
    """
    height: int
    namespace: Namespace
    commitment: bytes

    def __post_init__(self) -> None:
        if isinstance(self.height, bool) or not isinstance(self.height, int) or self.height <= 0:
            raise EncodingError("locator height must be a positive integer", data={"field": "height"})
        if self.height >= 1 << 64:
            raise EncodingError("locator height exceeds uint64", data={"field": "height"})
        if not isinstance(self.commitment, (bytes, bytearray)) or not self.commitment:
            raise EncodingError("locator commitment must be non-empty bytes", data={"field": "commitment"})
        object.__setattr__(self, "commitment", bytes(self.commitment))

    @property
    def commitment_hex(self) -> str:
        return self.commitment.hex()

    def encode(self) -> str:
        return LOCATOR_SEPARATOR.join(
            (str(self.height), self.namespace.id_hex, self.commitment_hex)
        )

    def __str__(self) -> str:
        return self.encode()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "height": self.height,
            "namespace": self.namespace.id_hex,
            "commitment": self.commitment_hex,
            "locator": self.encode(),
        }

    @staticmethod
    def parse(text: str) -> "BlobLocator":
        """
        Decode a locator string. Raises EncodingError naming the bad field.
        """
        if not isinstance(text, str):
            raise EncodingError("locator must be a string", data={"field": "locator"})
        parts = text.strip().split(LOCATOR_SEPARATOR)
        if len(parts) != 3:
            raise EncodingError(
                f"locator must have 3 fields separated by {LOCATOR_SEPARATOR!r}, got {len(parts)}",
                data={"field": "locator", "locator": text},
            )
        height_s, ns_s, commit_s = parts

        if not (height_s.isascii() and height_s.isdigit()):
            raise EncodingError(
                f"invalid locator height: {height_s!r}",
                data={"field": "height", "locator": text},
            )
        height = int(height_s)

        if not ns_s:
            raise EncodingError("locator namespace is empty", data={"field": "namespace", "locator": text})
        try:
            namespace = Namespace.from_hex(ns_s)
        except EncodingError as e:
            raise EncodingError(e.message, data={**e.data, "locator": text}) from e

        try:
            commitment = hex_to_bytes(commit_s)
        except ValueError as e:
            raise EncodingError(
                f"invalid locator commitment: {commit_s!r}",
                data={"field": "commitment", "locator": text},
            ) from e

        return BlobLocator(height=height, namespace=namespace, commitment=commitment)


def encode_locator(locator: BlobLocator) -> str:
    return locator.encode()


def decode_locator(text: str) -> BlobLocator:
    return BlobLocator.parse(text)


__all__ = ["BlobLocator", "encode_locator", "decode_locator"]
