"""
dafile errors.

Lightweight, typed exception hierarchy with structured metadata suitable for
the CLI (exit codes, `--json` problem output) and library callers.

Usage:

    from dafile.errors import StoreError

    raise StoreError("blob store rejected chunk", data={"chunk": 3})

All errors expose:
- .code       : stable machine-readable code (snake_case)
- .exit_code  : suggested process exit status for the CLI
- .data       : optional structured payload (dict-like)
- .to_problem() : RFC 7807-style dict for JSON output

Taxonomy
--------
- ConfigurationError  : bad/missing inputs detected before any network call
- EncodingError       : malformed hex, namespace or locator strings
- StoreError          : the blob store rejected or failed a submit/get call
- NotFound            : the store has no blob at the requested coordinates
- IntegrityError      : reconstructed bytes disagree with the manifest sizes
- ManifestFormatError : fetched bytes are not a manifest; callers treat this
                        as "raw payload", it is never surfaced by `read`
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class DAFileError(Exception):
    """
    Base class for dafile errors.

    Subclasses should set `default_code` and `default_exit_code`.
    """
    default_code = "dafile_error"
    default_exit_code = 1

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.exit_code = int(self.default_exit_code)
        self.data: Dict[str, Any] = dict(data) if data else {}

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code

    def to_problem(self) -> Dict[str, Any]:
        """
        Render as an RFC 7807 "problem detail" object.
        """
        return {
            "type": f"urn:dafile:{self.code}",
            "title": self.code.replace("_", " ").title(),
            "detail": self.message or None,
            "data": self.data or None,
        }

    @classmethod
    def from_exc(
        cls,
        exc: BaseException,
        *,
        code: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> "DAFileError":
        """
        Wrap an arbitrary exception with a best-effort message.
        """
        msg = f"{exc.__class__.__name__}: {exc}"
        return cls(msg, code=code, data=data)


class ConfigurationError(DAFileError):
    """
    Missing or invalid configuration/input (namespace, chunk limit, payload,
    locator). Raised before any network call and never retried.
    """
    default_code = "configuration_error"
    default_exit_code = 2


class EncodingError(DAFileError):
    """
    Malformed hex in a namespace or commitment, or a malformed locator string.
    `data["field"]` names the offending field when known.
    """
    default_code = "encoding_error"


class StoreError(DAFileError):
    """
    The blob store failed a submit/get call, or returned the height == 0
    failure sentinel. `data["chunk"]` carries the chunk index when known.
    """
    default_code = "store_error"


class NotFound(StoreError):
    """
    No blob exists at the requested (height, namespace, commitment).
    """
    default_code = "not_found"


class IntegrityError(DAFileError):
    """
    Reconstructed bytes disagree with the sizes declared in the manifest.
    Only raised when size verification is requested.
    """
    default_code = "integrity_error"


class ManifestFormatError(DAFileError):
    """
    Bytes do not conform to the manifest schema.
    """
    default_code = "manifest_format"


__all__ = [
    "DAFileError",
    "ConfigurationError",
    "EncodingError",
    "StoreError",
    "NotFound",
    "IntegrityError",
    "ManifestFormatError",
]
