"""
dafile • MIME sniffer

Best-effort content type for the manifest's `mimeType` field. The sniffer is
pluggable (`PipelineContext.mime_sniffer`). The default matches the payload's
leading bytes against known file signatures (`filetype`), then consults the
`mimetypes` registry with the payload name, and finally falls back to
application/octet-stream.
"""

from __future__ import annotations

import mimetypes
from typing import Callable, Optional

import filetype

from .constants import DEFAULT_MIME_TYPE

MimeSniffer = Callable[[bytes, Optional[str]], str]

# filetype only inspects the head of a buffer
SIGNATURE_BYTES = 8192


def sniff_mime_type(data: bytes, name: Optional[str] = None) -> str:
    kind = filetype.guess_mime(bytes(data[:SIGNATURE_BYTES])) if data else None
    if kind:
        return kind
    if name:
        guessed, _ = mimetypes.guess_type(str(name))
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


__all__ = ["MimeSniffer", "sniff_mime_type"]
