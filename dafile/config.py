"""
dafile configuration.

Connection and chunking settings for the CLI and library callers. All fields
have defaults and can be overridden via environment variables, then by
explicit keyword overrides (`load_config(rpc_url=...)`). Nothing is read at
import time.

Environment variables (all optional):

  DAFILE_RPC_URL=http://localhost:26658
  DAFILE_AUTH_TOKEN=<jwt>                # falls back to CELESTIA_NODE_AUTH_TOKEN
  DAFILE_NAMESPACE=000008e5f679bf7116cb  # hex of the 10-byte v0 user id
  DAFILE_MAX_CHUNK_BYTES=1500000         # also 1.5MB, 1MiB, 0x16e360
  DAFILE_TIMEOUT=60                      # seconds
  DAFILE_GAS_PRICE=0.002                 # utia per gas unit; unset = node default
"""

from __future__ import annotations

import os
import re
from dataclasses import asdict, dataclass, replace
from functools import lru_cache
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_MAX_CHUNK_BYTES, DEFAULT_NAMESPACE_ID, DEFAULT_RPC_URL
from .errors import ConfigurationError
from .nmt.namespace import Namespace

DEFAULT_TIMEOUT = 60.0


# ------------------------------- helpers ------------------------------------


_SIZE_RE = re.compile(
    r"^\s*(?P<num>(?:\d+)(?:\.\d+)?)\s*(?P<unit>bytes?|b|kb|kib|mb|mib|gb|gib)?\s*$",
    re.IGNORECASE,
)

_UNITS = {
    "b": 1,
    "byte": 1,
    "bytes": 1,
    "kb": 1000,
    "kib": 1024,
    "mb": 1000**2,
    "mib": 1024**2,
    "gb": 1000**3,
    "gib": 1024**3,
}


def _parse_size(value: Optional[str], *, default: int) -> int:
    """Parse human sizes like '1500000', '1.5MB', '1MiB', '0x16e360' → bytes."""
    if not value:
        return default
    m = _SIZE_RE.match(value)
    if not m:
        # allow hex for exact byte sizes
        v = value.strip().lower()
        if v.startswith("0x"):
            try:
                return int(v, 16)
            except ValueError:
                pass
        raise ConfigurationError(f"invalid size: {value!r}", data={"field": "max_chunk_bytes"})
    num = float(m.group("num"))
    unit = (m.group("unit") or "b").lower()
    return int(num * _UNITS[unit])


def _getenv(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.environ.get(key)
    return v if v is not None and v.strip() != "" else default


def _getenv_float(key: str, default: Optional[float]) -> Optional[float]:
    v = _getenv(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError as e:
        raise ConfigurationError(f"invalid number for {key}: {v!r}", data={"field": key}) from e


# ------------------------------- config -------------------------------------


@dataclass(frozen=True)
class DAFileConfig:
    """
    Resolved settings.

    - rpc_url:         celestia-node JSON-RPC endpoint
    - auth_token:      bearer token for the node; required only for network use
    - namespace_id:    hex of the v0 user id every blob is filed under
    - max_chunk_bytes: chunk size limit (the store's per-blob limit)
    - timeout:         per-request HTTP timeout in seconds
    - gas_price:       explicit gas price for blob.Submit, or None
    """
    rpc_url: str = DEFAULT_RPC_URL
    auth_token: Optional[str] = None
    namespace_id: str = DEFAULT_NAMESPACE_ID
    max_chunk_bytes: int = DEFAULT_MAX_CHUNK_BYTES
    timeout: float = DEFAULT_TIMEOUT
    gas_price: Optional[float] = None

    def validate(self) -> None:
        if not self.rpc_url or not self.rpc_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"rpc url must be http(s), got {self.rpc_url!r}", data={"field": "rpc_url"}
            )
        if isinstance(self.max_chunk_bytes, bool) or not isinstance(self.max_chunk_bytes, int) \
                or self.max_chunk_bytes <= 0:
            raise ConfigurationError("max_chunk_bytes must be > 0", data={"field": "max_chunk_bytes"})
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be > 0", data={"field": "timeout"})
        if self.gas_price is not None and self.gas_price < 0:
            raise ConfigurationError("gas_price must be >= 0", data={"field": "gas_price"})
        self.namespace()

    def namespace(self) -> Namespace:
        """Decode `namespace_id` (ConfigurationError/EncodingError if invalid)."""
        return Namespace.from_hex(self.namespace_id)

    def require_auth_token(self) -> str:
        if not self.auth_token:
            raise ConfigurationError(
                "an auth token is required (--auth, DAFILE_AUTH_TOKEN or CELESTIA_NODE_AUTH_TOKEN)",
                data={"field": "auth_token"},
            )
        return self.auth_token

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# ------------------------------- loader -------------------------------------


def _load_from_env() -> DAFileConfig:
    return DAFileConfig(
        rpc_url=_getenv("DAFILE_RPC_URL", DEFAULT_RPC_URL) or DEFAULT_RPC_URL,
        auth_token=_getenv("DAFILE_AUTH_TOKEN") or _getenv("CELESTIA_NODE_AUTH_TOKEN"),
        namespace_id=_getenv("DAFILE_NAMESPACE", DEFAULT_NAMESPACE_ID) or DEFAULT_NAMESPACE_ID,
        max_chunk_bytes=_parse_size(_getenv("DAFILE_MAX_CHUNK_BYTES"), default=DEFAULT_MAX_CHUNK_BYTES),
        timeout=_getenv_float("DAFILE_TIMEOUT", DEFAULT_TIMEOUT),
        gas_price=_getenv_float("DAFILE_GAS_PRICE", None),
    )


def load_config(**overrides: Any) -> DAFileConfig:
    """
    Read the environment, apply non-None keyword overrides and validate.

        cfg = load_config(namespace_id="deadbeef", max_chunk_bytes=1024)
    """
    cfg = _load_from_env()
    changes = {k: v for k, v in overrides.items() if v is not None}
    if changes:
        try:
            cfg = replace(cfg, **changes)
        except TypeError as e:
            raise ConfigurationError(f"unknown config field: {e}") from e
    cfg.validate()
    return cfg


@lru_cache(maxsize=1)
def get_config() -> DAFileConfig:
    """
    Load and validate configuration (cached). Clear the cache in tests
    via `get_config.cache_clear()` to observe env changes.
    """
    return load_config()


# Pretty-print helper (useful in CLIs)
def format_config(cfg: Optional[DAFileConfig] = None) -> str:
    cfg = cfg or get_config()
    lines: List[str] = []
    for k, v in cfg.to_dict().items():
        if k == "auth_token" and v:
            v = "***"
        lines.append(f"{k}: {v}")
    return "\n".join(lines)


__all__ = [
    "DAFileConfig",
    "DEFAULT_TIMEOUT",
    "load_config",
    "get_config",
    "format_config",
]
