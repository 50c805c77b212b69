"""
dafile • Store • Celestia JSON-RPC client

Blob store backed by a celestia-node JSON-RPC endpoint.

Methods used
------------
- blob.Submit  params: [[{namespace, data, share_version, commitment}], options]
               result: inclusion height (uint64)
- blob.Get     params: [height, namespace, commitment]
               result: {"namespace", "data", "share_version", "commitment", "index"}

All byte fields travel as standard base64. The share commitment is computed
locally (`dafile.blob.commitment`) so the caller learns it without a second
round trip.

This client:
- Sends `Authorization: Bearer <token>` when a token is configured.
- Keeps an internal httpx.Client; safe to use as a context manager.
- Does not retry; every failure surfaces as StoreError (NotFound for missing
  blobs) with the JSON-RPC method and cause attached.

Usage
-----
    with CelestiaBlobStore("http://localhost:26658", auth_token=token) as store:
        res = store.submit(ns, b"hello")
        assert store.get(res.height, ns, res.commitment) == b"hello"
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..blob.commitment import create_commitment
from ..constants import SHARE_VERSION_ZERO
from ..errors import NotFound, StoreError
from ..nmt.namespace import Namespace
from ..utils.bytes import b64decode, b64encode
from .base import BlobStore, StoreResult

log = logging.getLogger("dafile.store.celestia")


class CelestiaBlobStore(BlobStore):
    """
    Synchronous celestia-node blob client.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        auth_token: Optional[str] = None,
        timeout: float = 60.0,
        gas_price: Optional[float] = None,
        default_headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.timeout = float(timeout)
        self.gas_price = gas_price

        hdrs = {"Content-Type": "application/json", "Accept": "application/json"}
        if auth_token:
            hdrs["Authorization"] = f"Bearer {auth_token}"
        if default_headers:
            hdrs.update(default_headers)

        self._ids = itertools.count(1)
        self._own_client = client is None
        self._client = client or httpx.Client(headers=hdrs, timeout=self.timeout)
        if client is not None:
            self._client.headers.update(hdrs)

    # --- context management

    def close(self) -> None:
        if self._own_client:
            self._client.close()

    # --- BlobStore

    def submit(self, namespace: Namespace, data: bytes) -> StoreResult:
        blob = bytes(data)
        try:
            commitment = create_commitment(namespace, blob)
        except ValueError as e:
            raise StoreError(f"cannot commit blob: {e}", data={"size": len(blob)}) from e

        payload = {
            "namespace": b64encode(namespace.to_bytes()),
            "data": b64encode(blob),
            "share_version": SHARE_VERSION_ZERO,
            "commitment": b64encode(commitment),
        }
        result = self._call("blob.Submit", [[payload], self._submit_options()])
        try:
            height = int(result)
        except (TypeError, ValueError) as e:
            raise StoreError(
                f"unexpected blob.Submit result: {result!r}", data={"method": "blob.Submit"}
            ) from e
        return StoreResult(commitment=commitment, height=height)

    def get(self, height: int, namespace: Namespace, commitment: bytes) -> bytes:
        params = [int(height), b64encode(namespace.to_bytes()), b64encode(bytes(commitment))]
        try:
            result = self._call("blob.Get", params)
        except StoreError as e:
            if "not found" in e.message.lower():
                raise NotFound(
                    "blob not found",
                    data={"height": height, "namespace": namespace.id_hex, "commitment": bytes(commitment).hex()},
                ) from e
            raise
        if result is None:
            raise NotFound(
                "blob not found",
                data={"height": height, "namespace": namespace.id_hex, "commitment": bytes(commitment).hex()},
            )
        try:
            return b64decode(result["data"])
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError("malformed blob.Get result", data={"method": "blob.Get"}) from e

    # --- internals

    def _submit_options(self) -> Dict[str, Any]:
        if self.gas_price is None:
            return {}
        return {"gas_price": float(self.gas_price), "is_gas_price_set": True}

    def _call(self, method: str, params: List[Any]) -> Any:
        req_id = next(self._ids)
        body = {"jsonrpc": "2.0", "id": req_id, "method": method, "params": params}
        log.debug("rpc call", extra={"method": method, "id": req_id})
        try:
            resp = self._client.post(self.rpc_url, json=body)
        except httpx.HTTPError as e:
            raise StoreError(
                f"{method} transport failure: {e}", data={"method": method, "url": self.rpc_url}
            ) from e

        self._raise_for_status(resp, method)

        try:
            reply = resp.json()
        except ValueError as e:
            raise StoreError(f"{method} returned non-JSON response", data={"method": method}) from e

        if not isinstance(reply, dict):
            raise StoreError(f"{method} returned an unexpected reply", data={"method": method})
        err = reply.get("error")
        if err:
            msg = err.get("message") if isinstance(err, dict) else str(err)
            code = err.get("code") if isinstance(err, dict) else None
            raise StoreError(f"{method} failed: {msg}", data={"method": method, "rpc_code": code})
        return reply.get("result")

    @staticmethod
    def _raise_for_status(resp: httpx.Response, method: str) -> None:
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = resp.text.strip()[:200] if resp.text else ""
            msg = f"HTTP {resp.status_code} for {method}"
            if detail:
                msg += f" ({detail})"
            raise StoreError(msg, data={"method": method, "status": resp.status_code}) from e


__all__ = ["CelestiaBlobStore"]
