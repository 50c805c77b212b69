"""
dafile — store and fetch files of any size on Celestia.

Commands:
  - dafile submit   Chunk a file, submit the blobs (plus a manifest) and print the root locator
  - dafile read     Reconstruct a payload from its root locator
  - dafile inspect  Show the manifest behind a locator, or report a raw blob

Configuration is resolved in this order (highest to lowest priority):
  1. Command-line flags (--rpc, --auth, --namespace, --max-blob-size)
  2. Environment variables (DAFILE_RPC_URL, DAFILE_AUTH_TOKEN, ...)
  3. Built-in defaults (http://localhost:26658, 1,500,000-byte chunks)

Exit codes: 0 on success, 2 for configuration/usage problems (nothing was
sent), 1 when a store or reconstruction step failed.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from ..blob.locator import BlobLocator
from ..config import DAFileConfig, _parse_size, load_config
from ..errors import ConfigurationError, DAFileError, EncodingError
from ..pipeline import PipelineContext, inspect as inspect_root, read as read_root, submit as submit_receipt
from ..store.base import BlobStore
from ..store.celestia import CelestiaBlobStore
from ..store.memory import InMemoryBlobStore
from ..utils.bytes import hex_to_bytes
from ..version import __version__

log = logging.getLogger("dafile.cli")

app = typer.Typer(
    name="dafile",
    help="Store and fetch arbitrarily large files as Celestia blobs",
    no_args_is_help=True,
    add_completion=False,
)

STDIO = "-"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dafile {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (RPC calls)"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit"
    ),
) -> None:
    """
    dafile — chunked file storage on Celestia data availability.
    """
    _configure_logging(verbose)


def _make_store(cfg: DAFileConfig, dry_run: bool = False) -> BlobStore:
    """
    Build the blob store for a command. Dry runs never touch the network.

    The dry-run store carries no size limit; the chunker applies the chunk
    limit and the manifest blob is exempt from it.
    """
    if dry_run:
        return InMemoryBlobStore()
    return CelestiaBlobStore(
        cfg.rpc_url,
        auth_token=cfg.require_auth_token(),
        timeout=cfg.timeout,
        gas_price=cfg.gas_price,
    )


def _load(
    *,
    rpc: Optional[str] = None,
    auth: Optional[str] = None,
    namespace: Optional[str] = None,
    max_blob_size: Optional[str] = None,
) -> DAFileConfig:
    limit = _parse_size(max_blob_size, default=0) if max_blob_size else None
    if limit is not None and limit <= 0:
        raise ConfigurationError("--max-blob-size must be > 0", data={"field": "max_chunk_bytes"})
    return load_config(rpc_url=rpc, auth_token=auth, namespace_id=namespace, max_chunk_bytes=limit)


def _fail(err: DAFileError, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(err.to_problem()))
    else:
        typer.echo(f"Error: {err.message}", err=True)
    raise typer.Exit(err.exit_code)


def _emit(payload: Dict[str, Any], json_output: bool, lines: list) -> None:
    if json_output:
        typer.echo(json.dumps(payload, indent=2))
        return
    for line in lines:
        typer.echo(line)


def _resolve_root(
    cfg: DAFileConfig, locator: Optional[str], height: Optional[int], commitment: Optional[str]
) -> BlobLocator:
    if locator:
        return BlobLocator.parse(locator)
    if height is None or not commitment:
        raise ConfigurationError(
            "either --locator or both --height and --commitment are required",
            data={"field": "locator"},
        )
    try:
        commit = hex_to_bytes(commitment)
    except ValueError as e:
        raise EncodingError(f"invalid commitment hex: {commitment!r}", data={"field": "commitment"}) from e
    return BlobLocator(height=height, namespace=cfg.namespace(), commitment=commit)


@app.command()
def submit(
    file: str = typer.Option(..., "--file", "-f", help="File to submit ('-' reads stdin)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace id (hex, up to 10 bytes)"),
    auth: Optional[str] = typer.Option(None, "--auth", help="celestia-node auth token"),
    rpc: Optional[str] = typer.Option(None, "--rpc", help="celestia-node JSON-RPC URL"),
    max_blob_size: Optional[str] = typer.Option(
        None, "--max-blob-size", help="Chunk size limit (e.g. 1500000, 1.5MB, 1MiB)"
    ),
    mime_type: Optional[str] = typer.Option(None, "--mime-type", help="Override the detected MIME type"),
    name: Optional[str] = typer.Option(None, "--name", help="Name recorded in the manifest (default: file name)"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON instead of human-readable text"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Chunk and commit in memory; send nothing"),
) -> None:
    """
    Submit a file and print its root locator.

    Examples:
      dafile submit --file movie.mp4
      cat log.txt | dafile submit --file - --name log.txt --json
    """
    try:
        cfg = _load(rpc=rpc, auth=auth, namespace=namespace, max_blob_size=max_blob_size)
        if file == STDIO:
            data = sys.stdin.buffer.read()
            label = name or "stdin"
        else:
            path = Path(file)
            if not path.is_file():
                raise ConfigurationError(f"file not found: {file}", data={"field": "file"})
            try:
                data = path.read_bytes()
            except OSError as e:
                raise ConfigurationError(f"cannot read {file}: {e}", data={"field": "file"}) from e
            label = name or path.name

        with _make_store(cfg, dry_run) as store:
            ctx = PipelineContext(store=store, namespace=cfg.namespace(), max_chunk_bytes=cfg.max_chunk_bytes)
            receipt = submit_receipt(ctx, data, name=label, mime_type=mime_type)
    except DAFileError as e:
        _fail(e, json_output)
        return

    root = receipt.root
    prefix = "(dry run) " if dry_run else ""
    _emit(
        {
            "root": root.encode(),
            "height": root.height,
            "namespace": root.namespace.id_hex,
            "commitment": root.commitment_hex,
            "chunks": len(receipt.chunks),
            "size": receipt.size,
            "manifest": receipt.manifest is not None,
            "dryRun": dry_run,
        },
        json_output,
        [
            f"✓ {prefix}Payload submitted",
            f"  Root: {root.encode()}",
            f"  Height: {root.height}",
            f"  Commitment: {root.commitment_hex}",
            f"  Chunks: {len(receipt.chunks)}" + (" (+ manifest)" if receipt.manifest else ""),
            f"  Size: {receipt.size} bytes",
        ],
    )


@app.command()
def read(
    file: str = typer.Option(..., "--file", "-f", help="Output file ('-' writes stdout)"),
    locator: Optional[str] = typer.Option(None, "--locator", "-l", help="Root locator <height>/<ns>/<commitment>"),
    height: Optional[int] = typer.Option(None, "--height", help="Root blob height"),
    commitment: Optional[str] = typer.Option(None, "--commitment", help="Root blob commitment (hex)"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace id for --height/--commitment"),
    auth: Optional[str] = typer.Option(None, "--auth", help="celestia-node auth token"),
    rpc: Optional[str] = typer.Option(None, "--rpc", help="celestia-node JSON-RPC URL"),
    verify_size: bool = typer.Option(False, "--verify-size", help="Fail if sizes disagree with the manifest"),
) -> None:
    """
    Reconstruct a payload and write it to a file.

    Examples:
      dafile read --locator 42/000008e5f679bf7116cb/9f2c… --file movie.mp4
      dafile read --height 42 --commitment 9f2c… --file - > movie.mp4
    """
    try:
        cfg = _load(rpc=rpc, auth=auth, namespace=namespace)
        root = _resolve_root(cfg, locator, height, commitment)
        with _make_store(cfg) as store:
            ctx = PipelineContext(store=store, namespace=root.namespace, max_chunk_bytes=cfg.max_chunk_bytes)
            data = read_root(ctx, root, verify_size=verify_size)
    except DAFileError as e:
        _fail(e, False)
        return

    if file == STDIO:
        typer.echo(data, nl=False)
        return
    try:
        Path(file).write_bytes(data)
    except OSError as e:
        _fail(DAFileError(f"error writing to file {file}: {e}", data={"field": "file"}), False)
        return
    typer.echo(f"✓ Wrote {len(data)} bytes to {file}")


@app.command()
def inspect(
    locator: str = typer.Option(..., "--locator", "-l", help="Root locator <height>/<ns>/<commitment>"),
    auth: Optional[str] = typer.Option(None, "--auth", help="celestia-node auth token"),
    rpc: Optional[str] = typer.Option(None, "--rpc", help="celestia-node JSON-RPC URL"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON instead of human-readable text"),
) -> None:
    """
    Show the manifest stored at a locator.
    """
    try:
        cfg = _load(rpc=rpc, auth=auth)
        root = BlobLocator.parse(locator)
        with _make_store(cfg) as store:
            ctx = PipelineContext(store=store, namespace=root.namespace, max_chunk_bytes=cfg.max_chunk_bytes)
            manifest = inspect_root(ctx, root)
    except DAFileError as e:
        _fail(e, json_output)
        return

    if manifest is None:
        _emit({"root": root.encode(), "manifest": None}, json_output, [f"{root.encode()}: raw blob (no manifest)"])
        return
    lines = [
        f"Manifest {root.encode()}",
        f"  Name: {manifest.name}",
        f"  MIME type: {manifest.mime_type}",
        f"  Size: {manifest.size} bytes",
        f"  Chunks: {len(manifest.chunks)}",
    ]
    lines += [f"    [{i}] {c.blob} ({c.size} bytes)" for i, c in enumerate(manifest.chunks)]
    _emit({"root": root.encode(), "manifest": manifest.to_dict()}, json_output, lines)


def main() -> None:
    """Entry point for the dafile CLI."""
    app()


if __name__ == "__main__":
    main()
