from __future__ import annotations
import logging
import pathlib
from typing import List, Optional

import typer
from rich import print
from rich.markup import escape

from merkle_core.crypto import from_hex
from merkle_core.errors import MerkleTreeError
from merkle_core.hasher import Hasher, get_hasher
from merkle_core.logutil import setup_logging
from merkle_core.models import ProofModel
from merkle_core.proof import verify_proof
from merkle_core.settings import settings
from merkle_core.tree import MerkleTree

app = typer.Typer(add_completion=False, no_args_is_help=True)
logger = logging.getLogger("merkle_cli")


@app.callback()
def main(
    log_level: str = typer.Option(
        None, help="Logging level (defaults to MERKLE_LOG_LEVEL)"
    ),
):
    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level {log_level!r}")
    setup_logging(level)


def _fail(msg: str) -> None:
    print(f"[red]{escape(msg)}[/red]")
    raise typer.Exit(code=1)


def _hasher(name: Optional[str]) -> Hasher:
    try:
        return get_hasher(name or settings.hasher)
    except ValueError as e:
        _fail(str(e))


def _read(path: str) -> bytes:
    p = pathlib.Path(path)
    if not p.is_file():
        _fail(f"No such file: {p}")
    if p.stat().st_size > settings.max_leaf_bytes:
        _fail(f"{p} exceeds MERKLE_MAX_LEAF_BYTES ({settings.max_leaf_bytes})")
    return p.read_bytes()


def _build(files: List[str], lines: bool, hasher: Hasher) -> MerkleTree:
    tree = MerkleTree(hasher)
    for path in files:
        data = _read(path)
        chunks = data.splitlines() if lines else [data]
        for n, chunk in enumerate(chunks, start=1):
            try:
                tree.add_leaf(chunk)
            except MerkleTreeError as e:
                where = f"{path}:{n}" if lines else path
                _fail(f"{where}: {e}")
    logger.debug("built tree over %d leaves from %d file(s)", tree.size, len(files))
    return tree


@app.command()
def root(
    files: List[str] = typer.Argument(..., help="Leaf files, in order"),
    lines: bool = typer.Option(False, "--lines", help="Treat each line as a leaf"),
    hasher: str = typer.Option(None, help="Hasher name: sha256|simple"),
):
    """Print the Merkle root of the given leaves."""
    tree = _build(files, lines, _hasher(hasher))
    print(tree.root_hex())


@app.command()
def prove(
    files: List[str] = typer.Argument(..., help="Leaf files, in order"),
    index: int = typer.Option(..., help="0-based leaf index to prove"),
    lines: bool = typer.Option(False, "--lines", help="Treat each line as a leaf"),
    hasher: str = typer.Option(None, help="Hasher name: sha256|simple"),
    out: Optional[str] = typer.Option(None, help="Write proof JSON here"),
):
    """Emit an inclusion proof for one leaf as canonical JSON."""
    tree = _build(files, lines, _hasher(hasher))
    try:
        proof = tree.prove(index)
    except MerkleTreeError as e:
        _fail(str(e))
    body = ProofModel.from_proof(proof).canonical_json()
    print(f"[cyan]Root[/cyan]: {tree.root_hex()}")
    if out:
        pathlib.Path(out).write_bytes(body)
        print(f"[green]Wrote proof to {out}[/green]")
    else:
        typer.echo(body.decode())


@app.command()
def verify(
    leaf: str = typer.Argument(..., help="File holding the leaf data"),
    proof_path: str = typer.Argument(..., help="Proof JSON file"),
    root_hex: str = typer.Option(..., "--root", help="Expected root, hex"),
    hasher: str = typer.Option(None, help="Hasher name: sha256|simple"),
):
    """Check a proof against an expected root."""
    h = _hasher(hasher)
    data = _read(leaf)
    try:
        proof = ProofModel.model_validate_json(_read(proof_path)).to_proof()
        expected = from_hex(root_hex)
    except ValueError as e:
        _fail(f"invalid input: {e}")
    ok = verify_proof(data, proof, expected, h)
    print({"proof_valid": ok})
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
