"""Fuzz harness for tree construction, proof generation & verification."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.errors import EmptyInputError
    from merkle_core.hasher import SimpleHasher
    from merkle_core.tree import MerkleTree


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Fixed-size chunks keep the leaf count bounded
    size = max(1, min(32, data[0]))
    chunks = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 64), size)]
    if not chunks:
        return
    tree = MerkleTree(SimpleHasher())
    for c in chunks:
        tree.add_leaf(c)
    try:
        tree.add_leaf(b"")
    except EmptyInputError:
        pass
    else:
        raise RuntimeError("empty leaf accepted")
    if tree.size != len(chunks):
        raise RuntimeError("tree size changed by rejected leaf")
    root = tree.get_root()
    idx = data[-1] % len(chunks)
    proof = tree.prove(idx)
    expected_len = (len(chunks) - 1).bit_length()
    if len(proof.siblings) != expected_len:
        raise RuntimeError("unexpected proof length")
    if not tree.verify(proof, chunks[idx], root):
        raise RuntimeError("valid inclusion proof failed")
    # Rebuilding from scratch must agree with the incremental tree
    if MerkleTree.from_leaves(chunks, SimpleHasher()).get_root() != root:
        raise RuntimeError("non-deterministic root")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
