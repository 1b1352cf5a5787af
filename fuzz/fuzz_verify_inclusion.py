"""Higher-level inclusion proof fuzzing with mutated proofs."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from merkle_core.proof import Proof, verify_proof
    from merkle_core.tree import MerkleTree


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    # Derive variable chunk size & mutation seed
    seed = int.from_bytes(data[:4], "little")
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    leaves = [body[i : i + chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    leaves = [x for x in leaves if x]
    # Distinct leaves, so no sibling equals the node on the path
    if len(leaves) < 3 or len(set(leaves)) != len(leaves):
        return
    tree = MerkleTree.from_leaves(leaves)
    idx = seed % len(leaves)
    proof = tree.prove(idx)
    root = tree.get_root()
    # With some probability, mutate one sibling to exercise negative path
    if random.random() < 0.2 and proof.siblings:
        sibs = list(proof.siblings)
        pos = random.randrange(len(sibs))
        sib = sibs[pos]
        sibs[pos] = bytes([sib[0] ^ 0x01]) + sib[1:]
        if verify_proof(leaves[idx], Proof(idx, tuple(sibs)), root):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif random.random() < 0.2:
        mutated = bytes([leaves[idx][0] ^ 0x80]) + leaves[idx][1:]
        if verify_proof(mutated, proof, root):
            raise RuntimeError("tampered leaf unexpectedly verified")
    else:
        if not verify_proof(leaves[idx], proof, root):
            raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
