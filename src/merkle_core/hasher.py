"""Pluggable hash functions and the domain-separated leaf/node rules.

- LeafHash(data) = H(0x00 || data)
- NodeHash(left, right) = H(0x01 || left || right)

Tree construction, proof generation and proof verification all go through
``hash_leaf`` / ``hash_node`` so the three can never disagree.
"""
from __future__ import annotations
import hashlib
import struct
from typing import Dict, Protocol, Type

from .crypto import as_bytes

DIGEST_SIZE = 32
LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


class Hasher(Protocol):
    name: str
    digest_size: int

    def hash_bytes(self, data: bytes) -> bytes:
        ...


class Sha256Hasher:
    """SHA-256 via hashlib. The production hasher."""

    name = "sha256"
    digest_size = DIGEST_SIZE

    def hash_bytes(self, data: bytes) -> bytes:
        return hashlib.sha256(data).digest()

    def __repr__(self) -> str:
        return "Sha256Hasher()"


_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


class SimpleHasher:
    """Fast deterministic stand-in for tests. NOT cryptographically secure.

    Four FNV-1a 64-bit lanes, each seeded with its lane number and the input
    length, packed big-endian into 32 bytes. Order sensitive, so swapped
    bytes or swapped children hash differently.
    """

    name = "simple"
    digest_size = DIGEST_SIZE

    def hash_bytes(self, data: bytes) -> bytes:
        lanes = []
        n = len(data)
        for lane in range(4):
            h = _FNV_OFFSET
            for b in struct.pack(">BQ", lane, n):
                h = ((h ^ b) * _FNV_PRIME) & _MASK64
            for b in data:
                h = ((h ^ b) * _FNV_PRIME) & _MASK64
            lanes.append(h)
        return struct.pack(">4Q", *lanes)

    def __repr__(self) -> str:
        return "SimpleHasher()"


_HASHERS: Dict[str, Type] = {
    Sha256Hasher.name: Sha256Hasher,
    SimpleHasher.name: SimpleHasher,
}


def get_hasher(name: str) -> Hasher:
    """Instantiate a hasher by registry name ("sha256" or "simple")."""
    try:
        cls = _HASHERS[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"unknown hasher {name!r}; choose one of {', '.join(sorted(_HASHERS))}"
        ) from None
    return cls()


def hash_leaf(data: bytes, hasher: Hasher) -> bytes:
    return hasher.hash_bytes(LEAF_PREFIX + as_bytes(data, "leaf data"))


def hash_node(left: bytes, right: bytes, hasher: Hasher) -> bytes:
    if len(left) != hasher.digest_size or len(right) != hasher.digest_size:
        raise ValueError("child digests must be %d bytes" % hasher.digest_size)
    return hasher.hash_bytes(NODE_PREFIX + left + right)
