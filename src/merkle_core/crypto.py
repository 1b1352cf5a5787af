from __future__ import annotations
import binascii


def to_hex(b: bytes) -> str:
    """Lowercase hex encoding of bytes."""
    return bytes(b).hex()


def from_hex(s: str) -> bytes:
    """Decode a hex string to bytes with strict validation."""
    if not isinstance(s, str):
        raise ValueError("invalid hex")
    try:
        return binascii.unhexlify(s.strip())
    except (binascii.Error, ValueError) as e:
        raise ValueError("invalid hex") from e


def ct_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without an early exit on the first mismatch.

    Length is not treated as secret: differing lengths return False at once.
    Equal-length inputs are always scanned in full.
    """
    if len(a) != len(b):
        return False
    diff = 0
    for x, y in zip(a, b):
        diff |= x ^ y
    return diff == 0


def as_bytes(b, what: str = "data") -> bytes:
    """Copy a bytes-like value to bytes; anything else is a TypeError.

    ``bytes(3)`` would quietly yield three zero bytes, so ints, strs and
    iterables are refused.
    """
    if not isinstance(b, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, not {type(b).__name__}")
    return bytes(b)
