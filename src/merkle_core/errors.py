from __future__ import annotations
from typing import Optional


class MerkleTreeError(Exception):
    """Base class for caller-visible tree errors."""


class EmptyInputError(MerkleTreeError, ValueError):
    def __init__(self, msg: str = "leaf data must not be empty"):
        super().__init__(msg)


class InvalidIndexError(MerkleTreeError, IndexError):
    """Proof requested for an index outside [0, size)."""

    def __init__(self, index: object, size: int, msg: Optional[str] = None):
        self.index = index
        self.size = size
        if msg is None:
            if size == 0:
                msg = f"cannot prove index {index!r}: tree is empty"
            else:
                msg = f"leaf index {index!r} out of bounds (0-{size - 1})"
        super().__init__(msg)
