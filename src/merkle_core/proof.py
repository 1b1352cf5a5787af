from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .crypto import as_bytes, ct_equal
from .hasher import DIGEST_SIZE, Hasher, Sha256Hasher, hash_leaf, hash_node

logger = logging.getLogger(__name__)

MAX_INDEX = 2**64 - 1


@dataclass(frozen=True)
class Proof:
    """Authentication path for one leaf.

    ``siblings`` run from the leaf level toward the root. The side of each
    sibling is implied by the index bit at that level: even index means the
    sibling sits on the right, odd means it sits on the left.

    A Proof holds only owned bytes, so it stays valid after the tree that
    produced it is gone.
    """

    index: int
    siblings: Tuple[bytes, ...] = ()

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValueError("proof index must be an int")
        if not 0 <= self.index <= MAX_INDEX:
            raise ValueError("proof index must fit in 64 unsigned bits")
        sibs = tuple(as_bytes(s, "sibling digest") for s in self.siblings)
        for s in sibs:
            if len(s) != DIGEST_SIZE:
                raise ValueError("sibling digests must be %d bytes" % DIGEST_SIZE)
        object.__setattr__(self, "siblings", sibs)

    @classmethod
    def of(cls, index: int, siblings: Iterable[bytes]) -> "Proof":
        return cls(index, tuple(siblings))

    def __len__(self) -> int:
        return len(self.siblings)


def verify_proof(
    leaf_data: bytes,
    proof: Proof,
    expected_root: bytes,
    hasher: Optional[Hasher] = None,
) -> bool:
    """Recompute the root from leaf data and its path; compare in constant time.

    Pure function of its inputs. Every verification failure is a plain False;
    non-bytes input is a TypeError.
    """
    hasher = hasher or Sha256Hasher()
    leaf_data = as_bytes(leaf_data, "leaf data")
    expected_root = as_bytes(expected_root, "expected root")
    if len(expected_root) != hasher.digest_size:
        logger.debug("verify: expected root has wrong length %d", len(expected_root))
        return False
    if not leaf_data:
        logger.debug("verify: empty leaf data")
        return False
    # An index beyond what the path can address would otherwise have its
    # high bits silently ignored.
    if proof.index >> len(proof.siblings):
        logger.debug(
            "verify: index %d not addressable by %d siblings",
            proof.index,
            len(proof.siblings),
        )
        return False

    current = hash_leaf(leaf_data, hasher)
    idx = proof.index
    for sibling in proof.siblings:
        if idx % 2 == 0:
            current = hash_node(current, sibling, hasher)
        else:
            current = hash_node(sibling, current, hasher)
        idx //= 2
    return ct_equal(current, expected_root)
