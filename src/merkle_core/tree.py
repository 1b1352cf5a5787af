"""Binary Merkle tree with domain-separated hashing.

- Level 0 (leaves, hashed): h0, h1, h2
- Level 1: H(h0, h1), H(h2, h2)
- Level 2 (root): H(H(h0, h1), H(h2, h2))

An odd level duplicates its last node. Leaves are append-only; the derived
levels are rebuilt lazily on the next ``get_root``/``prove`` call.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .crypto import as_bytes, to_hex
from .errors import EmptyInputError, InvalidIndexError
from .hasher import Hasher, Sha256Hasher
from .node import InternalNode, LeafNode, Node
from .proof import Proof, verify_proof

logger = logging.getLogger(__name__)


class MerkleTree:
    def __init__(self, hasher: Optional[Hasher] = None):
        self.hasher: Hasher = hasher or Sha256Hasher()
        self._leaves: List[LeafNode] = []
        self._levels: List[List[Node]] = []  # level 0 = leaves
        self._dirty = False

    @classmethod
    def from_leaves(
        cls, leaves: Iterable[bytes], hasher: Optional[Hasher] = None
    ) -> "MerkleTree":
        tree = cls(hasher)
        for data in leaves:
            tree.add_leaf(data)
        return tree

    def add_leaf(self, data: bytes) -> None:
        data = as_bytes(data, "leaf data")
        if not data:
            logger.debug("rejected empty leaf at position %d", len(self._leaves))
            raise EmptyInputError()
        self._leaves.append(LeafNode.create(data, self.hasher))
        self._dirty = True

    @property
    def size(self) -> int:
        return len(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def get_data(self, index: int) -> Optional[bytes]:
        if 0 <= index < len(self._leaves):
            return self._leaves[index].data
        return None

    def _rebuild(self) -> None:
        previous = self._levels
        lvl: List[Node] = list(self._leaves)
        levels = [lvl]
        depth = 0
        reused = 0
        while len(lvl) > 1:
            old = previous[depth + 1] if depth + 1 < len(previous) else []
            nxt: List[Node] = []
            for i in range(0, len(lvl), 2):
                a = lvl[i]
                b = lvl[i + 1] if i + 1 < len(lvl) else lvl[i]  # duplicate last if odd
                j = i // 2
                if j < len(old) and old[j].left is a and old[j].right is b:
                    nxt.append(old[j])
                    reused += 1
                else:
                    nxt.append(InternalNode.create(a, b, self.hasher))
            levels.append(nxt)
            lvl = nxt
            depth += 1
        self._levels = levels
        self._dirty = False
        if self._leaves and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "rebuilt tree: leaves=%d levels=%d reused=%d root=%s",
                len(self._leaves),
                len(levels),
                reused,
                levels[-1][0].hex,
            )

    def _built(self) -> List[List[Node]]:
        if self._dirty:
            self._rebuild()
        return self._levels

    @property
    def root_node(self) -> Optional[Node]:
        levels = self._built()
        if not levels or not levels[-1]:
            return None
        return levels[-1][0]

    def get_root(self) -> Optional[bytes]:
        """Root digest, or None while the tree has no leaves."""
        node = self.root_node
        return node.digest if node is not None else None

    def root_hex(self) -> Optional[str]:
        root = self.get_root()
        return to_hex(root) if root is not None else None

    @property
    def levels(self) -> Tuple[Tuple[bytes, ...], ...]:
        return tuple(tuple(n.digest for n in lvl) for lvl in self._built())

    def prove(self, index: int) -> Proof:
        """Collect the sibling digests from leaf ``index`` up to the root."""
        n = len(self._leaves)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < n:
            logger.debug("rejected proof request for index %r (size=%d)", index, n)
            raise InvalidIndexError(index, n)
        siblings = []
        idx = index
        for level in self._built()[:-1]:
            if idx % 2 == 0:
                sibling_idx = min(idx + 1, len(level) - 1)
            else:
                sibling_idx = idx - 1
            siblings.append(level[sibling_idx].digest)
            idx //= 2
        return Proof(index, tuple(siblings))

    def verify(self, proof: Proof, leaf_data: bytes, expected_root: bytes) -> bool:
        return verify_proof(leaf_data, proof, expected_root, self.hasher)

    def __repr__(self) -> str:
        return f"MerkleTree(size={len(self._leaves)}, hasher={self.hasher!r})"
