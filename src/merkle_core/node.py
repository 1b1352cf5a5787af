from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union

from .crypto import as_bytes, to_hex
from .hasher import Hasher, hash_leaf, hash_node


@dataclass(frozen=True)
class LeafNode:
    data: bytes
    digest: bytes = field(repr=False)

    @classmethod
    def create(cls, data: bytes, hasher: Hasher) -> "LeafNode":
        data = as_bytes(data, "leaf data")
        return cls(data, hash_leaf(data, hasher))

    @property
    def hex(self) -> str:
        return to_hex(self.digest)


@dataclass(frozen=True)
class InternalNode:
    """Parent of two nodes. For an odd level's last node, left is right."""

    left: "Node" = field(repr=False)
    right: "Node" = field(repr=False)
    digest: bytes

    @classmethod
    def create(cls, left: "Node", right: "Node", hasher: Hasher) -> "InternalNode":
        return cls(left, right, hash_node(left.digest, right.digest, hasher))

    @property
    def duplicated(self) -> bool:
        return self.left is self.right

    @property
    def hex(self) -> str:
        return to_hex(self.digest)


Node = Union[LeafNode, InternalNode]


def is_leaf(node: Node) -> bool:
    return isinstance(node, LeafNode)


def node_data(node: Node) -> Optional[bytes]:
    """Raw data for a leaf, None for an internal node."""
    if isinstance(node, LeafNode):
        return node.data
    return None
