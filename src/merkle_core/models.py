from __future__ import annotations
from typing import List

import rfc8785
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .crypto import from_hex, to_hex
from .hasher import DIGEST_SIZE
from .proof import MAX_INDEX, Proof


class ProofModel(BaseModel):
    """Wire shape of a Proof: ``{"index": int, "siblings": [hex, ...]}``.

    Siblings are lowercase hex of exactly 32 bytes, leaf level first. Strict
    mode keeps ``"3"`` from silently becoming index 3.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    index: int = Field(ge=0, le=MAX_INDEX)
    siblings: List[str] = Field(default_factory=list)

    @field_validator("siblings")
    @classmethod
    def _siblings_are_digests(cls, v: List[str]) -> List[str]:
        out = []
        for s in v:
            if len(s) != DIGEST_SIZE * 2:
                raise ValueError("sibling must be %d hex chars" % (DIGEST_SIZE * 2))
            out.append(to_hex(from_hex(s)))
        return out

    @classmethod
    def from_proof(cls, proof: Proof) -> "ProofModel":
        return cls(index=proof.index, siblings=[to_hex(s) for s in proof.siblings])

    def to_proof(self) -> Proof:
        return Proof(self.index, tuple(from_hex(s) for s in self.siblings))

    def canonical_json(self) -> bytes:
        """Deterministic JSON bytes per RFC 8785.

        RFC 8785 numbers are I-JSON, so an index above 2**53 - 1 cannot be
        written and raises ValueError.
        """
        try:
            return rfc8785.dumps(self.model_dump())
        except rfc8785.CanonicalizationError as e:
            raise ValueError("proof not representable as canonical JSON") from e
