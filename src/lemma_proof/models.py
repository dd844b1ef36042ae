from __future__ import annotations
from typing import List

import rfc8785
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .algorithm import get_algorithm
from .proof import InclusionProof


class ProofDocument(BaseModel):
    """JSON form of an inclusion proof.

    Lemma entries are lowercase hex strings; ``path`` holds the direction
    bits. Strict mode keeps JSON numbers from being coerced into bools.
    """

    model_config = ConfigDict(strict=True)

    algorithm: str = "sha256"
    lemma: List[str] = Field(default_factory=list)
    path: List[bool] = Field(default_factory=list)

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, v: str) -> str:
        get_algorithm(v)
        return v.lower()

    @field_validator("lemma")
    @classmethod
    def _hex_entries(cls, v: List[str]) -> List[str]:
        out = []
        for i, entry in enumerate(v):
            try:
                out.append(bytes.fromhex(entry).hex())
            except ValueError:
                raise ValueError(f"lemma[{i}] is not a hex string") from None
        return out

    @classmethod
    def from_proof(
        cls, proof: InclusionProof[bytes], algorithm: str = "sha256"
    ) -> "ProofDocument":
        return cls(
            algorithm=algorithm,
            lemma=[bytes(h).hex() for h in proof.lemma()],
            path=proof.path(),
        )

    def to_proof(self) -> InclusionProof[bytes]:
        """Raises ProofShapeError when the lemma/path lengths are inconsistent."""
        return InclusionProof([bytes.fromhex(h) for h in self.lemma], self.path)

    def canonical_json(self) -> bytes:
        """Deterministic canonical JSON bytes per RFC8785."""
        return rfc8785.dumps(self.model_dump())
