from __future__ import annotations
from typing import List

from lemma_proof.algorithm import Sha256Algorithm
from lemma_proof.proof import InclusionProof


class MerkleTree:
    """Small fixture tree; an odd node is paired with itself."""

    def __init__(self, levels: List[List[bytes]]):
        self.levels = levels  # level 0 = leaf hashes

    @classmethod
    def from_data(cls, items: List[bytes], algorithm=Sha256Algorithm) -> "MerkleTree":
        if not items:
            raise ValueError("no leaves")
        a = algorithm()
        lvl = []
        for data in items:
            a.reset()
            lvl.append(a.leaf(data))
        levels = [lvl]
        while len(lvl) > 1:
            nxt = []
            for i in range(0, len(lvl), 2):
                left = lvl[i]
                right = lvl[i + 1] if i + 1 < len(lvl) else lvl[i]
                a.reset()
                nxt.append(a.node(left, right))
            levels.append(nxt)
            lvl = nxt
        return cls(levels)

    @property
    def leaves(self) -> List[bytes]:
        return self.levels[0]

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    def proof(self, index: int) -> InclusionProof[bytes]:
        lemma = [self.levels[0][index]]
        path = []
        idx = index
        for level in self.levels[:-1]:
            is_right = idx % 2 == 1
            sibling_idx = idx - 1 if is_right else idx + 1
            if sibling_idx >= len(level):
                sibling = level[idx]
            else:
                sibling = level[sibling_idx]
            lemma.append(sibling)
            path.append(not is_right)
            idx //= 2
        lemma.append(self.root)
        return InclusionProof(lemma, path)


def flip_byte(h: bytes, i: int = 0) -> bytes:
    return h[:i] + bytes([h[i] ^ 0x01]) + h[i + 1 :]
