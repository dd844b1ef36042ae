"""Tamper fuzzing: fold a random path into a root, then mutate the proof."""
from __future__ import annotations
import atheris
import sys
import hashlib
import random

with atheris.instrument_imports():
    from lemma_proof.algorithm import Sha256Algorithm
    from lemma_proof.proof import InclusionProof


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    seed = int.from_bytes(data[:4], "little")
    random.seed(seed)
    depth = 1 + (data[4] % 24)
    leaf = Sha256Algorithm().leaf(data[5:])
    siblings = [hashlib.sha256(seed.to_bytes(4, "little") + bytes([i])).digest() for i in range(depth)]
    path = [random.random() < 0.5 for _ in range(depth)]

    a = Sha256Algorithm()
    h = leaf
    for sib, is_left in zip(siblings, path):
        a.reset()
        h = a.node(h, sib) if is_left else a.node(sib, h)
    proof = InclusionProof([leaf, *siblings, h], path)
    if not proof.validate(Sha256Algorithm):
        raise RuntimeError("valid proof failed")

    i = random.randrange(depth)
    if random.random() < 0.5:
        lemma = proof.lemma()
        lemma[i + 1] = bytes([lemma[i + 1][0] ^ 0x01]) + lemma[i + 1][1:]
        tampered = InclusionProof(lemma, path)
    else:
        flipped = list(path)
        flipped[i] = not flipped[i]
        tampered = InclusionProof(proof.lemma(), flipped)
    if tampered.validate(Sha256Algorithm):
        raise RuntimeError("tampered proof unexpectedly verified")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
