"""Fuzz harness for proof decoding: arbitrary bytes must never raise."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from lemma_proof.algorithm import Sha256Algorithm
    from lemma_proof.codec import DIGEST32, VarBytes
    from lemma_proof.proof import InclusionProof


def TestOneInput(data: bytes):  # noqa: N802
    codec = VarBytes() if data[:1] == b"\xff" else DIGEST32
    body = data[1:]
    result = InclusionProof.from_bytes(body, codec)
    if not result.ok:
        return
    proof = result.unwrap()
    # Encoding is canonical, so a successful decode re-encodes to the input
    if proof.into_bytes(codec) != body:
        raise RuntimeError("decoded proof does not re-encode to its input")
    # Validation is total over decoded shapes
    proof.validate(Sha256Algorithm)
    strict = InclusionProof.from_bytes(body, codec, strict=True)
    if strict.ok and len(proof.lemma()) <= 2:
        raise RuntimeError("strict decode accepted a short lemma")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
