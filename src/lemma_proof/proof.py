from __future__ import annotations
import logging
from typing import Callable, Generic, Iterable, List, TypeVar

from .algorithm import HashCombiner
from .codec import (
    DIGEST32,
    DecodeError,
    DecodeResult,
    Reader,
    decode_bool,
    decode_seq,
    encode_bool,
    encode_seq,
)

H = TypeVar("H")

log = logging.getLogger(__name__)


class ProofShapeError(ValueError):
    """Lemma/path lengths that no inclusion proof can have."""


def _check_shape(lemma_len: int, path_len: int) -> None:
    if lemma_len <= 2:
        raise ProofShapeError(
            f"lemma needs leaf, at least one sibling and root; got {lemma_len} entries"
        )
    if path_len != lemma_len - 2:
        raise ProofShapeError(
            f"path must have {lemma_len - 2} direction bits, got {path_len}"
        )


class InclusionProof(Generic[H]):
    """Merkle inclusion proof for a single leaf.

    Lemma layout::

        [ item, sibling_1, sibling_2, ..., root ]

    ``path[i]`` is True when the running hash is the left operand while
    combining with ``lemma[i + 1]``.
    """

    __slots__ = ("_lemma", "_path")

    def __init__(self, lemma: Iterable[H], path: Iterable[bool]):
        lemma = tuple(lemma)
        path = tuple(bool(b) for b in path)
        _check_shape(len(lemma), len(path))
        self._lemma = lemma
        self._path = path

    @classmethod
    def unchecked(cls, lemma: Iterable[H], path: Iterable[bool]) -> "InclusionProof[H]":
        """Build a proof without the shape checks (decoded or hand-built data)."""
        proof = cls.__new__(cls)
        proof._lemma = tuple(lemma)
        proof._path = tuple(bool(b) for b in path)
        return proof

    def item(self) -> H:
        return self._lemma[0]

    def root(self) -> H:
        return self._lemma[-1]

    def lemma(self) -> List[H]:
        return list(self._lemma)

    def path(self) -> List[bool]:
        return list(self._path)

    def validate(self, algorithm: Callable[[], HashCombiner[H]]) -> bool:
        """Recompute the root from the leaf and compare it to the stored root.

        ``algorithm`` is called once to obtain a fresh combiner, which is reset
        before every node combination. Never raises for malformed proofs.
        """
        size = len(self._lemma)
        if size < 2:
            return False
        if len(self._path) < size - 2:
            return False

        h = self.item()
        a = algorithm()
        for i in range(1, size - 1):
            a.reset()
            if self._path[i - 1]:
                h = a.node(h, self._lemma[i])
            else:
                h = a.node(self._lemma[i], h)

        if h != self.root():
            log.debug("inclusion proof rejected: derived root does not match")
            return False
        return True

    def into_bytes(self, codec=DIGEST32) -> bytes:
        return encode_seq(self._lemma, codec.encode) + encode_seq(self._path, encode_bool)

    @classmethod
    def from_bytes(
        cls, data: bytes, codec=DIGEST32, strict: bool = False
    ) -> DecodeResult["InclusionProof[H]"]:
        """Parse ``data`` produced by :meth:`into_bytes`.

        Malformed input yields a failed result instead of raising. Shape
        invariants are only re-checked when ``strict`` is set.
        """
        reader = Reader(data)
        try:
            lemma = decode_seq(reader, codec.decode, codec.min_size)
            path = decode_seq(reader, decode_bool, 1)
            reader.finish()
            if strict:
                try:
                    _check_shape(len(lemma), len(path))
                except ProofShapeError as e:
                    raise DecodeError(str(e), reader.pos) from None
        except DecodeError as e:
            log.debug("proof decode failed: %s", e)
            return DecodeResult(error=e)
        except ValueError as e:
            # element factory rejected the raw bytes
            log.debug("proof decode failed: %s", e)
            return DecodeResult(error=DecodeError(str(e), reader.pos))
        return DecodeResult(value=cls.unchecked(lemma, path))

    def __eq__(self, other) -> bool:
        if not isinstance(other, InclusionProof):
            return NotImplemented
        return self._lemma == other._lemma and self._path == other._path

    def __hash__(self) -> int:
        return hash((self._lemma, self._path))

    def __repr__(self) -> str:
        return f"InclusionProof(lemma={list(self._lemma)!r}, path={list(self._path)!r})"
