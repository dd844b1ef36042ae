from __future__ import annotations
import hashlib
from typing import Dict, List, Protocol, Type, TypeVar

H = TypeVar("H")

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"


class HashCombiner(Protocol[H]):
    """Combines two hash values into their parent.

    ``node`` is order sensitive. ``reset`` must return the instance to a
    fresh state; callers reset before every combination.
    """

    def reset(self) -> None: ...

    def node(self, left: H, right: H) -> H: ...


class HashlibAlgorithm:
    """Streaming combiner over a hashlib object.

    ``leaf`` and ``node`` feed the running state and do not reset it, so two
    calls without a ``reset`` in between hash both inputs together.
    Domain separation follows RFC 6962 (0x00 for leaves, 0x01 for nodes).
    """

    name = "sha256"
    digest_size = 32
    leaf_prefix = LEAF_PREFIX
    node_prefix = NODE_PREFIX

    def __init__(self):
        self._state = self._new()

    def _new(self):
        return hashlib.new(self.name)

    def write(self, data) -> None:
        self._state.update(bytes(data))

    def hash(self) -> bytes:
        return self._state.digest()

    def reset(self) -> None:
        self._state = self._new()

    def leaf(self, data) -> bytes:
        self.write(self.leaf_prefix)
        self.write(data)
        return self.hash()

    def node(self, left, right) -> bytes:
        self.write(self.node_prefix)
        self.write(left)
        self.write(right)
        return self.hash()


class Sha256Algorithm(HashlibAlgorithm):
    name = "sha256"


class Sha3Algorithm(HashlibAlgorithm):
    name = "sha3-256"

    def _new(self):
        return hashlib.sha3_256()


class Blake2bAlgorithm(HashlibAlgorithm):
    name = "blake2b-256"

    def _new(self):
        return hashlib.blake2b(digest_size=self.digest_size)


class Sha256ConcatAlgorithm(Sha256Algorithm):
    """SHA-256 without domain separation: node = SHA256(left || right)."""

    name = "sha256-concat"
    leaf_prefix = b""
    node_prefix = b""

    def _new(self):
        return hashlib.sha256()


_REGISTRY: Dict[str, Type[HashlibAlgorithm]] = {
    cls.name: cls
    for cls in (Sha256Algorithm, Sha3Algorithm, Blake2bAlgorithm, Sha256ConcatAlgorithm)
}


def available_algorithms() -> List[str]:
    return sorted(_REGISTRY)


def get_algorithm(name: str) -> Type[HashlibAlgorithm]:
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        raise ValueError(
            f"unknown hash algorithm {name!r}; choose one of {', '.join(available_algorithms())}"
        ) from None
