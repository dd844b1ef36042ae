"""Binary encoding for inclusion proofs.

Layout (little-endian, SCALE style):

    proof    := seq<H> lemma, seq<bool> path
    seq<T>   := compact(count) followed by count encoded items
    compact  := 1, 2 or 4 byte forms tagged by the low two bits
                (0b00 < 2**6, 0b01 < 2**14, 0b10 < 2**30), or 0b11 followed
                by a 4 byte u32 for anything up to 2**32 - 1
    bool     := 0x00 | 0x01

Compact values must use their shortest form so that every proof has exactly
one encoding.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_U32_MAX = 2**32 - 1


class DecodeError(ValueError):
    """Byte sequence is not a well-formed proof encoding."""

    def __init__(self, message: str, offset: int = 0):
        super().__init__(f"{message} (offset {offset})")
        self.offset = offset


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of a decode: either a value or the error that stopped it."""

    value: Optional[T] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class Reader:
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, n: int) -> bytes:
        if n > self.remaining:
            raise DecodeError(
                f"truncated input: need {n} bytes, have {self.remaining}", self.pos
            )
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def finish(self) -> None:
        if self.remaining:
            raise DecodeError(f"{self.remaining} trailing bytes", self.pos)


def encode_compact(n: int) -> bytes:
    if n < 0 or n > _U32_MAX:
        raise ValueError(f"compact value out of u32 range: {n}")
    if n < 1 << 6:
        return bytes([n << 2])
    if n < 1 << 14:
        return ((n << 2) | 0b01).to_bytes(2, "little")
    if n < 1 << 30:
        return ((n << 2) | 0b10).to_bytes(4, "little")
    return bytes([0b11]) + n.to_bytes(4, "little")


def decode_compact(reader: Reader) -> int:
    start = reader.pos
    first = reader.take(1)[0]
    mode = first & 0b11
    if mode == 0b00:
        return first >> 2
    if mode == 0b01:
        value = int.from_bytes(bytes([first]) + reader.take(1), "little") >> 2
        floor = 1 << 6
    elif mode == 0b10:
        value = int.from_bytes(bytes([first]) + reader.take(3), "little") >> 2
        floor = 1 << 14
    else:
        # Upper six bits give the payload width minus four; counts are u32.
        if first >> 2 != 0:
            raise DecodeError("length prefix wider than u32", start)
        value = int.from_bytes(reader.take(4), "little")
        floor = 1 << 30
    if value < floor:
        raise DecodeError("non-canonical length prefix", start)
    return value


def encode_bool(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"


def decode_bool(reader: Reader) -> bool:
    start = reader.pos
    b = reader.take(1)[0]
    if b == 0:
        return False
    if b == 1:
        return True
    raise DecodeError(f"invalid bool byte 0x{b:02x}", start)


def encode_seq(items: Sequence[T], encode_item: Callable[[T], bytes]) -> bytes:
    out = bytearray(encode_compact(len(items)))
    for item in items:
        out += encode_item(item)
    return bytes(out)


def decode_seq(
    reader: Reader, decode_item: Callable[[Reader], T], min_item_size: int
) -> List[T]:
    start = reader.pos
    count = decode_compact(reader)
    if count * min_item_size > reader.remaining:
        raise DecodeError(
            f"length prefix {count} exceeds remaining {reader.remaining} bytes", start
        )
    return [decode_item(reader) for _ in range(count)]


class FixedBytes:
    """Hash values of a fixed width, written as raw bytes."""

    def __init__(self, size: int, factory: Callable[[bytes], object] = bytes):
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self.min_size = size
        self.factory = factory

    def encode(self, value) -> bytes:
        raw = bytes(value)
        if len(raw) != self.size:
            raise ValueError(f"expected {self.size}-byte hash, got {len(raw)}")
        return raw

    def decode(self, reader: Reader):
        return self.factory(reader.take(self.size))

    def __repr__(self) -> str:
        return f"FixedBytes({self.size})"


class VarBytes:
    """Hash values of any width, written with a compact length prefix."""

    min_size = 1

    def __init__(self, factory: Callable[[bytes], object] = bytes):
        self.factory = factory

    def encode(self, value) -> bytes:
        raw = bytes(value)
        return encode_compact(len(raw)) + raw

    def decode(self, reader: Reader):
        start = reader.pos
        n = decode_compact(reader)
        if n > reader.remaining:
            raise DecodeError(f"hash length {n} exceeds input", start)
        return self.factory(reader.take(n))

    def __repr__(self) -> str:
        return "VarBytes()"


DIGEST32 = FixedBytes(32)
