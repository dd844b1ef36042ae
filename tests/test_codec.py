import pytest

from lemma_proof.codec import (
    DIGEST32,
    DecodeError,
    DecodeResult,
    FixedBytes,
    Reader,
    VarBytes,
    decode_bool,
    decode_compact,
    encode_compact,
)
from lemma_proof.proof import InclusionProof
from tests._helpers import MerkleTree


@pytest.mark.parametrize(
    "value,encoded",
    [
        (0, "00"),
        (1, "04"),
        (63, "fc"),
        (64, "0101"),
        (16383, "fdff"),
        (16384, "02000100"),
        (2**30 - 1, "feffffff"),
        (2**30, "0300000040"),
        (2**32 - 1, "03ffffffff"),
    ],
)
def test_compact_vectors(value, encoded):
    assert encode_compact(value).hex() == encoded
    reader = Reader(bytes.fromhex(encoded))
    assert decode_compact(reader) == value
    assert reader.remaining == 0


@pytest.mark.parametrize("value", [-1, 2**32])
def test_compact_out_of_range(value):
    with pytest.raises(ValueError):
        encode_compact(value)


@pytest.mark.parametrize(
    "raw",
    [
        "0100",  # 0 in two-byte form
        "fd00",  # 63 in two-byte form
        "02000000",  # 0 in four-byte form
        "0300000000",  # 0 in u32 form
        "07000000000001",  # five-byte payload
    ],
)
def test_non_canonical_compact_rejected(raw):
    with pytest.raises(DecodeError):
        decode_compact(Reader(bytes.fromhex(raw)))


def test_bool_bytes():
    assert decode_bool(Reader(b"\x00")) is False
    assert decode_bool(Reader(b"\x01")) is True
    with pytest.raises(DecodeError) as exc:
        decode_bool(Reader(b"\x02"))
    assert exc.value.offset == 0


def _three_entry_proof():
    lemma = [bytes([i]) * 32 for i in (1, 2, 3)]
    return InclusionProof(lemma, [True])


def test_known_layout():
    data = _three_entry_proof().into_bytes()
    assert len(data) == 1 + 96 + 1 + 1
    assert data[0] == 0x0C  # three lemma entries
    assert data[1:33] == b"\x01" * 32
    assert data[65:97] == b"\x03" * 32
    assert data[97:] == b"\x04\x01"  # one path bit, true


def test_encoding_is_deterministic(items):
    proof = MerkleTree.from_data(items).proof(3)
    assert proof.into_bytes() == proof.into_bytes()
    assert proof.into_bytes() == MerkleTree.from_data(items).proof(3).into_bytes()


def test_round_trip(items):
    tree = MerkleTree.from_data(items)
    for idx in range(len(items)):
        proof = tree.proof(idx)
        result = InclusionProof.from_bytes(proof.into_bytes())
        assert result.ok
        assert result.unwrap() == proof


def test_round_trip_variable_width():
    lemma = [b"", b"ab", b"x" * 70, b"\xff" * 5]
    proof = InclusionProof(lemma, [False, True])
    codec = VarBytes()
    assert InclusionProof.from_bytes(proof.into_bytes(codec), codec).unwrap() == proof


def test_accepts_bytes_like(items):
    proof = MerkleTree.from_data(items).proof(0)
    data = proof.into_bytes()
    assert InclusionProof.from_bytes(bytearray(data)).unwrap() == proof
    assert InclusionProof.from_bytes(memoryview(data)).unwrap() == proof


def test_every_truncation_fails():
    data = _three_entry_proof().into_bytes()
    for n in range(len(data)):
        result = InclusionProof.from_bytes(data[:n])
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, DecodeError)


def test_trailing_bytes_fail():
    data = _three_entry_proof().into_bytes()
    result = InclusionProof.from_bytes(data + b"\x00")
    assert not result.ok
    assert "trailing" in str(result.error)


def test_invalid_bool_in_path():
    data = bytearray(_three_entry_proof().into_bytes())
    data[-1] = 0x02
    result = InclusionProof.from_bytes(bytes(data))
    assert not result.ok
    assert result.error.offset == len(data) - 1


def test_oversized_length_prefix_rejected_up_front():
    result = InclusionProof.from_bytes(b"\x03\xff\xff\xff\xff" + b"\x00" * 64)
    assert not result.ok
    assert "length prefix" in str(result.error)


def test_unwrap_raises_decode_error():
    result = InclusionProof.from_bytes(b"")
    with pytest.raises(DecodeError):
        result.unwrap()
    assert DecodeResult(value=1).unwrap() == 1


def test_decode_does_not_recheck_shape_by_default():
    short = InclusionProof.unchecked([b"\x07" * 32, b"\x07" * 32], [])
    data = short.into_bytes()

    lenient = InclusionProof.from_bytes(data)
    assert lenient.ok
    assert lenient.unwrap().lemma() == short.lemma()

    strict = InclusionProof.from_bytes(data, strict=True)
    assert not strict.ok
    assert isinstance(strict.error, DecodeError)


def test_strict_decode_rejects_path_mismatch():
    bad = InclusionProof.unchecked([b"\x01" * 32] * 4, [True])
    assert InclusionProof.from_bytes(bad.into_bytes()).ok
    assert not InclusionProof.from_bytes(bad.into_bytes(), strict=True).ok


def test_strict_decode_accepts_valid(items):
    proof = MerkleTree.from_data(items).proof(7)
    assert InclusionProof.from_bytes(proof.into_bytes(), strict=True).unwrap() == proof


def test_codec_width_mismatch_fails(items):
    data = MerkleTree.from_data(items).proof(1).into_bytes()
    assert not InclusionProof.from_bytes(data, FixedBytes(20)).ok


def test_encode_wrong_width_raises():
    proof = InclusionProof([b"a" * 31, b"b" * 32, b"c" * 32], [True])
    with pytest.raises(ValueError):
        proof.into_bytes(DIGEST32)


def test_factory_rejection_becomes_decode_error():
    def picky(raw: bytes) -> bytes:
        if raw[0] == 0x02:
            raise ValueError("reserved digest")
        return raw

    data = _three_entry_proof().into_bytes()
    result = InclusionProof.from_bytes(data, FixedBytes(32, factory=picky))
    assert not result.ok
    assert "reserved digest" in str(result.error)
