import logging
from typing import Dict, Any

from pydantic import ValidationError

from lemma_proof.algorithm import get_algorithm
from lemma_proof.codec import FixedBytes
from lemma_proof.models import ProofDocument
from lemma_proof.proof import InclusionProof, ProofShapeError

log = logging.getLogger(__name__)


def codec_for(algorithm: str) -> FixedBytes:
    """Wire codec for the digests produced by the named hash algorithm."""
    return FixedBytes(get_algorithm(algorithm).digest_size)


def _decode(data: bytes, algorithm: str, strict: bool):
    result = InclusionProof.from_bytes(data, codec_for(algorithm), strict=strict)
    if not result.ok:
        log.debug("rejecting proof bytes: %s", result.error)
        return None
    return result.value


def verify_proof_bytes(
    data: bytes, algorithm: str = "sha256", strict: bool = False
) -> bool:
    """Return True if ``data`` decodes to a proof whose lemma folds to its root.

    Malformed bytes yield False. An unknown algorithm name raises ValueError.
    """
    proof = _decode(data, algorithm, strict)
    if proof is None:
        return False
    return proof.validate(get_algorithm(algorithm))


def verify_inclusion(
    leaf: bytes,
    root: bytes,
    data: bytes,
    algorithm: str = "sha256",
    strict: bool = False,
) -> bool:
    """Return True if ``data`` proves ``leaf`` is included under ``root``.

    Besides validating the fold, the proof's own item and root must equal the
    expected leaf hash and trusted root.
    """
    proof = _decode(data, algorithm, strict)
    if proof is None or len(proof.lemma()) < 2:
        return False
    if proof.item() != bytes(leaf) or proof.root() != bytes(root):
        log.debug("proof endpoints do not match the expected leaf/root")
        return False
    return proof.validate(get_algorithm(algorithm))


def verify_document(doc_json: Dict[str, Any]) -> bool:
    """Validate a proof given in its JSON document form."""
    try:
        doc = ProofDocument.model_validate(doc_json)
        proof = doc.to_proof()
    except (ValidationError, ProofShapeError) as e:
        log.debug("rejecting proof document: %s", e)
        return False
    return proof.validate(get_algorithm(doc.algorithm))
