"""
Sorted-pair Merkle tree over 32-byte keccak256 digests.

Pairs are hashed as keccak256(min(a, b) ++ max(a, b)), the convention used by
OpenZeppelin's MerkleProof, so a verifier only needs sibling digests and never
left/right flags. An unpaired last node is promoted to the next level as is.
"""
import logging
from typing import List, NamedTuple, Optional, Sequence, Union

from eth_utils import decode_hex, keccak

from .errors import (
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidDigestError,
    InvalidIndexError,
)

logger = logging.getLogger(__name__)

DIGEST_SIZE = 32

DigestLike = Union[bytes, bytearray, str]


class ProofResult(NamedTuple):
    proof: List[bytes]
    root: bytes


def to_digest(value: DigestLike) -> bytes:
    """Coerce raw bytes or a hex string (with or without 0x) into a 32-byte digest."""
    if isinstance(value, str):
        try:
            raw = decode_hex(value)
        except ValueError as exc:
            raise InvalidDigestError(f"Invalid hex digest: {value!r}") from exc
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raise InvalidDigestError(f"Expected bytes or hex string, got {type(value).__name__}")
    if len(raw) != DIGEST_SIZE:
        raise InvalidDigestError(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
    return raw


def hash_pair(a: bytes, b: bytes) -> bytes:
    if a <= b:
        return keccak(a + b)
    return keccak(b + a)


# --- CONSTRUCTION ---

def build_layers(leaves: Sequence[DigestLike]) -> List[List[bytes]]:
    """Return every level of the tree, leaves first and the one-element root level last."""
    if not leaves:
        raise EmptyInputError("Cannot build a Merkle tree without leaves")
    current = [to_digest(leaf) for leaf in leaves]
    layers = [current]
    while len(current) > 1:
        nxt: List[bytes] = []
        for i in range(0, len(current), 2):
            if i + 1 < len(current):
                nxt.append(hash_pair(current[i], current[i + 1]))
            else:
                # promote odd node
                nxt.append(current[i])
        layers.append(nxt)
        current = nxt
    logger.debug("Built Merkle tree: %d leaves, %d levels", len(layers[0]), len(layers))
    return layers


def build_root(leaves: Sequence[DigestLike]) -> bytes:
    return build_layers(leaves)[-1][0]


# --- PROOFS ---

def _check_index(index: int, size: int) -> None:
    if not 0 <= index < size:
        raise IndexOutOfRangeError(f"Leaf index {index} out of range for {size} leaves")


def _proof_from_layers(layers: List[List[bytes]], index: int) -> List[bytes]:
    proof: List[bytes] = []
    idx = index
    for layer in layers[:-1]:
        sibling = idx ^ 1
        if sibling < len(layer):
            proof.append(layer[sibling])
        idx //= 2
    return proof


def build_proof(leaves: Sequence[DigestLike], index: int) -> ProofResult:
    """
    Sibling digests needed to climb from leaves[index] to the root, lowest level first.

    Levels where the tracked node is promoted unpaired contribute nothing, so the
    proof can be shorter than the tree height.
    """
    layers = build_layers(leaves)
    _check_index(index, len(layers[0]))
    proof = _proof_from_layers(layers, index)
    logger.debug("Proof for leaf %d has %d entries", index, len(proof))
    return ProofResult(proof, layers[-1][0])


def build_proofs(leaves: Sequence[DigestLike]) -> List[List[bytes]]:
    """Proofs for every leaf, computed from a single pass over the tree."""
    layers = build_layers(leaves)
    return [_proof_from_layers(layers, i) for i in range(len(layers[0]))]


# --- VERIFICATION ---

def verify(
    leaf: DigestLike,
    proof: Sequence[DigestLike],
    index: int,
    expected_root: DigestLike,
) -> bool:
    """
    Recompute the root from a leaf and its proof and compare it with expected_root.

    index is not consumed by sorted-pair hashing; it is validated and kept in the
    signature so callers stay compatible with positional pairing schemes.
    A mismatch returns False. Malformed digests raise InvalidDigestError.
    """
    if index < 0:
        raise InvalidIndexError(f"Leaf index must be non-negative, got {index}")
    computed = to_digest(leaf)
    for sibling in proof:
        computed = hash_pair(computed, to_digest(sibling))
    return computed == to_digest(expected_root)


class MerkleTree:
    def __init__(self, leaves: Sequence[DigestLike]):
        self._layers = build_layers(leaves)

    @property
    def leaves(self) -> List[bytes]:
        return list(self._layers[0])

    @property
    def layers(self) -> List[List[bytes]]:
        return [list(layer) for layer in self._layers]

    @property
    def root(self) -> bytes:
        return self._layers[-1][0]

    def __len__(self) -> int:
        return len(self._layers[0])

    def index_of(self, leaf: DigestLike) -> Optional[int]:
        digest = to_digest(leaf)
        try:
            return self._layers[0].index(digest)
        except ValueError:
            return None

    def get_proof(self, index: int) -> List[bytes]:
        _check_index(index, len(self))
        return _proof_from_layers(self._layers, index)

    def verify(self, leaf: DigestLike, proof: Sequence[DigestLike], index: int) -> bool:
        return verify(leaf, proof, index, self.root)
