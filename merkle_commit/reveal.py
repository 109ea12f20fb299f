"""
Commit to token metadata before mint and reveal it afterwards.

Each token id i is bound to its URI through the leaf keccak256(abi.encodePacked(i, uri)),
so a revealed URI cannot be swapped for another token's URI or for an uncommitted one.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from .errors import IndexOutOfRangeError, InvalidIndexError
from .export import hex_list
from .leaves import token_uri_leaf
from .tree import DigestLike, MerkleTree, verify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevealEntry:
    token_id: int
    uri: str
    leaf: bytes
    proof: Tuple[bytes, ...]


@dataclass(frozen=True)
class MetadataCommitment:
    root: bytes
    entries: Tuple[RevealEntry, ...]

    def entry(self, token_id: int) -> RevealEntry:
        if not 0 <= token_id < len(self.entries):
            raise IndexOutOfRangeError(f"Token id {token_id} out of range for {len(self.entries)} tokens")
        return self.entries[token_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "merkleRoot": "0x" + self.root.hex(),
            "count": len(self.entries),
            "tokens": [
                {
                    "index": e.token_id,
                    "uri": e.uri,
                    "leaf": "0x" + e.leaf.hex(),
                    "proof": hex_list(e.proof),
                    "valid": verify(e.leaf, e.proof, e.token_id, self.root),
                }
                for e in self.entries
            ],
        }


def build_metadata_commitment(uris: Sequence[str]) -> MetadataCommitment:
    """Token id is the URI's position in uris."""
    leaves = [token_uri_leaf(i, uri) for i, uri in enumerate(uris)]
    tree = MerkleTree(leaves)
    entries = tuple(
        RevealEntry(token_id=i, uri=uri, leaf=leaves[i], proof=tuple(tree.get_proof(i)))
        for i, uri in enumerate(uris)
    )
    logger.info("Metadata root 0x%s over %d tokens", tree.root.hex(), len(entries))
    return MetadataCommitment(root=tree.root, entries=entries)


def verify_reveal(token_id: int, uri: str, proof: Sequence[DigestLike], root: DigestLike) -> bool:
    if token_id < 0:
        raise InvalidIndexError(f"Token id must be non-negative, got {token_id}")
    return verify(token_uri_leaf(token_id, uri), proof, token_id, root)
