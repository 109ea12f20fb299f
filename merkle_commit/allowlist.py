import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from .errors import DuplicateLeafError
from .export import hex_list
from .leaves import AddressEncoding, address_leaf, normalize_address
from .tree import DigestLike, MerkleTree, verify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllowlistEntry:
    address: str     # checksummed EVM address
    index: int
    leaf: bytes
    proof: Tuple[bytes, ...]


@dataclass(frozen=True)
class Allowlist:
    root: bytes
    encoding: AddressEncoding
    entries: Tuple[AllowlistEntry, ...]

    def proof_for(self, address: str) -> Optional[AllowlistEntry]:
        """Entry for address, or None when it is not on the list."""
        wanted = normalize_address(address)
        for entry in self.entries:
            if entry.address == wanted:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "merkleRoot": "0x" + self.root.hex(),
            "encoding": self.encoding,
            "count": len(self.entries),
            "entries": [
                {
                    "index": e.index,
                    "address": e.address,
                    "leaf": "0x" + e.leaf.hex(),
                    "proof": hex_list(e.proof),
                    "valid": verify(e.leaf, e.proof, e.index, self.root),
                }
                for e in self.entries
            ],
        }


def build_allowlist(
    addresses: Iterable[str],
    encoding: AddressEncoding = "packed",
    sort: bool = False,
) -> Allowlist:
    normalized = [normalize_address(a) for a in addresses]
    if sort:
        normalized = sorted(normalized, key=str.lower)

    seen = set()
    for addr in normalized:
        if addr in seen:
            raise DuplicateLeafError(f"Address listed twice: {addr}")
        seen.add(addr)

    leaves = [address_leaf(a, encoding) for a in normalized]
    tree = MerkleTree(leaves)
    entries = tuple(
        AllowlistEntry(address=addr, index=i, leaf=leaves[i], proof=tuple(tree.get_proof(i)))
        for i, addr in enumerate(normalized)
    )
    logger.info("Allowlist root 0x%s over %d addresses", tree.root.hex(), len(entries))
    return Allowlist(root=tree.root, encoding=encoding, entries=entries)


def verify_claim(
    address: str,
    proof: Sequence[DigestLike],
    index: int,
    root: DigestLike,
    encoding: AddressEncoding = "packed",
) -> bool:
    """The check a claim contract runs: is address committed under root?"""
    return verify(address_leaf(address, encoding), proof, index, root)
