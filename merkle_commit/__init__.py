"""Sorted-pair keccak256 Merkle roots, proofs and verification for on-chain allowlists and reveals."""

from .allowlist import Allowlist, AllowlistEntry, build_allowlist, verify_claim
from .errors import (
    DuplicateLeafError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidAddressError,
    InvalidDigestError,
    InvalidIndexError,
    InvalidLeafDataError,
    MerkleError,
)
from .leaves import address_leaf, normalize_address, token_uri_leaf, tron_to_evm_address
from .reveal import MetadataCommitment, RevealEntry, build_metadata_commitment, verify_reveal
from .tree import (
    MerkleTree,
    ProofResult,
    build_layers,
    build_proof,
    build_proofs,
    build_root,
    hash_pair,
    to_digest,
    verify,
)

__version__ = "0.1.0"
