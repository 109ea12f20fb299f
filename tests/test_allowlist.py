import pytest
from eth_utils import keccak

from merkle_commit import (
    DuplicateLeafError,
    InvalidAddressError,
    address_leaf,
    build_allowlist,
    build_root,
    verify_claim,
)

USER1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
USER2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
USER3 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
OUTSIDER = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"


def test_allowlist_root_and_claims():
    allowlist = build_allowlist([USER1, USER2, USER3])
    assert allowlist.root == build_root([address_leaf(a) for a in (USER1, USER2, USER3)])
    for entry in allowlist.entries:
        assert verify_claim(entry.address, entry.proof, entry.index, allowlist.root)


def test_claim_with_someone_elses_proof_fails():
    allowlist = build_allowlist([USER1, USER2, USER3])
    other = allowlist.entries[2]
    assert not verify_claim(USER1, other.proof, other.index, allowlist.root)


def test_outsider_cannot_claim():
    allowlist = build_allowlist([USER1, USER2, USER3])
    assert allowlist.proof_for(OUTSIDER) is None
    for entry in allowlist.entries:
        assert not verify_claim(OUTSIDER, entry.proof, entry.index, allowlist.root)


def test_proof_for_accepts_any_case():
    allowlist = build_allowlist([USER1, USER2])
    entry = allowlist.proof_for(USER2.lower())
    assert entry is not None
    assert entry.index == 1
    assert entry.address == USER2


def test_duplicates_rejected():
    with pytest.raises(DuplicateLeafError):
        build_allowlist([USER1, USER2, USER1.lower()])


def test_invalid_address_rejected():
    with pytest.raises(InvalidAddressError):
        build_allowlist([USER1, "0xdeadbeef"])


def test_sort_orders_by_address():
    allowlist = build_allowlist([USER3, USER1, USER2], sort=True)
    assert [e.address for e in allowlist.entries] == [USER2, USER1, USER3]


def test_padded_encoding():
    packed = build_allowlist([USER1, USER2])
    padded = build_allowlist([USER1, USER2], encoding="padded")
    assert packed.root != padded.root
    assert padded.entries[0].leaf == keccak(b"\x00" * 12 + bytes.fromhex(USER1[2:]))
    entry = padded.entries[1]
    assert verify_claim(USER2, entry.proof, entry.index, padded.root, encoding="padded")
    assert not verify_claim(USER2, entry.proof, entry.index, padded.root)


def test_to_dict():
    allowlist = build_allowlist([USER1, USER2, USER3])
    doc = allowlist.to_dict()
    assert doc["merkleRoot"] == "0x" + allowlist.root.hex()
    assert doc["count"] == 3
    assert doc["encoding"] == "packed"
    assert all(e["valid"] for e in doc["entries"])
    assert doc["entries"][0]["address"] == USER1
    assert all(p.startswith("0x") for e in doc["entries"] for p in e["proof"])


def test_entries_are_immutable():
    allowlist = build_allowlist([USER1, USER2, USER3])
    assert isinstance(allowlist.entries, tuple)
    assert all(isinstance(e.proof, tuple) for e in allowlist.entries)
    assert len({allowlist.entries[0], allowlist.proof_for(USER1)}) == 1
    hash(allowlist)
