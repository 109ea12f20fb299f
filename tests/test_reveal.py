import pytest

from merkle_commit import (
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidIndexError,
    InvalidLeafDataError,
    MerkleError,
    build_metadata_commitment,
    build_root,
    token_uri_leaf,
    verify_reveal,
)

URIS = ["https://example0.com", "https://example1.com", "https://example2.com"]


def test_commitment_root():
    commitment = build_metadata_commitment(URIS)
    assert commitment.root == build_root([token_uri_leaf(i, u) for i, u in enumerate(URIS)])
    assert [e.token_id for e in commitment.entries] == [0, 1, 2]


def test_reveal_with_own_proof():
    commitment = build_metadata_commitment(URIS)
    for entry in commitment.entries:
        assert verify_reveal(entry.token_id, entry.uri, entry.proof, commitment.root)


def test_reveal_with_another_tokens_proof_fails():
    commitment = build_metadata_commitment(URIS)
    wrong = commitment.entry(1).proof
    assert not verify_reveal(0, URIS[0], wrong, commitment.root)


def test_uri_substitution_fails():
    commitment = build_metadata_commitment(URIS)
    entry = commitment.entry(0)
    assert not verify_reveal(0, URIS[1], entry.proof, commitment.root)
    assert not verify_reveal(0, "https://evil.example", entry.proof, commitment.root)
    assert not verify_reveal(1, URIS[0], entry.proof, commitment.root)


def test_hex_root_accepted():
    commitment = build_metadata_commitment(URIS)
    entry = commitment.entry(2)
    assert verify_reveal(2, URIS[2], ["0x" + p.hex() for p in entry.proof], "0x" + commitment.root.hex())


def test_bad_inputs():
    with pytest.raises(EmptyInputError):
        build_metadata_commitment([])
    commitment = build_metadata_commitment(URIS)
    with pytest.raises(InvalidIndexError):
        verify_reveal(-1, URIS[0], commitment.entry(0).proof, commitment.root)
    with pytest.raises(InvalidLeafDataError):
        verify_reveal(0, b"https://example0.com", commitment.entry(0).proof, commitment.root)


def test_to_dict():
    doc = build_metadata_commitment(URIS).to_dict()
    assert doc["count"] == 3
    assert [t["uri"] for t in doc["tokens"]] == URIS
    assert all(t["valid"] for t in doc["tokens"])


@pytest.mark.parametrize("token_id", [-1, -3, len(URIS), 100])
def test_entry_out_of_range(token_id):
    commitment = build_metadata_commitment(URIS)
    with pytest.raises(IndexOutOfRangeError):
        commitment.entry(token_id)
    with pytest.raises(MerkleError):
        commitment.entry(token_id)


def test_entries_are_immutable():
    commitment = build_metadata_commitment(URIS)
    entry = commitment.entry(0)
    assert isinstance(commitment.entries, tuple)
    assert isinstance(entry.proof, tuple)
    assert hash(entry) == hash(commitment.entry(0))
    hash(commitment)
