from merkledrop.address import acc_address_from_bech32
from merkledrop.proof import convert_proofs, is_valid_proof
from merkledrop.tree import MerkleTree

ADDRESS = "bitsong1vgpsha4f8grmsqr6krfdxwpcf3x20h0q3ztaj2"
ROOT = bytes.fromhex("5eb39dbca442a25db0f5d9e63489451b7bfc173796aa221e7207839de3a59e79")
PROOFS = [
    "7f0b92cc8318e4fb0db9052325b474e2eabb80d79e6e1abab92093d3a88fe029",
    "a258c32bee9b0bbb7a2d1999ab4698294844e7440aa6dcd067e0d5142fa20522",
]

TREE_LEAFS = [
    b"0bitsong1vgpsha4f8grmsqr6krfdxwpcf3x20h0q3ztaj21000000",
    b"1bitsong1zm6wlhr622yr9d7hh4t70acdfg6c32kcv34duw2000000",
    b"2bitsong1nzxmsks45e55d5edj4mcd08u8dycaxq5eplakw3000000",
]


def test_is_valid_proof_source_case():
    assert is_valid_proof(0, ADDRESS, 1000000, ROOT, convert_proofs(PROOFS))


def test_is_valid_proof_accepts_raw_address_bytes():
    raw = acc_address_from_bech32(ADDRESS)
    assert is_valid_proof(0, raw, 1000000, ROOT, convert_proofs(PROOFS))


def test_wrong_amount_or_index_is_invalid():
    proofs = convert_proofs(PROOFS)
    assert not is_valid_proof(0, ADDRESS, 1000001, ROOT, proofs)
    assert not is_valid_proof(1, ADDRESS, 1000000, ROOT, proofs)


def test_tampered_proof_is_invalid():
    proofs = convert_proofs(PROOFS)
    proofs[0] = bytes([proofs[0][0] ^ 1]) + proofs[0][1:]
    assert not is_valid_proof(0, ADDRESS, 1000000, ROOT, proofs)


def test_convert_proofs_decodes_hex():
    assert convert_proofs(["00ff", "AB"]) == [b"\x00\xff", b"\xab"]


def test_convert_proofs_keeps_valid_prefix_of_invalid_hex():
    assert convert_proofs(["zz", "abzz", "abc"]) == [b"", b"\xab", b"\xab"]


def test_single_leaf_needs_no_proof():
    tree = MerkleTree([b"0" + ADDRESS.encode() + b"5"])
    assert is_valid_proof(0, ADDRESS, 5, tree.root(), [])


def test_tree_proofs_verify():
    tree = MerkleTree(TREE_LEAFS)
    addresses = [
        "bitsong1vgpsha4f8grmsqr6krfdxwpcf3x20h0q3ztaj2",
        "bitsong1zm6wlhr622yr9d7hh4t70acdfg6c32kcv34duw",
        "bitsong1nzxmsks45e55d5edj4mcd08u8dycaxq5eplakw",
    ]
    amounts = [1000000, 2000000, 3000000]
    for index, (leaf_hash, address, amount) in enumerate(
        zip(tree.leafs(), addresses, amounts)
    ):
        proof = tree.proof(leaf_hash)[:-1]
        assert is_valid_proof(index, address, amount, tree.root(), proof)