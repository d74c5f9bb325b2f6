import pytest

from merkledrop.keys import (
    PREFIX_CLAIMED_MERKLEDROP,
    PREFIX_MERKLEDROP,
    PREFIX_MERKLEDROP_BY_END_HEIGHT,
    PREFIX_MERKLEDROP_BY_OWNER,
    big_endian_to_uint64,
    claimed_merkledrop_index_key,
    claimed_merkledrop_key,
    last_merkledrop_id_key,
    merkledrop_end_height_and_id_key,
    merkledrop_end_height_key,
    merkledrop_key,
    merkledrop_owner_key,
    uint64_to_big_endian,
)


def test_uint64_encoding_pinned():
    assert uint64_to_big_endian(1) == b"\x00" * 7 + b"\x01"


@pytest.mark.parametrize("value", [0, 1, 255, 2**32, 2**64 - 1])
def test_uint64_round_trip(value):
    assert big_endian_to_uint64(uint64_to_big_endian(value)) == value


def test_uint64_out_of_range():
    with pytest.raises(ValueError):
        uint64_to_big_endian(-1)
    with pytest.raises(ValueError):
        uint64_to_big_endian(2**64)


def test_big_endian_edge_cases():
    assert big_endian_to_uint64(b"") == 0
    with pytest.raises(ValueError):
        big_endian_to_uint64(b"\x01\x02")


def test_big_endian_order_matches_numeric_order():
    values = [300, 2, 70000, 1, 2**40]
    encoded = sorted(uint64_to_big_endian(v) for v in values)
    assert [big_endian_to_uint64(e) for e in encoded] == [1, 2, 300, 70000, 2**40]


def test_merkledrop_key_layout():
    key = merkledrop_key(7)
    assert key.startswith(PREFIX_MERKLEDROP + b":")
    assert len(key) == 10
    assert big_endian_to_uint64(key[2:]) == 7


def test_owner_key_contains_owner_and_id():
    owner = bytes(range(20))
    key = merkledrop_owner_key(5, owner)
    assert key.startswith(PREFIX_MERKLEDROP_BY_OWNER + b":" + owner + b":")
    assert big_endian_to_uint64(key[-8:]) == 5


def test_end_height_keys_share_prefix():
    prefix = merkledrop_end_height_key(100)
    full = merkledrop_end_height_and_id_key(100, 3)
    assert prefix.startswith(PREFIX_MERKLEDROP_BY_END_HEIGHT)
    assert full.startswith(prefix)
    assert big_endian_to_uint64(full[len(prefix):]) == 3
    assert not merkledrop_end_height_and_id_key(101, 3).startswith(prefix)


def test_negative_end_height_wraps():
    assert b"\xff" * 8 in merkledrop_end_height_key(-1)


def test_claimed_keys_share_prefix():
    prefix = claimed_merkledrop_key(2)
    key = claimed_merkledrop_index_key(2, 28)
    assert prefix.startswith(PREFIX_CLAIMED_MERKLEDROP)
    assert key.startswith(prefix)
    assert big_endian_to_uint64(key[len(prefix):]) == 28
    assert not claimed_merkledrop_index_key(3, 28).startswith(prefix)


def test_last_id_key():
    assert last_merkledrop_id_key() == b"\x03"