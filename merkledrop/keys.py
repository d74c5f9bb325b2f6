"""Store key layout of the merkledrop module.

Items are stored under these keys:

- ``0x01:<id>``: merkledrop
- ``0x02:<owner>:<id>``: merkledrop id
- ``0x03``: last merkledrop id
- ``0x04:<id>:<index>``: claimed marker
- ``0x10:<end height>:<id>``: end-height marker
"""

from __future__ import annotations

MODULE_NAME = "merkledrop"
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
ROUTER_KEY = MODULE_NAME

PREFIX_MERKLEDROP = b"\x01"
PREFIX_MERKLEDROP_BY_OWNER = b"\x02"
KEY_LAST_MERKLEDROP_ID = b"\x03"
PREFIX_CLAIMED_MERKLEDROP = b"\x04"
PREFIX_MERKLEDROP_BY_END_HEIGHT = b"\x10"
SEPARATOR = b":"

_UINT64_MAX = (1 << 64) - 1


def uint64_to_big_endian(value: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 big-endian bytes."""
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value out of uint64 range: {value}")
    return value.to_bytes(8, "big")


def big_endian_to_uint64(data: bytes) -> int:
    """Decode the first 8 bytes as a big-endian integer; empty input gives 0."""
    if not data:
        return 0
    if len(data) < 8:
        raise ValueError(f"need 8 bytes, got {len(data)}")
    return int.from_bytes(data[:8], "big")


def _height_bytes(height: int) -> bytes:
    return uint64_to_big_endian(height & _UINT64_MAX)


def merkledrop_key(merkledrop_id: int) -> bytes:
    return b"".join((PREFIX_MERKLEDROP, SEPARATOR, uint64_to_big_endian(merkledrop_id)))


def merkledrop_owner_key(merkledrop_id: int, owner: bytes) -> bytes:
    return b"".join(
        (
            PREFIX_MERKLEDROP_BY_OWNER,
            SEPARATOR,
            bytes(owner),
            SEPARATOR,
            uint64_to_big_endian(merkledrop_id),
        )
    )


def merkledrop_end_height_key(height: int) -> bytes:
    return b"".join(
        (PREFIX_MERKLEDROP_BY_END_HEIGHT, SEPARATOR, _height_bytes(height), SEPARATOR)
    )


def merkledrop_end_height_and_id_key(height: int, merkledrop_id: int) -> bytes:
    return merkledrop_end_height_key(height) + uint64_to_big_endian(merkledrop_id)


def last_merkledrop_id_key() -> bytes:
    return KEY_LAST_MERKLEDROP_ID


def claimed_merkledrop_key(merkledrop_id: int) -> bytes:
    return b"".join(
        (PREFIX_CLAIMED_MERKLEDROP, SEPARATOR, uint64_to_big_endian(merkledrop_id), SEPARATOR)
    )


def claimed_merkledrop_index_key(merkledrop_id: int, index: int) -> bytes:
    return claimed_merkledrop_key(merkledrop_id) + uint64_to_big_endian(index)