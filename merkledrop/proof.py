"""Verification of merkle proofs for merkledrop claims."""

from __future__ import annotations

import hashlib
import string
from collections.abc import Iterable

from merkledrop.address import acc_address_to_bech32

_HEX_DIGITS = frozenset(string.hexdigits)


def _decode_hex_prefix(text: str) -> bytes:
    """Decode hex pairs until the first invalid one, keeping what came before."""
    out = bytearray()
    for high, low in zip(text[0::2], text[1::2]):
        if high not in _HEX_DIGITS or low not in _HEX_DIGITS:
            break
        out.append(int(high + low, 16))
    return bytes(out)


def convert_proofs(proofs: Iterable[str]) -> list[bytes]:
    """Decode hex proofs; an invalid proof yields only its valid leading bytes."""
    return [_decode_hex_prefix(proof) for proof in proofs]


def _hash_pair(a: bytes, b: bytes) -> bytes:
    first, second = (a, b) if a < b else (b, a)
    return hashlib.sha256(first + second).digest()


def is_valid_proof(
    index: int,
    account: str | bytes,
    amount: int,
    root: bytes,
    proofs: Iterable[bytes],
) -> bool:
    """Check that the leaf ``<index><account><amount>`` hashes up to ``root``.

    ``account`` is a bech32 address, or raw address bytes.
    """
    if isinstance(account, (bytes, bytearray)):
        account = acc_address_to_bech32(bytes(account))
    node = hashlib.sha256(f"{index}{account}{amount}".encode()).digest()
    for proof in proofs:
        node = _hash_pair(node, bytes(proof))
    return node == bytes(root)