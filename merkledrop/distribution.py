"""Building merkledrop distribution lists and the proofs used to claim them."""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from merkledrop.address import acc_address_from_bech32, acc_address_to_bech32
from merkledrop.errors import InvalidAddressError
from merkledrop.tree import MerkleTree

FLAG_PROOFS = "proofs"
FLAG_INDEX = "index"
FLAG_START_HEIGHT = "start-height"
FLAG_END_HEIGHT = "end-height"
FLAG_AMOUNT = "amount"
FLAG_DENOM = "denom"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_MAX_INT_BITS = 256


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"could not cast {text} to sdk.Int")
    value = int(text)
    if value.bit_length() > _MAX_INT_BITS:
        raise ValueError(f"could not cast {text} to sdk.Int")
    return value


@dataclass(frozen=True)
class Account:
    """A recipient of a merkledrop: raw address bytes and an amount."""

    address: bytes
    amount: int

    @property
    def bech32(self) -> str:
        return acc_address_to_bech32(self.address)


@dataclass
class ClaimInfo:
    """What a recipient needs to claim: leaf index, amount and proof."""

    index: int
    amount: str
    proof: list[str] = field(default_factory=list)


def accounts_from_map(mapping: Mapping[str, str]) -> list[Account]:
    """Turn ``{bech32 address: amount string}`` into accounts.

    Raises ValueError for an amount that is not an integer or an address
    that does not decode.
    """
    accounts: list[Account] = []
    for address, amount in mapping.items():
        value = _parse_int(amount)
        try:
            raw = acc_address_from_bech32(address)
        except InvalidAddressError as exc:
            raise ValueError(f"could not cast {address} to sdk.AccAddress") from exc
        accounts.append(Account(address=raw, amount=value))
    return accounts


def proof_bytes_to_string(proof: Iterable[bytes]) -> list[str]:
    """Hex-encode a proof, dropping its last element (the root)."""
    items = list(proof)
    if not items:
        raise ValueError("a proof holds at least the root")
    return [bytes(item).hex() for item in items[:-1]]


def create_distribution_list(
    accounts: Iterable[Account],
) -> tuple[MerkleTree, dict[str, ClaimInfo], int]:
    """Build the merkle tree of a distribution.

    Accounts are ordered by ascending amount; each leaf is
    ``<index><bech32 address><amount>``. Returns the tree, the claim
    information per address and the total amount.
    """
    ordered = sorted(accounts, key=lambda account: account.amount)
    nodes = [
        f"{index}{account.bech32}{account.amount}".encode()
        for index, account in enumerate(ordered)
    ]
    total = sum(account.amount for account in ordered)
    tree = MerkleTree(nodes)

    claims: dict[str, ClaimInfo] = {}
    for index, (account, node) in enumerate(zip(ordered, nodes)):
        proof = tree.proof(hashlib.sha256(node).digest())
        claims[account.bech32] = ClaimInfo(
            index=index,
            amount=str(account.amount),
            proof=proof_bytes_to_string(proof),
        )
    return tree, claims, total


def _to_json(value: Any) -> Any:
    if isinstance(value, ClaimInfo):
        return {"index": value.index, "amount": value.amount, "proof": list(value.proof)}
    if isinstance(value, Mapping):
        return {str(key): _to_json(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    return value


def write_claim_file(path: str | Path, contents: Any) -> None:
    """Write ``contents`` as JSON indented by two spaces, mapping keys sorted."""
    text = json.dumps(_to_json(contents), indent=2, ensure_ascii=False)
    Path(path).write_text(text, encoding="utf-8")