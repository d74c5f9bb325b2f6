"""Transaction messages of the merkledrop module."""

from __future__ import annotations

import json
import string
from dataclasses import dataclass, field

from merkledrop.address import acc_address_from_bech32, acc_address_to_bech32
from merkledrop.coin import Coin
from merkledrop.errors import (
    InvalidAddressError,
    InvalidCoinError,
    InvalidEndHeightError,
    InvalidMerkleRootError,
)
from merkledrop.keys import ROUTER_KEY

TYPE_MSG_CREATE = "create"
TYPE_MSG_CLAIM = "claim"

_HEX_DIGITS = frozenset(string.hexdigits)


def _hex_error(text: str) -> str | None:
    """Describe why ``text`` is not strict hex, or None if it is."""
    for char in text:
        if char not in _HEX_DIGITS:
            return f"encoding/hex: invalid byte: {char!r}"
    if len(text) % 2:
        return "encoding/hex: odd length hex string"
    return None


def _sorted_json(type_name: str, value: dict) -> bytes:
    document = {"type": type_name, "value": value}
    return json.dumps(document, sort_keys=True, separators=(",", ":")).encode()


def _as_bech32(address: str | bytes) -> str:
    if isinstance(address, (bytes, bytearray)):
        return acc_address_to_bech32(bytes(address))
    return address


@dataclass
class MsgCreate:
    """Create a merkledrop funded with ``coin``; ``owner`` may be raw bytes."""

    owner: str
    merkle_root: str
    start_height: int
    end_height: int
    coin: Coin

    route = ROUTER_KEY
    type = TYPE_MSG_CREATE

    def __post_init__(self) -> None:
        self.owner = _as_bech32(self.owner)

    def validate_basic(self) -> None:
        """Stateless checks of the message."""
        if self.end_height <= self.start_height:
            raise InvalidEndHeightError("end height must be > start height")
        try:
            self.coin.validate()
        except ValueError as exc:
            raise InvalidCoinError(str(exc)) from exc
        if self.coin.amount <= 0:
            raise InvalidCoinError("invalid coin amount, less then zero")
        try:
            acc_address_from_bech32(self.owner)
        except InvalidAddressError as exc:
            raise InvalidAddressError(f"invalid owner address ({exc})") from exc
        error = _hex_error(self.merkle_root)
        if error is not None:
            raise InvalidMerkleRootError(f"invalid merkle root ({error})")

    def sign_bytes(self) -> bytes:
        """Canonical JSON with sorted keys."""
        return _sorted_json(
            "go-bitsong/merkledrop/MsgCreate",
            {
                "owner": self.owner,
                "merkle_root": self.merkle_root,
                "start_height": str(self.start_height),
                "end_height": str(self.end_height),
                "coin": {"denom": self.coin.denom, "amount": str(self.coin.amount)},
            },
        )

    def signers(self) -> list[bytes]:
        return [acc_address_from_bech32(self.owner)]


@dataclass
class MsgClaim:
    """Claim ``amount`` at leaf ``index``; ``sender`` may be raw bytes."""

    index: int
    merkledrop_id: int
    amount: int
    proofs: list[str] = field(default_factory=list)
    sender: str = ""

    route = ROUTER_KEY
    type = TYPE_MSG_CLAIM

    def __post_init__(self) -> None:
        self.sender = _as_bech32(self.sender)

    def validate_basic(self) -> None:
        """Every proof must be strict hex."""
        for proof in self.proofs:
            error = _hex_error(proof)
            if error is not None:
                raise InvalidMerkleRootError(f"invalid merkle proof ({error})")

    def sign_bytes(self) -> bytes:
        """Canonical JSON with sorted keys."""
        return _sorted_json(
            "go-bitsong/merkledrop/MsgClaim",
            {
                "sender": self.sender,
                "merkledrop_id": str(self.merkledrop_id),
                "index": str(self.index),
                "amount": str(self.amount),
                "proofs": list(self.proofs),
            },
        )

    def signers(self) -> list[bytes]:
        return [acc_address_from_bech32(self.sender)]