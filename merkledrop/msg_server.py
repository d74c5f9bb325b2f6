"""Transaction handling: creating and claiming merkledrops."""

from __future__ import annotations

import string
from dataclasses import dataclass

from merkledrop.address import acc_address_from_bech32
from merkledrop.coin import Coin
from merkledrop.errors import (
    AlreadyClaimedError,
    DeleteMerkledropError,
    InvalidAddressError,
    InvalidCoinError,
    InvalidEndHeightError,
    InvalidMerkleProofsError,
    InvalidMerkleRootError,
    InvalidOwnerError,
    InvalidSenderError,
    InvalidStartHeightError,
    MerkledropError,
    MerkledropExpiredError,
    MerkledropNotBegunError,
    MerkledropNotExistError,
    TransferCoinsError,
)
from merkledrop.keeper import Keeper
from merkledrop.keys import MODULE_NAME
from merkledrop.models import Merkledrop
from merkledrop.msgs import MsgClaim, MsgCreate
from merkledrop.proof import convert_proofs, is_valid_proof

MAX_START_HEIGHT_OFFSET = 100_000
MAX_DURATION = 5_000_000

_HEX_DIGITS = frozenset(string.hexdigits)


def _decode_hex(text: str) -> bytes:
    """Strictly decode a hex string; whitespace and odd lengths are rejected."""
    for char in text:
        if char not in _HEX_DIGITS:
            raise ValueError(f"encoding/hex: invalid byte: {char!r}")
    if len(text) % 2:
        raise ValueError("encoding/hex: odd length hex string")
    return bytes.fromhex(text)


@dataclass(frozen=True)
class CreateResponse:
    owner: str
    id: int


@dataclass(frozen=True)
class ClaimResponse:
    id: int
    index: int
    amount: int


class MsgServer:
    """Executes merkledrop messages against a keeper at a given block height."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def create(self, msg: MsgCreate, block_height: int) -> CreateResponse:
        """Fund a new merkledrop from the owner's account."""
        start = msg.start_height
        end = msg.end_height

        if start < 0:
            raise InvalidStartHeightError("start height must be greater then zero")

        # A start in the past begins the merkledrop now; the later checks
        # still compare against the requested start.
        effective_start = block_height if start < block_height else start

        if end <= start:
            raise InvalidEndHeightError("end height must be > start height")
        if end <= block_height:
            raise InvalidEndHeightError(
                f"end height ({end}) must be > current block height ({block_height})"
            )
        if start > block_height + MAX_START_HEIGHT_OFFSET:
            raise InvalidStartHeightError(
                f"start height is > block-height + {MAX_START_HEIGHT_OFFSET}"
            )
        if end > effective_start + MAX_DURATION:
            raise InvalidEndHeightError(f"end height is > msg.StartHeight + {MAX_DURATION}")

        try:
            msg.coin.validate()
        except ValueError as exc:
            raise InvalidCoinError(str(exc)) from exc
        if msg.coin.amount <= 0:
            raise InvalidCoinError("invalid coin amount, must be greater then zero")

        try:
            owner = acc_address_from_bech32(msg.owner)
        except InvalidAddressError as exc:
            raise InvalidOwnerError(f"owner {msg.owner}") from exc

        try:
            _decode_hex(msg.merkle_root)
        except ValueError as exc:
            raise InvalidMerkleRootError(f"invalid merkle root ({exc})") from exc

        self.keeper.deduct_creation_fee(owner)

        try:
            self.keeper.bank_keeper.send_coins_from_account_to_module(
                owner, MODULE_NAME, [msg.coin]
            )
        except Exception as exc:
            raise TransferCoinsError(str(msg.coin)) from exc

        merkledrop_id = self.keeper.get_last_merkledrop_id() + 1
        self.keeper.set_last_merkledrop_id(merkledrop_id)

        merkledrop = Merkledrop(
            id=merkledrop_id,
            merkle_root=msg.merkle_root,
            start_height=effective_start,
            end_height=end,
            denom=msg.coin.denom,
            amount=msg.coin.amount,
            owner=msg.owner,
            claimed=0,
        )
        try:
            self.keeper.set_merkledrop(merkledrop)
        except MerkledropError as exc:
            raise InvalidSenderError(f"sender {msg.owner}") from exc

        self.keeper.events.append(
            ("EventCreate", {"owner": msg.owner, "merkledrop_id": merkledrop_id})
        )
        return CreateResponse(owner=msg.owner, id=merkledrop_id)

    def claim(self, msg: MsgClaim, block_height: int) -> ClaimResponse:
        """Pay out one leaf of a merkledrop after checking its proof."""
        try:
            sender = acc_address_from_bech32(msg.sender)
        except InvalidAddressError as exc:
            raise InvalidSenderError(f"sender {msg.sender}") from exc

        try:
            merkledrop = self.keeper.get_merkledrop(msg.merkledrop_id)
        except MerkledropNotExistError:
            raise MerkledropNotExistError(
                f"merkledrop: {msg.merkledrop_id} does not exist"
            ) from None

        if merkledrop.start_height > block_height:
            raise MerkledropNotBegunError(
                f"start-height {merkledrop.start_height}, current-height {block_height}"
            )
        if merkledrop.end_height <= block_height:
            raise MerkledropExpiredError(
                f"end-height {merkledrop.end_height}, current-height {block_height}"
            )

        if self.keeper.is_claimed(msg.merkledrop_id, msg.index):
            raise AlreadyClaimedError(f"merkledrop_id ({msg.merkledrop_id})")

        try:
            root = _decode_hex(merkledrop.merkle_root)
        except ValueError as exc:
            raise InvalidMerkleRootError(f"invalid merkle root ({exc})") from exc

        proofs = convert_proofs(msg.proofs)
        if not is_valid_proof(msg.index, sender, msg.amount, root, proofs):
            raise InvalidMerkleProofsError("invalid proofs")

        if msg.amount < 0:
            raise InvalidCoinError(f"negative coin amount: {msg.amount}")
        if merkledrop.amount - merkledrop.claimed < msg.amount:
            raise TransferCoinsError("something went wrong")

        coin = Coin(merkledrop.denom, msg.amount)
        try:
            self.keeper.bank_keeper.send_coins_from_module_to_account(
                MODULE_NAME, sender, [coin]
            )
        except Exception as exc:
            raise TransferCoinsError(f"{msg.amount}{merkledrop.denom}") from exc

        self.keeper.set_claimed(msg.merkledrop_id, msg.index)

        merkledrop.claimed += msg.amount
        self.keeper.set_merkledrop(merkledrop)

        if merkledrop.claimed == merkledrop.amount:
            try:
                self.keeper.delete_merkledrop(merkledrop.id)
            except MerkledropError as exc:
                raise DeleteMerkledropError(str(exc)) from exc

        self.keeper.events.append(
            (
                "EventClaim",
                {"merkledrop_id": merkledrop.id, "index": msg.index, "coin": coin},
            )
        )
        return ClaimResponse(id=0, index=0, amount=msg.amount)