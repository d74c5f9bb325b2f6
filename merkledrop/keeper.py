"""State access and bookkeeping for merkledrops."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from merkledrop.address import acc_address_from_bech32
from merkledrop.coin import Coin
from merkledrop.errors import MerkledropNotExistError, TransferCoinsError
from merkledrop.keys import (
    MODULE_NAME,
    PREFIX_MERKLEDROP,
    PREFIX_MERKLEDROP_BY_OWNER,
    SEPARATOR,
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
from merkledrop.models import Indexes, Merkledrop
from merkledrop.params import Params, default_params
from merkledrop.store import KVStore

_CLAIMED_MARKER = b"\x01"


class BankKeeper(Protocol):
    """Moves coins between accounts and module accounts."""

    def send_coins_from_module_to_account(
        self, sender_module: str, recipient: bytes, amount: Sequence[Coin]
    ) -> None: ...

    def send_coins_from_account_to_module(
        self, sender: bytes, recipient_module: str, amount: Sequence[Coin]
    ) -> None: ...

    def get_balance(self, address: bytes, denom: str) -> Coin: ...

    def get_all_balances(self, address: bytes) -> list[Coin]: ...


class DistrKeeper(Protocol):
    """Funds the community pool."""

    def fund_community_pool(self, amount: Sequence[Coin], sender: bytes) -> None: ...


def _encode(merkledrop: Merkledrop) -> bytes:
    return json.dumps(merkledrop.to_dict(), sort_keys=True).encode()


def _decode(data: bytes) -> Merkledrop:
    return Merkledrop.from_dict(json.loads(data))


def _owner_bytes(owner: str | bytes) -> bytes:
    if isinstance(owner, (bytes, bytearray)):
        return bytes(owner)
    return acc_address_from_bech32(owner)


class Keeper:
    """Reads and writes merkledrop state; emitted events collect in ``events``."""

    def __init__(
        self,
        store: KVStore,
        bank_keeper: BankKeeper,
        distr_keeper: DistrKeeper,
        params: Params | None = None,
    ) -> None:
        self.store = store
        self.bank_keeper = bank_keeper
        self.distr_keeper = distr_keeper
        self.logger = logging.getLogger(MODULE_NAME)
        self.events: list[tuple[str, dict[str, Any]]] = []
        self._params = default_params()
        self.set_params(params if params is not None else default_params())

    # last id

    def set_last_merkledrop_id(self, merkledrop_id: int) -> None:
        self.store.set(last_merkledrop_id_key(), uint64_to_big_endian(merkledrop_id))

    def get_last_merkledrop_id(self) -> int:
        data = self.store.get(last_merkledrop_id_key())
        return 0 if data is None else big_endian_to_uint64(data)

    # merkledrops

    def set_merkledrop(self, merkledrop: Merkledrop) -> None:
        """Store a merkledrop with its owner and end-height index entries.

        The record itself is written before the owner is checked, so an
        invalid owner raises after the record is stored.
        """
        self.store.set(merkledrop_key(merkledrop.id), _encode(merkledrop))
        owner = acc_address_from_bech32(merkledrop.owner)
        self.store.set(
            merkledrop_owner_key(merkledrop.id, owner), uint64_to_big_endian(merkledrop.id)
        )
        self.store.set(
            merkledrop_end_height_and_id_key(merkledrop.end_height, merkledrop.id),
            _CLAIMED_MARKER,
        )

    def get_merkledrop(self, merkledrop_id: int) -> Merkledrop:
        data = self.store.get(merkledrop_key(merkledrop_id))
        if data is None:
            raise MerkledropNotExistError(f"merkledrop: {merkledrop_id} does not exist")
        return _decode(data)

    def get_merkledrops_by_owner(self, owner: str | bytes) -> list[Merkledrop]:
        """Merkledrops of ``owner`` (bech32 or raw bytes), by ascending id."""
        prefix = PREFIX_MERKLEDROP_BY_OWNER + SEPARATOR + _owner_bytes(owner) + SEPARATOR
        return [
            self.get_merkledrop(big_endian_to_uint64(value))
            for _, value in self.store.iterate_prefix(prefix)
        ]

    def get_all_merkledrops(self) -> list[Merkledrop]:
        return [_decode(value) for _, value in self.store.iterate_prefix(PREFIX_MERKLEDROP)]

    # claims

    def is_claimed(self, merkledrop_id: int, index: int) -> bool:
        return self.store.has(claimed_merkledrop_index_key(merkledrop_id, index))

    def set_claimed(self, merkledrop_id: int, index: int) -> None:
        self.store.set(claimed_merkledrop_index_key(merkledrop_id, index), _CLAIMED_MARKER)

    def get_merkledrop_ids_by_end_height(self, end_height: int) -> list[int]:
        prefix = merkledrop_end_height_key(end_height)
        return [
            big_endian_to_uint64(key[len(prefix):])
            for key, _ in self.store.iterate_prefix(prefix)
        ]

    def get_all_indexes_by_merkledrop_id(self, merkledrop_id: int) -> list[int]:
        prefix = claimed_merkledrop_key(merkledrop_id)
        return [
            big_endian_to_uint64(key[len(prefix):])
            for key, _ in self.store.iterate_prefix(prefix)
        ]

    def get_all_indexes(self) -> list[Indexes]:
        """Claimed indexes of every stored merkledrop, in merkledrop order."""
        return [
            Indexes(merkledrop_id=md.id, index=self.get_all_indexes_by_merkledrop_id(md.id))
            for md in self.get_all_merkledrops()
        ]

    def delete_merkledrop(self, merkledrop_id: int) -> None:
        """Remove a merkledrop, its index entries and its claimed markers."""
        merkledrop = self.get_merkledrop(merkledrop_id)
        owner = acc_address_from_bech32(merkledrop.owner)
        self.store.delete(merkledrop_owner_key(merkledrop.id, owner))
        for index in self.get_all_indexes_by_merkledrop_id(merkledrop_id):
            self.store.delete(claimed_merkledrop_index_key(merkledrop_id, index))
        self.store.delete(
            merkledrop_end_height_and_id_key(merkledrop.end_height, merkledrop.id)
        )
        self.store.delete(merkledrop_key(merkledrop_id))

    def withdraw(self, merkledrop_id: int) -> Coin:
        """Return the unclaimed balance to the owner and give the coin sent."""
        try:
            merkledrop = self.get_merkledrop(merkledrop_id)
        except MerkledropNotExistError:
            raise MerkledropNotExistError(
                f"merkledrop: {merkledrop_id} does not exist"
            ) from None
        if merkledrop.amount < merkledrop.claimed:
            raise RuntimeError(
                f"merkledrop-id: {merkledrop.id}, total_amount ({merkledrop.amount}) "
                f"< claimed_amount ({merkledrop.claimed})"
            )
        coin = Coin(merkledrop.denom, merkledrop.amount - merkledrop.claimed)
        owner = acc_address_from_bech32(merkledrop.owner)
        try:
            self.bank_keeper.send_coins_from_module_to_account(MODULE_NAME, owner, [coin])
        except Exception as exc:
            raise TransferCoinsError(str(coin)) from exc
        self.events.append(("EventWithdraw", {"merkledrop_id": merkledrop.id, "coin": coin}))
        return coin

    # params and fees

    def get_params(self) -> Params:
        return dataclasses.replace(self._params)

    def set_params(self, params: Params) -> None:
        """Replace the module parameters; invalid parameters raise ValueError."""
        params.validate()
        self._params = dataclasses.replace(params)

    def deduct_creation_fee(self, owner: bytes) -> None:
        """Send the creation fee from ``owner`` to the community pool, if any."""
        fee = self._params.creation_fee
        if fee.amount <= 0:
            return
        self.distr_keeper.fund_community_pool([fee], owner)

    # queries

    def query_merkledrop(self, merkledrop_id: int) -> Merkledrop:
        return self.get_merkledrop(merkledrop_id)

    def query_index_claimed(self, merkledrop_id: int, index: int) -> bool:
        return self.is_claimed(merkledrop_id, index)