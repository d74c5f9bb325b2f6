import pytest

from merkledrop.address import acc_address_from_bech32
from merkledrop.coin import Coin
from merkledrop.errors import (
    InvalidAddressError,
    MerkledropNotExistError,
    TransferCoinsError,
)
from merkledrop.keeper import Keeper
from merkledrop.keys import MODULE_NAME, last_merkledrop_id_key
from merkledrop.models import Merkledrop
from merkledrop.params import Params, default_params
from merkledrop.store import KVStore

OWNER = "bitsong1vgpsha4f8grmsqr6krfdxwpcf3x20h0q3ztaj2"
OTHER = "bitsong1zm6wlhr622yr9d7hh4t70acdfg6c32kcv34duw"


class FakeBank:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send_coins_from_module_to_account(self, sender_module, recipient, amount):
        if self.fail:
            raise ValueError("insufficient funds")
        self.sent.append((sender_module, recipient, list(amount)))

    def send_coins_from_account_to_module(self, sender, recipient_module, amount):
        self.sent.append((sender, recipient_module, list(amount)))

    def get_balance(self, address, denom):
        return Coin(denom, 0)

    def get_all_balances(self, address):
        return []


class FakeDistr:
    def __init__(self):
        self.funded = []

    def fund_community_pool(self, amount, sender):
        self.funded.append((list(amount), sender))


def make_keeper(bank=None, distr=None, params=None):
    return Keeper(KVStore(), bank or FakeBank(), distr or FakeDistr(), params)


def make_drop(md_id, end_height=20, owner=OWNER, amount=100, claimed=0):
    return Merkledrop(
        id=md_id,
        merkle_root="sdsd",
        start_height=10,
        end_height=end_height,
        denom="ubtsg",
        amount=amount,
        owner=owner,
        claimed=claimed,
    )


def test_get_all_index_by_id():
    mk = make_keeper()
    merkledrop_id = 1
    index = 0
    mk.set_merkledrop(make_drop(merkledrop_id))
    mk.set_merkledrop(make_drop(merkledrop_id + 1))

    assert mk.is_claimed(merkledrop_id, index) is False
    mk.set_claimed(merkledrop_id, index)
    assert mk.is_claimed(merkledrop_id, index) is True

    mk.set_claimed(merkledrop_id, 10)
    mk.set_claimed(merkledrop_id, 28)
    assert mk.get_all_indexes_by_merkledrop_id(merkledrop_id) == [0, 10, 28]

    mk.set_claimed(merkledrop_id + 1, 30)
    mk.set_claimed(merkledrop_id + 1, 40)
    all_indexes = mk.get_all_indexes()
    assert len(all_indexes) == 2
    assert len(all_indexes[0].index) == 3
    assert len(all_indexes[1].index) == 2


def test_last_id_defaults_to_zero_and_roundtrips():
    mk = make_keeper()
    assert mk.get_last_merkledrop_id() == 0
    mk.set_last_merkledrop_id(7)
    assert mk.get_last_merkledrop_id() == 7


def test_set_get_merkledrop_roundtrip():
    mk = make_keeper()
    drop = make_drop(3, claimed=40)
    mk.set_merkledrop(drop)
    assert mk.get_merkledrop(3) == drop
    assert mk.query_merkledrop(3) == drop
    assert mk.get_all_merkledrops() == [drop]


def test_get_missing_merkledrop_raises():
    mk = make_keeper()
    with pytest.raises(MerkledropNotExistError):
        mk.get_merkledrop(9)


def test_set_merkledrop_invalid_owner_raises():
    mk = make_keeper()
    with pytest.raises(InvalidAddressError):
        mk.set_merkledrop(make_drop(1, owner="notanaddress"))


def test_ids_by_end_height():
    mk = make_keeper()
    mk.set_merkledrop(make_drop(1, end_height=20))
    mk.set_merkledrop(make_drop(2, end_height=20))
    mk.set_merkledrop(make_drop(3, end_height=30))
    assert mk.get_merkledrop_ids_by_end_height(20) == [1, 2]
    assert mk.get_merkledrop_ids_by_end_height(30) == [3]
    assert mk.get_merkledrop_ids_by_end_height(25) == []


def test_merkledrops_by_owner():
    mk = make_keeper()
    mk.set_merkledrop(make_drop(1, owner=OWNER))
    mk.set_merkledrop(make_drop(2, owner=OTHER))
    mk.set_merkledrop(make_drop(3, owner=OWNER))
    assert [md.id for md in mk.get_merkledrops_by_owner(OWNER)] == [1, 3]
    raw = acc_address_from_bech32(OTHER)
    assert [md.id for md in mk.get_merkledrops_by_owner(raw)] == [2]


def test_delete_merkledrop_removes_all_entries():
    mk = make_keeper()
    mk.set_last_merkledrop_id(1)
    mk.set_merkledrop(make_drop(1))
    mk.set_claimed(1, 0)
    mk.set_claimed(1, 5)
    mk.delete_merkledrop(1)
    with pytest.raises(MerkledropNotExistError):
        mk.get_merkledrop(1)
    assert mk.get_all_merkledrops() == []
    assert mk.get_merkledrop_ids_by_end_height(20) == []
    assert mk.get_all_indexes_by_merkledrop_id(1) == []
    assert mk.get_merkledrops_by_owner(OWNER) == []
    assert [key for key, _ in mk.store.iterate_prefix(b"")] == [last_merkledrop_id_key()]


def test_delete_missing_raises():
    mk = make_keeper()
    with pytest.raises(MerkledropNotExistError):
        mk.delete_merkledrop(1)


def test_withdraw_sends_unclaimed_balance():
    bank = FakeBank()
    mk = make_keeper(bank=bank)
    mk.set_merkledrop(make_drop(1, amount=100, claimed=30))
    coin = mk.withdraw(1)
    assert coin == Coin("ubtsg", 70)
    assert bank.sent == [(MODULE_NAME, acc_address_from_bech32(OWNER), [Coin("ubtsg", 70)])]
    assert mk.events == [("EventWithdraw", {"merkledrop_id": 1, "coin": Coin("ubtsg", 70)})]


def test_withdraw_missing_raises():
    mk = make_keeper()
    with pytest.raises(MerkledropNotExistError):
        mk.withdraw(4)


def test_withdraw_claimed_above_amount_raises():
    mk = make_keeper()
    mk.set_merkledrop(make_drop(1, amount=10, claimed=11))
    with pytest.raises(RuntimeError):
        mk.withdraw(1)


def test_withdraw_bank_failure_raises_transfer_error():
    mk = make_keeper(bank=FakeBank(fail=True))
    mk.set_merkledrop(make_drop(1))
    with pytest.raises(TransferCoinsError):
        mk.withdraw(1)
    assert mk.events == []


def test_params_default_and_update():
    mk = make_keeper()
    assert mk.get_params() == default_params()
    new = Params(creation_fee=Coin("ubtsg", 5))
    mk.set_params(new)
    assert mk.get_params() == new


def test_set_invalid_params_raises():
    mk = make_keeper()
    with pytest.raises(ValueError):
        mk.set_params(Params(creation_fee=Coin("ubtsg", -1)))
    assert mk.get_params() == default_params()


def test_deduct_creation_fee_funds_pool():
    distr = FakeDistr()
    fee = Coin("ubtsg", 5)
    mk = make_keeper(distr=distr, params=Params(creation_fee=fee))
    owner = acc_address_from_bech32(OWNER)
    mk.deduct_creation_fee(owner)
    assert distr.funded == [([fee], owner)]


def test_deduct_zero_creation_fee_does_nothing():
    distr = FakeDistr()
    mk = make_keeper(distr=distr, params=Params(creation_fee=Coin("ubtsg", 0)))
    mk.deduct_creation_fee(acc_address_from_bech32(OWNER))
    assert distr.funded == []


def test_query_index_claimed():
    mk = make_keeper()
    mk.set_claimed(2, 3)
    assert mk.query_index_claimed(2, 3) is True
    assert mk.query_index_claimed(2, 4) is False