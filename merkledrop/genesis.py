"""Genesis import and export for the merkledrop module."""

from __future__ import annotations

from merkledrop.keeper import Keeper
from merkledrop.models import GenesisState
from merkledrop.params import default_params


def default_genesis_state() -> GenesisState:
    """An empty state with the default parameters."""
    return GenesisState(
        last_merkledrop_id=0,
        merkledrops=[],
        indexes=[],
        params=default_params(),
    )


def init_genesis(keeper: Keeper, state: GenesisState) -> None:
    """Load ``state`` into the keeper's store."""
    keeper.set_params(state.params)
    keeper.set_last_merkledrop_id(state.last_merkledrop_id)
    for merkledrop in state.merkledrops:
        keeper.set_merkledrop(merkledrop)
    for record in state.indexes:
        for index in record.index:
            keeper.set_claimed(record.merkledrop_id, index)


def export_genesis(keeper: Keeper) -> GenesisState:
    """Dump the keeper's current state."""
    return GenesisState(
        last_merkledrop_id=keeper.get_last_merkledrop_id(),
        merkledrops=keeper.get_all_merkledrops(),
        indexes=keeper.get_all_indexes(),
        params=keeper.get_params(),
    )