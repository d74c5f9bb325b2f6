"""End-of-block processing for merkledrops."""

from __future__ import annotations

from merkledrop.errors import MerkledropError
from merkledrop.keeper import Keeper


def end_blocker(keeper: Keeper, block_height: int) -> list[int]:
    """Refund and remove every merkledrop ending at ``block_height``.

    Returns the ids that were processed. Failures of a single withdrawal or
    deletion are logged and do not stop the others.
    """
    merkledrop_ids = keeper.get_merkledrop_ids_by_end_height(block_height)
    for merkledrop_id in merkledrop_ids:
        try:
            keeper.withdraw(merkledrop_id)
        except MerkledropError as exc:
            keeper.logger.warning("merkledrop withdraw failed: %s (mdID=%d)", exc, merkledrop_id)
        try:
            keeper.delete_merkledrop(merkledrop_id)
        except MerkledropError as exc:
            keeper.logger.warning("merkledrop delete failed: %s (mdID=%d)", exc, merkledrop_id)
        keeper.logger.info("merkledrop deleted (mdID=%d)", merkledrop_id)
    return merkledrop_ids