"""Routing of messages and governance proposals."""

from __future__ import annotations

import logging
from typing import Any

from merkledrop.errors import InvalidCoinError, UnknownRequestError
from merkledrop.gov import UpdateFeesProposal
from merkledrop.keeper import Keeper
from merkledrop.keys import MODULE_NAME
from merkledrop.msg_server import ClaimResponse, CreateResponse, MsgServer
from merkledrop.msgs import MsgClaim, MsgCreate

_logger = logging.getLogger(MODULE_NAME)


def handle_msg(
    server: MsgServer, msg: Any, block_height: int
) -> CreateResponse | ClaimResponse:
    """Dispatch a message to the matching server method."""
    if isinstance(msg, MsgCreate):
        return server.create(msg, block_height)
    if isinstance(msg, MsgClaim):
        return server.claim(msg, block_height)
    raise UnknownRequestError(
        f"unrecognized merkledrop message type: {type(msg).__name__}"
    )


def handle_proposal(keeper: Keeper, content: Any) -> None:
    """Apply a governance proposal to the module."""
    if isinstance(content, UpdateFeesProposal):
        _update_fees(keeper, content)
        return
    raise UnknownRequestError(
        f"unrecognized merkledrop proposal content type: {type(content).__name__}"
    )


def _update_fees(keeper: Keeper, proposal: UpdateFeesProposal) -> None:
    _logger.info("Updating merkledrop fees from proposal")
    try:
        proposal.creation_fee.validate()
    except ValueError as exc:
        raise InvalidCoinError(str(exc)) from exc
    params = keeper.get_params()
    params.creation_fee = proposal.creation_fee
    keeper.set_params(params)