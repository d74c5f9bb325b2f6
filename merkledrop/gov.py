"""Governance proposal to change the merkledrop fees."""

from __future__ import annotations

from dataclasses import dataclass

from merkledrop.coin import Coin
from merkledrop.errors import InvalidCoinError, MerkledropError
from merkledrop.keys import ROUTER_KEY

PROPOSAL_TYPE_UPDATE_FEES = "UpdateMerkledropFeesProposal"
MAX_TITLE_LENGTH = 140
MAX_DESCRIPTION_LENGTH = 5000


class InvalidProposalContentError(MerkledropError):
    codespace = "gov"
    code = 5
    description = "invalid proposal content"


@dataclass
class UpdateFeesProposal:
    title: str
    description: str
    creation_fee: Coin

    route = ROUTER_KEY
    proposal_type = PROPOSAL_TYPE_UPDATE_FEES

    def validate_basic(self) -> None:
        """Check title, description and fee."""
        if not self.title.strip():
            raise InvalidProposalContentError("proposal title cannot be blank")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise InvalidProposalContentError(
                f"proposal title is longer than max length of {MAX_TITLE_LENGTH}"
            )
        if not self.description.strip():
            raise InvalidProposalContentError("proposal description cannot be blank")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidProposalContentError(
                f"proposal description is longer than max length of {MAX_DESCRIPTION_LENGTH}"
            )
        try:
            self.creation_fee.validate()
        except ValueError as exc:
            raise InvalidCoinError(str(exc)) from exc

    def __str__(self) -> str:
        return (
            "Update Merkledrop Fees Proposal:\n"
            f"  Title:       {self.title}\n"
            f"  Description: {self.description}\n"
            f"  Creation Fee:   {self.creation_fee}\n"
        )