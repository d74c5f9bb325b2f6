"""Error types raised by the merkledrop module."""

from __future__ import annotations


class MerkledropError(Exception):
    """Base class of every merkledrop error.

    Each subclass carries a registered ``codespace``/``code`` pair and a fixed
    description. An optional detail message is prefixed to the description.
    """

    codespace = "merkledrop"
    code = 0
    description = "merkledrop error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = f"{detail}: {self.description}" if detail else self.description
        super().__init__(message)


class UnknownRequestError(MerkledropError):
    codespace = "sdk"
    code = 6
    description = "unknown request"


class InvalidAddressError(MerkledropError):
    codespace = "sdk"
    code = 7
    description = "invalid address"


class MerkledropNotExistError(MerkledropError):
    code = 1
    description = "merkledrop does not exist"


class InvalidMerkleRootError(MerkledropError):
    code = 2
    description = "invalid merkle root"


class InvalidCoinError(MerkledropError):
    code = 3
    description = "invalid coin"


class AlreadyClaimedError(MerkledropError):
    code = 4
    description = "merkledrop already claimed"


class InvalidMerkleProofsError(MerkledropError):
    code = 5
    description = "invalid merkle proofs"


class TransferCoinsError(MerkledropError):
    code = 6
    description = "error transfer coins"


class InvalidOwnerError(MerkledropError):
    code = 7
    description = "invalid owner"


class InvalidSenderError(MerkledropError):
    code = 8
    description = "invalid sender"


class InvalidStartHeightError(MerkledropError):
    code = 9
    description = "invalid start height"


class InvalidEndHeightError(MerkledropError):
    code = 10
    description = "invalid end height"


class MerkledropNotBegunError(MerkledropError):
    code = 11
    description = "merkledrop not begun"


class MerkledropExpiredError(MerkledropError):
    code = 12
    description = "merkledrop expired"


class MerkledropNotExpiredError(MerkledropError):
    code = 13
    description = "merkledrop not expired"


class AlreadyWithdrawnError(MerkledropError):
    code = 14
    description = "funds have been already withdrawn"


class CreationFeeError(MerkledropError):
    code = 15
    description = "cannot deduct creation fee"


class DeleteMerkledropError(MerkledropError):
    code = 16
    description = "failed delete merkledrop"