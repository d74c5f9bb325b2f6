"""Module parameters of the merkledrop module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from merkledrop.coin import Coin

DEFAULT_BOND_DENOM = "stake"
DEFAULT_CREATION_FEE_AMOUNT = 1_000_000_000

KEY_CREATION_FEE = b"CreationFee"


def validate_creation_fee(value: Any) -> None:
    """Raise ValueError unless ``value`` is a valid coin."""
    if not isinstance(value, Coin):
        raise ValueError(f"invalid parameter type: {type(value).__name__}")
    try:
        value.validate()
    except ValueError:
        raise ValueError(f"invalid creation fee: {value!r}") from None


@dataclass
class Params:
    creation_fee: Coin

    def validate(self) -> None:
        """Raise ValueError if any parameter is invalid."""
        validate_creation_fee(self.creation_fee)

    def __str__(self) -> str:
        return (
            "creation_fee:\n"
            f"  denom: {self.creation_fee.denom}\n"
            f'  amount: "{self.creation_fee.amount}"\n'
        )


def default_params() -> Params:
    """The parameters a new chain starts with."""
    return Params(creation_fee=Coin(DEFAULT_BOND_DENOM, DEFAULT_CREATION_FEE_AMOUNT))