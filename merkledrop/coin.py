"""Coins: a denomination with an integer amount."""

from __future__ import annotations

import re
from dataclasses import dataclass

PRECISION = 18

_DENOM_PATTERN = r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}"
_DENOM_RE = re.compile(_DENOM_PATTERN)
_DEC_COIN_RE = re.compile(
    rf"([0-9]+(?:\.[0-9]+)?|\.[0-9]+)[ \t\n\r\f\v]*({_DENOM_PATTERN})"
)


def validate_denom(denom: str) -> None:
    """Raise ValueError if ``denom`` is not a valid coin denomination."""
    if not _DENOM_RE.fullmatch(denom):
        raise ValueError(f"invalid denom: {denom}")


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def validate(self) -> None:
        """Raise ValueError for an invalid denom or a negative amount."""
        validate_denom(self.denom)
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def parse_coin_normalized(text: str) -> Coin:
    """Parse ``"<amount><denom>"``, truncating any decimal part of the amount."""
    match = _DEC_COIN_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid decimal coin expression: {text}")
    amount, denom = match.groups()
    whole, _, fraction = amount.partition(".")
    if len(fraction) > PRECISION:
        raise ValueError(f"invalid precision; max: {PRECISION}, got: {len(fraction)}")
    validate_denom(denom)
    return Coin(denom, int(whole or "0"))