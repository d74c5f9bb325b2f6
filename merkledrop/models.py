"""Merkledrop records and the module's genesis state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from merkledrop.params import Params, default_params


@dataclass
class Merkledrop:
    id: int
    merkle_root: str
    start_height: int
    end_height: int
    denom: str
    amount: int
    owner: str
    claimed: int = 0

    def to_dict(self) -> dict[str, str]:
        """JSON-ready mapping; integers are written as decimal strings."""
        return {
            "id": str(self.id),
            "merkle_root": self.merkle_root,
            "start_height": str(self.start_height),
            "end_height": str(self.end_height),
            "denom": self.denom,
            "amount": str(self.amount),
            "claimed": str(self.claimed),
            "owner": self.owner,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Merkledrop:
        """Build a merkledrop from a mapping as produced by ``to_dict``."""
        return cls(
            id=int(data["id"]),
            merkle_root=str(data.get("merkle_root", "")),
            start_height=int(data.get("start_height", 0)),
            end_height=int(data.get("end_height", 0)),
            denom=str(data.get("denom", "")),
            amount=int(data.get("amount", 0)),
            owner=str(data.get("owner", "")),
            claimed=int(data.get("claimed", 0)),
        )

    def __str__(self) -> str:
        return "".join(f"{key}: {value}\n" for key, value in self.to_dict().items())


@dataclass
class Indexes:
    merkledrop_id: int
    index: list[int] = field(default_factory=list)


@dataclass
class GenesisState:
    last_merkledrop_id: int = 0
    merkledrops: list[Merkledrop] = field(default_factory=list)
    indexes: list[Indexes] = field(default_factory=list)
    params: Params = field(default_factory=default_params)


def validate_genesis(state: GenesisState) -> None:
    """Raise ValueError if the genesis state is inconsistent."""
    for merkledrop in state.merkledrops:
        if merkledrop.id > state.last_merkledrop_id:
            raise ValueError(f"invalid merlkedrop id: {merkledrop.id}")
    for record in state.indexes:
        if record.merkledrop_id > state.last_merkledrop_id:
            raise ValueError(f"invalid index merkledrop_id: {record.merkledrop_id}")
    state.params.validate()