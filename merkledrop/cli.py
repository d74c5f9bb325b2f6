"""Command line for preparing merkledrop transactions and proposals."""

from __future__ import annotations

import argparse
import json
import re
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from merkledrop.address import acc_address_from_bech32
from merkledrop.coin import Coin, parse_coin_normalized
from merkledrop.distribution import (
    FLAG_AMOUNT,
    FLAG_DENOM,
    FLAG_END_HEIGHT,
    FLAG_INDEX,
    FLAG_PROOFS,
    FLAG_START_HEIGHT,
    accounts_from_map,
    create_distribution_list,
    write_claim_file,
)
from merkledrop.errors import MerkledropError
from merkledrop.gov import UpdateFeesProposal
from merkledrop.msgs import MsgClaim, MsgCreate

_UINT64_MAX = (1 << 64) - 1
_UINT_RE = re.compile(r"[0-9]+")
_PROPOSAL_FIELDS = frozenset({"title", "description", "creation_fee", "deposit"})


def _parse_uint64(value: int | str) -> int:
    if isinstance(value, str):
        if not _UINT_RE.fullmatch(value):
            raise ValueError(f"invalid syntax: {value!r}")
        value = int(value)
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"value out of range: {value}")
    return value


def _read_account_list(path: str | Path) -> dict[str, str]:
    data = Path(path).read_bytes()
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Could not unmarshal json: {exc}") from exc
    if not isinstance(parsed, dict) or not all(
        isinstance(value, str) for value in parsed.values()
    ):
        raise ValueError("Could not unmarshal json: expected an object of strings")
    return parsed


def _parse_coins_normalized(text: str) -> list[Coin]:
    text = text.strip()
    if not text:
        return []
    coins = [parse_coin_normalized(part) for part in text.split(",")]
    seen: set[str] = set()
    for coin in coins:
        if coin.denom in seen:
            raise ValueError(f"duplicate denomination {coin.denom}")
        seen.add(coin.denom)
    return sorted((coin for coin in coins if coin.amount), key=lambda coin: coin.denom)


def build_create_msg(
    accounts_path: str | Path,
    out_path: str | Path,
    owner: str | bytes,
    denom: str,
    start_height: int = 0,
    end_height: int = 0,
) -> MsgCreate:
    """Build a create message from an account list file.

    The claim information for every recipient is written to ``out_path``.
    """
    mapping = _read_account_list(accounts_path)
    try:
        accounts = accounts_from_map(mapping)
    except ValueError as exc:
        raise ValueError("Could not get accounts from map") from exc
    try:
        tree, claims, total = create_distribution_list(accounts)
    except ValueError as exc:
        raise ValueError(f"Could not create distribution list: {exc}") from exc
    try:
        write_claim_file(out_path, claims)
    except OSError as exc:
        raise OSError(f"Could not create file: {exc}") from exc

    coin = parse_coin_normalized(f"{total}{denom}")
    msg = MsgCreate(owner, tree.root().hex(), start_height, end_height, coin)
    msg.validate_basic()
    return msg


def build_claim_msg(
    merkledrop_id: int | str,
    proofs: str | Iterable[str],
    amount: int,
    index: int,
    sender: str | bytes,
) -> MsgClaim:
    """Build a claim message; ``proofs`` may be a comma separated string."""
    md_id = _parse_uint64(merkledrop_id)
    if isinstance(proofs, str):
        proof_list = proofs.split(",") if proofs else []
    else:
        proof_list = list(proofs)
    msg = MsgClaim(
        index=_parse_uint64(index),
        merkledrop_id=md_id,
        amount=amount,
        proofs=proof_list,
        sender=sender,
    )
    msg.validate_basic()
    return msg


def load_update_fees_proposal(path: str | Path) -> tuple[UpdateFeesProposal, list[Coin]]:
    """Read a fee update proposal file; returns the proposal and its deposit."""
    try:
        data = json.loads(Path(path).read_bytes())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid proposal file: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("invalid proposal file: expected an object")
    unknown = set(data) - _PROPOSAL_FIELDS
    if unknown:
        raise ValueError(f"unknown field(s) in proposal: {', '.join(sorted(unknown))}")
    fields = {name: data.get(name, "") for name in _PROPOSAL_FIELDS}
    if not all(isinstance(value, str) for value in fields.values()):
        raise ValueError("invalid proposal file: every field must be a string")

    creation_fee = parse_coin_normalized(fields["creation_fee"])
    deposit = _parse_coins_normalized(fields["deposit"])
    proposal = UpdateFeesProposal(
        title=fields["title"],
        description=fields["description"],
        creation_fee=creation_fee,
    )
    proposal.validate_basic()
    return proposal, deposit


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="merkledrop", description="merkledrop transaction subcommands"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a merkledrop from json file")
    create.add_argument("file_json", help="input account list")
    create.add_argument("out_list_json", help="output list with proofs")
    create.add_argument(f"--{FLAG_DENOM}", dest="denom", default="")
    create.add_argument(f"--{FLAG_START_HEIGHT}", dest="start_height", type=int, default=0)
    create.add_argument(f"--{FLAG_END_HEIGHT}", dest="end_height", type=int, default=0)
    create.add_argument("--from", dest="sender", required=True)

    claim = commands.add_parser("claim", help="Claim a merkledrop from provided params")
    claim.add_argument("id", help="merkledrop id")
    claim.add_argument(f"--{FLAG_PROOFS}", dest="proofs", default="")
    claim.add_argument(f"--{FLAG_AMOUNT}", dest="amount", type=int, default=0)
    claim.add_argument(f"--{FLAG_INDEX}", dest="index", type=int, default=0)
    claim.add_argument("--from", dest="sender", required=True)

    fees = commands.add_parser(
        "update-merkledrop-fees", help="Submit an update merkledrop fees proposal."
    )
    fees.add_argument("proposal_file")
    fees.add_argument("--from", dest="sender", required=True)
    return parser


def _run(args: argparse.Namespace) -> str:
    acc_address_from_bech32(args.sender)
    if args.command == "create":
        msg = build_create_msg(
            args.file_json,
            args.out_list_json,
            args.sender,
            args.denom,
            args.start_height,
            args.end_height,
        )
        return msg.sign_bytes().decode()
    if args.command == "claim":
        msg = build_claim_msg(args.id, args.proofs, args.amount, args.index, args.sender)
        return msg.sign_bytes().decode()
    proposal, deposit = load_update_fees_proposal(args.proposal_file)
    document = {
        "title": proposal.title,
        "description": proposal.description,
        "creation_fee": str(proposal.creation_fee),
        "deposit": [str(coin) for coin in deposit],
        "proposer": args.sender,
    }
    return json.dumps(document, sort_keys=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Print the message a command builds; returns the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        output = _run(args)
    except (MerkledropError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())