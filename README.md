# merkledrop

Merkle-tree airdrops. You publish one Merkle root that covers a whole list of
recipients. Each recipient later claims their share with a short proof.

The package provides:

- **Distribution lists** (`merkledrop.distribution`). It turns a map of bech32
  addresses to amounts into a Merkle tree and the claim information for every
  account: its index, its amount and its proof.
- **Proof checking** (`merkledrop.proof.is_valid_proof`). It checks a claim
  against a root.
- **Ledger state** (`merkledrop.keeper.Keeper`, `merkledrop.msg_server.MsgServer`,
  `merkledrop.abci.end_blocker`). These run the life of an airdrop on an in-memory
  key/value store (`merkledrop.store.KVStore`):
  - creating a merkledrop takes a creation fee and locks the funds;
  - claims are checked and paid out;
  - unclaimed funds go back to the owner when the merkledrop expires.
- **A command line** (`merkledrop`). It builds create and claim messages and fee
  update proposals, and prints them as JSON.

## Installation

```
pip install .
```

Python 3.10 or later is required. The package has no runtime dependencies.

## Building a distribution list

The input maps each bech32 address (prefix `bitsong`) to an amount, given as a
decimal string:

```json
{
  "<address-1>": "1000000",
  "<address-2>": "2000000",
  "<address-3>": "3000000"
}
```

```python
from merkledrop.distribution import accounts_from_map, create_distribution_list, write_claim_file

accounts = accounts_from_map(mapping)          # ValueError on a bad address or amount
tree, claims, total = create_distribution_list(accounts)
print(tree.root().hex())                        # the merkle root
print(claims["<address-1>"].index, claims["<address-1>"].amount, claims["<address-1>"].proof)
write_claim_file("out-list.json", claims)
```

How the tree is built:

- Accounts are sorted by ascending amount. Their indexes follow that order.
- Each leaf is the SHA-256 of `"<index><address><amount>"`.
- When two hashes are combined, the smaller one comes first, so a proof needs
  no left/right flags.
- An odd last node is carried up to the next row unchanged.
- A proof is a list of hex sibling hashes. It does not contain the root.

`merkledrop.tree.MerkleTree` can also be used on its own. It has `root()`,
`height()`, `leafs()`, `leaf_index(leaf)` and `proof(leaf)`.

To check a claim:

```python
from merkledrop.proof import convert_proofs, is_valid_proof

ok = is_valid_proof(index, address, amount, bytes.fromhex(root_hex), convert_proofs(proof_hex_list))
```

## Command line

```
merkledrop create accounts.json out-list.json --denom ubtsg --start-height 1 --end-height 10 --from <owner-address>
merkledrop claim 1 --proofs <hex>,<hex> --amount 20000 --index 1 --from <sender-address>
merkledrop update-merkledrop-fees proposal.json --from <proposer-address>
```

What each command does:

- **`create`** writes the claim file (`out-list.json`). It then prints the
  create message as sorted JSON. The coin of that message is the total of the
  list in `--denom`.
- **`claim`** prints the claim message.
- **`update-merkledrop-fees`** reads a proposal file and prints the proposal
  with its deposit and proposer.

Every command needs `--from`, which must be a valid `bitsong` address. On any
error the command prints `Error: ...` to standard error and exits with status 1.

A proposal file looks like this:

```json
{
  "title": "Update Merkledrop Fees Proposal",
  "description": "update the current fees",
  "creation_fee": "1000000ubtsg",
  "deposit": "500000000ubtsg"
}
```

The same work is available from Python as `merkledrop.cli.build_create_msg`,
`build_claim_msg` and `load_update_fees_proposal`.

## Ledger state

```python
from merkledrop.keeper import Keeper
from merkledrop.msg_server import MsgServer
from merkledrop.store import KVStore
from merkledrop.abci import end_blocker

keeper = Keeper(KVStore(), bank_keeper, distr_keeper)
server = MsgServer(keeper)
created = server.create(msg_create, block_height=1)
server.claim(msg_claim, block_height=5)
end_blocker(keeper, block_height=100)
```

`bank_keeper` and `distr_keeper` are objects you supply. They must follow the
`merkledrop.keeper.BankKeeper` and `DistrKeeper` protocols. The keeper records
emitted events (`EventCreate`, `EventClaim`, `EventWithdraw`) in `keeper.events`.
`merkledrop.handler.handle_msg` and `handle_proposal` route messages and
`UpdateFeesProposal` content.

Rules:

- **Start height.** It must not be negative. If it is below the current block
  height, the merkledrop starts at the current height. The requested start
  height may be at most current height + 100 000.
- **End height.** It must be greater than both the requested start height and
  the current height. It may be at most the (raised) start height + 5 000 000.
- **Coin.** It must be valid and its amount positive. The merkle root must be
  valid hex.
- **Creation fee.** The fee (default `1000000000stake`, see
  `merkledrop.params.default_params`) is sent to the community pool through
  `distr_keeper` when it is positive.
- **Claim window.** A claim is accepted from the start height up to, but not
  including, the end height. Each index can be claimed once.
- **Fully claimed.** A merkledrop whose whole amount has been claimed is
  removed.
- **Expiry.** At the end height, `end_blocker` sends the unclaimed balance back
  to the owner and deletes the merkledrop. It returns the processed ids.
- **Genesis.** `merkledrop.genesis.export_genesis` and `init_genesis` save and
  restore the state. `merkledrop.models.validate_genesis` checks a state for
  consistency.

## Errors

Message handling and ledger failures raise subclasses of
`merkledrop.errors.MerkledropError`, for example `InvalidEndHeightError`,
`AlreadyClaimedError` and `InvalidMerkleProofsError`. Each subclass carries a
`codespace` and a `code`. Malformed coins, parameters, genesis states and
input files raise `ValueError`.

## What it does not do

- It holds no balances of its own. It relies on the bank and distribution
  objects you pass in.
- The store lives in memory only.
- The command line only builds and prints messages. It does not sign them,
  broadcast them or query a chain.