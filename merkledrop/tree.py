"""Merkle tree over SHA-256 hashed leaves with sorted-pair hashing."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def _hash_pair(a: bytes, b: bytes) -> bytes:
    # Smaller node first, so proofs need no left/right flags.
    first, second = (a, b) if a < b else (b, a)
    return hashlib.sha256(first + second).digest()


class MerkleTree:
    """A merkle tree whose rows run from the hashed leaves up to the root."""

    def __init__(self, leafs: Iterable[bytes]) -> None:
        row = [hashlib.sha256(bytes(leaf)).digest() for leaf in leafs]
        if not row:
            raise ValueError("a merkle tree needs at least one leaf")
        self._rows: list[list[bytes]] = [row]
        while len(row) > 1:
            parent = [_hash_pair(a, b) for a, b in zip(row[0::2], row[1::2])]
            if len(row) % 2:
                # An odd last node is carried up unchanged.
                parent.append(row[-1])
            self._rows.append(parent)
            row = parent

    def root(self) -> bytes:
        """The merkle root."""
        return self._rows[-1][0]

    def height(self) -> int:
        """The number of rows, leaves and root included."""
        return len(self._rows)

    def leafs(self) -> list[bytes]:
        """The hashes of the original leaves, in input order."""
        return list(self._rows[0])

    def leaf_index(self, leaf: bytes) -> int:
        """Position of a hashed leaf, or -1 when it is not in the tree."""
        return next((i for i, item in enumerate(self._rows[0]) if item == leaf), -1)

    def proof(self, leaf: bytes) -> list[bytes]:
        """Sibling hashes from a hashed leaf up to the root, root last.

        Returns an empty list when the leaf is not in the tree.
        """
        index = self.leaf_index(leaf)
        if index < 0:
            return []
        out: list[bytes] = []
        for row in self._rows[:-1]:
            if index % 2 == 0:
                if index < len(row) - 1:
                    out.append(row[index + 1])
            else:
                out.append(row[index - 1])
            index //= 2
        out.append(self.root())
        return out