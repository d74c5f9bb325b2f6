"""Merkle-tree airdrops: distribution lists, proofs, claim handling and a command line."""

__version__ = "0.1.0"