"""An ordered in-memory key/value store with prefix iteration."""

from __future__ import annotations

from collections.abc import Iterator


class KVStore:
    """Byte-keyed store whose prefix iteration runs in ascending key order."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        """The value under ``key``, or None when it is absent."""
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``; keys must be non-empty, values not None."""
        if not key:
            raise ValueError("key is empty")
        if value is None:
            raise ValueError("value is nil")
        self._data[bytes(key)] = bytes(value)

    def has(self, key: bytes) -> bool:
        return bytes(key) in self._data

    def delete(self, key: bytes) -> None:
        """Remove ``key``; removing an absent key does nothing."""
        self._data.pop(bytes(key), None)

    def iterate_prefix(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs whose key starts with ``prefix``, in key order.

        The pairs are taken from a snapshot, so the store may be changed while
        iterating.
        """
        prefix = bytes(prefix)
        snapshot = sorted(
            (key, value) for key, value in self._data.items() if key.startswith(prefix)
        )
        yield from snapshot

    def __len__(self) -> int:
        return len(self._data)