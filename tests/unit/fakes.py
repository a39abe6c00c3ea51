"""Fake implementations for testing the parser."""

from collections.abc import Iterator
from pathlib import Path


class FakeRecordStore:
    """In-memory fake for SqliteRecordStore.

    Holds serialized records by key and records whether it was closed.
    """

    def __init__(self, records: dict[int, bytes]) -> None:
        self.records = dict(records)
        self.closed = False
        self.opened_paths: list[Path] = []

    def __call__(self, path: Path) -> "FakeRecordStore":
        """Act as the store factory handed to ContentParser."""
        self.opened_paths.append(path)
        return self

    def keys(self) -> Iterator[int]:
        yield from sorted(self.records)

    def get(self, key: int) -> bytes:
        return self.records[key]

    def close(self) -> None:
        self.closed = True
