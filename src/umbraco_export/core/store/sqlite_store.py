"""Read-only record store backed by a SQLite file."""

import sqlite3
from collections.abc import Iterator
from pathlib import Path

from umbraco_export.config import RECORDS_TABLE
from umbraco_export.errors import RecordStoreError


class SqliteRecordStore:
    """Serialized node kits keyed by node ID in a ``records`` table.

    The file is opened read-only; the store never writes. Use as a context
    manager so the handle is released once ingestion is done.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            self._conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as exc:
            msg = f"Cannot open {path} as a record store: {exc}"
            raise RecordStoreError(msg) from exc
        try:
            self._conn.execute(f"SELECT key, value FROM {RECORDS_TABLE} LIMIT 1").fetchall()
        except sqlite3.Error as exc:
            self._conn.close()
            msg = f"Cannot open {path} as a record store: {exc}"
            raise RecordStoreError(msg) from exc

    def keys(self) -> Iterator[int]:
        rows = self._conn.execute(f"SELECT key FROM {RECORDS_TABLE} ORDER BY key").fetchall()
        for (key,) in rows:
            yield key

    def get(self, key: int) -> bytes:
        row = self._conn.execute(
            f"SELECT value FROM {RECORDS_TABLE} WHERE key = ?",
            (key,),
        ).fetchone()
        if row is None:
            raise KeyError(key)
        return bytes(row[0])

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "SqliteRecordStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
