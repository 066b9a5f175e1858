"""SQLite-backed ordered key-value store with named buckets.

Each bucket is an ordered mapping of BLOB keys to BLOB values plus an
append-only sequence counter. The connection runs in EXCLUSIVE locking mode
so the process that opened the file keeps it locked until close(); a second
opener waits at most `timeout` seconds and then fails with StoreLockedError.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

from application.ports import BucketStore, BucketTransaction
from core import StorageError, StoreLockedError

logger = logging.getLogger("fate.store")

DEFAULT_BUCKET = "Tasks"
DEFAULT_LOCK_TIMEOUT = 0.2

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS buckets (
        name TEXT PRIMARY KEY,
        sequence INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS entries (
        bucket TEXT NOT NULL,
        key BLOB NOT NULL,
        value BLOB NOT NULL,
        PRIMARY KEY (bucket, key)
    ) WITHOUT ROWID
    """,
)


def _is_lock_error(exc: sqlite3.Error) -> bool:
    message = str(exc).lower()
    return "locked" in message or "busy" in message


class SqliteTransaction(BucketTransaction):
    def __init__(self, conn: sqlite3.Connection, bucket: str, writable: bool):
        self._conn = conn
        self._bucket = bucket
        self.writable = writable

    def _require_writable(self) -> None:
        if not self.writable:
            raise StorageError("transaction is read-only")

    def next_sequence(self) -> int:
        """Advance and return the bucket sequence (first value is 1)."""
        self._require_writable()
        self._conn.execute("UPDATE buckets SET sequence = sequence + 1 WHERE name = ?", (self._bucket,))
        row = self._conn.execute("SELECT sequence FROM buckets WHERE name = ?", (self._bucket,)).fetchone()
        if row is None:
            raise StorageError(f"bucket not found: {self._bucket}")
        return int(row[0])

    def get(self, key: bytes) -> Optional[bytes]:
        row = self._conn.execute(
            "SELECT value FROM entries WHERE bucket = ? AND key = ?", (self._bucket, key)
        ).fetchone()
        return bytes(row[0]) if row else None

    def put(self, key: bytes, value: bytes) -> None:
        self._require_writable()
        self._conn.execute(
            "INSERT OR REPLACE INTO entries (bucket, key, value) VALUES (?, ?, ?)",
            (self._bucket, key, value),
        )

    def delete(self, key: bytes) -> None:
        self._require_writable()
        self._conn.execute("DELETE FROM entries WHERE bucket = ? AND key = ?", (self._bucket, key))

    def scan(self) -> Iterator[Tuple[bytes, bytes]]:
        """Yield (key, value) pairs in ascending byte order of key."""
        cursor = self._conn.execute(
            "SELECT key, value FROM entries WHERE bucket = ? ORDER BY key", (self._bucket,)
        )
        for key, value in cursor:
            yield bytes(key), bytes(value)


class SqliteBucketStore(BucketStore):
    def __init__(self, conn: sqlite3.Connection, path: Path, bucket: str = DEFAULT_BUCKET):
        self._conn: Optional[sqlite3.Connection] = conn
        self.path = path
        self.bucket = bucket

    @classmethod
    def open(
        cls,
        path: Path | str,
        bucket: str = DEFAULT_BUCKET,
        timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> "SqliteBucketStore":
        """Open (or create) the store and take the exclusive process lock."""
        db_path = Path(path)
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(db_path), timeout=timeout, isolation_level=None)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"cannot open {db_path}: {exc}") from exc

        try:
            conn.execute("PRAGMA locking_mode=EXCLUSIVE")
            conn.execute("BEGIN EXCLUSIVE")
            for statement in _SCHEMA:
                conn.execute(statement)
            conn.execute("INSERT OR IGNORE INTO buckets (name, sequence) VALUES (?, 0)", (bucket,))
            # A real write so the exclusive lock is held from here on.
            conn.execute("UPDATE buckets SET sequence = sequence WHERE name = ?", (bucket,))
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            conn.close()
            if _is_lock_error(exc):
                logger.warning("store %s is locked by another process", db_path)
                raise StoreLockedError(str(db_path)) from exc
            raise StorageError(f"cannot initialise {db_path}: {exc}") from exc

        logger.info("store opened path=%s bucket=%s", db_path, bucket)
        return cls(conn, db_path, bucket)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("store is closed")
        return self._conn

    @contextmanager
    def transaction(self, write: bool = False) -> Iterator[SqliteTransaction]:
        """Run the block atomically; any exception rolls the whole block back."""
        conn = self._require_conn()
        try:
            conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
        except sqlite3.Error as exc:
            raise StorageError(f"cannot begin transaction: {exc}") from exc
        try:
            yield SqliteTransaction(conn, self.bucket, writable=write)
        except sqlite3.Error as exc:
            conn.execute("ROLLBACK")
            raise StorageError(str(exc)) from exc
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise StorageError(f"commit failed: {exc}") from exc

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.info("store closed path=%s", self.path)


__all__ = ["SqliteBucketStore", "SqliteTransaction", "DEFAULT_BUCKET", "DEFAULT_LOCK_TIMEOUT"]
