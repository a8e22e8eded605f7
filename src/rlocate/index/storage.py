"""SQLite path catalogue."""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List

from rlocate.models import BatchResult, PathEntry

LOGGER = logging.getLogger(__name__)

TABLE_NAME = "entries"


class StoreError(Exception):
    """Base class for catalogue storage failures."""


class StoreOpenError(StoreError):
    """The database or its parent directory cannot be opened or created."""


class SchemaError(StoreError):
    """The catalogue table cannot be checked or created."""


class TransactionError(StoreError):
    """A batch transaction failed to begin or commit."""


class StoreDeleteError(StoreError):
    """The database file cannot be removed."""


class SQLitePathStore:
    """Persistence layer for the path catalogue.

    The catalogue is append-only: rows are never updated or deleted one by
    one, and the only way to discard them is :meth:`reset`, which removes the
    database file. There is no unique constraint on ``path``, so appending
    the same crawl twice stores every path twice.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> SQLitePathStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection(create=True)

    def _connection(self, *, create: bool) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = self._open(create=create)
        return self._conn

    def _open(self, *, create: bool) -> sqlite3.Connection:
        # Readers open with mode=rw so a missing index is never created empty
        mode = "rwc" if create else "rw"
        uri = f"{Path(self.db_path).absolute().as_uri()}?mode={mode}"
        try:
            # Autocommit mode; transaction() issues BEGIN/COMMIT itself
            conn = sqlite3.connect(uri, uri=True, isolation_level=None)
        except sqlite3.Error as exc:
            raise StoreOpenError(f"Cannot open index {self.db_path}: {exc}") from exc

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
        except sqlite3.Error as exc:
            conn.close()
            raise StoreOpenError(f"Cannot open index {self.db_path}: {exc}") from exc
        return conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def ensure_parent_directory(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreOpenError(
                f"Cannot create index directory {self.db_path.parent}: {exc}"
            ) from exc

    def ensure_schema(self) -> None:
        """Create the catalogue table unless a table of that name exists."""
        conn = self.connection
        try:
            exists = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
                (TABLE_NAME,),
            ).fetchone()
            if exists is None:
                LOGGER.debug("Creating table %s in %s", TABLE_NAME, self.db_path)
                conn.execute(
                    f"""
                    CREATE TABLE {TABLE_NAME} (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        path TEXT NOT NULL,
                        basename TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise SchemaError(f"Cannot create schema in {self.db_path}: {exc}") from exc

    def initialize(self) -> None:
        self.ensure_parent_directory()
        self.ensure_schema()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self.connection
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as exc:
            raise TransactionError(f"Cannot begin transaction: {exc}") from exc

        try:
            yield conn
        except Exception:
            conn.rollback()
            raise

        try:
            conn.commit()
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.rollback()
            raise TransactionError(f"Cannot commit transaction: {exc}") from exc

    def append_batch(self, entries: Iterable[PathEntry]) -> BatchResult:
        """Insert all entries inside a single transaction.

        Rows that fail to insert are logged and skipped without aborting the
        batch. Failing to begin or commit, or a row error after which SQLite
        has rolled the transaction back, raises :class:`TransactionError`.
        """
        attempted = inserted = failed = 0
        with self.transaction() as conn:
            for entry in entries:
                attempted += 1
                try:
                    conn.execute(
                        f"INSERT INTO {TABLE_NAME}(path, basename) VALUES (?, ?)",
                        (entry.path, entry.basename),
                    )
                except (sqlite3.Error, UnicodeEncodeError) as exc:
                    if not conn.in_transaction:
                        # SQLite rolled the whole batch back; earlier rows are gone
                        raise TransactionError(
                            f"Transaction aborted by row failure on {entry.path!r}: {exc}"
                        ) from exc
                    LOGGER.warning("Failed to insert entry %r: %s", entry.path, exc)
                    failed += 1
                else:
                    inserted += 1

        LOGGER.debug("Committed %d of %d entries", inserted, attempted)
        return BatchResult(attempted=attempted, inserted=inserted, failed=failed)

    def iter_entries(self) -> Iterator[PathEntry]:
        conn = self._connection(create=False)
        try:
            cursor = conn.execute(
                f"SELECT path, basename FROM {TABLE_NAME} ORDER BY id"
            )
            for row in cursor:
                yield PathEntry(path=row["path"], basename=row["basename"])
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot read index {self.db_path}: {exc}") from exc

    def retrieve_all(self) -> List[PathEntry]:
        """Return the whole catalogue in insertion order."""
        return list(self.iter_entries())

    def count(self) -> int:
        try:
            conn = self._connection(create=False)
            row = conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot read index {self.db_path}: {exc}") from exc
        return int(row[0])

    def reset(self) -> None:
        """Discard the catalogue by removing the database file."""
        self.close()
        try:
            os.remove(self.db_path)
        except OSError as exc:
            raise StoreDeleteError(f"Cannot remove index {self.db_path}: {exc}") from exc

        for suffix in ("-wal", "-shm"):
            side_file = self.db_path.with_name(self.db_path.name + suffix)
            try:
                side_file.unlink(missing_ok=True)
            except OSError as exc:
                LOGGER.warning("Cannot remove %s: %s", side_file, exc)
