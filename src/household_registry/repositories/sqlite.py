"""SQLite document storage for household snapshots."""

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from household_registry.exceptions import PersistenceError, SnapshotDecodeError
from household_registry.repositories.interfaces import Snapshot, SnapshotStore


class SQLiteDatabase:
    """SQLite database connection manager."""

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self._path, check_same_thread=self._check_same_thread
            )
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Create the document tables."""
        conn = self.get_connection()
        conn.executescript(
            """
            -- One JSON document per household, keyed by household id
            CREATE TABLE IF NOT EXISTS households (
                id TEXT PRIMARY KEY,
                position INTEGER NOT NULL,
                body TEXT NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_households_position ON households(position);

            -- Records that a snapshot was written, so an empty table is
            -- distinguishable from a database that was never written
            CREATE TABLE IF NOT EXISTS snapshot_meta (
                name TEXT PRIMARY KEY,
                household_count INTEGER NOT NULL,
                written_at TEXT NOT NULL
            );
            """
        )
        conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class SQLiteSnapshotStore(SnapshotStore):
    backend_name = "sqlite"

    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    def read_snapshot(self) -> Snapshot | None:
        try:
            conn = self._db.get_connection()
            meta = conn.execute(
                "SELECT * FROM snapshot_meta WHERE name = ?", ("households",)
            ).fetchone()
            if meta is None:
                return None
            rows = conn.execute(
                "SELECT id, body FROM households ORDER BY position"
            ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(self.backend_name, str(e)) from e
        return [self._row_to_document(row) for row in rows]

    def write_snapshot(self, records: Snapshot) -> None:
        try:
            conn = self._db.get_connection()
            with conn:
                conn.execute("DELETE FROM households")
                conn.executemany(
                    "INSERT INTO households (id, position, body) VALUES (?, ?, ?)",
                    [
                        (
                            str(record["id"]),
                            position,
                            json.dumps(record, ensure_ascii=False),
                        )
                        for position, record in enumerate(records)
                    ],
                )
                conn.execute(
                    """
                    INSERT INTO snapshot_meta (name, household_count, written_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(name) DO UPDATE SET
                        household_count = excluded.household_count,
                        written_at = excluded.written_at
                    """,
                    ("households", len(records), datetime.now(UTC).isoformat()),
                )
        except sqlite3.Error as e:
            raise PersistenceError(self.backend_name, str(e)) from e

    def close(self) -> None:
        self._db.close()

    def _row_to_document(self, row: sqlite3.Row) -> dict:
        try:
            document = json.loads(row["body"])
        except json.JSONDecodeError as e:
            raise SnapshotDecodeError(
                self.backend_name, f"household {row['id']} has an invalid body"
            ) from e
        if not isinstance(document, dict):
            raise SnapshotDecodeError(
                self.backend_name, f"household {row['id']} body is not an object"
            )
        document["id"] = row["id"]
        return document
