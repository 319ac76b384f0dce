"""Local key-value snapshot storage backed by a JSON file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from household_registry.exceptions import PersistenceError, SnapshotDecodeError
from household_registry.repositories.interfaces import Snapshot, SnapshotStore


class JsonFileSnapshotStore(SnapshotStore):
    """Stores the household collection under one key of a JSON object file.

    Other keys in the file are left untouched, so several stores can share a
    file the way browser local storage shares an origin.
    """

    backend_name = "json"

    def __init__(self, path: str | Path, key: str = "households") -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def read_snapshot(self) -> Snapshot | None:
        data = self._read_all()
        if self._key not in data:
            return None
        value = data[self._key]
        if not isinstance(value, list):
            raise SnapshotDecodeError(
                self.backend_name, f"key {self._key!r} does not hold a list"
            )
        return value

    def write_snapshot(self, records: Snapshot) -> None:
        try:
            data = self._read_all()
        except SnapshotDecodeError:
            # an unreadable file is replaced by the current in-memory state
            data = {}
        data[self._key] = records
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise PersistenceError(self.backend_name, str(e)) from e

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotDecodeError(self.backend_name, f"invalid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise SnapshotDecodeError(
                self.backend_name, f"file is not UTF-8: {e}"
            ) from e
        except OSError as e:
            raise PersistenceError(self.backend_name, str(e)) from e
        if not isinstance(data, dict):
            raise SnapshotDecodeError(self.backend_name, "file does not hold a JSON object")
        return data
