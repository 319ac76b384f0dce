from __future__ import annotations

import copy

from household_registry.repositories.interfaces import Snapshot, SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """Snapshot store that lives only as long as the process."""

    backend_name = "memory"

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._snapshot = copy.deepcopy(snapshot) if snapshot is not None else None
        self.write_count = 0

    def read_snapshot(self) -> Snapshot | None:
        if self._snapshot is None:
            return None
        return copy.deepcopy(self._snapshot)

    def write_snapshot(self, records: Snapshot) -> None:
        self._snapshot = copy.deepcopy(records)
        self.write_count += 1
