from abc import ABC, abstractmethod
from typing import Any

Snapshot = list[dict[str, Any]]


class SnapshotStore(ABC):
    """Durable collaborator holding the serialized household collection.

    Implementations raise PersistenceError (or a subclass) for any backend
    failure so callers only need to handle one exception family.
    """

    backend_name: str = "snapshot"

    @abstractmethod
    def read_snapshot(self) -> Snapshot | None:
        """Return the last written collection, or None if nothing was stored."""

    @abstractmethod
    def write_snapshot(self, records: Snapshot) -> None:
        pass

    def close(self) -> None:
        pass
