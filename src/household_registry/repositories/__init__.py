from household_registry.repositories.interfaces import Snapshot, SnapshotStore
from household_registry.repositories.json_file import JsonFileSnapshotStore
from household_registry.repositories.memory import InMemorySnapshotStore
from household_registry.repositories.remote import RemoteDocumentStore
from household_registry.repositories.serialization import (
    household_from_dict,
    household_to_dict,
    households_from_snapshot,
    households_to_snapshot,
)
from household_registry.repositories.sqlite import SQLiteDatabase, SQLiteSnapshotStore

__all__ = [
    "InMemorySnapshotStore",
    "JsonFileSnapshotStore",
    "RemoteDocumentStore",
    "SQLiteDatabase",
    "SQLiteSnapshotStore",
    "Snapshot",
    "SnapshotStore",
    "household_from_dict",
    "household_to_dict",
    "households_from_snapshot",
    "households_to_snapshot",
]
