"""Conversion between Household objects and their persisted document shape."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from household_registry.domain.households import Household
from household_registry.exceptions import SnapshotDecodeError
from household_registry.repositories.interfaces import Snapshot

_household_adapter = TypeAdapter(Household)
_households_adapter = TypeAdapter(list[Household])


def household_to_dict(household: Household) -> dict[str, Any]:
    return _household_adapter.dump_python(household, mode="json")


def household_from_dict(data: dict[str, Any]) -> Household:
    return _household_adapter.validate_python(data)


def households_to_snapshot(households: Iterable[Household]) -> Snapshot:
    return [household_to_dict(h) for h in households]


def households_from_snapshot(snapshot: Snapshot, backend: str = "snapshot") -> list[Household]:
    """Decode a stored collection.

    Missing optional keys fall back to the dataclass defaults, so documents
    written without relationships or head details still load.

    Raises:
        SnapshotDecodeError: If the snapshot is not a list of household documents.
    """
    try:
        return _households_adapter.validate_python(snapshot)
    except PydanticValidationError as e:
        raise SnapshotDecodeError(
            backend, f"invalid household snapshot ({e.error_count()} errors)"
        ) from e
