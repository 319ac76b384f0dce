"""Authoritative in-memory household collection mirrored to a snapshot store."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from household_registry.domain.households import Household
from household_registry.exceptions import DuplicateHouseholdError, PersistenceError
from household_registry.logging_config import get_logger
from household_registry.repositories.interfaces import SnapshotStore
from household_registry.repositories.serialization import (
    households_from_snapshot,
    households_to_snapshot,
)

logger = get_logger(__name__)


class RecordStore:
    """Holds households keyed by id in insertion order.

    Every mutation writes a full snapshot to the durable collaborator. A
    failed write is logged and swallowed: the in-memory collection stays
    authoritative for the session and the next successful write catches the
    durable copy up.

    Records handed in and out are copies, so the only way to change a stored
    household is ``update``.
    """

    def __init__(self, snapshot_store: SnapshotStore) -> None:
        self._snapshot_store = snapshot_store
        self._records: dict[UUID, Household] = {}

    def load(self, initial: Iterable[Household] | None = None) -> list[Household]:
        """Rehydrate from the durable collaborator.

        When nothing has been stored yet, ``initial`` (if given) becomes the
        collection and is persisted. When the stored snapshot cannot be read
        the store starts from ``initial`` or empty and leaves the durable
        copy alone until the next mutation.
        """
        backend = self._snapshot_store.backend_name
        try:
            snapshot = self._snapshot_store.read_snapshot()
            loaded = (
                households_from_snapshot(snapshot, backend)
                if snapshot is not None
                else None
            )
        except PersistenceError as e:
            logger.error(
                "snapshot_read_failed",
                backend=backend,
                error=str(e),
                error_code=e.error_code,
            )
            self._replace_all(initial or [])
            return self.read_all()

        if loaded is None:
            self._replace_all(initial or [])
            if initial is not None:
                self._persist()
            logger.info(
                "snapshot_not_found",
                backend=backend,
                seeded=len(self._records),
            )
        else:
            self._replace_all(loaded)
            logger.info("snapshot_loaded", backend=backend, households=len(loaded))
        return self.read_all()

    def create(self, candidate: Household) -> Household:
        """Store a new household and assign its ordinal.

        The ordinal is one more than the largest ordinal currently stored
        (1 for an empty collection); any ordinal on the candidate is ignored.

        Raises:
            DuplicateHouseholdError: If a household with the same id exists.
        """
        if candidate.id in self._records:
            raise DuplicateHouseholdError(candidate.id)

        household = candidate.copy()
        household.ordinal = self.next_ordinal()
        self._records[household.id] = household
        logger.info(
            "household_created",
            household_id=str(household.id),
            ordinal=household.ordinal,
        )
        self._persist()
        return household.copy()

    def update(self, household_id: UUID, new_record: Household) -> bool:
        """Replace the stored household in place.

        Returns False, without creating anything, when no household has the
        id. The stored ordinal is kept unless ``new_record`` carries one.
        """
        existing = self._records.get(household_id)
        if existing is None:
            logger.warning(
                "household_not_found",
                household_id=str(household_id),
                action="update",
            )
            return False

        replacement = new_record.copy()
        replacement.id = household_id
        if replacement.ordinal is None:
            replacement.ordinal = existing.ordinal
        self._records[household_id] = replacement
        logger.info(
            "household_updated",
            household_id=str(household_id),
            members=len(replacement.members),
        )
        self._persist()
        return True

    def delete(self, household_id: UUID) -> bool:
        if self._records.pop(household_id, None) is None:
            logger.warning(
                "household_not_found",
                household_id=str(household_id),
                action="delete",
            )
            return False
        logger.info("household_deleted", household_id=str(household_id))
        self._persist()
        return True

    def get(self, household_id: UUID) -> Household | None:
        household = self._records.get(household_id)
        return household.copy() if household is not None else None

    def read_all(self) -> list[Household]:
        return [household.copy() for household in self._records.values()]

    def next_ordinal(self) -> int:
        ordinals = [h.ordinal for h in self._records.values() if h.ordinal is not None]
        return max(ordinals, default=0) + 1

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, household_id: object) -> bool:
        return household_id in self._records

    def _replace_all(self, households: Iterable[Household]) -> None:
        self._records = {h.id: h.copy() for h in households}

    def _persist(self) -> None:
        backend = self._snapshot_store.backend_name
        try:
            self._snapshot_store.write_snapshot(
                households_to_snapshot(self._records.values())
            )
        except PersistenceError as e:
            logger.error(
                "snapshot_write_failed",
                backend=backend,
                error=str(e),
                error_code=e.error_code,
                households=len(self._records),
            )
