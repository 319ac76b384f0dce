"""Registry service: the seam between the display layer and the core.

The display layer holds one HouseholdRegistryService. It sends intents
(new/edit/save/delete households, search, filter, sort, export) and reads
back the visible list and statistics, both recomputed from the record
store on every call.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any
from uuid import UUID

from household_registry.domain.households import Household
from household_registry.domain.value_objects import GenderFilter, SortKey
from household_registry.exceptions import (
    HouseholdNotFoundError,
    MissingRequiredFieldError,
)
from household_registry.logging_config import LogContext, get_logger
from household_registry.services.aggregation import RegistryStats, aggregate
from household_registry.services.csv_export import (
    CsvDownload,
    CsvExporter,
    DownloadSink,
)
from household_registry.services.query import QueryCriteria, SortConfig, run_query
from household_registry.services.record_store import RecordStore

logger = get_logger(__name__)

REQUIRED_FIELDS = {
    "head_name": "head of household name",
    "apartment_number": "apartment number",
}


def validate_household(household: Household) -> None:
    """Presence checks applied before a household reaches the store.

    Raises:
        MissingRequiredFieldError: If the head name or apartment number is blank.
    """
    missing = [
        label
        for attribute, label in REQUIRED_FIELDS.items()
        if not (getattr(household, attribute) or "").strip()
    ]
    if missing:
        raise MissingRequiredFieldError(missing)


class HouseholdRegistryService:
    def __init__(
        self,
        store: RecordStore,
        exporter: CsvExporter | None = None,
        download_sink: DownloadSink | None = None,
    ) -> None:
        self._store = store
        self._exporter = exporter or CsvExporter()
        self._download_sink = download_sink
        self._criteria = QueryCriteria()

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def criteria(self) -> QueryCriteria:
        return self._criteria

    # -- editing -------------------------------------------------------------

    def new_household(self) -> Household:
        """Blank draft with a fresh id; the ordinal is assigned on save."""
        return Household()

    def edit_household(self, household_id: UUID) -> Household:
        """Independent copy of a stored household to mutate before saving.

        Discarding the draft leaves the store untouched.

        Raises:
            HouseholdNotFoundError: If no household has the id.
        """
        household = self._store.get(household_id)
        if household is None:
            raise HouseholdNotFoundError(household_id)
        return household

    def save_household(self, draft: Household) -> Household | None:
        """Validate and commit a draft.

        Drafts whose id is already stored replace that household as a whole,
        members included; other drafts are created with the next ordinal.
        Returns the stored household, or None if it vanished between the
        existence check and the update.
        """
        try:
            validate_household(draft)
        except MissingRequiredFieldError as e:
            logger.warning(
                "household_rejected", household_id=str(draft.id), fields=e.fields
            )
            raise
        if draft.id in self._store:
            if not self._store.update(draft.id, draft):
                return None
            return self._store.get(draft.id)
        return self._store.create(draft)

    def delete_household(self, household_id: UUID) -> bool:
        return self._store.delete(household_id)

    def list_households(self) -> list[Household]:
        return self._store.read_all()

    # -- view configuration ---------------------------------------------------

    def set_search_term(self, search_term: str) -> None:
        self._criteria = replace(self._criteria, search_term=search_term)

    def set_gender_filter(self, gender_filter: GenderFilter | str) -> None:
        self._criteria = replace(
            self._criteria, gender_filter=GenderFilter(gender_filter)
        )

    def sort_by(self, key: SortKey | str) -> SortConfig:
        sort = self._criteria.sort.toggled(SortKey(key))
        self._criteria = replace(self._criteria, sort=sort)
        return sort

    def clear_filters(self) -> None:
        self._criteria = QueryCriteria(sort=self._criteria.sort)

    @property
    def has_active_filters(self) -> bool:
        return self._criteria.has_active_filters

    # -- read models ----------------------------------------------------------

    def visible_households(self) -> list[Household]:
        return run_query(self._store.read_all(), self._criteria)

    def stats(self) -> RegistryStats:
        return aggregate(self._store.read_all())

    def build_export(self) -> CsvDownload:
        return self._exporter.build(self.visible_households())

    def export_csv(self, sink: DownloadSink | None = None) -> Any:
        """Export the visible households through the download side channel.

        Raises:
            ValueError: If no sink was given here or at construction.
        """
        target = sink or self._download_sink
        if target is None:
            raise ValueError("No download sink configured for CSV export")
        with LogContext(
            search_term=self._criteria.search_term,
            sort_key=self._criteria.sort.key.value,
        ):
            return self._exporter.export(self.visible_households(), target)
