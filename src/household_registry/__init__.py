from household_registry.domain import (
    Gender,
    GenderFilter,
    Household,
    Member,
    Relationship,
    SortDirection,
    SortKey,
)
from household_registry.services import (
    HouseholdRegistryService,
    RecordStore,
    RegistryStats,
    aggregate,
    export_csv,
    query,
)

__all__ = [
    "Gender",
    "GenderFilter",
    "Household",
    "HouseholdRegistryService",
    "Member",
    "RecordStore",
    "RegistryStats",
    "Relationship",
    "SortDirection",
    "SortKey",
    "aggregate",
    "export_csv",
    "query",
]

__version__ = "0.1.0"
