from household_registry.domain.households import Household, Member
from household_registry.domain.value_objects import (
    Gender,
    GenderFilter,
    Relationship,
    SortDirection,
    SortKey,
)

__all__ = [
    "Gender",
    "GenderFilter",
    "Household",
    "Member",
    "Relationship",
    "SortDirection",
    "SortKey",
]
