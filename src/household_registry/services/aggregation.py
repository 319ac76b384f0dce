"""Summary statistics over the full household collection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from household_registry.domain.households import Household
from household_registry.domain.value_objects import Gender, Relationship


@dataclass(frozen=True)
class RegistryStats:
    household_count: int
    resident_count: int
    child_count: int
    male_children: int
    female_children: int

    @property
    def child_count_by_gender(self) -> dict[Gender, int]:
        return {Gender.MALE: self.male_children, Gender.FEMALE: self.female_children}

    @property
    def male_child_percent(self) -> float:
        return self._percent(self.male_children)

    @property
    def female_child_percent(self) -> float:
        return self._percent(self.female_children)

    def _percent(self, count: int) -> float:
        if self.child_count == 0:
            return 0.0
        return count / self.child_count * 100


def aggregate(records: Iterable[Household]) -> RegistryStats:
    """Count households, residents and children.

    Residents are the members listed on each household; the head is only
    counted when also present in the member list. Children with no gender
    recorded count toward ``child_count`` but neither gender bucket.
    """
    household_count = 0
    resident_count = 0
    child_count = 0
    by_gender = {Gender.MALE: 0, Gender.FEMALE: 0}

    for household in records:
        household_count += 1
        resident_count += len(household.members)
        for member in household.members:
            if member.relationship != Relationship.CHILD:
                continue
            child_count += 1
            if member.gender in by_gender:
                by_gender[member.gender] += 1

    return RegistryStats(
        household_count=household_count,
        resident_count=resident_count,
        child_count=child_count,
        male_children=by_gender[Gender.MALE],
        female_children=by_gender[Gender.FEMALE],
    )
