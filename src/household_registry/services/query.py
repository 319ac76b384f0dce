"""Search, gender filter and sort over the household collection.

Everything here is a pure function of (collection, criteria). The view
recomputes on every change; nothing is cached between calls.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from household_registry.domain.households import Household
from household_registry.domain.value_objects import (
    GenderFilter,
    SortDirection,
    SortKey,
)

# Stroked letters are their own letter, ordered after every word on the base
# letter ("Dzung" < "Đào" < "Em"). They have no NFD decomposition.
_AFTER_BASE = "\U0010ffff"
_STROKED_LETTERS = str.maketrans(
    {
        "đ": "d" + _AFTER_BASE,
        "Đ": "D" + _AFTER_BASE,
        "ø": "o" + _AFTER_BASE,
        "Ø": "O" + _AFTER_BASE,
        "ł": "l" + _AFTER_BASE,
        "Ł": "L" + _AFTER_BASE,
    }
)


@dataclass(frozen=True)
class SortConfig:
    key: SortKey = SortKey.ORDINAL
    direction: SortDirection = SortDirection.ASC

    def toggled(self, key: SortKey) -> SortConfig:
        """Config after the user asks to sort by ``key``.

        Asking again for the active ascending key flips it to descending;
        any other request sorts ascending by ``key``.
        """
        if key == self.key and self.direction == SortDirection.ASC:
            return SortConfig(key, SortDirection.DESC)
        return SortConfig(key, SortDirection.ASC)


@dataclass(frozen=True)
class QueryCriteria:
    search_term: str = ""
    gender_filter: GenderFilter = GenderFilter.ALL
    sort: SortConfig = SortConfig()

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_term) or self.gender_filter != GenderFilter.ALL


def collation_key(value: str) -> tuple[str, str]:
    """Locale-style ordering key for display strings.

    Primary comparison ignores case and combining diacritics, so "Ánh" sorts
    with "Anh" and "ă" or "â" with "a"; stroked letters such as "đ" stay
    distinct and follow their base letter. The secondary component keeps
    the order total for values that differ only in accents or case.
    """
    decomposed = unicodedata.normalize("NFD", value.translate(_STROKED_LETTERS))
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), unicodedata.normalize("NFC", value)


def matches_search(household: Household, search_term: str) -> bool:
    if not search_term:
        return True
    term = search_term.casefold()
    fields = (household.head_name, household.apartment_number, household.phone)
    if any(term in value.casefold() for value in fields):
        return True
    return any(
        term in member.name.casefold() or term in (member.phone or "").casefold()
        for member in household.members
    )


def matches_gender(household: Household, gender_filter: GenderFilter) -> bool:
    gender = gender_filter.gender
    if gender is None:
        return True
    return any(member.gender == gender for member in household.members)


def sort_households(
    households: Iterable[Household], sort: SortConfig
) -> list[Household]:
    """Stable sort; ties keep their input order in both directions."""
    if sort.key == SortKey.ORDINAL:

        def key(h: Household):
            return h.ordinal if h.ordinal is not None else 0

    else:
        attribute = sort.key.value

        def key(h: Household):
            return collation_key(getattr(h, attribute) or "")

    return sorted(households, key=key, reverse=sort.direction == SortDirection.DESC)


def query(
    records: Sequence[Household],
    search_term: str = "",
    gender_filter: GenderFilter = GenderFilter.ALL,
    sort_key: SortKey = SortKey.ORDINAL,
    sort_direction: SortDirection = SortDirection.ASC,
) -> list[Household]:
    """Filtered and sorted view of ``records``.

    A household passes the search when the term (case-insensitive) occurs in
    its head name, apartment number or phone, or in any member's name or
    phone. It passes the gender filter when at least one member has the
    selected gender.
    """
    results = [
        h
        for h in records
        if matches_search(h, search_term) and matches_gender(h, gender_filter)
    ]
    return sort_households(results, SortConfig(sort_key, sort_direction))


def run_query(
    records: Sequence[Household], criteria: QueryCriteria
) -> list[Household]:
    return query(
        records,
        search_term=criteria.search_term,
        gender_filter=criteria.gender_filter,
        sort_key=criteria.sort.key,
        sort_direction=criteria.sort.direction,
    )
