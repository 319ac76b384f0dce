"""Household and member domain models for the residential registry."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from household_registry.domain.value_objects import Gender, Relationship
from household_registry.exceptions import MemberNotFoundError


@dataclass
class Member:
    """A person listed in exactly one household.

    The id is only guaranteed unique within the owning household.
    """

    name: str = ""
    dob: str = ""  # YYYY-MM-DD, or empty when unknown
    gender: Gender = Gender.UNSET
    relationship: Relationship = Relationship.UNSET
    phone: str = ""
    id: UUID = field(default_factory=uuid4)


@dataclass
class Household:
    """One residential unit with its head of household and members.

    ``ordinal`` is the display sequence number (STT). It stays ``None`` on a
    draft until the record store assigns it at creation.
    """

    apartment_number: str = ""
    head_name: str = ""
    head_dob: str = ""
    head_gender: Gender = Gender.UNSET
    phone: str = ""
    notes: str = ""
    members: list[Member] = field(default_factory=list)
    ordinal: int | None = None
    id: UUID = field(default_factory=uuid4)

    def add_member(
        self,
        name: str = "",
        dob: str = "",
        gender: Gender = Gender.UNSET,
        relationship: Relationship = Relationship.UNSET,
        phone: str = "",
    ) -> Member:
        member = Member(
            name=name,
            dob=dob,
            gender=gender,
            relationship=relationship,
            phone=phone,
        )
        self.members.append(member)
        return member

    def remove_member(self, member_id: UUID) -> Member:
        for index, member in enumerate(self.members):
            if member.id == member_id:
                return self.members.pop(index)
        raise MemberNotFoundError(self.id, member_id)

    def get_member(self, member_id: UUID) -> Member | None:
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def copy(self) -> Household:
        """Deep copy used as an editing draft; members are never shared."""
        return copy.deepcopy(self)
