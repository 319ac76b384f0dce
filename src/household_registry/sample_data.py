"""Households used to seed an empty registry."""

from uuid import UUID

from household_registry.domain.households import Household, Member
from household_registry.domain.value_objects import Gender, Relationship


def sample_households() -> list[Household]:
    return [
        Household(
            id=UUID("6f1c2d0e-1a4b-4c55-9a10-000000000001"),
            ordinal=1,
            apartment_number="32T3",
            head_name="Phan Trọng Phúc",
            head_dob="1990-01-01",
            head_gender=Gender.MALE,
            phone="0982243173",
            notes="Unity and Love",
            members=[
                Member(
                    id=UUID("6f1c2d0e-1a4b-4c55-9a10-000000000102"),
                    name="Lê Thị Mai Hương",
                    dob="1992-05-10",
                    gender=Gender.FEMALE,
                    relationship=Relationship.SPOUSE,
                    phone="0987654321",
                ),
                Member(
                    id=UUID("6f1c2d0e-1a4b-4c55-9a10-000000000103"),
                    name="Phan Minh Anh",
                    dob="2021-06-03",
                    gender=Gender.FEMALE,
                    relationship=Relationship.CHILD,
                ),
            ],
        ),
        Household(
            id=UUID("6f1c2d0e-1a4b-4c55-9a10-000000000002"),
            ordinal=2,
            apartment_number="3203",
            head_name="Nguyễn Văn A",
            head_dob="1985-02-20",
            head_gender=Gender.MALE,
            phone="0123456789",
            members=[
                Member(
                    id=UUID("6f1c2d0e-1a4b-4c55-9a10-000000000201"),
                    name="Trần Thị B",
                    dob="1995-01-15",
                    gender=Gender.FEMALE,
                    relationship=Relationship.SPOUSE,
                ),
            ],
        ),
    ]
