import pytest

from household_registry.domain.households import Household, Member
from household_registry.domain.value_objects import Gender, Relationship
from household_registry.repositories.memory import InMemorySnapshotStore
from household_registry.services.record_store import RecordStore
from household_registry.services.registry import HouseholdRegistryService


@pytest.fixture
def household_a() -> Household:
    return Household(ordinal=1, head_name="A", apartment_number="101")


@pytest.fixture
def household_b() -> Household:
    return Household(
        ordinal=2,
        head_name="B",
        apartment_number="102",
        members=[
            Member(name="C", gender=Gender.MALE, relationship=Relationship.CHILD)
        ],
    )


@pytest.fixture
def two_households(household_a: Household, household_b: Household) -> list[Household]:
    return [household_a, household_b]


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def record_store(snapshot_store: InMemorySnapshotStore) -> RecordStore:
    store = RecordStore(snapshot_store)
    store.load()
    return store


@pytest.fixture
def registry(record_store: RecordStore) -> HouseholdRegistryService:
    return HouseholdRegistryService(record_store)
