from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNSET = ""


class Relationship(str, Enum):
    SPOUSE = "Spouse"
    CHILD = "Child"
    PARENT = "Parent"
    SIBLING = "Sibling"
    RELATIVE = "Relative"
    HEAD_OF_HOUSEHOLD = "Head of household"
    UNSET = ""


class GenderFilter(str, Enum):
    ALL = "All"
    MALE = "Male"
    FEMALE = "Female"

    @property
    def gender(self) -> Gender | None:
        if self is GenderFilter.ALL:
            return None
        return Gender(self.value)


class SortKey(str, Enum):
    ORDINAL = "ordinal"
    HEAD_NAME = "head_name"
    APARTMENT_NUMBER = "apartment_number"
    PHONE = "phone"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
