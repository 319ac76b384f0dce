"""Exception hierarchy for the household registry.

All registry exceptions inherit from HouseholdRegistryError so callers can
catch every application error with a single base class while still telling
validation, lookup and persistence failures apart.
"""

from typing import Any
from uuid import UUID


class HouseholdRegistryError(Exception):
    """Base exception for all household registry errors.

    Includes an error_code for display layers and extra context.
    """

    error_code: str = "HHR_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for display layers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Household Errors
# =============================================================================


class HouseholdError(HouseholdRegistryError):
    """Base exception for household-related errors."""

    error_code = "HOUSEHOLD_ERROR"


class HouseholdNotFoundError(HouseholdError):
    """Raised when a household cannot be found."""

    error_code = "HOUSEHOLD_NOT_FOUND"

    def __init__(self, household_id: UUID | str) -> None:
        super().__init__(
            f"Household not found: {household_id}",
            context={"household_id": str(household_id)},
        )


class DuplicateHouseholdError(HouseholdError):
    """Raised when creating a household whose id is already stored."""

    error_code = "DUPLICATE_HOUSEHOLD"

    def __init__(self, household_id: UUID | str) -> None:
        super().__init__(
            f"Household already exists: {household_id}",
            context={"household_id": str(household_id)},
        )


class MemberNotFoundError(HouseholdError):
    """Raised when a member is not part of the household being edited."""

    error_code = "MEMBER_NOT_FOUND"

    def __init__(self, household_id: UUID | str, member_id: UUID | str) -> None:
        super().__init__(
            f"Member {member_id} not found in household {household_id}",
            context={"household_id": str(household_id), "member_id": str(member_id)},
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(HouseholdRegistryError):
    """Base exception for validation errors."""

    error_code = "VALIDATION_ERROR"


class MissingRequiredFieldError(ValidationError):
    """Raised when a household is saved without its required fields."""

    error_code = "MISSING_REQUIRED_FIELD"

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            f"Missing required field(s): {', '.join(fields)}",
            context={"fields": fields},
        )
        self.fields = fields


# =============================================================================
# Persistence Errors
# =============================================================================


class PersistenceError(HouseholdRegistryError):
    """Raised when a durable snapshot read or write fails."""

    error_code = "PERSISTENCE_ERROR"

    def __init__(self, backend: str, message: str) -> None:
        super().__init__(
            f"{backend} snapshot store failed: {message}",
            context={"backend": backend},
        )
        self.backend = backend


class SnapshotDecodeError(PersistenceError):
    """Raised when a stored snapshot cannot be turned back into households."""

    error_code = "SNAPSHOT_DECODE_ERROR"
