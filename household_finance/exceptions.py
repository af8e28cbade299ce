"""Custom exception hierarchy for household-finance."""


class HouseholdFinanceError(Exception):
    """Base exception for all household-finance errors."""


class EntityNotFoundError(HouseholdFinanceError):
    """Raised when a referenced entity does not exist for the owner."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a parent reference is violated."""


class InvalidEntityStateError(HouseholdFinanceError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(HouseholdFinanceError):
    """Raised when user input fails field validation.

    Parameters
    ----------
    errors : dict[str, str]
        Field name to message.
    """

    def __init__(self, errors: dict[str, str], message: str | None = None) -> None:
        self.errors = dict(errors)
        if message is None:
            message = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(message)


class InvalidLoanError(ValidationError):
    """Raised when a loan is structurally invalid for schedule generation."""


class ConfigurationError(HouseholdFinanceError):
    """Raised when configuration is invalid or missing."""


class SinkError(HouseholdFinanceError):
    """Raised when a sink operation fails."""
