"""Custom exception hierarchy for cashpilot."""


class CashPilotError(Exception):
    """Base exception for all cashpilot errors."""


class InvalidPayloadError(CashPilotError):
    """Raised when a request body cannot be turned into typed records."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class EntityNotFoundError(CashPilotError):
    """Raised when a referenced entity does not exist."""


class InvalidEntityStateError(CashPilotError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(CashPilotError):
    """Raised when configuration is invalid or missing."""


class SinkError(CashPilotError):
    """Raised when a sink operation fails."""
